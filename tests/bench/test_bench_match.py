"""Match benchmarks for argtype.

Measures the hot path: primitive checks, wide arrays, deep shapes,
union fallthrough, and argument-set checks with a whitelist.

Run: uv run pytest tests/bench/test_bench_match.py --benchmark-only
"""

from __future__ import annotations

from argtype import (
    WhitelistPolicy,
    array_of,
    check_unexpected,
    match,
    one_of,
    optional,
    shape_of,
    union_of,
)

# ── Fixtures ─────────────────────────────────────────────────────────────────


ITEM = shape_of(
    {
        "id": "string",
        "tags": array_of(one_of("a", "b", "c")),
        "score": optional("number"),
    }
)


def make_items(n: int) -> list[dict[str, object]]:
    return [{"id": str(i), "tags": ["a", "b"], "score": i} for i in range(n)]


# ── Core scenarios ───────────────────────────────────────────────────────────


def test_bench_primitive_hit(benchmark):
    benchmark(match, "hello", "string")


def test_bench_primitive_miss(benchmark):
    benchmark(match, 42, "string")


def test_bench_array_of_shapes_100(benchmark):
    d = array_of(ITEM)
    value = make_items(100)
    benchmark(match, value, d)


def test_bench_array_of_shapes_miss_at_end(benchmark):
    d = array_of(ITEM)
    value = make_items(100)
    value[-1] = {"id": "x", "tags": ["z"]}
    benchmark(match, value, d)


def test_bench_union_last_alternative(benchmark):
    d = union_of("number", "boolean", array_of("string"), "string")
    benchmark(match, "hit", d)


def test_bench_deep_nesting(benchmark):
    d = "number"
    value: object = 1
    for _ in range(12):
        d = array_of(shape_of({"next": d}))
        value = [{"next": value}]
    benchmark(match, value, d)


# ── Argument sets ────────────────────────────────────────────────────────────


def test_bench_check_unexpected_with_whitelist(benchmark):
    policy = WhitelistPolicy(
        starts_with=("data_", "aria_"),
        ends_with=("_ref",),
        regex=(r"^on[A-Z]\w*$",),
    )
    supplied = [f"arg{i}" for i in range(20)] + ["data_x", "aria_label", "onClick", "extra"]
    declared = [f"arg{i}" for i in range(20)]
    benchmark(check_unexpected, supplied, declared, policy)
