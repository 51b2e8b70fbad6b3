"""Tests for argtype config parsing and loading (argtype._config)."""

from __future__ import annotations

from pathlib import Path

import pytest

from argtype import (
    CONFIG_ENV_VAR,
    EMPTY_WHITELIST,
    ArgTypesConfig,
    ConfigParseError,
    WhitelistPolicy,
    configure,
    get_config,
    load_config,
    parse_config,
    parse_whitelist,
)


class TestParseWhitelist:
    def test_snake_case_fields(self) -> None:
        policy = parse_whitelist(
            {
                "starts_with": ["data_"],
                "ends_with": ["_ref"],
                "includes": ["aria"],
                "matches": ["id"],
                "regex": ["^x"],
            }
        )
        assert policy == WhitelistPolicy(
            starts_with=("data_",),
            ends_with=("_ref",),
            includes=("aria",),
            matches=("id",),
            regex=("^x",),
        )

    def test_camel_case_aliases(self) -> None:
        policy = parse_whitelist({"startsWith": ["on"], "endsWith": ["Ref"]})
        assert policy.starts_with == ("on",)
        assert policy.ends_with == ("Ref",)

    def test_bare_list_is_matches(self) -> None:
        assert parse_whitelist(["id", "style"]).matches == ("id", "style")

    def test_none_is_empty(self) -> None:
        assert parse_whitelist(None) is EMPTY_WHITELIST

    def test_policy_passthrough(self) -> None:
        policy = WhitelistPolicy(matches=("a",))
        assert parse_whitelist(policy) is policy

    def test_unknown_field(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown whitelist fields"):
            parse_whitelist({"prefix": ["a"]})

    def test_alias_given_twice(self) -> None:
        with pytest.raises(ConfigParseError, match="more than once"):
            parse_whitelist({"starts_with": ["a"], "startsWith": ["b"]})

    def test_field_must_be_list(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a list"):
            parse_whitelist({"matches": "id"})

    def test_entries_must_be_strings(self) -> None:
        with pytest.raises(ConfigParseError, match="entries must be strings"):
            parse_whitelist({"matches": ["id", 3]})

    def test_invalid_regex(self) -> None:
        with pytest.raises(ConfigParseError, match="invalid whitelist pattern"):
            parse_whitelist({"regex": ["[oops"]})

    def test_scalar_rejected(self) -> None:
        with pytest.raises(ConfigParseError, match="mapping or a list"):
            parse_whitelist("id")


class TestParseConfig:
    def test_defaults(self) -> None:
        config = parse_config({})
        assert config == ArgTypesConfig()
        assert config.throw_errors is True
        assert config.whitelist == EMPTY_WHITELIST

    def test_full(self) -> None:
        config = parse_config({"throw_errors": False, "whitelist": {"matches": ["id"]}})
        assert config.throw_errors is False
        assert config.whitelist.allows("id")

    def test_camel_case_throw_errors(self) -> None:
        assert parse_config({"throwErrors": False}).throw_errors is False

    def test_throw_errors_must_be_bool(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a boolean"):
            parse_config({"throw_errors": "no"})

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown config fields"):
            parse_config({"white_list": []})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigParseError, match="expected a mapping"):
            parse_config(["id"])


class TestLoadConfig:
    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "argtype.yaml"
        path.write_text(
            "throw_errors: false\n"
            "whitelist:\n"
            "  starts_with: [data_]\n"
            "  matches: [class_name]\n"
        )
        config = load_config(path)
        assert config.throw_errors is False
        assert config.whitelist.allows("data_id")
        assert config.whitelist.allows("class_name")

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "argtype.json"
        path.write_text('{"whitelist": ["id"]}')
        assert load_config(path).whitelist.matches == ("id",)

    def test_empty_file_is_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ArgTypesConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("whitelist: [unclosed\n")
        with pytest.raises(ConfigParseError, match="invalid YAML"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_config(tmp_path / "missing.yaml")


class TestProcessConfig:
    def test_configure_with_mapping(self) -> None:
        config = configure({"throw_errors": False})
        assert get_config() is config
        assert config.throw_errors is False

    def test_configure_with_config(self) -> None:
        config = ArgTypesConfig(whitelist=WhitelistPolicy(matches=("a",)))
        configure(config)
        assert get_config() is config

    def test_env_var_loaded_on_first_use(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "argtype.yaml"
        path.write_text("whitelist: [from_env]\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        monkeypatch.setattr("argtype._config._active", None)
        assert get_config().whitelist.allows("from_env")

    def test_defaults_without_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("argtype._config._active", None)
        assert get_config() == ArgTypesConfig()
