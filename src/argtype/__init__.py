"""argtype: Runtime type descriptors and argument validation.

All public types are exported from this module for flat imports:

    from argtype import array_of, shape_of, one_of, match, check_unexpected
"""

__version__ = "0.1.0"

# Argument-set validation
from argtype._arguments import check_unexpected

# Config, see argtype._config for details
from argtype._config import (
    CONFIG_ENV_VAR,
    ArgTypesConfig,
    ConfigParseError,
    configure,
    get_config,
    load_config,
    parse_config,
    parse_whitelist,
)

# Declarations
from argtype._declare import (
    Arg,
    ArgumentTypeMismatchError,
    Component,
    UnexpectedArgumentError,
    arg,
    arg_types,
    forbid_extra_args,
    validate_arg,
    validate_args,
)

# Descriptor algebra
from argtype._descriptors import (
    ACTION,
    CLASSIC_ACTION,
    ELEMENT,
    MAX_DEPTH,
    NODE,
    PRIMITIVE_NAMES,
    ArgTypeError,
    ArrayOf,
    Descriptor,
    InstanceOf,
    MalformedDescriptorError,
    OneOf,
    Optional,
    Primitive,
    ShapeOf,
    UnionOf,
    array_of,
    conditional_instance_of,
    descriptor,
    descriptor_depth,
    instance_of,
    one_of,
    optional,
    primitive,
    shape_of,
    union_of,
)

# Diagnostics
from argtype._format import (
    describe,
    describe_value,
    format_mismatch,
    format_unexpected,
    render_path,
)

# Matcher
from argtype._matcher import OK, MatchResult, Mismatch, Ok, is_match, match
from argtype._types import UNDEFINED, Kind, Symbol, is_array, kind_of

# Whitelist
from argtype._whitelist import (
    EMPTY_WHITELIST,
    ContainsMatcher,
    ExactMatcher,
    InvalidPatternError,
    NameMatcher,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
    WhitelistPolicy,
)

__all__ = [
    # Runtime kinds
    "UNDEFINED",
    "Kind",
    "Symbol",
    "is_array",
    "kind_of",
    # Descriptors
    "Descriptor",
    "Primitive",
    "InstanceOf",
    "ArrayOf",
    "OneOf",
    "Optional",
    "ShapeOf",
    "UnionOf",
    "descriptor",
    "primitive",
    "instance_of",
    "array_of",
    "one_of",
    "optional",
    "shape_of",
    "union_of",
    "conditional_instance_of",
    "descriptor_depth",
    "ACTION",
    "CLASSIC_ACTION",
    "ELEMENT",
    "NODE",
    "MAX_DEPTH",
    "PRIMITIVE_NAMES",
    # Matcher
    "Ok",
    "OK",
    "Mismatch",
    "MatchResult",
    "match",
    "is_match",
    # Argument sets
    "check_unexpected",
    "WhitelistPolicy",
    "EMPTY_WHITELIST",
    "NameMatcher",
    "ExactMatcher",
    "PrefixMatcher",
    "SuffixMatcher",
    "ContainsMatcher",
    "RegexMatcher",
    # Diagnostics
    "describe",
    "describe_value",
    "render_path",
    "format_mismatch",
    "format_unexpected",
    # Config
    "ArgTypesConfig",
    "CONFIG_ENV_VAR",
    "configure",
    "get_config",
    "load_config",
    "parse_config",
    "parse_whitelist",
    # Declarations
    "Arg",
    "Component",
    "arg",
    "arg_types",
    "forbid_extra_args",
    "validate_arg",
    "validate_args",
    # Errors
    "ArgTypeError",
    "MalformedDescriptorError",
    "ArgumentTypeMismatchError",
    "UnexpectedArgumentError",
    "ConfigParseError",
    "InvalidPatternError",
]
