"""Library for compiling ABNF (RFC 5234) grammars into regular expressions."""

# flake8: noqa: F401
from .compiler import (
    GrammarError,
    GrammarSyntaxError,
    IncrementalAlternativeError,
    InterpolationValue,
    InvalidRange,
    PatternValue,
    ReservedRuleName,
    StringSetValue,
    StringValue,
    TemplateError,
    UndefinedRule,
    compile_abnf,
    compile_rules,
    string_to_abnf,
)
from .matcher import Matcher, MatchResult
from .parsed import HTTPDate, parse_json
