"""Main module for compiling ABNF grammars into regular expressions."""

import re
import textwrap
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    Union,
)

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from typing_extensions import Annotated, Literal

from .defs import (
    BASE_MAP,
    C_NL_RE,
    C_WSP_RE,
    CHAR_VAL_RE,
    COMMENT_RE,
    DEFINED_AS_RE,
    INTERPOLATION_MARKER,
    MAX_CODE_POINT,
    NUM_VAL_RANGE_RE,
    NUM_VAL_RE,
    PLACEHOLDER_RULE_PREFIX,
    PROSE_VAL_RE,
    REPEAT_RE,
    RULENAME_RE,
)
from .grammars.rfc5234 import CORE_RULES
from .matcher import Matcher, MatchResult


class GrammarError(ValueError):
    """Top-level grammar compilation exception."""

    def __init__(self, message: str, position: Optional[int] = None):
        """Construct the exception with the offset it was raised at, if any."""
        super().__init__(message)
        self.position = position


class GrammarSyntaxError(GrammarError):
    """The grammar text is not well-formed ABNF."""

    pass


class UndefinedRule(GrammarError):
    """A rule is referenced before it has been defined."""

    pass


class ReservedRuleName(GrammarError):
    """A definition would replace a core rule or an interpolated value."""

    pass


class IncrementalAlternativeError(GrammarError):
    """Alternatives (=/) were added to a rule that is not defined."""

    pass


class InvalidRange(GrammarError):
    """A repetition or numeric range has its bounds the wrong way around."""

    pass


class TemplateError(GrammarError):
    """The interpolation markers do not line up with the values given."""

    pass


class StringValue(BaseModel):
    """A string spliced into the grammar as a case-insensitive literal."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    value: str


class StringSetValue(BaseModel):
    """Strings spliced into the grammar as an alternation of literals."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string-set"] = "string-set"
    values: Tuple[str, ...]


class PatternValue(BaseModel):
    """A compiled regular expression referenced through a placeholder rule."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pattern"] = "pattern"
    pattern: re.Pattern

    @field_validator("pattern")
    @classmethod
    def pattern_is_str(cls, v: re.Pattern) -> re.Pattern:
        """Only str patterns can be inlined into the compiled grammar."""
        if not isinstance(v.pattern, str):
            raise ValueError("Interpolated patterns must be str patterns")
        return v


InterpolationValue = Annotated[
    Union[StringValue, StringSetValue, PatternValue], Field(discriminator="kind")
]
InterpolationValueTypeAdapter = TypeAdapter(InterpolationValue)

_INLINE_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)
_LITERAL_PART_RE = re.compile(
    r'(?P<quotes>"+)|(?P<text>[\x20\x21\x23-\x7e]+)|(?P<other>.)', re.DOTALL
)
_GLOBAL_FLAGS_RE = re.compile(r"\A(?:\(\?[aiLmsux]+\))+")


def as_interpolation_value(
    value: Any,
) -> Union[StringValue, StringSetValue, PatternValue]:
    """Wrap a plain Python value in its interpolation model."""
    if isinstance(value, (StringValue, StringSetValue, PatternValue)):
        return value
    if isinstance(value, str):
        return StringValue(value=value)
    if isinstance(value, re.Pattern):
        return PatternValue(pattern=value)
    if isinstance(value, Mapping):
        return InterpolationValueTypeAdapter.validate_python(value)
    if isinstance(value, (set, frozenset)):
        # NOTE: Unordered input gets a fixed order, longest first so that no
        # member is shadowed by one of its prefixes
        return StringSetValue(values=tuple(sorted(value, key=lambda s: (-len(s), s))))
    if isinstance(value, Iterable):
        return StringSetValue(values=tuple(value))
    raise TypeError(f"Cannot interpolate a value of type {type(value).__name__}.")


def string_to_abnf(string: str) -> str:
    """Render a string as ABNF that matches it.

    Printable text becomes quoted char-vals, double quotes become ``DQUOTE``
    references and any other character a ``%x`` numeric value.
    """
    parts = []
    for match in _LITERAL_PART_RE.finditer(string):
        if match.group("quotes"):
            count = len(match.group("quotes"))
            parts.append("DQUOTE" if count == 1 else f"{count}DQUOTE")
        elif match.group("text"):
            parts.append('"' + match.group("text") + '"')
        else:
            parts.append(f"%x{ord(match.group('other')):X}")
    return " ".join(parts)


def _pattern_source(pattern: re.Pattern) -> str:
    flags = "".join(letter for flag, letter in _INLINE_FLAGS if pattern.flags & flag)
    # leading (?i)-style groups are already folded into pattern.flags
    body = _GLOBAL_FLAGS_RE.sub("", pattern.pattern, count=1)
    if pattern.flags & re.VERBOSE:
        # a trailing comment must not swallow the closing parenthesis
        source = f"(?{flags}:{body}\n)"
    else:
        source = f"(?{flags}:{body})"

    try:
        re.compile(source)
    except re.error as e:
        raise TemplateError(
            f"Pattern {pattern.pattern!r} cannot be inlined into a grammar: {e}"
        ) from e
    return source


def _render_value(
    value: Union[StringValue, StringSetValue, PatternValue],
    rules: Dict[str, str],
    placeholders: Dict[int, str],
) -> str:
    if isinstance(value, PatternValue):
        key = id(value.pattern)
        if key not in placeholders:
            name = PLACEHOLDER_RULE_PREFIX + str(len(placeholders))
            placeholders[key] = name
            rules[name] = _pattern_source(value.pattern)
        return placeholders[key]

    if isinstance(value, StringValue):
        return string_to_abnf(value.value)

    strings = [string for string in value.values if string]
    if not strings:
        return ""
    return "( " + " / ".join(string_to_abnf(string) for string in strings) + " )"


def render_template(
    source: str,
    values: Sequence[Any],
    rules: Dict[str, str],
    placeholders: Dict[int, str],
) -> str:
    """Splice ``values`` into the ``{}`` markers of ``source``.

    Patterns are registered in ``rules`` as placeholder rules, keyed in
    ``placeholders`` by the identity of the pattern object.
    """
    if not isinstance(source, str):
        raise TypeError("ABNF source must be a string.")

    segments = textwrap.dedent(source).split(INTERPOLATION_MARKER)
    if len(segments) - 1 != len(values):
        raise TemplateError(
            f"Grammar has {len(segments) - 1} interpolation markers "
            f"but {len(values)} values were given."
        )

    abnf = segments[0]
    for segment, value in zip(segments[1:], values):
        rendered = _render_value(as_interpolation_value(value), rules, placeholders)
        if rendered:
            if not abnf.endswith(" "):
                abnf += " "
            abnf += rendered + " "
        abnf += segment

    return abnf.strip()


def _error(cls, message: str, matcher: Matcher) -> GrammarError:
    text, position = matcher.text, matcher.position
    line = text.count("\n", 0, position) + 1
    column = position - (text.rfind("\n", 0, position) + 1) + 1
    return cls(f"{message} (line {line}, column {column})", position=position)


def _format_repeat(repeat: Optional[MatchResult], matcher: Matcher) -> str:
    if repeat is None:
        return ""
    if "exact" in repeat:
        return "{%d}" % int(repeat["exact"])

    minimum, maximum = repeat["min"], repeat["max"]
    if not minimum and not maximum:
        return "*"
    if not maximum:
        return "+" if int(minimum) == 1 else "{%d,}" % int(minimum)
    if not minimum:
        return "{,%d}" % int(maximum)

    if int(minimum) > int(maximum):
        raise _error(
            InvalidRange,
            "Minimum repetition is greater than maximum repetition.",
            matcher,
        )
    if int(minimum) == int(maximum):
        return "{%d}" % int(minimum)
    return "{%d,%d}" % (int(minimum), int(maximum))


def _format_code_point(value: int, matcher: Matcher) -> str:
    if value > MAX_CODE_POINT:
        raise _error(InvalidRange, f"Code point {value:#x} is out of range.", matcher)
    if value > 0xFFFF:
        return f"\\U{value:08x}"
    if value > 0xFF:
        return f"\\u{value:04x}"
    return f"\\x{value:02x}"


def _letter_class(char: str) -> str:
    upper, lower = char.upper(), char.lower()
    if len(upper) != 1 or len(lower) != 1 or upper == lower:
        return char
    if char in (upper, lower):
        return f"[{upper}{lower}]"
    return f"[{upper}{lower}{char}]"


def _char_value(value: str) -> str:
    # ABNF strings are case-insensitive
    return "".join(_letter_class(char) for char in re.escape(value))


def _element(matcher: Matcher, rules: Dict[str, str]) -> Optional[str]:
    result = matcher.match_pattern(RULENAME_RE)
    if result is not None:
        name = result[0].lower()
        if name in CORE_RULES:
            return CORE_RULES[name]
        if name not in rules:
            raise _error(UndefinedRule, f'Rule "{name}" is not defined.', matcher)
        return rules[name]

    if matcher.match_literal("(") is not None:
        matcher.match_repeatedly(C_WSP_RE)
        pattern = _alternation(matcher, rules)
        matcher.match_repeatedly(C_WSP_RE)
        if matcher.match_literal(")") is None:
            raise _error(GrammarSyntaxError, 'Expected ")".', matcher)
        return pattern

    if matcher.match_literal("[") is not None:
        matcher.match_repeatedly(C_WSP_RE)
        pattern = "(?:" + _alternation(matcher, rules) + ")?"
        matcher.match_repeatedly(C_WSP_RE)
        if matcher.match_literal("]") is None:
            raise _error(GrammarSyntaxError, 'Expected "]".', matcher)
        return pattern

    result = matcher.match_pattern(CHAR_VAL_RE)
    if result is not None:
        return _char_value(result["value"])

    result = matcher.match_pattern(NUM_VAL_RANGE_RE)
    if result is not None:
        base = BASE_MAP[result[0][1].lower()]
        start, end = (int(value, base) for value in result[0][2:].split("-"))
        if start >= end:
            raise _error(
                InvalidRange,
                "Start value in range must be less than end value.",
                matcher,
            )
        return "[{}-{}]".format(
            _format_code_point(start, matcher), _format_code_point(end, matcher)
        )

    result = matcher.match_pattern(NUM_VAL_RE)
    if result is not None:
        base = BASE_MAP[result[0][1].lower()]
        return "".join(
            _format_code_point(int(value, base), matcher)
            for value in result[0][2:].split(".")
        )

    result = matcher.match_pattern(PROSE_VAL_RE)
    if result is not None:
        return _char_value(result["value"])

    return None


def _concatenation(matcher: Matcher, rules: Dict[str, str]) -> str:
    parts: List[str] = []
    while True:
        repeat = _format_repeat(matcher.match_pattern(REPEAT_RE), matcher)
        element = _element(matcher, rules)
        if element is None:
            if not repeat and parts:
                break
            raise _error(GrammarSyntaxError, "Expected element.", matcher)

        parts.append(f"(?:{element}){repeat}" if repeat else element)

        if matcher.at_end() or matcher.match_repeatedly(C_WSP_RE) is None:
            break

    return "".join(parts)


def _alternation(matcher: Matcher, rules: Dict[str, str]) -> str:
    alternatives = [_concatenation(matcher, rules)]
    matcher.match_repeatedly(C_WSP_RE)
    while matcher.match_literal("/") is not None:
        matcher.match_repeatedly(C_WSP_RE)
        alternatives.append(_concatenation(matcher, rules))
        matcher.match_repeatedly(C_WSP_RE)

    if len(alternatives) == 1:
        return alternatives[0]
    return "(?:" + "|".join(alternatives) + ")"


def _rule(
    matcher: Matcher, rulename: str, rules: Dict[str, str], reserved: Set[str]
) -> None:
    name = rulename.lower()
    if name in CORE_RULES or name in reserved:
        raise _error(ReservedRuleName, f'Cannot redefine rule "{name}".', matcher)

    matcher.match_repeatedly(C_WSP_RE)
    result = matcher.match_pattern(DEFINED_AS_RE)
    if result is None:
        raise _error(GrammarSyntaxError, 'Expected "=" or "=/".', matcher)

    incremental = result[0] == "=/"
    if incremental and name not in rules:
        raise _error(
            IncrementalAlternativeError,
            f'Cannot add alternatives to undefined rule "{name}".',
            matcher,
        )

    matcher.match_repeatedly(C_WSP_RE)
    pattern = _alternation(matcher, rules)
    matcher.match_repeatedly(C_WSP_RE)

    if incremental:
        rules[name] = f"(?:{rules[name]}|{pattern})"
    else:
        rules[name] = pattern


def compile_abnf(source: str, values: Sequence[Any] = ()) -> Mapping[str, str]:
    """Compile an ABNF grammar into regular expression sources.

    :param source: ABNF rules, one definition per line. Each ``{}`` in the
    text is replaced by the value at the same position in ``values``. The
    text is dedented first, so it can be written as an indented string.
    :param values: strings (matched case-insensitively), collections of
    strings (matched as alternatives) or compiled patterns, in marker order.
    Empty strings and empty collections are left out of the grammar.
    :return: read-only mapping of lowercase rule name to pattern source, in
    definition order.
    """
    rules: Dict[str, str] = {}
    placeholders: Dict[int, str] = {}
    matcher = Matcher(render_template(source, values, rules, placeholders))
    reserved = set(placeholders.values())

    while True:
        result = matcher.match_pattern(RULENAME_RE)
        if result is None:
            # blank or comment-only line
            matcher.match_repeatedly(C_WSP_RE)
        else:
            _rule(matcher, result[0], rules, reserved)

        matcher.match_pattern(COMMENT_RE)
        if matcher.at_end():
            break
        if matcher.match_pattern(C_NL_RE) is None:
            message = "Expected rule name." if result is None else "Expected new line."
            raise _error(GrammarSyntaxError, message, matcher)

    return MappingProxyType(
        {name: pattern for name, pattern in rules.items() if name not in reserved}
    )


def compile_rules(
    source: str, values: Sequence[Any] = (), flags: int = 0
) -> Dict[str, re.Pattern]:
    """Compile an ABNF grammar into one compiled pattern per rule.

    Takes the same arguments as :func:`compile_abnf`, plus ``re`` flags.
    """
    return {
        name: re.compile(pattern, flags)
        for name, pattern in compile_abnf(source, values).items()
    }
