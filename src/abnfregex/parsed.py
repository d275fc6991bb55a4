"""Parsers built on the Matcher and the bundled grammars."""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .grammars import rfc7231, rfc8259
from .matcher import Matcher

_HTTP_DATE_LAYOUT = (
    "day-name",
    ", ",
    "day",
    " ",
    "month",
    " ",
    "year",
    " ",
    "hour",
    ":",
    "minute",
    ":",
    "second",
    " GMT",
)
_MONTH_NUMBERS = {name.upper(): number for number, name in enumerate(rfc7231.MONTHS, 1)}


class HTTPDate(BaseModel):
    """An HTTP date in the IMF-fixdate format, e.g. Sun, 06 Nov 1994 08:49:37 GMT."""

    day_name: str
    day: int = Field(ge=1, le=31)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=0, le=9999)
    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)
    second: int = Field(ge=0, le=60)

    @classmethod
    def from_string(cls, value: str) -> "HTTPDate":
        """Parse an IMF-fixdate string."""
        matcher = Matcher(value)
        values: Dict[str, str] = {}
        for token in _HTTP_DATE_LAYOUT:
            if token in rfc7231.RULES:
                result = matcher.match_pattern(rfc7231.RULES[token])
                if result is None:
                    raise ValueError(
                        f"Expected {token} at position {matcher.position}."
                    )
                values[token] = result[0]
            elif matcher.match_literal(token) is None:
                raise ValueError(f'Expected "{token}" at position {matcher.position}.')

        if not matcher.at_end():
            raise ValueError(f"Unexpected data at position {matcher.position}.")

        return cls(
            day_name=values["day-name"],
            day=int(values["day"]),
            month=_MONTH_NUMBERS[values["month"].upper()],
            year=int(values["year"]),
            hour=int(values["hour"]),
            minute=int(values["minute"]),
            second=int(values["second"]),
        )

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime."""
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            tzinfo=timezone.utc,
        )


_WHITE_SPACE = rfc8259.RULES["ws"]
_NUMBER = rfc8259.RULES["number"]
_UNESCAPED = rfc8259.RULES["unescaped"]
_ESCAPE_RE = re.compile(r'(?P<simple>["\\/bfnrt])|u(?P<code>[0-9A-Fa-f]{4})')
_ESCAPE_CHARS = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _parse_object(matcher: Matcher) -> Any:
    if matcher.match_literal("{") is None:
        return None

    obj: Dict[str, Any] = {}
    matcher.match_pattern(_WHITE_SPACE)
    if matcher.match_literal("}") is not None:
        return obj

    while True:
        matcher.match_pattern(_WHITE_SPACE)
        name = _parse_string(matcher)
        if name is None:
            raise ValueError(
                f"Expected object key string at position {matcher.position}."
            )
        matcher.match_pattern(_WHITE_SPACE)
        if matcher.match_literal(":") is None:
            raise ValueError(f'Expected ":" at position {matcher.position}.')
        matcher.match_pattern(_WHITE_SPACE)
        obj[name] = _parse_value(matcher)
        matcher.match_pattern(_WHITE_SPACE)
        if matcher.match_literal(",") is None:
            break

    if matcher.match_literal("}") is None:
        raise ValueError(f'Expected "}}" at position {matcher.position}.')
    return obj


def _parse_array(matcher: Matcher) -> Any:
    if matcher.match_literal("[") is None:
        return None

    array: List[Any] = []
    matcher.match_pattern(_WHITE_SPACE)
    if matcher.match_literal("]") is not None:
        return array

    while True:
        matcher.match_pattern(_WHITE_SPACE)
        array.append(_parse_value(matcher))
        matcher.match_pattern(_WHITE_SPACE)
        if matcher.match_literal(",") is None:
            break

    if matcher.match_literal("]") is None:
        raise ValueError(f'Expected "]" at position {matcher.position}.')
    return array


def _parse_string(matcher: Matcher) -> Any:
    if matcher.match_literal('"') is None:
        return None

    chunks = []
    while True:
        text = matcher.match_repeatedly(_UNESCAPED)
        if text is not None:
            chunks.append(text)
            continue
        if matcher.match_literal("\\") is None:
            break

        escape = matcher.match_pattern(_ESCAPE_RE)
        if escape is None:
            raise ValueError(f"Invalid escape at position {matcher.position}.")
        if "simple" in escape:
            chunks.append(_ESCAPE_CHARS[escape["simple"]])
        else:
            chunks.append(chr(int(escape["code"], 16)))

    if matcher.match_literal('"') is None:
        raise ValueError(f"Expected '\"' at position {matcher.position}.")

    # \uXXXX escapes may spell out UTF-16 surrogate pairs, unpaired halves are kept
    return "".join(chunks).encode("utf-16", "surrogatepass").decode(
        "utf-16", "surrogatepass"
    )


def _parse_number(matcher: Matcher) -> Any:
    result = matcher.match_pattern(_NUMBER)
    if result is None:
        return None

    text = result[0]
    if any(char in text for char in ".eE"):
        return float(text)
    return int(text)


def _parse_value(matcher: Matcher) -> Any:
    if matcher.match_literal("null") is not None:
        return None
    if matcher.match_literal("false") is not None:
        return False
    if matcher.match_literal("true") is not None:
        return True

    for parse in (_parse_number, _parse_string, _parse_array, _parse_object):
        position = matcher.position
        value = parse(matcher)
        if value is not None or matcher.position != position:
            return value

    raise ValueError(f"Expected value at position {matcher.position}.")


def parse_json(text: str) -> Any:
    """Parse a JSON document.

    :return: the decoded value; objects become dicts and numbers become int
    or float depending on whether they have a fraction or exponent.
    """
    matcher = Matcher(text)
    matcher.match_pattern(_WHITE_SPACE)
    try:
        value = _parse_value(matcher)
    except RecursionError as e:
        raise ValueError("JSON value is nested too deeply.") from e
    matcher.match_pattern(_WHITE_SPACE)

    if not matcher.at_end():
        raise ValueError(
            f"Unexpected data after JSON value at position {matcher.position}."
        )
    return value
