"""Cursor over a string for hand-written recursive-descent parsers."""

import re
from typing import Dict, Optional, Union

MatchResult = Dict[Union[int, str], str]


def _check_pattern(pattern: re.Pattern, method: str) -> None:
    # re.Pattern.match() only ever matches at the given offset, so any
    # compiled str pattern is anchored at the cursor.
    if not isinstance(pattern, re.Pattern):
        raise TypeError(f"Matcher.{method} argument must be a compiled re.Pattern.")
    if not isinstance(pattern.pattern, str):
        raise TypeError(f"Matcher.{method} argument must be a str pattern.")


class Matcher:
    """Match literals and regular expressions at a forward-only position.

    The text never changes. Every successful match advances the position to
    the end of what was matched; failed matches return ``None`` and leave the
    position where it was.
    """

    def __init__(self, text: str, position: int = 0):
        """Create a matcher over ``text`` starting at ``position``."""
        if not isinstance(text, str):
            raise TypeError("text must be a string.")
        if isinstance(position, bool) or not isinstance(position, int):
            raise TypeError(
                "position must be an integer between 0 and the length of the text."
            )
        if not 0 <= position <= len(text):
            raise ValueError(
                "position must be an integer between 0 and the length of the text."
            )

        self._text = text
        self._position = position

    def __repr__(self):
        upcoming = self._text[self._position : self._position + 20]
        return f"<Matcher position={self._position} upcoming={upcoming!r}>"

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> int:
        return self._position

    def at_end(self) -> bool:
        """Whether the whole text has been consumed."""
        return self._position >= len(self._text)

    def match_literal(self, literal: str) -> Optional[str]:
        """Match an exact string.

        :return: the matched string, or None if the text does not continue
        with ``literal``.
        """
        if not isinstance(literal, str):
            raise TypeError("Matcher.match_literal argument must be a string.")

        if not self._text.startswith(literal, self._position):
            return None

        self._position += len(literal)
        return literal

    def match_pattern(self, pattern: re.Pattern) -> Optional[MatchResult]:
        """Match a compiled regular expression at the current position.

        :return: a mapping of group number or group name to the matched text,
        or None. Key 0 holds the whole match. Groups that did not take part
        in the match are left out, so a missing key and an empty string mean
        different things.
        """
        _check_pattern(pattern, "match_pattern")

        match = pattern.match(self._text, self._position)
        if match is None:
            return None

        self._position = match.end()

        result: MatchResult = {0: match.group(0)}
        for index, value in enumerate(match.groups(), start=1):
            if value is not None:
                result[index] = value
        for name, value in match.groupdict().items():
            if value is not None:
                result[name] = value
        return result

    def match_repeatedly(self, pattern: re.Pattern) -> Optional[str]:
        """Match ``pattern`` as many times as possible.

        Stops at the first failure or at a match that would not advance the
        position; an empty match does not count as a repetition.

        :return: everything matched, or None if there were no repetitions.
        """
        _check_pattern(pattern, "match_repeatedly")

        matched = []
        while True:
            start = self._position
            result = self.match_pattern(pattern)
            if result is None or self._position == start:
                break
            matched.append(result[0])

        if not matched:
            return None
        return "".join(matched)
