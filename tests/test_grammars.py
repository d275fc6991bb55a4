import re
from typing import ClassVar, List

import pytest
from abnf import ParseError
from abnf.grammars import rfc5234 as reference_rfc5234
from abnf.grammars.misc import load_grammar_rules
from abnf.parser import Rule as _Rule

from abnfregex.compiler import compile_abnf
from abnfregex.grammars import rfc3339, rfc7231, rfc8259
from abnfregex.grammars.rfc5234 import CORE_RULES

SINGLE_CHARACTER_RULES = [
    "ALPHA",
    "BIT",
    "CHAR",
    "CR",
    "CTL",
    "DIGIT",
    "DQUOTE",
    "HEXDIG",
    "HTAB",
    "LF",
    "OCTET",
    "SP",
    "VCHAR",
    "WSP",
]
CHARACTERS = [chr(code) for code in range(0x100)] + ["Ā", "€", "\U0001f600"]


@load_grammar_rules(
    [
        # RFC 5234
        ("DIGIT", reference_rfc5234.Rule("DIGIT")),
    ]
)
class ReferenceRFC3339Rule(_Rule):
    """RFC 3339 rules, parsed by the abnf library."""

    grammar: ClassVar[List] = [
        line.strip() for line in rfc3339.GRAMMAR.strip().splitlines()
    ]


def reference_accepts(rule: _Rule, text: str) -> bool:
    try:
        rule.parse_all(text)
    except ParseError:
        return False
    return True


class TestCoreRules:
    def test_all_sixteen(self):
        assert sorted(CORE_RULES) == sorted(
            name.lower() for name in SINGLE_CHARACTER_RULES + ["CRLF", "LWSP"]
        )

    @pytest.mark.parametrize("name", SINGLE_CHARACTER_RULES)
    def test_agrees_with_reference(self, name):
        pattern = re.compile(compile_abnf(f"r = {name}")["r"])
        reference = reference_rfc5234.Rule(name)
        for char in CHARACTERS:
            expected = reference_accepts(reference, char)
            assert (pattern.fullmatch(char) is not None) == expected, repr(char)

    @pytest.mark.parametrize(
        "text,expected",
        [("\r\n", True), ("\r", False), ("\n", False), ("\n\r", False)],
    )
    def test_crlf(self, text, expected):
        pattern = compile_abnf("r = CRLF")["r"]
        assert (re.fullmatch(pattern, text) is not None) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", True),
            (" ", True),
            ("\t \t", True),
            ("\r\n ", True),
            (" \r\n\t \r\n ", True),
            ("\r\n", False),
            ("\n ", False),
            (" \r\n", False),
        ],
    )
    def test_lwsp(self, text, expected):
        pattern = compile_abnf("r = LWSP")["r"]
        assert (re.fullmatch(pattern, text) is not None) == expected

    def test_digit(self):
        pattern = compile_abnf("r = DIGIT")["r"]
        assert [c for c in CHARACTERS if re.fullmatch(pattern, c)] == list("0123456789")


class TestRFC3339:
    @pytest.mark.parametrize(
        "text",
        [
            "1985-04-12T23:20:50.52Z",
            "1996-12-19T16:39:57-08:00",
            "1990-12-31T23:59:60Z",
            "1937-01-01T12:00:27.87+00:20",
            "1985-04-12t23:20:50z",
            "1985-13-45T99:99:99Z",
            "1985-04-12 23:20:50Z",
            "85-04-12T23:20:50Z",
            "1985-04-12T23:20:50",
            "1985-4-12T23:20:50Z",
            "1985-04-12T23:20:50.Z",
            "1985-04-12T23:20:50+0800",
        ],
    )
    def test_agrees_with_reference(self, text):
        reference = ReferenceRFC3339Rule("date-time")
        expected = reference_accepts(reference, text)
        assert (rfc3339.RULES["date-time"].fullmatch(text) is not None) == expected

    def test_all_rules_compiled(self):
        assert list(rfc3339.RULES)[-1] == "date-time"
        assert len(rfc3339.RULES) == 13


class TestRFC7231:
    @pytest.mark.parametrize(
        "text",
        ["Sun, 06 Nov 1994 08:49:37 GMT", "Mon, 31 Dec 2001 23:59:60 GMT"],
    )
    def test_valid_date(self, text):
        assert rfc7231.RULES["imf-fixdate"].fullmatch(text)

    @pytest.mark.parametrize(
        "text",
        [
            "Xyz, 32 Nov 1994 25:61:61 GMT",
            "Sun, 32 Nov 1994 08:49:37 GMT",
            "Sun, 00 Nov 1994 08:49:37 GMT",
            "Sun, 06 Nov 1994 24:49:37 GMT",
            "Sun, 06 Nov 1994 08:60:37 GMT",
            "Sun, 06 Nov 1994 08:49:61 GMT",
            "Sun, 06 Foo 1994 08:49:37 GMT",
            "Sun, 06 Nov 94 08:49:37 GMT",
            "Sun, 06 Nov 1994 08:49:37 gmt",
        ],
    )
    def test_invalid_date(self, text):
        assert not rfc7231.RULES["imf-fixdate"].fullmatch(text)

    def test_month_names(self):
        for month in rfc7231.MONTHS:
            assert rfc7231.RULES["month"].fullmatch(month.lower())


class TestRFC8259:
    @pytest.mark.parametrize("text", ["0", "-0", "12", "-3.5e2", "1E+10", "0.25"])
    def test_valid_number(self, text):
        assert rfc8259.RULES["number"].fullmatch(text)

    @pytest.mark.parametrize("text", ["01", "+1", "1.", ".5", "1e", "-"])
    def test_invalid_number(self, text):
        assert not rfc8259.RULES["number"].fullmatch(text)

    @pytest.mark.parametrize(
        "char,expected",
        [
            ("a", True),
            ('"', False),
            ("\\", False),
            ("\x1f", False),
            ("\U0001f600", True),
        ],
    )
    def test_unescaped(self, char, expected):
        assert (rfc8259.RULES["unescaped"].fullmatch(char) is not None) == expected
