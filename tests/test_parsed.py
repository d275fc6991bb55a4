import json

import pytest
from dateutil.parser import parse as parse_date
from pydantic import ValidationError

from abnfregex.parsed import HTTPDate, parse_json


class TestHTTPDate:
    def test_valid_date(self):
        date = HTTPDate.from_string("Sun, 06 Nov 1994 08:49:37 GMT")
        assert (date.day, date.month, date.year) == (6, 11, 1994)
        assert (date.hour, date.minute, date.second) == (8, 49, 37)
        assert date.day_name == "Sun"

    @pytest.mark.parametrize(
        "text",
        [
            "Sun, 06 Nov 1994 08:49:37 GMT",
            "Thu, 01 Jan 1970 00:00:00 GMT",
            "Fri, 31 Dec 1999 23:59:59 GMT",
            "wed, 29 feb 2012 12:00:00 GMT",
        ],
    )
    def test_to_datetime(self, text):
        assert HTTPDate.from_string(text).to_datetime() == parse_date(text)

    @pytest.mark.parametrize(
        "text",
        [
            "Xyz, 32 Nov 1994 25:61:61 GMT",
            "Sun, 32 Nov 1994 08:49:37 GMT",
            "Sun, 06 Nov 1994 25:49:37 GMT",
            "Sun, 06 Nov 1994 08:61:37 GMT",
            "Sun, 06 Nov 1994 08:49:61 GMT",
            "Sun, 06 Foo 1994 08:49:37 GMT",
            "Sun 06 Nov 1994 08:49:37 GMT",
            "Sun, 06 Nov 1994 08:49:37",
            "Sun, 06 Nov 1994 08:49:37 GMT trailing",
            "",
        ],
    )
    def test_invalid_date(self, text):
        with pytest.raises(ValueError):
            HTTPDate.from_string(text)

    def test_invalid_field(self):
        with pytest.raises(ValidationError):
            HTTPDate(
                day_name="Sun", day=6, month=13, year=1994, hour=8, minute=49, second=37
            )


class TestJSON:
    def test_nested_value(self):
        text = '{"a":[1,2,-3.5e2,true,null,"x\\n"]}'
        assert parse_json(text) == {"a": [1, 2, -350.0, True, None, "x\n"]}

    @pytest.mark.parametrize(
        "text",
        [
            "0",
            "-12",
            "1.5E-3",
            '""',
            '"\\"\\\\\\/\\b\\f\\n\\r\\t"',
            '"\\u00e9\\ud83d\\ude00"',
            '"\\ud800"',
            '"a\\udc00b\\ud83d"',
            '"café"',
            "[]",
            "{}",
            ' { "k" : [ 1 , { "n" : null } ] , "b" : false } ',
            "[[[]]]",
        ],
    )
    def test_agrees_with_json_module(self, text):
        assert parse_json(text) == json.loads(text)

    def test_number_types(self):
        assert isinstance(parse_json("12"), int)
        assert isinstance(parse_json("12.0"), float)
        assert isinstance(parse_json("1e2"), float)

    @pytest.mark.parametrize(
        "text",
        [
            '{"a":1} x',
            "[1,2",
            "[1,]",
            '{"a" 1}',
            "{a:1}",
            "01",
            '"unterminated',
            '"bad \\x escape"',
            '"raw\ncontrol"',
            "nul",
            "",
            "   ",
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_json(text)

    @pytest.mark.parametrize("text", ["[" * 5000, '{"a":' * 5000])
    def test_deep_nesting(self, text):
        with pytest.raises(ValueError):
            parse_json(text)
