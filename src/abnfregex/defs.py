"""Regexes for the ABNF metagrammar (RFC 5234, section 4)."""

import re

RULENAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")
DEFINED_AS_RE = re.compile(r"=/?")
# c-wsp: WSP, or a (commented) line break followed by WSP to continue the rule
C_WSP_RE = re.compile(r"[ \t]|(?:;[ \t\x21-\x7e]*)?\r?\n[ \t]")
COMMENT_RE = re.compile(r";[ \t\x21-\x7e]*")
C_NL_RE = re.compile(r"(?:;[ \t\x21-\x7e]*)?\r?\n")
REPEAT_RE = re.compile(r"(?P<min>[0-9]*)\*(?P<max>[0-9]*)|(?P<exact>[0-9]+)")
CHAR_VAL_RE = re.compile(r'"(?P<value>[\x20\x21\x23-\x7e]*)"')
NUM_VAL_RANGE_RE = re.compile(
    r"%(?:b[01]+-[01]+|d[0-9]+-[0-9]+|x[0-9A-F]+-[0-9A-F]+)", re.IGNORECASE
)
NUM_VAL_RE = re.compile(
    r"%(?:b[01]+(?:\.[01]+)*|d[0-9]+(?:\.[0-9]+)*|x[0-9A-F]+(?:\.[0-9A-F]+)*)",
    re.IGNORECASE,
)
PROSE_VAL_RE = re.compile(r"<(?P<value>[\x20-\x3d\x3f-\x7e]*)>")

BASE_MAP = {"b": 2, "d": 10, "x": 16}
MAX_CODE_POINT = 0x10FFFF

INTERPOLATION_MARKER = "{}"
PLACEHOLDER_RULE_PREFIX = "placeholder-rule-"
