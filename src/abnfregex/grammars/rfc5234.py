"""Primitive ABNF definition.

The core rules of RFC 5234, Appendix B.1, as regular expression sources:

  https://www.rfc-editor.org/rfc/rfc5234#appendix-B.1

Keys are lowercase, the way rule names are looked up by the compiler.
"""

from typing import Dict

CORE_RULES: Dict[str, str] = {
    # ALPHA          =  %x41-5A / %x61-7A   ; A-Z / a-z
    "alpha": r"[A-Za-z]",
    # BIT            =  "0" / "1"
    "bit": r"[01]",
    # CHAR           =  %x01-7F
    "char": r"[\x01-\x7f]",
    # CR             =  %x0D
    "cr": r"\r",
    # CRLF           =  CR LF
    "crlf": r"\r\n",
    # CTL            =  %x00-1F / %x7F
    "ctl": r"[\x00-\x1f\x7f]",
    # DIGIT          =  %x30-39
    "digit": r"[0-9]",
    # DQUOTE         =  %x22
    "dquote": r'"',
    # HEXDIG         =  DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
    "hexdig": r"[0-9A-Fa-f]",
    # HTAB           =  %x09
    "htab": r"\t",
    # LF             =  %x0A
    "lf": r"\n",
    # LWSP           =  *(WSP / CRLF WSP)
    "lwsp": r"(?:[ \t]|\r\n[ \t])*",
    # OCTET          =  %x00-FF
    "octet": r"[\x00-\xff]",
    # SP             =  %x20
    "sp": r" ",
    # VCHAR          =  %x21-7E
    "vchar": r"[\x21-\x7e]",
    # WSP            =  SP / HTAB
    "wsp": r"[ \t]",
}
