"""JSON lexical ABNF definition (RFC 8259).

Rules are ordered so that each is defined before it is referenced.
"""

from ..compiler import compile_rules

GRAMMAR = """
    ws             = *( %x20 / %x09 / %x0A / %x0D )
    minus          = %x2D
    plus           = %x2B
    zero           = %x30
    digit1-9       = %x31-39
    decimal-point  = %x2E
    e              = %x65 / %x45
    int            = zero / ( digit1-9 *DIGIT )
    frac           = decimal-point 1*DIGIT
    exp            = e [ minus / plus ] 1*DIGIT
    number         = [ minus ] int [ frac ] [ exp ]
    unescaped      = %x20-21 / %x23-5B / %x5D-10FFFF
"""

RULES = compile_rules(GRAMMAR)
