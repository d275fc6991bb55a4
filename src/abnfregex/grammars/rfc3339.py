"""Date ABNF definition."""

from ..compiler import compile_rules

GRAMMAR = """
    date-fullyear   = 4DIGIT
    date-month      = 2DIGIT
    date-mday       = 2DIGIT
    time-hour       = 2DIGIT
    time-minute     = 2DIGIT
    time-second     = 2DIGIT
    time-secfrac    = "." 1*DIGIT
    time-numoffset  = ( "+" / "-" ) time-hour ":" time-minute
    time-offset     = "Z" / time-numoffset
    partial-time    = time-hour ":" time-minute ":" time-second [ time-secfrac ]
    full-date       = date-fullyear "-" date-month "-" date-mday
    full-time       = partial-time time-offset
    date-time       = full-date "T" full-time
"""

RULES = compile_rules(GRAMMAR)
