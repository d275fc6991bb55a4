"""ABNF grammars shipped with the package."""
