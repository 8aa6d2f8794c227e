"""TextWarden: grammar, spelling, style and clarity analysis service"""

__version__ = "0.1.0"
