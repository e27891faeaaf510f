"""
Option aggregates, one per endpoint

All aggregates are frozen dataclasses. Setters validate and return a new
instance; unset fields are omitted from the request payload.
"""

from .shared import (
    Callback,
    DataOptions,
    FormatOptions,
    OptionsBase,
    Region,
    parse_flag,
    parse_fraction,
    parse_unsigned,
)
from .text import TextOptions
from .latex import LaTeXOptions
from .strokes import StrokesOptions
from .pdf import PdfOptions

__all__ = [
    "Callback",
    "DataOptions",
    "FormatOptions",
    "OptionsBase",
    "Region",
    "parse_flag",
    "parse_fraction",
    "parse_unsigned",
    "TextOptions",
    "LaTeXOptions",
    "StrokesOptions",
    "PdfOptions",
]
