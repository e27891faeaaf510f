"""
PdfOptions: configuration for the v3/pdf endpoint

conversion_formats is sent as an object of flags rather than a list:

    {"conversion_formats": {"docx": true, "tex.zip": true}}
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from ..alphabets import AlphabetSet
from ..errors import BadOptionError
from ..formats import FormatSet, PdfConversionFormat
from .shared import (
    OptionsBase,
    delimiter_pair,
    freeze_mapping,
    parse_flag,
)

Flag = Union[bool, str]

# "2,4-6", "2 - -2", "1-"
PAGE_RANGE_RE = re.compile(r"^\s*-?\d+\s*(-\s*(-?\d+)?\s*)?$")


def validate_page_ranges(raw: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise BadOptionError("page_ranges", raw, "expected a comma-separated page range")
    for part in raw.split(","):
        if not PAGE_RANGE_RE.match(part):
            raise BadOptionError("page_ranges", raw, f"invalid range {part.strip()!r}")
    return raw.strip()


@dataclass(frozen=True)
class PdfOptions(OptionsBase):
    conversion_formats: Optional[FormatSet] = None
    metadata: Optional[Mapping[str, Any]] = None
    alphabets_allowed: Optional[AlphabetSet] = None
    math_inline_delimiters: Optional[Sequence[str]] = None
    math_display_delimiters: Optional[Sequence[str]] = None
    rm_spaces: Optional[bool] = None
    rm_fonts: Optional[bool] = None
    numbers_default_to_math: Optional[bool] = None
    page_ranges: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "metadata", freeze_mapping("metadata", self.metadata))
        object.__setattr__(
            self,
            "math_inline_delimiters",
            delimiter_pair("math_inline_delimiters", self.math_inline_delimiters),
        )
        object.__setattr__(
            self,
            "math_display_delimiters",
            delimiter_pair("math_display_delimiters", self.math_display_delimiters),
        )
        if self.page_ranges is not None:
            object.__setattr__(self, "page_ranges", validate_page_ranges(self.page_ranges))
        self._expect_tags(PdfConversionFormat, "conversion_formats")
        self._expect(AlphabetSet, "alphabets_allowed")
        self._coerce(parse_flag, "rm_spaces", "rm_fonts", "numbers_default_to_math")

    def add_conversion_formats(self, formats: Iterable[str]) -> "PdfOptions":
        """One or more of: md, docx, tex.zip, html"""
        formats = list(formats)
        if not formats:
            return self
        current = self.conversion_formats or FormatSet(
            PdfConversionFormat, option="conversion_formats"
        )
        return self._replace(conversion_formats=current.add_from_strings(formats))

    def set_metadata(self, metadata: Mapping[str, Any]) -> "PdfOptions":
        return self._replace(metadata=metadata)

    def set_alphabets_allowed(self, tokens: Iterable[str]) -> "PdfOptions":
        tokens = list(tokens)
        if not tokens:
            return self
        current = self.alphabets_allowed or AlphabetSet()
        return self._replace(alphabets_allowed=current.update(tokens))

    def set_math_inline_delimiters(self, begin: str, end: str) -> "PdfOptions":
        return self._replace(math_inline_delimiters=(begin, end))

    def set_math_display_delimiters(self, begin: str, end: str) -> "PdfOptions":
        return self._replace(math_display_delimiters=(begin, end))

    def set_rm_spaces(self, value: Flag) -> "PdfOptions":
        return self._replace(rm_spaces=parse_flag("rm_spaces", value))

    def set_rm_fonts(self, value: Flag) -> "PdfOptions":
        return self._replace(rm_fonts=parse_flag("rm_fonts", value))

    def set_numbers_default_to_math(self, value: Flag) -> "PdfOptions":
        return self._replace(
            numbers_default_to_math=parse_flag("numbers_default_to_math", value)
        )

    def set_page_ranges(self, page_ranges: str) -> "PdfOptions":
        return self._replace(page_ranges=page_ranges)

    def to_wire(self) -> Dict[str, Any]:
        body = super().to_wire()
        if self.conversion_formats:
            body["conversion_formats"] = {tag.value: True for tag in self.conversion_formats}
        return body
