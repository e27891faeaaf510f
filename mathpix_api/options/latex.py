"""LaTeXOptions: configuration for the v3/latex endpoint (also reused by v3/batch)"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from ..base import BoundedFraction
from ..config import DEFAULT_BEAM_SIZE, MAX_BEAM_SIZE
from ..errors import BadOptionError
from ..formats import FormatSet, LatexFormat, OcrMode
from .shared import (
    Callback,
    FormatOptions,
    OptionsBase,
    Region,
    freeze_mapping,
    parse_flag,
    parse_fraction,
    parse_unsigned,
)

Fraction = Union[float, int, str, BoundedFraction]
Flag = Union[bool, str]


@dataclass(frozen=True)
class LaTeXOptions(OptionsBase):
    formats: Optional[FormatSet] = None
    ocr: Optional[FormatSet] = None
    format_options: Optional[FormatOptions] = None
    skip_recrop: Optional[bool] = None
    confidence_threshold: Optional[BoundedFraction] = None
    beam_size: Optional[int] = None
    n_best: Optional[int] = None
    region: Optional[Region] = None
    callback: Optional[Callback] = None
    metadata: Optional[Mapping[str, Any]] = None
    include_detected_alphabets: Optional[bool] = None
    auto_rotate_confidence_threshold: Optional[BoundedFraction] = None

    def __post_init__(self):
        object.__setattr__(self, "metadata", freeze_mapping("metadata", self.metadata))
        self._expect_tags(LatexFormat, "formats")
        self._expect_tags(OcrMode, "ocr")
        self._expect(FormatOptions, "format_options")
        self._expect(Region, "region")
        self._expect(Callback, "callback")
        self._coerce(parse_fraction, "confidence_threshold", "auto_rotate_confidence_threshold")
        self._coerce(parse_flag, "skip_recrop", "include_detected_alphabets")
        self._coerce(parse_unsigned, "beam_size", "n_best")

        if self.beam_size is not None and not 1 <= self.beam_size <= MAX_BEAM_SIZE:
            raise BadOptionError("beam_size", self.beam_size, f"must be between 1 and {MAX_BEAM_SIZE}")
        if self.n_best is not None:
            beam_size = self.beam_size or DEFAULT_BEAM_SIZE
            if not 1 <= self.n_best <= beam_size:
                raise BadOptionError("n_best", self.n_best, f"must be between 1 and beam_size ({beam_size})")

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def add_formats(self, formats: Iterable[str]) -> "LaTeXOptions":
        formats = list(formats)
        if not formats:
            return self
        current = self.formats or FormatSet(LatexFormat)
        return self._replace(formats=current.add_from_strings(formats))

    def set_ocr(self, modes: Iterable[str]) -> "LaTeXOptions":
        """["math"] or ["math", "text"]"""
        modes = list(modes)
        if not modes:
            return self
        return self._replace(ocr=FormatSet.from_strings(OcrMode, modes, option="ocr"))

    def set_format_options(self, format_options: FormatOptions) -> "LaTeXOptions":
        return self._replace(format_options=format_options)

    def add_transforms(self, transforms: Iterable[str]) -> "LaTeXOptions":
        current = self.format_options or FormatOptions()
        updated = current.add_transforms(transforms)
        if updated is current:
            return self
        return self._replace(format_options=updated)

    def set_math_delims(self, begin: str, end: str) -> "LaTeXOptions":
        current = self.format_options or FormatOptions()
        return self._replace(format_options=current.set_math_delims(begin, end))

    def set_displaymath_delims(self, begin: str, end: str) -> "LaTeXOptions":
        current = self.format_options or FormatOptions()
        return self._replace(format_options=current.set_displaymath_delims(begin, end))

    def set_region(self, region: Union[Region, str]) -> "LaTeXOptions":
        if isinstance(region, str):
            region = Region.parse(region)
        return self._replace(region=region)

    def set_callback(self, callback: Callback) -> "LaTeXOptions":
        return self._replace(callback=callback)

    def set_metadata(self, metadata: Mapping[str, Any]) -> "LaTeXOptions":
        return self._replace(metadata=metadata)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def set_skip_recrop(self, value: Flag) -> "LaTeXOptions":
        return self._replace(skip_recrop=parse_flag("skip_recrop", value))

    def set_confidence_threshold(self, value: Fraction) -> "LaTeXOptions":
        return self._replace(
            confidence_threshold=parse_fraction("confidence_threshold", value)
        )

    def set_auto_rotate_confidence_threshold(self, value: Fraction) -> "LaTeXOptions":
        return self._replace(
            auto_rotate_confidence_threshold=parse_fraction(
                "auto_rotate_confidence_threshold", value
            )
        )

    def set_beam_size(self, value: Union[int, str]) -> "LaTeXOptions":
        return self._replace(beam_size=parse_unsigned("beam_size", value))

    def set_n_best(self, value: Union[int, str]) -> "LaTeXOptions":
        return self._replace(n_best=parse_unsigned("n_best", value))

    def set_include_detected_alphabets(self, value: Flag) -> "LaTeXOptions":
        return self._replace(
            include_detected_alphabets=parse_flag("include_detected_alphabets", value)
        )
