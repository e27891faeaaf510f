"""
TextOptions: configuration for the v3/text endpoint

Every setter validates its input and returns a new TextOptions; the
instance it was called on is never modified, so a rejected call leaves
nothing half-applied.

    options = (
        TextOptions()
        .add_formats(["text", "data"])
        .set_alphabets_allowed(["en", "ru"])
        .set_confidence_threshold("0.8")
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from ..alphabets import AlphabetSet
from ..base import BoundedFraction
from ..formats import FormatSet, TextFormat
from .shared import (
    DataOptions,
    OptionsBase,
    freeze_mapping,
    parse_flag,
    parse_fraction,
)

Fraction = Union[float, int, str, BoundedFraction]
Flag = Union[bool, str]


@dataclass(frozen=True)
class TextOptions(OptionsBase):
    metadata: Optional[Mapping[str, Any]] = None
    formats: Optional[FormatSet] = None
    data_options: Optional[DataOptions] = None
    include_detected_alphabets: Optional[bool] = None
    alphabets_allowed: Optional[AlphabetSet] = None
    confidence_threshold: Optional[BoundedFraction] = None
    confidence_rate_threshold: Optional[BoundedFraction] = None
    include_line_data: Optional[bool] = None
    include_word_data: Optional[bool] = None
    include_smiles: Optional[bool] = None
    include_inchi: Optional[bool] = None
    include_geometry_data: Optional[bool] = None
    auto_rotate_confidence_threshold: Optional[BoundedFraction] = None
    rm_spaces: Optional[bool] = None
    rm_fonts: Optional[bool] = None
    numbers_default_to_math: Optional[bool] = None

    def __post_init__(self):
        object.__setattr__(self, "metadata", freeze_mapping("metadata", self.metadata))
        self._expect_tags(TextFormat, "formats")
        self._expect(DataOptions, "data_options")
        self._expect(AlphabetSet, "alphabets_allowed")
        self._coerce(
            parse_fraction,
            "confidence_threshold",
            "confidence_rate_threshold",
            "auto_rotate_confidence_threshold",
        )
        self._coerce(
            parse_flag,
            "include_detected_alphabets",
            "include_line_data",
            "include_word_data",
            "include_smiles",
            "include_inchi",
            "include_geometry_data",
            "rm_spaces",
            "rm_fonts",
            "numbers_default_to_math",
        )

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def set_metadata(self, metadata: Mapping[str, Any]) -> "TextOptions":
        return self._replace(metadata=metadata)

    def add_formats(self, formats: Iterable[str]) -> "TextOptions":
        """
        Add formats from "text", "data", "html" and "latex_styled"

        Empty input keeps `formats` unset so it is omitted from the payload.
        """
        formats = list(formats)
        if not formats:
            return self
        current = self.formats or FormatSet(TextFormat)
        return self._replace(formats=current.add_from_strings(formats))

    def add_format(self, fmt: TextFormat) -> "TextOptions":
        current = self.formats or FormatSet(TextFormat)
        return self._replace(formats=current.add(TextFormat(fmt)))

    def set_data_options(self, tokens: Iterable[str]) -> "TextOptions":
        """Tokens like "include_latex", "!include_svg" (see DataOptions.update)"""
        tokens = list(tokens)
        if not tokens:
            return self
        current = self.data_options or DataOptions()
        return self._replace(data_options=current.update(tokens))

    def set_alphabets_allowed(self, tokens: Iterable[str]) -> "TextOptions":
        """Tokens like "en", "!ru", "noth", "all" (see AlphabetSet.update)"""
        tokens = list(tokens)
        if not tokens:
            return self
        current = self.alphabets_allowed or AlphabetSet()
        return self._replace(alphabets_allowed=current.update(tokens))

    def disallow_alphabets(self, codes: Iterable[str]) -> "TextOptions":
        codes = list(codes)
        if not codes:
            return self
        current = self.alphabets_allowed or AlphabetSet()
        return self._replace(alphabets_allowed=current.disallow(codes))

    # ------------------------------------------------------------------
    # Thresholds
    # ------------------------------------------------------------------

    def set_confidence_threshold(self, value: Fraction) -> "TextOptions":
        return self._replace(
            confidence_threshold=parse_fraction("confidence_threshold", value)
        )

    def set_confidence_rate_threshold(self, value: Fraction) -> "TextOptions":
        return self._replace(
            confidence_rate_threshold=parse_fraction("confidence_rate_threshold", value)
        )

    def set_auto_rotate_confidence_threshold(self, value: Fraction) -> "TextOptions":
        return self._replace(
            auto_rotate_confidence_threshold=parse_fraction(
                "auto_rotate_confidence_threshold", value
            )
        )

    # ------------------------------------------------------------------
    # Flags
    # ------------------------------------------------------------------

    def set_include_detected_alphabets(self, value: Flag) -> "TextOptions":
        return self._replace(
            include_detected_alphabets=parse_flag("include_detected_alphabets", value)
        )

    def set_include_line_data(self, value: Flag) -> "TextOptions":
        return self._replace(include_line_data=parse_flag("include_line_data", value))

    def set_include_word_data(self, value: Flag) -> "TextOptions":
        return self._replace(include_word_data=parse_flag("include_word_data", value))

    def set_include_smiles(self, value: Flag) -> "TextOptions":
        return self._replace(include_smiles=parse_flag("include_smiles", value))

    def set_include_inchi(self, value: Flag) -> "TextOptions":
        # only meaningful together with include_smiles
        return self._replace(include_inchi=parse_flag("include_inchi", value))

    def set_include_geometry_data(self, value: Flag) -> "TextOptions":
        return self._replace(include_geometry_data=parse_flag("include_geometry_data", value))

    def set_rm_spaces(self, value: Flag) -> "TextOptions":
        return self._replace(rm_spaces=parse_flag("rm_spaces", value))

    def set_rm_fonts(self, value: Flag) -> "TextOptions":
        return self._replace(rm_fonts=parse_flag("rm_fonts", value))

    def set_numbers_default_to_math(self, value: Flag) -> "TextOptions":
        return self._replace(
            numbers_default_to_math=parse_flag("numbers_default_to_math", value)
        )
