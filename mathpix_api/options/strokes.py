"""StrokesOptions: configuration for the v3/strokes endpoint"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from ..formats import FormatSet, StrokesFormat
from .shared import DataOptions, OptionsBase, freeze_mapping


@dataclass(frozen=True)
class StrokesOptions(OptionsBase):
    metadata: Optional[Mapping[str, Any]] = None
    formats: Optional[FormatSet] = None
    data_options: Optional[DataOptions] = None

    def __post_init__(self):
        object.__setattr__(self, "metadata", freeze_mapping("metadata", self.metadata))
        self._expect_tags(StrokesFormat, "formats")
        self._expect(DataOptions, "data_options")

    def set_metadata(self, metadata: Mapping[str, Any]) -> "StrokesOptions":
        return self._replace(metadata=metadata)

    def add_formats(self, formats: Iterable[str]) -> "StrokesOptions":
        """One or more of: text, html, data"""
        formats = list(formats)
        if not formats:
            return self
        current = self.formats or FormatSet(StrokesFormat)
        return self._replace(formats=current.add_from_strings(formats))

    def set_data_options(self, tokens: Iterable[str]) -> "StrokesOptions":
        tokens = list(tokens)
        if not tokens:
            return self
        current = self.data_options or DataOptions()
        return self._replace(data_options=current.update(tokens))
