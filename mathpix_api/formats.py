"""
Closed tag vocabularies and the FormatSet collection

FormatSet keeps insertion order for deterministic serialization, but compares
as a set: {text, data} == {data, text}.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Tuple, Type

from .errors import UnknownOptionError


# ============================================================================
# Vocabularies
# ============================================================================

class TextFormat(str, Enum):
    """Formats for the text endpoint"""
    TEXT = "text"
    DATA = "data"
    HTML = "html"
    LATEX_STYLED = "latex_styled"  # only when the whole image reduces to one equation


class LatexFormat(str, Enum):
    """Formats for the latex and batch endpoints"""
    TEXT = "text"
    TEXT_DISPLAY = "text_display"
    LATEX_NORMAL = "latex_normal"
    LATEX_STYLED = "latex_styled"
    LATEX_SIMPLIFIED = "latex_simplified"
    LATEX_LIST = "latex_list"
    MATHML = "mathml"
    ASCIIMATH = "asciimath"
    WOLFRAM = "wolfram"


class StrokesFormat(str, Enum):
    """Formats for the strokes endpoint"""
    TEXT = "text"
    HTML = "html"
    DATA = "data"


class PdfConversionFormat(str, Enum):
    """Extra output files the pdf endpoint can produce"""
    MD = "md"
    DOCX = "docx"
    TEX_ZIP = "tex.zip"
    HTML = "html"


class Transform(str, Enum):
    """Post-processing transforms for latex format_options"""
    RM_SPACES = "rm_spaces"
    RM_NEWLINES = "rm_newlines"
    RM_FONTS = "rm_fonts"
    RM_STYLE_SYMS = "rm_style_syms"
    RM_TEXT = "rm_text"
    LONG_FRAC = "long_frac"


class OcrMode(str, Enum):
    """What the latex endpoint should read: math only, or math and text"""
    MATH = "math"
    TEXT = "text"


def parse_tags(vocabulary: Type[Enum], strings: Iterable[str], option: str) -> List[Enum]:
    """
    Map every string onto the vocabulary; fail on the first unknown one

    Raises:
        UnknownOptionError: names the offending token
    """
    by_value = {member.value: member for member in vocabulary}
    tags = []
    for raw in strings:
        token = raw.strip() if isinstance(raw, str) else raw
        if isinstance(token, vocabulary):
            tags.append(token)
            continue
        if token not in by_value:
            raise UnknownOptionError(option, str(raw), list(by_value))
        tags.append(by_value[token])
    return tags


# ============================================================================
# FormatSet
# ============================================================================

@dataclass(frozen=True, eq=False)
class FormatSet:
    """Deduplicated set of tags from one vocabulary"""
    vocabulary: Type[Enum]
    tags: Tuple[Enum, ...] = ()
    option: str = "formats"

    def __post_init__(self):
        unique = tuple(dict.fromkeys(self.tags))
        for tag in unique:
            if not isinstance(tag, self.vocabulary):
                raise UnknownOptionError(
                    self.option, str(tag), [m.value for m in self.vocabulary]
                )
        object.__setattr__(self, "tags", unique)

    @classmethod
    def from_strings(
        cls, vocabulary: Type[Enum], strings: Iterable[str], option: str = "formats"
    ) -> "FormatSet":
        return cls(vocabulary, tuple(parse_tags(vocabulary, strings, option)), option)

    def add(self, *tags: Enum) -> "FormatSet":
        return FormatSet(self.vocabulary, self.tags + tags, self.option)

    def add_from_strings(self, strings: Iterable[str]) -> "FormatSet":
        """All-or-nothing: one unknown string rejects the whole batch"""
        return self.add(*parse_tags(self.vocabulary, strings, self.option))

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags

    def __iter__(self) -> Iterator[Enum]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormatSet):
            return NotImplemented
        return self.vocabulary is other.vocabulary and set(self.tags) == set(other.tags)

    def __hash__(self) -> int:
        return hash((self.vocabulary, frozenset(self.tags)))

    def to_wire(self) -> List[str]:
        return [tag.value for tag in self.tags]
