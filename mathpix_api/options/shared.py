"""
Option objects shared by several endpoints

- OptionsBase: serialization mixin for frozen option dataclasses
- DataOptions, FormatOptions, Region, Callback
- parse_* helpers turning loosely-typed input into validated values
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from numbers import Integral
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, Union

from ..base import BoundedFraction, TriState, collect_flags
from ..errors import BadOptionError, OutOfBoundsError, UnknownOptionError
from ..formats import FormatSet, Transform
from ..source import RemoteUrl

TRUE_STRINGS = ("true", "yes", "on", "1")
FALSE_STRINGS = ("false", "no", "off", "0")


# ============================================================================
# Loosely-typed input parsing
# ============================================================================

def parse_flag(option: str, raw: Union[bool, str]) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    raise BadOptionError(option, raw, "expected a boolean")


def parse_fraction(option: str, raw: Union[float, int, str, BoundedFraction]) -> BoundedFraction:
    """raw -> BoundedFraction, reported as a BadOptionError for `option`"""
    if isinstance(raw, BoundedFraction):
        return raw
    try:
        return BoundedFraction.parse(raw)
    except OutOfBoundsError as e:
        raise BadOptionError(option, raw, "must be between 0.0 and 1.0", cause=e) from e
    except (TypeError, ValueError) as e:
        raise BadOptionError(option, raw, "expected a number", cause=e) from e


def parse_unsigned(option: str, raw: Union[int, str]) -> int:
    if isinstance(raw, str):
        try:
            raw = int(raw.strip())
        except ValueError as e:
            raise BadOptionError(option, raw, "expected an integer", cause=e) from e
    if isinstance(raw, bool) or not isinstance(raw, Integral) or raw < 0:
        raise BadOptionError(option, raw, "expected a non-negative integer")
    return int(raw)


def freeze_mapping(option: str, value: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, Mapping) or not all(isinstance(k, str) for k in value):
        raise BadOptionError(option, value, "expected a mapping with string keys")
    return MappingProxyType(dict(value))


def to_wire(value: Any) -> Any:
    if hasattr(value, "to_wire"):
        return value.to_wire()
    if isinstance(value, Mapping):
        return {k: to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    return value


class OptionsBase:
    """
    Mixin for frozen option dataclasses

    Unset fields are None and left out of the payload. _replace() goes
    through dataclasses.replace so __post_init__ re-validates the result.
    """

    def _replace(self, **changes: Any):
        return replace(self, **changes)

    def _coerce(self, parse: Callable[[str, Any], Any], *names: str) -> None:
        """Run parse(name, value) over every set field in `names`, in place"""
        for name in names:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, parse(name, value))

    def _expect(self, kind: type, *names: str) -> None:
        for name in names:
            value = getattr(self, name)
            if value is not None and not isinstance(value, kind):
                raise BadOptionError(name, value, f"expected {kind.__name__}")

    def _expect_tags(self, vocabulary: Type[Enum], *names: str) -> None:
        """FormatSet fields must hold tags from `vocabulary`"""
        self._expect(FormatSet, *names)
        for name in names:
            value = getattr(self, name)
            if value is not None and value.vocabulary is not vocabulary:
                raise BadOptionError(name, value, f"expected {vocabulary.__name__} tags")

    def to_wire(self) -> Dict[str, Any]:
        body = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            wired = to_wire(value)
            # a nested object with nothing set counts as unset
            if hasattr(value, "to_wire") and wired in ({}, []):
                continue
            body[f.name] = wired
        return body


# ============================================================================
# DataOptions
# ============================================================================

DATA_OPTION_NAMES = (
    "include_svg",
    "include_table_html",
    "include_latex",
    "include_tsv",
    "include_asciimath",
    "include_mathml",
)
DATA_OPTION_TOKENS = list(DATA_OPTION_NAMES) + [f"{{no/!}}{name}" for name in DATA_OPTION_NAMES]


def parse_data_option_token(token: str) -> List[Tuple[str, bool]]:
    token = token.strip()
    if token in DATA_OPTION_NAMES:
        return [(token, True)]
    for prefix in ("!", "no"):
        if token.startswith(prefix) and token[len(prefix):] in DATA_OPTION_NAMES:
            return [(token[len(prefix):], False)]
    raise UnknownOptionError("data_options", token, DATA_OPTION_TOKENS)


@dataclass(frozen=True)
class DataOptions:
    """Which extra outputs go into the `data` and `html` formats"""
    include_svg: TriState = TriState.UNSET
    include_table_html: TriState = TriState.UNSET
    include_latex: TriState = TriState.UNSET
    include_tsv: TriState = TriState.UNSET
    include_asciimath: TriState = TriState.UNSET
    include_mathml: TriState = TriState.UNSET

    def update(self, tokens: Iterable[str]) -> "DataOptions":
        """
        Apply tokens like "include_latex", "!include_svg", "noinclude_tsv"

        Raises:
            UnknownOptionError, ConflictError
        """
        requested = collect_flags(tokens, parse_data_option_token)
        if not requested:
            return self
        return replace(self, **{name: TriState.of(on) for name, on in requested.items()})

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "DataOptions":
        return cls().update(tokens)

    @property
    def is_unset(self) -> bool:
        return not any(getattr(self, name).is_set for name in DATA_OPTION_NAMES)

    def to_wire(self) -> Dict[str, bool]:
        return {
            name: getattr(self, name).to_wire()
            for name in DATA_OPTION_NAMES
            if getattr(self, name).is_set
        }


# ============================================================================
# FormatOptions
# ============================================================================

def delimiter_pair(option: str, value: Optional[Sequence[str]]) -> Optional[Tuple[str, str]]:
    """[begin, end] pair; exactly two strings"""
    if value is None:
        return None
    if (
        isinstance(value, str)
        or not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(d, str) for d in value)
    ):
        raise BadOptionError(option, value, "expected exactly two strings [begin, end]")
    return (value[0], value[1])


@dataclass(frozen=True)
class FormatOptions(OptionsBase):
    """Per-format post-processing (latex endpoint)"""
    transforms: Optional[FormatSet] = None
    math_delims: Optional[Tuple[str, str]] = None
    displaymath_delims: Optional[Tuple[str, str]] = None

    def __post_init__(self):
        object.__setattr__(self, "math_delims", delimiter_pair("math_delims", self.math_delims))
        object.__setattr__(
            self, "displaymath_delims", delimiter_pair("displaymath_delims", self.displaymath_delims)
        )
        self._expect_tags(Transform, "transforms")

    def add_transforms(self, transforms: Iterable[str]) -> "FormatOptions":
        transforms = list(transforms)
        if not transforms:
            return self
        current = self.transforms or FormatSet(Transform, option="transforms")
        return self._replace(transforms=current.add_from_strings(transforms))

    def set_math_delims(self, begin: str, end: str) -> "FormatOptions":
        return self._replace(math_delims=(begin, end))

    def set_displaymath_delims(self, begin: str, end: str) -> "FormatOptions":
        return self._replace(displaymath_delims=(begin, end))


# ============================================================================
# Region
# ============================================================================

REGION_FIELDS = ("top_left_x", "top_left_y", "width", "height")


@dataclass(frozen=True)
class Region(OptionsBase):
    """Image area in pixel coordinates; any subset of the fields may be set"""
    top_left_x: Optional[int] = None
    top_left_y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def __post_init__(self):
        for name in REGION_FIELDS:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, parse_unsigned(f"region.{name}", value))

    @classmethod
    def parse(cls, raw: str) -> "Region":
        """
        "x,y,width,height"; empty positions stay unset

        Examples:
            >>> Region.parse("10,,40,50")
            Region(top_left_x=10, top_left_y=None, width=40, height=50)
        """
        parts = raw.split(",")
        if len(parts) != len(REGION_FIELDS):
            raise BadOptionError("region", raw, "expected top_left_x,top_left_y,width,height")
        values = {
            name: part.strip()
            for name, part in zip(REGION_FIELDS, parts)
            if part.strip()
        }
        return cls(**values)


# ============================================================================
# Callback
# ============================================================================

@dataclass(frozen=True)
class Callback(OptionsBase):
    """POST callback made by the server once results are ready"""
    post: Optional[str] = None
    headers: Optional[Mapping[str, Any]] = None
    reply: Optional[Mapping[str, Any]] = None

    def __post_init__(self):
        if self.post is not None:
            try:
                object.__setattr__(self, "post", RemoteUrl.parse(self.post).url)
            except ValueError as e:
                raise BadOptionError("callback.post", self.post, "expected a URL", cause=e) from e
        object.__setattr__(self, "headers", freeze_mapping("callback.headers", self.headers))
        object.__setattr__(self, "reply", freeze_mapping("callback.reply", self.reply))
