"""
OCR sources

Source union shared by the text and latex endpoints:
- InlineImage: local jpg/png, sent as a base64 data URI
- RemoteUrl: public URL where the image is located

The pdf endpoint uses PdfFile | RemoteUrl and the strokes endpoint StrokesData.

Resolving a source never touches the filesystem; the file is read only
when the request body is serialized.
"""

from __future__ import annotations

import base64
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from numbers import Real
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .config import JPEG_EXTENSIONS, PDF_EXTENSIONS, PNG_EXTENSIONS
from .errors import (
    ExtensionError,
    FileTypeError,
    InvalidUrlError,
    SerializationIOError,
    SourceError,
)

logger = logging.getLogger(__name__)

IMAGE_JPEG = "image/jpeg"
IMAGE_PNG = "image/png"
APPLICATION_PDF = "application/pdf"

URL_SCHEMES = ("http://", "https://")

_URL_ADAPTER = TypeAdapter(AnyUrl)

PathLike = Union[str, Path]


def _extension(path: Path) -> str:
    suffix = path.suffix
    if not suffix or suffix == ".":
        raise ExtensionError(f"InvalidExtension: File {str(path)!r} has an invalid extension.")
    return suffix[1:].lower()


def _read_bytes(path: Path) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise SerializationIOError(f"Could not read source file {str(path)!r}", cause=e) from e


# ============================================================================
# Source union
# ============================================================================

class Source(ABC):
    """Image data, or public URL where the image is located"""

    @abstractmethod
    def to_wire(self) -> str:
        """String placed in the `src` field of the request body"""


@dataclass(frozen=True)
class InlineImage(Source):
    """Local image; media type is fixed when the path is resolved"""
    path: Path
    media_type: str

    @classmethod
    def from_path(cls, path: PathLike) -> "InlineImage":
        """
        Raises:
            ExtensionError: path has no extension
            FileTypeError: extension is neither jpeg-family nor png
        """
        path = Path(path)
        extension = _extension(path)
        if extension in JPEG_EXTENSIONS:
            media_type = IMAGE_JPEG
        elif extension in PNG_EXTENSIONS:
            media_type = IMAGE_PNG
        else:
            raise FileTypeError(
                f"UnsupportedFileType: File {str(path)!r} has an unsupported filetype. "
                "jpg and png images are supported."
            )
        logger.debug("Resolved %s as %s", path, media_type)
        return cls(path, media_type)

    def read_bytes(self) -> bytes:
        return _read_bytes(self.path)

    def to_wire(self) -> str:
        encoded = base64.b64encode(self.read_bytes()).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


@dataclass(frozen=True)
class RemoteUrl(Source):
    """URL in canonical string form"""
    url: str

    @classmethod
    def parse(cls, url: str) -> "RemoteUrl":
        try:
            parsed = _URL_ADAPTER.validate_python(url)
        except ValidationError as e:
            raise InvalidUrlError(f"InvalidUrl: {url!r} is not a valid URL", cause=e) from e
        return cls(str(parsed))

    def to_wire(self) -> str:
        return self.url

    def __str__(self) -> str:
        return self.url


def from_path(path: PathLike) -> InlineImage:
    return InlineImage.from_path(path)


def from_url(url: str) -> RemoteUrl:
    return RemoteUrl.parse(url)


def looks_like_url(value: str) -> bool:
    return value.strip().lower().startswith(URL_SCHEMES)


def resolve_source(value: Union[Source, PathLike]) -> Source:
    """
    Turn caller input into a Source

    - Source values pass through unchanged
    - strings starting with http:// or https:// become RemoteUrl
    - anything else is treated as a local image path
    """
    if isinstance(value, Source):
        return value
    if isinstance(value, str) and looks_like_url(value):
        return from_url(value.strip())
    if isinstance(value, (str, Path)):
        return from_path(value)
    raise SourceError(f"Cannot build an image source from {type(value).__name__}")


# ============================================================================
# PDF sources
# ============================================================================

@dataclass(frozen=True)
class PdfFile:
    """A checked local pdf path (uploaded as multipart form data)"""
    path: Path
    media_type: str = APPLICATION_PDF

    @classmethod
    def from_path(cls, path: PathLike) -> "PdfFile":
        path = Path(path)
        if _extension(path) not in PDF_EXTENSIONS:
            raise FileTypeError(
                f"UnsupportedFileType: File {str(path)!r} must be a PDF file."
            )
        return cls(path)

    @property
    def filename(self) -> str:
        return self.path.name

    def read_bytes(self) -> bytes:
        return _read_bytes(self.path)


PdfSource = Union[PdfFile, RemoteUrl]


def resolve_pdf_source(value: Union[PdfFile, RemoteUrl, PathLike]) -> PdfSource:
    if isinstance(value, (PdfFile, RemoteUrl)):
        return value
    if isinstance(value, str) and looks_like_url(value):
        return from_url(value.strip())
    if isinstance(value, (str, Path)):
        return PdfFile.from_path(value)
    raise SourceError(f"Cannot build a pdf source from {type(value).__name__}")


# ============================================================================
# Strokes
# ============================================================================

Stroke = Tuple[float, ...]


def _strokes_axis(name: str, value: Any) -> Tuple[Stroke, ...]:
    if not isinstance(value, (list, tuple)) or not value:
        raise SourceError(f"InvalidStrokes: '{name}' must be a non-empty list of strokes")
    strokes = []
    for stroke in value:
        if not isinstance(stroke, (list, tuple)) or not all(
            isinstance(p, Real) and not isinstance(p, bool) for p in stroke
        ):
            raise SourceError(f"InvalidStrokes: every '{name}' stroke must be a list of numbers")
        strokes.append(tuple(stroke))
    return tuple(strokes)


@dataclass(frozen=True)
class StrokesData:
    """Handwritten strokes: x[i][j], y[i][j] is point j of stroke i"""
    x: Tuple[Stroke, ...]
    y: Tuple[Stroke, ...]

    def __post_init__(self):
        x = _strokes_axis("x", self.x)
        y = _strokes_axis("y", self.y)
        if [len(s) for s in x] != [len(s) for s in y]:
            raise SourceError("InvalidStrokes: 'x' and 'y' must have the same shape")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @classmethod
    def from_json(cls, value: Union[str, Mapping[str, Any]]) -> "StrokesData":
        """Accepts {"x": ..., "y": ...} or the wire form {"strokes": {"x": ..., "y": ...}}"""
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise SourceError("InvalidStrokes: not valid JSON", cause=e) from e
        if not isinstance(value, Mapping):
            raise SourceError("InvalidStrokes: expected a JSON object")
        if "strokes" in value and isinstance(value["strokes"], Mapping):
            value = value["strokes"]
        if "x" not in value or "y" not in value:
            raise SourceError("InvalidStrokes: both 'x' and 'y' are required")
        return cls(value["x"], value["y"])

    def to_wire(self) -> Dict[str, Dict[str, List[List[float]]]]:
        return {
            "strokes": {
                "x": [list(s) for s in self.x],
                "y": [list(s) for s in self.y],
            }
        }
