"""
mathpix_api: validated request building for the Mathpix OCR API

    from mathpix_api import AuthHeader, TextOptions, TextRequest

    options = TextOptions().add_formats(["text", "data"]).set_alphabets_allowed(["en", "ru"])
    request = TextRequest("page.png", options)
    prepared = request.to_request(AuthHeader.from_env())
"""

from .alphabets import Alphabet, AlphabetSet
from .base import BoundedFraction, TriState
from .client import MathpixClient
from .endpoint import Endpoint, EndpointKind, EndpointRegistry
from .endpoints import (
    BatchRequest,
    LatexRequest,
    PdfRequest,
    StrokesRequest,
    TextRequest,
    create_request,
)
from .errors import (
    BadOptionError,
    ConflictError,
    ExtensionError,
    FileTypeError,
    HeaderError,
    InvalidUrlError,
    MathpixError,
    OptionError,
    OutOfBoundsError,
    SerializationIOError,
    SourceError,
    TransportError,
    UnknownOptionError,
    UnreasonableStateError,
)
from .formats import (
    FormatSet,
    LatexFormat,
    OcrMode,
    PdfConversionFormat,
    StrokesFormat,
    TextFormat,
    Transform,
)
from .header import AuthHeader
from .options import (
    Callback,
    DataOptions,
    FormatOptions,
    LaTeXOptions,
    PdfOptions,
    Region,
    StrokesOptions,
    TextOptions,
)
from .source import (
    InlineImage,
    PdfFile,
    RemoteUrl,
    StrokesData,
    from_path,
    from_url,
)

__version__ = "0.1.0"

__all__ = [
    "Alphabet",
    "AlphabetSet",
    "BoundedFraction",
    "TriState",
    "MathpixClient",
    "Endpoint",
    "EndpointKind",
    "EndpointRegistry",
    "BatchRequest",
    "LatexRequest",
    "PdfRequest",
    "StrokesRequest",
    "TextRequest",
    "create_request",
    "BadOptionError",
    "ConflictError",
    "ExtensionError",
    "FileTypeError",
    "HeaderError",
    "InvalidUrlError",
    "MathpixError",
    "OptionError",
    "OutOfBoundsError",
    "SerializationIOError",
    "SourceError",
    "TransportError",
    "UnknownOptionError",
    "UnreasonableStateError",
    "FormatSet",
    "LatexFormat",
    "OcrMode",
    "PdfConversionFormat",
    "StrokesFormat",
    "TextFormat",
    "Transform",
    "AuthHeader",
    "Callback",
    "DataOptions",
    "FormatOptions",
    "LaTeXOptions",
    "PdfOptions",
    "Region",
    "StrokesOptions",
    "TextOptions",
    "InlineImage",
    "PdfFile",
    "RemoteUrl",
    "StrokesData",
    "from_path",
    "from_url",
]
