"""
Concrete endpoints

| class          | path               | source                          |
|----------------|--------------------|---------------------------------|
| TextRequest    | text               | InlineImage / RemoteUrl ("src") |
| LatexRequest   | latex              | InlineImage / RemoteUrl ("src") |
| StrokesRequest | strokes            | StrokesData ("strokes")         |
| PdfRequest     | pdf / pdf-file     | RemoteUrl ("url") / PdfFile     |
| BatchRequest   | batch              | {key: RemoteUrl} ("urls")       |
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from .endpoint import Endpoint, EndpointKind, EndpointRegistry
from .errors import SourceError
from .options import LaTeXOptions, PdfOptions, StrokesOptions, TextOptions
from .request import endpoint_url
from .source import (
    PdfFile,
    PdfSource,
    RemoteUrl,
    Source,
    StrokesData,
    from_url,
    resolve_pdf_source,
    resolve_source,
)

PDF_URL_PATH = "pdf"
PDF_FILE_PATH = "pdf-file"


@EndpointRegistry.register
class TextRequest(Endpoint):
    """v3/text: text, and optionally derived data / HTML, from an image"""

    kind = EndpointKind.TEXT
    path = "text"
    options_type = TextOptions

    def resolve_source(self, source: Any) -> Source:
        return resolve_source(source)

    def source_fields(self) -> Dict[str, Any]:
        return {"src": self.source.to_wire()}


@EndpointRegistry.register
class LatexRequest(Endpoint):
    """v3/latex: math equation OCR with equation cropping"""

    kind = EndpointKind.LATEX
    path = "latex"
    options_type = LaTeXOptions

    def resolve_source(self, source: Any) -> Source:
        return resolve_source(source)

    def source_fields(self) -> Dict[str, Any]:
        return {"src": self.source.to_wire()}


@EndpointRegistry.register
class StrokesRequest(Endpoint):
    """v3/strokes: handwriting recognition from stroke coordinates"""

    kind = EndpointKind.STROKES
    path = "strokes"
    options_type = StrokesOptions

    def resolve_source(self, source: Any) -> StrokesData:
        if isinstance(source, StrokesData):
            return source
        return StrokesData.from_json(source)

    def source_fields(self) -> Dict[str, Any]:
        # {"strokes": {"strokes": {"x": ..., "y": ...}}}
        return {"strokes": self.source.to_wire()}


@EndpointRegistry.register
class PdfRequest(Endpoint):
    """
    v3/pdf: document conversion

    A RemoteUrl is posted as JSON to `pdf`; a PdfFile is uploaded as
    multipart form data (`file` + `options_json`) to `pdf-file`.
    """

    kind = EndpointKind.PDF
    path = PDF_URL_PATH
    options_type = PdfOptions

    def resolve_source(self, source: Any) -> PdfSource:
        return resolve_pdf_source(source)

    @property
    def is_upload(self) -> bool:
        return isinstance(self.source, PdfFile)

    def url(self) -> str:
        return endpoint_url(PDF_FILE_PATH if self.is_upload else PDF_URL_PATH)

    def source_fields(self) -> Dict[str, Any]:
        if self.is_upload:
            return {}
        return {"url": self.source.to_wire()}

    def files(self) -> Optional[Dict[str, Any]]:
        if not self.is_upload:
            return None
        pdf: PdfFile = self.source
        return {"file": (pdf.filename, pdf.read_bytes(), pdf.media_type)}


@EndpointRegistry.register
class BatchRequest(Endpoint):
    """
    v3/batch: many image URLs in one request

    Takes every latex option; results can be delivered through `callback`.
    """

    kind = EndpointKind.BATCH
    path = "batch"
    options_type = LaTeXOptions

    def resolve_source(self, source: Any) -> Dict[str, RemoteUrl]:
        if not isinstance(source, Mapping) or not source:
            raise SourceError("InvalidBatch: expected a non-empty mapping of key -> image URL")
        urls = {}
        for key, url in source.items():
            if not isinstance(key, str):
                raise SourceError(f"InvalidBatch: key {key!r} is not a string")
            urls[key] = url if isinstance(url, RemoteUrl) else from_url(url)
        return urls

    def source_fields(self) -> Dict[str, Any]:
        return {"urls": {key: url.to_wire() for key, url in self.source.items()}}


def create_request(
    kind: Union[EndpointKind, str], source: Any, options: Optional[Any] = None
) -> Endpoint:
    return EndpointRegistry.create(EndpointKind(kind), source, options)
