"""
Endpoint interface and registry

Every endpoint implements Endpoint:
- construct from a source and optional options (None -> all options unset,
  i.e. the server's own defaults)
- replace / update its options
- url(), to_request_body(), to_request(header)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Optional, Type

import requests

from .errors import MathpixError
from .header import AuthHeader
from .request import assemble, endpoint_url, to_json

logger = logging.getLogger(__name__)


class EndpointKind(str, Enum):
    """Remote OCR operations"""
    TEXT = "text"
    LATEX = "latex"
    STROKES = "strokes"
    PDF = "pdf"
    BATCH = "batch"


# =============================================================================
# Endpoint Interface
# =============================================================================

class Endpoint(ABC):
    """
    One request to one remote OCR operation

    Subclasses set `kind`, `path`, `options_type` and implement
    resolve_source() and source_fields().
    """

    kind: ClassVar[EndpointKind]
    path: ClassVar[str]
    options_type: ClassVar[type]

    def __init__(self, source: Any, options: Optional[Any] = None):
        self._source = self.resolve_source(source)
        self._options = self.options_type() if options is None else self._checked(options)

    def _checked(self, options: Any) -> Any:
        if not isinstance(options, self.options_type):
            raise TypeError(
                f"{type(self).__name__} expects {self.options_type.__name__}, "
                f"got {type(options).__name__}"
            )
        return options

    @abstractmethod
    def resolve_source(self, source: Any) -> Any:
        """Validate caller input into this endpoint's source type"""

    @abstractmethod
    def source_fields(self) -> Dict[str, Any]:
        """Serialized source field(s), e.g. {"src": "data:image/png;base64,..."}"""

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def source(self) -> Any:
        return self._source

    @property
    def options(self) -> Any:
        return self._options

    def set_options(self, options: Any) -> "Endpoint":
        self._options = self._checked(options)
        return self

    def update_options(self, change: Callable[[Any], Any]) -> "Endpoint":
        """
        Apply a setter chain to the current options

            request.update_options(lambda o: o.add_formats(["text"]))

        If `change` raises, the endpoint keeps its previous options.
        """
        return self.set_options(change(self._options))

    # ------------------------------------------------------------------
    # Request
    # ------------------------------------------------------------------

    def url(self) -> str:
        return endpoint_url(self.path)

    def to_request_body(self) -> Dict[str, Any]:
        """Source field(s) and options flattened into one JSON object"""
        body = self.source_fields()
        body.update(self._options.to_wire())
        return body

    def files(self) -> Optional[Dict[str, Any]]:
        """Multipart files for upload endpoints; None for JSON endpoints"""
        return None

    def to_json(self) -> str:
        return to_json(self.to_request_body())

    def to_request(self, header: AuthHeader) -> requests.PreparedRequest:
        return assemble(self, header)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self._source!r}, options={self._options!r})"


# =============================================================================
# Registry
# =============================================================================

class EndpointRegistry:
    """EndpointKind -> Endpoint subclass"""

    _endpoints: Dict[EndpointKind, Type[Endpoint]] = {}

    @classmethod
    def register(cls, endpoint: Type[Endpoint]) -> Type[Endpoint]:
        """Usable as a class decorator"""
        cls._endpoints[endpoint.kind] = endpoint
        logger.debug("Registered endpoint %s (%s)", endpoint.kind.value, endpoint.__name__)
        return endpoint

    @classmethod
    def get(cls, kind: EndpointKind) -> Type[Endpoint]:
        try:
            return cls._endpoints[EndpointKind(kind)]
        except (KeyError, ValueError) as e:
            raise MathpixError(f"Unknown endpoint: {kind}", cause=e) from e

    @classmethod
    def create(cls, kind: EndpointKind, source: Any, options: Optional[Any] = None) -> Endpoint:
        return cls.get(kind)(source, options)

    @classmethod
    def kinds(cls) -> List[EndpointKind]:
        return list(cls._endpoints)
