"""
Request assembly

Pairs an endpoint's body with its URL and the authentication header and
prepares an HTTP request with `requests`, for callers that send requests
with their own transport. MathpixClient (client.py) sends the same pieces
with aiohttp.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

import requests

from .config import api_url
from .errors import HeaderError
from .header import AuthHeader

logger = logging.getLogger(__name__)

OPTIONS_FORM_FIELD = "options_json"


def endpoint_url(suffix: str) -> str:
    """Base API URL + endpoint suffix, e.g. https://api.mathpix.com/v3/text"""
    return api_url() + suffix.lstrip("/")


def to_json(body: Mapping[str, Any]) -> str:
    return json.dumps(body, ensure_ascii=False, allow_nan=False)


def upload_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Multipart uploads set their own content-type (with boundary)"""
    return {k: v for k, v in headers.items() if k.lower() != "content-type"}


def assemble(endpoint, header: AuthHeader) -> requests.PreparedRequest:
    """
    Build a prepared POST request for `endpoint`

    Raises:
        HeaderError: the header cannot be materialized
        SerializationIOError: the source file cannot be read
    """
    headers = header.to_headers()
    url = endpoint.url()
    body = endpoint.to_request_body()
    files = endpoint.files()

    if files:
        request = requests.Request(
            "POST",
            url,
            headers=upload_headers(headers),
            files=files,
            data={OPTIONS_FORM_FIELD: to_json(body)},
        )
    else:
        request = requests.Request("POST", url, headers=headers, json=body)

    try:
        prepared = request.prepare()
    except requests.exceptions.InvalidHeader as e:
        raise HeaderError("Could not build request headers", cause=e) from e

    logger.debug("Prepared %s request for %s", type(endpoint).__name__, url)
    return prepared
