"""
Mathpix API async client

Sends a built endpoint with aiohttp and returns the decoded JSON response.
Responses are returned as plain dicts.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from .config import DEFAULT_TIMEOUT
from .endpoint import Endpoint
from .errors import TransportError
from .header import AuthHeader
from .request import OPTIONS_FORM_FIELD, to_json, upload_headers

logger = logging.getLogger(__name__)


class MathpixClient:
    """
    Mathpix API async client

        client = MathpixClient()
        result = await client.send(TextRequest("page.png"))
    """

    def __init__(
        self,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        header: Optional[AuthHeader] = None,
    ):
        self.header = header or AuthHeader.from_env(app_id, app_key)
        self.timeout = timeout

    def _form_data(self, files: Dict[str, Any], body: Dict[str, Any]) -> aiohttp.FormData:
        data = aiohttp.FormData()
        for field_name, (filename, content, content_type) in files.items():
            data.add_field(field_name, content, filename=filename, content_type=content_type)
        data.add_field(OPTIONS_FORM_FIELD, to_json(body))
        return data

    async def send(self, endpoint: Endpoint) -> Dict[str, Any]:
        """
        POST `endpoint` and return the JSON response

        Raises:
            HeaderError: credentials cannot be sent as header values
            SerializationIOError: the source file cannot be read
            TransportError: connection failure, timeout, non-2xx status or a non-JSON body
        """
        headers = self.header.to_headers()
        url = endpoint.url()
        body = endpoint.to_request_body()

        files = endpoint.files()
        if files:
            kwargs = {"headers": upload_headers(headers), "data": self._form_data(files, body)}
        else:
            kwargs = {"headers": headers, "json": body}

        logger.debug("POST %s (%s)", url, type(endpoint).__name__)
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, **kwargs) as resp:
                    if not 200 <= resp.status < 300:
                        error_text = await resp.text()
                        raise TransportError(
                            f"Request failed: {resp.status} - {error_text}", status=resp.status
                        )
                    try:
                        result = await resp.json(content_type=None)
                    except ValueError as e:
                        raise TransportError(
                            "Response is not valid JSON", status=resp.status, cause=e
                        ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {url} failed", cause=e) from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request to {url} timed out after {self.timeout}s", cause=e) from e

        if isinstance(result, dict) and "error" in result:
            logger.warning("Mathpix returned an error for %s: %s", url, result.get("error"))
        return result
