"""mathpix_api default settings"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Common part of the URL for all the API endpoints
DEFAULT_API_URL = "https://api.mathpix.com/v3/"

APP_ID_ENV = "MATHPIX_APP_ID"
APP_KEY_ENV = "MATHPIX_APP_KEY"
API_URL_ENV = "MATHPIX_API_URL"

# Seconds; used by MathpixClient
DEFAULT_TIMEOUT = 60

JPEG_EXTENSIONS = ("jpg", "jpeg", "jpe", "jif", "jfif", "jfi")
PNG_EXTENSIONS = ("png",)
PDF_EXTENSIONS = ("pdf",)

# Server-side default for the latex endpoint
DEFAULT_BEAM_SIZE = 5
MAX_BEAM_SIZE = 5


def api_url() -> str:
    """Base URL, overridable through MATHPIX_API_URL (always ends with '/')"""
    url = os.getenv(API_URL_ENV) or DEFAULT_API_URL
    return url if url.endswith("/") else url + "/"


__all__ = [
    "DEFAULT_API_URL",
    "APP_ID_ENV",
    "APP_KEY_ENV",
    "API_URL_ENV",
    "DEFAULT_TIMEOUT",
    "JPEG_EXTENSIONS",
    "PNG_EXTENSIONS",
    "PDF_EXTENSIONS",
    "DEFAULT_BEAM_SIZE",
    "MAX_BEAM_SIZE",
    "api_url",
]
