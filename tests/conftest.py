"""Shared fixtures"""

import pytest

from mathpix_api.config import API_URL_ENV, APP_ID_ENV, APP_KEY_ENV

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-body"
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-body"
PDF_BYTES = b"%PDF-1.4\nfake-pdf-body"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests never see credentials or a base URL from the developer's shell / .env"""
    for name in (API_URL_ENV, APP_ID_ENV, APP_KEY_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv(APP_ID_ENV, "test-app")
    monkeypatch.setenv(APP_KEY_ENV, "test-key")


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "page.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def jpeg_file(tmp_path):
    path = tmp_path / "photo.JPG"
    path.write_bytes(JPEG_BYTES)
    return path


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "paper.pdf"
    path.write_bytes(PDF_BYTES)
    return path
