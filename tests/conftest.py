"""
Pytest configuration and fixtures for font provisioning tests.
"""

import io
import tempfile
import zipfile
from pathlib import Path
from unittest.mock import MagicMock, Mock

import pytest
import requests

from src.dotfonts.core.config import DEFAULT_CATALOG_URL, DEFAULT_RELEASE_URL, ProvisionerConfig
from src.dotfonts.system.capabilities import (
    CapabilityResult,
    DesktopFontSetter,
    FontCacheRefresher,
)


def build_zip(members: dict[str, bytes]) -> bytes:
    """Build an in-memory ZIP archive from ``{member_name: content}``."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for member_name, content in members.items():
            archive.writestr(member_name, content)
    return buffer.getvalue()


ZIP_HEADER_LAYOUT = (
    # (signature, general purpose flags offset, compression method offset)
    (b"PK\x03\x04", 6, 8),
    (b"PK\x01\x02", 8, 10),
)


def patch_zip_headers(data: bytes, *, method: int | None = None, flag_bits: int = 0) -> bytes:
    """Rewrite the compression method and OR in flag bits on every ZIP header."""
    patched = bytearray(data)
    for signature, flags_at, method_at in ZIP_HEADER_LAYOUT:
        start = patched.find(signature)
        while start != -1:
            flags = int.from_bytes(patched[start + flags_at : start + flags_at + 2], "little")
            patched[start + flags_at : start + flags_at + 2] = (flags | flag_bits).to_bytes(
                2, "little"
            )
            if method is not None:
                patched[start + method_at : start + method_at + 2] = method.to_bytes(2, "little")
            start = patched.find(signature, start + 4)
    return bytes(patched)


def make_response(url: str, content: bytes = b"", status: int = 200, json_data=None) -> MagicMock:
    """Create a mock requests response."""
    response = MagicMock(spec=requests.Response)
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.status_code = status
    response.url = url
    response.headers = {"content-length": str(len(content))}
    response.iter_content.return_value = [content]
    response.content = content

    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")

    if status >= 400:
        reason = {403: "Forbidden", 404: "Not Found", 429: "Too Many Requests"}.get(
            status, "Error"
        )
        kind = "Client" if status < 500 else "Server"
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status} {kind} Error: {reason} for url: {url}"
        )
    else:
        response.raise_for_status.return_value = None

    return response


class FakeSession:
    """
    Stand-in for requests.Session serving canned responses.

    Route values: bytes (200 body), int (HTTP error status), dict/list (JSON
    body) or an exception instance (raised). Unknown URLs raise ConnectionError.
    """

    def __init__(self, routes: dict):
        self.routes = routes
        self.requested: list[str] = []
        self.responses: list = []
        self.closed = False

    def get(self, url, **kwargs):
        self.requested.append(url)
        route = self.routes.get(url)

        if route is None:
            raise requests.ConnectionError(f"Failed to resolve host for {url}")
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            response = make_response(url, status=route)
        elif isinstance(route, (dict, list)):
            response = make_response(url, json_data=route)
        else:
            response = make_response(url, content=route)
        self.responses.append(response)
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def dest_dir(temp_dir):
    """Destination font directory (not created yet)."""
    return temp_dir / "fonts"


@pytest.fixture
def font_zip():
    """Factory building a release archive with the given font file names."""

    def _build(*file_names: str, extra: dict[str, bytes] | None = None) -> bytes:
        members = {f"fonts/{name}": b"\x00\x01\x00\x00fake-font" for name in file_names}
        members.update(extra or {})
        return build_zip(members)

    return _build


@pytest.fixture
def unsupported_zip(font_zip):
    """Archive whose members claim an unknown compression method (99, WinZip AES)."""
    return patch_zip_headers(font_zip("Alpha-Regular.ttf"), method=99)


@pytest.fixture
def encrypted_zip(font_zip):
    """Archive whose members are flagged as password protected."""
    return patch_zip_headers(font_zip("Alpha-Regular.ttf"), flag_bits=0x1)


@pytest.fixture
def fake_session():
    """Factory for FakeSession instances."""
    return FakeSession


@pytest.fixture
def release_url():
    return DEFAULT_RELEASE_URL


@pytest.fixture
def catalog_url():
    return DEFAULT_CATALOG_URL


@pytest.fixture
def cache_refresher():
    """Mock font cache capability that is available and succeeds."""
    refresher = Mock(spec=FontCacheRefresher)
    refresher.available.return_value = True
    refresher.apply.return_value = CapabilityResult(True, "ok")
    return refresher


@pytest.fixture
def desktop_setter():
    """Mock desktop font capability that is available and succeeds."""
    setter = Mock(spec=DesktopFontSetter)
    setter.available.return_value = True
    setter.apply.return_value = CapabilityResult(True, "ok")
    return setter


@pytest.fixture
def make_config(dest_dir):
    """Factory for provisioning configuration pointing at the temp destination."""

    def _make(**overrides) -> ProvisionerConfig:
        values = {
            "families": ["Alpha", "Beta"],
            "default_font": None,
            "dest_dir": dest_dir,
            "show_spinner": False,
            "show_progress": False,
        }
        values.update(overrides)
        return ProvisionerConfig(**values)

    return _make


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
