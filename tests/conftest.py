# tests/conftest.py

"""Shared pytest fixtures for all catalog API tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def block_network() -> Generator[None, None, None]:
    """Fail any curl_cffi request a test did not explicitly mock."""
    with patch(
        "curl_cffi.requests.get",
        side_effect=ConnectionError("network disabled in tests"),
    ):
        yield
