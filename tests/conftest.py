# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for FileMaker client tests.

This module provides common test fixtures, fake servers, and configuration
that can be used across all test modules.
"""

import pytest
from azure.core.credentials import AzureNamedKeyCredential

from filemaker.core.config import FileMakerConfig
from tests.unit.test_helpers import BASE_URL, PASSWORD, USERNAME, FakeDataApiServer, make_client


@pytest.fixture
def credential():
    """Account credential accepted by the fake server."""
    return AzureNamedKeyCredential(USERNAME, PASSWORD)


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return FileMakerConfig(http_timeout=5, page_size=10)


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return BASE_URL


@pytest.fixture
def server():
    """Empty in-memory Data API server."""
    return FakeDataApiServer()


@pytest.fixture
def client(server, test_config):
    """Client bound to the fake server's database and layout."""
    c = make_client(server, config=test_config)
    yield c
    c.close()


@pytest.fixture(autouse=True)
def _no_fm_url(monkeypatch):
    """Keep a developer's FM_URL from leaking into tests."""
    monkeypatch.delenv("FM_URL", raising=False)
