# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for client configuration."""

import pytest

from filemaker.core.config import FM_URL_ENV, FileMakerConfig, resolve_base_url


class TestFileMakerConfig:

    def test_defaults(self):
        config = FileMakerConfig.from_env()
        assert config.http_timeout is None
        assert config.verify_ssl is True
        assert config.page_size == 100
        assert config.telemetry is None

    def test_immutability(self):
        config = FileMakerConfig()
        with pytest.raises(AttributeError):
            config.page_size = 5

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            FileMakerConfig(page_size=0)


class TestResolveBaseUrl:

    def test_explicit_url_wins(self, monkeypatch):
        monkeypatch.setenv(FM_URL_ENV, "https://env.example.test/fmi/data/vLatest")
        assert resolve_base_url("https://arg.example.test/fmi/data/vLatest/") == "https://arg.example.test/fmi/data/vLatest"

    def test_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv(FM_URL_ENV, " https://env.example.test/fmi/data/vLatest ")
        assert resolve_base_url(None) == "https://env.example.test/fmi/data/vLatest"

    def test_missing_url(self, monkeypatch):
        monkeypatch.delenv(FM_URL_ENV, raising=False)
        with pytest.raises(ValueError):
            resolve_base_url(None)

    def test_blank_url(self):
        with pytest.raises(ValueError):
            resolve_base_url("   ")
