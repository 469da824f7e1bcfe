# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .telemetry import TelemetryConfig

FM_URL_ENV = "FM_URL"


@dataclass(frozen=True)
class FileMakerConfig:
    """
    Configuration settings for FileMaker client operations.

    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param verify_ssl: Whether TLS certificates are verified (default: True).
    :type verify_ssl: bool
    :param page_size: Records requested per page when fetching everything (default: 100).
    :type page_size: int
    :param telemetry: Optional telemetry settings; ``None`` disables telemetry.
    :type telemetry: ~filemaker.core.telemetry.TelemetryConfig or None
    """

    http_timeout: Optional[float] = None
    verify_ssl: bool = True
    page_size: int = 100
    telemetry: Optional[TelemetryConfig] = None

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

    @classmethod
    def from_env(cls) -> "FileMakerConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~filemaker.core.config.FileMakerConfig
        """
        return cls(
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            verify_ssl=True,
            page_size=100,
            telemetry=None,
        )


def resolve_base_url(base_url: Optional[str]) -> str:
    """
    Return the Data API base URL, falling back to the ``FM_URL`` environment variable.

    The base URL is the prefix under which ``/databases/...`` is appended, for
    example ``"https://fms.example.com/fmi/data/vLatest"``.

    :raises ValueError: If neither the argument nor ``FM_URL`` provides a URL.
    """
    url = base_url if base_url is not None else os.environ.get(FM_URL_ENV, "")
    url = (url or "").strip().rstrip("/")
    if not url:
        raise ValueError(f"base_url is required (pass it explicitly or set {FM_URL_ENV}).")
    return url
