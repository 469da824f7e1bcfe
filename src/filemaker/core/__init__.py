# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the FileMaker client.

This module contains the foundational components including session handling,
configuration, HTTP transport, telemetry and error handling.
"""

from .errors import (
    AuthenticationError,
    DecodeError,
    FileMakerError,
    HttpError,
    NotFoundError,
    ServerError,
    TransportError,
    ValidationError,
)
from .results import AddResult

__all__ = [
    "FileMakerError",
    "TransportError",
    "ValidationError",
    "DecodeError",
    "HttpError",
    "AuthenticationError",
    "NotFoundError",
    "ServerError",
    "AddResult",
]
