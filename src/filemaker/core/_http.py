# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP transport with timeout handling and optional session support.

This module provides :class:`~filemaker.core._http._HttpClient`, a thin wrapper
around the requests library that applies per-method default timeouts, TLS
verification settings and optional connection pooling via session reuse.
Network-level failures are raised as :class:`~filemaker.core.errors.TransportError`.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

from .errors import TransportError


class _HttpClient:
    """
    HTTP client with timeout handling and optional session support.

    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param verify: Whether to verify TLS certificates. Default is True.
    :type verify: :class:`bool`
    :param session: Optional requests.Session for connection pooling. If provided,
        all requests use this session for efficient connection reuse.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        verify: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self.verify = verify
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        Applies default timeouts based on HTTP method (120s for POST/DELETE, 10s for others).
        No retry is attempted; a failure to obtain a response is raised immediately.

        :param method: HTTP method (GET, POST, PATCH, DELETE).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, json, params, auth.
        :return: HTTP response object, whatever its status code.
        :rtype: :class:`requests.Response`
        :raises ~filemaker.core.errors.TransportError: If no response was received.
        """
        if "timeout" not in kwargs:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "delete") else 10
        kwargs.setdefault("verify", self.verify)

        try:
            if self._session is not None:
                return self._session.request(method, url, **kwargs)
            return requests.request(method, url, **kwargs)
        except requests.exceptions.RequestException as exc:
            raise TransportError(
                f"{method.upper()} request failed before a response was received: {exc}",
                details={"exception_type": type(exc).__name__},
            ) from exc

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
