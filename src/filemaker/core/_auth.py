# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Session token management for the FileMaker Data API.

The :class:`_SessionManager` is the only holder of the session token. Logins
are single-flight: concurrent callers that find no token share one in-flight
login and all receive its token, or its error.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Optional, TypeVar

from azure.core.credentials import AzureNamedKeyCredential

from .errors import AuthenticationError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class _SessionManager:
    """
    Holds the session token and recovers from its expiry once per call.

    :param credential: Account name and password used to open sessions.
    :type credential: ~azure.core.credentials.AzureNamedKeyCredential
    :param login: Callable ``(username, password) -> token`` that opens a session.
    :param logout: Callable ``(token) -> None`` that closes a session.
    """

    def __init__(
        self,
        credential: AzureNamedKeyCredential,
        login: Callable[[str, str], str],
        logout: Optional[Callable[[str], None]] = None,
    ) -> None:
        if not isinstance(credential, AzureNamedKeyCredential):
            raise TypeError("credential must be an azure.core.credentials.AzureNamedKeyCredential.")
        self.credential = credential
        self._login = login
        self._logout = logout
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self._inflight: Optional[Future] = None
        self.login_count = 0

    @property
    def has_token(self) -> bool:
        with self._lock:
            return self._token is not None

    def acquire(self) -> str:
        """
        Return the current token, logging in first if none is held.

        :raises ~filemaker.core.errors.AuthenticationError: If login is rejected.
        :raises ~filemaker.core.errors.TransportError: If the service is unreachable.
        """
        with self._lock:
            if self._token is not None:
                return self._token
            flight = self._inflight
            leader = flight is None
            if leader:
                flight = self._inflight = Future()

        if not leader:
            return flight.result()

        try:
            name, key = self.credential.named_key
            _logger.debug("Opening a Data API session for account %r", name)
            token = self._login(name, key)
        except BaseException as exc:
            with self._lock:
                self._inflight = None
            flight.set_exception(exc)
            raise

        with self._lock:
            self._token = token
            self._inflight = None
            self.login_count += 1
        flight.set_result(token)
        _logger.info("Data API session opened")
        return token

    def invalidate(self, stale: Optional[str] = None) -> None:
        """
        Discard the token so the next :meth:`acquire` logs in again.

        :param stale: When given, the token is only discarded if it is still this
            value; a newer token obtained by another caller is kept.
        """
        with self._lock:
            if self._token is None:
                return
            if stale is not None and self._token != stale:
                return
            self._token = None
        _logger.debug("Data API session token invalidated")

    def with_token(self, operation: Callable[[str], T]) -> T:
        """
        Run ``operation(token)``, re-authenticating and retrying once on token rejection.

        A second token rejection, and any other error, propagates to the caller.
        """
        token = self.acquire()
        try:
            return operation(token)
        except AuthenticationError as exc:
            if not exc.is_token_error:
                raise
            _logger.info("Session token rejected (%s); logging in again", exc.service_error_code or exc.status_code)
            self.invalidate(token)
        return operation(self.acquire())

    def logout(self) -> None:
        """Close the server-side session, if one is open, and drop the token."""
        with self._lock:
            token, self._token = self._token, None
        if token is None or self._logout is None:
            return
        self._logout(token)
        _logger.info("Data API session closed")
