# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level Data API client: request execution, session handling and decoding.

Each operation follows the same path: the request builder prepares the call,
the session manager supplies a token (logging in or re-authenticating once as
needed), the transport sends it, and the response translator turns the result
into a typed value or a classified error.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import requests
from requests.auth import HTTPBasicAuth

from azure.core.credentials import AzureNamedKeyCredential

from ..core._auth import _SessionManager
from ..core._http import _HttpClient
from ..core.config import FileMakerConfig
from ..core.errors import AuthenticationError, FileMakerError, NotFoundError
from ..core._error_codes import FM_RECORD_MISSING, _http_subcode
from ..core.telemetry import create_telemetry_manager
from ..models.record import DataInfo, Record
from ._requests import _PreparedRequest, _RequestBuilder
from ._responses import (
    _decode_count,
    _decode_mod_id,
    _decode_names,
    _decode_record_id,
    _decode_records,
    _decode_token,
    _json_body,
    _raise_for_response,
    _service_message,
)

_logger = logging.getLogger(__name__)

_CALL_SCOPE_CORRELATION_ID: ContextVar[Optional[str]] = ContextVar("_CALL_SCOPE_CORRELATION_ID", default=None)


class _DataApiClient:
    """FileMaker Data API client bound to one database and, optionally, one layout."""

    def __init__(
        self,
        credential: AzureNamedKeyCredential,
        base_url: str,
        database: Optional[str],
        layout: Optional[str] = None,
        config: Optional[FileMakerConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self.database = database
        self.layout = layout
        self.config = config or FileMakerConfig.from_env()
        self._builder = _RequestBuilder(self.base_url, database, layout)
        self._http = _HttpClient(
            timeout=self.config.http_timeout,
            verify=self.config.verify_ssl,
            session=session,
        )
        self._telemetry = create_telemetry_manager(self.config.telemetry)
        self.auth = _SessionManager(credential, self._login, self._logout)

    @contextmanager
    def _call_scope(self) -> Iterator[str]:
        """Share one correlation id across every HTTP call made inside the scope."""
        existing = _CALL_SCOPE_CORRELATION_ID.get()
        if existing is not None:
            yield existing
            return
        correlation_id = str(uuid.uuid4())
        token = _CALL_SCOPE_CORRELATION_ID.set(correlation_id)
        try:
            yield correlation_id
        finally:
            _CALL_SCOPE_CORRELATION_ID.reset(token)

    # ------------------------------------------------------------ transport

    def _send(
        self,
        prepared: _PreparedRequest,
        *,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[HTTPBasicAuth] = None,
    ) -> requests.Response:
        request_headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        request_headers.update(self._telemetry.get_additional_headers())
        if headers:
            request_headers.update(headers)

        kwargs: Dict[str, Any] = {"headers": request_headers}
        if prepared.params:
            kwargs["params"] = prepared.params
        if prepared.json is not None:
            kwargs["json"] = prepared.json
        if auth is not None:
            kwargs["auth"] = auth

        correlation_id = _CALL_SCOPE_CORRELATION_ID.get() or str(uuid.uuid4())
        with self._telemetry.trace_request(
            prepared.operation,
            prepared.method,
            prepared.display_url or prepared.url,
            str(uuid.uuid4()),
            correlation_id,
            database=self.database,
            layout=self.layout,
        ) as ctx:
            response = self._http._request(prepared.method, prepared.url, **kwargs)
            service_error_code = None
            if response.status_code >= 400:
                service_error_code = _service_message(_json_body(response))[0]
            self._telemetry.record_response(
                ctx,
                response.status_code,
                service_error_code=service_error_code,
                response_size=len(response.content or b""),
            )
        return response

    def _execute(self, prepared: _PreparedRequest, *, no_records_ok: bool = False) -> Dict[str, Any]:
        """Send a token-bearing request and return the decoded ``response`` object."""

        def _attempt(token: str) -> Dict[str, Any]:
            response = self._send(prepared, headers={"Authorization": f"Bearer {token}"})
            return _raise_for_response(response, no_records_ok=no_records_ok)

        return self.auth.with_token(_attempt)

    # ------------------------------------------------------------- sessions

    def _login(self, username: str, password: str) -> str:
        response = self._send(self._builder.login(), auth=HTTPBasicAuth(username, password))
        try:
            payload = _raise_for_response(response)
            return _decode_token(response, payload)
        except AuthenticationError as exc:
            # A rejected login is never a stale-token condition
            exc.is_token_error = False
            raise
        except FileMakerError as exc:
            raise AuthenticationError(
                f"Login to database {self.database!r} failed: {exc.message}",
                response.status_code,
                subcode=exc.subcode or _http_subcode(response.status_code),
                service_error_code=exc.details.get("service_error_code"),
                body_excerpt=exc.details.get("body_excerpt"),
            ) from exc

    def _logout(self, token: str) -> None:
        response = self._send(self._builder.logout(token))
        try:
            _raise_for_response(response)
        except AuthenticationError as exc:
            if not exc.is_token_error:
                raise
            # The server already dropped the session
            _logger.debug("Session was already closed on the server (%s)", exc.service_error_code)

    # -------------------------------------------------------------- records

    def _get_records(
        self,
        offset: int,
        limit: int,
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> Tuple[List[Record], DataInfo]:
        prepared = self._builder.records(offset, limit, sort=sort, ascending=ascending)
        payload = self._execute(prepared, no_records_ok=True)
        return _decode_records(payload, self.layout)

    def _count(self) -> int:
        payload = self._execute(self._builder.count(), no_records_ok=True)
        return _decode_count(payload)

    def _get(self, record_id: Union[int, str]) -> Record:
        prepared = self._builder.record(record_id)
        payload = self._execute(prepared)
        records, _ = _decode_records(payload, self.layout)
        if not records:
            raise NotFoundError(
                f"Record {record_id} was not returned",
                404,
                subcode=_http_subcode(404),
                service_error_code=FM_RECORD_MISSING,
            )
        return records[0]

    def _create(self, fields: Dict[str, Any]) -> int:
        payload = self._execute(self._builder.create(fields))
        return _decode_record_id(payload)

    def _update(self, record_id: Union[int, str], fields: Dict[str, Any], mod_id: Optional[str] = None) -> Optional[str]:
        payload = self._execute(self._builder.update(record_id, fields, mod_id=mod_id))
        return _decode_mod_id(payload)

    def _delete(self, record_id: Union[int, str]) -> None:
        self._execute(self._builder.delete(record_id))

    def _find(self, body: Dict[str, Any]) -> Tuple[List[Record], DataInfo]:
        payload = self._execute(self._builder.find(body), no_records_ok=True)
        return _decode_records(payload, self.layout)

    # ------------------------------------------------------------- metadata

    def _list_layouts(self) -> List[str]:
        payload = self._execute(self._builder.layouts())
        return _decode_names(payload, "layouts")

    def _list_databases(self) -> List[str]:
        # Database listing authenticates per call with the account credentials
        name, key = self.auth.credential.named_key
        response = self._send(self._builder.databases(), auth=HTTPBasicAuth(name, key))
        payload = _raise_for_response(response)
        return _decode_names(payload, "databases")

    def close(self) -> None:
        """Close the server-side session (if any) and release HTTP resources."""
        try:
            if self.database:
                self.auth.logout()
        finally:
            self._http.close()


__all__ = ["_DataApiClient"]
