# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request construction for Data API endpoints.

Builds URL, method and body for each operation. Headers carrying the session
token are attached at send time, so a prepared request never holds a token
unless the endpoint path itself requires one (logout).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union
from urllib.parse import quote

from ..common.constants import SORT_ASCEND, SORT_DESCEND
from ..core.errors import ValidationError
from ..core._error_codes import (
    VALIDATION_FIELD_DATA,
    VALIDATION_NO_LAYOUT,
    VALIDATION_PAGINATION,
    VALIDATION_RECORD_ID,
)


@dataclass(frozen=True)
class _PreparedRequest:
    """One HTTP call ready to be sent: method, URL, query parameters and JSON body."""

    operation: str
    method: str
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    json: Optional[Dict[str, Any]] = None
    # URL safe to log or trace (session tokens redacted)
    display_url: Optional[str] = None


def _segment(value: str) -> str:
    """Percent-encode one path segment; slashes and reserved characters included."""
    return quote(str(value), safe="")


def _record_id(record_id: Union[int, str]) -> str:
    if isinstance(record_id, bool):
        raise ValidationError(f"record_id must be a positive integer, got {record_id!r}", subcode=VALIDATION_RECORD_ID)
    if isinstance(record_id, int):
        if record_id < 1:
            raise ValidationError(f"record_id must be a positive integer, got {record_id!r}", subcode=VALIDATION_RECORD_ID)
        return str(record_id)
    if isinstance(record_id, str) and record_id.strip().isdecimal() and int(record_id) > 0:
        return str(int(record_id))
    raise ValidationError(f"record_id must be a positive integer, got {record_id!r}", subcode=VALIDATION_RECORD_ID)


def _field_data(fields: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(fields, dict):
        raise ValidationError("field data must be a dict of field name to value", subcode=VALIDATION_FIELD_DATA)
    for name in fields:
        if not isinstance(name, str) or not name:
            raise ValidationError(f"field names must be non-empty strings, got {name!r}", subcode=VALIDATION_FIELD_DATA)
    return dict(fields)


class _RequestBuilder:
    """
    Builds requests for one database and, optionally, one layout.

    :param base_url: Data API root, e.g. ``"https://fms.example.com/fmi/data/vLatest"``.
    :param database: Database (file) name, or ``None`` for server-level calls.
    :param layout: Layout name, or ``None`` for database-level calls.
    """

    def __init__(self, base_url: str, database: Optional[str] = None, layout: Optional[str] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.database = database
        self.layout = layout

    # --------------------------------------------------------------- paths

    def _database_url(self) -> str:
        if not self.database:
            raise ValidationError("A database name is required for this operation", subcode=VALIDATION_NO_LAYOUT)
        return f"{self.base_url}/databases/{_segment(self.database)}"

    def _layout_url(self) -> str:
        if not self.layout:
            raise ValidationError("A layout name is required for this operation", subcode=VALIDATION_NO_LAYOUT)
        return f"{self._database_url()}/layouts/{_segment(self.layout)}"

    # ------------------------------------------------------------ sessions

    def login(self) -> _PreparedRequest:
        url = f"{self._database_url()}/sessions"
        return _PreparedRequest("session.login", "POST", url, json={})

    def logout(self, token: str) -> _PreparedRequest:
        base = f"{self._database_url()}/sessions"
        return _PreparedRequest(
            "session.logout",
            "DELETE",
            f"{base}/{_segment(token)}",
            display_url=f"{base}/***",
        )

    # ------------------------------------------------------------ metadata

    def databases(self) -> _PreparedRequest:
        return _PreparedRequest("metadata.databases", "GET", f"{self.base_url}/databases")

    def layouts(self) -> _PreparedRequest:
        return _PreparedRequest("metadata.layouts", "GET", f"{self._database_url()}/layouts")

    # ------------------------------------------------------------- records

    def records(
        self,
        offset: int,
        limit: int,
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> _PreparedRequest:
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 1:
            raise ValidationError(f"offset is 1-based and must be at least 1, got {offset!r}", subcode=VALIDATION_PAGINATION)
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError(f"limit must be at least 1, got {limit!r}", subcode=VALIDATION_PAGINATION)
        params = {"_offset": str(offset), "_limit": str(limit)}
        if sort:
            order = SORT_ASCEND if ascending else SORT_DESCEND
            params["_sort"] = json.dumps([{"fieldName": name, "sortOrder": order} for name in sort])
        return _PreparedRequest("records.get_records", "GET", f"{self._layout_url()}/records", params=params)

    def count(self) -> _PreparedRequest:
        # A one-record page is enough to read dataInfo.totalRecordCount
        return _PreparedRequest(
            "records.count", "GET", f"{self._layout_url()}/records", params={"_offset": "1", "_limit": "1"}
        )

    def record(self, record_id: Union[int, str]) -> _PreparedRequest:
        return _PreparedRequest("records.get", "GET", f"{self._layout_url()}/records/{_record_id(record_id)}")

    def create(self, fields: Dict[str, Any]) -> _PreparedRequest:
        return _PreparedRequest(
            "records.add", "POST", f"{self._layout_url()}/records", json={"fieldData": _field_data(fields)}
        )

    def update(self, record_id: Union[int, str], fields: Dict[str, Any], mod_id: Optional[str] = None) -> _PreparedRequest:
        body: Dict[str, Any] = {"fieldData": _field_data(fields)}
        if mod_id is not None:
            body["modId"] = str(mod_id)
        return _PreparedRequest(
            "records.update", "PATCH", f"{self._layout_url()}/records/{_record_id(record_id)}", json=body
        )

    def delete(self, record_id: Union[int, str]) -> _PreparedRequest:
        return _PreparedRequest("records.delete", "DELETE", f"{self._layout_url()}/records/{_record_id(record_id)}")

    def find(self, body: Dict[str, Any]) -> _PreparedRequest:
        return _PreparedRequest("query.find", "POST", f"{self._layout_url()}/_find", json=body)


__all__ = ["_RequestBuilder", "_PreparedRequest"]
