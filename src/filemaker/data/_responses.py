# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Translation of Data API responses into typed values or classified errors.

Every (status, body) pair maps to exactly one outcome. The FileMaker service
code in ``messages[0].code`` takes precedence over the HTTP status when both
are present; unknown codes fall back to :class:`ServerError`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import requests

from ..common.constants import BODY_EXCERPT_LENGTH, TOKEN_HEADER
from ..core.errors import (
    AuthenticationError,
    DecodeError,
    FileMakerError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from ..core._error_codes import (
    AUTH_INVALID_ACCOUNT,
    AUTH_INVALID_TOKEN,
    AUTH_TOKEN_MISSING,
    DECODE_MISSING_RESPONSE,
    DECODE_NOT_JSON,
    DECODE_UNEXPECTED_SHAPE,
    FM_INVALID_ACCOUNT,
    FM_INVALID_TOKEN,
    FM_NO_RECORDS_MATCH,
    FM_OK,
    NOT_FOUND_CODES,
    TRANSIENT_STATUS_CODES,
    VALIDATION_CODES,
    _http_subcode,
)
from ..models.record import DataInfo, Record


def _json_body(response: requests.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


def _body_excerpt(response: requests.Response) -> str:
    text = getattr(response, "text", "") or ""
    return text[:BODY_EXCERPT_LENGTH]


def _service_message(body: Any) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(code, message)`` of the first entry in ``messages``, if any."""
    if not isinstance(body, dict):
        return None, None
    messages = body.get("messages")
    if not isinstance(messages, list) or not messages or not isinstance(messages[0], dict):
        return None, None
    first = messages[0]
    code = first.get("code")
    message = first.get("message")
    return (str(code) if code is not None else None), (str(message) if message is not None else None)


def _classify(status: int, code: Optional[str], message: Optional[str], excerpt: str) -> FileMakerError:
    """Map a non-2xx response onto the error taxonomy."""
    text = message or f"Data API request failed with HTTP {status}"
    if code:
        text = f"{text} (FileMaker error {code})"
    common = {"subcode": _http_subcode(status), "service_error_code": code, "body_excerpt": excerpt}

    if code == FM_INVALID_ACCOUNT:
        common["subcode"] = AUTH_INVALID_ACCOUNT
        return AuthenticationError(text, status, is_token_error=False, **common)
    if code == FM_INVALID_TOKEN:
        common["subcode"] = AUTH_INVALID_TOKEN
        return AuthenticationError(text, status, is_token_error=True, **common)
    if code in NOT_FOUND_CODES or code == FM_NO_RECORDS_MATCH:
        return NotFoundError(text, status, **common)
    if code in VALIDATION_CODES:
        return ValidationError(
            text,
            subcode=_http_subcode(status),
            status_code=status,
            details={"service_error_code": code, "body_excerpt": excerpt},
        )
    if code is None or code == FM_OK:
        if status == 401:
            return AuthenticationError(text, status, is_token_error=True, **common)
        if status == 404:
            return NotFoundError(text, status, **common)
        if status in (400, 415):
            return ValidationError(
                text,
                subcode=_http_subcode(status),
                status_code=status,
                details={"service_error_code": code, "body_excerpt": excerpt},
            )
    if status == 401:
        return AuthenticationError(text, status, is_token_error=False, **common)
    return ServerError(text, status, is_transient=status in TRANSIENT_STATUS_CODES, **common)


def _raise_for_response(response: requests.Response, *, no_records_ok: bool = False) -> Dict[str, Any]:
    """
    Return the ``response`` object of a successful call or raise a classified error.

    :param no_records_ok: Treat FileMaker error 401 ("no records match") as an
        empty result instead of an error.
    :raises ~filemaker.core.errors.FileMakerError: For any failure.
    """
    status = response.status_code
    body = _json_body(response)

    if 200 <= status < 300:
        if body is None:
            raise DecodeError(
                "Data API returned a non-JSON body",
                subcode=DECODE_NOT_JSON,
                status_code=status,
                details={"body_excerpt": _body_excerpt(response)},
            )
        payload = body.get("response") if isinstance(body, dict) else None
        if not isinstance(payload, dict):
            raise DecodeError(
                "Data API response has no 'response' object",
                subcode=DECODE_MISSING_RESPONSE,
                status_code=status,
                details={"body_excerpt": _body_excerpt(response)},
            )
        return payload

    code, message = _service_message(body)
    if no_records_ok and code == FM_NO_RECORDS_MATCH:
        return {"data": [], "dataInfo": {}}
    raise _classify(status, code, message, _body_excerpt(response))


def _decode_token(response: requests.Response, payload: Dict[str, Any]) -> str:
    token = payload.get("token") or response.headers.get(TOKEN_HEADER)
    if not isinstance(token, str) or not token:
        raise AuthenticationError(
            "Data API login succeeded but no session token was returned",
            response.status_code,
            subcode=AUTH_TOKEN_MISSING,
            body_excerpt=_body_excerpt(response),
        )
    return token


def _decode_records(payload: Dict[str, Any], layout: Optional[str] = None) -> Tuple[List[Record], DataInfo]:
    data = payload.get("data")
    if not isinstance(data, list):
        raise DecodeError("Data API response has no 'data' array", subcode=DECODE_UNEXPECTED_SHAPE)
    records = [Record.from_api_response(item, layout=layout) for item in data]
    return records, DataInfo.from_api_response(payload.get("dataInfo"))


def _decode_record_id(payload: Dict[str, Any]) -> int:
    raw = payload.get("recordId")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise DecodeError(f"Data API response has no numeric recordId: {raw!r}", subcode=DECODE_UNEXPECTED_SHAPE) from None


def _decode_count(payload: Dict[str, Any]) -> int:
    info = payload.get("dataInfo")
    if info == {} and payload.get("data") == []:
        return 0
    if not isinstance(info, dict) or "totalRecordCount" not in info:
        raise DecodeError("Data API response has no dataInfo.totalRecordCount", subcode=DECODE_UNEXPECTED_SHAPE)
    return DataInfo.from_api_response(info).total_record_count


def _decode_names(payload: Dict[str, Any], key: str) -> List[str]:
    """
    Decode a ``[{"name": ...}, ...]`` listing.

    Layout listings nest layouts inside folders (``isFolder`` entries with
    ``folderLayoutNames``); folders are flattened and not listed themselves.
    """
    items = payload.get(key)
    if not isinstance(items, list):
        raise DecodeError(f"Data API response has no '{key}' array", subcode=DECODE_UNEXPECTED_SHAPE)
    names: List[str] = []
    for item in items:
        if not isinstance(item, dict):
            raise DecodeError(f"Entry of '{key}' is not a JSON object", subcode=DECODE_UNEXPECTED_SHAPE)
        if item.get("isFolder"):
            names.extend(_decode_names(item, "folderLayoutNames"))
            continue
        name = item.get("name")
        if not isinstance(name, str):
            raise DecodeError(f"Entry of '{key}' has no name", subcode=DECODE_UNEXPECTED_SHAPE)
        names.append(name)
    return names


def _decode_mod_id(payload: Dict[str, Any]) -> Optional[str]:
    mod_id = payload.get("modId")
    return str(mod_id) if mod_id is not None else None
