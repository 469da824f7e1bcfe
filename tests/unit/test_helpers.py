# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared test utilities for unit tests.

Provides a fake HTTP response, an in-memory Data API server that can stand in
for a ``requests.Session``, and a helper that wires a client to it.
"""

import json
import threading
from urllib.parse import unquote

from filemaker.client import FileMakerClient

BASE_URL = "https://fms.example.test/fmi/data/vLatest"
DATABASE = "Contacts"
LAYOUT = "People"
USERNAME = "admin"
PASSWORD = "secret"


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, status_code, body=None, headers=None, text=None):
        self.status_code = status_code
        self.headers = dict(headers or {})
        self._body = body
        if text is not None:
            self.text = text
        elif body is None:
            self.text = ""
        else:
            self.text = json.dumps(body)
        self.content = self.text.encode("utf-8")

    def json(self):
        if isinstance(self._body, (dict, list)):
            return self._body
        raise ValueError("non-json")


def ok(response=None):
    """Successful Data API envelope."""
    return FakeResponse(200, {"response": response or {}, "messages": [{"code": "0", "message": "OK"}]})


def fm_error(status, code, message):
    """Data API error envelope."""
    return FakeResponse(status, {"response": {}, "messages": [{"code": str(code), "message": message}]})


class FakeDataApiServer:
    """
    In-memory FileMaker Data API for one database and one layout.

    Implements ``request(method, url, **kwargs)`` so it can be used as the HTTP
    session of a client. Every call is recorded in :attr:`calls` as
    ``(method, path, kwargs)`` with the base URL stripped.
    """

    def __init__(self, records=None, database=DATABASE, layout=LAYOUT, layouts=None, databases=None, fields=None):
        self.database = database
        self.layout = layout
        self.layouts = layouts if layouts is not None else [{"name": layout}]
        self.databases = databases if databases is not None else [database]
        # When set, writes naming other fields are rejected with FileMaker error 102
        self.fields = set(fields) if fields is not None else None
        self.records = {}
        self.mod_ids = {}
        self.next_id = 1
        self.tokens = set()
        self.token_counter = 0
        self.login_count = 0
        self.logout_count = 0
        self.calls = []
        self.closed = False
        self._lock = threading.Lock()
        for fields_ in records or []:
            self._insert(dict(fields_))

    # ----------------------------------------------------------- controls

    def expire_tokens(self):
        """Drop every session, as the server does after its idle timeout."""
        self.tokens.clear()

    def paths(self, method=None):
        return [path for m, path, _ in self.calls if method is None or m == method]

    def close(self):
        self.closed = True

    # ------------------------------------------------------------ routing

    def request(self, method, url, **kwargs):
        assert url.startswith(BASE_URL), url
        path = url[len(BASE_URL):]
        with self._lock:
            self.calls.append((method, path, kwargs))
        segments = [unquote(s) for s in path.strip("/").split("/")]

        if segments == ["databases"] and method == "GET":
            return self._list_databases(kwargs)
        if len(segments) < 2 or segments[0] != "databases":
            return FakeResponse(404, text="Not Found")
        if segments[1] != self.database:
            return fm_error(500, 802, "Unable to open file")

        rest = segments[2:]
        if rest == ["sessions"] and method == "POST":
            return self._login(kwargs)
        if len(rest) == 2 and rest[0] == "sessions" and method == "DELETE":
            return self._logout(rest[1])

        if not self._authorized(kwargs):
            return fm_error(401, 952, "Invalid FileMaker Data API token (*)")

        if rest == ["layouts"] and method == "GET":
            return ok({"layouts": self.layouts})
        if len(rest) < 2 or rest[0] != "layouts":
            return FakeResponse(404, text="Not Found")
        if rest[1] != self.layout:
            return fm_error(500, 105, "Layout is missing")

        tail = rest[2:]
        if tail == ["records"] and method == "GET":
            return self._get_records(kwargs.get("params") or {})
        if tail == ["records"] and method == "POST":
            return self._create(kwargs.get("json") or {})
        if tail == ["_find"] and method == "POST":
            return self._find(kwargs.get("json") or {})
        if len(tail) == 2 and tail[0] == "records":
            record_id = int(tail[1])
            if method == "GET":
                return self._get(record_id)
            if method == "PATCH":
                return self._update(record_id, kwargs.get("json") or {})
            if method == "DELETE":
                return self._delete(record_id)
        return FakeResponse(405, text="Method Not Allowed")

    # ------------------------------------------------------------ sessions

    def _basic_ok(self, kwargs):
        auth = kwargs.get("auth")
        return auth is not None and auth.username == USERNAME and auth.password == PASSWORD

    def _authorized(self, kwargs):
        header = (kwargs.get("headers") or {}).get("Authorization", "")
        return header.startswith("Bearer ") and header[len("Bearer "):] in self.tokens

    def _login(self, kwargs):
        if not self._basic_ok(kwargs):
            return fm_error(401, 212, "Invalid user account and/or password; please try again")
        with self._lock:
            self.token_counter += 1
            self.login_count += 1
            token = f"tok-{self.token_counter}"
            self.tokens.add(token)
        return FakeResponse(
            200,
            {"response": {"token": token}, "messages": [{"code": "0", "message": "OK"}]},
            headers={"X-FM-Data-Access-Token": token},
        )

    def _logout(self, token):
        if token not in self.tokens:
            return fm_error(401, 952, "Invalid FileMaker Data API token (*)")
        self.tokens.discard(token)
        self.logout_count += 1
        return ok()

    def _list_databases(self, kwargs):
        if not self._basic_ok(kwargs):
            return fm_error(401, 212, "Invalid user account and/or password; please try again")
        return ok({"databases": [{"name": name} for name in self.databases]})

    # ------------------------------------------------------------- records

    def _insert(self, fields):
        record_id = self.next_id
        self.next_id += 1
        self.records[record_id] = fields
        self.mod_ids[record_id] = 0
        return record_id

    def _entry(self, record_id):
        return {
            "fieldData": dict(self.records[record_id]),
            "portalData": {},
            "recordId": str(record_id),
            "modId": str(self.mod_ids[record_id]),
        }

    def _page(self, ids, offset, limit, found_count):
        selected = ids[offset - 1:offset - 1 + limit]
        if not selected:
            return fm_error(500, 401, "No records match the request")
        return ok({
            "dataInfo": {
                "database": self.database,
                "layout": self.layout,
                "table": self.layout,
                "totalRecordCount": len(self.records),
                "foundCount": found_count,
                "returnedCount": len(selected),
            },
            "data": [self._entry(record_id) for record_id in selected],
        })

    def _sorted(self, ids, sort):
        for rule in reversed(sort or []):
            name = rule["fieldName"]
            ids = sorted(
                ids,
                key=lambda record_id: str(self.records[record_id].get(name, "")),
                reverse=rule.get("sortOrder") == "descend",
            )
        return ids

    def _get_records(self, params):
        offset = int(params.get("_offset", "1"))
        limit = int(params.get("_limit", "100"))
        sort = json.loads(params["_sort"]) if "_sort" in params else None
        ids = self._sorted(sorted(self.records), sort)
        return self._page(ids, offset, limit, len(ids))

    def _get(self, record_id):
        if record_id not in self.records:
            return fm_error(500, 101, "Record is missing")
        return self._page([record_id], 1, 1, 1)

    def _check_fields(self, field_data):
        if self.fields is None:
            return None
        unknown = [name for name in field_data if name not in self.fields]
        if unknown:
            return fm_error(500, 102, "Field is missing")
        return None

    def _create(self, body):
        field_data = body.get("fieldData") or {}
        rejected = self._check_fields(field_data)
        if rejected is not None:
            return rejected
        record_id = self._insert(dict(field_data))
        return ok({"recordId": str(record_id), "modId": "0"})

    def _update(self, record_id, body):
        if record_id not in self.records:
            return fm_error(500, 101, "Record is missing")
        field_data = body.get("fieldData") or {}
        rejected = self._check_fields(field_data)
        if rejected is not None:
            return rejected
        if "modId" in body and body["modId"] != str(self.mod_ids[record_id]):
            return fm_error(500, 306, "Record modification ID does not match")
        self.records[record_id].update(field_data)
        self.mod_ids[record_id] += 1
        return ok({"modId": str(self.mod_ids[record_id])})

    def _delete(self, record_id):
        if record_id not in self.records:
            return fm_error(500, 101, "Record is missing")
        del self.records[record_id]
        del self.mod_ids[record_id]
        return ok()

    def _matches(self, record_id, condition):
        fields = self.records[record_id]
        for name, expression in condition.items():
            if name == "omit":
                continue
            value = fields.get(name)
            if expression == "=":
                if value not in (None, ""):
                    return False
            elif str(value) != expression:
                return False
        return True

    def _find(self, body):
        query = body.get("query") or []
        if not query:
            return fm_error(500, 1708, "Parameter value is invalid")
        finds = [c for c in query if c.get("omit") != "true"]
        omits = [c for c in query if c.get("omit") == "true"]
        ids = [
            record_id
            for record_id in sorted(self.records)
            if any(self._matches(record_id, c) for c in finds)
            and not any(self._matches(record_id, c) for c in omits)
        ]
        ids = self._sorted(ids, body.get("sort"))
        offset = int(body.get("offset", "1"))
        limit = int(body.get("limit", "100"))
        return self._page(ids, offset, limit, len(ids))


def make_client(server, layout=LAYOUT, config=None, database=DATABASE):
    """Create a client whose HTTP session is ``server``."""
    client = FileMakerClient(BASE_URL, (USERNAME, PASSWORD), database, layout, config)
    client._session = server
    return client
