# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Fluent builder for Data API find requests.

A find request is a list of query conditions. Conditions are OR-combined; the
fields inside one condition are AND-combined. A condition flagged as an omit
request removes matching records from the found set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from ..common.constants import SORT_ASCEND, SORT_DESCEND
from ..core.errors import ValidationError
from ..core._error_codes import VALIDATION_EMPTY_QUERY, VALIDATION_FIELD_DATA, VALIDATION_PAGINATION

if TYPE_CHECKING:
    from ..operations.query import QueryOperations
    from .record import Record


def _match_expression(value: Any) -> str:
    """Render a condition value the way the Data API expects it (always a string)."""
    if value is None:
        return "="
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


@dataclass
class FindRequest:
    """
    Fluent interface for building a find request.

    Example:
        Build a standalone request body::

            body = (FindRequest()
                    .where(city="Paris", status="active")
                    .where(city="Lyon")
                    .omit(status="archived")
                    .sort_by("name")
                    .limit(50)
                    .build())
            # {'query': [{'city': 'Paris', 'status': 'active'},
            #            {'city': 'Lyon'},
            #            {'status': 'archived', 'omit': 'true'}],
            #  'sort': [{'fieldName': 'name', 'sortOrder': 'ascend'}],
            #  'limit': '50'}
    """

    _query: List[Dict[str, str]] = field(default_factory=list)
    _sort: List[Dict[str, str]] = field(default_factory=list)
    _offset: Optional[int] = None
    _limit: Optional[int] = None

    @classmethod
    def from_conditions(
        cls,
        conditions: Sequence[Dict[str, Any]],
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> "FindRequest":
        """
        Build a request from plain condition mappings and one sort direction.

        :raises ~filemaker.core.errors.ValidationError: If ``conditions`` is empty
            or any condition is empty or names a field with a non-string key.
        """
        if not conditions:
            raise ValidationError(
                "A find request needs at least one query condition; use records.get_all() to fetch everything",
                subcode=VALIDATION_EMPTY_QUERY,
            )
        request = cls()
        for condition in conditions:
            if not isinstance(condition, dict):
                raise ValidationError("Query conditions must be dicts of field name to match expression", subcode=VALIDATION_FIELD_DATA)
            request._add_condition(condition, omit=False)
        for name in sort or ():
            request.sort_by(name, descending=not ascending)
        return request

    def _add_condition(self, fields: Dict[str, Any], omit: bool) -> "FindRequest":
        if not fields:
            kind = "An omit" if omit else "A query"
            raise ValidationError(f"{kind} condition needs at least one field", subcode=VALIDATION_EMPTY_QUERY)
        for name in fields:
            if not isinstance(name, str) or not name:
                raise ValidationError(f"Field names must be non-empty strings, got {name!r}", subcode=VALIDATION_FIELD_DATA)
        condition = {name: _match_expression(value) for name, value in fields.items()}
        if omit:
            condition["omit"] = "true"
        self._query.append(condition)
        return self

    def where(self, /, **fields: Any) -> "FindRequest":
        """
        Add one condition; all given fields must match (AND).

        Calling ``where`` again adds an alternative condition (OR). Field names
        that are not valid Python identifiers can be passed with ``**{...}``.

        :raises ~filemaker.core.errors.ValidationError: If no field is given.
        """
        return self._add_condition(fields, omit=False)

    def omit(self, /, **fields: Any) -> "FindRequest":
        """Add an omit condition: records matching all given fields are excluded."""
        return self._add_condition(fields, omit=True)

    def sort_by(self, field_name: str, descending: bool = False) -> "FindRequest":
        self._sort.append({"fieldName": field_name, "sortOrder": SORT_DESCEND if descending else SORT_ASCEND})
        return self

    def offset(self, offset: int) -> "FindRequest":
        """Set the 1-based position of the first record returned."""
        if offset < 1:
            raise ValidationError("offset is 1-based and must be at least 1", subcode=VALIDATION_PAGINATION)
        self._offset = offset
        return self

    def limit(self, limit: int) -> "FindRequest":
        if limit < 1:
            raise ValidationError("limit must be at least 1", subcode=VALIDATION_PAGINATION)
        self._limit = limit
        return self

    def build(self) -> Dict[str, Any]:
        """
        Build the JSON body for a ``_find`` call.

        :raises ~filemaker.core.errors.ValidationError: If no condition was added.
        """
        if not self._query:
            raise ValidationError(
                "A find request needs at least one query condition; use records.get_all() to fetch everything",
                subcode=VALIDATION_EMPTY_QUERY,
            )
        body: Dict[str, Any] = {"query": [dict(q) for q in self._query]}
        if self._sort:
            body["sort"] = [dict(s) for s in self._sort]
        if self._offset is not None:
            body["offset"] = str(self._offset)
        if self._limit is not None:
            body["limit"] = str(self._limit)
        return body


class BoundFindRequest(FindRequest):
    """FindRequest created via ``client.query.builder()`` that can execute itself."""

    def __init__(self, query_ops: "QueryOperations") -> None:
        super().__init__()
        self._query_ops = query_ops

    def execute(self) -> List["Record"]:
        """
        Run the find request.

        :return: Matching records; empty when nothing matches.
        :rtype: list[~filemaker.models.record.Record]
        """
        return self._query_ops.find(self)


__all__ = ["FindRequest", "BoundFindRequest"]
