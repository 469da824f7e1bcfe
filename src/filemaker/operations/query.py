# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Find (search) operations namespace."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from ..core.errors import ValidationError
from ..core._error_codes import VALIDATION_EMPTY_QUERY
from ..models.find_request import BoundFindRequest, FindRequest
from ..models.record import Record

if TYPE_CHECKING:
    from ..client import FileMakerClient


class QueryOperations:
    """
    Find requests against the client's layout.

    Accessed via ``client.query``. A find request is a list of conditions;
    records matching any condition are returned (OR), and every field of one
    condition must match (AND). No match is an empty list, not an error.

    Example:
        Plain conditions::

            people = client.query.search(
                [{"city": "Paris"}, {"city": "Lyon", "status": "active"}],
                sort=["last_name", "first_name"],
            )

        Fluent builder::

            people = (client.query.builder()
                      .where(city="Paris")
                      .omit(status="archived")
                      .sort_by("last_name")
                      .limit(20)
                      .execute())
    """

    def __init__(self, client: "FileMakerClient") -> None:
        self._client = client

    def search(
        self,
        conditions: Sequence[Dict[str, Any]],
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> List[Record]:
        """
        Run a find request built from condition mappings.

        :param conditions: Field-to-match-expression mappings, OR-combined.
        :type conditions: list[dict]
        :param sort: Field names to sort by; omitted from the request when empty.
        :type sort: list[str] or None
        :param ascending: Sort direction applied to every sort field.
        :type ascending: bool
        :return: Matching records, possibly empty.
        :rtype: list[~filemaker.models.record.Record]

        :raises ~filemaker.core.errors.ValidationError: If ``conditions`` is empty.
            Fetching without a filter is ``client.records.get_all()``.
        """
        return self.find(FindRequest.from_conditions(conditions, sort, ascending))

    def search_any(
        self,
        fields: Dict[str, Any],
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> List[Record]:
        """
        Find records matching at least one of the given field values.

        Each field becomes its own condition, so ``{"city": "Paris", "zip": "75001"}``
        returns records in Paris *or* with that zip code.

        :param fields: Field-to-match-expression mapping.
        :type fields: dict
        :rtype: list[~filemaker.models.record.Record]

        :raises ~filemaker.core.errors.ValidationError: If ``fields`` is empty.
        """
        if not fields:
            raise ValidationError("search_any needs at least one field", subcode=VALIDATION_EMPTY_QUERY)
        return self.search([{name: value} for name, value in fields.items()], sort, ascending)

    def find(self, request: FindRequest) -> List[Record]:
        """
        Execute a :class:`~filemaker.models.find_request.FindRequest`.

        :rtype: list[~filemaker.models.record.Record]
        """
        body = request.build()
        with self._client._scoped_data_api() as api:
            records, _ = api._find(body)
            return records

    def builder(self) -> BoundFindRequest:
        """
        Start a fluent find request that runs with ``.execute()``.

        :rtype: ~filemaker.models.find_request.BoundFindRequest
        """
        return BoundFindRequest(self)


__all__ = ["QueryOperations"]
