# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record CRUD operations namespace."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union, TYPE_CHECKING

from ..core.errors import FileMakerError, ValidationError
from ..core.results import AddResult
from ..core._error_codes import VALIDATION_FIELD_DATA, VALIDATION_PAGINATION
from ..models.record import Record

if TYPE_CHECKING:
    from ..client import FileMakerClient

_logger = logging.getLogger(__name__)


class RecordOperations:
    """
    Record CRUD operations on the client's layout.

    Accessed via ``client.records``.

    Example:
        Single record operations::

            record_id = client.records.add({"name": "Alice"})
            record = client.records.get(record_id)
            client.records.update(record_id, {"name": "Alice B."})
            client.records.delete(record_id)

        Reading in pages::

            first_page = client.records.get_records(offset=1, limit=50)
            everything = client.records.get_all()
    """

    def __init__(self, client: "FileMakerClient") -> None:
        self._client = client

    # ---------------------------------------------------------------- read

    def get(self, record_id: Union[int, str]) -> Record:
        """
        Get a single record by id.

        :param record_id: Server-assigned record id.
        :type record_id: int or str
        :return: The record.
        :rtype: ~filemaker.models.record.Record

        :raises ~filemaker.core.errors.NotFoundError: If the record does not exist.
        :raises ~filemaker.core.errors.ValidationError: If ``record_id`` is not a positive integer.
        """
        with self._client._scoped_data_api() as api:
            return api._get(record_id)

    def get_records(
        self,
        offset: int = 1,
        limit: Optional[int] = None,
        *,
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> List[Record]:
        """
        Fetch one bounded page of records.

        Returns at most ``limit`` records starting at the 1-based ``offset``; fewer
        when the layout holds fewer remaining records, and an empty list when it
        holds none.

        :param offset: 1-based position of the first record.
        :type offset: int
        :param limit: Maximum number of records; defaults to ``config.page_size``.
        :type limit: int or None
        :param sort: Field names to sort by.
        :type sort: list[str] or None
        :param ascending: Sort direction applied to every sort field.
        :type ascending: bool
        :rtype: list[~filemaker.models.record.Record]
        """
        size = limit if limit is not None else self._client._config.page_size
        with self._client._scoped_data_api() as api:
            records, _ = api._get_records(offset, size, sort=sort, ascending=ascending)
            return records[:size]

    def iter_pages(
        self,
        page_size: Optional[int] = None,
        *,
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> Iterator[List[Record]]:
        """
        Yield every record of the layout, one page at a time.

        Paging stops after the first page shorter than ``page_size``, including
        an empty page when the layout holds no (more) records.

        :param page_size: Records per request; defaults to ``config.page_size``.
        :type page_size: int or None
        :rtype: Iterator[list[~filemaker.models.record.Record]]
        """
        size = page_size if page_size is not None else self._client._config.page_size
        if size < 1:
            raise ValidationError("page_size must be at least 1", subcode=VALIDATION_PAGINATION)

        def _paged() -> Iterator[List[Record]]:
            offset = 1
            while True:
                page = self.get_records(offset, size, sort=sort, ascending=ascending)
                if page:
                    yield page
                if len(page) < size:
                    return
                offset += len(page)

        return _paged()

    def get_all(
        self,
        page_size: Optional[int] = None,
        *,
        sort: Optional[Sequence[str]] = None,
        ascending: bool = True,
    ) -> List[Record]:
        """
        Fetch every record of the layout in server order.

        :param page_size: Records per request; defaults to ``config.page_size``.
        :type page_size: int or None
        :rtype: list[~filemaker.models.record.Record]

        Example::

            for record in client.records.get_all(page_size=500):
                print(record.record_id, record["name"])
        """
        records: List[Record] = []
        for page in self.iter_pages(page_size, sort=sort, ascending=ascending):
            records.extend(page)
        return records

    def count(self) -> int:
        """
        Number of records in the table behind the layout.

        :rtype: int
        """
        with self._client._scoped_data_api() as api:
            return api._count()

    def field_names(self) -> List[str]:
        """
        Field names of the layout, read from its first record.

        Global fields (``g_`` prefix) are excluded. Returns an empty list when
        the layout holds no records.

        :rtype: list[str]
        """
        page = self.get_records(1, 1)
        if not page:
            _logger.warning("No records on layout %r; field names cannot be discovered", self._client._layout)
            return []
        return page[0].field_names()

    # --------------------------------------------------------------- write

    def add(self, fields: Dict[str, Any]) -> int:
        """
        Create one record.

        :param fields: Field data of the new record.
        :type fields: dict
        :return: Id of the created record.
        :rtype: int

        :raises ~filemaker.core.errors.ValidationError: If ``fields`` is not a dict
            or the service rejects a value.
        """
        if not isinstance(fields, dict):
            raise ValidationError("fields must be a dict of field name to value", subcode=VALIDATION_FIELD_DATA)
        with self._client._scoped_data_api() as api:
            return api._create(fields)

    def add_many(self, items: List[Dict[str, Any]]) -> List[AddResult]:
        """
        Create several records, one independent request per record.

        The batch is not atomic and never stops early: a failing item is reported
        in its :class:`~filemaker.core.results.AddResult` and the next item is
        still submitted.

        :param items: Field data for each new record.
        :type items: list[dict]
        :return: One result per item, in input order.
        :rtype: list[~filemaker.core.results.AddResult]

        :raises TypeError: If ``items`` is not a list.

        Example::

            results = client.records.add_many([{"name": "A"}, {"name": "B"}])
            print(f"{sum(r.success for r in results)} of {len(results)} created")
        """
        if not isinstance(items, list):
            raise TypeError("items must be a list of dicts")
        results: List[AddResult] = []
        for index, fields in enumerate(items):
            try:
                record_id = self.add(fields)
            except FileMakerError as exc:
                _logger.warning("Record #%d was not created: %s", index, exc.message)
                results.append(AddResult(index=index, fields=fields if isinstance(fields, dict) else {}, error=exc))
                continue
            results.append(AddResult(index=index, fields=dict(fields), record_id=record_id))
        return results

    def update(self, record_id: Union[int, str], fields: Dict[str, Any], *, mod_id: Optional[str] = None) -> None:
        """
        Change the given fields of one record; other fields are untouched.

        :param record_id: Id of the record to change.
        :type record_id: int or str
        :param fields: Fields to change.
        :type fields: dict
        :param mod_id: When given, the update only applies if the record's
            modification id still matches.
        :type mod_id: str or None

        :raises ~filemaker.core.errors.NotFoundError: If the record does not exist.
        """
        with self._client._scoped_data_api() as api:
            api._update(record_id, fields, mod_id=mod_id)

    def delete(self, record_id: Union[int, str]) -> None:
        """
        Delete one record.

        Deleting a record that is already gone is an error, not a no-op.

        :raises ~filemaker.core.errors.NotFoundError: If the record does not exist.
        """
        with self._client._scoped_data_api() as api:
            api._delete(record_id)

    def clear(self, page_size: Optional[int] = None) -> int:
        """
        Delete every record of the layout.

        Takes a snapshot of the record ids and deletes them one by one. Records
        created by others while this runs may survive; there is no isolation.

        :return: Number of records deleted.
        :rtype: int
        """
        with self._client._scoped_data_api():
            record_ids = [record.record_id for record in self.get_all(page_size)]
            if not record_ids:
                _logger.info("Layout %r holds no records; nothing to clear", self._client._layout)
                return 0
            for record_id in record_ids:
                self.delete(record_id)
        _logger.info("Deleted %d records from layout %r", len(record_ids), self._client._layout)
        return len(record_ids)


__all__ = ["RecordOperations"]
