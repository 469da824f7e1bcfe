# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for FileMaker layouts.

Provides a typed, read-only representation of a Data API record with
dict-like access to its field data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from ..common.constants import GLOBAL_FIELD_PREFIX
from ..core.errors import DecodeError
from ..core._error_codes import DECODE_UNEXPECTED_SHAPE

# Type aliases for semantic clarity
RecordId = int
LayoutName = str
JSONValue = Union[str, int, float, bool, None, Dict[str, "JSONValue"], List["JSONValue"]]
FieldData = Dict[str, JSONValue]


@dataclass(frozen=True)
class Record:
    """
    Record returned by the Data API.

    :param record_id: Server-assigned record id.
    :type record_id: int
    :param field_data: Field values keyed by field name.
    :type field_data: dict[str, JSONValue]
    :param mod_id: Modification counter reported by the server.
    :type mod_id: str | None
    :param portal_data: Related records keyed by portal name.
    :type portal_data: dict[str, list]
    :param layout: Layout the record was read through.
    :type layout: str | None

    Example:
        Structured access::

            record = client.records.get(42)
            print(record.record_id)  # 42
            print(record.mod_id)     # "3"

        Dict-like access::

            print(record["name"])
            for name in record:
                print(name, record[name])
    """

    record_id: RecordId
    field_data: FieldData = field(default_factory=dict)
    mod_id: Optional[str] = None
    portal_data: Dict[str, Any] = field(default_factory=dict)
    layout: Optional[LayoutName] = None

    def __getitem__(self, key: str) -> JSONValue:
        return self.field_data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.field_data

    def __iter__(self) -> Iterator[str]:
        return iter(self.field_data)

    def __len__(self) -> int:
        return len(self.field_data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.field_data.get(key, default)

    def keys(self):
        return self.field_data.keys()

    def values(self):
        return self.field_data.values()

    def items(self):
        return self.field_data.items()

    def field_names(self, *, include_globals: bool = False) -> List[str]:
        """
        Field names present on this record.

        Global fields (``g_`` prefix) hold layout-wide values rather than record
        data and are skipped unless ``include_globals`` is set.

        :rtype: list[str]
        """
        return [
            name for name in self.field_data if include_globals or not name.startswith(GLOBAL_FIELD_PREFIX)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Field data as a plain dictionary."""
        return dict(self.field_data)

    def to_full_dict(self) -> Dict[str, Any]:
        """Field data plus record metadata, in the Data API's key names."""
        return {
            "recordId": str(self.record_id),
            "modId": self.mod_id,
            "fieldData": dict(self.field_data),
            "portalData": dict(self.portal_data),
        }

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any], *, layout: Optional[str] = None) -> "Record":
        """
        Create a Record from one entry of a Data API ``response.data`` array.

        :raises ~filemaker.core.errors.DecodeError: If the entry lacks a numeric
            ``recordId`` or its ``fieldData`` is not an object.
        """
        if not isinstance(response_data, dict):
            raise DecodeError("Record entry is not a JSON object", subcode=DECODE_UNEXPECTED_SHAPE)
        raw_id = response_data.get("recordId")
        try:
            record_id = int(raw_id)
        except (TypeError, ValueError):
            raise DecodeError(
                f"Record entry has no numeric recordId: {raw_id!r}",
                subcode=DECODE_UNEXPECTED_SHAPE,
            ) from None
        field_data = response_data.get("fieldData", {})
        if not isinstance(field_data, dict):
            raise DecodeError("Record fieldData is not a JSON object", subcode=DECODE_UNEXPECTED_SHAPE)
        portal_data = response_data.get("portalData") or {}
        mod_id = response_data.get("modId")
        return cls(
            record_id=record_id,
            field_data=dict(field_data),
            mod_id=str(mod_id) if mod_id is not None else None,
            portal_data=dict(portal_data) if isinstance(portal_data, dict) else {},
            layout=layout,
        )


@dataclass(frozen=True)
class DataInfo:
    """
    Counts reported in a response's ``dataInfo`` block.

    :param total_record_count: Records in the table behind the layout.
    :param found_count: Records in the found set (equals total for plain reads).
    :param returned_count: Records in this response.
    """

    database: Optional[str] = None
    layout: Optional[str] = None
    table: Optional[str] = None
    total_record_count: int = 0
    found_count: int = 0
    returned_count: int = 0

    @classmethod
    def from_api_response(cls, data_info: Optional[Dict[str, Any]]) -> "DataInfo":
        if not data_info:
            return cls()
        if not isinstance(data_info, dict):
            raise DecodeError("dataInfo is not a JSON object", subcode=DECODE_UNEXPECTED_SHAPE)
        try:
            return cls(
                database=data_info.get("database"),
                layout=data_info.get("layout"),
                table=data_info.get("table"),
                total_record_count=int(data_info.get("totalRecordCount", 0)),
                found_count=int(data_info.get("foundCount", 0)),
                returned_count=int(data_info.get("returnedCount", 0)),
            )
        except (TypeError, ValueError):
            raise DecodeError(f"dataInfo counts are not numeric: {data_info!r}", subcode=DECODE_UNEXPECTED_SHAPE) from None


__all__ = ["Record", "DataInfo", "RecordId", "LayoutName", "JSONValue", "FieldData"]
