# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Result types for batch operations.

Batch creates are not atomic: each record is submitted on its own, and the
outcome of every item is reported back so the caller can decide what to do
with partial failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import FileMakerError


@dataclass(frozen=True)
class AddResult:
    """
    Outcome of one item of :meth:`~filemaker.operations.records.RecordOperations.add_many`.

    :param index: Position of the item in the submitted list.
    :type index: :class:`int`
    :param fields: Field data that was submitted.
    :type fields: :class:`dict`
    :param record_id: Id of the created record, ``None`` on failure.
    :type record_id: :class:`int` | None
    :param error: Error raised for this item, ``None`` on success.
    :type error: ~filemaker.core.errors.FileMakerError | None

    Example:
        Report per-item outcomes::

            results = client.records.add_many([{"name": "A"}, {"name": "B"}])
            for r in results:
                if r.success:
                    print(f"#{r.index} -> {r.record_id}")
                else:
                    print(f"#{r.index} failed: {r.error.message}")
    """

    index: int
    fields: Dict[str, Any] = field(default_factory=dict)
    record_id: Optional[int] = None
    error: Optional[FileMakerError] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.record_id is not None


def failed(results: List[AddResult]) -> List[AddResult]:
    """Return the failed items of a batch, preserving order."""
    return [r for r in results if not r.success]


__all__ = ["AddResult", "failed"]
