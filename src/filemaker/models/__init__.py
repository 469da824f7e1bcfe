# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the FileMaker client.

- :class:`~filemaker.models.record.Record`: Record representation with read-only dict-like access.
- :class:`~filemaker.models.record.DataInfo`: Result-set metadata returned with record listings.
- :class:`~filemaker.models.find_request.FindRequest`: Fluent find request builder.

Type aliases:

- ``RecordId``: Server-assigned record id (int).
- ``LayoutName``: Layout names (str).

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files.
"""

__all__ = []
