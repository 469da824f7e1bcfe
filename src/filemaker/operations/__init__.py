# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the FileMaker client.

- RecordOperations: CRUD and paging on the client's layout
- QueryOperations: find requests
- MetadataOperations: database and layout listings
"""

__all__ = []
