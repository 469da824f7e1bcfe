# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Internal Data API plumbing: request building, response translation and the
low-level client used by the operation namespaces.
"""

__all__ = []
