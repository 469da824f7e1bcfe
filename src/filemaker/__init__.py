# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the FileMaker Data API.

Typical use::

    from filemaker import FileMakerClient

    with FileMakerClient("https://fms.example.com/fmi/data/vLatest", ("admin", "secret"), "Contacts", "People") as client:
        for record in client.records.get_all():
            print(record.record_id, record["name"])
"""

from .client import FileMakerClient
from .core.config import FileMakerConfig

__version__ = "0.1.0"

__all__ = ["FileMakerClient", "FileMakerConfig", "__version__"]
