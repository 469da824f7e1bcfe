# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Server and database listing operations namespace."""

from __future__ import annotations

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import FileMakerClient


class MetadataOperations:
    """
    Listings that do not depend on the client's layout.

    Accessed via ``client.metadata``. For one-off listings without a client,
    use :meth:`FileMakerClient.get_databases` and :meth:`FileMakerClient.get_layouts`.

    Example::

        print(client.metadata.databases())
        print(client.metadata.layouts())
    """

    def __init__(self, client: "FileMakerClient") -> None:
        self._client = client

    def databases(self) -> List[str]:
        """
        Names of the databases hosted on the server that the account can see.

        Uses the account credentials directly; no session is opened.

        :rtype: list[str]
        """
        with self._client._scoped_data_api() as api:
            return api._list_databases()

    def layouts(self) -> List[str]:
        """
        Names of the layouts of the client's database, folders flattened.

        :rtype: list[str]
        """
        with self._client._scoped_data_api() as api:
            return api._list_layouts()


__all__ = ["MetadataOperations"]
