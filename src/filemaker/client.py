# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple, Union

import requests

from azure.core.credentials import AzureNamedKeyCredential

from .core.config import FileMakerConfig, resolve_base_url
from .data._data_api import _DataApiClient
from .operations.metadata import MetadataOperations
from .operations.query import QueryOperations
from .operations.records import RecordOperations

CredentialLike = Union[AzureNamedKeyCredential, Tuple[str, str]]


def _as_credential(credential: CredentialLike) -> AzureNamedKeyCredential:
    if isinstance(credential, AzureNamedKeyCredential):
        return credential
    if isinstance(credential, tuple) and len(credential) == 2:
        return AzureNamedKeyCredential(*credential)
    raise TypeError("credential must be an AzureNamedKeyCredential or a (username, password) tuple.")


class FileMakerClient:
    """
    High-level client for one layout of a FileMaker database via the Data API.

    The client opens a Data API session on first use, attaches the session
    token to every call, and logs in again once if the server reports the
    token as expired. Operations are grouped under namespaces:

    - ``client.records``: read, page, create, update and delete records
    - ``client.query``: find requests
    - ``client.metadata``: database and layout listings

    **Context Manager Support (Recommended)**:
        Using the client as a context manager pools connections and closes the
        server-side session on exit::

            with FileMakerClient(base_url, ("admin", "secret"), "Contacts", "People") as client:
                record_id = client.records.add({"name": "Alice"})

    :param base_url: Data API root, for example
        ``"https://fms.example.com/fmi/data/vLatest"``. When ``None``, the
        ``FM_URL`` environment variable is read once, here.
    :type base_url: :class:`str` | None
    :param credential: Account name and password, as an
        :class:`~azure.core.credentials.AzureNamedKeyCredential` or a
        ``(username, password)`` tuple.
    :param database: Database (file) name.
    :type database: :class:`str`
    :param layout: Layout the record operations run against.
    :type layout: :class:`str` | None
    :param config: Optional timeout, TLS, paging and telemetry settings.
    :type config: ~filemaker.core.config.FileMakerConfig | None

    :raises ValueError: If no base URL can be resolved.

    Example::

        from azure.core.credentials import AzureNamedKeyCredential
        from filemaker.client import FileMakerClient

        credential = AzureNamedKeyCredential("admin", "secret")
        client = FileMakerClient("https://fms.example.com/fmi/data/vLatest", credential, "Contacts", "People")
        try:
            print(client.records.count())
            for record in client.query.search([{"city": "Paris"}]):
                print(record["name"])
        finally:
            client.close()
    """

    def __init__(
        self,
        base_url: Optional[str],
        credential: CredentialLike,
        database: Optional[str],
        layout: Optional[str] = None,
        config: Optional[FileMakerConfig] = None,
    ) -> None:
        self._base_url = resolve_base_url(base_url)
        self._credential = _as_credential(credential)
        self._database = database
        self._layout = layout
        self._config = config or FileMakerConfig.from_env()
        self._data_api: Optional[_DataApiClient] = None
        self._data_api_lock = threading.Lock()
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.records = RecordOperations(self)
        self.query = QueryOperations(self)
        self.metadata = MetadataOperations(self)

    @property
    def database(self) -> Optional[str]:
        return self._database

    @property
    def layout(self) -> Optional[str]:
        return self._layout

    def __enter__(self) -> "FileMakerClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling.
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def login(self) -> None:
        """
        Open the Data API session now instead of on the first operation.

        :raises ~filemaker.core.errors.AuthenticationError: If the account is rejected.
        """
        with self._scoped_data_api() as api:
            api.auth.acquire()

    def close(self) -> None:
        """
        Close the Data API session and release HTTP resources.

        Safe to call multiple times. After closing, the client can be used again;
        the next operation opens a new session.

        :raises ~filemaker.core.errors.FileMakerError: If the server refuses to
            close the session.
        """
        try:
            with self._data_api_lock:
                data_api, self._data_api = self._data_api, None
            if data_api is not None:
                data_api.close()
        finally:
            if self._session is not None and self._owns_session:
                self._session.close()
                self._session = None
                self._owns_session = False

    def _get_data_api(self) -> _DataApiClient:
        """
        Get or create the internal Data API client.

        Construction is deferred until the first operation so that creating a
        client never touches the network.
        """
        api = self._data_api
        if api is not None:
            return api
        with self._data_api_lock:
            if self._data_api is None:
                self._data_api = _DataApiClient(
                    self._credential,
                    self._base_url,
                    self._database,
                    self._layout,
                    self._config,
                    session=self._session,
                )
            return self._data_api

    @contextmanager
    def _scoped_data_api(self) -> Iterator[_DataApiClient]:
        """Yield the low-level client while ensuring a correlation scope is active."""
        api = self._get_data_api()
        with api._call_scope():
            yield api

    # ------------------------------------------------- client-free listings

    @classmethod
    def get_databases(
        cls,
        username: str,
        password: str,
        base_url: Optional[str] = None,
        config: Optional[FileMakerConfig] = None,
    ) -> List[str]:
        """
        List the databases visible to an account, without a database binding.

        :rtype: list[str]
        """
        with cls(base_url, (username, password), None, None, config) as client:
            return client.metadata.databases()

    @classmethod
    def get_layouts(
        cls,
        username: str,
        password: str,
        database: str,
        base_url: Optional[str] = None,
        config: Optional[FileMakerConfig] = None,
    ) -> List[str]:
        """
        List the layouts of a database, without a layout binding.

        A short-lived session is opened for the call and closed afterwards.

        :rtype: list[str]
        """
        with cls(base_url, (username, password), database, None, config) as client:
            return client.metadata.layouts()


__all__ = ["FileMakerClient"]
