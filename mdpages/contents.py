r"""Walk GitHub content listings and download the documents they point at.

This module wraps the two network capabilities the build needs: listing a
directory through the repository contents API and fetching the raw text of a
single file. :func:`discover_documents` walks the listing tree depth-first and
returns one :class:`DocumentRef` per Markdown file, in listing order.

Example
-------
>>> from mdpages.contents import GitHubContentsClient, discover_documents
>>> client = GitHubContentsClient(token="ghp_example")  # doctest: +SKIP
>>> refs = discover_documents(
...     client, "https://api.github.com/repos/o/r/contents/docs"
... )  # doctest: +SKIP
>>> client.fetch_text(refs[0].content_url)  # doctest: +SKIP
'# Introduction\n...'
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter

from mdpages._constants import DOC_SUFFIXES, GITHUB_ACCEPT_HEADER, USER_AGENT
from mdpages.errors import FetchError, ListingError

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class DocumentRef:
    """A discovered Markdown file and where to download it from.

    Attributes
    ----------
    name : str
        File name, for example ``"setup.md"``.
    path : str
        Repository-relative path, for example ``"docs/guides/setup.md"``.
    content_url : str
        Raw download URL for the file body.
    """

    name: str
    path: str
    content_url: str


class GitHubContentsClient:
    """Thin wrapper around the repository contents API and raw downloads.

    A single ``requests.Session`` is shared by every call so fetches running
    on a worker pool reuse connections. The connection pool is sized to
    ``pool_size`` so that many concurrent fetches do not discard sockets.
    The client never retries; callers treat any failure as fatal.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        pool_size: int = 6,
    ) -> None:
        """Initialise the client with optional authentication and transport.

        Parameters
        ----------
        token : str | None, optional
            Bearer token sent with every request when provided. Without it
            requests are anonymous and subject to lower rate limits.
        session : requests.Session, optional
            Preconfigured session to reuse. Defaults to a new session with a
            connection pool of ``pool_size``.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``30.0``.
        pool_size : int, optional
            Connection pool size for the default session.
        """
        self.timeout = timeout
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session
        self._auth_headers: dict[str, str] = {}
        if token:
            self._auth_headers["Authorization"] = f"Bearer {token}"
        self._listing_headers = {
            "Accept": GITHUB_ACCEPT_HEADER,
            "User-Agent": USER_AGENT,
            **self._auth_headers,
        }

    def close(self) -> None:
        """Close the underlying session when this client created it."""
        if self._owns_session:
            self._session.close()

    def list_directory(self, url: str) -> list[dict[str, typ.Any]]:
        """Return the entries of the directory listing at ``url``.

        Raises
        ------
        ListingError
            When the request fails, returns a non-success status, or the body
            is not a JSON array of objects.
        """
        logger.info("Fetching contents from: %s", url)
        try:
            response = self._session.get(
                url, headers=self._listing_headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            msg = f"Failed to list '{url}': {exc}"
            raise ListingError(msg) from exc

        if response.status_code >= HTTPStatus.BAD_REQUEST:
            msg = (
                f"Listing '{url}' failed with status {response.status_code}: "
                f"{response.text[:200]}"
            )
            raise ListingError(msg)

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            msg = f"Listing '{url}' did not return valid JSON"
            raise ListingError(msg) from exc
        if not isinstance(payload, list):
            msg = f"Listing '{url}' did not return a directory (got {type(payload).__name__})"
            raise ListingError(msg)
        if not all(isinstance(item, dict) for item in payload):
            msg = f"Listing '{url}' contains entries that are not objects"
            raise ListingError(msg)

        logger.info("Found %d items", len(payload))
        return payload

    def fetch_text(self, url: str) -> str:
        """Download the body at ``url`` as text.

        Raises
        ------
        FetchError
            When the request fails or returns a non-success status.
        """
        try:
            response = self._session.get(
                url, headers=self._auth_headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            msg = f"Failed to fetch '{url}': {exc}"
            raise FetchError(msg) from exc

        if response.status_code >= HTTPStatus.BAD_REQUEST:
            msg = f"Fetching '{url}' failed with status {response.status_code}"
            raise FetchError(msg)
        return response.text


def discover_documents(
    client: GitHubContentsClient,
    root_url: str,
    *,
    suffixes: tuple[str, ...] = DOC_SUFFIXES,
) -> list[DocumentRef]:
    """Recursively collect every documentation file below ``root_url``.

    Parameters
    ----------
    client : GitHubContentsClient
        Client used for listing calls.
    root_url : str
        Listing endpoint of the root directory.
    suffixes : tuple[str, ...], optional
        File name endings treated as documentation.

    Returns
    -------
    list[DocumentRef]
        Documents in depth-first listing order.

    Raises
    ------
    ListingError
        When any listing call in the tree fails; no partial result is
        returned.
    """
    refs: list[DocumentRef] = []
    for entry in client.list_directory(root_url):
        name = str(entry.get("name") or "")
        kind = entry.get("type")
        if kind == "dir":
            logger.info("Found directory: %s", name)
            refs.extend(
                discover_documents(
                    client, _child_listing_url(root_url, entry), suffixes=suffixes
                )
            )
        elif kind == "file" and name.endswith(suffixes) and entry.get("download_url"):
            path = str(entry.get("path") or name)
            logger.info("Found markdown file: %s", path)
            refs.append(
                DocumentRef(
                    name=name, path=path, content_url=str(entry["download_url"])
                )
            )
        else:
            logger.debug("Skipping %s entry: %s", kind, name)
    return refs


def _child_listing_url(parent_url: str, entry: typ.Mapping[str, typ.Any]) -> str:
    """Return the listing URL of a directory entry."""
    url = entry.get("url")
    if url:
        return str(url)
    return f"{parent_url.rstrip('/')}/{entry['name']}"


__all__ = ["DocumentRef", "GitHubContentsClient", "discover_documents"]
