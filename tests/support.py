"""In-memory HTTP doubles and listing builders shared by the test suite.

HTTP traffic is served from canned routes by :class:`FakeSession`, which
mimics the parts of ``requests.Session`` that ``GitHubContentsClient`` uses.
Routes map a URL to a :class:`FakeResponse` or to an exception to raise.
"""

from __future__ import annotations

import json
import threading
import time
import typing as typ

LISTING_ROOT = "https://api.example.test/repos/acme/site/contents/docs"
RAW_ROOT = "https://raw.example.test/acme/site/main/docs"


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(
        self,
        *,
        status_code: int = 200,
        payload: typ.Any = None,
        text: str | None = None,
        delay: float = 0.0,
    ) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)
        self.delay = delay

    def json(self) -> typ.Any:
        return json.loads(self.text)


class FakeSession:
    """Serve canned responses and record every request."""

    def __init__(self, routes: dict[str, FakeResponse | Exception]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, dict[str, str], float | None]] = []
        self.active = 0
        self.max_active = 0
        self.closed = False
        self._lock = threading.Lock()

    def mount(self, *_args: typ.Any, **_kwargs: typ.Any) -> None:
        return None

    def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> FakeResponse:
        with self._lock:
            self.calls.append((url, dict(headers or {}), timeout))
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            route = self.routes.get(url)
            if route is None:
                return FakeResponse(status_code=404, text="Not Found")
            if isinstance(route, Exception):
                raise route
            if route.delay:
                time.sleep(route.delay)
            return route
        finally:
            with self._lock:
                self.active -= 1

    def close(self) -> None:
        self.closed = True

    def urls(self) -> list[str]:
        return [url for url, _headers, _timeout in self.calls]


def entry(
    name: str,
    path: str,
    kind: str = "file",
    *,
    download_url: str | None = None,
    url: str | None = None,
) -> dict[str, typ.Any]:
    """Build one contents-API listing entry."""
    item: dict[str, typ.Any] = {
        "name": name,
        "path": path,
        "type": kind,
        "download_url": download_url,
    }
    if url is not None:
        item["url"] = url
    return item


def doc_entry(path: str) -> dict[str, typ.Any]:
    """Build a file entry whose download URL lives under ``RAW_ROOT``."""
    name = path.rsplit("/", 1)[-1]
    return entry(name, f"docs/{path}", download_url=f"{RAW_ROOT}/{path}")


def listing(entries: list[dict[str, typ.Any]]) -> FakeResponse:
    """Wrap entries into a JSON listing response."""
    return FakeResponse(payload=entries)


def guides_routes() -> dict[str, FakeResponse | Exception]:
    """Routes for a root containing ``guides/setup.md`` with a short body."""
    return {
        LISTING_ROOT: listing([entry("guides", "docs/guides", "dir")]),
        f"{LISTING_ROOT}/guides": listing([doc_entry("guides/setup.md")]),
        f"{RAW_ROOT}/guides/setup.md": FakeResponse(text="# Setup\nDo X."),
    }
