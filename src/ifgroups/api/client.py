"""REST client for the storage backend's interface group endpoints.

Usage:
    client = ApiClient("https://backend.example.com/api/v2", token="...")
    for group in client.list_all():
        print(group)

Requests are plain synchronous GETs. Passing a CancelToken lets the
caller abandon a request: the call raises RequestCancelledError as soon
as the token fires, and any response that arrives afterwards is
discarded.

Cancellation abandons the request, it does not interrupt it: the worker
thread keeps its socket open until the response arrives or the socket
timeout expires. That timeout is capped by the token's deadline, so
only tokens cancelled explicitly (or created without a deadline) can
leave a worker running for up to the client timeout. Interpreter exit
waits for such workers.
"""

from __future__ import annotations

import json
import sys
import urllib.error
import urllib.request
import uuid
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Protocol

from ifgroups.api.cancel import CancelToken
from ifgroups.errors import TransportError
from ifgroups.models.interface_group import InterfaceGroup

# How often a waiting caller re-checks its cancel token.
_CANCEL_POLL_INTERVAL = 0.05

# Worker threads shared by the cancellable requests of one client.
_MAX_WORKERS = 4


class GroupSource(Protocol):
    """Where interface groups come from.

    ApiClient is the production implementation; tests substitute fakes.
    """

    def list_all(self, cancel: CancelToken | None = None) -> list[InterfaceGroup]:
        """Return every interface group known to the backend."""
        ...

    def get_by_uid(
        self, uid: uuid.UUID, cancel: CancelToken | None = None,
    ) -> InterfaceGroup:
        """Return a single interface group by its uid."""
        ...


class ApiClient:
    """HTTP/JSON client for the interfaceGroups collection.

    Args:
        base_url: API root, e.g. "https://backend.example.com/api/v2".
        token: Bearer token sent in the Authorization header (optional).
        timeout: Per-request socket timeout in seconds.
        verbose: Print each request to stderr.

    Cancellable requests run on a thread pool owned by the client; call
    close() (or use the client as a context manager) to release it.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 30.0,
        verbose: bool = False,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.verbose = verbose
        self._pool: ThreadPoolExecutor | None = None

    def _get_pool(self) -> ThreadPoolExecutor:
        """Create or return the shared worker pool."""
        if self._pool is None:
            self._pool = ThreadPoolExecutor(
                max_workers=_MAX_WORKERS, thread_name_prefix="ifgroups-api",
            )
        return self._pool

    def close(self) -> None:
        """Shut down the worker pool without waiting for abandoned requests."""
        if self._pool is not None:
            self._pool.shutdown(wait=False)
            self._pool = None

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    def list_all(self, cancel: CancelToken | None = None) -> list[InterfaceGroup]:
        payload = self._get(InterfaceGroup.BASE_PATH, cancel)
        if not isinstance(payload, list):
            raise TransportError(
                f"expected a list from {InterfaceGroup.BASE_PATH}, "
                f"got {type(payload).__name__}"
            )
        return [_decode_group(item) for item in payload]

    def get_by_uid(
        self, uid: uuid.UUID, cancel: CancelToken | None = None,
    ) -> InterfaceGroup:
        path = f"{InterfaceGroup.BASE_PATH}/{uid}"
        payload = self._get(path, cancel)
        if not isinstance(payload, dict):
            raise TransportError(
                f"expected an object from {path}, got {type(payload).__name__}"
            )
        return _decode_group(payload)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str, cancel: CancelToken | None):
        """GET path and return the decoded JSON body.

        Unwraps the {"data": ...} envelope used by the v2 API.
        """
        if cancel is None:
            return self._fetch_json(path, self.timeout)

        cancel.raise_if_cancelled()
        timeout = self.timeout
        remaining = cancel.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        future = self._get_pool().submit(self._fetch_json, path, timeout)
        while True:
            done, _ = wait([future], timeout=_CANCEL_POLL_INTERVAL)
            if done:
                break
            if cancel.cancelled:
                future.cancel()
                cancel.raise_if_cancelled()
        # A response that raced with cancellation is dropped.
        cancel.raise_if_cancelled()
        return future.result()

    def _fetch_json(self, path: str, timeout: float):
        url = f"{self.base_url}/{path}"
        if self.verbose:
            print(f"GET {url}", file=sys.stderr)

        request = urllib.request.Request(url, headers=self._headers())
        try:
            with urllib.request.urlopen(request, timeout=timeout) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            raise TransportError(f"GET {url} failed: HTTP {e.code} {e.reason}") from e
        except (urllib.error.URLError, OSError) as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(f"GET {url} returned invalid JSON: {e}") from e

        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload


def _decode_group(item: object) -> InterfaceGroup:
    if not isinstance(item, dict):
        raise TransportError(f"malformed interface group record: {item!r}")
    try:
        return InterfaceGroup.from_dict(item)
    except (KeyError, ValueError) as e:
        raise TransportError(f"malformed interface group record: {e}") from e
