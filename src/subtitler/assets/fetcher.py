"""HTTP transport for asset downloads.

The resolver only depends on the Fetcher protocol; HttpFetcher is the
production implementation built on httpx.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import httpx

from subtitler.jobs.exceptions import FetchError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int | None], None]

# Bytes read from the response per write
CHUNK_SIZE = 1024 * 1024


class Fetcher(Protocol):
    """Fetch the bytes of a URL to a local path, reporting progress."""

    def fetch(self, url: str, destination: Path, progress: ProgressCallback) -> None:
        """Stream url into destination.

        Args:
            url: Remote URL.
            destination: File to create. Must not exist yet.
            progress: Called with (bytes_written, total_or_None); the first
                call carries 0 bytes and the declared total.

        Raises:
            FetchError: If the transfer fails.
        """
        ...

    def close(self) -> None:
        """Release any connections held by the fetcher."""
        ...


def partial_path(destination: Path) -> Path:
    """Path a download is written to before it is complete."""
    return destination.with_name(destination.name + ".part")


class HttpFetcher:
    """Fetcher backed by an httpx client.

    The body is written to ``<destination>.part`` and renamed onto the
    destination once complete, so an interrupted transfer never leaves a
    file that looks like a finished asset.
    """

    def __init__(
        self,
        timeout: float | None = 60.0,
        user_agent: str = "local-subtitler",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Per-operation network timeout in seconds; None disables it.
            user_agent: User-Agent header sent with every request.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> HttpFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(self, url: str, destination: Path, progress: ProgressCallback) -> None:
        """Stream url into destination. See Fetcher.fetch."""
        client = self._get_client()
        part = partial_path(destination)
        logger.debug("Fetching %s", url, extra={"destination": str(destination)})
        try:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                total = _declared_length(response)
                progress(0, total)
                done = 0
                with part.open("wb") as out:
                    for chunk in response.iter_bytes(CHUNK_SIZE):
                        out.write(chunk)
                        done += len(chunk)
                        progress(done, total)
            part.replace(destination)
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e
        except OSError as e:
            raise FetchError(url, f"cannot write {destination}: {e}") from e
        finally:
            part.unlink(missing_ok=True)


def _declared_length(response: httpx.Response) -> int | None:
    """Content-Length of a response, or None when absent or invalid."""
    value = response.headers.get("Content-Length")
    if value is None:
        return None
    try:
        length = int(value)
    except ValueError:
        return None
    return length if length >= 0 else None
