"""HTTP fetcher for release metadata, archives and checksum files.

Built on a ``requests.Session`` that callers may inject (tests pass a fake).
Every failure surfaces as ``DownloadFailed`` carrying the URL and, when the
server answered at all, its HTTP status, so callers can tell a missing
release (404) from a network problem. There are no retries.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import requests

from assay_installer import __version__
from assay_installer.errors import DownloadFailed

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
USER_AGENT = f"assay-installer/{__version__}"


class Fetcher:
    """Blocking GET helper with a uniform failure contract.

    Parameters
    ----------
    session:
        A ``requests.Session`` (or compatible object). A new one is created
        if not provided.
    timeout:
        Connect/read timeout in seconds for every request.
    headers:
        Headers sent with every request, on top of the User-Agent.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout
        self._headers = {"User-Agent": USER_AGENT, **dict(headers or {})}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def download(self, url: str, dest: Path) -> Path:
        """Stream *url* into *dest* and return *dest*.

        A partially written file is removed before ``DownloadFailed`` is
        raised.
        """
        dest = Path(dest)
        response = self._get(url, stream=True)
        logger.debug("GET %s -> %s (streaming to %s)", url, response.status_code, dest)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            with dest.open("wb") as fh:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
        except requests.RequestException as exc:
            dest.unlink(missing_ok=True)
            raise DownloadFailed(url, None, reason=type(exc).__name__) from exc
        except OSError as exc:
            dest.unlink(missing_ok=True)
            raise DownloadFailed(url, None, reason=f"cannot write {dest}: {exc}") from exc
        finally:
            response.close()
        return dest

    def get_json(self, url: str, *, headers: Mapping[str, str] | None = None) -> Any:
        """GET *url* and decode the body as JSON."""
        response = self._get(url, stream=False, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            raise DownloadFailed(url, response.status_code, reason="invalid JSON body") from exc
        finally:
            response.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get(
        self,
        url: str,
        *,
        stream: bool,
        headers: Mapping[str, str] | None = None,
    ) -> requests.Response:
        merged = {**self._headers, **dict(headers or {})}
        try:
            response = self._session.get(
                url, headers=merged, stream=stream, timeout=self._timeout
            )
        except requests.RequestException as exc:
            logger.debug("GET %s failed: %s", url, exc)
            raise DownloadFailed(url, None, reason=type(exc).__name__) from exc

        if not 200 <= response.status_code < 300:
            logger.debug("GET %s -> HTTP %s", url, response.status_code)
            response.close()
            raise DownloadFailed(url, response.status_code)
        return response
