"""Background pinger that keeps a sleeping host awake."""

from __future__ import annotations

import logging
import threading

import requests

logger = logging.getLogger(__name__)

KEEPALIVE_PATH = "/api/keep-alive"


class KeepAlivePinger:
    """Periodically GET the keep-alive endpoint of a deployed instance."""

    def __init__(
        self,
        *,
        base_url: str,
        interval_seconds: float,
        timeout_seconds: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        normalized = base_url.rstrip("/")
        if not normalized:
            raise ValueError("base_url is required")
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._url = f"{normalized}{KEEPALIVE_PATH}"
        self._interval_seconds = interval_seconds
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def url(self) -> str:
        return self._url

    def ping(self) -> bool:
        """Send one ping; failures are logged and reported as ``False``."""
        try:
            response = self._session.get(self._url, timeout=self._timeout_seconds)
            response.raise_for_status()
        except requests.HTTPError as exc:
            logger.warning("Keep-alive ping to %s failed with status %s", self._url, exc.response.status_code)
            return False
        except requests.RequestException as exc:
            logger.warning("Keep-alive ping to %s failed: %s", self._url, exc)
            return False
        logger.info("Keep-alive ping to %s succeeded", self._url)
        return True

    def run(self) -> None:
        """Ping immediately, then once per interval until stopped."""
        self.ping()
        while not self._stop.wait(self._interval_seconds):
            self.ping()

    def start(self) -> None:
        if self._thread is not None:
            return
        logger.info("Starting keep-alive for %s every %ss", self._url, self._interval_seconds)
        self._thread = threading.Thread(target=self.run, name="keep-alive", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self._timeout_seconds)
            self._thread = None
        self._session.close()
