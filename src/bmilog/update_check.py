"""
Background check for a newer application build.

High level
----------
UpdateChecker periodically fetches a build manifest URL and compares its
fingerprint (the ETag header, else a SHA-256 of the body) with the one seen
on the first successful probe. When the fingerprint changes, the host's
`on_update` callback is invoked so it can reload itself.

Key behaviors
-------------
- Runs on its own daemon thread and shares no state with the session,
  the history or the engine.
- Every probe is best-effort: network errors, non-200 answers and being
  offline are logged at debug level and otherwise ignored.
- A non-positive period disables scheduling; check_once() still works.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from typing import Callable, Optional

import requests

from . import config

LOGGER = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class UpdateChecker:
    def __init__(
        self,
        url: str,
        on_update: Callable[[], None],
        period: float = config.UPDATE_PERIOD,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        known_fingerprint: Optional[str] = None,
    ):
        self.url = url
        self.on_update = on_update
        self.period = period
        self.timeout = timeout
        self._session = session
        self._fingerprint: Optional[str] = known_fingerprint
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.last_status_code: Optional[int] = None

    @property
    def fingerprint(self) -> Optional[str]:
        return self._fingerprint

    def _get(self) -> requests.Response:
        getter = self._session.get if self._session is not None else requests.get
        return getter(self.url, headers=NO_CACHE_HEADERS, timeout=self.timeout)

    @staticmethod
    def _fingerprint_of(resp: requests.Response) -> str:
        etag = resp.headers.get("ETag") if resp.headers else None
        if etag:
            return str(etag)
        return hashlib.sha256(resp.content or b"").hexdigest()

    def check_once(self) -> bool:
        """
        Probe the manifest once. Returns True when a newer build was detected
        (and `on_update` was called), False otherwise. Never raises.
        """
        try:
            resp = self._get()
        except requests.RequestException as e:
            self.last_status_code = None
            LOGGER.debug(f"Update probe of {self.url} failed: {e}")
            return False
        self.last_status_code = resp.status_code
        if resp.status_code != 200:
            LOGGER.debug(f"Update probe of {self.url} answered {resp.status_code}")
            return False

        fingerprint = self._fingerprint_of(resp)
        if self._fingerprint is None:
            self._fingerprint = fingerprint
            return False
        if fingerprint == self._fingerprint:
            return False

        self._fingerprint = fingerprint
        LOGGER.info(f"Newer build available at {self.url}")
        try:
            self.on_update()
        except Exception as e:
            # host callback failures must not kill the probe thread
            LOGGER.error(f"Update callback failed: {e}")
        return True

    def _run(self) -> None:
        self.check_once()
        while not self._stop.wait(self.period):
            self.check_once()

    def start(self) -> bool:
        """Start periodic probing; returns False if disabled or already running."""
        if self.period <= 0 or not self.url:
            return False
        if self._thread is not None and self._thread.is_alive():
            return False
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="bmilog-update-check", daemon=True)
        self._thread.start()
        return True

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.timeout)
            self._thread = None
