# =============================================================================
# core/guide_cache.py  —  Deployment Guide Cache (24h, fetch-then-default)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Serves the platform's deployment guide.  The guide lives at a remote URL
#   and changes rarely, so we keep a copy on disk and only go back to the
#   network once the copy is 24 hours old.
#
# HOW get_guide() DECIDES (in order):
#   1. Read <cache_dir>/deployment_guide_cache.json.  Missing or unreadable
#      file, bad JSON, missing/malformed field → cache miss.
#   2. Fresh record (now - cached_at < 24h)      → return it, no network.
#   3. Otherwise GET the remote guide once.
#        2xx       → new "remote" record
#        anything else (non-2xx, timeout, refused) → new "default" record
#                    built from the bundled DEFAULT_DEPLOYMENT_GUIDE
#   4. Write the new record (one write).  A failed write is reported and
#      the record is returned anyway.
#
# THE "NEVER FAIL THE CALLER" RULE:
#   get_guide() does not raise.  Every failure above degrades to some
#   content; the only visible difference is the record's source tag.
#   Swallowed failures are NOT silent: each one goes to the on_error
#   callback (default: a WARNING on this module's logger), which is also
#   how the tests observe them.
#
# CONCURRENCY:
#   Two servers sharing a cache dir may both refresh and both write.  Last
#   write wins; both wrote the same logical content, so no lock.
# =============================================================================

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

import httpx

from core.config import DEFAULT_GUIDE_URL, DEFAULT_HTTP_TIMEOUT
from core.models import CacheRecord, GuideSource

logger = logging.getLogger(__name__)

CACHE_FILENAME = "deployment_guide_cache.json"
FRESHNESS_WINDOW = timedelta(hours=24)

ErrorCallback = Callable[[str, Exception], None]


def default_deployment_guide(service_type: str = "fastapi") -> str:
    """Bundled guide used when the remote one cannot be fetched."""
    return f"""# {service_type.upper()} Service Deployment Guide

## Prerequisites
- Public GitHub repository
- Listen on PORT environment variable
- Include dependency files (requirements.txt/package.json)

## Deployment Steps
1. Prepare a Dockerfile
2. Configure environment variables
3. Set AI_BUILDER_TOKEN
4. Deploy to target platform

## Authentication
- Use Bearer Token authentication
- Read AI_BUILDER_TOKEN from environment variables
- Include token in Authorization header

## Environment Example
```bash
AI_BUILDER_TOKEN=your_token_here
DEPLOYMENT_TARGET=production
PORT=8000
```

## Code Example
```python
import os

token = os.getenv("AI_BUILDER_TOKEN")
headers = {{"Authorization": f"Bearer {{token}}"}}
```"""


DEFAULT_DEPLOYMENT_GUIDE = default_deployment_guide()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _log_failure(stage: str, exc: Exception) -> None:
    logger.warning("Deployment guide cache %s failed: %s", stage, exc)


class GuideCache:
    """File-backed cache for the remote deployment guide.

    Args:
        cache_dir: Directory that holds the cache file.  Created on first
            write if missing.
        url: Remote guide URL.
        timeout: Seconds allowed for the network fetch.
        http_client: Optional ``httpx.Client`` to fetch with.  When omitted,
            a short-lived client is opened per fetch.
        clock: Returns the current time as an aware datetime.
        on_error: Called as ``on_error(stage, exc)`` for every failure that
            is absorbed; ``stage`` is ``"read"``, ``"fetch"`` or ``"write"``.
    """

    def __init__(
        self,
        cache_dir: Path,
        url: str = DEFAULT_GUIDE_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
        clock: Callable[[], datetime] = _utc_now,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.cache_dir = Path(cache_dir)
        self.url = url
        self.timeout = timeout
        self._http_client = http_client
        self._clock = clock
        self._on_error = on_error or _log_failure

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / CACHE_FILENAME

    def get_guide(self) -> CacheRecord:
        """Return the deployment guide, refreshing it at most once per 24h."""
        now = self._clock()

        cached = self._read()
        if cached is not None and self.is_fresh(cached, now):
            logger.debug("Serving cached deployment guide from %s", cached.cached_at.isoformat())
            return cached

        body = self._fetch()
        if body is not None:
            record = CacheRecord(content=body, cached_at=now, source=GuideSource.REMOTE)
        else:
            record = CacheRecord(
                content=DEFAULT_DEPLOYMENT_GUIDE, cached_at=now, source=GuideSource.DEFAULT
            )

        self._write(record)
        return record

    @staticmethod
    def is_fresh(record: CacheRecord, now: datetime) -> bool:
        return now - record.cached_at < FRESHNESS_WINDOW

    # -------------------------------------------------------------------------
    # The three I/O steps.  Each one reports its own failure and returns a
    # neutral value so get_guide() stays a straight line.
    # -------------------------------------------------------------------------
    def _read(self) -> Optional[CacheRecord]:
        try:
            raw = self.cache_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            self._on_error("read", e)
            return None

        try:
            return CacheRecord.from_dict(json.loads(raw))
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and bad enum values are ValueErrors; deep nesting recurses
            self._on_error("read", e)
            return None

    def _fetch(self) -> Optional[str]:
        try:
            if self._http_client is not None:
                response = self._http_client.get(self.url, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    response = client.get(self.url)
        except httpx.HTTPError as e:
            self._on_error("fetch", e)
            return None

        if not response.is_success:
            self._on_error(
                "fetch", httpx.HTTPStatusError(
                    f"HTTP {response.status_code} from {self.url}",
                    request=response.request,
                    response=response,
                ),
            )
            return None
        return response.text

    def _write(self, record: CacheRecord) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache_path.write_text(json.dumps(record.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            self._on_error("write", e)
