# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of everything the tools hand back to
# the agent.  Only CacheRecord is ever persisted; the others exist so tool
# contracts read as "returns a TokenReport", not "returns some dict".
#
# DESIGN PRINCIPLE, "No Phantom Fields":
#   If a field exists in a model, the agent *will* reason about it.
#   If the agent doesn't need a field, it shouldn't be in the model.
# =============================================================================

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class GuideSource(str, Enum):
    """Where a deployment guide body came from."""

    REMOTE = "remote"      # fetched over the network
    DEFAULT = "default"    # bundled fallback text


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a trailing ``Z`` and naive values (taken as UTC).  Raises
    ``ValueError`` for anything else.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"invalid timestamp: {raw!r}")
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# -----------------------------------------------------------------------------
# CacheRecord: the one persisted entity
# -----------------------------------------------------------------------------
# Written whole, read whole, never patched in place.  A refresh builds a new
# record and overwrites the file.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CacheRecord:
    """A deployment guide body plus when and where it was obtained."""

    content: str
    cached_at: datetime               # aware, UTC
    source: GuideSource

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "cached_at": self.cached_at.isoformat(),
            "source": self.source.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CacheRecord":
        """Rebuild a record from its JSON form.

        Raises ``ValueError`` when any field is missing or malformed; the
        caller decides whether that is fatal.
        """
        if not isinstance(data, dict):
            raise ValueError("cache record must be a JSON object")
        content = data.get("content")
        if not isinstance(content, str):
            raise ValueError("cache record has no text content")
        return cls(
            content=content,
            cached_at=parse_timestamp(data.get("cached_at")),
            source=GuideSource(data.get("source")),
        )


@dataclass
class TokenReport:
    """What get_auth_token tells the agent about the configured token."""

    available: bool
    token: str                        # masked unless explicitly requested
    masked: bool
    note: str


@dataclass
class EnvFileResult:
    """Outcome of create_env_file."""

    written: bool
    path: str
    reason: Optional[str] = None      # set only when written is False
