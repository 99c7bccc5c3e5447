# =============================================================================
# core/config.py  —  Environment-driven Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Collects every knob the server reads from the environment into one
#   frozen dataclass.  Nothing else in core/ touches os.environ.
#
# WHERE VALUES COME FROM:
#   The process environment, optionally primed from a .env file by
#   python-dotenv (load_dotenv() runs in tools/mcp_server.py and main.py).
#
# WHY RE-READ ON EVERY TOOL CALL?
#   Settings.from_env() is cheap, and reading it per call means a token
#   added to the environment shows up without restarting the server.  It
#   also lets tests swap values with monkeypatch.setenv().
# =============================================================================

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CACHE_DIR = Path.home() / ".ai-builders-mcp-cache"
DEFAULT_GUIDE_URL = "https://www.ai-builders.com/resources/students/deployment-prompt.md"
DEFAULT_OPENAPI_URL = "https://www.ai-builders.com/resources/students-backend/openapi.json"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_COACH_MODEL = "openrouter/openai/gpt-4o"

TOKEN_ENV_VAR = "AI_BUILDER_TOKEN"


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else DEFAULT_HTTP_TIMEOUT


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the coach server and agent."""

    token: str = ""
    cache_dir: Path = DEFAULT_CACHE_DIR
    guide_url: str = DEFAULT_GUIDE_URL
    openapi_url: str = DEFAULT_OPENAPI_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    coach_model: str = DEFAULT_COACH_MODEL

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build Settings from ``environ`` (defaults to ``os.environ``).

        Blank values count as unset, so ``AI_BUILDERS_CACHE_DIR=`` in a .env
        file does not point the cache at the current directory.
        """
        env = os.environ if environ is None else environ

        cache_dir = env.get("AI_BUILDERS_CACHE_DIR", "").strip()
        return cls(
            token=env.get(TOKEN_ENV_VAR, "").strip(),
            cache_dir=Path(cache_dir).expanduser() if cache_dir else DEFAULT_CACHE_DIR,
            guide_url=env.get("AI_BUILDERS_GUIDE_URL", "").strip() or DEFAULT_GUIDE_URL,
            openapi_url=env.get("AI_BUILDERS_OPENAPI_URL", "").strip() or DEFAULT_OPENAPI_URL,
            http_timeout=_parse_timeout(env.get("AI_BUILDERS_HTTP_TIMEOUT")),
            coach_model=env.get("COACH_MODEL", "").strip() or DEFAULT_COACH_MODEL,
        )
