# =============================================================================
# core/errors.py  —  Domain Exceptions
# =============================================================================
#
# Every error a core/ function raises on purpose derives from CoachError.
# The tools/ layer catches CoachError and turns it into an MCP tool error
# with a JSON {error, suggestion} payload.  Anything else is a bug and is
# left for FastMCP to report.
#
# The Guide Cache raises NONE of these: its failures degrade to a fallback
# record instead (see core/guide_cache.py).
# =============================================================================


class CoachError(Exception):
    """Base class for expected, user-reportable failures."""

    suggestion = "Check the server configuration and retry."


class SpecFetchError(CoachError):
    """The OpenAPI specification could not be retrieved or decoded."""

    suggestion = "Check network connection or retry later"


class TokenNotConfiguredError(CoachError):
    """AI_BUILDER_TOKEN is not set in the server environment."""

    suggestion = "Set AI_BUILDER_TOKEN in the server environment (or its .env file) and restart."

    def __init__(self, message: str = "AI_BUILDER_TOKEN is not set in server environment"):
        super().__init__(message)


class EnvFileError(CoachError):
    """Writing a .env file failed (bad target or filesystem error)."""

    suggestion = "Check that target_dir is a writable directory path."
