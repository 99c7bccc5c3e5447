# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines ALL MCP tools the coach exposes.  Each tool is a thin wrapper
#   around a core/ function. It reads settings, calls core, turns domain
#   errors into MCP tool errors, and logs the exchange.
#
# HOW IT WORKS (the flow):
#   1. An agent decides it needs platform knowledge (e.g., how to deploy)
#   2. It calls a tool by name via MCP (e.g., "get_deployment_guide")
#   3. FastMCP validates the arguments against the function signature and
#      routes the call to the decorated function below
#   4. The function calls core/ logic and returns a dict
#   5. The agent receives JSON it can quote or act on
#
# TOOL NAMING CONVENTIONS:
#   - get_* / explain_*  → Read-only retrieval (idempotent, safe to retry)
#   - create_*           → Writes a file; refuses to clobber unless asked
#
# ERRORS:
#   core/ raises CoachError subclasses.  We re-raise them as FastMCP
#   ToolError whose message is JSON {"error": ..., "suggestion": ...}, so
#   the client sees isError=true plus a hint it can follow.
#   get_deployment_guide never errors: the Guide Cache always has content.
#
# RUNNING THIS SERVER:
#   a) Standalone:           python -m tools.mcp_server
#   b) Installed script:     ai-builders-coach
#   c) From the coach agent: spawned over stdio by agent/coach_agent.py
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from core.api_spec import build_api_specification, fetch_openapi_spec
from core.auth import describe_token, explain_authentication_model, mask_token, write_env_file
from core.config import Settings
from core.errors import CoachError
from core.guide_cache import GuideCache

# Fills in variables the launcher didn't set; real environment values win.
load_dotenv()

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout IS the MCP transport.  A stray log line on
# stdout would corrupt the JSON-RPC stream and the client would drop us.
#
# Colors: CYAN requests, YELLOW status, GREEN responses, RED tool errors.
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict, logged: dict | None = None) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it.

    ``logged`` replaces ``result`` in the log line when the real result
    carries something that must not reach the logs (an unmasked token).
    """
    shown = result if logged is None else logged
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(shown, separators=(',', ':'))}{_RESET}")
    return result


def _fail(tool_name: str, error: CoachError) -> ToolError:
    """Build the ToolError for a domain failure and log it in RED."""
    payload = {"error": str(error), "suggestion": error.suggestion}
    logging.info(f"{_RED}  ✗ {tool_name} failed: {payload['error']}{_RESET}")
    return ToolError(json.dumps(payload))


def _guide_cache(settings: Settings) -> GuideCache:
    return GuideCache(
        cache_dir=settings.cache_dir,
        url=settings.guide_url,
        timeout=settings.http_timeout,
    )


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("ai-builders-coach")


# =============================================================================
# TOOL 1: get_api_specification
# =============================================================================
# The only tool that hits the network every time.  The spec is what the
# agent writes code against, so we'd rather fail loudly than serve a guess.
# =============================================================================
@mcp.tool()
def get_api_specification() -> dict:
    """Retrieve the AI Builders OpenAPI specification with endpoint details.

    WHEN TO CALL THIS: Before writing any code that calls the AI Builders
    API.  The result tells you the base URL, how to authenticate, and that
    the API is OpenAI-SDK compatible (with ready-to-adapt examples).

    Returns:
        A dict with:
          - openapi_spec: The full OpenAPI document
          - endpoint_info: base_url to use for every call
          - authentication: Bearer token header format and token source
          - sdk_compatibility: OpenAI SDK recommendation + Node/Python examples
          - mcp_recommendation: Which tools to call to set up .env
    """
    _log_request("get_api_specification")
    settings = Settings.from_env()

    try:
        spec = fetch_openapi_spec(settings.openapi_url, timeout=settings.http_timeout)
    except CoachError as e:
        raise _fail("get_api_specification", e) from e

    result = build_api_specification(spec)
    _log_status(f"base_url={result['endpoint_info']['base_url']}, "
                f"paths={len(spec.get('paths') or {})}")
    # The full spec can be large; log only the envelope.
    logged = {k: v for k, v in result.items() if k != "openapi_spec"}
    return _log_response("get_api_specification", result, logged=logged)


# =============================================================================
# TOOL 2: get_deployment_guide
# =============================================================================
# Served from the 24h Guide Cache.  `source` tells the agent whether it got
# the live guide ("remote") or the bundled one ("default").
# =============================================================================
@mcp.tool()
def get_deployment_guide(service_type: str = "fastapi") -> dict:
    """Get deployment guidance for a service on the AI Builders platform.

    WHEN TO CALL THIS: When the user wants to deploy, or before you write a
    Dockerfile / start command for their service.  The guide is cached for
    24 hours; if the live guide can't be fetched, a bundled default is
    returned instead (check the `source` field).

    Args:
        service_type: Service type (e.g., "fastapi", "express").

    Returns:
        A dict with:
          - deployment_guide: Markdown guide text
          - service_type: Echo of the requested service type
          - cached_at: When this copy of the guide was obtained (ISO-8601)
          - source: "remote" (live guide) or "default" (bundled fallback)
          - authentication_note: Reminder about AI_BUILDER_TOKEN
    """
    _log_request("get_deployment_guide", service_type=service_type)
    service_type = service_type or "fastapi"
    settings = Settings.from_env()

    record = _guide_cache(settings).get_guide()
    _log_status(f"source={record.source.value}, cached_at={record.cached_at.isoformat()}")

    result = {
        "deployment_guide": record.content,
        "service_type": service_type,
        "cached_at": record.cached_at.isoformat(),
        "source": record.source.value,
        "authentication_note": (
            "Both deployment and development require AI_BUILDER_TOKEN; "
            "manage it via a .env file"
        ),
    }
    logged = {k: v for k, v in result.items() if k != "deployment_guide"}
    return _log_response("get_deployment_guide", result, logged=logged)


# =============================================================================
# TOOL 3: explain_authentication_model
# =============================================================================
@mcp.tool(name="explain_authentication_model")
def explain_authentication() -> dict:
    """Explain the authentication model shared by deployment and development.

    WHEN TO CALL THIS: When the user asks how auth works, or before you
    wire AI_BUILDER_TOKEN into their project.

    Returns:
        A dict with:
          - authentication_model: Token type, usage scenarios, best practices
          - environment_setup: Example .env and python-dotenv usage
          - deployment_note: How the token reaches deployed services
    """
    _log_request("explain_authentication_model")
    return _log_response("explain_authentication_model", explain_authentication_model())


# =============================================================================
# TOOL 4: get_auth_token
# =============================================================================
# masked=False hands the raw token to the agent.  The LOG line stays masked
# either way.
# =============================================================================
@mcp.tool()
def get_auth_token(masked: bool = True) -> dict:
    """Return AI_BUILDER_TOKEN from the server environment (masked by default).

    WHEN TO CALL THIS: To check whether a token is configured before
    creating a .env file, or when the user needs to see which token is set.

    Args:
        masked: Return the masked token if true (default).  Only pass false
            when the user explicitly needs the full value.

    Returns:
        A dict with:
          - available: Whether a token is configured
          - token: The token (masked unless masked=false)
          - masked: Whether the token shown is masked
          - note: How to use it, or that it is missing
    """
    _log_request("get_auth_token", masked=masked)
    settings = Settings.from_env()

    report = describe_token(settings.token, masked=masked)
    result = asdict(report)
    logged = dict(result, token=mask_token(settings.token))
    return _log_response("get_auth_token", result, logged=logged)


# =============================================================================
# TOOL 5: create_env_file
# =============================================================================
# The only tool with a side effect.  It will not replace an existing .env
# unless overwrite=true, so a retried call is harmless.
# =============================================================================
@mcp.tool()
def create_env_file(target_dir: str, overwrite: bool = False) -> dict:
    """Create a .env file containing AI_BUILDER_TOKEN in the target directory.

    WHEN TO CALL THIS: After get_auth_token shows a token is available and
    the user wants their project configured.  Remind the user to add .env
    to .gitignore.

    Args:
        target_dir: Directory to write the .env file into (created if needed).
        overwrite: Replace an existing .env file (default false).

    Returns:
        A dict with:
          - written: Whether the file was written
          - path: Full path of the .env file
          - reason: Why nothing was written (only when written is false)
    """
    _log_request("create_env_file", target_dir=target_dir, overwrite=overwrite)
    settings = Settings.from_env()

    try:
        outcome = write_env_file(target_dir, settings.token, overwrite=overwrite)
    except CoachError as e:
        raise _fail("create_env_file", e) from e

    result = asdict(outcome)
    if result["reason"] is None:
        del result["reason"]
    return _log_response("create_env_file", result)


def main() -> None:
    """Run the server over stdio."""
    mcp.run()


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    main()
