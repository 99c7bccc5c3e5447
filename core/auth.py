# =============================================================================
# core/auth.py  —  Token Model, Token Reporting, .env Writing
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Everything the agent needs to get AI_BUILDER_TOKEN into a project:
#     - explain_authentication_model(): the "one token everywhere" story
#     - describe_token():  is a token configured, and what is it (masked)
#     - write_env_file():  drop AI_BUILDER_TOKEN=... into <dir>/.env
#
# MASKING:
#   Tokens are masked unless the caller explicitly asks otherwise.  The
#   first and last four characters survive so a human can tell two tokens
#   apart.  Short tokens (<= 8 chars) are masked completely: keeping 4 + 4
#   of them would reveal the whole thing.
#
# NOTHING HERE LOGS A TOKEN.
# =============================================================================

from pathlib import Path

from core.config import TOKEN_ENV_VAR
from core.errors import EnvFileError, TokenNotConfiguredError
from core.models import EnvFileResult, TokenReport

_VISIBLE_CHARS = 4


def explain_authentication_model() -> dict:
    """Static explanation of how AI_BUILDER_TOKEN is used."""
    return {
        "authentication_model": {
            "token_type": TOKEN_ENV_VAR,
            "usage_scenarios": ["deployment", "development", "api_calls"],
            "shared_principle": "Use the same token for both deployment and development",
            "best_practices": [
                ".env file management",
                "Do not hardcode tokens",
                "Add .env to .gitignore",
                "Use different tokens per environment",
            ],
        },
        "environment_setup": {
            "example_env_content": f"{TOKEN_ENV_VAR}=your_token_here\nDEPLOYMENT_TARGET=development",
            "loading_method": "Load environment variables using dotenv or similar",
            "usage_example": (
                "import os\n"
                "from dotenv import load_dotenv\n\n"
                "load_dotenv()\n\n"
                f'token = os.getenv("{TOKEN_ENV_VAR}")\n'
                'headers = {"Authorization": f"Bearer {token}"}'
            ),
        },
        "deployment_note": (
            f"Platforms may inject {TOKEN_ENV_VAR} at deploy time; "
            "set it manually during development"
        ),
    }


def mask_token(token: str) -> str:
    if len(token) <= 2 * _VISIBLE_CHARS:
        return "*" * len(token)
    hidden = len(token) - 2 * _VISIBLE_CHARS
    return f"{token[:_VISIBLE_CHARS]}{'*' * hidden}{token[-_VISIBLE_CHARS:]}"


def describe_token(token: str, masked: bool = True) -> TokenReport:
    """Report whether a token is configured, masking it by default."""
    available = bool(token)
    if available:
        note = f"Use this token to configure your .env as {TOKEN_ENV_VAR}"
    else:
        note = f"{TOKEN_ENV_VAR} is not set in server environment"
    return TokenReport(
        available=available,
        token=mask_token(token) if masked and available else token,
        masked=masked,
        note=note,
    )


def write_env_file(target_dir: str, token: str, overwrite: bool = False) -> EnvFileResult:
    """Write ``AI_BUILDER_TOKEN=<token>`` to ``<target_dir>/.env``.

    An existing .env is left alone unless ``overwrite`` is true; in that
    case the result says ``written=False`` and why.

    Raises:
        EnvFileError: ``target_dir`` is empty, or the directory/file could
            not be created.
        TokenNotConfiguredError: ``token`` is empty.
    """
    if not isinstance(target_dir, str) or not target_dir.strip():
        raise EnvFileError("target_dir is required")
    if not token:
        raise TokenNotConfiguredError()

    directory = Path(target_dir).expanduser()
    env_path = directory / ".env"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        if env_path.exists() and not overwrite:
            return EnvFileResult(
                written=False,
                path=str(env_path),
                reason="File already exists; set overwrite=true to replace",
            )
        env_path.write_text(f"{TOKEN_ENV_VAR}={token}\n", encoding="utf-8")
    except OSError as e:
        raise EnvFileError(f"Failed to write .env: {e}") from e

    return EnvFileResult(written=True, path=str(env_path))
