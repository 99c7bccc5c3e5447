# =============================================================================
# agent/coach_agent.py  —  Google ADK Agent Configuration (LLM via LiteLlm)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the coach agent: a Google ADK Agent whose tools are the five
#   MCP tools served by tools/mcp_server.py.
#
# HOW IT FITS TOGETHER:
#
#   ┌──────────────────────────────┐        stdio MCP        ┌──────────────────────┐
#   │  Google ADK Agent            │ ─────────────────────▶ │  FastMCP Server       │
#   │  prompt: agent/prompt.py     │                         │  (tools/mcp_server)   │
#   │  model:  LiteLlm(COACH_MODEL)│ ◀───────────────────── │  → core/ logic        │
#   └──────────────────────────────┘                         └──────────────────────┘
#
#   ADK starts the server as a subprocess, discovers its tools, and lets
#   the LLM call them.  The agent has no platform knowledge of its own.
#
# MODEL:
#   Any LiteLLM model string works (COACH_MODEL env var).  The default,
#   "openrouter/openai/gpt-4o", reads OPENROUTER_API_KEY from the
#   environment.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_coach_prompt
from core.config import Settings


def create_agent(settings: Settings | None = None) -> Agent:
    """Create the AI Builders coach agent.

    The MCP server runs as ``python -m tools.mcp_server`` from the project
    root, with the current interpreter, so the subprocess sees the same
    virtualenv (fastmcp, httpx, core/) as this process.  It inherits our
    environment, including AI_BUILDER_TOKEN.

    Returns:
        A configured Google ADK Agent instance.
    """
    settings = settings or Settings.from_env()

    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
            env=dict(os.environ),
        ),
    )

    agent = Agent(
        name="ai_builders_coach",
        model=LiteLlm(model=settings.coach_model),
        instruction=get_coach_prompt(),
        tools=[mcp_tools],
    )

    return agent
