# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the AI Builders coach.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any orchestration
#   framework.  The only third-party import is httpx, for the two outbound
#   GETs (deployment guide, OpenAPI spec).
#
# Why?  The knowledge the coach hands out (guide, spec, token handling)
# should be testable without an MCP client or an LLM.  The tool server is
# just the wiring; the core is the engine.
# =============================================================================
