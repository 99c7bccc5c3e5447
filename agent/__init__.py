# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK coach agent, a reference consumer
# of the MCP tools in tools/.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer decides WHICH tool to call and HOW to explain the
#   result.  It has no platform knowledge of its own:
#     - the guide, spec and token handling live in core/
#     - the MCP wiring lives in tools/
#
# Any other MCP client (a desktop assistant, an IDE) can use the same
# server without this package.
# =============================================================================
