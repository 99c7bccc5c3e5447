# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP clients and core/.
#   mcp_server.py:
#     1. Reads Settings from the environment on every call
#     2. Calls a core/ function
#     3. Converts dataclasses → dicts and CoachError → MCP tool errors
#     4. Logs each call to stderr
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT fetch, cache, or mask anything themselves (core/ does)
#   - They do NOT know which agent is calling them
#
# TOOL CONTRACT QUALITY:
#   The docstring of each tool is what the calling LLM reads to decide WHEN
#   to use it, so each one says when to call it and what comes back.
# =============================================================================
