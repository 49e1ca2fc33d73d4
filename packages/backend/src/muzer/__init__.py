"""Muzer Spaces: session-authenticated spaces and app tokens.

The API server (FastAPI) that owns the spaces collection and issues
app tokens, plus the client-side list controller and CLI that keep a
local view of that collection in sync.
"""

__version__ = "0.1.0"
