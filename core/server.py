"""
Shared FastMCP server instance.

Tool modules register themselves on `server` at import time via `@server.tool()`.
"""

import logging

from fastmcp import FastMCP

logger = logging.getLogger(__name__)

SERVER_NAME = "gdocs-markdown"

server = FastMCP(name=SERVER_NAME)
