"""MCP server instance shared by every tool module."""

from fastmcp import FastMCP

from core.config import NOTES_SYNC_APP_NAME

server = FastMCP(NOTES_SYNC_APP_NAME)
