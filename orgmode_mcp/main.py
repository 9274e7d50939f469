"""
Main entry point for the Org-mode MCP Server.

This module provides the main() function and server initialization.
"""

import asyncio
import sys

from mcp.server.stdio import stdio_server

from .config import settings, validate_and_load_config
from .knowledge_base import OrgKnowledgeBase
from .logging import configure_logging, get_logger
from .server import create_server
from .utils import ConfigError


def main():
    """Main entry point."""
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    try:
        org_file_paths = validate_and_load_config(settings.config_path)
    except ConfigError as e:
        logger.error("config_load_failed", error=str(e))
        sys.exit(1)

    server = create_server(OrgKnowledgeBase(org_file_paths))
    logger.info("server_starting", name=settings.server_name, files=len(org_file_paths))

    async def run():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("server_stopped")


if __name__ == "__main__":
    main()
