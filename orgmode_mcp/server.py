"""
Org-mode MCP Server

Exposes org files as MCP resources and prompts. The server is built around
an injected OrgKnowledgeBase, which re-reads the configured files on every
request.
"""

from typing import Any

import structlog
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    ErrorData,
    GetPromptResult,
    Prompt,
    Resource,
    TextContent,
    Tool,
)
from pydantic import AnyUrl

from . import tools
from .config import settings
from .knowledge_base import OrgKnowledgeBase
from .prompts import get_prompt, list_prompts
from .resources import address_from_uri
from .utils import (
    DocumentLoadError,
    InvalidAddressError,
    PromptError,
    ResourceNotFoundError,
)

logger = structlog.get_logger(__name__)


def to_mcp_error(error: Exception, context: str) -> McpError:
    """Translate an org-mode error into an MCP protocol error."""
    if isinstance(error, McpError):
        return error
    if isinstance(error, InvalidAddressError):
        return McpError(ErrorData(code=INVALID_REQUEST, message=f"Unknown resource: {error.address}"))
    if isinstance(error, (ResourceNotFoundError, PromptError)):
        return McpError(ErrorData(code=INVALID_PARAMS, message=str(error)))
    if isinstance(error, DocumentLoadError):
        logger.error("document_load_failed", path=error.path, error=error.reason)
    return McpError(ErrorData(code=INTERNAL_ERROR, message=f"{context} failed: {error}"))


def create_server(
    knowledge_base: OrgKnowledgeBase,
    name: str | None = None,
    version: str | None = None,
) -> Server:
    """Create an MCP server exposing the given knowledge base."""
    server = Server(name or settings.server_name, version=version or settings.server_version)

    # ============== Resources ==============

    @server.list_resources()
    async def handle_list_resources() -> list[Resource]:
        """List available resources."""
        try:
            descriptors = await knowledge_base.list_resources()
        except Exception as e:
            raise to_mcp_error(e, "Resource listing") from e

        return [
            Resource(
                uri=descriptor.uri,
                name=descriptor.display_name,
                description=descriptor.description,
                mimeType=descriptor.mime_type,
            )
            for descriptor in descriptors
        ]

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        """Read a resource."""
        try:
            contents = await knowledge_base.read_resource(address_from_uri(str(uri)))
        except Exception as e:
            raise to_mcp_error(e, "Resource read") from e

        return [ReadResourceContents(content=contents.text, mime_type=contents.mime_type)]

    # ============== Prompts ==============

    @server.list_prompts()
    async def handle_list_prompts() -> list[Prompt]:
        """List available prompts."""
        try:
            categories = await knowledge_base.categories()
        except Exception as e:
            raise to_mcp_error(e, "Prompt listing") from e
        return list_prompts(categories)

    @server.get_prompt()
    async def handle_get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
        """Build a prompt."""
        try:
            return get_prompt(name, arguments)
        except Exception as e:
            raise to_mcp_error(e, "Prompt generation") from e

    # ============== Tools ==============

    @server.list_tools()
    async def handle_list_tools() -> list[Tool]:
        return await tools.list_tools()

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        return await tools.call_tool(name, arguments)

    return server
