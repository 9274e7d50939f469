"""
Knowledge base context for the Org-mode MCP Server.

Carries the configured org file paths. Every call reloads the files from
disk, so results always reflect the files as they are at call time.
"""

from collections.abc import Sequence

import structlog

from .index import KnowledgeBaseIndex
from .loader import load_documents
from .models import Document, InvalidAddress, ResourceContents, ResourceDescriptor
from .resources import build_catalog, parse_address, resolve_address
from .utils import InvalidAddressError

logger = structlog.get_logger(__name__)


class OrgKnowledgeBase:
    """Request-scoped access to a fixed list of org files."""

    def __init__(self, file_paths: Sequence[str]):
        self.file_paths: tuple[str, ...] = tuple(str(p) for p in file_paths)

    async def load(self) -> list[Document]:
        """Load a fresh batch of documents."""
        return await load_documents(self.file_paths)

    async def build_index(self) -> KnowledgeBaseIndex:
        return KnowledgeBaseIndex.build(await self.load())

    async def categories(self) -> list[str]:
        return (await self.build_index()).categories()

    async def list_resources(self) -> list[ResourceDescriptor]:
        """List every addressable resource over a freshly loaded batch."""
        documents = await self.load()
        catalog = build_catalog(documents)
        logger.debug("resources_listed", documents=len(documents), resources=len(catalog))
        return catalog

    async def read_resource(self, address: str) -> ResourceContents:
        """Resolve an address over a freshly loaded batch.

        Raises:
            InvalidAddressError: If the address matches no known shape
            ResourceNotFoundError: If the address matches no documents
            DocumentLoadError: If any org file cannot be read
        """
        if isinstance(parse_address(address), InvalidAddress):
            raise InvalidAddressError(address)

        documents = await self.load()
        return ResourceContents(address=address, text=resolve_address(address, documents))
