"""
File loading module for the Org-mode MCP Server.

Reads org files concurrently and pairs their content with extracted metadata.
"""

import asyncio
import time
from collections.abc import Sequence

import aiofiles
import structlog

from .models import Document
from .utils import DocumentLoadError, extract_metadata

logger = structlog.get_logger(__name__)


async def load_document(file_path: str) -> Document:
    """Read a single org file from disk and extract its metadata.

    Raises:
        DocumentLoadError: If the file cannot be read or decoded
    """
    try:
        async with aiofiles.open(file_path, encoding="utf-8") as f:
            content = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("document_read_failed", path=file_path, error=str(e))
        raise DocumentLoadError(file_path, str(e)) from e

    return Document(metadata=extract_metadata(file_path, content), content=content)


async def load_documents(file_paths: Sequence[str]) -> list[Document]:
    """Load all org files in parallel.

    The result has the same length and order as `file_paths`, whatever order
    the reads complete in. A single unreadable file fails the whole batch;
    every read finishes first, and the earliest failing path in input order
    is reported.
    """
    start_time = time.time()

    tasks = [load_document(str(path)) for path in file_paths]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    for result in results:
        if isinstance(result, BaseException):
            raise result
    documents: list[Document] = list(results)

    duration_ms = round((time.time() - start_time) * 1000, 2)
    logger.debug("documents_loaded", count=len(documents), duration_ms=duration_ms)
    return documents
