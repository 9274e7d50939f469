"""
Resource resolution and catalog building for the Org-mode MCP Server.

Addresses take one of four shapes:

    all
    file/<name>
    category/<cat>
    category/<cat>/filetag/<tag>

Resource URIs are the address prefixed with `org://`.
"""

import re
from collections.abc import Sequence
from urllib.parse import unquote

import structlog

from .index import KnowledgeBaseIndex
from .models import (
    ORG_URI_SCHEME,
    Address,
    AllAddress,
    CategoryAddress,
    CategoryTagAddress,
    Document,
    FileAddress,
    InvalidAddress,
    ResourceDescriptor,
)
from .utils import InvalidAddressError, ResourceNotFoundError, pluralize

logger = structlog.get_logger(__name__)

FILE_ADDRESS_PATTERN = re.compile(r'^file/(.+)$', re.DOTALL)
# A category containing "/filetag/" is split at its first occurrence
CATEGORY_TAG_ADDRESS_PATTERN = re.compile(r'^category/(.+?)/filetag/(.+)$', re.DOTALL)
CATEGORY_ADDRESS_PATTERN = re.compile(r'^category/(.+)$', re.DOTALL)
ENCODED_DOTS_PATTERN = re.compile(r'(?:%2E)+', re.IGNORECASE)

DOCUMENT_SEPARATOR = "\n\n" + "=" * 80 + "\n\n"


# ============== Address parsing ==============

def parse_address(address: str) -> Address:
    """Parse an address string into one of the address variants.

    Shapes are tried in precedence order; the first structural match wins.
    Strings matching no shape yield `InvalidAddress`.
    """
    if address == "all":
        return AllAddress()

    match = FILE_ADDRESS_PATTERN.match(address)
    if match:
        return FileAddress(name=match.group(1))

    match = CATEGORY_TAG_ADDRESS_PATTERN.match(address)
    if match:
        return CategoryTagAddress(category=match.group(1), tag=match.group(2))

    match = CATEGORY_ADDRESS_PATTERN.match(address)
    if match:
        return CategoryAddress(category=match.group(1))

    return InvalidAddress(raw=address)


def address_from_uri(uri: str) -> str:
    """Strip the `org://` scheme from a resource URI and percent-decode it.

    Dot-only segments arrive encoded twice (see `address_to_uri`).

    Raises:
        InvalidAddressError: If the URI does not use the org scheme
    """
    if not uri.startswith(ORG_URI_SCHEME):
        raise InvalidAddressError(uri)
    segments = []
    for segment in uri[len(ORG_URI_SCHEME):].split("/"):
        segment = unquote(segment)
        if ENCODED_DOTS_PATTERN.fullmatch(segment):
            segment = unquote(segment)
        segments.append(segment)
    return "/".join(segments)


# ============== Rendering ==============

def render_document(document: Document) -> str:
    """Render a document as a labeled block: file name, path, then content."""
    return (
        f"# File: {document.metadata.file_name}\n"
        f"# Path: {document.metadata.file_path}\n\n"
        f"{document.content}"
    )


def render_documents(documents: Sequence[Document]) -> str:
    """Render several documents as labeled blocks joined by a separator."""
    return DOCUMENT_SEPARATOR.join(render_document(doc) for doc in documents)


# ============== Resolution ==============

def find_by_file_name(documents: Sequence[Document], name: str) -> Document | None:
    """Find the first document, in batch order, with the given file name."""
    for doc in documents:
        if doc.metadata.file_name == name:
            return doc
    return None


def resolve_address(address: str, documents: Sequence[Document]) -> str:
    """Resolve an address against a batch of documents into rendered text.

    `file/<name>` returns the raw content of the first document with that
    file name. The other shapes render every matching document.

    Raises:
        InvalidAddressError: If the address matches no known shape
        ResourceNotFoundError: If a well-formed address matches no documents
    """
    parsed = parse_address(address)

    if isinstance(parsed, InvalidAddress):
        logger.info("invalid_address", address=address)
        raise InvalidAddressError(address)

    if isinstance(parsed, AllAddress):
        logger.debug("resource_resolved", address=address, matched=len(documents))
        return render_documents(documents)

    if isinstance(parsed, FileAddress):
        document = find_by_file_name(documents, parsed.name)
        if document is None:
            logger.info("resource_not_found", address=address)
            raise ResourceNotFoundError(address, f"no org file named '{parsed.name}'")
        logger.debug("resource_resolved", address=address, matched=1)
        return document.content

    index = KnowledgeBaseIndex.build(documents)
    matched = index.filter_by_category(parsed.category)
    if isinstance(parsed, CategoryTagAddress):
        matched = index.filter_by_tag(matched, parsed.tag)
        reason = f"no org files in category '{parsed.category}' with filetag '{parsed.tag}'"
    else:
        reason = f"no org files in category '{parsed.category}'"

    if not matched:
        logger.info("resource_not_found", address=address)
        raise ResourceNotFoundError(address, reason, available_categories=index.categories())

    logger.debug("resource_resolved", address=address, matched=len(matched))
    return render_documents(matched)


# ============== Catalog ==============

def build_catalog(documents: Sequence[Document]) -> list[ResourceDescriptor]:
    """Enumerate every addressable resource for a batch of documents.

    Order: the `all` resource, one per document in batch order, then each
    category followed by its filetags, both sorted.
    """
    index = KnowledgeBaseIndex.build(documents)

    catalog = [
        ResourceDescriptor(
            address="all",
            display_name="All Org Files",
            description=f"Combined content of all {pluralize(len(documents), 'org file')}",
        )
    ]

    for doc in documents:
        meta = doc.metadata
        details = [f"Org file: {meta.file_path}"]
        if meta.category:
            details.append(f"category: {meta.category}")
        if meta.file_tags:
            details.append(f"filetags: {', '.join(meta.file_tags)}")
        catalog.append(
            ResourceDescriptor(
                address=f"file/{meta.file_name}",
                display_name=meta.title or meta.file_name,
                description=" | ".join(details),
            )
        )

    for category in index.categories():
        count = index.count(category)
        catalog.append(
            ResourceDescriptor(
                address=f"category/{category}",
                display_name=f"Category: {category}",
                description=f"All org files in category '{category}' ({pluralize(count, 'file')})",
            )
        )
        for tag in index.tags_for(category):
            tag_count = index.count(category, tag)
            catalog.append(
                ResourceDescriptor(
                    address=f"category/{category}/filetag/{tag}",
                    display_name=f"Category: {category} / Tag: {tag}",
                    description=(
                        f"Org files in category '{category}' tagged '{tag}' "
                        f"({pluralize(tag_count, 'file')})"
                    ),
                )
            )

    return catalog
