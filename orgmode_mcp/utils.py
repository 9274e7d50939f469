"""
Utility functions and compiled regex patterns for the Org-mode MCP Server.

Contains the header patterns, the exception taxonomy, and the metadata
extractor for org file headers.
"""

import re
from pathlib import PurePath

from .models import DocumentMetadata

# Pre-compiled regex patterns for performance
HEADLINE_PATTERN = re.compile(r'^\*+\s')
CATEGORY_PATTERN = re.compile(r'^#\+CATEGORY:\s*(.+)$', re.IGNORECASE)
TITLE_PATTERN = re.compile(r'^#\+TITLE:\s*(.+)$', re.IGNORECASE)
FILETAGS_PATTERN = re.compile(r'^#\+FILETAGS:\s*(.+)$', re.IGNORECASE)


# ============== Exceptions ==============

class OrgMcpError(Exception):
    """Base class for errors raised by the org-mode server."""
    pass


class InvalidAddressError(OrgMcpError):
    """Raised when an address does not match any known resource shape."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid resource address: {address}")


class ResourceNotFoundError(OrgMcpError):
    """Raised when a well-formed address matches no documents."""

    def __init__(self, address: str, reason: str, available_categories: list[str] | None = None):
        self.address = address
        self.reason = reason
        self.available_categories = available_categories
        message = f"Resource not found: {address} ({reason})"
        if available_categories is not None:
            message += f". Available categories: {', '.join(available_categories) or 'none'}"
        super().__init__(message)


class DocumentLoadError(OrgMcpError):
    """Raised when an org file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read org file {path}: {reason}")


class ConfigError(OrgMcpError):
    """Raised when the configuration file is missing or invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration. Please check config.json")


class PromptError(OrgMcpError):
    """Raised for unknown prompts or invalid prompt arguments."""
    pass


# ============== Helper Functions ==============

def split_filetags(value: str) -> list[str]:
    """Split a `:tag1:tag2:` filetags value into its tags.

    Empty segments are dropped, so leading, trailing and doubled colons are
    tolerated.
    """
    return [tag for tag in value.split(":") if tag.strip()]


def extract_metadata(file_path: str, content: str) -> DocumentMetadata:
    """Extract category, title and filetags from the header of an org file.

    Scanning stops at the first headline. CATEGORY and TITLE keep their first
    non-empty value; every FILETAGS line contributes its tags in order.
    Unrecognised lines are skipped, so this never fails.
    """
    category: str | None = None
    title: str | None = None
    file_tags: list[str] = []

    for line in content.split("\n"):
        if HEADLINE_PATTERN.match(line):
            break

        match = CATEGORY_PATTERN.match(line)
        if match:
            value = match.group(1).strip()
            if category is None and value:
                category = value
            continue

        match = TITLE_PATTERN.match(line)
        if match:
            value = match.group(1).strip()
            if title is None and value:
                title = value
            continue

        match = FILETAGS_PATTERN.match(line)
        if match:
            file_tags.extend(split_filetags(match.group(1).strip()))

    return DocumentMetadata(
        file_path=file_path,
        file_name=PurePath(file_path).name,
        category=category,
        title=title,
        file_tags=tuple(file_tags),
    )


def pluralize(count: int, noun: str) -> str:
    """Return `count noun`, adding an `s` unless count is exactly one."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
