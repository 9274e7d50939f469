"""
Pydantic models for the Org-mode MCP Server.

Contains data models for parsed org documents, resource descriptors,
address variants, and configuration results.
"""

import re
from typing import Literal
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

ORG_URI_SCHEME = "org://"
TEXT_MIME_TYPE = "text/plain"
DOT_SEGMENT_PATTERN = re.compile(r'\.+')


def _quote_segment(segment: str) -> str:
    # URL parsers collapse "." and ".." segments, including their %2E forms
    if DOT_SEGMENT_PATTERN.fullmatch(segment):
        return "%252E" * len(segment)
    return quote(segment, safe="")


def address_to_uri(address: str) -> str:
    """Build the percent-encoded `org://` URI for an address.

    Segments made only of dots are encoded twice so that URL normalization
    keeps them; `address_from_uri` reverses this.
    """
    return ORG_URI_SCHEME + "/".join(_quote_segment(segment) for segment in address.split("/"))


class DocumentMetadata(BaseModel):
    """Metadata extracted from the header lines of an org file."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    file_name: str
    category: str | None = None
    title: str | None = None
    file_tags: tuple[str, ...] = ()


class Document(BaseModel):
    """An org file's metadata together with its raw content."""

    model_config = ConfigDict(frozen=True)

    metadata: DocumentMetadata
    content: str


class ResourceDescriptor(BaseModel):
    """An addressable resource, as listed to clients."""

    address: str
    display_name: str
    description: str
    mime_type: str = TEXT_MIME_TYPE

    @property
    def uri(self) -> str:
        return address_to_uri(self.address)


class ResourceContents(BaseModel):
    """The rendered text of a resolved resource."""

    address: str
    text: str
    mime_type: str = TEXT_MIME_TYPE

    @property
    def uri(self) -> str:
        return address_to_uri(self.address)


# ============== Address variants ==============

class AllAddress(BaseModel):
    """`all`: every document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"


class FileAddress(BaseModel):
    """`file/<name>`: a single document by file name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    name: str


class CategoryAddress(BaseModel):
    """`category/<cat>`: documents in a category."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["category"] = "category"
    category: str


class CategoryTagAddress(BaseModel):
    """`category/<cat>/filetag/<tag>`: documents in a category carrying a tag."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["category_tag"] = "category_tag"
    category: str
    tag: str


class InvalidAddress(BaseModel):
    """An address string that matches none of the known shapes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["invalid"] = "invalid"
    raw: str


Address = AllAddress | FileAddress | CategoryAddress | CategoryTagAddress | InvalidAddress


# ============== Configuration ==============

class OrgConfig(BaseModel):
    """Schema of the JSON configuration file."""

    model_config = ConfigDict(populate_by_name=True)

    org_files: list[str] = Field(alias="orgFiles", min_length=1)


class ConfigValidationResult(BaseModel):
    """Outcome of loading and validating the configuration file."""

    is_valid: bool
    config: OrgConfig | None = None
    expanded_paths: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
