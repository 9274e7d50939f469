"""
Knowledge-base index for the Org-mode MCP Server.

Derives categories and per-category filetags from a batch of documents and
provides the filters used by resource resolution.
"""

from collections.abc import Iterable, Sequence

from .models import Document


def filter_by_category(documents: Iterable[Document], category: str) -> list[Document]:
    """Return the documents whose category equals `category` exactly."""
    return [doc for doc in documents if doc.metadata.category == category]


def filter_by_tag(documents: Iterable[Document], tag: str) -> list[Document]:
    """Return the documents whose filetags contain `tag` exactly."""
    return [doc for doc in documents if tag in doc.metadata.file_tags]


def unique_categories(documents: Iterable[Document]) -> list[str]:
    """Get all distinct categories, sorted."""
    return sorted({doc.metadata.category for doc in documents if doc.metadata.category is not None})


def unique_file_tags(documents: Iterable[Document]) -> list[str]:
    """Get all distinct filetags, sorted."""
    return sorted({tag for doc in documents for tag in doc.metadata.file_tags})


def file_tags_for_category(documents: Iterable[Document], category: str) -> list[str]:
    """Get the distinct filetags of documents in a category, sorted."""
    return unique_file_tags(filter_by_category(documents, category))


class KnowledgeBaseIndex:
    """Read-only index over one batch of documents.

    Categories and their tags are computed once at build time; filters always
    return subsequences of the batch in its original order.
    """

    def __init__(self, documents: Sequence[Document]):
        self._documents: tuple[Document, ...] = tuple(documents)
        self._categories: list[str] = unique_categories(self._documents)
        self._tags_by_category: dict[str, list[str]] = {
            category: file_tags_for_category(self._documents, category)
            for category in self._categories
        }

    @classmethod
    def build(cls, documents: Sequence[Document]) -> "KnowledgeBaseIndex":
        return cls(documents)

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    def categories(self) -> list[str]:
        return list(self._categories)

    def tags_for(self, category: str) -> list[str]:
        return list(self._tags_by_category.get(category, []))

    def all_tags(self) -> list[str]:
        return unique_file_tags(self._documents)

    def filter_by_category(self, category: str) -> list[Document]:
        return filter_by_category(self._documents, category)

    def filter_by_tag(self, documents: Iterable[Document], tag: str) -> list[Document]:
        return filter_by_tag(documents, tag)

    def count(self, category: str, tag: str | None = None) -> int:
        """Count documents in a category, optionally narrowed to a tag."""
        matched = self.filter_by_category(category)
        if tag is not None:
            matched = filter_by_tag(matched, tag)
        return len(matched)
