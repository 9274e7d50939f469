"""
Tests for address parsing, resource resolution and the resource catalog.
"""

import pytest


# ============== Tests for parse_address() ==============

class TestParseAddress:
    """Tests for the parse_address function."""

    def test_all(self):
        """Test the literal all address."""
        from orgmode_mcp.models import AllAddress
        from orgmode_mcp.resources import parse_address

        assert parse_address("all") == AllAddress()

    def test_file(self):
        """Test a file address keeps the name verbatim."""
        from orgmode_mcp.models import FileAddress
        from orgmode_mcp.resources import parse_address

        assert parse_address("file/work.org") == FileAddress(name="work.org")

    def test_category(self):
        """Test a category address."""
        from orgmode_mcp.models import CategoryAddress
        from orgmode_mcp.resources import parse_address

        assert parse_address("category/work") == CategoryAddress(category="work")

    def test_category_tag(self):
        """Test a category and filetag address."""
        from orgmode_mcp.models import CategoryTagAddress
        from orgmode_mcp.resources import parse_address

        assert parse_address("category/work/filetag/urgent") == CategoryTagAddress(category="work", tag="urgent")

    def test_category_tag_splits_at_first_marker(self):
        """Test an address with two filetag markers splits at the first one."""
        from orgmode_mcp.models import CategoryTagAddress
        from orgmode_mcp.resources import parse_address

        parsed = parse_address("category/a/filetag/b/filetag/c")

        assert parsed == CategoryTagAddress(category="a", tag="b/filetag/c")

    @pytest.mark.parametrize("address", ["", "bogus/shape", "ALL", "all/", "file/", "category/", "files/x", "category"])
    def test_invalid(self, address):
        """Test strings matching no shape are invalid."""
        from orgmode_mcp.models import InvalidAddress
        from orgmode_mcp.resources import parse_address

        assert parse_address(address) == InvalidAddress(raw=address)

    def test_address_from_uri(self):
        """Test the org scheme is stripped and segments decoded."""
        from orgmode_mcp.resources import address_from_uri

        assert address_from_uri("org://category/work") == "category/work"
        assert address_from_uri("org://category/my%20work") == "category/my work"

    def test_address_from_uri_wrong_scheme(self):
        """Test other schemes are rejected as invalid addresses."""
        from orgmode_mcp.resources import address_from_uri
        from orgmode_mcp.utils import InvalidAddressError

        with pytest.raises(InvalidAddressError):
            address_from_uri("local://example")

    def test_uri_round_trip(self):
        """Test addresses with spaces survive URI encoding."""
        from orgmode_mcp.models import address_to_uri
        from orgmode_mcp.resources import address_from_uri

        uri = address_to_uri("category/my work/filetag/to do")

        assert uri == "org://category/my%20work/filetag/to%20do"
        assert address_from_uri(uri) == "category/my work/filetag/to do"

    @pytest.mark.parametrize("address", ["category/..", "category/.", "category/a/../b", "file/...", "category/a/filetag/.."])
    def test_dot_segments_survive_url_normalization(self, address):
        """Test dot-only segments are not collapsed when the URI is parsed."""
        from pydantic import AnyUrl
        from orgmode_mcp.models import address_to_uri
        from orgmode_mcp.resources import address_from_uri

        uri = address_to_uri(address)

        assert address_from_uri(str(AnyUrl(uri))) == address

    def test_dot_segment_encoding(self):
        """Test dot-only segments are encoded twice and other dots are kept."""
        from orgmode_mcp.models import address_to_uri

        assert address_to_uri("category/a/../b") == "org://category/a/%252E%252E/b"
        assert address_to_uri("file/notes.org") == "org://file/notes.org"


# ============== Tests for resolve_address() ==============

class TestResolveAddress:
    """Tests for the resolve_address function."""

    async def test_all_renders_every_document(self, documents):
        """Test all renders labeled blocks in batch order."""
        from orgmode_mcp.resources import DOCUMENT_SEPARATOR, render_document, resolve_address

        text = resolve_address("all", documents)

        assert text == DOCUMENT_SEPARATOR.join(render_document(d) for d in documents)
        assert text.count(DOCUMENT_SEPARATOR) == len(documents) - 1
        assert text.index("# File: work.org") < text.index("# File: life.org")

    async def test_labeled_block(self, documents):
        """Test a rendered block has file name, path, then raw content."""
        from orgmode_mcp.resources import render_document

        doc = documents[1]
        block = render_document(doc)

        assert block == f"# File: life.org\n# Path: {doc.metadata.file_path}\n\n{doc.content}"

    async def test_file_returns_raw_content(self, documents):
        """Test a file address returns the content unwrapped."""
        from orgmode_mcp.resources import resolve_address

        assert resolve_address("file/life.org", documents) == documents[1].content

    async def test_file_duplicate_name_picks_first(self, documents):
        """Test a shared file name resolves to the first document in batch order."""
        from orgmode_mcp.resources import resolve_address

        text = resolve_address("file/work.org", documents)

        assert text == documents[0].content
        assert "#+CATEGORY: archive" not in text

        reordered = [documents[4], *documents[:4]]
        assert resolve_address("file/work.org", reordered) == documents[4].content

    async def test_file_not_found(self, documents):
        """Test an unknown file name is NotFound."""
        from orgmode_mcp.resources import resolve_address
        from orgmode_mcp.utils import ResourceNotFoundError

        with pytest.raises(ResourceNotFoundError):
            resolve_address("file/nope.org", documents)

    async def test_category(self, documents):
        """Test a category address renders its documents."""
        from orgmode_mcp.resources import render_documents, resolve_address

        text = resolve_address("category/work", documents)

        assert text == render_documents([documents[0], documents[2]])
        assert "Call mom" not in text

    async def test_category_tag_composition(self, documents):
        """Test category/tag resolution equals composing the two filters."""
        from orgmode_mcp.index import filter_by_category, filter_by_tag
        from orgmode_mcp.resources import render_documents, resolve_address

        for tag in ("urgent", "client"):
            expected = render_documents(filter_by_tag(filter_by_category(documents, "work"), tag))
            assert resolve_address(f"category/work/filetag/{tag}", documents) == expected

    async def test_category_not_found_lists_categories(self, documents):
        """Test an unknown category is NotFound and names existing categories."""
        from orgmode_mcp.resources import resolve_address
        from orgmode_mcp.utils import ResourceNotFoundError

        with pytest.raises(ResourceNotFoundError) as exc_info:
            resolve_address("category/doesnotexist", documents)

        assert exc_info.value.available_categories == ["archive", "life", "work"]
        assert "archive, life, work" in str(exc_info.value)

    async def test_category_tag_not_found(self, documents):
        """Test a tag absent from the category is NotFound."""
        from orgmode_mcp.resources import resolve_address
        from orgmode_mcp.utils import ResourceNotFoundError

        with pytest.raises(ResourceNotFoundError):
            resolve_address("category/life/filetag/urgent", documents)

    async def test_invalid_address(self, documents):
        """Test an unparseable address is InvalidAddress, not NotFound."""
        from orgmode_mcp.resources import resolve_address
        from orgmode_mcp.utils import InvalidAddressError, ResourceNotFoundError

        with pytest.raises(InvalidAddressError) as exc_info:
            resolve_address("bogus/shape", documents)

        assert not isinstance(exc_info.value, ResourceNotFoundError)

    async def test_idempotent(self, documents):
        """Test resolving twice yields identical text."""
        from orgmode_mcp.resources import resolve_address

        for address in ("all", "file/work.org", "category/work", "category/work/filetag/client"):
            assert resolve_address(address, documents) == resolve_address(address, documents)

    def test_empty_batch(self):
        """Test an empty batch renders all as empty and the rest as NotFound."""
        from orgmode_mcp.resources import resolve_address
        from orgmode_mcp.utils import ResourceNotFoundError

        assert resolve_address("all", []) == ""

        for address in ("file/a.org", "category/work", "category/work/filetag/x"):
            with pytest.raises(ResourceNotFoundError):
                resolve_address(address, [])


# ============== Tests for build_catalog() ==============

class TestBuildCatalog:
    """Tests for the build_catalog function."""

    def test_end_to_end_scenario(self, make_document):
        """Test the catalog for one tagged and one untagged category."""
        from orgmode_mcp.resources import build_catalog

        docs = [
            make_document("/org/work.org", "#+CATEGORY: work\n#+FILETAGS: :urgent:"),
            make_document("/org/life.org", "#+CATEGORY: life"),
        ]
        addresses = [d.address for d in build_catalog(docs)]

        assert addresses == [
            "all",
            "file/work.org",
            "file/life.org",
            "category/life",
            "category/work",
            "category/work/filetag/urgent",
        ]
        assert not any(a.startswith("category/life/filetag/") for a in addresses)

    async def test_catalog_order(self, documents):
        """Test documents keep batch order and categories nest sorted tags."""
        from orgmode_mcp.resources import build_catalog

        addresses = [d.address for d in build_catalog(documents)]

        assert addresses == [
            "all",
            "file/work.org",
            "file/life.org",
            "file/work2.org",
            "file/inbox.org",
            "file/work.org",
            "category/archive",
            "category/archive/filetag/old",
            "category/life",
            "category/work",
            "category/work/filetag/client",
            "category/work/filetag/urgent",
        ]

    async def test_display_names(self, documents):
        """Test files use their title when present, else their file name."""
        from orgmode_mcp.resources import build_catalog

        by_address = {}
        for descriptor in build_catalog(documents):
            by_address.setdefault(descriptor.address, descriptor)

        assert by_address["file/work.org"].display_name == "Work Projects"
        assert by_address["file/life.org"].display_name == "life.org"
        assert by_address["all"].display_name == "All Org Files"
        assert all(d.mime_type == "text/plain" for d in by_address.values())

    async def test_count_wording(self, documents):
        """Test descriptions use singular and plural counts."""
        from orgmode_mcp.resources import build_catalog

        by_address = {d.address: d for d in build_catalog(documents)}

        assert "(2 files)" in by_address["category/work"].description
        assert "(1 file)" in by_address["category/life"].description
        assert "(1 file)" in by_address["category/work/filetag/urgent"].description
        assert "(2 files)" in by_address["category/work/filetag/client"].description
        assert "5 org files" in by_address["all"].description

    def test_empty_batch(self):
        """Test an empty batch lists only the all resource."""
        from orgmode_mcp.resources import build_catalog

        catalog = build_catalog([])

        assert [d.address for d in catalog] == ["all"]
        assert "0 org files" in catalog[0].description

    async def test_uris(self, documents):
        """Test descriptors expose org URIs."""
        from orgmode_mcp.resources import build_catalog

        assert build_catalog(documents)[0].uri == "org://all"
