"""
Pytest configuration and fixtures for orgmode-mcp tests.
"""

import pytest
from pathlib import Path


@pytest.fixture
def org_dir(tmp_path: Path):
    """Create a temporary directory with test org files."""
    org_path = tmp_path / "org"
    org_path.mkdir()
    (org_path / "archive").mkdir()

    # File 1: work file with title, category and two tags
    (org_path / "work.org").write_text("""#+TITLE: Work Projects
#+CATEGORY: work
#+FILETAGS: :urgent:client:

* TODO Ship release
  DEADLINE: <2024-01-20 Sat>
* TODO Review contract
""", encoding="utf-8")

    # File 2: personal file without tags
    (org_path / "life.org").write_text("""#+CATEGORY: life

* TODO Call mom
""", encoding="utf-8")

    # File 3: second work file sharing one tag
    (org_path / "work2.org").write_text("""#+TITLE: More Work
#+CATEGORY: work
#+FILETAGS: :client:

* DONE Kickoff meeting
""", encoding="utf-8")

    # File 4: no headers at all
    (org_path / "inbox.org").write_text("""* Random thought
Some text.
""", encoding="utf-8")

    # File 5: same file name as file 1, in another directory
    (org_path / "archive" / "work.org").write_text("""#+CATEGORY: archive
#+FILETAGS: :old:

* DONE Old project
""", encoding="utf-8")

    yield org_path


@pytest.fixture
def org_paths(org_dir: Path) -> list[str]:
    """Absolute org file paths in a fixed batch order."""
    return [
        str(org_dir / "work.org"),
        str(org_dir / "life.org"),
        str(org_dir / "work2.org"),
        str(org_dir / "inbox.org"),
        str(org_dir / "archive" / "work.org"),
    ]


@pytest.fixture
async def documents(org_paths):
    """Loaded documents for the test org files."""
    from orgmode_mcp.loader import load_documents
    return await load_documents(org_paths)


@pytest.fixture
def knowledge_base(org_paths):
    """An OrgKnowledgeBase over the test org files."""
    from orgmode_mcp.knowledge_base import OrgKnowledgeBase
    return OrgKnowledgeBase(org_paths)


@pytest.fixture
def make_document():
    """Build a Document directly from a path and content."""
    from orgmode_mcp.models import Document
    from orgmode_mcp.utils import extract_metadata

    def _make(file_path: str, content: str):
        return Document(metadata=extract_metadata(file_path, content), content=content)

    return _make
