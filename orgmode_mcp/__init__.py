# Org-mode MCP Server
#
# Modular package structure:
# - config.py: Settings and config file loading with glob expansion
# - logging.py: structlog configuration
# - models.py: Pydantic models for documents, resources and addresses
# - utils.py: Header patterns, exceptions and metadata extraction
# - loader.py: Concurrent org file loading
# - index.py: Category and filetag index over a batch of documents
# - resources.py: Address parsing, resolution and the resource catalog
# - knowledge_base.py: OrgKnowledgeBase context over the configured files
# - prompts.py: MCP prompt templates
# - tools.py: MCP tool handlers (none offered yet)
# - server.py: create_server() wiring the MCP handlers
# - main.py: Entry point and server initialization
