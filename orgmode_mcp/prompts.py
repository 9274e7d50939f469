"""
MCP prompts module for the Org-mode MCP Server.

Builds the prompt templates that point a model at the org files of one
category.
"""

from datetime import date
from enum import Enum

from mcp.types import (
    GetPromptResult,
    Prompt,
    PromptArgument,
    PromptMessage,
    ResourceLink,
    TextContent,
)

from .models import TEXT_MIME_TYPE, address_to_uri
from .utils import PromptError

REVIEW_DUE_ITEMS = "review-due-items"
SUMMARIZE_CATEGORY = "summarize-category"


class TimeScope(str, Enum):
    TODAY = "today"
    WEEK = "week"
    OVERDUE = "overdue"
    ALL = "all"


SCOPE_TEXT = {
    TimeScope.TODAY: "due today or overdue",
    TimeScope.WEEK: "due this week",
    TimeScope.OVERDUE: "overdue",
    TimeScope.ALL: "all",
}


def list_prompts(categories: list[str]) -> list[Prompt]:
    """List available prompts; the category hint names the known categories."""
    return [
        Prompt(
            name=REVIEW_DUE_ITEMS,
            title="Review Due Items",
            description="Review TODO items in a specific category, focusing on items due today or overdue",
            arguments=[
                PromptArgument(
                    name="category",
                    description='Org category to review (e.g., "work", "personal")',
                    required=True,
                ),
                PromptArgument(
                    name="time_scope",
                    description='Time focus: "today", "week", "overdue", or "all" (default: "today")',
                    required=False,
                ),
            ],
        ),
        Prompt(
            name=SUMMARIZE_CATEGORY,
            title="Summarize Category",
            description="Get a comprehensive summary of all org files in a specific category",
            arguments=[
                PromptArgument(
                    name="category",
                    description=f"Category to summarize. Available: {', '.join(categories) or 'none'}",
                    required=True,
                ),
            ],
        ),
    ]


def parse_time_scope(value: str | None) -> TimeScope:
    """Parse a time scope argument, defaulting to today.

    Raises:
        PromptError: If the value is not a known scope
    """
    if not value:
        return TimeScope.TODAY
    try:
        return TimeScope(value)
    except ValueError:
        valid = ", ".join(scope.value for scope in TimeScope)
        raise PromptError(f"Invalid time_scope: {value}. Must be one of: {valid}") from None


def _category_link(category: str) -> PromptMessage:
    return PromptMessage(
        role="user",
        content=ResourceLink(
            type="resource_link",
            uri=address_to_uri(f"category/{category}"),
            name=f"Category: {category}",
            description=f"All org files in category '{category}'",
            mimeType=TEXT_MIME_TYPE,
        ),
    )


def _text(text: str) -> PromptMessage:
    return PromptMessage(role="user", content=TextContent(type="text", text=text))


def get_prompt(
    name: str,
    arguments: dict[str, str] | None,
    today: date | None = None,
) -> GetPromptResult:
    """Build the messages for a prompt.

    The category files are referenced by their `org://category/<cat>` link
    rather than embedded, so no files are read here.

    Raises:
        PromptError: If the prompt is unknown or an argument is missing or invalid
    """
    arguments = arguments or {}

    if name not in (REVIEW_DUE_ITEMS, SUMMARIZE_CATEGORY):
        raise PromptError(f"Unknown prompt: {name}")

    category = arguments.get("category")
    if not category:
        raise PromptError("Missing required argument: category")

    if name == REVIEW_DUE_ITEMS:
        scope_text = SCOPE_TEXT[parse_time_scope(arguments.get("time_scope"))]
        today_str = (today or date.today()).isoformat()
        return GetPromptResult(
            description=f"Review due items in '{category}'",
            messages=[
                _text(
                    f'Please review all TODO items in my "{category}" org files. Focus on items {scope_text}.\n\n'
                    "Provide:\n"
                    "1. A prioritized list of what I should focus on\n"
                    "2. Any items that may be at risk of becoming overdue\n"
                    "3. Suggestions for rescheduling or breaking down large tasks\n"
                    "4. Any blockers or dependencies I should be aware of\n\n"
                    f'Here are the org files for the "{category}" category:'
                ),
                _category_link(category),
                _text(f"Today's date: {today_str}\nTime scope: {scope_text}"),
            ],
        )

    return GetPromptResult(
        description=f"Summary of '{category}'",
        messages=[
            _text(
                f'Please provide a comprehensive summary of all org files in the "{category}" category.\n\n'
                "Include:\n"
                "1. Key themes and topics\n"
                "2. Important TODO items and their status\n"
                "3. Recent changes or updates\n"
                "4. Any patterns or insights you notice\n\n"
                "Here are the org files:"
            ),
            _category_link(category),
        ],
    )
