"""Plain text to Atlassian Document Format conversion."""

from jira_adf.adf.nodes import (
    BlockNode,
    BulletList,
    Document,
    Heading,
    ListItem,
    OrderedList,
    Paragraph,
    TextRun,
)
from jira_adf.adf.transpiler import Transpiler, text_to_adf, transpile

__all__ = [
    "BlockNode",
    "BulletList",
    "Document",
    "Heading",
    "ListItem",
    "OrderedList",
    "Paragraph",
    "TextRun",
    "Transpiler",
    "text_to_adf",
    "transpile",
]
