"""jira-adf: plain text to Atlassian Document Format, plus Jira issue tools."""

from jira_adf._version import __version__
from jira_adf.adf import Document, text_to_adf, transpile

__all__ = ["Document", "__version__", "text_to_adf", "transpile"]
