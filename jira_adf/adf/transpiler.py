"""Plain text to ADF transpiler.

Converts loosely structured text into an ADF document:

- ``- item`` lines become bullet list items
- ``1. item`` lines become ordered list items
- a line ending with ``:`` followed by a blank line (or end of input)
  becomes a level-3 heading
- blank lines are dropped and close any open list
- everything else is a paragraph, kept verbatim

Consecutive list lines of the same kind are grouped into one list node.
"""

import logging
import re

from jira_adf.adf.nodes import (
    BlockNode,
    BulletList,
    Document,
    Heading,
    ListItem,
    ListKind,
    ListNode,
    OrderedList,
    Paragraph,
)

logger = logging.getLogger(__name__)

BULLET_PREFIX = "- "
# Whitespace as JavaScript trims it: includes the byte-order mark U+FEFF,
# excludes the \x1c-\x1f separators that str.strip() would remove.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)
# ASCII digits only; "1." without trailing whitespace is not a list marker
ORDERED_PREFIX_PATTERN = re.compile(rf"^[0-9]+\.[{re.escape(WHITESPACE)}]")
HEADING_SUFFIX = ":"


def trim(text: str) -> str:
    """Strip leading and trailing WHITESPACE."""
    return text.strip(WHITESPACE)


class Transpiler:
    """Single-pass line classifier that builds an ADF document.

    The only state carried between lines is the list currently open for
    appending and its kind. A new instance (or a new call to
    :meth:`transpile`) always starts with no open list.
    """

    def __init__(self) -> None:
        self._content: list[BlockNode] = []
        self._open_list: ListNode | None = None
        self._open_list_kind: ListKind | None = None

    def transpile(self, text: str) -> Document:
        """Convert ``text`` to a :class:`Document`.

        Never raises for ``str`` input; empty or blank-only text yields a
        document with no content.
        """
        self._content = []
        self._close_list()

        lines = text.split("\n")
        for i, line in enumerate(lines):
            next_line = lines[i + 1] if i + 1 < len(lines) else ""
            self._classify(line, next_line)

        document = Document(content=self._content)
        self._content = []
        self._close_list()

        logger.debug("Transpiled %d lines into %d ADF nodes", len(lines), len(document.content))
        return document

    def _classify(self, line: str, next_line: str) -> None:
        trimmed = trim(line)

        if not trimmed:
            self._close_list()
            return

        if trimmed.startswith(BULLET_PREFIX):
            self._append_item(BulletList, trimmed[len(BULLET_PREFIX) :])
            return

        if ORDERED_PREFIX_PATTERN.match(trimmed):
            self._append_item(OrderedList, ORDERED_PREFIX_PATTERN.sub("", trimmed, count=1))
            return

        # Headings leave the open list alone; the blank line they require
        # closes it on the next iteration.
        if trimmed.endswith(HEADING_SUFFIX) and not trim(next_line):
            self._content.append(Heading.of(trimmed))
            return

        self._close_list()
        self._content.append(Paragraph.of(line))

    def _append_item(self, list_type: type[BulletList] | type[OrderedList], text: str) -> None:
        if self._open_list is None or self._open_list_kind != list_type.kind:
            self._open_list = list_type()
            self._open_list_kind = list_type.kind
            self._content.append(self._open_list)
        self._open_list.content.append(ListItem.of(text))

    def _close_list(self) -> None:
        self._open_list = None
        self._open_list_kind = None


def transpile(text: str) -> Document:
    """Convert plain text to an ADF :class:`Document`."""
    return Transpiler().transpile(text)


def text_to_adf(text: str) -> dict:
    """Convert plain text to the ADF dict sent in Jira rich-text fields."""
    return transpile(text).to_dict()
