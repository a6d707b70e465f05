"""
Comment normalization and leading-comment collection.

Turns raw comment trivia (``//``, ``///``, ``/* */``, ``/** */``, possibly
carrying XML documentation markup or HTML entities) into one readable line.
Cleaning is lenient: malformed markup degrades to plain text, nothing raises.
"""

import html
import logging
import re
from typing import List, Optional

from tree_sitter import Node

from extraction.config import ATTRIBUTE_LIST_NODE, COMMENT_NODE

logger = logging.getLogger(__name__)

_SPACE_RE = re.compile(r"\s+")

# Documentation tags stripped from doc comments
DOC_TAGS: tuple = (
    "summary",
    "remarks",
    "para",
    "list",
    "item",
    "c",
    "see",
    "typeparam",
    "inheritdoc",
)

_DOC_TAG_RE = re.compile(
    r"</?(?:" + "|".join(DOC_TAGS) + r")\b[^<>]*?/?>"
    r"|</?[A-Za-z_][\w:.\-]*(?:\s[^<>]*)?/?>",
    re.IGNORECASE,
)
_LINE_COMMENT_RE = re.compile(r"^[ \t]*//+!?", re.MULTILINE)
_BLOCK_DELIMITER_RE = re.compile(r"/\*+(?!/)!?|\*+/")
_CONTINUATION_RE = re.compile(r"^[ \t]*\*+", re.MULTILINE)


def collapse_whitespace(text: str) -> str:
    """Collapse all whitespace (including CR/LF and tabs) into single spaces and trim."""
    return _SPACE_RE.sub(" ", text).strip()


def _clean_once(text: str) -> str:
    text = html.unescape(text)
    text = _DOC_TAG_RE.sub(" ", text)
    text = _LINE_COMMENT_RE.sub("", text)
    text = _BLOCK_DELIMITER_RE.sub("", text)
    text = _CONTINUATION_RE.sub("", text)
    return collapse_whitespace(text)


def clean_comment(raw: str) -> str:
    """Strip comment delimiters and documentation markup, condensed to one line.

    Steps: decode HTML/XML entities, remove documentation tags (replaced by a
    space), strip ``//`` leaders and ``/* */`` delimiters, collapse whitespace.
    The steps repeat until the text is stable, so decoding can never
    re-expose markup that a second call would strip.

    Args:
        raw: Raw comment trivia, possibly spanning several lines.

    Returns:
        Cleaned single-line text, or an empty string if nothing remains.

    Example:
        >>> clean_comment("/// <summary>Does X.</summary>")
        'Does X.'
    """
    if not raw or not raw.strip():
        return ""
    previous = None
    text = raw
    while text != previous:
        previous = text
        text = _clean_once(text)
    return text


def _is_trailing_comment(comment: Node, previous: Optional[Node]) -> bool:
    """A comment on the same line as the preceding token trails that token."""
    return previous is not None and comment.start_point.row == previous.end_point.row


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def get_preceding_comments(node: Node, source_bytes: bytes) -> List[str]:
    """Collect raw comment texts attached before a declaration node, in source order.

    Walks backward through the run of comment siblings directly preceding
    the node, then adds comments placed between the node's attribute lists
    and its first modifier or keyword.
    """
    comments: List[Node] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == COMMENT_NODE:
        comments.append(sibling)
        sibling = sibling.prev_sibling

    if comments and _is_trailing_comment(comments[-1], sibling):
        comments.pop()

    # Reverse to get source order
    comments.reverse()

    for child in node.children:
        if child.type == COMMENT_NODE:
            comments.append(child)
        elif child.type != ATTRIBUTE_LIST_NODE:
            break

    return [_node_text(comment, source_bytes) for comment in comments]


def leading_comment_text(node: Node, source_bytes: bytes) -> Optional[str]:
    """Extract the cleaned one-line leading comment of a declaration.

    Args:
        node: A type, method or constructor declaration node.
        source_bytes: The raw source file bytes.

    Returns:
        Cleaned comment text, or None if no meaningful comment is attached.
    """
    raw_comments = get_preceding_comments(node, source_bytes)
    if not raw_comments:
        return None
    cleaned = clean_comment("\n".join(raw_comments))
    return cleaned or None
