"""Nonce annotation for inline script/style fragment nodes.

A page's fragment slot is split into nodes that need a nonce (inline content
of the requested tag type) and nodes that do not. Matching nodes are replaced
by annotated clones and moved to the end of the slot; everything else keeps
its position.

The pass never raises on odd node shapes: anything it cannot classify is left
exactly where the host put it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from .node import MarkupNode

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

logger = logging.getLogger(__name__)

NONCE_ATTR = "nonce"

# Order matters: the style pass refetches each slot after the script pass.
TARGET_TAGS: tuple[str, ...] = ("script", "style")

T = TypeVar("T")


def matches(node: Any, tag_type: str) -> bool:
    """True if `node` is a `tag_type` element with non-empty inline content."""
    if not isinstance(node, MarkupNode):
        return False
    return node.tag_name == tag_type and node.is_inline


def partition(nodes: Iterable[T], predicate: Callable[[T], bool]) -> tuple[list[T], list[T]]:
    """Split `nodes` into (matching, non_matching), keeping relative order."""
    matching: list[T] = []
    non_matching: list[T] = []
    for node in nodes:
        try:
            hit = bool(predicate(node))
        except Exception:  # noqa: BLE001
            logger.debug("Could not classify %r, leaving it in place", node, exc_info=True)
            hit = False
        (matching if hit else non_matching).append(node)
    return matching, non_matching


def annotate(node: MarkupNode, nonce: str) -> MarkupNode:
    return node.with_attr(NONCE_ATTR, nonce)


def reassemble(nodes: Sequence[Any], tag_type: str, nonce: str) -> list[Any]:
    """Return the replacement list for one slot and one tag type."""
    matching, non_matching = partition(nodes, lambda node: matches(node, tag_type))
    annotated = [annotate(node, nonce) for node in matching]
    if annotated:
        logger.debug("Annotated %d inline <%s> node(s)", len(annotated), tag_type)
    return non_matching + annotated


def process_slot(
    get_nodes: Callable[[], Sequence[Any]],
    tag_type: str,
    nonce: str,
    replace_nodes: Callable[[list[Any]], None],
) -> None:
    """Fetch one slot, annotate its inline `tag_type` nodes, and write it back.

    `replace_nodes` is called exactly once, even if nothing matched.
    """
    replace_nodes(reassemble(get_nodes(), tag_type, nonce))
