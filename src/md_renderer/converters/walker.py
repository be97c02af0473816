"""Depth-first traversal of a syntax tree with enter/exit callbacks."""

import logging
from enum import Enum
from typing import Callable

from .nodes import SyntaxNode

logger = logging.getLogger(__name__)


class WalkStatus(Enum):
    """Directive returned by a visitor for the node it was just given."""

    GO_TO_NEXT = "go_to_next"
    SKIP_CHILDREN = "skip_children"
    TERMINATE = "terminate"


Visitor = Callable[[SyntaxNode, bool], WalkStatus]


def walk(root: SyntaxNode, visitor: Visitor) -> None:
    """Walk ``root`` depth first, calling ``visitor(node, entering)``.

    Every node is visited with ``entering=True``. A container whose visitor
    returned ``GO_TO_NEXT`` then has its children walked and is visited again
    with ``entering=False``. Leaf kinds, and containers whose visitor
    returned ``SKIP_CHILDREN``, receive no exit visit. ``TERMINATE`` stops
    the walk immediately.

    Args:
        root: Node to start from (normally the document).
        visitor: Callable invoked for every enter/exit event.
    """
    stack: list[tuple[SyntaxNode, bool]] = [(root, True)]
    while stack:
        node, entering = stack.pop()
        status = visitor(node, entering)

        if status is WalkStatus.TERMINATE:
            logger.debug("Walk terminated at %s node", node.type_name)
            return
        if not entering or not node.kind.is_container:
            continue
        if status is WalkStatus.SKIP_CHILDREN:
            continue

        stack.append((node, False))
        # Reversed so the first child is popped first
        for child in reversed(node.children):
            stack.append((child, True))
