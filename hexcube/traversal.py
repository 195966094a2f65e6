"""
Tree traversal over any hierarchy, given a function returning a node's children.

The hierarchy itself (a scene graph, a widget tree, nested dicts...) stays
with the caller; nothing here knows about node types.
"""
from __future__ import annotations
from typing import Callable, Iterable, Iterator, List, Sequence, Tuple, TypeVar

NodeT = TypeVar("NodeT")
T = TypeVar("T")

ChildrenOf = Callable[[NodeT], Iterable[NodeT]]


def _family(node, children):
    return node, children


def depth_first(
    root: NodeT,
    children_of: ChildrenOf,
    selector: Callable[[NodeT, List[NodeT]], T] = _family,
) -> Iterator[T]:
    """
    Visit all descendants depth-first, passing each node with its children
    to `selector`. The root comes first.

    Every leaf is also visited, so the last calls always get an empty
    list of children.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        children = list(children_of(node))
        yield selector(node, children)
        stack.extend(reversed(children))


def breadth_first(
    root: NodeT,
    children_of: ChildrenOf,
    selector: Callable[[List[NodeT]], T] = list,
) -> Iterator[T]:
    """
    Visit descendants one generation at a time, passing each whole
    generation to `selector`. The root alone is never passed, and iteration
    stops at the first empty generation.
    """
    generation: List[NodeT] = [root]
    while True:
        generation = [child for node in generation for child in children_of(node)]
        if not generation:
            break
        yield selector(generation)


def map_children(
    node: NodeT,
    children_of: ChildrenOf,
    selector: Callable[[NodeT], T],
) -> Iterator[T]:
    for child in children_of(node):
        yield selector(child)


def descendants(root: NodeT, children_of: ChildrenOf) -> Iterator[NodeT]:
    """All nodes below `root` in depth-first order, excluding the root."""
    families: Iterator[Tuple[NodeT, Sequence[NodeT]]] = depth_first(root, children_of)
    next(families)
    for node, _ in families:
        yield node
