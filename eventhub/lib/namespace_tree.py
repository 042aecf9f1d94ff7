"""Namespace tree holding the registered callbacks.

Every dot-separated segment of an event name maps to one Node. The root node
has no name and is never the target of a trigger.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Callable

from eventhub.constants import NAMESPACE_SEPARATOR, Phase


@dataclass(eq=False)
class Registration:
    """One stored callback. Compared by identity, never by value."""

    callback: Callable
    phase: Phase | None = None
    is_one: bool = False


@dataclass
class Stack:
    """Callbacks and state of a single namespace."""

    callbacks: list[Registration] = field(default_factory=list)
    disabled: bool = False
    trigger_count: int = 0


@dataclass(eq=False)
class Node:
    """A namespace in the tree."""

    name: str = ""
    stack: Stack = field(default_factory=Stack)
    children: dict[str, Node] = field(default_factory=dict)
    _parent: weakref.ReferenceType | None = field(default=None, repr=False)

    @property
    def parent(self) -> Node | None:
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self._parent is None

    def add_child(self, segment: str) -> Node:
        """Create a child namespace and return it."""
        name = f"{self.name}{NAMESPACE_SEPARATOR}{segment}" if self.name else segment
        child = Node(name=name, _parent=weakref.ref(self))
        self.children[segment] = child
        return child

    def depth_first(self, skip_disabled: bool = False) -> Iterator[Node]:
        """Traverse the subtree depth-first, yielding self then children.

        With skip_disabled, a disabled child and its whole subtree are pruned.
        The starting node is always yielded.
        """
        yield self
        for child in list(self.children.values()):
            if skip_disabled and child.stack.disabled:
                continue
            yield from child.depth_first(skip_disabled)

    def ancestors(self) -> Iterator[Node]:
        """Yield the parent chain from the closest ancestor up, root excluded."""
        node = self.parent
        while node is not None and not node.is_root:
            yield node
            node = node.parent


def split_name(name: str | None) -> list[str]:
    """Split an event name into its segments. None and "" mean the root."""
    return name.split(NAMESPACE_SEPARATOR) if name else []


def is_valid_name(name) -> bool:
    """Names must be non-empty strings without empty segments."""
    return isinstance(name, str) and name != "" and all(split_name(name))


class NamespaceTree:
    """Rooted tree of namespaces. Lookups never create nodes, only ensure() does."""

    def __init__(self) -> None:
        self.root = Node()

    def resolve(self, name: str | None) -> Node | None:
        if name is not None and not isinstance(name, str):
            return None
        node = self.root
        for segment in split_name(name):
            node = node.children.get(segment)
            if node is None:
                return None
        return node

    def ensure(self, name: str) -> Node:
        node = self.root
        for segment in split_name(name):
            child = node.children.get(segment)
            node = child if child is not None else node.add_child(segment)
        return node

