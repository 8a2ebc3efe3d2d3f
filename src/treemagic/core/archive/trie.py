from __future__ import annotations

"""
Path Prefix Trie.

Indexes slash-delimited archive paths by segment so that the direct
children of a directory and every item below a prefix can be queried
without rescanning the whole archive listing.
"""

from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

SEPARATOR = "/"


class TrieNode(Generic[T]):
    """A single path segment; holds an item when a full path ends here."""

    __slots__ = ("children", "item", "has_item")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode[T]] = {}
        self.item: Optional[T] = None
        self.has_item = False


class PathTrie(Generic[T]):
    """
    Mapping from slash-delimited paths to items, organized by segment.

    Empty segments are ignored, so 'a//b/' and 'a/b' address the same node.
    """

    def __init__(self) -> None:
        self._root: TrieNode[T] = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        node = self.get_node(path)
        return node is not None and node.has_item

    def set_item(self, path: str, item: T) -> None:
        """
        Store an item at the given path, creating intermediate nodes.

        Args:
            path: Slash-delimited path.
            item: Value associated with the path.
        """
        node = self._root
        for segment in split_path(path):
            node = node.children.setdefault(segment, TrieNode())
        if not node.has_item:
            self._size += 1
        node.item = item
        node.has_item = True

    def get_node(self, prefix: str) -> Optional[TrieNode[T]]:
        """Return the node addressed by a prefix, or None if absent."""
        node = self._root
        for segment in split_path(prefix):
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def children_of(self, prefix: str) -> List[str]:
        """
        List the names directly under a prefix.

        Returns:
            List[str]: Child segment names, empty if the prefix is unknown.
        """
        node = self.get_node(prefix)
        return list(node.children) if node else []

    def entries(self, prefix: str = "") -> Iterator[Tuple[str, T]]:
        """
        Yield every (path, item) stored at or below a prefix.

        Paths are yielded in full form (including the prefix), depth first
        in insertion order.
        """
        node = self.get_node(prefix)
        if node is None:
            return
        yield from _walk(node, split_path(prefix))


def split_path(path: str) -> List[str]:
    """Split a slash-delimited path into its non-empty segments."""
    return [segment for segment in path.split(SEPARATOR) if segment]


def _walk(node: TrieNode[T], segments: List[str]) -> Iterator[Tuple[str, T]]:
    if node.has_item:
        yield SEPARATOR.join(segments), node.item
    for name, child in node.children.items():
        yield from _walk(child, segments + [name])
