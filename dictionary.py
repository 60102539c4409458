"""
Dictionary: a trie mapping words to definitions, with one-shot compression.

Techniques used:
  - Edge labels: every node carries the label of the edge leading to it and
    children are keyed by the first character of that label, so sibling
    labels never share a first character.
  - Edge splitting: inserting a word that diverges part-way through a label
    splits the edge into the common prefix and a node holding the rest.
  - Recursive removal with an explicit pruning result: each level reports
    whether its node was absent, is kept, or must be unlinked by the parent.
  - Terminal compression: ``compress`` folds every chain of single-child,
    non-word-end nodes into one multi-character label and freezes the
    dictionary against further mutation.

Complexity (n = word length, m = nodes below the prefix):
  add / remove / lookup / sequence: O(n)
  count_prefix:                      O(n + m)
  compress:                          O(total nodes)
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class _TrieNode:
    """Internal node of the dictionary trie."""

    label: str = ""
    children: dict[str, _TrieNode] = field(default_factory=dict)
    is_end: bool = False
    # Only meaningful while is_end is set.
    definition: str | None = None


class _Removal(enum.Enum):
    """Outcome of removing a word below a node."""

    ABSENT = "absent"
    KEEP = "keep"
    UNLINK = "unlink"


def _common_prefix_length(label: str, word: str, start: int) -> int:
    """Length of the common prefix of *label* and ``word[start:]``."""
    j = 0
    while j < len(label) and start + j < len(word) and word[start + j] == label[j]:
        j += 1
    return j


class Dictionary:
    """A trie that maps words to definitions.

    >>> d = Dictionary()
    >>> d.add("cat", "feline")
    >>> d.add("car", "vehicle")
    >>> d.add("care", "attention")
    >>> d.count_prefix("ca")
    3
    >>> d.remove("car")
    True
    >>> d.lookup("car") is None
    True
    >>> d.compress()
    >>> d.lookup("cat")
    'feline'
    >>> d.sequence("care")
    'ca-re'
    """

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._size = 0
        self._compressed = False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, word: str, definition: str) -> None:
        """Store *word* with *definition*, overwriting an existing entry."""
        if not word:
            return
        if self._compressed:
            logger.debug("Ignoring add(%r): dictionary is compressed", word)
            return
        node = self._root
        i = 0
        while i < len(word):
            child = node.children.get(word[i])
            if child is None:
                node.children[word[i]] = _TrieNode(
                    label=word[i:], is_end=True, definition=definition
                )
                self._size += 1
                return
            j = _common_prefix_length(child.label, word, i)
            if j < len(child.label):
                self._split(child, j)
            node = child
            i += j
        if not node.is_end:
            self._size += 1
        node.is_end = True
        node.definition = definition

    def remove(self, word: str) -> bool:
        """Remove *word*. Returns ``True`` if it was stored."""
        if not word:
            return False
        if self._compressed:
            logger.debug("Ignoring remove(%r): dictionary is compressed", word)
            return False
        # An UNLINK reaching the root only means the dictionary is now empty.
        if self._remove(self._root, word, 0) is _Removal.ABSENT:
            return False
        self._size -= 1
        return True

    def compress(self) -> None:
        """Merge single-child chains into combined labels; freezes the trie."""
        if self._compressed:
            return
        before = self.node_count()
        # The root keeps its empty label; folding starts at its children.
        stack = list(self._root.children.values())
        while stack:
            node = stack.pop()
            while len(node.children) == 1 and not node.is_end:
                (only,) = node.children.values()
                node.label += only.label
                node.children = only.children
                node.is_end = only.is_end
                node.definition = only.definition
            stack.extend(node.children.values())
        self._compressed = True
        logger.debug("Compressed dictionary from %d to %d nodes", before, self.node_count())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, word: str) -> str | None:
        """Return the definition of *word*, or ``None`` if absent."""
        path = self._walk(word)
        if not path or not path[-1].is_end:
            return None
        return path[-1].definition

    def sequence(self, word: str) -> str | None:
        """Return the compressed labels spelling *word*, joined by ``-``.

        Only available once the dictionary is compressed; ``None`` before
        that or when *word* is not stored.
        """
        if not self._compressed:
            return None
        path = self._walk(word)
        if not path or not path[-1].is_end:
            return None
        return "-".join(node.label for node in path)

    def count_prefix(self, prefix: str) -> int:
        """Number of stored words starting with *prefix* (itself included)."""
        node = self._find_prefix_node(prefix)
        if node is None:
            return 0
        count = 0
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_end:
                count += 1
            stack.extend(current.children.values())
        return count

    def node_count(self) -> int:
        """Number of nodes below the root."""
        count = 0
        stack = list(self._root.children.values())
        while stack:
            current = stack.pop()
            count += 1
            stack.extend(current.children.values())
        return count

    @property
    def compressed(self) -> bool:
        return self._compressed

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: str) -> bool:
        return self.lookup(word) is not None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _split(node: _TrieNode, at: int) -> None:
        """Cut *node*'s label at *at*, moving the rest into a new child.

        The tail node takes over the children, end flag and definition, so
        ``node.label + tail.label`` still spells the original label.
        """
        tail = _TrieNode(
            label=node.label[at:],
            children=node.children,
            is_end=node.is_end,
            definition=node.definition,
        )
        node.label = node.label[:at]
        node.children = {tail.label[0]: tail}
        node.is_end = False
        node.definition = None

    def _remove(self, node: _TrieNode, word: str, i: int) -> _Removal:
        if i == len(word):
            if not node.is_end:
                return _Removal.ABSENT
            node.is_end = False
            node.definition = None
            return _Removal.KEEP if node.children else _Removal.UNLINK
        child = node.children.get(word[i])
        if child is None or not word.startswith(child.label, i):
            return _Removal.ABSENT
        result = self._remove(child, word, i + len(child.label))
        if result is not _Removal.UNLINK:
            return result
        del node.children[word[i]]
        if node.is_end or node.children:
            return _Removal.KEEP
        return _Removal.UNLINK

    def _walk(self, word: str) -> list[_TrieNode] | None:
        """Follow whole labels along *word*; return the nodes passed."""
        if not word:
            return None
        path: list[_TrieNode] = []
        node = self._root
        i = 0
        while i < len(word):
            child = node.children.get(word[i])
            if child is None or not word.startswith(child.label, i):
                return None
            path.append(child)
            node = child
            i += len(child.label)
        return path

    def _find_prefix_node(self, prefix: str) -> _TrieNode | None:
        """Walk along *prefix*; a prefix may end inside a label."""
        node = self._root
        i = 0
        while i < len(prefix):
            child = node.children.get(prefix[i])
            if child is None:
                return None
            j = _common_prefix_length(child.label, prefix, i)
            if j < len(child.label):
                # Every word below child extends the prefix if it ran out here.
                if i + j == len(prefix):
                    return child
                return None
            node = child
            i += j
        return node


# ------------------------------------------------------------------
# Quick demo
# ------------------------------------------------------------------

if __name__ == "__main__":
    d = Dictionary()

    entries = {
        "cat": "feline",
        "car": "vehicle",
        "care": "attention",
        "cart": "wheeled container",
        "dog": "canine",
    }
    for w, definition in entries.items():
        d.add(w, definition)

    print(f"Dictionary size: {len(d)}")
    print(f"lookup('car')          → {d.lookup('car')}")
    print(f"count_prefix('ca')     → {d.count_prefix('ca')}")

    d.remove("car")
    print(f"\nAfter removing 'car':")
    print(f"lookup('car')          → {d.lookup('car')}")
    print(f"lookup('care')         → {d.lookup('care')}")
    print(f"count_prefix('ca')     → {d.count_prefix('ca')}")

    nodes = d.node_count()
    d.compress()
    print(f"\nAfter compress ({nodes} → {d.node_count()} nodes):")
    print(f"sequence('cat')        → {d.sequence('cat')}")
    print(f"sequence('cart')       → {d.sequence('cart')}")
