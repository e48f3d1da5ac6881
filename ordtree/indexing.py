
import logging
from typing import Iterable, Any, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TreePreconditionError(RuntimeError):
    """Raised when an operation is called on a tree that cannot satisfy it."""


class EmptyTreeError(TreePreconditionError):
    """Raised by operations that need at least one node."""


class OrderedTree:
    """Ordered map backed by an unbalanced binary search tree.

    Every node caches the size of its subtree so that select/median run in
    O(height). No rebalancing is ever done: height depends only on the order
    of insertions and deletions, and sorted insertion degrades to a list.

    All walks use an explicit path or stack instead of recursion, so a
    degenerate tree is bounded by memory, not by the interpreter's
    recursion limit. Operations on such a tree still cost O(N) each.
    """

    class _Node:
        """Nested node class; owns its two subtrees, no parent link."""
        __slots__ = '_key', '_value', '_left', '_right', '_size'

        def __init__(self, key, value, size=1):
            self._key = key
            self._value = value
            self._left = None
            self._right = None
            self._size = size

        def get_key(self): return self._key
        def get_value(self): return self._value

    def __init__(self, none_deletes: bool = False):
        self._root = None
        self._none_deletes = none_deletes

    # ------------------ Accessors ------------------
    def _size(self, x: Optional["OrderedTree._Node"]) -> int:
        if x is None:
            return 0
        return x._size

    def size(self) -> int:
        """Return the number of key-value pairs in the tree."""
        return self._size(self._root)

    def __len__(self) -> int:
        return self.size()

    def is_empty(self) -> bool:
        """Return True if the tree holds no keys."""
        return self.size() == 0

    def __repr__(self) -> str:
        return f"OrderedTree(size={self.size()})"

    def clear(self) -> None:
        """Drop every node."""
        self._root = None

    # ------------------ Iteration ------------------
    def _subtree_inorder(self, x: Optional["OrderedTree._Node"]) -> Iterable["OrderedTree._Node"]:
        """Generate the nodes of the subtree rooted at x in key order."""
        stack = []
        while stack or x is not None:
            if x is not None:
                stack.append(x)
                x = x._left
            else:
                x = stack.pop()
                yield x
                x = x._right

    def __iter__(self) -> Iterable[Any]:
        """Generate an iteration of the tree's keys in ascending order."""
        for node in self._subtree_inorder(self._root):
            yield node.get_key()

    def keys(self) -> Iterable[Any]:
        return iter(self)

    def values(self) -> Iterable[Any]:
        """Generate an iteration of the tree's values in key order."""
        for node in self._subtree_inorder(self._root):
            yield node.get_value()

    def items(self) -> Iterable[Tuple[Any, Any]]:
        for node in self._subtree_inorder(self._root):
            yield node.get_key(), node.get_value()

    # ------------------ Search ------------------
    def _check_key(self, key: Any) -> None:
        if key is None:
            raise ValueError("key must not be None")

    def get(self, key: Any) -> Optional[Any]:
        """Return the value associated with key, or None."""
        self._check_key(key)
        x = self._root
        while x is not None:
            if key < x._key:
                x = x._left
            elif key > x._key:
                x = x._right
            else:
                return x._value
        return None

    def contains(self, key: Any) -> bool:
        """Return True if key is in the tree."""
        return self.get(key) is not None

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def _get_node(self, key: Any, start: Optional["OrderedTree._Node"]) -> "OrderedTree._Node":
        """Walk down from start to the node holding key; key must be present."""
        x = start
        while x is not None:
            if key < x._key:
                x = x._left
            elif key > x._key:
                x = x._right
            else:
                return x
        raise TreePreconditionError(f"key {key!r} is not in the subtree")

    def _find_path(self, key: Any) -> Tuple[Optional["OrderedTree._Node"], List["OrderedTree._Node"]]:
        """Return the node holding key (or None) and the ancestors walked past."""
        path = []
        x = self._root
        while x is not None:
            if key < x._key:
                path.append(x)
                x = x._left
            elif key > x._key:
                path.append(x)
                x = x._right
            else:
                return x, path
        return None, path

    def _resize(self, path: List["OrderedTree._Node"]) -> None:
        """Recompute cached sizes from the bottom of path up to its top."""
        for x in reversed(path):
            x._size = 1 + self._size(x._left) + self._size(x._right)

    def _relink(self, path, old, new) -> None:
        """Put new where old hung below the last node of path (or at the root)."""
        if not path:
            self._root = new
        elif path[-1]._left is old:
            path[-1]._left = new
        else:
            path[-1]._right = new

    # ------------------ Core mutations ------------------
    def put(self, key: Any, value: Any) -> Optional[Any]:
        """Insert or replace entry (key, value) and return old value, or None.

        A None value is rejected unless the tree was built with
        ``none_deletes=True``, in which case it removes key instead.
        """
        self._check_key(key)
        if value is None:
            if self._none_deletes:
                return self.delete(key)
            raise ValueError("value must not be None; use delete() to remove a key")

        x, path = self._find_path(key)
        if x is not None:
            previous = x._value
            x._value = value
            return previous

        leaf = self._Node(key, value, 1)
        if not path:
            self._root = leaf
        elif key < path[-1]._key:
            path[-1]._left = leaf
        else:
            path[-1]._right = leaf
        self._resize(path)
        return None

    def delete(self, key: Any) -> Optional[Any]:
        """Remove the entry with key and return its value, or None if absent.

        A node with two children is replaced by its predecessor, the maximum
        node of its left subtree.
        """
        self._check_key(key)
        x, path = self._find_path(key)
        if x is None:
            return None

        if x._right is None:
            replacement = x._left
        elif x._left is None:
            replacement = x._right
        else:
            replacement = self._get_node(self._floor_of_subtree(x), x._left)
            logger.debug("Replacing %r with predecessor %r", x._key, replacement._key)
            replacement._left = self._delete_max(x._left)
            replacement._right = x._right
            self._resize([replacement])

        self._relink(path, x, replacement)
        self._resize(path)
        return x._value

    def delete_max(self) -> None:
        """Remove the entry with the largest key."""
        if self.is_empty():
            logger.warning("delete_max called on an empty tree")
            raise EmptyTreeError("cannot delete the maximum of an empty tree")
        self._root = self._delete_max(self._root)

    def _delete_max(self, x):
        """Remove the maximum node below x and return the new subtree root."""
        if x._right is None:
            return x._left
        top = x
        path = []
        while x._right is not None:
            path.append(x)
            x = x._right
        path[-1]._right = x._left
        self._resize(path)
        return top

    def _floor_of_subtree(self, x) -> Any:
        """Return the largest key in x's left subtree; x must have a left child."""
        if x is None or x._left is None:
            logger.warning("floor requested for a node without a left subtree")
            raise TreePreconditionError("node has no left subtree")
        walk = x._left
        while walk._right is not None:
            walk = walk._right
        return walk._key

    def floor_of_subtree(self, key: Any) -> Any:
        """Return the predecessor of key inside the subtree rooted at key's node.

        Raises KeyError if key is absent and TreePreconditionError if its
        node has no left child.
        """
        self._check_key(key)
        try:
            node = self._get_node(key, self._root)
        except TreePreconditionError:
            raise KeyError(key) from None
        return self._floor_of_subtree(node)

    # ------------------ Order statistics ------------------
    def select(self, rank: int) -> Optional[Any]:
        """Return the key of the given 0-indexed rank, or None if out of range."""
        if rank < 0 or rank >= self.size():
            return None
        x = self._root
        while x is not None:
            t = self._size(x._left)
            if t > rank:
                x = x._left
            elif t < rank:
                rank -= t + 1
                x = x._right
            else:
                return x._key
        return None

    def median(self) -> Optional[Any]:
        """Return the lower median key, or None for an empty tree."""
        if self.is_empty():
            return None
        return self.select((self.size() - 1) // 2)

    def height(self) -> int:
        """Number of links from the root to the deepest leaf; -1 when empty."""
        deepest = -1
        stack = [(self._root, 0)] if self._root is not None else []
        while stack:
            x, depth = stack.pop()
            deepest = max(deepest, depth)
            if x._left is not None:
                stack.append((x._left, depth + 1))
            if x._right is not None:
                stack.append((x._right, depth + 1))
        return deepest

    # ------------------ Rendering ------------------
    def print_keys_in_order(self) -> str:
        """Return every key in order, each subtree wrapped in parentheses.

        The empty tree is "()"; a lone "A" is "(()A())".
        """
        parts = []
        # entries are (node, None) for a subtree still to render, (None, text) for output
        stack = [(self._root, None)]
        while stack:
            x, piece = stack.pop()
            if piece is not None:
                parts.append(piece)
            elif x is None:
                parts.append("()")
            else:
                stack.append((None, ")"))
                stack.append((x._right, None))
                stack.append((None, str(x._key)))
                stack.append((x._left, None))
                stack.append((None, "("))
        return "".join(parts)

    def pretty_print_keys(self) -> str:
        """Return a multi-line ascii picture of the tree, one line per slot."""
        lines = []
        stack = [(self._root, "")]
        while stack:
            x, prefix = stack.pop()
            if x is None:
                lines.append(prefix + "-null\n")
                continue
            lines.append(prefix + "-" + str(x._value) + "\n")
            stack.append((x._right, prefix + "  "))
            stack.append((x._left, prefix + " |"))
        return "".join(lines)
