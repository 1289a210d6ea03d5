"""
AVL Tree -- self-balancing binary search tree over unique ordered values.

Every node caches its height. After each structural change the nodes on the
path back to the root are rebalanced bottom-up with zero, one or two rotations,
which keeps |height(left) - height(right)| <= 1 everywhere and the tree height
within ~1.44 * log2(n + 2). Only ``<`` is ever called on stored values; two
values are equal when neither is less than the other.
"""

import logging
import sys
from typing import TypeVar, Generic, List, Iterator, Optional, TextIO, Tuple

T = TypeVar('T')

logger = logging.getLogger(__name__)


class AVLTree(Generic[T]):
    class Node:
        def __init__(self, value: T) -> None:
            self.value: T = value
            self.left: Optional['AVLTree.Node'] = None
            self.right: Optional['AVLTree.Node'] = None
            self.height: int = 1

        def __repr__(self) -> str:
            return f"Node({self.value!r}, h={self.height})"

    def __init__(self) -> None:
        self._root: Optional[AVLTree.Node] = None
        self._size: int = 0

    # ------------------------------------------------------------------
    # Height / balance accessors
    # ------------------------------------------------------------------

    def _get_height(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        return node.height

    def _update_height(self, node: Node) -> None:
        node.height = 1 + max(self._get_height(node.left), self._get_height(node.right))

    def _get_balance(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        return self._get_height(node.left) - self._get_height(node.right)

    # ------------------------------------------------------------------
    # Rotations and rebalancing
    # ------------------------------------------------------------------

    def _right_rotate(self, y: Node) -> Node:
        x = y.left
        assert x is not None
        logger.debug("right rotation at %r", y.value)

        y.left = x.right
        x.right = y

        self._update_height(y)
        self._update_height(x)

        return x

    def _left_rotate(self, x: Node) -> Node:
        y = x.right
        assert y is not None
        logger.debug("left rotation at %r", x.value)

        x.right = y.left
        y.left = x

        self._update_height(x)
        self._update_height(y)

        return y

    def _rebalance(self, node: Node) -> Node:
        """Restore the AVL condition at ``node`` and return the subtree root.

        Both subtrees must already be valid AVL trees whose heights differ by
        at most 2, which holds whenever a single insert or removal happened
        below this node.
        """
        self._update_height(node)
        balance = self._get_balance(node)

        if balance > 1:
            if self._get_balance(node.left) < 0:
                assert node.left is not None
                node.left = self._left_rotate(node.left)
            return self._right_rotate(node)

        if balance < -1:
            if self._get_balance(node.right) > 0:
                assert node.right is not None
                node.right = self._right_rotate(node.right)
            return self._left_rotate(node)

        return node

    # ------------------------------------------------------------------
    # Structural operations
    # ------------------------------------------------------------------

    def _insert(self, node: Optional[Node], value: T) -> Node:
        if node is None:
            new_node = AVLTree.Node(value)
            self._size += 1
            return new_node

        if value < node.value:
            node.left = self._insert(node.left, value)
        elif node.value < value:
            node.right = self._insert(node.right, value)
        else:
            return node

        return self._rebalance(node)

    def insert(self, value: T) -> None:
        self._root = self._insert(self._root, value)

    def _find_min_node(self, node: Node) -> Node:
        while node.left is not None:
            node = node.left
        return node

    def _remove_min(self, node: Node) -> Optional[Node]:
        # Every frame on the way back up rebalances, not just the top one.
        if node.left is None:
            return node.right
        node.left = self._remove_min(node.left)
        return self._rebalance(node)

    def _remove(self, node: Optional[Node], value: T) -> Optional[Node]:
        if node is None:
            return None

        if value < node.value:
            node.left = self._remove(node.left, value)
        elif node.value < value:
            node.right = self._remove(node.right, value)
        else:
            left, right = node.left, node.right
            node.left = node.right = None
            self._size -= 1
            logger.debug("removed %r", node.value)

            if right is None:
                return left

            successor = self._find_min_node(right)
            successor.right = self._remove_min(right)
            successor.left = left
            return self._rebalance(successor)

        return self._rebalance(node)

    def remove(self, value: T) -> None:
        self._root = self._remove(self._root, value)

    def _clear(self, node: Optional[Node]) -> None:
        if node is None:
            return
        self._clear(node.left)
        self._clear(node.right)
        node.left = node.right = None

    def clear(self) -> None:
        self._clear(self._root)
        self._root = None
        self._size = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, value: T) -> bool:
        node = self._root
        while node is not None:
            if value < node.value:
                node = node.left
            elif node.value < value:
                node = node.right
            else:
                return True
        return False

    def min(self) -> T:
        if self._root is None:
            raise ValueError("min from empty tree")
        return self._find_min_node(self._root).value

    def max(self) -> T:
        if self._root is None:
            raise ValueError("max from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def height(self) -> int:
        return self._get_height(self._root)

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------

    def in_order(self) -> List[T]:
        result: List[T] = []
        stack: List[AVLTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.value)
            node = node.right
        return result

    def pre_order(self) -> List[T]:
        result: List[T] = []
        if self._root is None:
            return result
        stack: List[AVLTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.value)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def post_order(self) -> List[T]:
        result: List[T] = []
        if self._root is None:
            return result
        stack: List[AVLTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.value)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        result.reverse()
        return result

    # ------------------------------------------------------------------
    # Copying and validation
    # ------------------------------------------------------------------

    def _copy_node(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        clone = AVLTree.Node(node.value)
        clone.height = node.height
        clone.left = self._copy_node(node.left)
        clone.right = self._copy_node(node.right)
        return clone

    def copy(self) -> 'AVLTree[T]':
        """Return an independent tree with the same shape and values."""
        clone: AVLTree[T] = AVLTree()
        clone._root = self._copy_node(self._root)
        clone._size = self._size
        return clone

    def _is_balanced(self, node: Optional[Node]) -> bool:
        if node is None:
            return True
        balance = self._get_balance(node)
        if abs(balance) > 1:
            return False
        return self._is_balanced(node.left) and self._is_balanced(node.right)

    def is_balanced(self) -> bool:
        return self._is_balanced(self._root)

    def validate(self) -> None:
        """Check every structural invariant of the tree.

        Raises ``AssertionError`` describing the first violation found: search
        order (which also rules out duplicates), cached heights, AVL balance
        and the element count.
        """

        Node = AVLTree.Node

        # low and high are the nearest ancestors bounding node's value
        def check(node: Optional[Node], low: Optional[Node], high: Optional[Node]) -> Tuple[int, int]:
            if node is None:
                return 0, 0
            if low is not None and not low.value < node.value:
                raise AssertionError(f"order violated: {node.value!r} is not greater than {low.value!r}")
            if high is not None and not node.value < high.value:
                raise AssertionError(f"order violated: {node.value!r} is not less than {high.value!r}")

            left_height, left_count = check(node.left, low, node)
            right_height, right_count = check(node.right, node, high)

            expected = 1 + max(left_height, right_height)
            if node.height != expected:
                raise AssertionError(
                    f"stale height at {node.value!r}: cached {node.height}, actual {expected}"
                )
            if abs(left_height - right_height) > 1:
                raise AssertionError(
                    f"unbalanced at {node.value!r}: balance factor {left_height - right_height}"
                )
            return expected, left_count + right_count + 1

        _, count = check(self._root, None, None)
        if count != self._size:
            raise AssertionError(f"size mismatch: counted {count}, recorded {self._size}")

    # ------------------------------------------------------------------
    # Diagnostic rendering
    # ------------------------------------------------------------------

    def _render_node(self, node: Optional[Node], prefix: str, is_left: bool, lines: List[str]) -> None:
        if node is None:
            return
        branch = "├──" if is_left else "└──"
        lines.append(f"{prefix}{branch}{node.value} (h:{node.height}, b:{self._get_balance(node)})")
        child_prefix = prefix + ("│   " if is_left else "    ")
        self._render_node(node.left, child_prefix, True, lines)
        self._render_node(node.right, child_prefix, False, lines)

    def render(self) -> str:
        """Text drawing of the tree, one node per line with height and balance."""
        if self._root is None:
            return "Tree is empty\n\n"
        lines = ["AVL tree (h - height, b - balance):"]
        self._render_node(self._root, "", False, lines)
        return "\n".join(lines) + "\n\n"

    def pretty_print(self, file: Optional[TextIO] = None) -> None:
        out = file if file is not None else sys.stdout
        out.write(self.render())

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[T]:
        return iter(self.in_order())

    def __repr__(self) -> str:
        return f"AVLTree({self.in_order()})"

    def __str__(self) -> str:
        return f"AVLTree(size={self._size}, height={self.height()})"
