"""Red-black tree keyed by movie id.

Every leaf is the tree's single ``NIL`` sentinel, a black node with no
children, so rotations and fix-ups never have to test for ``None`` children.
Only the root's ``parent`` is ``None``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator

from .entities import Movie


class Color(enum.Enum):
    RED = 0
    BLACK = 1


RED = Color.RED
BLACK = Color.BLACK


class IndexNode:
    __slots__ = ("movie", "color", "left", "right", "parent")

    def __init__(self, movie: Movie | None, color: Color = RED):
        self.movie = movie
        self.color = color
        self.left: IndexNode | None = None
        self.right: IndexNode | None = None
        self.parent: IndexNode | None = None

    @property
    def key(self) -> int:
        return self.movie.id


class OrderedCatalogIndex:
    """Ordered map from movie id to :class:`Movie`.

    Duplicate ids are rejected: ``insert`` raises ``ValueError`` and the tree
    is left unchanged.
    """

    def __init__(self):
        self.NIL = IndexNode(None, BLACK)
        self.root = self.NIL
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, movie_id: int) -> bool:
        return self._find(movie_id) is not self.NIL

    def __iter__(self) -> Iterator[Movie]:
        return self.in_order()

    # rotations

    def _rotate_left(self, x: IndexNode) -> None:
        y = x.right
        x.right = y.left
        if y.left is not self.NIL:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is None:
            self.root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _rotate_right(self, x: IndexNode) -> None:
        y = x.left
        x.left = y.right
        if y.right is not self.NIL:
            y.right.parent = x
        y.parent = x.parent
        if x.parent is None:
            self.root = y
        elif x is x.parent.right:
            x.parent.right = y
        else:
            x.parent.left = y
        y.right = x
        x.parent = y

    # insertion

    def insert(self, movie: Movie) -> None:
        parent = None
        cur = self.root
        while cur is not self.NIL:
            parent = cur
            if movie.id == cur.key:
                raise ValueError(f"Movie id {movie.id} already in catalog")
            cur = cur.left if movie.id < cur.key else cur.right

        node = IndexNode(movie, RED)
        node.left = self.NIL
        node.right = self.NIL
        node.parent = parent
        if parent is None:
            self.root = node
        elif movie.id < parent.key:
            parent.left = node
        else:
            parent.right = node
        self._size += 1
        self._fix_insert(node)

    def _fix_insert(self, k: IndexNode) -> None:
        while k.parent is not None and k.parent.color is RED:
            grand = k.parent.parent
            if k.parent is grand.right:
                uncle = grand.left
                if uncle.color is RED:
                    uncle.color = BLACK
                    k.parent.color = BLACK
                    grand.color = RED
                    k = grand
                else:
                    if k is k.parent.left:
                        k = k.parent
                        self._rotate_right(k)
                    k.parent.color = BLACK
                    k.parent.parent.color = RED
                    self._rotate_left(k.parent.parent)
            else:
                uncle = grand.right
                if uncle.color is RED:
                    uncle.color = BLACK
                    k.parent.color = BLACK
                    grand.color = RED
                    k = grand
                else:
                    if k is k.parent.right:
                        k = k.parent
                        self._rotate_left(k)
                    k.parent.color = BLACK
                    k.parent.parent.color = RED
                    self._rotate_right(k.parent.parent)
        self.root.color = BLACK

    # lookup and traversal

    def _find(self, movie_id: int) -> IndexNode:
        node = self.root
        while node is not self.NIL and node.key != movie_id:
            node = node.left if movie_id < node.key else node.right
        return node

    def search(self, movie_id: int) -> Movie | None:
        node = self._find(movie_id)
        return None if node is self.NIL else node.movie

    def in_order(self) -> Iterator[Movie]:
        stack: list[IndexNode] = []
        node = self.root
        while stack or node is not self.NIL:
            while node is not self.NIL:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.movie
            node = node.right

    def _minimum(self, node: IndexNode) -> IndexNode:
        while node.left is not self.NIL:
            node = node.left
        return node

    def minimum(self) -> Movie | None:
        if self.root is self.NIL:
            return None
        return self._minimum(self.root).movie

    def maximum(self) -> Movie | None:
        node = self.root
        if node is self.NIL:
            return None
        while node.right is not self.NIL:
            node = node.right
        return node.movie

    # deletion

    def _transplant(self, u: IndexNode, v: IndexNode) -> None:
        if u.parent is None:
            self.root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent

    def remove(self, movie_id: int) -> bool:
        z = self._find(movie_id)
        if z is self.NIL:
            return False

        y = z
        y_original_color = y.color
        if z.left is self.NIL:
            x = z.right
            self._transplant(z, z.right)
        elif z.right is self.NIL:
            x = z.left
            self._transplant(z, z.left)
        else:
            y = self._minimum(z.right)
            y_original_color = y.color
            x = y.right
            if y.parent is z:
                x.parent = y
            else:
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.color = z.color

        self._size -= 1
        if y_original_color is BLACK:
            self._fix_delete(x)
        # the sentinel's parent is scratch space for the fix-up only
        self.NIL.parent = None
        return True

    def _fix_delete(self, x: IndexNode) -> None:
        while x is not self.root and x.color is BLACK:
            if x is x.parent.left:
                s = x.parent.right
                if s.color is RED:
                    s.color = BLACK
                    x.parent.color = RED
                    self._rotate_left(x.parent)
                    s = x.parent.right
                if s.left.color is BLACK and s.right.color is BLACK:
                    s.color = RED
                    x = x.parent
                else:
                    if s.right.color is BLACK:
                        s.left.color = BLACK
                        s.color = RED
                        self._rotate_right(s)
                        s = x.parent.right
                    s.color = x.parent.color
                    x.parent.color = BLACK
                    s.right.color = BLACK
                    self._rotate_left(x.parent)
                    x = self.root
            else:
                s = x.parent.left
                if s.color is RED:
                    s.color = BLACK
                    x.parent.color = RED
                    self._rotate_right(x.parent)
                    s = x.parent.left
                if s.right.color is BLACK and s.left.color is BLACK:
                    s.color = RED
                    x = x.parent
                else:
                    if s.left.color is BLACK:
                        s.right.color = BLACK
                        s.color = RED
                        self._rotate_left(s)
                        s = x.parent.left
                    s.color = x.parent.color
                    x.parent.color = BLACK
                    s.left.color = BLACK
                    self._rotate_right(x.parent)
                    x = self.root
        x.color = BLACK
