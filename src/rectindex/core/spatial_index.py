# Copyright (C) 2018 DataStorm
#
# This file is part of RectIndex.
#
# RectIndex is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# RectIndex is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
R-tree over axis-aligned rectangles.

The base data structure is the class :class:`RTree`. It answers "which
stored rectangles intersect this area" and stays balanced by splitting
overflowing nodes on insertion.
'''
import collections
import logging
import math
import numbers

from rectindex.envelope import (
    Rect, bounds, bounds_area, bounds_intersect, check_rect, intersects,
    merge_bounds, union_bounds)
from rectindex.exceptions import InvalidCapacity, InvalidQuery
from rectindex.core import split

log = logging.getLogger(__name__)


# ========================  RTree Data Structure  =============================

# The data model for the tree is as follows:
#   1. Nodes are stored in a 1d-buffer indexed by non-negative integers.
#   1. The root node index is kept apart and changes when the root splits.
#   1. There are 2 types of nodes:
#          a. leaf nodes, at level 1, whose children are the stored
#             rectangles themselves.
#          a. internal nodes whose children are indices of other nodes, all
#             one level below.
#   1. Each node carries the exact bounds of its children, None only when
#      the node is empty (an empty tree has a single empty leaf as root).
#   1. A node is referenced by at most one parent: the nodes form a tree.
#   1. Outside of an insert, no node has more than `max_entries` children.


class Node():
    """Mutable node record of the buffer.

    `bounds` is the exact (minx, miny, maxx, maxy) of the children, None for
    an empty node.
    """
    __slots__ = ('level', 'isleaf', 'children', 'bounds')

    def __init__(self, level, isleaf, children=None, bounds=None):
        self.level = level
        self.isleaf = isleaf
        self.children = [] if children is None else children
        self.bounds = bounds

    @property
    def bbox(self):
        if self.bounds is None:
            return None
        return Rect.from_bounds(*self.bounds)

    def __repr__(self):
        return "Node(level={}, isleaf={}, children={}, bounds={})".format(
            self.level, self.isleaf, self.children, self.bounds)


NodeView = collections.namedtuple(
    'NodeView', 'idx level isleaf children bbox bounds')
# Read-only copy of a node handed out to callers.


def _expand(node_bounds, entry_bounds):
    if node_bounds is None:
        return entry_bounds
    return union_bounds(node_bounds, entry_bounds)


class RTree():
    """
    In-memory R-tree of rectangles.

    Rectangles are stored as given and compared by identity: the tree never
    copies nor modifies them.

    Args:
        max_entries (int, optional): capacity of a node, at least 2.
            Defaults to 4.

    Attributes:
        nodes (list of Node): buffer of the tree nodes.
        root (int): index of the root node in `nodes`.
        items (list): stored rectangles in insertion order.
        stats (dict): cumulative `splits` and `root_splits` counts, and
            `nodes_visited` by the last search.
    """
    def __init__(self, max_entries=4):
        if (isinstance(max_entries, bool)
                or not isinstance(max_entries, numbers.Integral)
                or max_entries < 2):
            raise InvalidCapacity(
                "max_entries must be an integer of at least 2, got {!r}"
                .format(max_entries)
            )
        self.max_entries = int(max_entries)
        self.stats = {
            "splits": 0,
            "root_splits": 0,
            "nodes_visited": 0,
        }
        self._clear()

    def _clear(self):
        self.nodes = []
        self.items = []
        self.root = self._new_node(level=1, isleaf=True)

    def __repr__(self):
        return "<{} of {} rectangles, height {}, max_entries {}>".format(
            self.__class__.__name__, len(self), self.height, self.max_entries)

    def __len__(self):
        """Number of stored rectangles."""
        return len(self.items)

    def __iter__(self):
        return iter(tuple(self.items))

    def __contains__(self, rect):
        return any(item is rect for item in self.items)

    @property
    def isempty(self):
        return not self.items

    @property
    def height(self):
        """Number of levels, 1 for a tree reduced to its root leaf."""
        return self.nodes[self.root].level

    @property
    def bbox(self):
        """Bounding box of all rectangles, None if the tree is empty."""
        return self.nodes[self.root].bbox

    @property
    def bounds(self):
        """Exact (minx, miny, maxx, maxy) of all rectangles, None if empty."""
        return self.nodes[self.root].bounds

    def node(self, idx=None):
        """Read-only view of node `idx`, the root by default."""
        if idx is None:
            idx = self.root
        node = self.nodes[idx]
        return NodeView(idx, node.level, node.isleaf, tuple(node.children),
                        node.bbox, node.bounds)

    def children(self, idx=None):
        """Indices of the child nodes of `idx`. Leaves have none."""
        if idx is None:
            idx = self.root
        node = self.nodes[idx]
        if node.isleaf:
            return
        yield from node.children

    # ------------------------------------------------------------  Updates

    def insert(self, rect):
        """Stores `rect`. The tree grows one level if the root splits."""
        check_rect(rect)
        self._add(rect)

    def extend(self, rects):
        """Stores every rectangle of `rects`, in order.

        Nothing is stored if any of them is invalid.
        """
        rects = [check_rect(r) for r in rects]
        for rect in rects:
            self._add(rect)

    def remove(self, rect):
        """
        Drops every stored occurrence of the object `rect`.

        There is no in-place deletion: the tree is rebuilt from the remaining
        rectangles, inserted again in their original order. Each call thus
        costs as much as indexing all the rectangles from scratch.

        Raises:
            KeyError: if `rect` is not stored.
        """
        if rect not in self:
            raise KeyError(rect)
        remaining = [item for item in self.items if item is not rect]
        log.debug("Rebuilding tree from %d rectangles", len(remaining))
        self._clear()
        for item in remaining:
            self._add(item)

    def clear(self):
        """Drops all rectangles."""
        self._clear()

    def _add(self, rect):
        sibling = self._insert(self.root, rect)
        if sibling is not None:
            self._grow(sibling)
        self.items.append(rect)

    def _new_node(self, level, isleaf, children=None, bounds=None):
        self.nodes.append(Node(level, isleaf, children, bounds))
        return len(self.nodes) - 1

    def _entry_bounds(self, node, entry):
        if node.isleaf:
            return bounds(entry)
        return self.nodes[entry].bounds

    def _insert(self, idx, item):
        """
        Inserts `item` below node `idx`.

        Returns the index of a new sibling of `idx` if `idx` overflowed and
        was split, None otherwise. The caller must adopt the sibling.
        """
        node = self.nodes[idx]
        item_bounds = bounds(item)
        if node.isleaf:
            node.children.append(item)
            node.bounds = _expand(node.bounds, item_bounds)
        else:
            best = self.choose_subtree(idx, item)
            sibling = self._insert(best, item)
            # Whichever half of a split child holds the item, the box must
            # still cover it.
            node.bounds = _expand(node.bounds, item_bounds)
            if sibling is None:
                return None
            node.children.append(sibling)
            node.bounds = _expand(node.bounds, self.nodes[sibling].bounds)
        if len(node.children) > self.max_entries:
            return self._split(idx)
        return None

    def choose_subtree(self, idx, box):
        """
        Child of internal node `idx` whose box grows the least in area when
        covering `box`. Ties go to the smallest area, then to the first child.
        """
        box_bounds = bounds(box)
        best = None
        best_increase = math.inf
        best_area = math.inf
        for child in self.nodes[idx].children:
            child_bounds = self.nodes[child].bounds
            before = bounds_area(child_bounds)
            increase = (bounds_area(union_bounds(child_bounds, box_bounds))
                        - before)
            if (increase < best_increase
                    or (increase == best_increase and before < best_area)):
                best, best_increase, best_area = child, increase, before
        return best

    def _split(self, idx):
        """Moves part of the children of `idx` to a new sibling node.

        Returns the index of the sibling.
        """
        node = self.nodes[idx]
        entries = node.children
        entry_bounds = [self._entry_bounds(node, e) for e in entries]
        if node.isleaf:
            boxes = entries
        else:
            boxes = [self.nodes[e].bbox for e in entries]
        group1, group2 = split.split_entries(boxes, entry_bounds)

        node.children = [entries[k] for k in group1]
        node.bounds = merge_bounds(entry_bounds[k] for k in group1)
        sibling = self._new_node(
            level=node.level,
            isleaf=node.isleaf,
            children=[entries[k] for k in group2],
            bounds=merge_bounds(entry_bounds[k] for k in group2),
        )
        self.stats["splits"] += 1
        log.debug("Split node %d at level %d into %d + %d entries",
                  idx, node.level, len(group1), len(group2))
        return sibling

    def _grow(self, sibling):
        """New root above the old root and its sibling."""
        old = self.nodes[self.root]
        self.root = self._new_node(
            level=old.level + 1,
            isleaf=False,
            children=[self.root, sibling],
            bounds=union_bounds(old.bounds, self.nodes[sibling].bounds),
        )
        self.stats["root_splits"] += 1
        log.debug("Root split, tree height is now %d", self.height)

    # -------------------------------------------------------------  Queries

    def search(self, query):
        """
        Rectangles intersecting `query`, in depth-first, left-to-right order.

        Touching edges do not count as intersecting. An empty tree returns
        an empty list.

        The tree itself is left untouched; the only state written is
        ``stats["nodes_visited"]``, reset and counted by every call.
        """
        check_rect(query, error=InvalidQuery)
        self.stats["nodes_visited"] = 0
        return self._search(self.root, query, [])

    def _search(self, idx, query, results):
        node = self.nodes[idx]
        if node.bounds is None or not bounds_intersect(node.bounds, query):
            return results
        self.stats["nodes_visited"] += 1
        if node.isleaf:
            results.extend(item for item in node.children
                           if intersects(item, query))
        else:
            for child in node.children:
                self._search(child, query, results)
        return results
