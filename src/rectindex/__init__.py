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
"""
Spatial indexing of rectangles with an R-tree.

Rectangles are grouped under shared bounding boxes, level by level, so that
a search only visits the parts of the tree whose boxes intersect the query
area. The tree is kept balanced by splitting nodes as rectangles are
inserted: when a node overflows, its entries are divided between itself and
a new sibling, and when the root overflows the tree grows a new root.

Nodes are stored in a flat buffer and refer to their children by index.
Callers inspect them through read-only views.

Example:
    >>> tree = RTree(max_entries=4)
    >>> tree.insert(Rect(0, 0, 10, 10))
    >>> tree.search(Rect(5, 5, 1, 1))
    [Rect(x=0, y=0, width=10, height=10)]
"""
from .envelope import Rect, RectArray  # noqa: F401
from .exceptions import (  # noqa: F401
    RectIndexError, InvalidRectangle, InvalidQuery, InvalidCapacity)
from .core.spatial_index import RTree  # noqa: F401
from .traversal import walk, tree_data  # noqa: F401

__version__ = "0.1.0"
