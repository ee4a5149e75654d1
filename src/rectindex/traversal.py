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
Read-only traversal of an :class:`~rectindex.core.spatial_index.RTree`.

These functions only go through the tree's public views, so renderers and
other collaborators can explore the structure without being able to change
it.
'''
import toolz


def walk(tree, idx=None):
    """Pre-order, depth-first iterator of node views from `idx` (the root by
    default)."""
    view = tree.node(idx)
    yield view
    if not view.isleaf:
        for child in view.children:
            yield from walk(tree, child)


def leaves(tree):
    return (view for view in walk(tree) if view.isleaf)


def rectangles(tree):
    """Stored rectangles in traversal order."""
    return list(toolz.concat(view.children for view in leaves(tree)))


def nodes_by_level(tree):
    """Mapping of level to the node views at that level, left to right."""
    return toolz.groupby(lambda view: view.level, walk(tree))


def _format_box(box):
    if box is None:
        return "undefined"
    return "({:.1f}, {:.1f}, {:.1f}, {:.1f})".format(
        box.x, box.y, box.width, box.height)


def _rect_data(rect):
    return {
        "name": "Rect ({:.1f}, {:.1f})".format(rect.x, rect.y),
        "attributes": toolz.valmap(
            "{:.1f}".format,
            {"x": rect.x, "y": rect.y,
             "width": rect.width, "height": rect.height},
        ),
    }


def tree_data(tree, idx=None):
    """
    Nested dictionaries describing the tree, as consumed by tree diagram
    renderers.

    Each node becomes ``{"name": "Level <n>", "attributes": {"boundingBox":
    ...}, "children": [...]}``. Children of a leaf are the stored
    rectangles, with their coordinates formatted to one decimal.
    """
    view = tree.node(idx)
    if view.isleaf:
        children = [_rect_data(rect) for rect in view.children]
    else:
        children = [tree_data(tree, child) for child in view.children]
    return {
        "name": "Level {}".format(view.level),
        "attributes": {"boundingBox": _format_box(view.bbox)},
        "children": children,
    }
