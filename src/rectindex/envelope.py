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
Axis-aligned rectangles and their arithmetic.

Rectangles are given by their lower corner and their extent,
``(x, y, width, height)``. Every function of this module accepts any object
exposing these four attributes, so callers may index their own records as
long as they look like a :class:`Rect`. Bounding boxes computed here are
always plain :class:`Rect`.

Intersection is strict: two rectangles sharing only an edge or a corner do
not intersect.
'''
import collections
import math
import numbers

import numpy
import toolz

from .exceptions import InvalidRectangle


class Rect(collections.namedtuple('Rect', 'x y width height')):
    '''Axis-aligned rectangle.'''
    __slots__ = ()

    @classmethod
    def from_bounds(cls, minx, miny, maxx, maxy):
        return cls(minx, miny, maxx - minx, maxy - miny)

    @property
    def bounds(self):
        """(minx, miny, maxx, maxy)"""
        return bounds(self)

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    def __repr__(self):
        return "Rect(x={}, y={}, width={}, height={})".format(*self)


def bounds(box):
    """(minx, miny, maxx, maxy) of a rectangle-like object."""
    return (box.x, box.y, box.x + box.width, box.y + box.height)


def area(box):
    return box.width * box.height


def union(box1, box2):
    """Smallest rectangle covering both boxes."""
    return Rect.from_bounds(*union_bounds(bounds(box1), bounds(box2)))


def intersects(a, b):
    """True if the interiors of `a` and `b` overlap on both axes."""
    return (a.x < b.x + b.width and a.x + a.width > b.x
            and a.y < b.y + b.height and a.y + a.height > b.y)


def centroid_distance(box1, box2):
    """Euclidean distance between the centers of the two boxes."""
    dx = (box1.x + box1.width / 2) - (box2.x + box2.width / 2)
    dy = (box1.y + box1.height / 2) - (box2.y + box2.height / 2)
    return math.sqrt(dx**2 + dy**2)


def merge(collection):
    """Bounding box of a non-empty collection of boxes."""
    return Rect.from_bounds(*merge_bounds(bounds(box) for box in collection))


# Bounds tuples hold the corners exactly as computed from the stored
# rectangles. Converting them back to (x, y, width, height) rounds the
# extent, so boxes that must cover their content are kept as bounds.

def union_bounds(b1, b2):
    return (min(b1[0], b2[0]), min(b1[1], b2[1]),
            max(b1[2], b2[2]), max(b1[3], b2[3]))


def merge_bounds(collection):
    """Bounds covering a non-empty collection of bounds."""
    collection = list(collection)
    if not collection:
        raise ValueError("Cannot bound an empty collection of rectangles")
    return toolz.reduce(union_bounds, collection)


def bounds_area(b):
    return (b[2] - b[0]) * (b[3] - b[1])


def bounds_intersect(b, box):
    """:func:`intersects` between bounds `b` and a rectangle-like `box`."""
    return (b[0] < box.x + box.width and b[2] > box.x
            and b[1] < box.y + box.height and b[3] > box.y)

def check_rect(obj, error=InvalidRectangle):
    """
    Returns `obj` unchanged if it is a valid rectangle, raises `error`
    otherwise.

    A valid rectangle has finite real `x`, `y`, `width` and `height`
    attributes, with non-negative width and height.
    """
    try:
        values = (obj.x, obj.y, obj.width, obj.height)
    except AttributeError:
        raise error(
            "{!r} is not a rectangle: x, y, width and height are required"
            .format(obj)
        ) from None
    for name, value in zip(Rect._fields, values):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise error("{} of {!r} must be a real number, got {!r}"
                        .format(name, obj, value))
        if not math.isfinite(value):
            raise error("{} of {!r} must be finite".format(name, obj))
    if obj.width < 0 or obj.height < 0:
        raise error("Width and height of {!r} must be non-negative"
                    .format(obj))
    return obj


class RectArray:
    """
    Vectorised view of a sequence of rectangles.

    The rectangles are kept in `rects` and their coordinates in `xywh`, an
    Nx4 float array. Comparisons and distances use broadcasting and perform
    the same operations as the scalar functions above, so both agree on
    float coordinates.

    Args:
        rects: iterable of rectangle-like objects.
    """
    def __init__(self, rects):
        self.rects = list(rects)
        self.xywh = numpy.array(
            [(r.x, r.y, r.width, r.height) for r in self.rects],
            dtype=float,
        ).reshape(-1, 4)

    def __len__(self):
        return len(self.rects)

    @property
    def mins(self):
        return self.xywh[:, :2]

    @property
    def maxs(self):
        return self.xywh[:, :2] + self.xywh[:, 2:]

    @property
    def centers(self):
        return self.xywh[:, :2] + self.xywh[:, 2:] / 2

    def intersects(self, other):
        """Boolean mask of the rectangles intersecting `other`."""
        mins, maxs = self.mins, self.maxs
        return (
            (mins[:, 0] < other.x + other.width) & (maxs[:, 0] > other.x)
            & (mins[:, 1] < other.y + other.height) & (maxs[:, 1] > other.y)
        )

    def query(self, other):
        """Rectangles intersecting `other`, by exhaustive comparison."""
        mask = self.intersects(other)
        return [r for r, hit in zip(self.rects, mask) if hit]

    def centroid_distances(self):
        """NxN matrix of distances between rectangle centers."""
        centers = self.centers
        diff = centers[:, numpy.newaxis, :] - centers[numpy.newaxis, :, :]
        return numpy.sqrt((diff**2).sum(axis=2))
