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
Node splitting.

An overflowing node hands the boxes of its entries to :func:`split_entries`
and gets back two groups of entry positions. The heuristic is greedy and
seeded by distance:

1. the two entries whose centers are farthest apart seed the groups,
2. every other entry, in order, joins the group whose bounding box grows
   the least in area by taking it. Ties go to the first group.

Group boxes are recomputed from scratch for every candidate.
'''
import numpy

from rectindex.envelope import (
    RectArray, bounds, bounds_area, merge_bounds, union_bounds)


def pick_seeds(boxes):
    """
    Returns the positions (i, j), i < j, of the pair of boxes with the
    largest centroid distance. The first pair in (i, j) order wins ties.
    """
    if len(boxes) < 2:
        raise ValueError("At least two boxes are needed to pick seeds, got {}"
                         .format(len(boxes)))
    dist = RectArray(boxes).centroid_distances()
    # Keep only pairs i < j; argmax then returns the first maximum in
    # row-major order.
    dist[numpy.tril_indices(len(boxes))] = -numpy.inf
    i, j = numpy.unravel_index(numpy.argmax(dist), dist.shape)
    return int(i), int(j)


def enlargement(group_bounds, entry_bounds):
    """Area increase needed for `group_bounds` to cover `entry_bounds`."""
    return (bounds_area(union_bounds(group_bounds, entry_bounds))
            - bounds_area(group_bounds))


def distribute(entry_bounds, seeds):
    """
    Assigns every non-seed position to one of the two seeded groups.

    Args:
        entry_bounds: (minx, miny, maxx, maxy) of every entry.
        seeds: positions of the two seeds.

    Returns:
        (list, list): positions in the first and second group, each starting
        with its seed, then in increasing order.
    """
    first, second = seeds
    group1, group2 = [first], [second]
    for k, entry in enumerate(entry_bounds):
        if k == first or k == second:
            continue
        increase1 = enlargement(
            merge_bounds(entry_bounds[g] for g in group1), entry)
        increase2 = enlargement(
            merge_bounds(entry_bounds[g] for g in group2), entry)
        if increase1 <= increase2:
            group1.append(k)
        else:
            group2.append(k)
    return group1, group2


def split_entries(boxes, entry_bounds=None):
    """
    Partition of the positions of `boxes` into two non-empty groups.

    `entry_bounds` are the exact bounds of the entries when `boxes` only
    approximate them. They default to the bounds of `boxes`.
    """
    if entry_bounds is None:
        entry_bounds = [bounds(box) for box in boxes]
    return distribute(entry_bounds, pick_seeds(boxes))
