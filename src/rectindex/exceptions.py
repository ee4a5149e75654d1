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
Errors raised by the index on invalid arguments.

All of them are precondition violations detected before the tree is
touched, so a rejected call leaves the index unchanged.
'''


class RectIndexError(Exception):
    """Base class of the package errors."""


class InvalidRectangle(RectIndexError, ValueError):
    """A rectangle is malformed: missing field, non finite value or
    negative width or height."""


class InvalidQuery(InvalidRectangle):
    """The query area given to a search is not a valid rectangle."""


class InvalidCapacity(RectIndexError, ValueError):
    """Node capacity too small for a split to pick two seeds."""
