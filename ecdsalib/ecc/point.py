#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve points in affine coordinates.

A point is either a finite affine Coordinate(x, y)
or the Identity of the group (the point at infinity INF).
Points are immutable values, equal if their coordinates are equal.
"""

from dataclasses import dataclass
from typing import Sequence, Union

from ecdsalib.alias import Integer
from ecdsalib.exceptions import ECLibTypeError
from ecdsalib.utils import int_from_integer


@dataclass(frozen=True)
class Coordinate:
    "Finite affine point (x, y)."

    x: int
    y: int


@dataclass(frozen=True)
class Identity:
    "Neutral element of the group, i.e. the point at infinity."


Point = Union[Coordinate, Identity]

INF = Identity()


def point_from_coordinates(xy: Union[Point, Sequence[Integer]]) -> Point:
    """Return a Point from a Point or a (x, y) sequence.

    Integer representations of the coordinates are allowed,
    e.g. ("0x79BE667E", "483ADA77").
    """

    if isinstance(xy, (Coordinate, Identity)):
        return xy
    if not isinstance(xy, (tuple, list)) or len(xy) != 2:
        raise ECLibTypeError("point must be a sequence[int, int]")
    return Coordinate(int_from_integer(xy[0]), int_from_integer(xy[1]))
