#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic CurveGroup class and functions.

Note that CurveGroup does not have to be a cyclic subgroup.
For the cyclic subgroup class Curve, including generator and order,
see the ecdsalib.ecc.curve module.
"""

from typing import Dict, List

from ecdsalib.alias import Integer
from ecdsalib.ecc import field
from ecdsalib.ecc.point import INF, Coordinate, Identity, Point
from ecdsalib.exceptions import ECLibTypeError, ECLibValueError
from ecdsalib.utils import HEX_THRESHOLD, hex_string, int_from_integer, int_repr


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity INF.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.

    The group is defined by the point addition group law.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # 1) check that p is a prime
        # Fermat test will do as _probabilistic_ primality test...
        if p < 2 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise ECLibValueError(f"p is not prime: {int_repr(p)}")

        self.p = p

        # 2. check that a and b are integers in the interval [0, p−1]
        if a < 0:
            raise ECLibValueError(f"negative a: {a}")
        if p <= a:
            raise ECLibValueError(f"p <= a: {int_repr(p)} <= {int_repr(a)}")
        if b < 0:
            raise ECLibValueError(f"negative b: {b}")
        if p <= b:
            raise ECLibValueError(f"p <= b: {int_repr(p)} <= {int_repr(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        d = 4 * a * a * a + 27 * b * b
        if d % p == 0:
            raise ECLibValueError("zero discriminant")
        self._a = a
        self._b = b

    @property
    def a(self) -> int:
        return self._a

    @property
    def b(self) -> int:
        return self._b

    def __str__(self) -> str:
        result = "Curve"
        if self.p > HEX_THRESHOLD:
            result += f"\n p   = {hex_string(self.p)}"
        else:
            result += f"\n p   = {self.p}"

        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f"\n a   = {hex_string(self._a)}"
            result += f"\n b   = {hex_string(self._b)}"
        else:
            result += f"\n a   = {self._a}"
            result += f"\n b   = {self._b}"

        return result

    def __repr__(self) -> str:
        result = "Curve("
        result += f"'{hex_string(self.p)}'" if self.p > HEX_THRESHOLD else f"{self.p}"
        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f", '{hex_string(self._a)}', '{hex_string(self._b)}'"
        else:
            result += f", {self._a}, {self._b}"

        result += ")"
        return result

    def negate(self, Q: Point) -> Point:
        """Return the opposite point.

        The input point is not checked to be on the curve.
        """
        if isinstance(Q, Identity):
            return INF
        if isinstance(Q, Coordinate):
            return Coordinate(Q.x % self.p, field.add_inv(Q.y % self.p, self.p))
        raise ECLibTypeError("not a point")

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two distinct points.

        The input points must be on the curve.
        Equal points are rejected:
        doubling is not a special case of this function.
        """

        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        if Q1 == Q2:
            raise ECLibValueError("equal points: doubling is not addition")
        return self._add_aff(Q1, Q2)

    def _add_aff(self, Q: Point, R: Point) -> Point:
        # points are assumed to be on curve

        if isinstance(R, Identity):
            return Q
        if isinstance(Q, Identity):
            return R

        p = self.p
        x1, y1 = Q.x % p, Q.y % p
        x2, y2 = R.x % p, R.y % p
        if x1 == x2:
            if field.add(y1, y2, p) == 0:  # opposite points
                return INF
            # same x and not opposite: it is the same point
            return self._double_aff(Q)

        # s = (y2 - y1) / (x2 - x1)
        s = field.div(field.sub(y2, y1, p), field.sub(x2, x1, p), p)
        # x3 = s^2 - x1 - x2
        x3 = field.sub(field.sub(field.mul(s, s, p), x1, p), x2, p)
        # y3 = s * (x1 - x3) - y1
        y3 = field.sub(field.mul(s, field.sub(x1, x3, p), p), y1, p)
        return Coordinate(x3, y3)

    def _double_aff(self, Q: Point) -> Point:
        # point is assumed to be on curve

        if isinstance(Q, Identity):
            return INF

        p = self.p
        x, y = Q.x % p, Q.y % p
        # 2-torsion point: the tangent is vertical
        if y == 0:
            return INF

        # s = (3 * x^2 + a) / (2 * y)
        num = field.add(field.mul(3, field.mul(x, x, p), p), self._a, p)
        s = field.div(num, field.mul(2, y, p), p)
        # x3 = s^2 - 2 * x
        x3 = field.sub(field.mul(s, s, p), field.mul(2, x, p), p)
        # y3 = s * (x - x3) - y
        y3 = field.sub(field.mul(s, field.sub(x, x3, p), p), y, p)
        return Coordinate(x3, y3)

    def _y2(self, x: int) -> int:
        # x^3 + a*x + b
        p = self.p
        x3 = field.mul(field.mul(x, x, p), x, p)
        return field.add(field.add(x3, field.mul(self._a, x, p), p), self._b, p)

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise ECLibValueError("point not on curve")

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the point is on the curve."

        if isinstance(Q, Identity):
            return True
        if not isinstance(Q, Coordinate):
            raise ECLibTypeError("not a point")
        return self._y2(Q.x) == field.mul(Q.y, Q.y, self.p)


def mult_aff(m: int, Q: Point, ec: CurveGroup) -> Point:
    """Scalar multiplication of a curve point in affine coordinates.

    This implementation uses
    'double & add' algorithm,
    'left-to-right' binary decomposition of the m coefficient,
    affine coordinates.
    It is not constant-time.

    The most significant bit of m seeds the running result with Q,
    then for each following bit the running result is doubled
    and Q is added if the bit is set.

    The m coefficient is not reduced mod n, even when Q generates
    a cyclic subgroup of order n.
    """

    if m < 0:
        raise ECLibValueError(f"negative m: {hex(m)}")
    if m == 0:
        return INF

    ec.require_on_curve(Q)
    if isinstance(Q, Identity):
        return INF

    # coordinates are only congruent to field elements
    R = Q = Coordinate(Q.x % ec.p, Q.y % ec.p)
    for i in reversed(range(m.bit_length() - 1)):
        # the doubling part of 'double & add'
        R = ec._double_aff(R)
        if (m >> i) & 1:
            R = ec._add_aff(R, Q)
    return R


def double_mult(u: int, H: Point, v: int, Q: Point, ec: CurveGroup) -> Point:
    """Double scalar multiplication (u*H + v*Q).

    The two partial products are summed with the internal group law,
    so that they can coincide without being an error
    (the sum is then a doubling).
    """

    return ec._add_aff(mult_aff(u, H, ec), mult_aff(v, Q, ec))


def find_all_points(ec: CurveGroup) -> List[Point]:
    """Attempt to find all group points, if p is low.

    Very unsophisticated walk-through approach,
    for didactical sake only.
    """
    if ec.p > 10000:
        err_msg = f"p is too big to count all group points: {ec.p}"
        raise ECLibValueError(err_msg)

    roots: Dict[int, List[int]] = {}
    for y in range(ec.p):
        roots.setdefault(y * y % ec.p, []).append(y)

    points: List[Point] = [INF]
    for x in range(ec.p):
        for y in roots.get(ec._y2(x), []):
            points.append(Coordinate(x, y))

    return points


def find_subgroup_points(ec: CurveGroup, G: Point) -> List[Point]:
    """Attempt to find all G-generated subgroup points, if p is low.

    Very unsophisticated walk-through approach,
    for didactical sake only.
    The list starts with G and ends with INF.
    """
    if ec.p > 10000:
        err_msg = f"p is too big to count all subgroup points: {ec.p}"
        raise ECLibValueError(err_msg)

    ec.require_on_curve(G)
    points: List[Point] = [G]
    while points[-1] != INF:
        points.append(ec._add_aff(points[-1], G))

    return points
