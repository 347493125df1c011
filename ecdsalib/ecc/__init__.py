#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module ecdsalib.ecc."""

from ecdsalib.ecc.curve import CURVES, Curve, CurveParams, secp256k1
from ecdsalib.ecc.curve_group import (
    CurveGroup,
    double_mult,
    find_all_points,
    find_subgroup_points,
    mult_aff,
)
from ecdsalib.ecc.dsa import Sig
from ecdsalib.ecc.point import INF, Coordinate, Identity, Point

__all__ = [
    "CURVES",
    "Curve",
    "CurveParams",
    "secp256k1",
    "CurveGroup",
    "double_mult",
    "find_all_points",
    "find_subgroup_points",
    "mult_aff",
    "Sig",
    "INF",
    "Coordinate",
    "Identity",
    "Point",
]
