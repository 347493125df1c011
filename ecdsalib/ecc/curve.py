#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve class and named curves.

A Curve is the (immutable) context of the ECDSA protocol:
the CurveGroup, its generator G, and the order n of G.

n is expected to be prime and to be the actual order of G:
this is a responsibility of whoever provides the parameters
and it is not enforced here.

Named curves are loaded from the package data:

* low cardinality curves, for didactical purpose and exhaustive tests
* SEC 2 v.2 secp256k1 and secp256r1
  http://www.secg.org/sec2-v2.pdf
"""

import json
from dataclasses import dataclass, field
from os import path
from typing import Any, Dict, Sequence, Union

from dataclasses_json import DataClassJsonMixin, config

from ecdsalib.alias import Integer
from ecdsalib.ecc.curve_group import CurveGroup
from ecdsalib.ecc.point import Coordinate, Point, point_from_coordinates
from ecdsalib.exceptions import ECLibValueError
from ecdsalib.utils import HEX_THRESHOLD, hex_string, int_from_integer, int_repr


class Curve(CurveGroup):
    "Subgroup of the points of an elliptic curve over Fp generated by G."

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Union[Point, Sequence[Integer]],
        n: Integer,
    ) -> None:

        super().__init__(p, a, b)

        # 4. Check that yG^2 = xG^3 + a*xG + b (mod p)
        G = point_from_coordinates(G)
        if not isinstance(G, Coordinate):
            raise ECLibValueError("INF point cannot be a generator")
        if not self.is_on_curve(G):
            raise ECLibValueError("Generator is not on the curve")
        self.G = Coordinate(G.x % self.p, G.y % self.p)

        n = int_from_integer(n)
        if n < 2:
            raise ECLibValueError(f"invalid order: {int_repr(n)}")
        self.n = n
        self.nlen = n.bit_length()
        self.nsize = (self.nlen + 7) // 8

    def __str__(self) -> str:
        result = super().__str__()
        if self.p > HEX_THRESHOLD:
            result += f"\n x_G = {hex_string(self.G.x)}"
            result += f"\n y_G = {hex_string(self.G.y)}"
        else:
            result += f"\n x_G = {self.G.x}"
            result += f"\n y_G = {self.G.y}"
        if self.n > HEX_THRESHOLD:
            result += f"\n n   = {hex_string(self.n)}"
        else:
            result += f"\n n   = {self.n}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        if self.p > HEX_THRESHOLD:
            result += f", ('{hex_string(self.G.x)}', '{hex_string(self.G.y)}')"
        else:
            result += f", ({self.G.x}, {self.G.y})"
        result += f", '{hex_string(self.n)}'" if self.n > HEX_THRESHOLD else f", {self.n}"
        result += ")"
        return result


def _integer_field() -> Any:
    return field(metadata=config(decoder=int_from_integer, encoder=hex_string))


@dataclass(frozen=True)
class CurveParams(DataClassJsonMixin):
    "Curve parameters, as serialized in the package data."

    p: int = _integer_field()
    a: int = _integer_field()
    b: int = _integer_field()
    x_G: int = field(
        metadata=config(field_name="Gx", decoder=int_from_integer, encoder=hex_string)
    )
    y_G: int = field(
        metadata=config(field_name="Gy", decoder=int_from_integer, encoder=hex_string)
    )
    n: int = _integer_field()

    def curve(self) -> Curve:
        return Curve(self.p, self.a, self.b, (self.x_G, self.y_G), self.n)


datadir = path.join(path.dirname(path.dirname(__file__)), "data")
filename = path.join(datadir, "curves.json")
with open(filename, "r", encoding="ascii") as file_:
    _curves_params = json.load(file_)

CURVES: Dict[str, Curve] = {
    ec_name: CurveParams.from_dict(params).curve()
    for ec_name, params in _curves_params.items()
}

secp256k1 = CURVES["secp256k1"]
