#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Prime finite field Fp arithmetic.

All functions are stateless: the modulus p is passed explicitly
and all results are normalized in [0, p-1].

The multiplicative inverse is computed with Fermat's little theorem,
i.e. c^(p-2) = c^-1 (mod p), so p must be a prime:
this is not checked here, as it is a guarantee
of the curve parameters.
"""

from ecdsalib.exceptions import ECLibValueError
from ecdsalib.utils import int_repr


def add(c: int, d: int, p: int) -> int:
    "Return (c + d) mod p."
    return (c + d) % p


def mul(c: int, d: int, p: int) -> int:
    "Return (c * d) mod p."
    return (c * d) % p


def add_inv(c: int, p: int) -> int:
    """Return the additive inverse of c, i.e. (p - c) mod p.

    c must be less than p.
    """

    if c >= p:
        err_msg = f"not a field element: {int_repr(c)} >= {int_repr(p)}"
        raise ECLibValueError(err_msg)
    return (p - c) % p


def sub(c: int, d: int, p: int) -> int:
    "Return (c - d) mod p."
    return add(c, add_inv(d, p), p)


def mul_inv(c: int, p: int) -> int:
    """Return the multiplicative inverse of c (mod p).

    Based on Fermat's little theorem: c^(p-1) = 1 (mod p)
    for any c not multiple of p, hence c^(p-2) = c^-1 (mod p).
    p must be a prime.
    """

    if c % p == 0:
        raise ECLibValueError(f"No inverse for {int_repr(c)} mod {int_repr(p)}")
    return pow(c, p - 2, p)


def div(c: int, d: int, p: int) -> int:
    "Return c / d (mod p), i.e. c * d^-1 (mod p)."
    return mul(c, mul_inv(d, p), p)
