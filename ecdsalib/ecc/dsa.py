#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic Curve Digital Signature Algorithm (ECDSA).

Didactical implementation loosely following SEC 1 v.2:

http://www.secg.org/sec1-v2.pdf

with two known deviations from the standard:

* the message digest is mapped to the exponent c as
  (digest mod (n-1)) + 1, instead of taking its leftmost nlen bits
* r is the x-coordinate of K = k*G, not reduced mod n

It is not constant-time and it must not be used
to protect anything of value.

The hash function and the random source are external collaborators:
hf is a hashlib-like constructor (default: sha256),
randrange returns a uniformly distributed int in [lo, hi)
(default: secure_randrange, based on the secrets module).
"""

import logging
import secrets
from dataclasses import dataclass, field
from hashlib import sha256
from typing import Optional, Tuple, Union

from dataclasses_json import DataClassJsonMixin, config

from ecdsalib.alias import HashF, Integer, RandF, String
from ecdsalib.ecc import field as fp
from ecdsalib.ecc.curve import Curve
from ecdsalib.ecc.curve_group import double_mult, mult_aff
from ecdsalib.ecc.point import Coordinate, Point, point_from_coordinates
from ecdsalib.exceptions import ECLibRuntimeError, ECLibValueError
from ecdsalib.hashes import int_from_digest
from ecdsalib.utils import hex_string, int_from_integer, int_repr

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """ECDSA signature.

    - r is the x-coordinate of the nonce point, 0 <= r < ec.p
    - s is a scalar, 0 < s < ec.n

    Signatures are not checked at construction:
    use assert_valid with the curve they belong to.
    """

    r: int = field(metadata=config(encoder=hex_string, decoder=int_from_integer))
    s: int = field(metadata=config(encoder=hex_string, decoder=int_from_integer))

    def assert_valid(self, ec: Curve) -> None:
        if not 0 <= self.r < ec.p:
            raise ECLibValueError(f"r not in 0..p-1: {int_repr(self.r)}")
        if not 0 < self.s < ec.n:
            raise ECLibValueError(f"scalar s not in 1..n-1: {int_repr(self.s)}")


def secure_randrange(lo: int, hi: int) -> int:
    "Return a uniformly distributed int in [lo, hi) from the secrets module."

    if hi <= lo:
        raise ECLibValueError(f"empty range: [{lo}, {hi})")
    return lo + secrets.randbelow(hi - lo)


def gen_random_scalar(ec: Curve, randrange: RandF = secure_randrange) -> int:
    "Return a random scalar in [1, n-1]."

    q = randrange(1, ec.n)
    if not 0 < q < ec.n:
        raise ECLibValueError(f"random scalar not in 1..n-1: {int_repr(q)}")
    return q


def _scalar_from_integer(i: Integer, ec: Curve, name: str) -> int:
    # a scalar in [1, n-1]
    i = int_from_integer(i)
    if not 0 < i < ec.n:
        raise ECLibValueError(f"{name} not in 1..n-1: {int_repr(i)}")
    return i


def pub_key_from_prv_key(prv_key: Integer, ec: Curve) -> Point:
    "Return the public key Q = q*G."

    q = _scalar_from_integer(prv_key, ec, "private key")
    return mult_aff(q, ec.G, ec)


def gen_keys(
    ec: Curve,
    prv_key: Optional[Integer] = None,
    randrange: RandF = secure_randrange,
) -> Tuple[int, Point]:
    """Return a private/public (int, Point) key-pair.

    If the private key is not provided, a random one is generated.
    """

    if prv_key is None:
        q = gen_random_scalar(ec, randrange)
    else:
        q = _scalar_from_integer(prv_key, ec, "private key")

    return q, mult_aff(q, ec.G, ec)


def challenge(msg: String, ec: Curve, hf: HashF = sha256) -> int:
    """Return the exponent c in [1, n-1] derived from the message digest.

    The digest, as big-endian int, is reduced as (digest mod (n-1)) + 1.
    This is not the SEC 1 v.2 section 4.1.3 (5) truncation
    to the leftmost nlen bits: signatures are not interoperable
    with standard ECDSA implementations.
    """

    digest = int_from_digest(msg, hf)
    return digest % (ec.n - 1) + 1


def sign(c: int, prv_key: Integer, k: Integer, ec: Curve) -> Sig:
    """Sign the exponent c with the private key q and the nonce k.

    c must be in [0, n-1], q and k in [1, n-1].
    No retry is attempted: if the nonce leads to a degenerate
    signature an ECLibRuntimeError is raised and
    the caller must sign again with a fresh nonce.
    """

    if not 0 <= c < ec.n:
        raise ECLibValueError(f"c not in 0..n-1: {int_repr(c)}")
    q = _scalar_from_integer(prv_key, ec, "private key")
    k = _scalar_from_integer(k, ec, "nonce")

    K = mult_aff(k, ec.G, ec)
    if not isinstance(K, Coordinate):
        raise ECLibRuntimeError("failed to sign: k*G is INF")
    r = K.x

    # s = (r*q + c) / k (mod n)
    s = fp.div(fp.add(fp.mul(r, q, ec.n), c, ec.n), k, ec.n)
    # s≠0 required as verify will need the inverse of s
    if s == 0:
        raise ECLibRuntimeError("failed to sign: s = 0")

    return Sig(r, s)


def assert_as_valid(
    c: int, pub_key: Point, sig: Union[Sig, Tuple[int, int]], ec: Curve
) -> None:
    # It raises Errors, while verify should always return True or False

    if not 0 <= c < ec.n:
        raise ECLibValueError(f"c not in 0..n-1: {int_repr(c)}")

    Q = point_from_coordinates(pub_key)
    if not isinstance(Q, Coordinate) or not ec.is_on_curve(Q):
        raise ECLibValueError("not a valid public key")

    if not isinstance(sig, Sig):
        sig = Sig(*sig)
    sig.assert_valid(ec)

    w = fp.mul_inv(sig.s, ec.n)
    u1 = fp.mul(c, w, ec.n)
    u2 = fp.mul(sig.r, w, ec.n)
    # Let K = u1*G + u2*Q.
    K = double_mult(u1, ec.G, u2, Q, ec)

    # Fail if infinite(K).
    if not isinstance(K, Coordinate):
        raise ECLibRuntimeError("invalid (INF) key")

    if K.x != sig.r:
        raise ECLibRuntimeError("signature verification failed")


def verify(
    c: int, pub_key: Point, sig: Union[Sig, Tuple[int, int]], ec: Curve
) -> bool:
    """ECDSA signature verification.

    c out of the 0..n-1 range is a caller error and it is raised;
    any other failure results in False.
    """

    if not 0 <= c < ec.n:
        raise ECLibValueError(f"c not in 0..n-1: {int_repr(c)}")

    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid(c, pub_key, sig, ec)
    except Exception as e:  # pylint: disable=broad-except
        _LOGGER.debug("signature rejected: %s", e)
        return False
    else:
        return True


def sign_msg(
    msg: String,
    prv_key: Integer,
    ec: Curve,
    k: Optional[Integer] = None,
    hf: HashF = sha256,
    randrange: RandF = secure_randrange,
) -> Sig:
    """Sign a message.

    If the nonce k is not provided, a random one is generated.
    """

    c = challenge(msg, ec, hf)
    if k is None:
        k = gen_random_scalar(ec, randrange)
    return sign(c, prv_key, k, ec)


def verify_msg(
    msg: String,
    pub_key: Point,
    sig: Union[Sig, Tuple[int, int]],
    ec: Curve,
    hf: HashF = sha256,
) -> bool:
    "Verify a message signature."

    c = challenge(msg, ec, hf)
    return verify(c, pub_key, sig, ec)
