#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `ecdsalib.ecc.dsa` module."

import logging
from hashlib import sha1, sha256

import pytest

from ecdsalib.ecc import dsa
from ecdsalib.ecc.curve import CURVES, Curve, secp256k1
from ecdsalib.ecc.curve_group import mult_aff
from ecdsalib.ecc.point import INF, Coordinate
from ecdsalib.exceptions import ECLibRuntimeError, ECLibValueError

# y^2 = x^3 + 2x + 2 mod 17, G = (5, 1), n = 19
ec17_19 = CURVES["ec17_19"]
MSG = "Bob transfer 1 BTC to Alice"

low_card_curves = {k: v for k, v in CURVES.items() if v.p < 100}


def test_toy_curve_signature() -> None:
    ec = ec17_19
    q, Q = dsa.gen_keys(ec, 7)
    assert q == 7
    assert Q == Coordinate(0, 6)
    assert Q == dsa.pub_key_from_prv_key(7, ec)

    c = dsa.challenge(MSG, ec)
    # int(sha256(MSG)) % 18 + 1
    assert c == 2

    # nonce k = 18, k*G = (5, 16)
    sig = dsa.sign(c, q, 18, ec)
    assert sig == dsa.Sig(5, 1)
    assert dsa.verify(c, Q, sig, ec)
    dsa.assert_as_valid(c, Q, sig, ec)
    assert dsa.verify(c, Q, (5, 1), ec)

    assert dsa.sign_msg(MSG, q, ec, 18) == sig
    assert dsa.verify_msg(MSG, Q, sig, ec)
    assert not dsa.verify_msg("Bob transfer 2 BTC to Alice", Q, sig, ec)


def test_congruent_generator() -> None:
    # (22, 1) is congruent to (5, 1) mod 17
    ec = Curve(17, 2, 2, (22, 1), 19)
    q, Q = dsa.gen_keys(ec, 7)
    assert Q == Coordinate(0, 6)

    c = dsa.challenge(MSG, ec)
    sig = dsa.sign(c, q, 1, ec)
    assert sig == dsa.Sig(5, 18)
    assert dsa.verify(c, Q, sig, ec)

    sig = dsa.sign_msg(MSG, q, ec)
    assert dsa.verify_msg(MSG, Q, sig, ec)


def test_tampered_signature() -> None:
    ec = ec17_19
    q, Q = dsa.gen_keys(ec, 7)
    c = dsa.challenge(MSG, ec)
    sig = dsa.sign(c, q, 18, ec)

    for i in range(max(ec.n.bit_length(), ec.p.bit_length())):
        assert not dsa.verify(c, Q, dsa.Sig(sig.r ^ (1 << i), sig.s), ec)
        assert not dsa.verify(c, Q, dsa.Sig(sig.r, sig.s ^ (1 << i)), ec)

    err_msg = "signature verification failed"
    with pytest.raises(ECLibRuntimeError, match=err_msg):
        dsa.assert_as_valid(c, Q, dsa.Sig(4, 1), ec)
    err_msg = "scalar s not in 1..n-1: "
    with pytest.raises(ECLibValueError, match=err_msg):
        dsa.assert_as_valid(c, Q, dsa.Sig(5, 0), ec)
    err_msg = "r not in 0..p-1: "
    with pytest.raises(ECLibValueError, match=err_msg):
        dsa.assert_as_valid(c, Q, dsa.Sig(21, 1), ec)


def test_low_card_curves() -> None:
    # exhaustive on keys and nonces
    for ec in low_card_curves.values():
        for q in range(1, ec.n):
            Q = mult_aff(q, ec.G, ec)
            for k in range(1, ec.n):
                for c in (0, 1, q, ec.n - 1):
                    try:
                        sig = dsa.sign(c, q, k, ec)
                    except ECLibRuntimeError:
                        # s = 0, the caller must choose another nonce
                        assert (mult_aff(k, ec.G, ec).x * q + c) % ec.n == 0
                        continue
                    assert dsa.verify(c, Q, sig, ec)
                    assert dsa.verify(c, Q, (sig.r, sig.s), ec)


def test_random_keys() -> None:
    ec = secp256k1
    q, Q = dsa.gen_keys(ec)
    assert 0 < q < ec.n
    assert ec.is_on_curve(Q)
    assert Q == mult_aff(q, ec.G, ec)

    sig = dsa.sign_msg(MSG, q, ec)
    assert dsa.verify_msg(MSG, Q, sig, ec)
    assert not dsa.verify_msg(MSG + " ", Q, sig, ec)
    assert not dsa.verify(dsa.challenge(MSG, ec), ec.G, sig, ec)

    sig = dsa.sign_msg(MSG, q, ec, hf=sha1)
    assert dsa.verify_msg(MSG, Q, sig, ec, sha1)
    assert not dsa.verify_msg(MSG, Q, sig, ec, sha256)

    _, Q_fake = dsa.gen_keys(ec)
    assert not dsa.verify_msg(MSG, Q_fake, sig, ec, sha1)


def test_randomness_collaborator() -> None:
    ec = ec17_19

    def randrange(lo: int, hi: int) -> int:
        assert (lo, hi) == (1, ec.n)
        return 7

    assert dsa.gen_random_scalar(ec, randrange) == 7
    assert dsa.gen_keys(ec, randrange=randrange) == (7, Coordinate(0, 6))

    def nonce(lo: int, hi: int) -> int:
        return 18

    assert dsa.sign_msg(MSG, 7, ec, randrange=nonce) == dsa.Sig(5, 1)

    for _ in range(100):
        assert 1 <= dsa.secure_randrange(1, ec.n) < ec.n
        assert 1 <= dsa.gen_random_scalar(ec) < ec.n
    assert dsa.secure_randrange(3, 4) == 3

    with pytest.raises(ECLibValueError, match="empty range: "):
        dsa.secure_randrange(1, 1)
    with pytest.raises(ECLibValueError, match="random scalar not in 1..n-1: "):
        dsa.gen_random_scalar(ec, lambda lo, hi: hi)


def test_challenge() -> None:
    for ec in CURVES.values():
        c = dsa.challenge(MSG, ec)
        assert 1 <= c <= ec.n - 1
        assert c == dsa.challenge(MSG.encode(), ec)

    digest = int.from_bytes(sha256(MSG.encode()).digest(), byteorder="big")
    assert dsa.challenge(MSG, secp256k1) == digest % (secp256k1.n - 1) + 1

    digest = int.from_bytes(sha1(MSG.encode()).digest(), byteorder="big")
    assert dsa.challenge(MSG, ec17_19, sha1) == digest % 18 + 1


def test_sign_exceptions() -> None:
    ec = ec17_19

    with pytest.raises(ECLibValueError, match="c not in 0..n-1: "):
        dsa.sign(ec.n, 7, 18, ec)
    with pytest.raises(ECLibValueError, match="c not in 0..n-1: "):
        dsa.sign(-1, 7, 18, ec)
    with pytest.raises(ECLibValueError, match="private key not in 1..n-1: "):
        dsa.sign(2, ec.n, 18, ec)
    with pytest.raises(ECLibValueError, match="private key not in 1..n-1: "):
        dsa.sign(2, 0, 18, ec)
    with pytest.raises(ECLibValueError, match="nonce not in 1..n-1: "):
        dsa.sign(2, 7, ec.n, ec)
    with pytest.raises(ECLibValueError, match="nonce not in 1..n-1: "):
        dsa.sign(2, 7, 0, ec)

    # r = 5, s = (5*q + c) / k = 0 (mod 19)
    with pytest.raises(ECLibRuntimeError, match="failed to sign: s = 0"):
        dsa.sign(14, 1, 18, ec)

    with pytest.raises(ECLibValueError, match="private key not in 1..n-1: "):
        dsa.gen_keys(ec, ec.n)
    with pytest.raises(ECLibValueError, match="private key not in 1..n-1: "):
        dsa.pub_key_from_prv_key(0, ec)


def test_verify_exceptions(caplog: pytest.LogCaptureFixture) -> None:
    ec = ec17_19
    q, Q = dsa.gen_keys(ec, 7)
    sig = dsa.sign(2, q, 18, ec)

    # the exponent is under the caller control: errors are raised
    with pytest.raises(ECLibValueError, match="c not in 0..n-1: "):
        dsa.verify(ec.n, Q, sig, ec)
    with pytest.raises(ECLibValueError, match="c not in 0..n-1: "):
        dsa.verify(-1, Q, sig, ec)

    # attacker controlled data: False, not errors
    with caplog.at_level(logging.DEBUG, logger="ecdsalib.ecc.dsa"):
        assert not dsa.verify(2, INF, sig, ec)
    assert "not a valid public key" in caplog.text
    with pytest.raises(ECLibValueError, match="not a valid public key"):
        dsa.assert_as_valid(2, INF, sig, ec)

    assert not dsa.verify(2, Coordinate(5, 2), sig, ec)
    assert not dsa.verify(2, Q, dsa.Sig(5, 0), ec)
    assert not dsa.verify(2, Q, dsa.Sig(5, ec.n), ec)
    assert not dsa.verify(2, Q, dsa.Sig(-1, 1), ec)
    assert not dsa.verify(2, Q, (5, 1, 1), ec)  # type: ignore
    assert not dsa.verify(2, Q, "invalid", ec)  # type: ignore

    # u1*G + u2*Q = INF if c + r*q = 0 (mod n):
    # with c = 2 and r = 5 it happens for q = 11, i.e. Q = (13, 10)
    Q_inf = mult_aff(11, ec.G, ec)
    assert Q_inf == Coordinate(13, 10)
    err_msg = "invalid \\(INF\\) key"
    with pytest.raises(ECLibRuntimeError, match=err_msg):
        dsa.assert_as_valid(2, Q_inf, sig, ec)
    assert not dsa.verify(2, Q_inf, sig, ec)


def test_sig_serialization() -> None:
    sig = dsa.Sig(5, 1)
    assert sig.to_dict() == {"r": "05", "s": "01"}
    assert dsa.Sig.from_dict({"r": "05", "s": "01"}) == sig
    assert dsa.Sig.from_dict({"r": 5, "s": 1}) == sig
    assert dsa.Sig.from_json(sig.to_json()) == sig

    ec = secp256k1
    q, _ = dsa.gen_keys(ec)
    sig = dsa.sign_msg(MSG, q, ec)
    assert dsa.Sig.from_json(sig.to_json()) == sig

    sig.assert_valid(ec)
    dsa.Sig(5, 1).assert_valid(ec17_19)
    with pytest.raises(ECLibValueError, match="r not in 0..p-1: "):
        dsa.Sig(17, 1).assert_valid(ec17_19)
    with pytest.raises(ECLibValueError, match="scalar s not in 1..n-1: "):
        dsa.Sig(5, 19).assert_valid(ec17_19)
