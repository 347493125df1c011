#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

from ecdsalib.ecc import dsa
from ecdsalib.ecc.curve import CURVES
from ecdsalib.ecc.curve_group import find_subgroup_points

ec = CURVES["ec17_19"]

print("\n*** EC:")
print(ec)
for i, Q in enumerate(find_subgroup_points(ec, ec.G), 1):
    print(f" {i:2d}G = {Q}")

print("\n0. Message to be signed")
msg1 = "Bob transfer 1 BTC to Alice"
print(msg1)

print("1. Key generation")
q, Q = dsa.gen_keys(ec, 7)
print(f"prvkey: {q}")
print(f"PubKey: {Q}")

print("2. Sign message")
c = dsa.challenge(msg1, ec)
print(f"     c: {c}")
sig1 = dsa.sign(c, q, 18, ec)
print(f"    r1: {sig1.r}")
print(f"    s1: {sig1.s}")
print(f"  json: {sig1.to_json()}")

print("3. Verify signature")
print(dsa.verify(c, Q, sig1, ec))

print("\n** Tampered signature")
sig2 = dsa.Sig(sig1.r, sig1.s ^ 2)
print(f"    r2: {sig2.r}")
print(f"    s2: {sig2.s}")

print("** Verify tampered signature")
print(dsa.verify(c, Q, sig2, ec))
