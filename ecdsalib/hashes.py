#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions."""

import hashlib

from ecdsalib.alias import HashF, String
from ecdsalib.utils import bytes_from_string


def reduce_to_hlen(msg: String, hf: HashF = hashlib.sha256) -> bytes:
    "Return the hf digest of the message, a hlen bytes array."

    msg = bytes_from_string(msg)
    h = hf()
    h.update(msg)
    return bytes(h.digest())


def int_from_digest(msg: String, hf: HashF = hashlib.sha256) -> int:
    "Return the hf digest of the message as big-endian int."

    digest = reduce_to_hlen(msg, hf)
    return int.from_bytes(digest, byteorder="big", signed=False)
