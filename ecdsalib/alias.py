#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Any, Callable, Union

# bytes or text string (not hex-string)
#
# this is for string that can be
# converted to bytes using encode()
# e.g. a message to be signed
#    if isinstance(msg, str):
#        msg = msg.encode()
String = Union[bytes, str]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Hash digest constructor: e.g. hashlib.sha256
# i.e. the digest collaborator producing a fixed-size digest
HashF = Callable[[], Any]

# Randomness collaborator:
# a function returning a uniformly distributed int in [lo, hi)
RandF = Callable[[int, int], int]
