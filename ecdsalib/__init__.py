#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecdsalib developers
#
# This file is part of ecdsalib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdsalib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the ecdsalib package."

name = "ecdsalib"
__version__ = "2022.5.3"
__author__ = "The ecdsalib developers"
__author_email__ = "devs@ecdsalib.org"
__copyright__ = "Copyright (C) 2017-2022 The ecdsalib developers"
__license__ = "MIT License"
