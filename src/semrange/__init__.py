# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

__title__ = "semrange"
__summary__ = "Semantic version parsing and npm-style range matching"

__version__ = "0.1.0"

__author__ = "The semrange developers"

__license__ = "BSD-2-Clause or Apache-2.0"
__copyright__ = f"{__author__}"
