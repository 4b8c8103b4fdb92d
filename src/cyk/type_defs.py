# Copyright © 2022 CISPA Helmholtz Center for Information Security.
# Author: Dominic Steinhöfel.
#
# This file is part of CYK.
#
# CYK is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# CYK is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with CYK.  If not, see <http://www.gnu.org/licenses/>.

from typing import Tuple, List, Set, TypeVar, TypeAlias, Sequence

from frozendict import frozendict

T = TypeVar("T")

ImmutableList: TypeAlias = tuple[T, ...]

# Element 0 is the left-hand side, the remaining elements the right-hand side.
Rule: TypeAlias = Tuple[str, ...]
Rules: TypeAlias = ImmutableList[Rule]
RuleLike = Sequence[str]

RulesByRhsLength = frozendict[int, Rules]

# Cell (i, j) holds the variables deriving the input from index i to j (inclusive).
MembershipTable = List[List[Set[str]]]
