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

import importlib.resources
from dataclasses import dataclass
from typing import Callable, Iterable, Any, Sequence, Dict, List

from frozendict import frozendict

from cyk.type_defs import Rule, RulesByRhsLength


@dataclass(frozen=True)
class lazyjoin:
    s: str
    items: Iterable[Any]

    def __str__(self):
        return self.s.join(map(str, self.items))


@dataclass(frozen=True)
class lazystr:
    c: Callable[[], Any]

    def __str__(self):
        return str(self.c())


def lhs(rule: Rule) -> str:
    return rule[0]


def rhs(rule: Rule) -> Rule:
    """
    >>> rhs(("S", "A", "B"))
    ('A', 'B')
    >>> rhs(("S",))
    ()
    """

    return rule[1:]


def group_by_rhs_length(rules: Sequence[Rule]) -> RulesByRhsLength:
    """
    Groups the given rules by the length of their right-hand sides, keeping the
    original order inside each group.

    >>> grouped = group_by_rhs_length([("S", "A", "B"), ("A", "a"), ("S",), ("B", "b")])
    >>> grouped[1]
    (('A', 'a'), ('B', 'b'))
    >>> grouped[2]
    (('S', 'A', 'B'),)
    >>> grouped[0]
    (('S',),)

    :param rules: The rules to group.
    :return: A mapping from right-hand side lengths to rules.
    """

    result: Dict[int, List[Rule]] = {}
    for rule in rules:
        result.setdefault(len(rhs(rule)), []).append(rule)

    return frozendict({length: tuple(group) for length, group in result.items()})


def get_cyk_resource_file_content(path_to_file: str) -> str:
    traversable = importlib.resources.files("cyk").joinpath(path_to_file)
    with importlib.resources.as_file(traversable) as path:
        with open(path, "r") as file:
            return file.read()
