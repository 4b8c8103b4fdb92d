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

"""
A Cocke-Younger-Kasami (CYK) recognizer for grammars in second normal form, i.e.,
grammars with at most two symbols on the right-hand side of each rule. Compared to
the textbook algorithm for Chomsky normal form, the recognizer additionally handles
unit productions (`A -> B`) and binary rules mixing variables with terminals, where
terminals may consist of several characters (`A -> ab C`).

The algorithm is adapted from Chris Pollett's CS 154 lecture notes:
http://www.cs.sjsu.edu/faculty/pollett/154.1.20s/Lec20200323.html#(6)
"""

import logging
import time
from typing import Optional, Set

from cyk.grammar import Grammar
from cyk.helpers import lhs, rhs, lazystr
from cyk.type_defs import MembershipTable, Rule, Rules

RECOGNIZER_LOGGER = logging.getLogger(__name__)


def accepts(
    grammar: Grammar, inp: str, timeout_seconds: Optional[float] = None
) -> bool:
    """
    Checks whether `inp` is in the language of `grammar`.

    >>> from cyk.grammar import parse_grammar
    >>> grammar = parse_grammar("S:A,B\\nA:a\\nB:b")
    >>> accepts(grammar, "ab")
    True
    >>> accepts(grammar, "ba")
    False
    >>> accepts(grammar, "")
    False

    :param grammar: The (validated) grammar.
    :param inp: The input string.
    :param timeout_seconds: An optional number of seconds after which the
        computation is aborted with a `TimeoutError`.
    :return: True iff the start variable derives `inp`.
    """

    if not inp:
        return grammar.has_epsilon_start_rule()

    table = membership_table(grammar, inp, timeout_seconds)
    RECOGNIZER_LOGGER.debug(
        "Membership table for %r:\n%s", inp, lazystr(lambda: table_to_string(table))
    )

    return grammar.start_variable in table[0][len(inp) - 1]


def membership_table(
    grammar: Grammar, inp: str, timeout_seconds: Optional[float] = None
) -> MembershipTable:
    """
    Fills the CYK table for `inp`. Cell `table[i][j]` contains all variables from
    which the substring `inp[i:j + 1]` can be derived; cells with `i > j` remain
    empty.

    >>> from cyk.grammar import parse_grammar
    >>> print(table_to_string(membership_table(parse_grammar("S:A,B\\nA:a\\nB:b"), "ab")))
    [0,0]: A
    [0,1]: S
    [1,1]: B

    :param grammar: The (validated) grammar.
    :param inp: The input string.
    :param timeout_seconds: An optional number of seconds after which the
        computation is aborted with a `TimeoutError`.
    :return: The filled table.
    """

    n = len(inp)
    table: MembershipTable = [[set() for _ in range(n)] for _ in range(n)]

    unit_rules = grammar.rules_with_rhs_length(1)
    binary_rules = grammar.rules_with_rhs_length(2)

    for i, char in enumerate(inp):
        table[i][i].update(lhs(rule) for rule in unit_rules if rhs(rule)[0] == char)

    start_time = time.time()
    for length in range(1, n + 1):
        if timeout_seconds is not None and time.time() - start_time > timeout_seconds:
            RECOGNIZER_LOGGER.debug("TIMEOUT at substring length %d", length)
            raise TimeoutError(timeout_seconds)

        for i in range(n - length + 1):
            j = i + length - 1
            cell = table[i][j]

            # Binary rules only depend on cells for shorter substrings.
            cell.update(
                lhs(rule)
                for rule in binary_rules
                if derives_by_binary_rule(table, inp, rule, i, j)
            )

            close_under_unit_rules(cell, unit_rules)

    return table


def derives_by_binary_rule(
    table: MembershipTable, inp: str, rule: Rule, i: int, j: int
) -> bool:
    """
    Checks whether a rule `A -> X Y` derives `inp[i:j + 1]`, given that the table is
    filled for all shorter substrings. `X` and `Y` are treated as variables (looked
    up in the table) as well as literal terminal strings (compared with the input).
    """

    first, second = rhs(rule)
    span = inp[i : j + 1]

    return (
        any(first in table[i][k] and second in table[k + 1][j] for k in range(i, j))
        or (
            span.startswith(first)
            and i + len(first) <= j
            and second in table[i + len(first)][j]
        )
        or (
            span.endswith(second)
            and j - len(second) >= i
            and first in table[i][j - len(second)]
        )
        or span == first + second
    )


def close_under_unit_rules(cell: Set[str], unit_rules: Rules) -> None:
    """
    Adds the left-hand sides of unit productions `A -> B` to `cell` for every `B` in
    `cell`, until nothing changes anymore. Rules with a terminal right-hand side
    never fire, since cells only contain variables.

    >>> cell = {"C"}
    >>> close_under_unit_rules(cell, (("A", "B"), ("B", "C"), ("D", "x")))
    >>> sorted(cell)
    ['A', 'B', 'C']
    """

    changed = True
    while changed:
        new_variables = {
            lhs(rule)
            for rule in unit_rules
            if rhs(rule)[0] in cell and lhs(rule) not in cell
        }
        cell.update(new_variables)
        changed = bool(new_variables)


def table_to_string(table: MembershipTable) -> str:
    return "\n".join(
        f"[{i},{j}]: {', '.join(sorted(table[i][j]))}"
        for i in range(len(table))
        for j in range(i, len(table))
        if table[i][j]
    )
