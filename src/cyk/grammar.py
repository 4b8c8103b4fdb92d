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

import logging
import re
from dataclasses import dataclass
from functools import cached_property
from typing import FrozenSet, Iterable

from cyk.helpers import lhs, rhs, group_by_rhs_length, lazyjoin
from cyk.type_defs import Rule, Rules, RuleLike, RulesByRhsLength
from cyk.validation import InvalidGrammar, NormalForm, validate

GRAMMAR_LOGGER = logging.getLogger(__name__)

# Marks an absent symbol in the textual format; never stored in a rule.
EPSILON_TOKEN = "e"
RULE_SEPARATORS = re.compile(r"[:,]")


@dataclass(frozen=True)
class Grammar:
    """
    A context-free grammar whose rules have at most two symbols on their right-hand
    sides. Rules are tuples; the first element is the left-hand side variable. The
    left-hand side of the first rule is the start variable, and every symbol that
    occurs as a left-hand side is a variable. All other symbols are terminals.

    Grammars are validated against their normal form when they are created:

    >>> grammar = Grammar.from_rules([["S", "A", "B"], ["A", "a"], ["B", "b"]])
    >>> grammar.start_variable
    'S'
    >>> sorted(grammar.variables)
    ['A', 'B', 'S']
    >>> print(grammar)
    S
    S -> 'A}{B'
    A -> 'a'
    B -> 'b'

    >>> Grammar.from_rules([["S", "A", "B", "C"]])
    Traceback (most recent call last):
    ...
    cyk.validation.InvalidGrammar: RHS too long in rule S -> A B C (expected 2 or less)
    """

    rules: Rules
    normal_form: NormalForm = NormalForm.SECOND

    def __post_init__(self):
        if not self.rules:
            raise InvalidGrammar("Found empty grammar (expected at least one rule)")
        if any(not rule for rule in self.rules):
            raise InvalidGrammar("Found empty rule (expected at least a variable)")

        validate(self.rules, self.variables, self.start_variable, self.normal_form)

    @classmethod
    def from_rules(
        cls,
        rules: Iterable[RuleLike],
        normal_form: NormalForm = NormalForm.SECOND,
    ) -> "Grammar":
        return cls(tuple(tuple(rule) for rule in rules), normal_form)

    @cached_property
    def variables(self) -> FrozenSet[str]:
        return frozenset(lhs(rule) for rule in self.rules)

    @property
    def start_variable(self) -> str:
        return lhs(self.rules[0])

    @cached_property
    def rules_by_rhs_length(self) -> RulesByRhsLength:
        return group_by_rhs_length(self.rules)

    def rules_with_rhs_length(self, length: int) -> Rules:
        return self.rules_by_rhs_length.get(length, ())

    def is_variable(self, symbol: str) -> bool:
        return symbol in self.variables

    def has_epsilon_start_rule(self) -> bool:
        return any(
            lhs(rule) == self.start_variable for rule in self.rules_with_rhs_length(0)
        )

    def to_text(self) -> str:
        """
        Renders this grammar in the line format understood by :func:`parse_grammar`.
        Absent symbols are written as `e`, such that every line has two right-hand
        side slots.

        >>> print(Grammar.from_rules([["S", "A", "B"], ["S"], ["A", "a"]]).to_text())
        S:A,B
        S:e,e
        A:a,e
        """

        return "\n".join(
            lhs(rule)
            + ":"
            + ",".join(rhs(rule) + (EPSILON_TOKEN,) * (2 - len(rhs(rule))))
            for rule in self.rules
        )

    def __str__(self):
        return (
            self.start_variable
            + "\n"
            + "\n".join(
                f"{lhs(rule)} -> '" + "}{".join(rhs(rule)) + "'" for rule in self.rules
            )
        )


def parse_rule(line: str) -> Rule:
    """
    Parses a single line of the form `LHS:RHS1,RHS2`. The token `e` denotes an
    absent symbol and is dropped.

    >>> parse_rule("S:A,B")
    ('S', 'A', 'B')
    >>> parse_rule("  A:a,e ")
    ('A', 'a')
    >>> parse_rule("S:e,e")
    ('S',)
    >>> parse_rule("e:e")
    Traceback (most recent call last):
    ...
    cyk.validation.InvalidGrammar: Found empty rule (expected at least a variable)

    :param line: The line to parse.
    :return: The parsed rule.
    """

    rule = tuple(
        piece
        for piece in RULE_SEPARATORS.split(line.strip())
        if piece and piece != EPSILON_TOKEN
    )

    if not rule:
        raise InvalidGrammar("Found empty rule (expected at least a variable)")

    return rule


def parse_grammar(text: str, normal_form: NormalForm = NormalForm.SECOND) -> Grammar:
    """
    Parses a grammar in the line format (one rule per line). Blank lines are
    skipped; the left-hand side of the first rule becomes the start variable.

    >>> grammar = parse_grammar('''
    ... 0:1,10
    ... 1:a
    ... 10:b
    ... ''')
    >>> grammar.start_variable
    '0'
    >>> grammar.rules
    (('0', '1', '10'), ('1', 'a'), ('10', 'b'))

    :param text: The grammar text.
    :param normal_form: The normal form against which to validate the grammar.
    :return: The parsed grammar.
    """

    rules = tuple(parse_rule(line) for line in text.splitlines() if line.strip())
    grammar = Grammar(rules, normal_form)

    GRAMMAR_LOGGER.debug(
        "Parsed grammar in %s with %d rules, variables: %s",
        normal_form,
        len(rules),
        lazyjoin(", ", sorted(grammar.variables)),
    )

    return grammar
