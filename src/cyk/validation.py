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

import enum
from typing import AbstractSet, Callable, Sequence, Tuple

from frozendict import frozendict
from returns.result import safe

from cyk.helpers import lhs, rhs
from cyk.type_defs import Rule


class InvalidGrammar(Exception):
    pass


class NormalForm(enum.Enum):
    SECOND = "2nf"
    CHOMSKY = "cnf"

    def __str__(self):
        return self.value


RuleCheck = Callable[[Sequence[Rule], AbstractSet[str], str], None]


def check_second_normal_form(
    rules: Sequence[Rule], variables: AbstractSet[str], start_variable: str
) -> None:
    """
    Raises an :class:`InvalidGrammar` error if any rule has more than two symbols
    on its right-hand side.

    >>> check_second_normal_form([("S", "A", "B", "C")], {"S"}, "S")
    Traceback (most recent call last):
    ...
    cyk.validation.InvalidGrammar: RHS too long in rule S -> A B C (expected 2 or less)
    """

    for rule in rules:
        if len(rhs(rule)) > 2:
            raise InvalidGrammar(
                f"RHS too long in rule {render_rule(rule)} (expected 2 or less)"
            )


def check_chomsky_normal_form(
    rules: Sequence[Rule], variables: AbstractSet[str], start_variable: str
) -> None:
    """
    Raises an :class:`InvalidGrammar` error if a rule is neither an epsilon rule for
    the start variable, nor a rule with a single terminal, nor a rule with exactly
    two variables on its right-hand side. Unit productions (a single variable) are
    rejected, even though the recognizer could process them.

    >>> check_chomsky_normal_form([("S", "A"), ("A", "a")], {"S", "A"}, "S")
    Traceback (most recent call last):
    ...
    cyk.validation.InvalidGrammar: Rule S -> A is not in Chomsky normal form
    """

    def has_chomsky_shape(rule: Rule) -> bool:
        right = rhs(rule)
        return (
            (not right and lhs(rule) == start_variable)
            or (len(right) == 1 and right[0] not in variables)
            or (len(right) == 2 and all(symbol in variables for symbol in right))
        )

    for rule in rules:
        if not has_chomsky_shape(rule):
            raise InvalidGrammar(
                f"Rule {render_rule(rule)} is not in Chomsky normal form"
            )


VALIDATORS: frozendict[NormalForm, Tuple[RuleCheck, ...]] = frozendict(
    {
        NormalForm.SECOND: (check_second_normal_form,),
        NormalForm.CHOMSKY: (check_second_normal_form, check_chomsky_normal_form),
    }
)


def validate(
    rules: Sequence[Rule],
    variables: AbstractSet[str],
    start_variable: str,
    normal_form: NormalForm = NormalForm.SECOND,
) -> None:
    """
    Runs the checks registered for the given normal form in order. The first
    violation raises an :class:`InvalidGrammar` error.

    :param rules: The rules to check.
    :param variables: The variables (left-hand sides) of the grammar.
    :param start_variable: The start variable of the grammar.
    :param normal_form: The normal form the rules should adhere to.
    """

    for check in VALIDATORS[normal_form]:
        check(rules, variables, start_variable)


@safe(exceptions=(InvalidGrammar,))
def is_valid(
    rules: Sequence[Rule],
    variables: AbstractSet[str],
    start_variable: str,
    normal_form: NormalForm = NormalForm.SECOND,
) -> None:
    """
    Like :func:`validate`, but returns a result container instead of raising.

    >>> from returns.pipeline import is_successful
    >>> is_successful(is_valid([("S", "a")], {"S"}, "S", NormalForm.CHOMSKY))
    True
    >>> str(is_valid([("S", "S")], {"S"}, "S", NormalForm.CHOMSKY).failure())
    'Rule S -> S is not in Chomsky normal form'
    """

    validate(rules, variables, start_variable, normal_form)


def render_rule(rule: Rule) -> str:
    return " ".join([lhs(rule), "->"] + (list(rhs(rule)) or ["ε"]))
