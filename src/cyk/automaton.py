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

import re
from dataclasses import dataclass
from functools import reduce
from typing import Callable

# Deterministic finite automata as in Chris Pollett's lecture notes:
# http://www.cs.sjsu.edu/faculty/pollett/154.1.20s/Lec20200210.html#(1)

ALPHABET_PATTERN = re.compile(r"[ab]*")


@dataclass(frozen=True)
class Automaton:
    initial_state: int
    delta: Callable[[int, str], int]
    final_state: Callable[[int], bool]

    def run(self, word: str) -> int:
        return reduce(self.delta, word, self.initial_state)

    def accepts(self, word: str) -> bool:
        return self.final_state(self.run(word))


def double_a_delta(state: int, char: str) -> int:
    """
    State 0: no `a` seen at the end of the word, state 1: one `a` seen, state 2:
    `aa` seen (absorbing).

    >>> [double_a_delta(0, "a"), double_a_delta(1, "a"), double_a_delta(1, "b")]
    [1, 2, 0]
    """

    if state == 0:
        return 1 if char == "a" else 0
    elif state == 1:
        return 2 if char == "a" else 0

    return 2


# Accepts all words that do not contain `aa`.
DOUBLE_A = Automaton(
    initial_state=0,
    delta=double_a_delta,
    final_state=lambda state: state == 0 or state == 1,
)


def word_in_alphabet(word: str) -> bool:
    """
    >>> word_in_alphabet("abba"), word_in_alphabet(""), word_in_alphabet("abc")
    (True, True, False)
    """

    return ALPHABET_PATTERN.fullmatch(word) is not None
