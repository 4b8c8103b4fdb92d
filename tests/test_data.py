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

import itertools
from typing import Iterator

AB_GRAMMAR = """
S:A,B
A:a
B:b
"""

EPSILON_GRAMMAR = """
S:e
"""

UNIT_GRAMMAR = """
S:A
A:a
"""

# The unit chain S -> A -> B -> b, listed such that the rules fire in reverse order.
UNIT_CHAIN_GRAMMAR = """
S:A
A:B
B:b
"""

# { a^n b^n | n >= 1 }
A_N_B_N_GRAMMAR = """
S:A,T
S:A,B
T:S,B
A:a
B:b
"""

# Palindromes of even length over {a, b} (without the empty word).
EVEN_PALINDROME_GRAMMAR = """
S:A,X
S:B,Y
S:A,A
S:B,B
X:S,A
Y:S,B
A:a
B:b
"""

# Binary rules with multi-character terminals.
MULTI_CHAR_TERMINAL_GRAMMAR = """
S:ab,C
S:C,ab
S:ab,cd
C:c
"""

# { a^n b^n | n >= 1 } in the format accepted by the command line line check.
BINARY_A_N_B_N_GRAMMAR = """
0:1,11
0:1,10
11:0,10
1:a,e
10:b,e
"""


def words(alphabet: str, max_length: int) -> Iterator[str]:
    for length in range(max_length + 1):
        for chars in itertools.product(alphabet, repeat=length):
            yield "".join(chars)


def is_a_n_b_n(word: str) -> bool:
    n = len(word) // 2
    return n > 0 and word == "a" * n + "b" * n


def is_even_palindrome(word: str) -> bool:
    return len(word) > 0 and len(word) % 2 == 0 and word == word[::-1]
