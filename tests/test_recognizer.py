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
import unittest
from unittest.mock import patch

from cyk.grammar import parse_grammar, Grammar
from cyk.recognizer import accepts, membership_table, table_to_string
from cyk.validation import NormalForm
from test_data import (
    AB_GRAMMAR,
    EPSILON_GRAMMAR,
    UNIT_GRAMMAR,
    UNIT_CHAIN_GRAMMAR,
    A_N_B_N_GRAMMAR,
    EVEN_PALINDROME_GRAMMAR,
    MULTI_CHAR_TERMINAL_GRAMMAR,
    words,
    is_a_n_b_n,
    is_even_palindrome,
)


class TestRecognizer(unittest.TestCase):
    def test_ab_accepted(self):
        self.assertTrue(accepts(parse_grammar(AB_GRAMMAR), "ab"))

    def test_ba_rejected(self):
        self.assertFalse(accepts(parse_grammar(AB_GRAMMAR), "ba"))

    def test_epsilon_start_rule(self):
        grammar = parse_grammar(EPSILON_GRAMMAR)
        self.assertTrue(accepts(grammar, ""))
        self.assertFalse(accepts(grammar, "a"))

    def test_empty_input_without_epsilon_rule(self):
        self.assertFalse(accepts(parse_grammar(AB_GRAMMAR), ""))

    def test_epsilon_start_rule_not_first(self):
        grammar = parse_grammar(AB_GRAMMAR + "S:e\n")
        self.assertTrue(accepts(grammar, ""))
        self.assertTrue(accepts(grammar, "ab"))

    def test_epsilon_rule_for_other_variable(self):
        grammar = parse_grammar("S:A,B\nA:e\nB:b")
        self.assertFalse(accepts(grammar, ""))

    def test_unit_production(self):
        grammar = parse_grammar(UNIT_GRAMMAR)
        self.assertTrue(accepts(grammar, "a"))
        self.assertFalse(accepts(grammar, "aa"))
        self.assertFalse(accepts(grammar, "b"))

    def test_unit_chain_independent_of_rule_order(self):
        grammar = parse_grammar(UNIT_CHAIN_GRAMMAR)
        self.assertTrue(accepts(grammar, "b"))
        self.assertEqual({"S", "A", "B"}, membership_table(grammar, "b")[0][0])

    def test_unit_production_over_binary_rule(self):
        grammar = parse_grammar("S:T\nT:A,B\nA:a\nB:b")
        self.assertTrue(accepts(grammar, "ab"))
        self.assertFalse(accepts(grammar, "a"))

    def test_a_n_b_n(self):
        grammar = parse_grammar(A_N_B_N_GRAMMAR, NormalForm.CHOMSKY)
        for word in words("ab", 6):
            self.assertEqual(is_a_n_b_n(word), accepts(grammar, word), word)

    def test_even_palindromes(self):
        grammar = parse_grammar(EVEN_PALINDROME_GRAMMAR, NormalForm.CHOMSKY)
        for word in words("ab", 6):
            self.assertEqual(is_even_palindrome(word), accepts(grammar, word), word)

    def test_terminal_prefix(self):
        self.assertTrue(accepts(parse_grammar(MULTI_CHAR_TERMINAL_GRAMMAR), "abc"))

    def test_terminal_suffix(self):
        self.assertTrue(accepts(parse_grammar(MULTI_CHAR_TERMINAL_GRAMMAR), "cab"))

    def test_terminal_concatenation(self):
        self.assertTrue(accepts(parse_grammar(MULTI_CHAR_TERMINAL_GRAMMAR), "abcd"))

    def test_multi_char_terminals_reject(self):
        grammar = parse_grammar(MULTI_CHAR_TERMINAL_GRAMMAR)
        for word in ["ab", "abab", "cabc", "abcc", "acb", "c", "cd"]:
            self.assertFalse(accepts(grammar, word), word)

    def test_mixed_terminal_and_variable(self):
        grammar = parse_grammar("S:a,S\nS:a")
        self.assertTrue(accepts(grammar, "a"))
        self.assertTrue(accepts(grammar, "aaaa"))
        self.assertFalse(accepts(grammar, "aab"))

    def test_adding_rules_never_removes_words(self):
        base_rules = [("S", "A", "B"), ("A", "a"), ("B", "b")]
        extra_rules = [("S", "A", "S"), ("B", "S", "B"), ("A", "b"), ("S", "b")]

        for num_extra in range(len(extra_rules) + 1):
            for extension in itertools.combinations(extra_rules, num_extra):
                smaller = Grammar.from_rules(base_rules + list(extension[:-1]))
                larger = Grammar.from_rules(base_rules + list(extension))
                for word in words("ab", 4):
                    if accepts(smaller, word):
                        self.assertTrue(accepts(larger, word), word)

    def test_recognition_terminates_with_bool(self):
        grammar = parse_grammar(MULTI_CHAR_TERMINAL_GRAMMAR + UNIT_GRAMMAR)
        for word in words("abcd", 4):
            self.assertIsInstance(accepts(grammar, word), bool)

    def test_membership_table_lower_triangle_empty(self):
        table = membership_table(parse_grammar(A_N_B_N_GRAMMAR), "aabb")
        self.assertEqual(4, len(table))
        for i in range(4):
            for j in range(i):
                self.assertFalse(table[i][j])

        self.assertIn("S", table[0][3])
        self.assertIn("S", table[1][2])
        self.assertIn("T", table[1][3])

    def test_table_to_string(self):
        table = membership_table(parse_grammar(AB_GRAMMAR), "ab")
        self.assertEqual("[0,0]: A\n[0,1]: S\n[1,1]: B", table_to_string(table))

    def test_timeout(self):
        grammar = parse_grammar(A_N_B_N_GRAMMAR)
        with patch("cyk.recognizer.time.time", side_effect=itertools.count(0, 10)):
            with self.assertRaises(TimeoutError):
                accepts(grammar, "aabb", timeout_seconds=1)

    def test_no_timeout_without_deadline(self):
        grammar = parse_grammar(A_N_B_N_GRAMMAR)
        with patch("cyk.recognizer.time.time", side_effect=itertools.count(0, 10)):
            self.assertTrue(accepts(grammar, "aabb"))


if __name__ == "__main__":
    unittest.main()
