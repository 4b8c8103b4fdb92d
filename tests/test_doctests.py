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

import doctest
import unittest

from cyk import (
    automaton,
    cli,
    grammar,
    helpers,
    loader,
    recognizer,
    validation,
)


class TestDocstrings(unittest.TestCase):
    def test_automaton(self):
        doctest_results = doctest.testmod(m=automaton)
        self.assertFalse(doctest_results.failed)

    def test_cli(self):
        doctest_results = doctest.testmod(m=cli)
        self.assertFalse(doctest_results.failed)

    def test_grammar(self):
        doctest_results = doctest.testmod(m=grammar)
        self.assertFalse(doctest_results.failed)

    def test_helpers(self):
        doctest_results = doctest.testmod(m=helpers)
        self.assertFalse(doctest_results.failed)

    def test_loader(self):
        doctest_results = doctest.testmod(m=loader)
        self.assertFalse(doctest_results.failed)

    def test_recognizer(self):
        doctest_results = doctest.testmod(m=recognizer)
        self.assertFalse(doctest_results.failed)

    def test_validation(self):
        doctest_results = doctest.testmod(m=validation)
        self.assertFalse(doctest_results.failed)


if __name__ == "__main__":
    unittest.main()
