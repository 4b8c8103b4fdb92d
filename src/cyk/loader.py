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
import pathlib
import re

from returns.result import safe, Result

from cyk.grammar import Grammar, parse_grammar, InvalidGrammar
from cyk.validation import NormalForm

LOADER_LOGGER = logging.getLogger(__name__)

# Variables are binary strings, terminals are `a` or `b`; the second right-hand
# side slot is mandatory but may be `e`.
LINE_PATTERN = re.compile(r"([01])+:(([01])+|a|b),(([01])+|a|b|e)")


class GrammarFileError(Exception):
    pass


def lines_are_valid(text: str, pattern: re.Pattern[str] = LINE_PATTERN) -> bool:
    """
    Checks whether every non-empty line of `text` completely matches `pattern`.
    Lines are not stripped before matching.

    >>> lines_are_valid("0:1,10\\n1:a,e\\n\\n10:b,e")
    True
    >>> lines_are_valid("0:1,10\\nS:a,e")
    False
    >>> lines_are_valid("0:a")
    False
    """

    for line_number, line in enumerate(text.splitlines(), start=1):
        if line and not pattern.fullmatch(line):
            LOADER_LOGGER.info("Malformed grammar line %d: %r", line_number, line)
            return False

    return True


def read_grammar_file(path: str | pathlib.Path) -> str:
    try:
        return pathlib.Path(path).read_text()
    except OSError as err:
        raise GrammarFileError(f"could not read grammar file {path} ({err})") from err


@safe(exceptions=(InvalidGrammar,))
def grammar_from_text(
    text: str, normal_form: NormalForm = NormalForm.SECOND
) -> Grammar:
    """
    Like :func:`~cyk.grammar.parse_grammar`, but returns a result container instead
    of raising. Used for grammar files that have already been read.

    >>> grammar_from_text("S:a,e").unwrap().rules
    (('S', 'a'),)
    >>> str(grammar_from_text("S:a,b,c").failure())
    'RHS too long in rule S -> a b c (expected 2 or less)'
    """

    return parse_grammar(text, normal_form)


@safe(exceptions=(GrammarFileError, InvalidGrammar))
def load_grammar(
    path: str | pathlib.Path, normal_form: NormalForm = NormalForm.SECOND
) -> Grammar:
    """
    Reads and parses the grammar in the file at `path`. Reading and parsing errors
    are returned as :code:`Failure` containers; a failure to read the file never
    results in a partially loaded grammar.

    :param path: The path to the grammar file.
    :param normal_form: The normal form against which to validate the grammar.
    :return: A :code:`Success` with the grammar, or a :code:`Failure` with a
        :class:`GrammarFileError` or :class:`~cyk.grammar.InvalidGrammar`.
    """

    LOADER_LOGGER.debug("Loading grammar from %s", path)
    return parse_grammar(read_grammar_file(path), normal_form)


LoadResult = Result[Grammar, GrammarFileError | InvalidGrammar]
