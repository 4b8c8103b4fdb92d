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

import argparse
import logging
import pathlib
import sys
from argparse import Namespace, ArgumentParser
from contextlib import redirect_stdout, redirect_stderr
from functools import lru_cache
from typing import Dict, List

import toml
from returns.maybe import Maybe, Nothing, Some
from returns.result import Success, Failure

from cyk import __version__ as cyk_version
from cyk.automaton import DOUBLE_A, word_in_alphabet
from cyk.grammar import Grammar, InvalidGrammar
from cyk.helpers import get_cyk_resource_file_content
from cyk.loader import (
    GrammarFileError,
    LoadResult,
    grammar_from_text,
    lines_are_valid,
    load_grammar,
    read_grammar_file,
)
from cyk.recognizer import accepts, membership_table, table_to_string
from cyk.validation import NormalForm

# Exit Codes
USAGE_ERROR = 2
DATA_FORMAT_ERROR = 65


def main(*args: str, stdout=sys.stdout, stderr=sys.stderr):
    argv = args or tuple(sys.argv[1:])

    try:
        read_cyk_rc_defaults()
    except RuntimeError as err:
        prog = " ".join(["cyk"] + [arg for arg in argv[:1] if not arg.startswith("-")])
        print(f"{prog}: error: could not load .cykrc ({err})", file=stderr)
        sys.exit(1)

    parser = create_parsers(stdout, stderr)

    with redirect_stdout(stdout):
        with redirect_stderr(stderr):
            args = parser.parse_args(argv)

    if not args.command and not args.version:
        parser.print_usage(file=stderr)
        print(
            "cyk: error: You have to choose a global option or one of the commands "
            + "`check`, `automaton`, `show`, or `dump-config`",
            file=stderr,
        )
        sys.exit(USAGE_ERROR)

    if args.version:
        print(f"cyk version {cyk_version}", file=stdout)
        sys.exit(0)

    level_mapping = {
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }

    if hasattr(args, "log_level"):
        logging.basicConfig(stream=stderr, level=level_mapping[args.log_level])

    args.func(args)


def check(stdout, stderr, parser: ArgumentParser, args: Namespace):
    command = args.command

    try:
        grammar_text = read_grammar_file(args.grammar_file)
    except GrammarFileError as err:
        print(f"cyk {command}: error: {err}", file=stderr)
        sys.exit(1)

    # A malformed line is reported as non-membership, not as an error.
    if args.line_check and not lines_are_valid(grammar_text):
        print("NO", file=stdout)
        return

    grammar = grammar_or_exit(
        command,
        grammar_from_text(grammar_text, NormalForm(args.normal_form)),
        stderr,
    )

    timeout_seconds = args.timeout if args.timeout >= 0 else None

    try:
        if args.print_table and args.input:
            table = membership_table(grammar, args.input, timeout_seconds)
            table_str = table_to_string(table)
            if table_str:
                print(table_str, file=stdout)
            result = grammar.start_variable in table[0][len(args.input) - 1]
        else:
            result = accepts(grammar, args.input, timeout_seconds)
    except TimeoutError:
        print(
            f"cyk {command}: error: timeout after {args.timeout} seconds", file=stderr
        )
        sys.exit(1)

    print("YES" if result else "NO", file=stdout)


def automaton(stdout, stderr, parser: ArgumentParser, args: Namespace):
    if not word_in_alphabet(args.input):
        print("Only expected a or b.", file=stdout)
        sys.exit(1)

    print("YES" if DOUBLE_A.accepts(args.input) else "NO", file=stdout)


def show(stdout, stderr, parser: ArgumentParser, args: Namespace):
    grammar = grammar_or_exit(
        args.command,
        load_grammar(args.grammar_file, NormalForm(args.normal_form)),
        stderr,
    )

    if args.format == "text":
        print(grammar.to_text(), file=stdout)
    else:
        print(str(grammar), file=stdout)


def dump_config(stdout, stderr, parser: ArgumentParser, args: Namespace):
    config_file_content = get_cyk_resource_file_content("resources/.cykrc")

    if args.output_file:
        with open(args.output_file, "w") as file:
            file.write(config_file_content)
    else:
        print(config_file_content, file=stdout)


def grammar_or_exit(command: str, load_result: LoadResult, stderr) -> Grammar:
    match load_result:
        case Success(grammar):
            return grammar
        case Failure(GrammarFileError() as err):
            print(f"cyk {command}: error: {err}", file=stderr)
            sys.exit(1)
        case Failure(InvalidGrammar() as err):
            print(
                f"cyk {command}: error: invalid grammar ({err})",
                file=stderr,
            )
            sys.exit(DATA_FORMAT_ERROR)

    raise AssertionError(f"Unexpected result {load_result}")


def create_parsers(stdout, stderr):
    parser = argparse.ArgumentParser(
        prog="cyk",
        description="""
The CYK command line interface. Checks whether strings are in the language of a
context-free grammar in second or Chomsky normal form.""",
    )

    parser.add_argument(
        "-v", "--version", help="Print the cyk version number", action="store_true"
    )

    subparsers = parser.add_subparsers(title="Commands", dest="command", required=False)

    create_check_parser(subparsers, stdout, stderr)
    create_automaton_parser(subparsers, stdout, stderr)
    create_show_parser(subparsers, stdout, stderr)
    create_dump_config_parser(subparsers, stdout, stderr)

    return parser


def create_check_parser(subparsers, stdout, stderr):
    parser = subparsers.add_parser(
        "check",
        help="check whether an input is in the language of a grammar",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="""
Check whether an input is derivable from a grammar. Prints `YES` if this is the case
and `NO` otherwise. Grammar files contain one rule `LHS:RHS1,RHS2` per line; the
token `e` stands for an absent symbol.""",
    )
    parser.set_defaults(func=lambda *args: check(stdout, stderr, parser, *args))

    grammar_file_arg(parser)
    input_arg(parser)
    normal_form_arg(parser)

    parser.add_argument(
        "--line-check",
        action=argparse.BooleanOptionalAction,
        default=get_default(stderr, "check", "--line-check").value_or(True),
        help="""
Check each non-empty grammar line against the pattern
`([01])+:(([01])+|a|b),(([01])+|a|b|e)` before loading the grammar. If any line does
not match, the answer is `NO`""",
    )

    parser.add_argument(
        "--print-table",
        action=argparse.BooleanOptionalAction,
        default=get_default(stderr, "check", "--print-table").value_or(False),
        help="print the non-empty cells of the CYK membership table",
    )

    timeout_arg(parser)
    log_level_arg(parser)


def create_automaton_parser(subparsers, stdout, stderr):
    parser = subparsers.add_parser(
        "automaton",
        help="run the example automaton accepting words without `aa`",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="""
Run a finite automaton over the alphabet {a, b} that accepts all words not
containing `aa`. Prints `YES` or `NO`.""",
    )
    parser.set_defaults(func=lambda *args: automaton(stdout, stderr, parser, *args))

    input_arg(parser)
    log_level_arg(parser)


def create_show_parser(subparsers, stdout, stderr):
    parser = subparsers.add_parser(
        "show",
        help="load a grammar and print it",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="""
Load and validate a grammar, and print it either in a readable debugging format or
in the grammar file format.""",
    )
    parser.set_defaults(func=lambda *args: show(stdout, stderr, parser, *args))

    grammar_file_arg(parser)
    normal_form_arg(parser)

    parser.add_argument(
        "-f",
        "--format",
        choices=["debug", "text"],
        default=get_default(stderr, "show", "--format").value_or("debug"),
        help="the output format",
    )

    log_level_arg(parser)


def create_dump_config_parser(subparsers, stdout, stderr):
    parser = subparsers.add_parser(
        "dump-config",
        help="dumps the default configuration file",
        description="""
Dumps the default `.cykrc` configuration file.""",
    )
    parser.set_defaults(func=lambda *args: dump_config(stdout, stderr, parser, *args))

    parser.add_argument(
        "-o",
        "--output-file",
        default=get_default(stderr, "dump-config", "--output-file").value_or(None),
        help="""
The file into which to write the current default `.cykrc`. If no file is given, the
configuration is printed to the standard output""",
    )


def grammar_file_arg(parser):
    parser.add_argument(
        "grammar_file",
        metavar="GRAMMAR_FILE",
        help="the grammar file, one rule `LHS:RHS1,RHS2` per line",
    )


def input_arg(parser):
    parser.add_argument(
        "input",
        metavar="INPUT",
        nargs="?",
        default="",
        help="the input to check (the empty string if omitted)",
    )


def normal_form_arg(parser):
    command = parser.prog.split(" ")[-1]

    parser.add_argument(
        "-n",
        "--normal-form",
        choices=[str(normal_form) for normal_form in NormalForm],
        default=get_default(sys.stderr, command, "--normal-form").value_or(
            str(NormalForm.SECOND)
        ),
        help="""
the normal form the grammar is validated against: second normal form (at most two
right-hand side symbols) or Chomsky normal form""",
    )


def timeout_arg(parser):
    command = parser.prog.split(" ")[-1]

    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=get_default(sys.stderr, command, "--timeout").value_or(-1.0),
        help="""
The number of (fractions of) seconds after which the recognizer should give up.
Negative numbers imply that no timeout is set""",
    )


def log_level_arg(parser):
    command = parser.prog.split(" ")[-1]

    parser.add_argument(
        "-l",
        "--log-level",
        choices=["ERROR", "WARNING", "INFO", "DEBUG"],
        default=get_default(sys.stderr, command, "--log-level").value_or("WARNING"),
        help="set the logging level",
    )


ConfigValue = str | int | float | bool


@lru_cache
def read_cyk_rc_defaults(
    content: Maybe[str] = Nothing,
) -> Dict[str, Dict[str, ConfigValue]]:
    """
    Attempts to read a `.cykrc` configuration from the following source, in the
    given order:

    1. The `content` parameter
    2. The file `./.cykrc` (in the current working directory)
    3. The file `~/.cykrc` (in the current user's home directory)
    4. The file `resources/.cykrc` (bundled with the cyk distribution)

    Returns a configuration dictionary. The keys are cyk commands or "default" for a
    fallback; the values are dictionaries from command line parameters to default
    values. Earlier sources take precedence over later ones.

    :param content: An optional TOML configuration string (not a path!).
    :return: The configuration dictionary.
    """

    sources: List[str] = []
    match content:
        case Some(config_str):
            sources.append(config_str)

    for directory in (pathlib.Path.cwd(), pathlib.Path.home()):
        location = directory / ".cykrc"
        if location.is_file():
            sources.append(location.read_text())

    sources.append(get_cyk_resource_file_content("resources/.cykrc"))

    result: Dict[str, Dict[str, ConfigValue]] = {}
    for source in sources:
        try:
            defaults = toml.loads(source).get("defaults", {})
        except toml.TomlDecodeError as err:
            raise RuntimeError(f"Malformed TOML: {err}") from err

        for command, options in command_defaults(defaults).items():
            for option, value in options.items():
                result.setdefault(command, {}).setdefault(option, value)

    return result


def command_defaults(defaults) -> Dict[str, Dict[str, ConfigValue]]:
    """
    Unwraps the `[[defaults.<command>]]` tables of a configuration. Each command
    must have exactly one table with flat values.

    >>> command_defaults({"check": [{"--normal-form": "cnf", "--timeout": 2.5}]})
    {'check': {'--normal-form': 'cnf', '--timeout': 2.5}}
    >>> command_defaults({"check": "cnf"})
    Traceback (most recent call last):
    ...
    RuntimeError: Unexpected defaults for `check`: expected one [[defaults.check]] table
    """

    if not isinstance(defaults, dict):
        raise RuntimeError("Unexpected .cykrc format: `defaults` is not a table")

    result: Dict[str, Dict[str, ConfigValue]] = {}
    for command, tables in defaults.items():
        match tables:
            case [dict() as options] if all(
                isinstance(value, ConfigValue) for value in options.values()
            ):
                result[command] = options
            case _:
                raise RuntimeError(
                    f"Unexpected defaults for `{command}`: "
                    + f"expected one [[defaults.{command}]] table"
                )

    return result


def get_default(
    stderr, command: str, argument: str, content: Maybe[str] = Nothing
) -> Maybe[ConfigValue]:
    try:
        config = read_cyk_rc_defaults(content)
    except RuntimeError as err:
        print(f"cyk {command}: error: could not load .cykrc ({err})", file=stderr)
        sys.exit(1)

    default = config.get("default", {}).get(argument, None)
    return Maybe.from_optional(config.get(command, {}).get(argument, default))


if __name__ == "__main__":
    main()
