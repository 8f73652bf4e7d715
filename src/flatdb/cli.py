"""
Command Line Interface Module - Interactive REPL over a single table file
"""

import argparse
import cmd
import logging
import sys
from typing import List, Optional

from .exceptions import (PrepareSyntaxError, NegativeIdError, StringTooLongError,
                         UnrecognizedStatementError, TableFullError)
from .statement import StatementType, prepare_statement, execute_statement
from .storage.table import Table


class FlatDBREPL(cmd.Cmd):
    """Interactive REPL for a FlatDB table"""

    intro = None
    prompt = "db > "

    def __init__(self, table: Table, stdin=None, stdout=None):
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.table = table

    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _close_table(self) -> None:
        if not self.table.closed:
            self.table.close()

    def do_EOF(self, arg):
        """Exit on Ctrl-D"""
        self._print()
        self._close_table()
        return True

    def do_help(self, arg):
        """Not a statement; cmd maps both 'help' and '?' here"""
        return self.default(f"help {arg}".strip())

    def emptyline(self):
        """Ignore blank lines instead of repeating the last command"""
        return False

    def _meta_command(self, line: str) -> bool:
        if line == '.exit':
            self._close_table()
            return True
        if line == '.stats':
            stats = self.table.pager.get_stats()
            self._print(f"records: {self.table.record_count}")
            for key, value in stats.items():
                self._print(f"{key}: {value}")
            return False

        self._print(f"Unrecognized command '{line}'")
        return False

    def default(self, line: str):
        """
        Handle meta commands and statements
        """
        line = line.strip()
        if line.startswith('.'):
            return self._meta_command(line)

        try:
            statement = prepare_statement(line)
        except PrepareSyntaxError:
            self._print("Syntax error. Could not parse statement.")
            return False
        except NegativeIdError:
            self._print("ID must be positive.")
            return False
        except StringTooLongError:
            self._print("String is too long.")
            return False
        except UnrecognizedStatementError:
            self._print(f"Unrecognized keyword at start of '{line}'.")
            return False

        try:
            records = execute_statement(statement, self.table)
        except TableFullError:
            self._print("Error: Table full.")
            return False

        if statement.type == StatementType.SELECT:
            for record in records:
                self._print(str(record))
        self._print("Executed.")
        return False


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="flatdb",
                                     description="Single-table fixed-schema record store")
    parser.add_argument("filename", nargs="?", help="Table file to open or create")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log page cache activity")
    args = parser.parse_args(argv)

    if not args.filename:
        print("Must supply a database filename.", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    table = Table.open(args.filename)
    repl = FlatDBREPL(table)
    try:
        repl.cmdloop()
    except KeyboardInterrupt:
        print("\nExiting...")
    finally:
        if not table.closed:
            table.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
