# Console.py
"""""Command line front end for calcy.

Responsibilities
----------------
- Parse arguments and merge them with the settings file (config_manager)
- Pick the number type once for the whole session
- Feed statements from a file, the command line or the REPL into MathEngine
- Keep the variable table: assignments ('x=2+3') and 'ans' (last result)
- Report MathEngine errors on stderr and turn them into the exit status

Statements
----------
exit        stop processing
vars        print the variable table
name=expr   evaluate expr and store it as name
expr        evaluate, print, remember as 'ans'
"""""

import argparse
import logging
import sys
import tempfile
import time
from pathlib import Path

import pyperclip

from . import __version__
from . import config_manager as config_manager
from . import error as E
from . import MathEngine as MathEngine
from . import NumberTypes as NumberTypes

try:
    import readline
except ImportError:  # e.g. Windows without pyreadline; input() still works
    readline = None

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="calcy",
        description="Evaluate simple algebraic equations fast, that's it!",
    )
    parser.add_argument("equations", nargs="*", help="Equations to evaluate")
    parser.add_argument("-f", "--file", type=Path, default=None,
                        help="Evaluate a file line by line")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="Interactive mode (REPL for algebra)")
    parser.add_argument("-b", "--benchmark", action="store_true",
                        help="Print the evaluation time of each equation")
    parser.add_argument("-d", "--datatype", choices=sorted(NumberTypes.DATATYPES), default=None,
                        help="Evaluate expressions with a specific datatype (default from settings: f64)")
    parser.add_argument("-e", "--exact", action="store_true",
                        help="Evaluate with the exact decimal datatype, alias for '--datatype decimal'")
    parser.add_argument("-c", "--copy", action="store_true",
                        help="Copy the last result to the clipboard")
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to the settings file (defaults to $CALCY_CONFIG or config.json)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


class Session:
    """Number type, variable table and exit status of one console run."""

    def __init__(self, number_type, benchmark=False):
        self.number_type = number_type
        self.benchmark = benchmark
        self.variables = {}
        self.exit_code = 0
        self.last_result = None

    def interpret(self, statement):
        """Run one statement. Returns False once 'exit' was requested."""
        statement = statement.strip()
        if not statement:
            return True

        command = statement.lower()
        if command == "exit":
            print("Exiting...")
            return False

        if command == "vars":
            print(self.format_variables())
            return True

        if "=" in statement:
            self.assign(statement)
            return True

        self.evaluate(statement)
        return True

    def assign(self, statement):
        name, expression = statement.split("=", 1)
        name = name.strip().strip('"')
        # Only names the tokenizer can read back: letters, quoted when longer than one
        if not name or any(char not in MathEngine.LETTERS for char in name):
            self.report(E.MathError(E.ERROR_MESSAGES["3013"] + statement, code="3013", equation=statement))
            return

        try:
            value = MathEngine.solve(expression, self.variables, self.number_type)
        except E.MathError as e:
            self.report(e)
            return

        logger.debug("Assigned %s = %s", name, value)
        self.variables[name] = value

    def evaluate(self, equation):
        start = time.perf_counter()
        try:
            result = MathEngine.solve(equation, self.variables, self.number_type)
        except E.MathError as e:
            self.report(e)
            return
        duration = time.perf_counter() - start

        rendered = self.number_type.format(result)
        if self.benchmark:
            print(f"{rendered} (took {int(duration * 1_000_000)}μs)")
        else:
            print(rendered)

        self.variables["ans"] = result
        self.last_result = rendered

    def format_variables(self):
        if not self.variables:
            return "{}"
        pairs = (f"{name!r}: {self.number_type.format(value)}" for name, value in self.variables.items())
        return "{" + ", ".join(pairs) + "}"

    def report(self, e):
        print(E.describe(e), file=sys.stderr)
        logger.debug("%s in %r", E.category(e.code), e.equation)
        self.exit_code = 1


def repl(session, history_path):
    """Read statements until 'exit', EOF or Ctrl-C.

    history_path is where the readline history is kept between runs.
    """
    print(f"Calcy (v{__version__}), have fun!")

    if readline is not None:
        logger.debug("Using %s as history file", history_path)
        try:
            readline.read_history_file(history_path)
        except OSError:
            logger.warning("No previous history could be found at %s", history_path)

    while True:
        try:
            line = input("?: ")
        except (EOFError, KeyboardInterrupt):
            print("Exiting...")
            break

        if readline is not None:
            try:
                readline.write_history_file(history_path)
            except OSError as e:
                logger.warning("Could not save history to %s: %s", history_path, e)

        if not session.interpret(line):
            break


def copy_result(text):
    """Put the last result on the clipboard (no-op without a result)."""
    if text is None:
        return
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning("Could not copy result to clipboard: %s", e)


def read_statements(path):
    """Return the lines of an input file."""
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise E.MathError(E.ERROR_MESSAGES["1000"] + f"{path} ({e})", code="1000") from None


def main(argv=None):
    """Console entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    settings = config_manager.load_setting_value("all", args.config)

    level = getattr(logging, str(settings["log_level"]).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    datatype = "decimal" if args.exact else (args.datatype or settings["datatype"])
    try:
        number_type = NumberTypes.get_number_type(datatype)
    except E.ConfigurationError as e:
        print(E.describe(e), file=sys.stderr)
        return 1

    session = Session(number_type, benchmark=args.benchmark or bool(settings["benchmark"]))
    interactive = args.interactive or (args.file is None and not args.equations)

    statements = []
    if args.file is not None:
        logger.debug("Attempting to read from file %s", args.file)
        try:
            statements.extend(read_statements(args.file))
        except E.MathError as e:
            print(E.describe(e), file=sys.stderr)
            return 1
    statements.extend(args.equations)

    for statement in statements:
        if not session.interpret(statement):
            interactive = False
            break

    if interactive:
        repl(session, str(Path(tempfile.gettempdir()) / settings["history_file"]))
        session.exit_code = 0

    if args.copy or settings["copy_result"]:
        copy_result(session.last_result)

    return session.exit_code


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
