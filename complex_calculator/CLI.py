# CLI.py
"""""
Command line front end for the complex calculator.

Commands
--------
- parse EXPR                   show the expression in prefix notation
- run EXPR [--var NAME=VALUE]  evaluate, asking on stdin for missing variables
- compare EXPR1 EXPR2          numeric equivalence test
- settings [KEY [VALUE]]       show or change config.json

This layer only collects input and prints; every error from the engine is a
MathError and is shown as 'Error <code>: <message>' with exit status 1.
"""""

import argparse
import logging
import random
import sys

from . import MathEngine
from . import EquivalenceEngine
from . import config_manager as config_manager
from . import error as E

logger = logging.getLogger(__name__)


def parse_var_arguments(pairs):
    """Turn ['x=3+4i', 'y=2'] into {'x': '3+4i', 'y': '2'}."""
    bindings = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise E.InvalidBinding(f"Expected NAME=VALUE, got '{pair}'", fragment=pair)
        bindings[name.strip()] = value.strip()
    return bindings


def prompt_missing(names, bindings, ask=None):
    """Ask for every variable in `names` that has no binding yet."""
    if ask is None:
        ask = input
    for name in sorted(names):
        if name in bindings:
            continue
        try:
            value = ask(f"Value for variable '{name}' (e.g. 3+4i, -2, 5i): ")
        except EOFError:
            raise E.InvalidBinding("Execution cancelled by the user.", fragment=name)
        bindings[name] = value.strip()
    return bindings


def build_parser():
    parser = argparse.ArgumentParser(prog="complex-calc", description="Complex number expression calculator")
    parser.add_argument("--debug", action="store_true", help="log engine internals")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_command = commands.add_parser("parse", help="show the prefix form of an expression")
    parse_command.add_argument("expression")

    run_command = commands.add_parser("run", help="evaluate an expression")
    run_command.add_argument("expression")
    run_command.add_argument("--var", action="append", default=[], metavar="NAME=VALUE",
                             help="bind a variable (repeatable)")
    run_command.add_argument("--no-prompt", action="store_true",
                             help="fail instead of asking for missing variables")

    compare_command = commands.add_parser("compare", help="test two expressions for equivalence")
    compare_command.add_argument("expression1")
    compare_command.add_argument("expression2")
    compare_command.add_argument("--trials", type=int, default=None)
    compare_command.add_argument("--seed", type=int, default=None)

    settings_command = commands.add_parser("settings", help="show or change settings")
    settings_command.add_argument("key", nargs="?")
    settings_command.add_argument("value", nargs="?")

    return parser


def command_parse(args, out):
    print(MathEngine.calculate(args.expression), file=out)


def command_run(args, out, ask=None):
    bindings = parse_var_arguments(args.var)
    if not args.no_prompt:
        try:
            tree = MathEngine.parse_expression(args.expression)
        except E.MathError as e:
            e.equation = args.expression
            raise e
        prompt_missing(MathEngine.collect_free_variables(tree), bindings, ask)
    result = MathEngine.run(args.expression, bindings)
    print(f"= {result.to_string()}", file=out)


def command_compare(args, out):
    rng = random.Random(args.seed) if args.seed is not None else None
    print(f"(expr1) {MathEngine.calculate(args.expression1)}", file=out)
    print(f"(expr2) {MathEngine.calculate(args.expression2)}", file=out)

    result = EquivalenceEngine.compare(args.expression1, args.expression2, trials=args.trials, rng=rng)
    if result.equal:
        print("Equivalent (tested numerically)", file=out)
        if result.discarded:
            print(f"Note: {result.discarded} of {result.trials_run} trials could not be evaluated", file=out)
    else:
        bindings = ", ".join(f"{name}={value}" for name, value in result.counterexample.items())
        print(f"Not equivalent, counterexample: {bindings}", file=out)
        print(f"expr1 = {result.value1}, expr2 = {result.value2}", file=out)


def command_settings(args, out):
    all_settings = config_manager.load_setting_value("all")
    if args.key is None:
        for key, value in all_settings.items():
            print(f"{key} = {value}", file=out)
        return
    if args.value is None:
        value = config_manager.load_setting_value(args.key)
        if value is None:
            raise E.ConfigurationError(f"Unknown setting: {args.key}", fragment=args.key)
        print(f"{args.key} = {value}", file=out)
        return

    all_settings[args.key] = config_manager.validate_setting(args.key, args.value)
    config_manager.save_setting(all_settings)
    print(f"{args.key} = {all_settings[args.key]}", file=out)


COMMANDS = {
    "parse": command_parse,
    "run": command_run,
    "compare": command_compare,
    "settings": command_settings,
}


def main(argv=None, out=None):
    if out is None:
        out = sys.stdout
    args = build_parser().parse_args(argv)

    debug = args.debug or config_manager.load_setting_value("debug")
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        COMMANDS[args.command](args, out)
    except E.MathError as e:
        print(E.describe(e), file=out)
        print(f"Details: {e.message}", file=out)
        if e.equation is not None:
            print(f"Equation: {e.equation}", file=out)
        logger.debug("Command %s failed with code %s", args.command, e.code)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
