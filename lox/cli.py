"""Command line front end: run a script file or start an interactive shell."""

import argparse
import cmd
import logging
import sys

from .interpreter import Interpreter

# sysexits.h codes
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

# Lox calls nest several Python frames deep.
RECURSION_LIMIT = 10_000


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EX_USAGE, f"{self.prog}: error: {message}\n")


class Shell(cmd.Cmd):
    """Lox read-eval-print loop. Every line goes to the interpreter as source."""
    prompt = "> "

    def __init__(self, interpreter, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter

    def cmdloop(self, intro=None):
        # Only end of input stops the loop; no line of text is a shell command.
        self.preloop()
        if intro is not None:
            self.stdout.write(f"{intro}\n")
        stop = False
        while not stop:
            try:
                line = self._read_line()
            except KeyboardInterrupt:
                self.stdout.write("\n")
                continue
            if line is None:
                stop = self.do_EOF(line)
            else:
                stop = self.onecmd(line)
        self.postloop()

    def _read_line(self):
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None
        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def onecmd(self, line):
        if not line.strip():
            return self.emptyline()
        self.default(line)
        return False

    def default(self, line):
        try:
            self.interpreter.run(line, repl=True)
        except KeyboardInterrupt:
            print("Interrupted.", file=sys.stderr)
        # A mistake on one line must not end the session.
        self.interpreter.reporter.reset()

    def emptyline(self):
        return False

    def do_EOF(self, arg):
        print()
        return True


def build_parser():
    parser = ArgumentParser(prog="lox", description="Run Lox scripts.")
    parser.add_argument("script", nargs="?", help="script to run; omit for an interactive prompt")
    parser.add_argument("-v", "--verbose", action="store_true", help="log interpreter internals to stderr")
    return parser


def run_file(path, interpreter):
    try:
        with open(path, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"lox: cannot read {path}: {e.strerror}", file=sys.stderr)
        return EX_NOINPUT
    except UnicodeDecodeError as e:
        print(f"lox: cannot decode {path}: {e.reason}", file=sys.stderr)
        return EX_DATAERR

    interpreter.run(source)
    if interpreter.reporter.had_error:
        return EX_DATAERR
    if interpreter.reporter.had_runtime_error:
        return EX_SOFTWARE
    return EX_OK


def run_prompt(interpreter, stdin=None):
    shell = Shell(interpreter, stdin=stdin)
    if stdin is not None:
        shell.use_rawinput = False
    shell.cmdloop()
    return EX_OK


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    interpreter = Interpreter(err=sys.stderr)
    if args.script is not None:
        return run_file(args.script, interpreter)
    return run_prompt(interpreter)
