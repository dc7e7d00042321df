import io
import logging
import sys

import pytest
from lox import Interpreter
from lox.cli import EX_DATAERR, EX_NOINPUT, EX_OK, EX_SOFTWARE, EX_USAGE, main, run_prompt


@pytest.fixture(autouse=True)
def restore_recursion_limit():
    # main() raises the limit for the whole process.
    limit = sys.getrecursionlimit()
    yield
    sys.setrecursionlimit(limit)


@pytest.fixture
def script(tmp_path):
    def write(source):
        path = tmp_path / "script.lox"
        path.write_text(source)
        return str(path)
    return write


class TestRunFile:
    def test_ok(self, script, capsys):
        assert main([script('for (var i = 0; i < 3; i = i + 1) print "n" + i;')]) == EX_OK
        assert capsys.readouterr().out == "n0\nn1\nn2\n"

    def test_syntax_error(self, script, capsys):
        assert main([script("print 1;\nvar;")]) == EX_DATAERR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "[line 2] Error at ';': Expect variable name.\n"

    def test_runtime_error(self, script, capsys):
        assert main([script('print "start";\nprint -"x";')]) == EX_SOFTWARE
        captured = capsys.readouterr()
        assert captured.out == "start\n"
        assert captured.err == "Operand must be a number.\n[line 2]\n"

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.lox")]) == EX_NOINPUT
        assert "cannot read" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "latin1.lox"
        path.write_bytes(b'print "\xff";')
        assert main([str(path)]) == EX_DATAERR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "cannot decode" in captured.err

    def test_deep_recursion(self, script, capsys):
        src = "fun down(n) { if (n > 0) down(n - 1); else print \"bottom\"; } down(500);"
        assert main([script(src)]) == EX_OK
        assert capsys.readouterr().out == "bottom\n"

    def test_verbose(self, script, monkeypatch, capsys):
        configured = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: configured.append(kwargs))
        assert main(["-v", script("fun f() { print 1; } f();")]) == EX_OK
        assert capsys.readouterr().out == "1\n"
        assert configured[0]["level"] == logging.DEBUG

    def test_usage(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["one.lox", "two.lox"])
        assert excinfo.value.code == EX_USAGE
        assert "usage: lox" in capsys.readouterr().err


class TestPrompt:
    def test_session(self, capsys):
        stdin = io.StringIO("var a = 1;\na + 1\nprint;\n\nprint a;\n")
        assert run_prompt(Interpreter(err=io.StringIO()), stdin=stdin) == EX_OK
        assert capsys.readouterr().out == "> > 2\n> > > 1\n> \n"

    def test_errors_do_not_end_session(self, capsys):
        interpreter = Interpreter()
        stdin = io.StringIO("print nil + 1;\nprint;\nprint 3;\n")
        run_prompt(interpreter, stdin=stdin)
        assert capsys.readouterr().out.endswith("3\n> \n")
        assert not interpreter.reporter.had_error

    def test_eof_is_an_ordinary_name(self, capsys):
        stdin = io.StringIO("var EOF = 3;\nEOF\nprint EOF + 1;\n")
        run_prompt(Interpreter(), stdin=stdin)
        assert capsys.readouterr().out == "> > 3\n> 4\n> \n"

    def test_interrupt_at_prompt(self, capsys):
        class InterruptedStdin(io.StringIO):
            interrupted = False

            def readline(self, *args):
                if not self.interrupted:
                    self.interrupted = True
                    raise KeyboardInterrupt
                return super().readline(*args)

        run_prompt(Interpreter(), stdin=InterruptedStdin("print 3;\n"))
        assert capsys.readouterr().out == "> \n> 3\n> \n"
