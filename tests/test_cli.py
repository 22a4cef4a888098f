"""
CLI tests for zeecc.

Runs zeecc.main() in-process and checks stdout, stderr and exit codes.
"""

import logging

import pytest
import zeecc


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestDemo:
    def test_demo_program(self, capsys):
        assert zeecc.main([]) == 0
        out = capsys.readouterr().out
        assert out.startswith(";; Input code: (print (add 2 (subtract 4 2)))\n")
        instrs = [l.strip() for l in out.splitlines() if l and not l.startswith(";;")]
        assert instrs == [
            "START", "PUSH #2", "PUSH #4", "PUSH #2",
            "SUBTRACT", "ADD", "PRINT", "HALT",
        ]


class TestCompileOptions:
    def test_expr(self, capsys):
        assert zeecc.main(["-e", "(add 2 3)", "--target", "bare"]) == 0
        out = capsys.readouterr().out
        assert out == ";; Input code: (add 2 3)\nSTART\nPUSH #2\nPUSH #3\nADD\nHALT\n"

    def test_input_file(self, tmp_path, capsys):
        src = tmp_path / "prog.zee"
        src.write_text("(mul 6 7)\n", encoding="utf-8")
        assert zeecc.main([str(src), "--target", "bare"]) == 0
        assert "MUL" in capsys.readouterr().out

    def test_output_file(self, tmp_path, capsys):
        dest = tmp_path / "prog.zasm"
        assert zeecc.main(["-e", "(add 2 3)", "-o", str(dest)]) == 0
        assert dest.read_text(encoding="utf-8").endswith("\t\tHALT\n")
        assert capsys.readouterr().out == ""

    def test_keep_blank_lines(self, capsys):
        assert zeecc.main(["-e", "(a 1)", "--keep-blank-lines"]) == 0
        assert "\n\n" in capsys.readouterr().out

    def test_max_depth(self, capsys):
        assert zeecc.main(["-e", "(a (b (c)))", "--max-depth", "2"]) == 1
        assert "nesting too deep" in capsys.readouterr().err

    def test_unknown_target_rejected(self):
        with pytest.raises(SystemExit):
            zeecc.main(["--target", "x86"])


class TestDebugDumps:
    def test_tokens(self, capsys):
        assert zeecc.main(["-e", "(add 2 3)", "--tokens"]) == 0
        out = capsys.readouterr().out
        assert ";; IDENT:add" in out
        assert "START" not in out

    def test_ast(self, capsys):
        assert zeecc.main(["-e", "(add 2 3)", "--ast"]) == 0
        out = capsys.readouterr().out
        assert ";;   Call: add" in out


class TestErrors:
    def test_lex_error(self, capsys):
        assert zeecc.main(["-e", "(add 2 #)"]) == 1
        captured = capsys.readouterr()
        assert "lex error: illegal character" in captured.err
        assert captured.out == ""

    def test_parse_error(self, capsys):
        assert zeecc.main(["-e", ")"]) == 1
        assert "parse error: unmatched close paren" in capsys.readouterr().err

    def test_parse_error_in_ast_mode(self, capsys):
        assert zeecc.main(["-e", "()", "--ast"]) == 1
        assert "missing operator" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert zeecc.main([str(tmp_path / "nope.zee")]) == 1
        assert "Error reading" in capsys.readouterr().err

    def test_verbose_logs_to_stderr(self, capsys):
        assert zeecc.main(["-e", "(add 2 3)", "-v"]) == 0
        err = capsys.readouterr().err
        assert "Target: zee" in err
        assert "BEGIN Token List Dump" in err

    def test_log_file(self, tmp_path, capsys):
        log = tmp_path / "logs" / "zeecc.log"
        assert zeecc.main(["-e", ")", "-q", "--log-file", str(log)]) == 1
        assert "unmatched close paren" in log.read_text(encoding="utf-8")
