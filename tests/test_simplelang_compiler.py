"""
Simplelang Compiler Driver Tests
================================

End-to-end tests for SimpleLangCompiler and the convenience functions:
options, results, file handling and error reporting.
"""

import pytest

import eightbit_sdk
from eightbit_sdk.errors import EightBitError, SourceLocation
from eightbit_sdk.simplelang import (
    SimpleLangCompiler,
    CompilerOptions,
    CompilerResult,
    compile_simplelang,
    compile_file,
    SimpleLangError,
    UndefinedVariableError,
    DuplicateSymbolError,
    MissingTokenError,
    TokenKind,
)


SAMPLE_PROGRAM = """\
// counter example
int a;
int b;
int c;

a = 10;
b = 20;
c = a + b;

if (c == 30) {
    c = c - b;
}
"""


# =============================================================================
# Convenience Functions
# =============================================================================

class TestCompileSimplelang:
    """compile_simplelang() end to end."""

    def test_reference_program(self):
        assert compile_simplelang("int a; int b; a = 5; b = a + 3;") == [
            "LOADI R0, 5",
            "STORE R0, 0",
            "LOAD R0, 0",
            "PUSH R0",
            "LOADI R0, 3",
            "POP R1",
            "ADD R0, R1",
            "STORE R0, 1",
        ]

    def test_sample_program(self):
        assert compile_simplelang(SAMPLE_PROGRAM) == [
            "LOADI R0, 10",
            "STORE R0, 0",
            "LOADI R0, 20",
            "STORE R0, 1",
            "LOAD R0, 0",
            "PUSH R0",
            "LOAD R0, 1",
            "POP R1",
            "ADD R0, R1",
            "STORE R0, 2",
            "LOAD R0, 2",
            "CMP R0, 30",
            "JNE LABEL_0",
            "LOAD R0, 2",
            "PUSH R0",
            "LOAD R0, 1",
            "POP R1",
            "SUB R0, R1",
            "STORE R0, 2",
            "LABEL_0:",
        ]

    def test_empty_program(self):
        assert compile_simplelang("") == []

    def test_comment_only_program(self):
        assert compile_simplelang("/* nothing */ // here") == []

    def test_allow_redeclaration(self):
        with pytest.raises(DuplicateSymbolError):
            compile_simplelang("int a; int a;")
        assert compile_simplelang("int a; int a;", allow_redeclaration=True) == []

    def test_package_exports(self):
        assert eightbit_sdk.compile_simplelang is compile_simplelang
        assert eightbit_sdk.__version__ == "1.0.0"


# =============================================================================
# Compiler Class
# =============================================================================

class TestSimpleLangCompiler:
    """SimpleLangCompiler results and options."""

    def test_result_fields(self):
        result = SimpleLangCompiler().compile_source("int a; a = 5;", "prog.sl")
        assert isinstance(result, CompilerResult)
        assert result.success
        assert result.filename == "prog.sl"
        assert result.instructions == ["LOADI R0, 5", "STORE R0, 0"]
        assert result.token_count == 8
        assert len(result.ast.statements) == 2

    def test_assembly_text(self):
        result = SimpleLangCompiler().compile_source("int a; a = 5;")
        assert result.assembly == "LOADI R0, 5\nSTORE R0, 0\n"

    def test_empty_assembly(self):
        assert SimpleLangCompiler().compile_source("int a;").assembly == ""

    def test_symbols(self):
        result = SimpleLangCompiler().compile_source("int x; int y;")
        assert result.symbols.memory_map() == ["    0  x", "    1  y"]

    def test_default_options(self):
        options = CompilerOptions()
        assert options.allow_redeclaration is False
        assert options.max_token_length == 99

    def test_max_token_length(self):
        compiler = SimpleLangCompiler(CompilerOptions(max_token_length=3))
        result = compiler.compile_source("int abcdef; abcxyz = 1;")
        assert result.instructions == ["LOADI R0, 1", "STORE R0, 0"]

    def test_tokenize(self):
        tokens = SimpleLangCompiler().tokenize("if (a == 1) { }")
        assert tokens[0].kind == TokenKind.IF
        assert tokens[3].kind == TokenKind.EQUAL
        assert tokens[-1].kind == TokenKind.EOF

    def test_runs_are_independent(self):
        compiler = SimpleLangCompiler()
        first = compiler.compile_source("int a; int b; if { b = 1; }")
        second = compiler.compile_source("int b; if { b = 1; }")
        assert "STORE R0, 1" in first.instructions
        assert second.instructions == [
            "CMP R0, 1",
            "JNE LABEL_0",
            "LOADI R0, 1",
            "STORE R0, 0",
            "LABEL_0:",
        ]

    def test_error_after_success_does_not_affect_next_run(self):
        compiler = SimpleLangCompiler()
        with pytest.raises(SimpleLangError):
            compiler.compile_source("int a; b = 1;")
        assert compiler.compile_source("int b; b = 1;").instructions[-1] == "STORE R0, 0"


# =============================================================================
# Error Reporting
# =============================================================================

class TestErrorReporting:
    """Errors carry location, source line and hint."""

    def test_undefined_variable_message(self):
        with pytest.raises(UndefinedVariableError) as exc_info:
            SimpleLangCompiler().compile_source("int a;\nb = 1;", "prog.sl")
        lines = str(exc_info.value).splitlines()
        assert lines == [
            "prog.sl:2:1: error: undefined variable 'b'",
            "    b = 1;",
            "    ^",
            "hint: did you mean 'a'?",
        ]

    def test_caret_column(self):
        with pytest.raises(MissingTokenError) as exc_info:
            SimpleLangCompiler().compile_source("int a\n", "prog.sl")
        err = exc_info.value
        assert str(err.location) == "prog.sl:2:1"
        assert err.hint == "found 'end of input' instead"

    def test_source_line_matches_lexer_lines(self):
        with pytest.raises(UndefinedVariableError) as exc_info:
            SimpleLangCompiler().compile_source("int a;\r x = 1;\nb = 2;", "prog.sl")
        err = exc_info.value
        assert str(err.location) == "prog.sl:1:9"
        assert err.source_line == "int a;\r x = 1;"

    def test_error_without_location(self):
        err = SimpleLangError("something broke")
        assert str(err) == "error: something broke"
        assert err.kind == "SimpleLangError"

    def test_errors_share_sdk_base(self):
        with pytest.raises(EightBitError):
            compile_simplelang("x = 1;")

    def test_kind(self):
        with pytest.raises(SimpleLangError) as exc_info:
            compile_simplelang("x = 1;")
        assert exc_info.value.kind == "UndefinedVariableError"

    def test_source_location_str(self):
        assert str(SourceLocation("prog.sl", 3, 9)) == "prog.sl:3:9"


# =============================================================================
# Files
# =============================================================================

class TestFiles:
    """Reading sources and writing assembly."""

    def test_compile_file(self, tmp_path):
        source = tmp_path / "prog.sl"
        source.write_text("int a; a = 5;")
        result = SimpleLangCompiler().compile_file(str(source))
        assert result.filename == str(source)
        assert result.instructions == ["LOADI R0, 5", "STORE R0, 0"]

    def test_compile_file_writes_output(self, tmp_path):
        source = tmp_path / "prog.sl"
        source.write_text("int a; a = 5;")
        output = tmp_path / "prog.asm"
        text = compile_file(str(source), str(output))
        assert text == "LOADI R0, 5\nSTORE R0, 0\n"
        assert output.read_text() == text

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SimpleLangCompiler().compile_file(str(tmp_path / "missing.sl"))

    def test_error_names_file(self, tmp_path):
        source = tmp_path / "bad.sl"
        source.write_text("int a;\na = 1 +;\n")
        with pytest.raises(SimpleLangError) as exc_info:
            compile_file(str(source))
        assert str(exc_info.value).startswith(f"{source}:2:8: error:")
