"""
Integration tests for the full pipeline:
  MacroPreprocessor → Lexer → FunctionTableBuilder → ScriptFormatter

Uses the fixture scripts under ``tests/fixtures``.
"""
from __future__ import annotations

import importlib.util
import json
import textwrap
from pathlib import Path

import pytest

from sqlscript_parser import ScriptAnalysis
from sqlscript_parser.models import ARITY_MISMATCH, MISSING_PAREN, END_OF_FILE

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def analysis():
    return ScriptAnalysis()


# ─────────────────────────────────────────────────────────────────────────────
# ScriptAnalysis.format_text
# ─────────────────────────────────────────────────────────────────────────────


class TestFormatText:
    def test_macro_expanded_before_tokenizing(self, analysis):
        source = textwrap.dedent("""\
        #define ARGS 1, 2
        foo(ARGS)
        foo(1)
        """)
        result = analysis.format_text(source)
        assert result.table["foo"].arguments == ("1", "2")
        assert result.text == (
            "foo (\n"
            ");\n"
            "foo (\n"
            "-- Error: Function 'foo' at line 1 expects 2 arguments, but 1 were provided.\n"
            ");\n"
        )

    def test_line_numbers_follow_preprocessed_text(self, analysis):
        source = "#define A 1\n#define B 2\nf(A)\nf(A, B)\n"
        result = analysis.format_text(source)
        assert result.table["f"].line == 1
        assert result.diagnostics[0].line == 2

    def test_macro_before_definition_not_applied(self, analysis):
        source = "f(N)\n#define N 1, 2\nf(N)\n"
        result = analysis.format_text(source)
        assert result.table["f"].arguments == ("N",)
        assert [d.kind for d in result.diagnostics] == [ARITY_MISMATCH]

    def test_tokens_end_with_marker(self, analysis):
        result = analysis.format_text("select a from t")
        assert result.tokens[-1].kind == END_OF_FILE

    def test_source_name_recorded(self, analysis):
        result = analysis.format_text("select", source_name="inline.sql")
        assert result.source_name == "inline.sql"

    def test_repeated_runs_identical(self, analysis):
        source = (FIXTURES / "sample.sql").read_text(encoding="utf-8")
        first = analysis.format_text(source)
        second = analysis.format_text(source)
        assert first.text == second.text
        assert first.table.to_dict() == second.table.to_dict()

    def test_custom_indent_width(self):
        result = ScriptAnalysis(indent_width=2).format_text("select")
        assert result.text == "select\n"

    def test_custom_directive(self):
        result = ScriptAnalysis(directive="%let").format_text("%let T users\nselect T\n")
        assert result.text == "select\nusers;\n"

    def test_to_dict_is_json_serialisable(self, analysis):
        result = analysis.format_text("f(1)\nf()\n")
        payload = json.loads(json.dumps(result.to_dict()))
        assert payload["functions"]["f"]["arity"] == 1
        assert payload["diagnostics"][0]["kind"] == ARITY_MISMATCH


# ─────────────────────────────────────────────────────────────────────────────
# ScriptAnalysis.format_file
# ─────────────────────────────────────────────────────────────────────────────


class TestFormatFile:
    def test_sample_matches_expected(self, analysis):
        result = analysis.format_file(str(FIXTURES / "sample.sql"))
        expected = (FIXTURES / "sample.expected").read_text(encoding="utf-8")
        assert result.text == expected

    def test_sample_function_table(self, analysis):
        result = analysis.format_file(str(FIXTURES / "sample.sql"))
        assert set(result.table) == {"log_event", "fetch_rows"}
        assert result.table["log_event"].arguments == ("insert", "customers")
        assert result.table["fetch_rows"].line == 6

    def test_unterminated_fixture(self, analysis):
        result = analysis.format_file(str(FIXTURES / "unterminated.sql"))
        assert [d.kind for d in result.diagnostics] == [MISSING_PAREN]
        assert result.text.endswith(");\n")

    def test_missing_file_raises(self, analysis, tmp_path):
        with pytest.raises(OSError):
            analysis.format_file(str(tmp_path / "missing.sql"))

    def test_output_path_is_sibling(self):
        assert ScriptAnalysis.output_path_for("dir/script.sql") == Path("dir/script.sql.formatted")


# ─────────────────────────────────────────────────────────────────────────────
# scripts/export_tokens.py
# ─────────────────────────────────────────────────────────────────────────────


def _load_export_script():
    path = Path(__file__).parent.parent / "scripts" / "export_tokens.py"
    spec = importlib.util.spec_from_file_location("export_tokens", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestExportTokensScript:
    def test_usage_fixtures_exist(self):
        script = _load_export_script()
        for name in ("sample.sql", "unterminated.sql"):
            assert f"tests/fixtures/{name}" in script.__doc__
            assert (FIXTURES / name).exists()

    def test_export_writes_tokens_table_and_diagnostics(self, tmp_path):
        script = _load_export_script()
        script.export(str(FIXTURES / "sample.sql"), tmp_path, "#define")
        payload = json.loads((tmp_path / "sample.json").read_text(encoding="utf-8"))
        assert payload["tokens"]
        assert payload["functions"]["fetch_rows"]["arity"] == 2
        assert len(payload["diagnostics"]) == 2
