"""Tests for the modblame command-line interface."""

import json
import sys

import pytest
from typer.testing import CliRunner

from modblame import __version__
from modblame.cli import app


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner isolated from any .modblame.json above the test directory."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def write_edges(path, *lines):
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path


class TestGraphCommand:
    """Test the graph command."""

    def test_renders_to_stdout(self, runner, tmp_path):
        """Test the diagram is written to stdout by default."""
        edges = write_edges(tmp_path / "edges.txt", "a b", "b c")

        result = runner.invoke(app, ["graph", "--input", str(edges)])

        assert result.exit_code == 0
        assert "graph LR;" in result.stdout
        assert 'n2["c"];' in result.stdout

    def test_writes_output_file(self, runner, tmp_path):
        """Test --out writes the diagram to a file."""
        edges = write_edges(tmp_path / "edges.txt", "a b", "b c")
        out = tmp_path / "graph.mmd"

        result = runner.invoke(app, ["graph", "-i", str(edges), "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == (
            "graph LR;\n"
            '    n0["a"];\n'
            '    n1["b"];\n'
            "    n0 --> n1;\n"
            '    n2["c"];\n'
            "    n1 --> n2;\n"
        )

    def test_cycles_only(self, runner, tmp_path):
        """Test --cycles-only drops modules outside cycles."""
        edges = write_edges(tmp_path / "edges.txt", "M1 M2", "M2 M3", "M3 M1", "M4 M2")
        out = tmp_path / "graph.mmd"

        result = runner.invoke(app, ["graph", "-i", str(edges), "--cycles-only", "-o", str(out)])

        assert result.exit_code == 0
        rendered = out.read_text(encoding="utf-8")
        assert '"M1"' in rendered
        assert '"M4"' not in rendered
        assert rendered.count("-->") == 3

    def test_from_and_ignore_versions(self, runner, edge_list_file, tmp_path):
        """Test filters compose with version stripping."""
        out = tmp_path / "graph.mmd"

        result = runner.invoke(app, [
            "graph", "-i", str(edge_list_file), "--from", "example.com/lib",
            "--ignore-versions", "-o", str(out)
        ])

        assert result.exit_code == 0
        rendered = out.read_text(encoding="utf-8")
        assert '"example.com/lib"' in rendered
        assert '"golang.org/x/text"' in rendered
        assert "example.com/app" not in rendered
        assert "@v" not in rendered

    def test_ignore_versions_self_loop_rendered(self, runner):
        """Test a module merged into a self-loop is declared with all its edges."""
        result = runner.invoke(
            app,
            ["graph", "--ignore-versions", "-i", "-"],
            input="app lib@v1\nlib@v1 lib@v2\nlib@v2 x@v1\n",
        )

        assert result.exit_code == 0
        assert 'n2["lib"];' in result.stdout
        assert "n0 --> n2;" in result.stdout
        assert "n2 --> n2;" in result.stdout
        assert "n2 --> n1;" in result.stdout

    def test_to_filter(self, runner, edge_list_file, tmp_path):
        """Test --to keeps only modules leading to the match."""
        out = tmp_path / "graph.mmd"

        result = runner.invoke(app, [
            "graph", "-i", str(edge_list_file), "--to", "example.com/lib", "-o", str(out)
        ])

        assert result.exit_code == 0
        rendered = out.read_text(encoding="utf-8")
        assert rendered.count("-->") == 1
        assert "golang.org" not in rendered

    def test_direction_and_title(self, runner, tmp_path):
        """Test layout options reach the renderer."""
        edges = write_edges(tmp_path / "edges.txt", "a b")
        out = tmp_path / "graph.mmd"

        result = runner.invoke(app, [
            "graph", "-i", str(edges), "--direction", "TB", "--title", "deps", "-o", str(out)
        ])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8").startswith("graph TB;\n    %% deps\n")

    def test_reads_stdin(self, runner):
        """Test '-' reads the edge list from stdin."""
        result = runner.invoke(app, ["graph", "-i", "-"], input="a b\n")

        assert result.exit_code == 0
        assert 'n1["b"];' in result.stdout

    def test_runs_source_command_from_config(self, runner, tmp_path):
        """Test the source command comes from .modblame.json."""
        config = {"source": {"command": [sys.executable, "-c", "print('x y')"]}}
        (tmp_path / ".modblame.json").write_text(json.dumps(config), encoding="utf-8")
        out = tmp_path / "graph.mmd"

        result = runner.invoke(app, ["graph", "-o", str(out)])

        assert result.exit_code == 0
        assert '"x"' in out.read_text(encoding="utf-8")

    def test_config_filters_apply(self, runner, tmp_path):
        """Test filters set in the config file are used."""
        edges = write_edges(tmp_path / "edges.txt", "a@v1 b", "a@v2 b")
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"filters": {"ignoreVersions": True}}), encoding="utf-8")
        out = tmp_path / "graph.mmd"

        result = runner.invoke(app, ["graph", "-i", str(edges), "-c", str(config_file), "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8").count("-->") == 1

    def test_parse_failure_exits_1(self, runner, tmp_path):
        """Test a malformed edge list aborts the run."""
        edges = write_edges(tmp_path / "edges.txt", "a b", "broken")

        result = runner.invoke(app, ["graph", "-i", str(edges)])

        assert result.exit_code == 1
        assert "graph LR;" not in result.stdout

    def test_missing_source_command_exits_1(self, runner, tmp_path):
        """Test an unavailable source command aborts the run."""
        config = {"source": {"command": ["modblame-no-such-command-xyz"]}}
        (tmp_path / ".modblame.json").write_text(json.dumps(config), encoding="utf-8")

        result = runner.invoke(app, ["graph"])

        assert result.exit_code == 1

    def test_invalid_config_exits_1(self, runner, tmp_path):
        """Test an invalid config file aborts the run."""
        (tmp_path / ".modblame.json").write_text("{invalid json", encoding="utf-8")

        result = runner.invoke(app, ["graph", "-i", "-"], input="a b\n")

        assert result.exit_code == 1

    def test_missing_explicit_config_exits_1(self, runner):
        """Test a --config path that does not exist aborts the run."""
        result = runner.invoke(app, ["graph", "-c", "nope.json", "-i", "-"], input="a b\n")

        assert result.exit_code == 1
        assert "graph LR;" not in result.stdout

    def test_invalid_utf8_input_exits_1(self, runner, tmp_path):
        """Test an edge list that is not UTF-8 aborts the run."""
        edges = tmp_path / "edges.txt"
        edges.write_bytes(b"a \xff\n")

        result = runner.invoke(app, ["graph", "-i", str(edges)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)

    @pytest.mark.parametrize(
        "args",
        [
            ["graph", "unexpected"],
            ["graph", "--bogus"],
            ["graph", "--direction", "sideways"],
            ["graph", "--from"],
        ],
    )
    def test_usage_errors_exit_2(self, runner, args):
        """Test usage errors exit with status 2."""
        result = runner.invoke(app, args)

        assert result.exit_code == 2


class TestStatsCommand:
    """Test the stats command."""

    def test_prints_counts(self, runner, tmp_path):
        """Test graph statistics are tabulated."""
        edges = write_edges(tmp_path / "edges.txt", "M1 M2", "M2 M3", "M3 M1", "M4 M2")

        result = runner.invoke(app, ["stats", "-i", str(edges)])

        assert result.exit_code == 0
        assert "Modules" in result.stdout
        assert "Modules in cycles" in result.stdout


class TestVersion:
    """Test version output."""

    def test_version(self, runner):
        """Test --version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
