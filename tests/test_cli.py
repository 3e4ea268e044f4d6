"""Tests de la commande CLI."""

import runpy
import sys

import pytest
from click.testing import CliRunner

from bytefmt.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestHelpAndVersion:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "--delimiter" in result.output
        assert "--base10" in result.output
        assert "--output-unit" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestConversion:
    def test_default_binary(self, runner):
        result = runner.invoke(cli, [], input="1048576\n")
        assert result.exit_code == 0
        assert result.output == "   1.00 MiB\n"

    def test_fixed_output_unit_base10(self, runner):
        result = runner.invoke(
            cli, ["-o", "K", "--base10"], input="5000\tfoo.txt\n",
        )
        assert result.exit_code == 0
        assert result.output == "   5.00 K\tfoo.txt\n"

    def test_unit_in_input(self, runner):
        result = runner.invoke(cli, [], input="2048M\n")
        assert result.exit_code == 0
        assert result.output == "   2.00 GiB\n"

    def test_forced_input_unit(self, runner):
        result = runner.invoke(cli, ["-i", "k"], input="2048\n")
        assert result.output == "   2.00 MiB\n"

    def test_delimiter_and_field(self, runner):
        result = runner.invoke(
            cli, ["-d", ",", "-f", "1"], input="a,2048,b\n",
        )
        assert result.exit_code == 0
        assert result.output == "a,   2.00 KiB,b\n"

    def test_escaped_tab_delimiter(self, runner):
        result = runner.invoke(
            cli, ["-d", "\\t", "-f", "1"], input="foo\t1024\n",
        )
        assert result.output == "foo\t   1.00 KiB\n"

    def test_du_output(self, runner):
        """Sortie typique de ``du -b | sort -n``."""
        lines = "0\t./vide\n4096\t./src\n5368709120\t.\n"
        result = runner.invoke(cli, [], input=lines)
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "   0.00 B\t./vide",
            "   4.00 KiB\t./src",
            "   5.00 GiB\t.",
        ]

    def test_files_read_in_order(self, runner, tmp_path):
        first = tmp_path / "a.txt"
        second = tmp_path / "b.txt"
        first.write_text("1024\n")
        second.write_text("2048\n")

        result = runner.invoke(cli, [str(first), str(second)])
        assert result.exit_code == 0
        assert result.output == "   1.00 KiB\n   2.00 KiB\n"

    def test_non_utf8_bytes_pass_through(self, runner):
        """Les noms de fichiers non UTF-8 de ``du`` ressortent intacts."""
        result = runner.invoke(cli, [], input=b"4096\t./caf\xe9\n")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"   4.00 KiB\t./caf\xe9\n"

    def test_non_utf8_file_argument(self, runner, tmp_path):
        path = tmp_path / "du.txt"
        path.write_bytes(b"2048\t\xff\xfe\n")

        result = runner.invoke(cli, [str(path)])
        assert result.exit_code == 0
        assert result.stdout_bytes == b"   2.00 KiB\t\xff\xfe\n"

    def test_non_ascii_delimiter(self, runner):
        result = runner.invoke(
            cli, ["-d", "§", "-f", "1"], input="a§2048§b\n",
        )
        assert result.exit_code == 0
        assert result.output == "a§   2.00 KiB§b\n"

    def test_empty_units_are_ignored(self, runner):
        result = runner.invoke(cli, ["-i", "", "-o", ""], input="2048M\n")
        assert result.exit_code == 0
        assert result.output == "   2.00 GiB\n"

    def test_debug_trace(self, runner):
        result = runner.invoke(cli, ["--debug"], input="3k\n")
        assert result.exit_code == 0
        assert "3072 octets" in result.output
        assert "   3.00 KiB" in result.output


class TestErrors:
    def test_missing_value_aborts(self, runner):
        result = runner.invoke(cli, [], input="abc\n")
        assert result.exit_code == 1
        assert "Erreur ligne 1" in result.output
        assert "Usage:" in result.output

    def test_stops_after_failing_line(self, runner):
        result = runner.invoke(cli, [], input="1024\nabc\n2048\n")
        assert result.exit_code == 1
        assert "   1.00 KiB" in result.output
        assert "Erreur ligne 2" in result.output
        assert "2.00 KiB" not in result.output

    def test_field_out_of_range(self, runner):
        result = runner.invoke(cli, ["-f", "3"], input="1024\n")
        assert result.exit_code == 1

    def test_empty_delimiter(self, runner):
        result = runner.invoke(cli, ["-d", ""], input="1024\n")
        assert result.exit_code == 2

    def test_negative_field(self, runner):
        result = runner.invoke(cli, ["-f", "-1"], input="1024\n")
        assert result.exit_code == 2

    def test_unknown_unit_is_not_an_error(self, runner):
        result = runner.invoke(cli, [], input="12 octets\n")
        assert result.exit_code == 0
        assert result.output == "  12.00 B\n"


class TestModuleEntryPoint:
    def test_python_m(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["bytefmt", "--version"])
        with pytest.raises(SystemExit) as exc:
            runpy.run_module("bytefmt", run_name="__main__")
        assert exc.value.code == 0
        assert "bytefmt, version 0.1.0" in capsys.readouterr().out
