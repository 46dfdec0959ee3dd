from pathlib import Path

import pytest
from click.testing import CliRunner
from wirebind.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_compile_plain(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["compile", "--plain", "(class=cls, on:click=go)"])
    assert result.exit_code == 0, result.output
    assert "def bind_attributes(_el):" in result.output
    assert "_el.register_event('click', go)" in result.output


def test_compile_from_stdin(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["compile", "--plain", "-"], input="(ref=my_ref)\n")
    assert result.exit_code == 0, result.output
    assert "my_ref.assign(_el)" in result.output


def test_compile_reports_diagnostics(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["compile", "--file", "form.wire", "--line", "3", "(bind:nope=v, data-on:x=h)"]
    )
    assert result.exit_code == 1
    assert "form.wire:3:6: property `nope` is not supported with bind:" in result.output
    assert "unknown directive `data-on`" in result.output
    assert "2 errors" in result.output


def test_compile_reports_list_errors(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["compile", "class=x"])
    assert result.exit_code == 1
    assert "AttributeListSyntaxError" in result.output


def test_compile_uses_config_file(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "wirebind.config.py"
    config.write_text('ELEMENT_NAME = "node"\nCELL_KINDS = {"flag": bool}\n')

    result = runner.invoke(cli, ["compile", "--plain", "--config", str(config), "(title=t)"])
    assert result.exit_code == 0, result.output
    assert "def bind_attributes(node):" in result.output

    result = runner.invoke(cli, ["compile", "--config", str(config), "(bind:value=flag)"])
    assert result.exit_code == 1
    assert "TypeMismatchError" in result.output


def test_check(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "(bind:checked=agreed, ref=r)"])
    assert result.exit_code == 0, result.output
    assert "change / bool" in result.output
    assert "2 attributes OK" in result.output


def test_check_failure(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "(123=x, class=y)"])
    assert result.exit_code == 1
    assert "NameParseError" in result.output


def test_verbose_flag(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-v", "compile", "--plain", "(class=x)"])
    assert result.exit_code == 0, result.output
