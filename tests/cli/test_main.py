import pathlib

import pytest
from typer.testing import CliRunner

from inidoc.cli import app

runner = CliRunner()

TEST_INI = """key0=val0
[sec1]
key1=val1
"""


@pytest.fixture
def ini_file(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "test.ini"
    path.write_text(TEST_INI, encoding="utf_8")
    return path


@pytest.fixture
def bad_file(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "bad.ini"
    path.write_text("[sec1]\nss\n", encoding="utf_8")
    return path


def test_show(ini_file: pathlib.Path):
    result = runner.invoke(app, ["show", str(ini_file)])

    assert result.exit_code == 0
    assert "[default]" in result.output
    assert "key1" in result.output
    assert "val1" in result.output


def test_show_section(ini_file: pathlib.Path):
    result = runner.invoke(app, ["show", str(ini_file), "sec1"])

    assert result.exit_code == 0
    assert "val1" in result.output
    assert "val0" not in result.output


def test_show_missing_section(ini_file: pathlib.Path):
    result = runner.invoke(app, ["show", str(ini_file), "nope"])
    assert result.exit_code == 1


def test_get(ini_file: pathlib.Path):
    result = runner.invoke(app, ["get", str(ini_file), "sec1", "key1"])

    assert result.exit_code == 0
    assert result.output == "val1\n"


def test_get_missing(ini_file: pathlib.Path):
    result = runner.invoke(app, ["get", str(ini_file), "sec1", "nope"])
    assert result.exit_code == 1


def test_get_parse_error(bad_file: pathlib.Path):
    result = runner.invoke(app, ["get", str(bad_file), "sec1", "key1"])

    assert result.exit_code == 1
    assert "invalid syntax" in result.output


def test_check(ini_file: pathlib.Path, bad_file: pathlib.Path):
    result = runner.invoke(app, ["check", str(ini_file)])
    assert result.exit_code == 0
    assert "OK" in result.output

    result = runner.invoke(app, ["check", str(ini_file), str(bad_file)])
    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_check_missing_file(tmp_path: pathlib.Path):
    result = runner.invoke(app, ["check", str(tmp_path / "missing.ini")])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_format(ini_file: pathlib.Path):
    result = runner.invoke(app, ["format", str(ini_file)])

    assert result.exit_code == 0
    assert result.output == "[default]\nkey0=val0\n[sec1]\nkey1=val1\n"


def test_format_output(ini_file: pathlib.Path, tmp_path: pathlib.Path):
    output = tmp_path / "out.ini"
    result = runner.invoke(app, ["format", str(ini_file), "-o", str(output)])

    assert result.exit_code == 0
    assert output.read_text(encoding="utf_8") == "[default]\nkey0=val0\n[sec1]\nkey1=val1\n"


def test_check_unknown_encoding(ini_file: pathlib.Path):
    result = runner.invoke(app, ["check", str(ini_file), "--encoding", "no-such-codec"])

    assert result.exit_code == 1
    assert "FAIL" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
