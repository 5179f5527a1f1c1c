"""
CLI entry tests: argument handling and exit codes (pipeline mocked where it would touch npm).
"""
from unittest.mock import patch

import pytest

from shadcn_props import cli
from shadcn_props.errors import WriteFailure
from shadcn_props.pipeline import RunResult


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_registry_flag_prints_entry(capsys):
    assert cli.main(["accordion", "--registry"]) == 0
    out = capsys.readouterr().out
    assert "@radix-ui/react-accordion (primary)" in out
    assert "- Trigger" in out


def test_registry_flag_unknown_component(capsys):
    assert cli.main(["-r", "SomethingElse"]) == 0
    assert "No registry information for 'something-else'" in capsys.readouterr().out


def test_blank_component_exits_1(in_tmp, capsys):
    assert cli.main(["   "]) == 1
    captured = capsys.readouterr()
    assert "No component name" in captured.err
    assert "Troubleshooting tips" in captured.out


def test_success_passes_options(in_tmp):
    with patch("shadcn_props.cli.run", return_value=RunResult(identity=None)) as mock_run:
        assert cli.main(["dialog", "-d", "-n", "-c", "dlg-1"]) == 0
    component, settings, options = mock_run.call_args.args
    assert component == "dialog"
    assert options.deps_only and not options.cleanup
    assert options.component_id == "dlg-1"
    assert settings.output_dir.resolve() == in_tmp.resolve()


def test_write_failure_exits_1(in_tmp):
    with patch("shadcn_props.cli.run", side_effect=WriteFailure("disk full")):
        assert cli.main(["button"]) == 1


def test_keyboard_interrupt_exits_130(in_tmp):
    with patch("shadcn_props.cli.run", side_effect=KeyboardInterrupt):
        assert cli.main(["button"]) == 130


def test_unreadable_config_exits_1(in_tmp):
    (in_tmp / "broken.json").write_text("{not json")
    with patch("shadcn_props.cli.run") as mock_run:
        assert cli.main(["button", "--config", "broken.json"]) == 1
    mock_run.assert_not_called()


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert "0.1.0" in capsys.readouterr().out
