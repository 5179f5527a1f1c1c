"""
Config loading / validation / Settings resolution tests.
"""
import json

from shadcn_props.config import load_config, settings_from_config, validate_config


def test_missing_config_is_empty(tmp_path):
    assert load_config(str(tmp_path / "missing.json")) == {}


def test_load_valid_config(tmp_path):
    path = tmp_path / "shadcn-props.config.json"
    path.write_text(json.dumps({"install": {"enabled": False}}))
    assert load_config(str(path)) == {"install": {"enabled": False}}


def test_non_object_config_ignored(tmp_path, capsys):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]")
    assert load_config(str(path)) == {}
    assert "malformed" in capsys.readouterr().out


def test_validate_warns_unknown_keys(capsys):
    validate_config({"outptu": {}, "install": {"timeout": 5}})
    out = capsys.readouterr().out
    assert "unknown top-level key 'outptu'" in out
    assert "[install] unknown key 'timeout'" in out


def test_validate_warns_bad_values(capsys):
    validate_config({
        "install": {"packageManager": "bun", "timeoutSeconds": "soon", "enabled": "yes"},
        "format": {"command": "prettier"},
    })
    out = capsys.readouterr().out
    assert "install.packageManager 'bun'" in out
    assert "install.timeoutSeconds should be a number" in out
    assert "install.enabled should be true/false" in out
    assert "format.command should be a list of strings" in out


def test_validate_empty_config_silent(capsys):
    validate_config({})
    assert capsys.readouterr().out == ""


def test_default_settings(tmp_path):
    (tmp_path / "package.json").write_text("{}")
    settings = settings_from_config({}, tmp_path)
    assert settings.root == tmp_path.resolve()
    assert settings.component_dirs == ["components/ui", "src/components/ui"]
    assert settings.install_timeout == 90
    assert settings.registry_url == "https://ui.shadcn.com/r"
    assert settings.output_dir == tmp_path
    assert settings.records_file == tmp_path / ".shadcn-props" / "records.json"
    assert settings.format_command[:3] == ["npx", "--no-install", "prettier"]


def test_project_root_found_in_ancestor(tmp_path):
    (tmp_path / "package.json").write_text("{}")
    nested = tmp_path / "apps" / "web"
    nested.mkdir(parents=True)
    assert settings_from_config({}, nested).root == tmp_path.resolve()


def test_overrides_and_bad_values(tmp_path):
    cfg = {
        "project": {"root": ".", "componentDirs": ["app/ui"]},
        "install": {"timeoutSeconds": -1, "packageManager": "bun", "enabled": False},
        "registry": {"url": "https://example.com/r/", "enabled": False},
        "output": {"dir": "out", "suffix": ".props.ts"},
        "format": {"enabled": False},
    }
    settings = settings_from_config(cfg, tmp_path)
    assert settings.root == tmp_path.resolve()
    assert settings.component_dirs == ["app/ui"]
    assert settings.install_timeout == 90
    assert settings.package_manager == "auto"
    assert settings.install_enabled is False
    assert settings.registry_url == "https://example.com/r"
    assert settings.registry_enabled is False
    assert settings.output_dir == tmp_path / "out"
    assert settings.output_suffix == ".props.ts"
    assert settings.format_enabled is False
