"""Config file loading, basic validation, and resolution into ``Settings``."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

DEFAULT_CONFIG_FILE = "shadcn-props.config.json"

# Known top-level sections
_KNOWN_TOP_KEYS = {"project", "install", "registry", "output", "format"}

# Known keys per section (for typo hints)
_KNOWN_SECTION_KEYS = {
    "project": {"root", "componentDirs"},
    "install": {"enabled", "timeoutSeconds", "packageManager", "cli"},
    "registry": {"url", "enabled", "timeoutSeconds"},
    "output": {"dir", "suffix", "recordsFile"},
    "format": {"enabled", "command", "timeoutSeconds"},
}

_VALID_PACKAGE_MANAGERS = {"auto", "npm", "yarn", "pnpm"}

_BOOL_KEYS = (("install", "enabled"), ("registry", "enabled"), ("format", "enabled"))
_NUMBER_KEYS = (("install", "timeoutSeconds"), ("registry", "timeoutSeconds"), ("format", "timeoutSeconds"))
_LIST_KEYS = (("project", "componentDirs"), ("install", "cli"), ("format", "command"))


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """Basic field checks on the config; prints warnings, never raises."""
    if not cfg:
        return

    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"unknown top-level key '{key}' (known: {known})")

    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' should be an object, got {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] unknown key '{key}' (known: {known})")

    for section, key in _BOOL_KEYS:
        val = _section(cfg, section).get(key)
        if val is not None and not isinstance(val, bool):
            _warn(f"{section}.{key} should be true/false, got {type(val).__name__}")

    for section, key in _NUMBER_KEYS:
        val = _section(cfg, section).get(key)
        if val is None:
            continue
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            _warn(f"{section}.{key} should be a number, got {type(val).__name__}")
        elif val <= 0:
            _warn(f"{section}.{key} should be positive, got {val}")

    for section, key in _LIST_KEYS:
        val = _section(cfg, section).get(key)
        if val is not None and not (isinstance(val, list) and all(isinstance(v, str) for v in val)):
            _warn(f"{section}.{key} should be a list of strings")

    manager = _section(cfg, "install").get("packageManager")
    if manager is not None and (not isinstance(manager, str) or manager not in _VALID_PACKAGE_MANAGERS):
        valid = ", ".join(sorted(_VALID_PACKAGE_MANAGERS))
        _warn(f"install.packageManager '{manager}' is not a known value ({valid})")

    root = _section(cfg, "project").get("root")
    if isinstance(root, str) and root and not Path(root).exists():
        _warn(f"project.root '{root}' does not exist")


def load_config(config_path: str = DEFAULT_CONFIG_FILE) -> dict:
    """Load the JSON config file; missing file → empty dict. Validated when present."""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' is malformed (expected a JSON object); using empty config.")
        return {}
    validate_config(cfg)
    return cfg


def _section(cfg: dict, name: str) -> dict:
    section = (cfg or {}).get(name, {})
    return section if isinstance(section, dict) else {}


def find_project_root(start: Optional[Path] = None) -> Path:
    """Nearest ancestor holding package.json, else ``start`` (cwd)."""
    start = Path(start or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if (candidate / "package.json").exists():
            return candidate
    return start


@dataclass
class Settings:
    root: Path = field(default_factory=Path.cwd)
    component_dirs: list = field(default_factory=lambda: ["components/ui", "src/components/ui"])
    install_enabled: bool = True
    install_timeout: float = 90
    package_manager: str = "auto"
    installer_cli: list = field(default_factory=lambda: ["shadcn@latest", "shadcn-ui@latest"])
    registry_url: str = "https://ui.shadcn.com/r"
    registry_enabled: bool = True
    registry_timeout: float = 10
    output_dir: Path = field(default_factory=Path.cwd)
    output_suffix: str = "Props.ts"
    records_file: Path = field(default_factory=lambda: Path(".shadcn-props/records.json"))
    format_enabled: bool = True
    format_command: list = field(default_factory=lambda: ["npx", "--no-install", "prettier", "--parser", "typescript"])
    format_timeout: float = 30


def _typed(value, kind, default):
    if kind is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            return default
        return value
    if kind is list:
        if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
            return list(value)
        return default
    return value if isinstance(value, kind) else default


def settings_from_config(cfg: dict, cwd: Optional[Path] = None) -> Settings:
    """Resolve a (possibly empty) config dict into ``Settings``; bad values fall back to defaults."""
    cwd = Path(cwd or Path.cwd())
    defaults = Settings(root=cwd, output_dir=cwd)
    project = _section(cfg, "project")
    install = _section(cfg, "install")
    registry = _section(cfg, "registry")
    output = _section(cfg, "output")
    fmt = _section(cfg, "format")

    root_value = project.get("root")
    root = (cwd / root_value).resolve() if isinstance(root_value, str) and root_value else find_project_root(cwd)

    manager = install.get("packageManager", "auto")
    if not isinstance(manager, str) or manager not in _VALID_PACKAGE_MANAGERS:
        manager = "auto"

    output_dir = output.get("dir")
    records_file = output.get("recordsFile")

    return Settings(
        root=root,
        component_dirs=_typed(project.get("componentDirs"), list, defaults.component_dirs),
        install_enabled=_typed(install.get("enabled"), bool, defaults.install_enabled),
        install_timeout=_typed(install.get("timeoutSeconds"), float, defaults.install_timeout),
        package_manager=manager,
        installer_cli=_typed(install.get("cli"), list, defaults.installer_cli),
        registry_url=_typed(registry.get("url"), str, defaults.registry_url).rstrip("/"),
        registry_enabled=_typed(registry.get("enabled"), bool, defaults.registry_enabled),
        registry_timeout=_typed(registry.get("timeoutSeconds"), float, defaults.registry_timeout),
        output_dir=(cwd / output_dir) if isinstance(output_dir, str) and output_dir else cwd,
        output_suffix=_typed(output.get("suffix"), str, defaults.output_suffix) or defaults.output_suffix,
        records_file=cwd / (records_file if isinstance(records_file, str) and records_file
                            else defaults.records_file),
        format_enabled=_typed(fmt.get("enabled"), bool, defaults.format_enabled),
        format_command=_typed(fmt.get("command"), list, defaults.format_command),
        format_timeout=_typed(fmt.get("timeoutSeconds"), float, defaults.format_timeout),
    )
