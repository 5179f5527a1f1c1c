"""
External process collaborators — component installer CLI and package manager.

Every process runs under an explicit timeout (``run_with_timeout``); on expiry
it is killed and ``TimeoutFailure`` raised. The public helpers here never
raise: failures become ``InstallResult(ok=False)`` or ``{pkg: False}``.
"""

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import reporting
from .config import Settings
from .errors import DependencyInstallFailure, PropsExtractError, TimeoutFailure
from .naming import ComponentIdentity

_LOCK_FILES = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
)

_INSTALL_COMMANDS = {
    "npm": ["npm", "install", "--save"],
    "yarn": ["yarn", "add"],
    "pnpm": ["pnpm", "add"],
}

SOURCE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")


@dataclass
class InstallResult:
    ok: bool
    output: str = ""
    skipped: bool = False


def run_with_timeout(cmd: list, timeout: float, input_text: Optional[str] = None,
                     cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """Run ``cmd`` capturing output; kill it after ``timeout`` seconds."""
    reporting.debug("install", f"$ {' '.join(cmd)} (timeout {timeout:g}s)")
    try:
        return subprocess.run(
            cmd,
            input=input_text,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=str(cwd) if cwd else None,
        )
    except subprocess.TimeoutExpired as e:
        raise TimeoutFailure(cmd, timeout) from e
    except FileNotFoundError as e:
        raise DependencyInstallFailure(f"Executable not found: {cmd[0]}") from e
    except OSError as e:
        raise DependencyInstallFailure(f"Could not start {cmd[0]}: {e}") from e


def component_file_exists(identity: ComponentIdentity, settings: Settings) -> Optional[Path]:
    for rel in settings.component_dirs:
        base = settings.root / rel
        for ext in SOURCE_EXTENSIONS:
            for path in (base / f"{identity.normalized_key}{ext}",
                         base / identity.normalized_key / f"index{ext}"):
                if path.is_file():
                    return path
    return None


def install_component(identity: ComponentIdentity, settings: Settings) -> InstallResult:
    """``npx --yes <cli> add <key> --yes`` for each configured CLI until one succeeds."""
    existing = component_file_exists(identity, settings)
    if existing is not None:
        reporting.info(f"Component already present: {existing}")
        return InstallResult(ok=True, skipped=True)
    if not settings.install_enabled:
        reporting.debug("install", "component installation disabled by config")
        return InstallResult(ok=False)

    outputs = []
    for spec in settings.installer_cli:
        cmd = ["npx", "--yes", spec, "add", identity.normalized_key, "--yes"]
        try:
            # answer "y" to any prompt the CLI still shows
            proc = run_with_timeout(cmd, settings.install_timeout, input_text="y\n" * 4, cwd=settings.root)
        except PropsExtractError as e:
            reporting.warn(f"{spec}: {e}")
            continue
        outputs.append((proc.stdout or "") + (proc.stderr or ""))
        if proc.returncode == 0:
            reporting.ok(f"Installed {identity.normalized_key} with {spec}")
            return InstallResult(ok=True, output="\n".join(outputs))
        reporting.warn(f"{spec} exited with code {proc.returncode}")
    return InstallResult(ok=False, output="\n".join(outputs))


def detect_package_manager(root: Path, configured: str = "auto") -> str:
    if configured and configured != "auto":
        return configured
    for lock_file, manager in _LOCK_FILES:
        if (Path(root) / lock_file).exists():
            return manager
    return "npm"


def read_declared_packages(root: Path) -> set:
    path = Path(root) / "package.json"
    if not path.exists():
        return set()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        reporting.warn(f"Could not read {path}: {e}")
        return set()
    if not isinstance(data, dict):
        return set()
    declared = set()
    for section in ("dependencies", "devDependencies"):
        deps = data.get(section)
        if isinstance(deps, dict):
            declared.update(deps)
    return declared


def check_installed(packages, root: Path) -> tuple:
    """(installed, missing), both sorted."""
    declared = read_declared_packages(root)
    installed = sorted(p for p in packages if p in declared)
    missing = sorted(p for p in packages if p not in declared)
    return installed, missing


def _install(packages: list, manager: str, settings: Settings) -> None:
    proc = run_with_timeout(_INSTALL_COMMANDS[manager] + list(packages),
                            settings.install_timeout, cwd=settings.root)
    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip().splitlines()
        raise DependencyInstallFailure(detail[-1] if detail else f"{manager} exited with {proc.returncode}")


def install_packages(packages, settings: Settings) -> dict:
    """Install missing packages in one batch; on failure retry one by one."""
    installed, missing = check_installed(packages, settings.root)
    results = {p: True for p in installed}
    if not missing:
        return results
    if not settings.install_enabled:
        reporting.warn(f"Installation disabled; install manually: {', '.join(missing)}")
        results.update({p: False for p in missing})
        return results

    manager = detect_package_manager(settings.root, settings.package_manager)
    reporting.step(f"Installing dependencies with {manager}: {', '.join(missing)}")
    try:
        _install(missing, manager, settings)
        results.update({p: True for p in missing})
        reporting.ok(f"Installed {len(missing)} package(s)")
        return results
    except PropsExtractError as e:
        reporting.warn(f"Batch install failed: {e}")

    for package in missing:
        try:
            _install([package], manager, settings)
            results[package] = True
            reporting.ok(f"Installed {package}")
        except PropsExtractError as e:
            results[package] = False
            reporting.warn(f"Failed to install {package}: {e}")
    return results
