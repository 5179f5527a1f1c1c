"""
Remote component registry — fallback source when nothing is installed locally.

Fetches ``<url>/<key>.json`` (the shadcn registry item format) and writes its
``files[].content`` into a temporary directory for the file locator.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import requests

from . import reporting
from .errors import DiscoveryFailure


@dataclass
class RegistryItem:
    name: str
    files: list = field(default_factory=list)
    dependencies: list = field(default_factory=list)
    registry_dependencies: list = field(default_factory=list)

    @classmethod
    def from_json(cls, key: str, data: dict) -> "RegistryItem":
        if not isinstance(data, dict):
            raise DiscoveryFailure(f"Registry item for '{key}' is not a JSON object")
        files = []
        for entry in data.get("files") or []:
            if isinstance(entry, dict) and isinstance(entry.get("content"), str):
                files.append(entry)
        deps = [d for d in data.get("dependencies") or [] if isinstance(d, str)]
        reg_deps = [d for d in data.get("registryDependencies") or [] if isinstance(d, str)]
        return cls(name=data.get("name") or key, files=files, dependencies=deps,
                   registry_dependencies=reg_deps)


class RegistryClient:
    """Read-only wrapper over the component registry HTTP API."""

    def __init__(self, base_url: str, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def get_item(self, key: str) -> RegistryItem:
        url = f"{self.base_url}/{key}.json"
        reporting.debug("locate", f"GET {url}")
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise DiscoveryFailure(f"Registry request failed for '{key}': {e}") from e
        except ValueError as e:
            raise DiscoveryFailure(f"Registry returned invalid JSON for '{key}': {e}") from e
        return RegistryItem.from_json(key, data)


def _safe_name(entry: dict, index: int) -> str:
    raw = entry.get("path") or entry.get("target") or f"component-{index}.tsx"
    name = PurePosixPath(str(raw).replace("\\", "/")).name
    return name or f"component-{index}.tsx"


def write_item_files(item: RegistryItem, temp_dir: Path) -> list:
    """Write every file's content flat into ``temp_dir``; returns the paths."""
    temp_dir = Path(temp_dir)
    written = []
    try:
        temp_dir.mkdir(parents=True, exist_ok=True)
        for index, entry in enumerate(item.files):
            path = temp_dir / _safe_name(entry, index)
            if path in written:
                path = temp_dir / f"{path.stem}-{index}{path.suffix}"
            path.write_text(entry["content"], encoding="utf-8")
            written.append(path)
    except OSError as e:
        raise DiscoveryFailure(f"Could not write registry files to {temp_dir}: {e}") from e
    return written


def cleanup_temp_dir(temp_dir: Path) -> None:
    temp_dir = Path(temp_dir)
    if temp_dir.exists():
        shutil.rmtree(temp_dir, ignore_errors=True)
        reporting.debug("locate", f"removed {temp_dir}")
