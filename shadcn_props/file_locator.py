"""File locator — component key → candidate source files.

Glob patterns are searched in parallel (read-only); matches are merged into a
de-duplicated list in pattern order. A non-empty ``.temp-component`` directory
(remote registry fallback) takes precedence over the project tree.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from . import reporting
from .naming import ComponentIdentity

TEMP_DIR_NAME = ".temp-component"

_SKIP_PARTS = {"node_modules", ".git", ".next", "dist", "build", TEMP_DIR_NAME}
_EXTENSIONS = (".tsx", ".ts", ".jsx")


def candidate_patterns(identity: ComponentIdentity, component_dirs=("components/ui", "src/components/ui")) -> list:
    """Most specific first: configured dirs, then any components/ dir, then fuzzy."""
    patterns = []
    for name in dict.fromkeys((identity.normalized_key, identity.type_name_prefix, identity.raw_name)):
        for rel in component_dirs:
            rel = rel.strip("/")
            patterns.append(f"{rel}/{name}.tsx")
            patterns.append(f"{rel}/{name}/**/*.tsx")
        patterns.append(f"**/components/**/{name}.tsx")
        patterns.append(f"**/components/**/{name}/**/*.tsx")
    for name in dict.fromkeys((identity.normalized_key, identity.type_name_prefix)):
        patterns.append(f"**/components/**/*{name}*.tsx")
    return list(dict.fromkeys(patterns))


def _glob(root: Path, pattern: str) -> list:
    try:
        matches = []
        for path in root.glob(pattern):
            rel_parts = path.relative_to(root).parts
            if any(part in _SKIP_PARTS for part in rel_parts):
                continue
            if path.is_file():
                matches.append(path.resolve())
        return sorted(matches)
    except (OSError, ValueError) as e:
        reporting.debug("locate", f"pattern {pattern!r} failed: {e}")
        return []


def temp_component_files(temp_dir: Path) -> list:
    if not temp_dir.is_dir():
        return []
    return sorted(p.resolve() for p in temp_dir.rglob("*")
                  if p.is_file() and p.suffix in _EXTENSIONS)


def locate_component_files(identity: ComponentIdentity, root: Path,
                           component_dirs=("components/ui", "src/components/ui"),
                           temp_dir: Optional[Path] = None,
                           max_workers: int = 8) -> list:
    """Absolute paths believed to hold the component source; may be empty."""
    if temp_dir is not None:
        temp_files = temp_component_files(Path(temp_dir))
        if temp_files:
            reporting.debug("locate", f"{len(temp_files)} file(s) in {temp_dir}")
            return temp_files

    root = Path(root)
    if not root.is_dir():
        return []
    patterns = candidate_patterns(identity, component_dirs)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(lambda p: _glob(root, p), patterns))

    found = []
    seen = set()
    for pattern, matches in zip(patterns, results):
        if matches:
            reporting.debug("locate", f"{pattern}: {len(matches)} match(es)")
        for path in matches:
            if path not in seen:
                seen.add(path)
                found.append(path)
    return found
