"""External record store (``--component-id``) — one JSON object keyed by identifier."""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from . import reporting


def build_record(identity, output_file: Optional[Path], type_names: list,
                 sub_components: list, dependencies, synthetic: bool) -> dict:
    return {
        "component": identity.raw_name,
        "normalizedKey": identity.normalized_key,
        "typeNamePrefix": identity.type_name_prefix,
        "outputFile": str(output_file) if output_file else None,
        "typeNames": list(type_names),
        "subComponents": list(sub_components),
        "dependencies": sorted(dependencies),
        "synthetic": bool(synthetic),
        "generatedAt": datetime.now(timezone.utc).isoformat(),
    }


def load_records(path: Path) -> dict:
    path = Path(path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, dict) else {}


def write_record(path: Path, record_id: str, record: dict) -> Optional[str]:
    """Insert/replace ``record_id``; failures are warnings only (returns None)."""
    path = Path(path)
    try:
        records = load_records(path)
    except (OSError, ValueError) as e:
        reporting.warn(f"Record store unreadable, starting fresh: {e}")
        records = {}
    records[record_id] = record
    try:
        os.makedirs(path.parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
    except OSError as e:
        reporting.warn(f"Could not write record '{record_id}' to {path}: {e}")
        return None
    return str(path)
