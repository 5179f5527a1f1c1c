"""
Name normalizer — component identifier → raw name / kebab key / Pascal prefix.

  "accordion"                                   → accordion / accordion / Accordion
  "https://ui.shadcn.com/docs/components/tabs"  → tabs / tabs / Tabs
  "AlertDialog"                                 → AlertDialog / alert-dialog / AlertDialog
"""

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from .errors import InvalidInputError

_URL_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM = re.compile(r"([A-Z]+)([A-Z][a-z])")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


@dataclass(frozen=True)
class ComponentIdentity:
    """Canonical forms of one requested component; immutable per request."""
    raw_name: str
    normalized_key: str
    type_name_prefix: str

    @property
    def base_type_name(self) -> str:
        return f"{self.type_name_prefix}Props"

    def qualified_type_name(self, tag=None) -> str:
        if not tag:
            return self.base_type_name
        return f"{self.type_name_prefix}{tag}Props"

    @property
    def match_names(self) -> tuple:
        """Lower-cased names used by the props-type predicate."""
        names = (self.raw_name, self.normalized_key, self.type_name_prefix)
        return tuple(dict.fromkeys(n.lower() for n in names if n))


def extract_raw_name(value: str) -> str:
    """URL → last path segment (query/fragment stripped); anything else verbatim."""
    if value is None or not value.strip():
        raise InvalidInputError("No component name or URL provided")
    value = value.strip()
    if not _URL_SCHEME.match(value):
        return value
    path = urlsplit(value).path.rstrip("/")
    segment = path.rsplit("/", 1)[-1] if path else ""
    if not segment:
        raise InvalidInputError(f"Could not find a component name in URL: {value}")
    return segment


def to_kebab_case(name: str) -> str:
    s = _ACRONYM.sub(r"\1-\2", name)
    s = _LOWER_UPPER.sub(r"\1-\2", s)
    s = _NON_ALNUM.sub("-", s).strip("-")
    return s.lower()


def to_pascal_case(name: str) -> str:
    parts = [p for p in to_kebab_case(name).split("-") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def normalize_component_name(value: str) -> ComponentIdentity:
    raw = extract_raw_name(value)
    key = to_kebab_case(raw)
    prefix = to_pascal_case(raw)
    if not key or not prefix:
        raise InvalidInputError(f"Component name '{raw}' has no usable characters")
    if prefix[0].isdigit():
        prefix = f"C{prefix}"
    return ComponentIdentity(raw_name=raw, normalized_key=key, type_name_prefix=prefix)
