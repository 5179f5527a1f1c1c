"""
Primitive / dependency inference.

Scans component source (or installer output) for external packages and the
namespace objects ("primitives") imported from them:

  import * as AccordionPrimitive from "@radix-ui/react-accordion"
      → requiredPackages += @radix-ui/react-accordion
      → primitiveNamespaces[AccordionPrimitive] = @radix-ui/react-accordion

Catalogue entries win over generic import inference for the same package.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from .component_registry import COMPONENT_REGISTRY, ComponentDependencies
from .naming import to_kebab_case, to_pascal_case

# Members that are not sub-components even when capitalised access is used.
IGNORED_MEMBERS = {"displayName", "propTypes", "defaultProps"}

# Always available in a React project; never emitted as a primitive import.
_FRAMEWORK_PACKAGES = {"react", "react-dom"}

_NAMESPACE_IMPORT = re.compile(
    r"""import\s+(?:type\s+)?\*\s+as\s+([A-Za-z_$][\w$]*)\s+from\s+['"]([^'"]+)['"]"""
)
_PRIMITIVE_USAGE = re.compile(r"\b([A-Z][A-Za-z0-9]*Primitive)\.([A-Za-z_]\w*)")
# import { Command as CommandPrimitive } from "cmdk"  →  CommandPrimitive is bound
_NAMED_BINDING = re.compile(r"\bas\s+([A-Za-z_$][\w$]*Primitive)\b")


@dataclass
class DependencyProfile:
    """Request-scoped accumulator; only ever grows."""
    required_packages: set = field(default_factory=set)
    primitive_namespaces: dict = field(default_factory=dict)

    def update(self, other: "DependencyProfile") -> "DependencyProfile":
        """In-place union. Existing namespace mappings are kept."""
        self.required_packages |= other.required_packages
        for namespace, package in other.primitive_namespaces.items():
            self.primitive_namespaces.setdefault(namespace, package)
        return self

    def merged(self, other: "DependencyProfile") -> "DependencyProfile":
        return self.copy().update(other)

    def copy(self) -> "DependencyProfile":
        return DependencyProfile(set(self.required_packages), dict(self.primitive_namespaces))

    def add_package(self, package: str, namespace: Optional[str] = None) -> None:
        if package in _FRAMEWORK_PACKAGES:
            return
        self.required_packages.add(package)
        if namespace:
            self.primitive_namespaces.setdefault(namespace, package)

    def package_for(self, namespace: str) -> Optional[str]:
        return self.primitive_namespaces.get(namespace)


@dataclass(frozen=True)
class CatalogueEntry:
    package: str
    namespace: Optional[str] = None
    prefix: bool = False

    def compile(self) -> "re.Pattern":
        escaped = re.escape(self.package)
        if self.prefix:
            return re.compile(rf"(?<![\w@/.\-]){escaped}[a-z0-9\-]*[a-z0-9]")
        return re.compile(rf"(?<![\w@/.\-]){escaped}(?![\w\-])")


def primitive_name_for_package(package: str) -> Optional[str]:
    """@radix-ui/react-dropdown-menu → DropdownMenuPrimitive."""
    segment = package.rstrip("/").rsplit("/", 1)[-1]
    if segment.startswith("react-"):
        segment = segment[len("react-"):]
    base = to_pascal_case(segment)
    if not base:
        return None
    return f"{base}Primitive"


def guess_package_for_primitive(namespace: str) -> Optional[str]:
    """DropdownMenuPrimitive → @radix-ui/react-dropdown-menu (catalogue first)."""
    for entry in CATALOGUE:
        if entry.namespace == namespace and not entry.prefix:
            return entry.package
    match = re.match(r"^([A-Za-z0-9]+)Primitive$", namespace)
    if not match:
        return None
    return f"@radix-ui/react-{to_kebab_case(match.group(1))}"


def _build_catalogue(registry: dict) -> list:
    entries = {}
    for info in registry.values():
        if info.package and info.package not in entries:
            namespace = info.primitive if info.primitive.endswith("Primitive") else None
            entries[info.package] = CatalogueEntry(info.package, namespace)
        for dep in info.additional_deps:
            entries.setdefault(dep, CatalogueEntry(dep))
    for dep in ("date-fns", "react-day-picker", "cmdk", "next-themes", "sonner",
                "tailwind-merge", "class-variance-authority", "lucide-react", "vaul"):
        entries.setdefault(dep, CatalogueEntry(dep))
    # Longest first so "@radix-ui/react-toggle-group" is tried before "...-toggle".
    ordered = sorted(entries.values(), key=lambda e: len(e.package), reverse=True)
    ordered.append(CatalogueEntry("@radix-ui/react-", prefix=True))
    return ordered


CATALOGUE = _build_catalogue(COMPONENT_REGISTRY)
_CATALOGUE_PATTERNS = [(entry, entry.compile()) for entry in CATALOGUE]
_EXACT_PACKAGES = {entry.package for entry in CATALOGUE if not entry.prefix}
_PRIMITIVE_PACKAGES = {entry.package for entry in CATALOGUE if entry.namespace}


def namespace_imports(text: str) -> list:
    """All ``import * as X from "pkg"`` pairs, in source order."""
    return [(m.group(1), m.group(2)) for m in _NAMESPACE_IMPORT.finditer(text or "")]


def is_external_package(specifier: str) -> bool:
    if not specifier or specifier.startswith((".", "/", "@/", "~/", "#")):
        return False
    return specifier not in _FRAMEWORK_PACKAGES


def _catalogue_signals(text: str, imports: list, profile: DependencyProfile) -> set:
    """Signal (a): catalogue patterns. Returns the packages it claimed."""
    claimed = set()
    imported_aliases = {}
    for alias, package in imports:
        imported_aliases.setdefault(package, []).append(alias)

    for entry, pattern in _CATALOGUE_PATTERNS:
        for match in pattern.finditer(text):
            package = match.group(0)
            if package in claimed:
                continue
            if entry.prefix and package in _EXACT_PACKAGES:
                continue
            claimed.add(package)
            profile.add_package(package)
            aliases = imported_aliases.get(package)
            if not aliases:
                continue
            namespace = entry.namespace
            if entry.prefix:
                namespace = primitive_name_for_package(package)
            if namespace:
                profile.add_package(package, namespace)
            # copied declarations reference the local alias
            for alias in aliases:
                profile.add_package(package, alias)
    return claimed


def _generic_signals(imports: list, claimed: set, profile: DependencyProfile) -> None:
    """Signal (b): every namespace import of a non-relative package."""
    for alias, package in imports:
        if not is_external_package(package):
            continue
        profile.add_package(package)
        if package in claimed:
            continue
        inferred = primitive_name_for_package(package)
        if inferred:
            profile.add_package(package, inferred)
        if alias != inferred:
            profile.add_package(package, alias)


def _usage_signals(text: str, profile: DependencyProfile) -> None:
    """``FooPrimitive.Bar`` used without any import binding → guessed Radix package."""
    bound = set(_NAMED_BINDING.findall(text))
    for match in _PRIMITIVE_USAGE.finditer(text):
        namespace = match.group(1)
        if namespace in profile.primitive_namespaces or namespace in bound:
            continue
        package = guess_package_for_primitive(namespace)
        if package:
            profile.add_package(package, namespace)


def infer_dependencies(text: str, profile: Optional[DependencyProfile] = None) -> DependencyProfile:
    """Return a new profile = ``profile`` ∪ everything inferred from ``text``."""
    result = profile.copy() if profile is not None else DependencyProfile()
    if not text:
        return result
    imports = namespace_imports(text)
    claimed = _catalogue_signals(text, imports, result)
    _generic_signals(imports, claimed, result)
    _usage_signals(text, result)
    return result


def profile_from_registry(info: Optional[ComponentDependencies]) -> DependencyProfile:
    """Seed a profile from a static registry entry (short-circuits inference)."""
    profile = DependencyProfile()
    if info is None:
        return profile
    for package in info.packages:
        profile.add_package(package)
    if info.package and info.primitive.endswith("Primitive"):
        profile.add_package(info.package, info.primitive)
    return profile


def merge_profiles(*profiles) -> DependencyProfile:
    """Union of several profiles, reduced left to right into a new profile."""
    result = DependencyProfile()
    for profile in profiles:
        if profile is not None:
            result.update(profile)
    return result


def is_primitive_package(package: str) -> bool:
    """Radix packages and catalogue entries that export a component namespace."""
    return package.startswith("@radix-ui/") or package in _PRIMITIVE_PACKAGES


def primitive_namespace_names(profile: DependencyProfile) -> list:
    """Namespaces whose members are sub-components (icon sets and helpers excluded)."""
    return [ns for ns, pkg in profile.primitive_namespaces.items() if is_primitive_package(pkg)]


def observed_sub_components(text: str, namespaces) -> dict:
    """Capitalised ``Namespace.Member`` accesses → {member: namespace}, first-seen order."""
    if not text:
        return {}
    seen = {}
    for namespace in namespaces:
        for match in re.finditer(rf"(?<![\w$.]){re.escape(namespace)}\.([A-Z]\w*)", text):
            member = match.group(1)
            if member in IGNORED_MEMBERS:
                continue
            if member not in seen or match.start() < seen[member][0]:
                seen[member] = (match.start(), namespace)
    ordered = sorted(seen.items(), key=lambda kv: kv[1][0])
    return {member: namespace for member, (_, namespace) in ordered}
