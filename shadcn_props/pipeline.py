"""
Request coordinator — one component identifier in, one props file out.

  normalize → registry seed → install → locate (→ remote registry)
      → per-file inference + extraction (parallel) → merge
      → classify / complete (or synthesize) → assemble → format → write
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from . import reporting
from .assembler import OutputDocument, assemble_document, exported_type_names, format_document
from .classifier import classify_candidates, complete_candidates, order_candidates
from .component_registry import ComponentDependencies, get_component_dependencies
from .config import Settings
from .dependencies import (
    DependencyProfile,
    infer_dependencies,
    merge_profiles,
    observed_sub_components,
    primitive_namespace_names,
    profile_from_registry,
)
from .errors import DiscoveryFailure, WriteFailure
from .extractors import Strategy, run_strategy_chain
from .file_locator import TEMP_DIR_NAME, locate_component_files
from .installer import check_installed, install_component, install_packages
from .naming import ComponentIdentity, normalize_component_name
from .records import build_record, write_record
from .registry_client import RegistryClient, cleanup_temp_dir, write_item_files
from .synthesizer import synthesize_defaults

PREVIEW_LINES = 15
_DUMP_RULE = "-" * 35


@dataclass
class FileAnalysis:
    path: Path
    candidates: list = field(default_factory=list)
    profile: DependencyProfile = field(default_factory=DependencyProfile)
    observed: dict = field(default_factory=dict)
    strategy: Optional[Strategy] = None


@dataclass
class PropsResult:
    identity: ComponentIdentity
    document: OutputDocument
    profile: DependencyProfile
    registry: list
    synthetic: bool = False
    files: list = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.document.render()


@dataclass
class RunOptions:
    deps_only: bool = False
    cleanup: bool = True
    component_id: Optional[str] = None
    cwd: Optional[Path] = None


@dataclass
class RunResult:
    identity: ComponentIdentity
    output_file: Optional[Path] = None
    props: Optional[PropsResult] = None
    packages: dict = field(default_factory=dict)


# ─── per-file work (thread-safe: no shared state) ────────────────────────────

def analyze_file(path: Path, identity: ComponentIdentity,
                 seed: Optional[DependencyProfile] = None) -> FileAnalysis:
    """Dependency inference + extraction chain for one file."""
    path = Path(path)
    analysis = FileAnalysis(path=path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reporting.warn(f"Could not read {path.name}: {e}")
        return analysis

    analysis.profile = infer_dependencies(text)
    namespaces = primitive_namespace_names(analysis.profile)
    if seed is not None:
        namespaces += [ns for ns in primitive_namespace_names(seed) if ns not in namespaces]
    analysis.observed = observed_sub_components(text, namespaces)

    result = run_strategy_chain(text, identity, label=path.name)
    analysis.candidates = result.candidates
    analysis.strategy = result.strategy
    if result.candidates:
        reporting.ok(f"{len(result.candidates)} prop type(s) in {path.name} ({result.strategy.value})")
    else:
        reporting.warn(f"No prop types found in {path.name}")
    return analysis


def analyze_files(files, identity: ComponentIdentity, seed: Optional[DependencyProfile] = None,
                  max_workers: int = 4) -> list:
    """Fan out ``analyze_file``; results keep the input order."""
    files = list(files)
    if not files:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(files)))) as executor:
        return list(executor.map(lambda p: analyze_file(p, identity, seed), files))


# ─── extraction core ─────────────────────────────────────────────────────────

def extract_component_props(identity: ComponentIdentity, files=(),
                            profile: Optional[DependencyProfile] = None,
                            registry_info: Optional[ComponentDependencies] = None,
                            max_workers: int = 4) -> PropsResult:
    """Files → assembled (unformatted) document. Never returns an empty document."""
    seed = profile or DependencyProfile()
    analyses = analyze_files(files, identity, seed, max_workers)

    # sequential reduction, submission order
    merged = merge_profiles(seed, *(a.profile for a in analyses))
    candidates = []
    observed = {}
    for analysis in analyses:
        candidates.extend(analysis.candidates)
        for tag, namespace in analysis.observed.items():
            observed.setdefault(tag, namespace)

    synthetic = not candidates
    if synthetic:
        seeds = list(registry_info.sub_components) if registry_info and registry_info.sub_components \
            else list(observed)
        reporting.info(f"No prop types extracted; generating defaults for {identity.type_name_prefix}")
        candidates = synthesize_defaults(identity, seeds)

    ordered, registry = classify_candidates(candidates, identity)
    completed, registry = complete_candidates(ordered, registry, identity, observed)
    final = order_candidates(completed, registry)

    document = assemble_document(merged, final, registry, identity)
    return PropsResult(identity=identity, document=document, profile=merged,
                       registry=registry, synthetic=synthetic, files=[a.path for a in analyses])


# ─── output ──────────────────────────────────────────────────────────────────

def output_file_name(identity: ComponentIdentity, suffix: str = "Props.ts") -> str:
    return f"{identity.type_name_prefix}{suffix}"


def fallback_file_name(identity: ComponentIdentity) -> str:
    return f"props-{identity.type_name_prefix}-{int(time.time())}.ts"


def write_output(text: str, identity: ComponentIdentity, output_dir: Path,
                 suffix: str = "Props.ts") -> Path:
    """Primary name, then a timestamped fallback, then console dump + WriteFailure."""
    output_dir = Path(output_dir)
    errors = []
    for name in (output_file_name(identity, suffix), fallback_file_name(identity)):
        path = output_dir / name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            return path
        except OSError as e:
            errors.append(f"{path}: {e}")
            reporting.warn(f"Could not write {path}: {e}")

    print("\nGenerated props (could not be saved):")
    print(_DUMP_RULE)
    print(text)
    print(_DUMP_RULE)
    raise WriteFailure("Failed to save props file; " + "; ".join(errors))


def print_preview(path: Path, text: str, identity: ComponentIdentity, registry) -> None:
    lines = text.split("\n")
    print("\nFile preview:")
    print(_DUMP_RULE)
    print("\n".join(lines[:PREVIEW_LINES]))
    if len(lines) > PREVIEW_LINES:
        print("... (more lines in the file)")
    print(_DUMP_RULE)

    names = exported_type_names(identity, registry)
    module = f"./{Path(path).stem}"
    print("\nHow to use:")
    print(f'import {{ {identity.type_name_prefix} }} from "@/components/ui/{identity.normalized_key}";')
    if len(names) > 1:
        joined = ",\n  ".join(names)
        print(f'import type {{\n  {joined}\n}} from "{module}";')
    else:
        print(f'import type {{ {names[0]} }} from "{module}";')


# ─── request ─────────────────────────────────────────────────────────────────

def _fetch_from_registry(identity: ComponentIdentity, settings: Settings, temp_dir: Path,
                         profile: DependencyProfile) -> DependencyProfile:
    client = RegistryClient(settings.registry_url, settings.registry_timeout)
    item = client.get_item(identity.normalized_key)
    written = write_item_files(item, temp_dir)
    if not written:
        raise DiscoveryFailure(f"Registry item '{identity.normalized_key}' has no files")
    reporting.ok(f"Fetched {len(written)} file(s) from the registry")
    result = profile.copy()
    for package in item.dependencies:
        result.add_package(package)
    return result


def discover_files(identity: ComponentIdentity, settings: Settings, cwd: Path,
                   profile: DependencyProfile, allow_remote: bool = True) -> tuple:
    """(files, profile). Falls back to the remote registry when nothing is local."""
    temp_dir = cwd / TEMP_DIR_NAME
    files = locate_component_files(identity, settings.root, settings.component_dirs, temp_dir)
    if files or not (allow_remote and settings.registry_enabled):
        return files, profile
    try:
        profile = _fetch_from_registry(identity, settings, temp_dir, profile)
    except DiscoveryFailure as e:
        reporting.warn(str(e))
        return [], profile
    return locate_component_files(identity, settings.root, settings.component_dirs, temp_dir), profile


def report_dependencies(profile: DependencyProfile, root: Path) -> dict:
    packages = sorted(profile.required_packages)
    if not packages:
        reporting.info("No external dependencies detected")
        return {}
    installed, missing = check_installed(packages, root)
    print("\nRequired packages:")
    for package in packages:
        mark = "✅ installed" if package in installed else "⚠️  missing"
        print(f"   {package}  {mark}")
    if profile.primitive_namespaces:
        print("\nPrimitive namespaces:")
        for namespace, package in profile.primitive_namespaces.items():
            print(f"   {namespace} → {package}")
    if missing:
        print(f"\n   Install with: npm install {' '.join(missing)}")
    return {p: p in installed for p in packages}


def run(component: str, settings: Settings, options: Optional[RunOptions] = None) -> RunResult:
    """Full request. Raises only InvalidInputError or an exhausted WriteFailure."""
    options = options or RunOptions()
    cwd = Path(options.cwd or Path.cwd())
    identity = normalize_component_name(component)
    reporting.step(f"Component: {identity.raw_name} → {identity.normalized_key} / {identity.type_name_prefix}")

    registry_info = get_component_dependencies(identity.normalized_key)
    profile = profile_from_registry(registry_info)
    if registry_info is not None:
        reporting.debug("deps", f"registry seed: {sorted(profile.required_packages)}")

    result = RunResult(identity=identity)
    try:
        if options.deps_only:
            files, profile = discover_files(identity, settings, cwd, profile, allow_remote=False)
            for analysis in analyze_files(files, identity, profile):
                profile.update(analysis.profile)
            result.packages = report_dependencies(profile, settings.root)
            return result

        install = install_component(identity, settings)
        if install.output:
            profile = infer_dependencies(install.output, profile)

        files, profile = discover_files(identity, settings, cwd, profile)
        if files:
            reporting.ok(f"Found {len(files)} component file(s)")
        else:
            reporting.warn(str(DiscoveryFailure(f"No source files found for '{identity.normalized_key}'")))

        props = extract_component_props(identity, files, profile, registry_info)
        result.props = props

        if props.profile.required_packages:
            result.packages = install_packages(sorted(props.profile.required_packages), settings)

        text = props.text
        if settings.format_enabled:
            text = format_document(text, settings.format_command, settings.format_timeout)

        path = write_output(text, identity, settings.output_dir, settings.output_suffix)
        result.output_file = path
        reporting.ok(f"Saved {path}")

        if options.component_id:
            record = build_record(identity, path, props.document.type_names, props.registry,
                                  props.profile.required_packages, props.synthetic)
            if write_record(settings.records_file, options.component_id, record):
                reporting.ok(f"Recorded '{options.component_id}' in {settings.records_file}")

        print_preview(path, text, identity, props.registry)
        return result
    finally:
        if options.cleanup:
            cleanup_temp_dir(cwd / TEMP_DIR_NAME)
