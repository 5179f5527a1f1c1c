"""
shadcn-props — props type extraction for shadcn/ui components

Locates an installed component's source, extracts (or synthesizes) its props
declarations and writes them as one TypeScript module.
"""

__version__ = "0.1.0"

from .naming import ComponentIdentity, normalize_component_name, to_kebab_case, to_pascal_case
from .candidates import PropCandidate
from .dependencies import DependencyProfile, infer_dependencies, merge_profiles
from .extractors import Strategy, looks_like_props_type, run_strategy_chain
from .classifier import classify_candidates, complete_candidates
from .synthesizer import synthesize_defaults
from .assembler import OutputDocument, assemble_document, format_document
from .component_registry import COMPONENT_REGISTRY, describe_component, get_component_dependencies
from .config import Settings, load_config, settings_from_config, validate_config
from .pipeline import extract_component_props, run
from . import errors

__all__ = [
    "__version__",
    "ComponentIdentity",
    "normalize_component_name",
    "to_kebab_case",
    "to_pascal_case",
    "PropCandidate",
    "DependencyProfile",
    "infer_dependencies",
    "merge_profiles",
    "Strategy",
    "looks_like_props_type",
    "run_strategy_chain",
    "classify_candidates",
    "complete_candidates",
    "synthesize_defaults",
    "OutputDocument",
    "assemble_document",
    "format_document",
    "COMPONENT_REGISTRY",
    "describe_component",
    "get_component_dependencies",
    "Settings",
    "load_config",
    "settings_from_config",
    "validate_config",
    "extract_component_props",
    "run",
    "errors",
]
