"""
Output assembler — imports + declarations + re-export block → one TypeScript document.

    import * as React from "react";
    import * as AccordionPrimitive from "@radix-ui/react-accordion";

    type AccordionProps = ...;

    type AccordionItemProps = ...;

    export type {
      AccordionProps,
      AccordionItemProps,
    };

With sub-components the ``export type {...}`` block is the only export;
without, every declaration carries its own ``export``.
"""

import re
from dataclasses import dataclass
from typing import Optional

from . import reporting
from .dependencies import DependencyProfile
from .errors import PropsExtractError
from .installer import run_with_timeout
from .naming import ComponentIdentity

# Type-only names from the React typings that shadcn sources often import bare.
REACT_TYPE_NAMES = (
    "ComponentProps", "ComponentPropsWithRef", "ComponentPropsWithoutRef",
    "ComponentRef", "ElementRef", "ElementType", "HTMLAttributes", "HTMLProps",
    "ReactNode", "ReactElement", "CSSProperties", "ForwardedRef", "RefObject",
)
_REACT_TYPE_USE = re.compile(
    r"(?<![\w$.])(" + "|".join(REACT_TYPE_NAMES) + r"|[A-Z][A-Za-z]*HTMLAttributes)\b"
)


@dataclass(frozen=True)
class OutputDocument:
    import_block: str
    declarations: tuple
    export_block: Optional[str] = None

    def render(self) -> str:
        parts = [self.import_block.rstrip()]
        parts.extend(c.declaration_text.strip() for c in self.declarations)
        if self.export_block:
            parts.append(self.export_block)
        return "\n\n".join(p for p in parts if p) + "\n"

    @property
    def type_names(self) -> list:
        return [c.type_name for c in self.declarations if c.type_name]


def react_type_names_used(declarations) -> list:
    declared = {c.type_name for c in declarations}
    used = {}
    for candidate in declarations:
        for match in _REACT_TYPE_USE.finditer(candidate.declaration_text):
            name = match.group(1)
            if name not in declared:
                used.setdefault(name, None)
    return sorted(used)


def build_import_block(profile: DependencyProfile, declarations=()) -> str:
    lines = ['import * as React from "react";']
    react_types = react_type_names_used(declarations)
    if react_types:
        lines.append(f'import type {{ {", ".join(react_types)} }} from "react";')
    namespaces = [(ns, pkg) for ns, pkg in profile.primitive_namespaces.items() if ns != "React"]
    if namespaces:
        lines.append("")
        lines.append("// Primitive components referenced by the types below")
        lines.extend(f'import * as {ns} from "{pkg}";' for ns, pkg in namespaces)
    return "\n".join(lines)


def exported_type_names(identity: ComponentIdentity, registry) -> list:
    return [identity.base_type_name] + [identity.qualified_type_name(tag) for tag in registry]


def build_export_block(identity: ComponentIdentity, registry) -> Optional[str]:
    if not registry:
        return None
    names = "".join(f"  {name},\n" for name in exported_type_names(identity, registry))
    return f"export type {{\n{names}}};"


def assemble_document(profile: DependencyProfile, candidates, registry,
                      identity: ComponentIdentity) -> OutputDocument:
    """Pure: no I/O, no formatting."""
    export_block = build_export_block(identity, registry)
    declarations = tuple(c.with_export(export_block is None) for c in candidates)
    return OutputDocument(
        import_block=build_import_block(profile, declarations),
        declarations=declarations,
        export_block=export_block,
    )


def format_document(text: str, command: list, timeout: float) -> str:
    """Run the external formatter; on any failure return ``text`` unchanged."""
    try:
        proc = run_with_timeout(list(command), timeout, input_text=text)
    except PropsExtractError as e:
        reporting.debug("props", f"formatter unavailable: {e}")
        return text
    if proc.returncode != 0 or not (proc.stdout or "").strip():
        reporting.debug("props", f"formatter exited with {proc.returncode}; keeping unformatted output")
        return text
    return proc.stdout
