"""PropCandidate and declaration-header helpers.

Every helper here touches only the declaration *header*
(``[export] [declare] interface|type <Name>``); bodies are never rewritten.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional

_HEADER = re.compile(
    r"^(?P<lead>(?:\s|//[^\n]*|/\*.*?\*/)*)"
    r"(?P<export>export\s+(?:default\s+)?)?"
    r"(?P<declare>declare\s+)?"
    r"(?P<kind>interface|type)\s+"
    r"(?P<name>[A-Za-z_$][\w$]*)",
    re.DOTALL,
)


@dataclass(frozen=True)
class PropCandidate:
    """One standalone ``interface``/``type`` declaration.

    ``sub_component_tag`` is None for the root component, otherwise the
    structural part it describes ("Item", "Trigger", ...).
    """
    declaration_text: str
    sub_component_tag: Optional[str] = None

    @property
    def type_name(self) -> Optional[str]:
        match = _HEADER.match(self.declaration_text)
        return match.group("name") if match else None

    @property
    def is_interface(self) -> bool:
        match = _HEADER.match(self.declaration_text)
        return bool(match and match.group("kind") == "interface")

    @property
    def is_exported(self) -> bool:
        match = _HEADER.match(self.declaration_text)
        return bool(match and match.group("export"))

    def renamed(self, new_name: str) -> "PropCandidate":
        match = _HEADER.match(self.declaration_text)
        if not match or match.group("name") == new_name:
            return self
        start, end = match.span("name")
        text = self.declaration_text[:start] + new_name + self.declaration_text[end:]
        return replace(self, declaration_text=text)

    def with_export(self, exported: bool) -> "PropCandidate":
        """Add or drop the leading ``export`` modifier."""
        match = _HEADER.match(self.declaration_text)
        if not match or bool(match.group("export")) == exported:
            return self
        text = self.declaration_text
        if exported:
            pos = match.start("declare") if match.group("declare") else match.start("kind")
            text = text[:pos] + "export " + text[pos:]
        else:
            text = text[:match.start("export")] + text[match.end("export"):]
        return replace(self, declaration_text=text)


def header_name(text: str) -> Optional[str]:
    match = _HEADER.match(text or "")
    return match.group("name") if match else None
