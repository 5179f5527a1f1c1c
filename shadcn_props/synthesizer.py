"""
Synthetic default generator — plausible props declarations when nothing was extracted.

Template choice is a case-insensitive substring match on the component's raw
name (and, for multi-part components, the sub-component tag). Output is
deterministic for a given (identity, sub-components) pair.
"""

from dataclasses import dataclass
from typing import Optional

from .candidates import PropCandidate
from .naming import ComponentIdentity

_FIELD_INDENT = "  "


@dataclass(frozen=True)
class PropField:
    name: str
    type_text: str
    doc: str
    optional: bool = True

    def render(self) -> str:
        mark = "?" if self.optional else ""
        return (f"{_FIELD_INDENT}/** {self.doc} */\n"
                f"{_FIELD_INDENT}{self.name}{mark}: {self.type_text};")


_BASE_FIELDS = (
    PropField("children", "React.ReactNode", "The content to render inside the component"),
    PropField("className", "string", "Additional CSS classes to apply to the component"),
)
_INDEX_SIGNATURE = f"{_FIELD_INDENT}/** Additional HTML attributes */\n{_FIELD_INDENT}[key: string]: any;"

_BUTTON = (
    PropField("variant", '"default" | "destructive" | "outline" | "secondary" | "ghost" | "link"',
              "Button variant"),
    PropField("size", '"default" | "sm" | "lg" | "icon"', "Button size"),
    PropField("disabled", "boolean", "Whether the button is disabled"),
    PropField("onClick", "(event: React.MouseEvent<HTMLButtonElement>) => void", "Click handler"),
)

_ACCORDION = {
    None: (
        PropField("type", '"single" | "multiple"', "Whether accordion can have multiple items open"),
        PropField("defaultValue", "string | string[]", "Default active value"),
        PropField("onValueChange", "(value: string | string[]) => void", "Callback when value changes"),
        PropField("collapsible", "boolean", "Whether accordion items are collapsible"),
    ),
    "Item": (
        PropField("value", "string", "Value of this accordion item", optional=False),
        PropField("disabled", "boolean", "Whether this item is disabled"),
    ),
    "Trigger": (
        PropField("disabled", "boolean", "Whether trigger is disabled"),
        PropField("asChild", "boolean", "Render as the child element"),
    ),
    "Content": (
        PropField("forceMount", "boolean", "Whether to force mounting when closed"),
    ),
}

_DIALOG = {
    None: (
        PropField("open", "boolean", "Whether the dialog is open"),
        PropField("onOpenChange", "(open: boolean) => void", "Callback when open state changes"),
    ),
    "Content": (
        PropField("forceMount", "boolean", "Whether to force mounting when closed"),
        PropField("side", '"left" | "right" | "top" | "bottom"', "Side from which dialog appears"),
    ),
}

_FORM = (
    PropField("onSubmit", "React.FormEventHandler<HTMLFormElement>", "Form submission handler"),
    PropField("defaultValues", "Record<string, any>", "Initial field values"),
)

_SELECT = (
    PropField("value", "string | number", "Currently selected value"),
    PropField("onValueChange", "(value: string | number) => void", "Callback when selection changes"),
    PropField("placeholder", "string", "Placeholder text"),
)

_INPUT = (
    PropField("type", "string", "Input type"),
    PropField("value", "string", "Current input value"),
    PropField("onChange", "React.ChangeEventHandler<HTMLInputElement>", "Callback when value changes"),
    PropField("placeholder", "string", "Placeholder text"),
)

_CARD = (
    PropField("bordered", "boolean", "Whether to show a border"),
    PropField("variant", '"default" | "secondary" | "outline"', "Card appearance variant"),
)


def _part_fields(table: dict, tag: Optional[str]) -> tuple:
    # "Root" describes the same element as the root declaration
    key = None if tag in (None, "Root") else tag
    return table.get(key, ())


def select_fields(raw_name: str, tag: Optional[str] = None) -> tuple:
    """Component-specific fields for a name (and optional sub-component tag).

    Order matters: "dropdown-menu-button" is a button, "form-input" a form.
    """
    lower = raw_name.lower()
    if "button" in lower:
        return _BUTTON
    if "accordion" in lower:
        return _part_fields(_ACCORDION, tag)
    if any(word in lower for word in ("dialog", "modal", "drawer")):
        return _part_fields(_DIALOG, tag)
    if "form" in lower:
        return _FORM
    if "select" in lower or "dropdown" in lower:
        return _SELECT
    if "input" in lower:
        return _INPUT
    if "card" in lower:
        return _CARD
    return ()


def render_interface(type_name: str, description: str, fields: tuple) -> str:
    body = [f.render() for f in _BASE_FIELDS + tuple(fields)]
    # the minimal fallback is children + className only
    if fields:
        body.append(_INDEX_SIGNATURE)
    members = "\n\n".join(body)
    return f"// {description}\nexport interface {type_name} {{\n{members}\n}}"


def synthesize_declaration(identity: ComponentIdentity, tag: Optional[str] = None) -> PropCandidate:
    type_name = identity.qualified_type_name(tag)
    if tag:
        description = f"Props for {identity.type_name_prefix} {tag} sub-component"
    else:
        description = f"Default props interface for {identity.type_name_prefix}"
    text = render_interface(type_name, description, select_fields(identity.raw_name, tag))
    return PropCandidate(text, tag)


def synthesize_defaults(identity: ComponentIdentity, sub_components=()) -> list:
    """Root declaration, plus one per known sub-component (in the given order)."""
    results = [synthesize_declaration(identity)]
    seen = set()
    for tag in sub_components:
        if not tag or tag in seen:
            continue
        seen.add(tag)
        results.append(synthesize_declaration(identity, tag))
    return results
