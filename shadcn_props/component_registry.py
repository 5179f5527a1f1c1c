"""
Static component registry — known shadcn components and their primitives.

Lookups are by kebab-case key; ``get_component_dependencies("AlertDialog")``
and ``get_component_dependencies("alert-dialog")`` return the same entry.
"""

from dataclasses import dataclass
from typing import Optional

from .naming import to_kebab_case


@dataclass(frozen=True)
class ComponentDependencies:
    package: str
    primitive: str
    sub_components: tuple = ()
    additional_deps: tuple = ()

    @property
    def packages(self) -> list:
        deps = [self.package] if self.package else []
        deps.extend(d for d in self.additional_deps if d and d not in deps)
        return deps


def _entry(package, primitive, subs=(), extra=()):
    return ComponentDependencies(package, primitive, tuple(subs), tuple(extra))


_DIALOG_PARTS = ("Root", "Trigger", "Portal", "Close", "Content", "Header", "Footer", "Title", "Description")
_MENU_PARTS = ("Root", "Trigger", "Group", "Portal", "Content", "Item", "CheckboxItem",
               "RadioGroup", "RadioItem", "Label", "Separator")

COMPONENT_REGISTRY: dict = {
    "accordion": _entry("@radix-ui/react-accordion", "AccordionPrimitive",
                        ("Root", "Item", "Trigger", "Content"), ("lucide-react",)),
    "alert-dialog": _entry("@radix-ui/react-alert-dialog", "AlertDialogPrimitive",
                           ("Root", "Trigger", "Content", "Header", "Footer", "Title",
                            "Description", "Cancel", "Action")),
    "aspect-ratio": _entry("@radix-ui/react-aspect-ratio", "AspectRatioPrimitive"),
    "avatar": _entry("@radix-ui/react-avatar", "AvatarPrimitive", ("Root", "Image", "Fallback")),
    "badge": _entry("", "", (), ("class-variance-authority",)),
    "button": _entry("@radix-ui/react-slot", "Slot", (), ("class-variance-authority",)),
    "calendar": _entry("react-day-picker", "DayPicker", (), ("date-fns",)),
    "card": _entry("", "", ("Header", "Title", "Description", "Content", "Footer")),
    "checkbox": _entry("@radix-ui/react-checkbox", "CheckboxPrimitive",
                       ("Root", "Indicator"), ("lucide-react",)),
    "collapsible": _entry("@radix-ui/react-collapsible", "CollapsiblePrimitive",
                          ("Root", "Trigger", "Content")),
    "command": _entry("cmdk", "Command",
                      ("Empty", "Group", "Input", "Item", "List", "Loading", "Dialog", "Separator"),
                      ("lucide-react",)),
    "context-menu": _entry("@radix-ui/react-context-menu", "ContextMenuPrimitive",
                           ("Root", "Trigger", "Portal", "Content", "Item", "CheckboxItem",
                            "RadioItem", "Group", "Label", "Separator"), ("lucide-react",)),
    "date-picker": _entry("react-day-picker", "DayPicker", (), ("date-fns",)),
    "dialog": _entry("@radix-ui/react-dialog", "DialogPrimitive", _DIALOG_PARTS, ("lucide-react",)),
    "drawer": _entry("@radix-ui/react-dialog", "DialogPrimitive", _DIALOG_PARTS, ("vaul",)),
    "dropdown-menu": _entry("@radix-ui/react-dropdown-menu", "DropdownMenuPrimitive",
                            _MENU_PARTS, ("lucide-react",)),
    "form": _entry("", "", ("Item", "Label", "Control", "Description", "Message"),
                   ("react-hook-form", "@hookform/resolvers", "zod")),
    "hover-card": _entry("@radix-ui/react-hover-card", "HoverCardPrimitive",
                         ("Root", "Trigger", "Portal", "Content")),
    "input": _entry("", ""),
    "label": _entry("@radix-ui/react-label", "LabelPrimitive"),
    "menubar": _entry("@radix-ui/react-menubar", "MenubarPrimitive",
                      ("Root", "Menu", "Trigger", "Portal", "Content", "Item", "CheckboxItem",
                       "RadioGroup", "RadioItem", "Label", "Separator", "Group"), ("lucide-react",)),
    "navigation-menu": _entry("@radix-ui/react-navigation-menu", "NavigationMenuPrimitive",
                              ("Root", "List", "Item", "Trigger", "Content", "Link")),
    "not-found": _entry("", "", (), ("lucide-react",)),
    "popover": _entry("@radix-ui/react-popover", "PopoverPrimitive", ("Root", "Trigger", "Content")),
    "progress": _entry("@radix-ui/react-progress", "ProgressPrimitive", ("Root",)),
    "radio-group": _entry("@radix-ui/react-radio-group", "RadioGroupPrimitive",
                          ("Root", "Item", "Indicator")),
    "scroll-area": _entry("@radix-ui/react-scroll-area", "ScrollAreaPrimitive",
                          ("Root", "Viewport", "Scrollbar", "Thumb", "Corner")),
    "select": _entry("@radix-ui/react-select", "SelectPrimitive",
                     ("Root", "Group", "Value", "Trigger", "Content", "Label", "Item", "Separator"),
                     ("lucide-react",)),
    "separator": _entry("@radix-ui/react-separator", "SeparatorPrimitive"),
    "sheet": _entry("@radix-ui/react-dialog", "DialogPrimitive", _DIALOG_PARTS),
    "skeleton": _entry("", ""),
    "slider": _entry("@radix-ui/react-slider", "SliderPrimitive", ("Root", "Track", "Range", "Thumb")),
    "switch": _entry("@radix-ui/react-switch", "SwitchPrimitive", ("Root", "Thumb")),
    "tabs": _entry("@radix-ui/react-tabs", "TabsPrimitive", ("Root", "List", "Trigger", "Content")),
    "textarea": _entry("", ""),
    "toast": _entry("@radix-ui/react-toast", "ToastPrimitive",
                    ("Root", "Provider", "Viewport", "Title", "Description", "Action", "Close")),
    "toggle": _entry("@radix-ui/react-toggle", "TogglePrimitive", ("Root",)),
    "toggle-group": _entry("@radix-ui/react-toggle-group", "ToggleGroupPrimitive", ("Root", "Item")),
    "tooltip": _entry("@radix-ui/react-tooltip", "TooltipPrimitive",
                      ("Root", "Provider", "Trigger", "Content")),
}


def get_component_dependencies(component_name: str) -> Optional[ComponentDependencies]:
    return COMPONENT_REGISTRY.get(to_kebab_case(component_name or ""))


def describe_component(component_name: str) -> list:
    """Human-readable registry summary lines (for ``--registry``)."""
    info = get_component_dependencies(component_name)
    if info is None:
        return []
    lines = [f"Component: {component_name}", "", "Dependencies:"]
    if info.package:
        lines.append(f"- {info.package} (primary)")
    lines.extend(f"- {dep}" for dep in info.additional_deps)
    if not info.package and not info.additional_deps:
        lines.append("No external dependencies needed")
    if info.primitive:
        lines += ["", f"Primitive: {info.primitive}"]
    if info.sub_components:
        lines += ["", "Sub-components:"]
        lines.extend(f"- {sub}" for sub in info.sub_components)
    return lines
