"""
Extraction strategy chain tests (tree-sitter tiers use the real grammars).
"""
import pytest

from shadcn_props.candidates import PropCandidate
from shadcn_props.errors import ExtractionFailure
from shadcn_props.extractors import (
    Strategy,
    extract_pattern_match,
    extract_structural_primary,
    extract_structural_secondary,
    fix_hyphenated_names,
    looks_like_props_type,
    reference_alias,
    run_strategy_chain,
    sub_component_from_argument,
    utility_kind,
)
from shadcn_props.naming import normalize_component_name

ACCORDION = normalize_component_name("accordion")
BUTTON = normalize_component_name("button")

FORWARD_REF_SOURCE = '''
import * as React from "react"
import * as AccordionPrimitive from "@radix-ui/react-accordion"

type AccordionProps = React.ComponentProps<typeof AccordionPrimitive.Root>

const AccordionItem = React.forwardRef<
  React.ElementRef<typeof AccordionPrimitive.Item>,
  React.ComponentPropsWithoutRef<typeof AccordionPrimitive.Item>
>(({ className, ...props }, ref) => (
  <AccordionPrimitive.Item ref={ref} className={className} {...props} />
))
AccordionItem.displayName = "AccordionItem"
'''

BUTTON_SOURCE = '''
import * as React from "react"

export interface ButtonProps extends React.ButtonHTMLAttributes<HTMLButtonElement> {
  asChild?: boolean
}

type ButtonSize = "sm" | "lg"
'''


# ─── predicate ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize("name,expected", [
    ("Props", True),
    ("AccordionItemProps", True),
    ("ButtonVariantProps", True),
    ("accordionAttributes", True),
    ("accordionprops", True),
    ("ButtonVariants", False),
    ("otherprops", False),
    ("", False),
])
def test_looks_like_props_type(name, expected):
    assert looks_like_props_type(name, ACCORDION) is expected


@pytest.mark.parametrize("type_name,kind", [
    ("ComponentProps", "component"),
    ("React.ComponentPropsWithoutRef", "component"),
    ("React.ComponentPropsWithRef", "component"),
    ("ButtonHTMLAttributes", "element"),
    ("React.HTMLProps", "element"),
    ("VariantProps", None),
    ("React.ElementRef", None),
])
def test_utility_kind(type_name, kind):
    assert utility_kind(type_name) == kind


def test_sub_component_from_argument():
    assert sub_component_from_argument("typeof AccordionPrimitive.Trigger") == "Trigger"
    assert sub_component_from_argument('"div"') is None
    assert sub_component_from_argument("typeof Slot") is None


def test_reference_alias_shape():
    candidate = reference_alias("React.ComponentProps<typeof AccordionPrimitive.Item>", ACCORDION,
                                "component", "typeof AccordionPrimitive.Item")
    assert candidate.sub_component_tag == "Item"
    assert candidate.type_name == "AccordionItemProps"
    assert candidate.declaration_text == (
        "// From React type reference\n"
        "type AccordionItemProps = React.ComponentProps<typeof AccordionPrimitive.Item>;"
    )


def test_fix_hyphenated_names():
    identity = normalize_component_name("not-found")
    assert fix_hyphenated_names("interface not-foundProps {}", identity) == "interface NotFoundProps {}"
    assert fix_hyphenated_names("interface accordionProps {}", ACCORDION) == "interface accordionProps {}"


# ─── structural tiers ────────────────────────────────────────────────────────

def test_structural_primary_declarations_and_references():
    candidates = extract_structural_primary(FORWARD_REF_SOURCE, ACCORDION)
    assert [c.type_name for c in candidates] == ["AccordionProps", "AccordionRootProps", "AccordionItemProps"]
    assert [c.sub_component_tag for c in candidates] == [None, "Root", "Item"]


def test_structural_primary_keeps_export_modifier():
    candidates = extract_structural_primary(BUTTON_SOURCE, BUTTON)
    assert [c.type_name for c in candidates] == ["ButtonProps"]
    assert candidates[0].declaration_text.startswith("export interface ButtonProps")
    assert candidates[0].declaration_text.rstrip().endswith("}")


def test_structural_reference_alias_skipped_when_declared():
    """The HTMLAttributes reference in ButtonProps would also be named ButtonProps."""
    candidates = extract_structural_primary(BUTTON_SOURCE, BUTTON)
    assert len(candidates) == 1


def test_structural_secondary_accepts_angle_bracket_assertion():
    text = '''
const value = <any>input;
export interface CardProps {
  title?: string;
}
'''
    candidates = extract_structural_secondary(text, normalize_component_name("card"))
    assert [c.type_name for c in candidates] == ["CardProps"]


def test_structural_no_matches_returns_empty():
    assert extract_structural_primary("export const x = 1;\n", ACCORDION) == []


def test_structural_unparseable_raises():
    with pytest.raises(ExtractionFailure):
        extract_structural_primary("}}}} ((( <<<", ACCORDION)


# ─── pattern tier ────────────────────────────────────────────────────────────

def test_pattern_match_interface_with_braces():
    candidates = extract_pattern_match(BUTTON_SOURCE, BUTTON)
    assert [c.type_name for c in candidates] == ["ButtonProps"]
    text = candidates[0].declaration_text
    assert text.startswith("export interface ButtonProps extends")
    assert text.endswith("}")
    assert "asChild?: boolean" in text


def test_pattern_match_type_alias():
    text = 'export type DialogProps = {\n  open?: boolean\n  onOpenChange?: (open: boolean) => void\n}\n\nconst x = 1\n'
    candidates = extract_pattern_match(text, normalize_component_name("dialog"))
    assert [c.type_name for c in candidates] == ["DialogProps"]
    assert candidates[0].declaration_text.endswith("}")


def test_pattern_match_component_props_invocation():
    text = "function Tabs(props: React.ComponentProps<typeof TabsPrimitive.Root>) { return null }"
    candidates = extract_pattern_match(text, normalize_component_name("tabs"))
    assert len(candidates) == 1
    assert candidates[0].sub_component_tag == "Root"
    assert candidates[0].declaration_text == (
        "// From React type reference\n"
        "type TabsRootProps = React.ComponentProps<typeof TabsPrimitive.Root>;"
    )


def test_pattern_match_nested_braces_in_interface():
    text = "interface AccordionProps {\n  style?: { color: string }\n  label?: string\n}\nconst y = 2\n"
    candidates = extract_pattern_match(text, ACCORDION)
    assert candidates[0].declaration_text == "interface AccordionProps {\n  style?: { color: string }\n  label?: string\n}"


# ─── tier agreement ──────────────────────────────────────────────────────────

def test_tiers_agree_on_type_names():
    primary = {c.type_name for c in extract_structural_primary(BUTTON_SOURCE, BUTTON)}
    secondary = {c.type_name for c in extract_structural_secondary(BUTTON_SOURCE, BUTTON)}
    pattern = {c.type_name for c in extract_pattern_match(BUTTON_SOURCE, BUTTON)}
    assert primary == secondary == pattern == {"ButtonProps"}


# ─── chain ───────────────────────────────────────────────────────────────────

def test_chain_stops_at_first_tier_with_results():
    result = run_strategy_chain(FORWARD_REF_SOURCE, ACCORDION)
    assert result.strategy is Strategy.STRUCTURAL_PRIMARY
    assert len(result.candidates) == 3


def test_chain_failures_are_not_propagated():
    calls = []

    def boom(text, identity):
        calls.append("primary")
        raise RuntimeError("parser crashed")

    def empty(text, identity):
        calls.append("secondary")
        return []

    def found(text, identity):
        calls.append("pattern")
        return [PropCandidate("interface AccordionProps {}")]

    chain = [
        (Strategy.STRUCTURAL_PRIMARY, boom),
        (Strategy.STRUCTURAL_SECONDARY, empty),
        (Strategy.PATTERN_MATCH, found),
    ]
    result = run_strategy_chain("whatever", ACCORDION, chain=chain)
    assert calls == ["primary", "secondary", "pattern"]
    assert result.strategy is Strategy.PATTERN_MATCH
    assert [c.type_name for c in result.candidates] == ["AccordionProps"]
    assert len(result.errors) == 1
    assert isinstance(result.errors[0][1], ExtractionFailure)


def test_chain_all_tiers_empty():
    result = run_strategy_chain("export const x = 1;\n", ACCORDION)
    assert result.candidates == []
    assert result.strategy is None
