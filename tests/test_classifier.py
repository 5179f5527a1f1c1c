"""
PropCandidate header helpers, classifier / deduplicator and completion tests.
"""
from shadcn_props.candidates import PropCandidate, header_name
from shadcn_props.classifier import (
    classify_candidates,
    complete_candidates,
    group_by_tag,
    order_candidates,
)
from shadcn_props.naming import normalize_component_name

ACCORDION = normalize_component_name("accordion")


# ─── PropCandidate ───────────────────────────────────────────────────────────

class TestPropCandidate:
    def test_type_name_after_leading_comment(self):
        c = PropCandidate("// From React type reference\ntype AccordionItemProps = X;")
        assert c.type_name == "AccordionItemProps"
        assert not c.is_exported

    def test_renamed_touches_header_only(self):
        c = PropCandidate("export interface AccordionProps {\n  other?: AccordionProps\n}", "Item")
        r = c.renamed("AccordionItemProps")
        assert r.declaration_text == "export interface AccordionItemProps {\n  other?: AccordionProps\n}"
        assert r.sub_component_tag == "Item"
        assert c.type_name == "AccordionProps"

    def test_with_export_adds_and_removes(self):
        c = PropCandidate("// note\ninterface FooProps {}")
        exported = c.with_export(True)
        assert exported.declaration_text == "// note\nexport interface FooProps {}"
        assert exported.with_export(False).declaration_text == "// note\ninterface FooProps {}"

    def test_with_export_before_declare(self):
        c = PropCandidate("declare type FooProps = {}")
        assert c.with_export(True).declaration_text == "export declare type FooProps = {}"

    def test_header_name(self):
        assert header_name("export type BarProps = {}") == "BarProps"
        assert header_name("const x = 1") is None


# ─── classification ──────────────────────────────────────────────────────────

def test_identical_declarations_deduplicated():
    """Two files declaring the same FooProps → one declaration"""
    text = "export interface FooProps {\n  label?: string\n}"
    result, registry = classify_candidates([PropCandidate(text), PropCandidate(text)],
                                           normalize_component_name("foo"))
    assert [c.type_name for c in result] == ["FooProps"]
    assert registry == []


def test_non_root_group_renamed_when_multiple_groups():
    candidates = [
        PropCandidate("type AccordionProps = A;"),
        PropCandidate("type AccordionProps = B;", "Item"),
    ]
    result, registry = classify_candidates(candidates, ACCORDION)
    assert [c.declaration_text for c in result] == [
        "type AccordionProps = A;",
        "type AccordionItemProps = B;",
    ]
    assert registry == ["Item"]


def test_single_group_not_renamed():
    result, registry = classify_candidates([PropCandidate("type AccordionProps = B;", "Item")], ACCORDION)
    assert result[0].type_name == "AccordionProps"
    assert registry == ["Item"]


def test_root_first_then_first_seen_tag_order():
    candidates = [
        PropCandidate("type AccordionTriggerProps = T;", "Trigger"),
        PropCandidate("type AccordionProps = R;"),
        PropCandidate("type AccordionItemProps = I;", "Item"),
        PropCandidate("type AccordionTriggerAltProps = T2;", "Trigger"),
    ]
    result, registry = classify_candidates(candidates, ACCORDION)
    assert [c.type_name for c in result] == [
        "AccordionProps", "AccordionTriggerProps", "AccordionTriggerAltProps", "AccordionItemProps",
    ]
    assert registry == ["Trigger", "Item"]


def test_rendered_names_distinct_with_several_tags():
    candidates = [PropCandidate("type AccordionProps = R;")]
    for tag in ("Item", "Trigger", "Content"):
        candidates.append(PropCandidate(f"type AccordionProps = {tag}Body;", tag))
    result, _ = classify_candidates(candidates, ACCORDION)
    names = [c.type_name for c in result]
    assert len(names) == len(set(names)) == 4
    assert names[0] == "AccordionProps"
    assert result[0].declaration_text == "type AccordionProps = R;"


def test_later_alias_with_taken_name_dropped():
    candidates = [
        PropCandidate("type AccordionItemProps = A;"),
        PropCandidate("type AccordionProps = B;", "Item"),
    ]
    result, registry = classify_candidates(candidates, ACCORDION)
    assert [c.declaration_text for c in result] == ["type AccordionItemProps = A;"]
    assert registry == ["Item"]


def test_same_named_interfaces_kept_for_merging():
    candidates = [
        PropCandidate("interface FooProps {\n  a?: string\n}"),
        PropCandidate("interface FooProps {\n  b?: number\n}"),
    ]
    result, _ = classify_candidates(candidates, normalize_component_name("foo"))
    assert len(result) == 2
    assert "b?: number" in result[1].declaration_text


def test_interface_after_same_named_alias_dropped():
    candidates = [
        PropCandidate("type FooProps = A;"),
        PropCandidate("interface FooProps {\n  b?: number\n}"),
    ]
    result, _ = classify_candidates(candidates, normalize_component_name("foo"))
    assert [c.declaration_text for c in result] == ["type FooProps = A;"]


def test_group_by_tag_without_root():
    groups = group_by_tag([PropCandidate("type XProps = 1;", "Item")])
    assert list(groups) == ["Item"]


# ─── completion ──────────────────────────────────────────────────────────────

def test_observed_sub_component_gets_alias():
    root = PropCandidate("type AccordionProps = R;")
    result, registry = complete_candidates([root], [], ACCORDION, {"Item": "AccordionPrimitive"})
    assert registry == ["Item"]
    assert result[1].sub_component_tag == "Item"
    assert result[1].declaration_text.endswith(
        "type AccordionItemProps = React.ComponentPropsWithoutRef<typeof AccordionPrimitive.Item>;"
    )


def test_missing_root_is_synthesized():
    item = PropCandidate("type AccordionItemProps = I;", "Item")
    result, registry = complete_candidates([item], ["Item"], ACCORDION)
    assert [c.type_name for c in result] == ["AccordionProps", "AccordionItemProps"]
    assert result[0].sub_component_tag is None


def test_tag_without_namespace_is_synthesized():
    root = PropCandidate("type AccordionProps = R;")
    result, _ = complete_candidates([root], ["Trigger"], ACCORDION)
    assert result[1].type_name == "AccordionTriggerProps"
    assert "interface AccordionTriggerProps" in result[1].declaration_text


def test_completion_noop_without_registry():
    root = PropCandidate("type AccordionProps = R;")
    result, registry = complete_candidates([root], [], ACCORDION)
    assert result == [root]
    assert registry == []


def test_order_candidates():
    cs = [
        PropCandidate("type AccordionContentProps = C;", "Content"),
        PropCandidate("type AccordionProps = R;"),
        PropCandidate("type AccordionItemProps = I;", "Item"),
    ]
    ordered = order_candidates(cs, ["Item", "Content"])
    assert [c.sub_component_tag for c in ordered] == [None, "Item", "Content"]
