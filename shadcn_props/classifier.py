"""
Sub-component classifier & deduplicator.

    classify_candidates(candidates, identity) → (ordered candidates, registry)

Root candidates (tag None) come first and are never renamed; tagged groups
follow in first-seen order. When more than one group exists, a tagged
``<Prefix>Props`` header becomes ``<Prefix><Tag>Props``.
"""

from typing import Optional

from . import reporting
from .candidates import PropCandidate
from .naming import ComponentIdentity
from .synthesizer import synthesize_declaration


def group_by_tag(candidates) -> dict:
    """{tag: [candidates]} with None (root) first, then tags in first-seen order."""
    groups = {None: []}
    for candidate in candidates:
        groups.setdefault(candidate.sub_component_tag, []).append(candidate)
    if not groups[None]:
        del groups[None]
    return groups


def qualify_name(candidate: PropCandidate, identity: ComponentIdentity) -> PropCandidate:
    """Embed the sub-component tag in a bare ``<Prefix>Props`` header."""
    tag = candidate.sub_component_tag
    if not tag or candidate.type_name != identity.base_type_name:
        return candidate
    return candidate.renamed(identity.qualified_type_name(tag))


def classify_candidates(candidates, identity: ComponentIdentity) -> tuple:
    groups = group_by_tag(candidates)
    registry = [tag for tag in groups if tag is not None]
    multi = len(groups) > 1

    ordered = []
    seen_text = set()
    taken = {}
    for tag, group in groups.items():
        for candidate in group:
            if tag is not None and multi:
                candidate = qualify_name(candidate, identity)
            text = candidate.declaration_text
            if text in seen_text:
                continue
            name = candidate.type_name
            # same-named interfaces merge; any other redeclaration does not compile
            if name in taken and not (taken[name] and candidate.is_interface):
                reporting.debug("props", f"dropping duplicate name {name} ({tag})")
                continue
            seen_text.add(text)
            taken[name] = candidate.is_interface
            ordered.append(candidate)
    return ordered, registry


def _component_alias(identity: ComponentIdentity, tag: str, namespace: str) -> PropCandidate:
    name = identity.qualified_type_name(tag)
    text = (f"// From {namespace}.{tag}\n"
            f"type {name} = React.ComponentPropsWithoutRef<typeof {namespace}.{tag}>;")
    return PropCandidate(text, tag)


def complete_candidates(candidates, registry, identity: ComponentIdentity,
                        observed: Optional[dict] = None) -> tuple:
    """Give every known sub-component a declaration and make sure a root exists.

    ``observed`` maps sub-component tag → primitive namespace it was seen on;
    observed tags extend the registry in first-seen order.
    """
    observed = observed or {}
    registry = list(dict.fromkeys(list(registry) + list(observed)))
    result = list(candidates)
    declared = {c.type_name for c in result}

    for tag in registry:
        name = identity.qualified_type_name(tag)
        if name in declared:
            continue
        namespace = observed.get(tag)
        if namespace:
            candidate = _component_alias(identity, tag, namespace)
        else:
            candidate = synthesize_declaration(identity, tag)
        reporting.debug("props", f"completing {name} ({'alias' if namespace else 'synthetic'})")
        result.append(candidate)
        declared.add(name)

    if registry and identity.base_type_name not in declared:
        result.insert(0, synthesize_declaration(identity))
    return result, registry


def order_candidates(candidates, registry) -> list:
    """Root first, then sub-components in registry order (stable within a group)."""
    rank = {tag: i for i, tag in enumerate(registry)}
    return sorted(candidates, key=lambda c: -1 if c.sub_component_tag is None
                  else rank.get(c.sub_component_tag, len(rank)))
