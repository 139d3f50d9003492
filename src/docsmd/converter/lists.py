"""List-definition resolution.

Forward: a paragraph's ``bullet`` names a list and a depth; the list's
definition says, per depth, whether the glyph is an enumeration
(``1.``) or a bullet symbol (``-``).

Reverse: the compiler picks a ``bulletPreset`` whose level-0 glyph the
forward direction classifies the same way, so a round trip keeps the
ordered/unordered kind of every item.
"""

from __future__ import annotations

from docsmd.config import DocsmdConfig
from docsmd.models import ListDefinition, ListKind

# Glyph types that denote a typed enumeration.  Anything else
# (GLYPH_TYPE_UNSPECIFIED, NONE, an unknown future value) or an absent
# glyph type is a bullet.
ORDERED_GLYPH_TYPES: frozenset[str] = frozenset({
    "DECIMAL",
    "ZERO_DECIMAL",
    "UPPER_ALPHA",
    "ALPHA",
    "UPPER_ROMAN",
    "ROMAN",
})


def resolve_list_kind(
    lists: dict[str, ListDefinition],
    list_id: str | None,
    nesting_level: int,
) -> ListKind:
    """Resolve whether *nesting_level* of list *list_id* is ordered.

    Unknown list identifiers and missing level entries default to
    :attr:`ListKind.UNORDERED`.
    """
    if not list_id:
        return ListKind.UNORDERED
    definition = lists.get(list_id)
    if definition is None:
        return ListKind.UNORDERED
    if not 0 <= nesting_level < len(definition.nesting_levels):
        return ListKind.UNORDERED
    glyph_type = definition.nesting_levels[nesting_level].glyph_type
    if glyph_type in ORDERED_GLYPH_TYPES:
        return ListKind.ORDERED
    return ListKind.UNORDERED


def list_marker(kind: ListKind) -> str:
    """Markdown marker for a list item of *kind*."""
    return "1." if kind is ListKind.ORDERED else "-"


def bullet_preset_for(kind: ListKind, config: DocsmdConfig) -> str:
    """``bulletPreset`` the reverse compiler uses for *kind*."""
    if kind is ListKind.ORDERED:
        return config.ordered_bullet_preset
    return config.unordered_bullet_preset
