"""Transformer configuration for docsmd.

:class:`DocsmdConfig` is a plain dataclass that captures every tuneable
knob of the two transforms.  Instances are passed to
:class:`DocsToMarkdownRenderer`, :class:`MarkdownToDocsConverter` and the
:class:`DocsMarkdownTransformer` facade.

One module-level constant defines the default monospace set:

* :data:`DEFAULT_CODE_FONT_FAMILIES` — font families that mark a run as
  code-styled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

# ---------------------------------------------------------------------------
# Code styling constants
# ---------------------------------------------------------------------------

DEFAULT_CODE_FONT_FAMILIES: list[str] = [
    "Roboto Mono",
    "Courier New",
    "Consolas",
    "monospace",
]
"""Font families recognised as monospace.  A run whose
``weightedFontFamily.fontFamily`` is in this set renders as a code span."""

DEFAULT_CODE_BLOCK_BACKGROUND: tuple[float, float, float] = (0.95, 0.95, 0.95)
"""Light gray applied to the single cell of a compiled code block."""

# Bounds of the light-gray window, both exclusive.
LIGHT_GRAY_MIN = 0.85
LIGHT_GRAY_MAX = 1.0


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class DocsmdConfig:
    """Complete configuration for the docsmd transforms.

    Every parameter has a default, so ``DocsmdConfig()`` is always valid.

    Parameters
    ----------
    code_font_families:
        Font families treated as monospace by the forward renderer and the
        code-block classifier.
    code_font_family:
        Font the reverse compiler applies to code spans and code blocks.
        Must be one of *code_font_families* so that rendered output is
        classified as code again.
    code_block_background:
        ``(red, green, blue)`` background of a compiled code-block cell.
        Every component must lie strictly between 0.85 and 1.0.
    ordered_bullet_preset:
        ``bulletPreset`` used for ordered list items.
    unordered_bullet_preset:
        ``bulletPreset`` used for unordered list items.
    list_indent_pt:
        Indent, in points, added per nesting level for nested bullets.
    reset_inherited_styles:
        After a styled span, emit an explicit style reset over the next
        plain span so inserted text does not inherit formatting.
    prevent_paragraph_bleed:
        Clear bullets from the first paragraph after a list, and reset the
        named style of the first paragraph after a heading.
    section_break_type:
        ``sectionType`` of inserted section breaks.

        * ``"CONTINUOUS"`` — the new section starts on the same page.
        * ``"NEXT_PAGE"`` — the new section starts on the next page.
    metrics:
        Optional :class:`~docsmd.observability.MetricsHook` backend.
    debug_dump_ast:
        Write the normalised Mistune AST to *stderr* on each compilation.
    debug_dump_requests:
        Write the ``batchUpdate`` request body to *stderr*.
    """

    # ── Code styling ────────────────────────────────────────────────────
    code_font_families: list[str] = field(
        default_factory=lambda: list(DEFAULT_CODE_FONT_FAMILIES),
    )

    code_font_family: str = "Roboto Mono"

    code_block_background: tuple[float, float, float] = DEFAULT_CODE_BLOCK_BACKGROUND

    # ── Lists ───────────────────────────────────────────────────────────
    ordered_bullet_preset: str = "NUMBERED_DECIMAL_ALPHA_ROMAN"

    unordered_bullet_preset: str = "BULLET_DISC_CIRCLE_SQUARE"

    list_indent_pt: float = 36.0

    # ── Style bleed ─────────────────────────────────────────────────────
    reset_inherited_styles: bool = True

    prevent_paragraph_bleed: bool = True

    # ── Section breaks ──────────────────────────────────────────────────
    section_break_type: Literal["CONTINUOUS", "NEXT_PAGE"] = "CONTINUOUS"

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_requests: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.code_font_families:
            raise ValueError("code_font_families must not be empty")
        if self.code_font_family not in self.code_font_families:
            raise ValueError(
                f"code_font_family '{self.code_font_family}' is not in "
                f"code_font_families {self.code_font_families!r}; compiled code "
                "would not be recognised as code when rendered back."
            )
        if len(self.code_block_background) != 3:
            raise ValueError(
                "code_block_background must be a (red, green, blue) triple, "
                f"got {self.code_block_background!r}"
            )
        for component in self.code_block_background:
            if not LIGHT_GRAY_MIN < component < LIGHT_GRAY_MAX:
                raise ValueError(
                    "code_block_background components must lie strictly between "
                    f"{LIGHT_GRAY_MIN} and {LIGHT_GRAY_MAX}, got {self.code_block_background!r}"
                )
        if self.list_indent_pt <= 0:
            raise ValueError(f"list_indent_pt must be > 0, got {self.list_indent_pt}")
        if self.section_break_type not in ("CONTINUOUS", "NEXT_PAGE"):
            raise ValueError(
                f"section_break_type must be CONTINUOUS or NEXT_PAGE, got {self.section_break_type!r}"
            )

    @property
    def code_font_set(self) -> frozenset[str]:
        """The monospace set as a frozenset for membership tests."""
        return frozenset(self.code_font_families)
