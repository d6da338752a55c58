"""
Render de pasos y secciones.

Cada paso produce dos líneas lógicas:

- El texto narrativo, con los tokens (ingredientes, utensilios, timers,
  cantidades inline) ya pintados y los subíndices de desambiguación.
- La línea de ingredientes del paso ("legend"): `[-]` si no hay, o
  `[nombre₁ (opt) from step 2: 200 g, ...]`.

El wrapping se hace una sola vez, con el texto completo ya armado.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, assert_never

from ...core.abstractions import LineSink
from ...core.subscript import to_subscript
from ...core.wrapping import WrapOptions, split_after_comma, write_wrapped
from .context import RenderContext
from .dedup import build_step_groups, cross_reference_text
from .models import (
    CookwareRef,
    Ingredient,
    IngredientRef,
    InlineQuantityRef,
    Recipe,
    RecipeContractError,
    Section,
    Step,
    Text,
    Timer,
    TimerRef,
)
from .profiles import Painter
from .quantities import format_quantity

logger = logging.getLogger(__name__)

EMPTY_LEGEND = "[-]"
STEP_CONTINUATION_INDENT = " " * 4
LEGEND_INDENT = " " * 5
TEXT_BLOCK_INDENT = " " * 2


@dataclass(frozen=True)
class RenderedStep:
    """Texto narrativo y línea de ingredientes de un paso, sin wrapping."""

    text: str
    legend: str


@dataclass(frozen=True)
class _LegendEntry:
    ingredient: Ingredient
    position: Optional[int]


def _timer_text(timer: Timer, painter: Painter) -> str:
    style = painter.styles.timer
    if timer.quantity is not None and timer.name is not None:
        quantity = format_quantity(timer.quantity, painter, style)
        return f"{quantity} ({painter.paint(timer.name, style)})"
    if timer.quantity is not None:
        return format_quantity(timer.quantity, painter, style)
    if timer.name is not None:
        return painter.paint(timer.name, style)
    raise RecipeContractError("Timer sin cantidad ni nombre")


def _legend_text(entries: List[_LegendEntry], section: Section, painter: Painter) -> str:
    if not entries:
        return EMPTY_LEGEND

    styles = painter.styles
    rendered: List[str] = []
    for entry in entries:
        igr = entry.ingredient
        text = igr.display_name
        if entry.position is not None:
            text += to_subscript(str(entry.position))
        if igr.is_optional():
            text += painter.paint(" (opt)", styles.opt_marker)
        source = cross_reference_text(igr, section)
        if source is not None:
            text += painter.paint(f" from {source}", styles.intermediate_ref)
        if igr.quantity is not None:
            text += ": " + format_quantity(igr.quantity, painter, styles.step_igr_quantity)
        rendered.append(text)
    return "[" + ", ".join(rendered) + "]"


def render_step(recipe: Recipe, section: Section, step: Step, painter: Painter) -> RenderedStep:
    """
    Recorre los items de `step` y arma el texto y la línea de ingredientes.

    Raises
    ------
    RecipeContractError
        Si un timer no tiene ni cantidad ni nombre, o una referencia a paso
        apunta a un bloque de texto.
    """
    styles = painter.styles
    groups = build_step_groups(step, recipe)

    parts: List[str] = []
    legend: List[_LegendEntry] = []

    for item in step.items:
        if isinstance(item, Text):
            parts.append(item.value)
        elif isinstance(item, IngredientRef):
            igr = recipe.ingredients[item.index]
            parts.append(painter.paint(igr.display_name, styles.ingredient))
            position = groups.subscript_position(item.index, igr.name)
            if position is not None:
                parts.append(to_subscript(str(position)))
            if groups.in_legend(item.index, igr.name):
                legend.append(_LegendEntry(igr, position))
        elif isinstance(item, CookwareRef):
            cookware = recipe.cookware[item.index]
            parts.append(painter.paint(cookware.name, styles.cookware))
        elif isinstance(item, TimerRef):
            parts.append(_timer_text(recipe.timers[item.index], painter))
        elif isinstance(item, InlineQuantityRef):
            quantity = recipe.inline_quantities[item.index]
            parts.append(format_quantity(quantity, painter, styles.inline_quantity))
        else:
            assert_never(item)

    return RenderedStep(text="".join(parts), legend=_legend_text(legend, section, painter))


def section_divider(section_index: int, width: int) -> str:
    """Divisor centrado "─── § N ───" (N 1-based)."""
    return f"─── § {section_index + 1} ───".center(width).rstrip()


def write_steps(recipe: Recipe, context: RenderContext, sink: LineSink) -> None:
    """
    Escribe el bloque "Steps:" con todas las secciones de la receta.
    """
    painter = context.painter
    width = context.width
    multiple_sections = len(recipe.sections) > 1
    logger.debug(f"Renderizando {len(recipe.sections)} secciones")

    sink.write_line("Steps:")
    for section_index, section in enumerate(recipe.sections):
        if multiple_sections:
            sink.write_line(section_divider(section_index, width))

        if section.name:
            sink.write_line(f"{painter.paint(section.name, painter.styles.section_name)}:")

        for content in section.content:
            if isinstance(content, Step):
                rendered = render_step(recipe, section, content, painter)
                write_wrapped(
                    sink,
                    f"{content.number:>2}. {rendered.text.strip()}",
                    WrapOptions(width, subsequent_indent=STEP_CONTINUATION_INDENT),
                )
                write_wrapped(
                    sink,
                    rendered.legend,
                    WrapOptions(
                        width,
                        initial_indent=LEGEND_INDENT,
                        subsequent_indent=LEGEND_INDENT,
                        word_separator=split_after_comma,
                    ),
                )
            elif isinstance(content, Text):
                sink.write_line("")
                write_wrapped(
                    sink,
                    content.value.strip(),
                    WrapOptions(width, initial_indent=TEXT_BLOCK_INDENT),
                )
                sink.write_line("")
            else:
                assert_never(content)
