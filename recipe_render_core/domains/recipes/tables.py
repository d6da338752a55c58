"""
Tablas agregadas de toda la receta: ingredientes y utensilios.

Ingredientes
------------
Cada definición de ingrediente se combina con todas las ocurrencias que la
referencian. Las cantidades se suman cuando se puede (ver
`quantities.merge_quantities`) y el resultado del escalado se resume en un
único `ScaleOutcome` por fila:

- fixed  -> glifo " ⚠" (valor fijo, ajustar a mano)
- error  -> glifo " ⯃" (falló el escalado)

Si alguna fila usó un glifo, debajo de la tabla se imprime una leyenda con
SOLO los glifos usados.

Utensilios
----------
Mismo agrupamiento de cantidades, sin escalado.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ...core.abstractions import LineSink, UnitConverter
from ...core.wrapping import display_width
from .context import RenderContext
from .models import Cookware, GroupedIngredient, Quantity, Recipe, ScaleOutcome
from .quantities import format_quantity, merge_quantities

FIXED_GLYPH = " ⚠"
ERROR_GLYPH = " ⯃"

TABLE_INDENT = "  "
_COLUMN_GAPS = (" ", "    ", " ")

_OUTCOME_PRIORITY = {"no_quantity": 0, "scaled": 1, "fixed": 2, "error": 3}

Row = Tuple[str, str, str, str]


def _merge_outcomes(outcomes: Iterable[Optional[ScaleOutcome]]) -> Optional[ScaleOutcome]:
    merged: Optional[ScaleOutcome] = None
    for outcome in outcomes:
        if outcome is None:
            continue
        if merged is None or _OUTCOME_PRIORITY[outcome.kind] > _OUTCOME_PRIORITY[merged.kind]:
            merged = outcome
    return merged


def group_ingredients(
    recipe: Recipe,
    converter: Optional[UnitConverter] = None,
) -> List[GroupedIngredient]:
    """
    Agrupa los ingredientes de toda la receta.

    Devuelve una entrada por definición, en orden de aparición. Las
    referencias no generan fila propia: su cantidad y su resultado de
    escalado se suman a la definición referenciada.
    """
    grouped: List[GroupedIngredient] = []
    for index, igr in enumerate(recipe.ingredients):
        if igr.relation.is_reference():
            continue

        members = [index, *igr.relation.referenced_from]
        quantities = [
            recipe.ingredients[i].quantity
            for i in members
            if recipe.ingredients[i].quantity is not None
        ]
        outcome = None
        if recipe.scale_data is not None:
            outcome = _merge_outcomes(recipe.outcome_for(i) for i in members)

        grouped.append(
            GroupedIngredient(
                index=index,
                ingredient=igr,
                quantities=merge_quantities(quantities, converter),
                outcome=outcome,
            )
        )
    return grouped


def group_cookware_amounts(cookware: Sequence[Cookware], index: int) -> List[Quantity]:
    """
    Cantidades combinadas del utensilio `index` y de sus referencias.
    """
    item = cookware[index]
    members = [index, *item.relation.referenced_from]
    return merge_quantities(
        cookware[i].quantity for i in members if cookware[i].quantity is not None
    )


def format_rows(rows: Sequence[Row]) -> List[str]:
    """
    Alinea las filas a izquierda por columna (ancho en celdas, sin ANSI).
    """
    if not rows:
        return []
    widths = [max(display_width(row[col]) for row in rows) for col in range(len(rows[0]))]

    lines: List[str] = []
    for row in rows:
        line = TABLE_INDENT
        for col, cell in enumerate(row):
            if col:
                line += _COLUMN_GAPS[col - 1]
            line += cell + " " * (widths[col] - display_width(cell))
        lines.append(line.rstrip())
    return lines


def write_ingredients_table(recipe: Recipe, context: RenderContext, sink: LineSink) -> None:
    """
    Escribe el bloque "Ingredients:" (nada si la receta no tiene ingredientes).
    """
    if not recipe.ingredients:
        return

    painter = context.painter
    styles = painter.styles
    there_is_fixed = False
    there_is_error = False
    rows: List[Row] = []

    for entry in group_ingredients(recipe, context.converter):
        igr = entry.ingredient
        if not igr.should_be_listed():
            continue

        style = None
        glyph = ""
        if entry.outcome is not None and entry.outcome.kind == "fixed":
            there_is_fixed = True
            style, glyph = styles.fixed, FIXED_GLYPH
        elif entry.outcome is not None and entry.outcome.kind == "error":
            there_is_error = True
            style, glyph = styles.error, ERROR_GLYPH

        content = ", ".join(format_quantity(q, painter, style) for q in entry.quantities)
        if glyph:
            content += painter.paint(glyph, style)

        rows.append(
            (
                igr.display_name,
                painter.paint("(optional)", styles.opt_marker) if igr.is_optional() else "",
                content,
                f"({igr.note})" if igr.note else "",
            )
        )

    sink.write_line("Ingredients:")
    for line in format_rows(rows):
        sink.write_line(line)

    if there_is_fixed or there_is_error:
        sink.write_line("")
        legend: List[str] = []
        if there_is_fixed:
            legend.append(painter.paint(f"{FIXED_GLYPH.strip()} fixed value", styles.fixed))
        if there_is_error:
            legend.append(painter.paint(f"{ERROR_GLYPH.strip()} error scaling", styles.error))
        sink.write_line(" | ".join(legend))
    sink.write_line("")


def write_cookware_table(recipe: Recipe, context: RenderContext, sink: LineSink) -> None:
    """
    Escribe el bloque "Cookware:" (nada si la receta no tiene utensilios).
    """
    if not recipe.cookware:
        return

    painter = context.painter
    rows: List[Row] = []
    for index, item in enumerate(recipe.cookware):
        if not item.should_be_listed():
            continue
        amounts = group_cookware_amounts(recipe.cookware, index)
        rows.append(
            (
                item.display_name,
                "(optional)" if item.is_optional() else "",
                ", ".join(format_quantity(q, painter) for q in amounts),
                f"({item.note})" if item.note else "",
            )
        )

    sink.write_line("Cookware:")
    for line in format_rows(rows):
        sink.write_line(line)
    sink.write_line("")
