"""
Renderer de recetas para terminal.

Arma el documento completo en orden fijo:

1) Título (emoji opcional + nombre) y línea de tags.
2) Descripción (con barra a la izquierda) y líneas "clave: valor".
3) Tabla de ingredientes y tabla de utensilios.
4) "Steps:" con secciones y pasos.

Todo se escribe línea por línea en un `LineSink`. Un error de escritura
del sink corta el render y se propaga tal cual.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.style import Style

from ...core.abstractions import LineSink
from ...core.wrapping import WrapOptions, write_wrapped
from .context import RenderContext
from .models import Recipe
from .profiles import CookStyles, Painter
from .steps import write_steps
from .tables import write_cookware_table, write_ingredients_table

logger = logging.getLogger(__name__)

DESCRIPTION_BAR = "│ "

_USIZE_MASK = (1 << 64) - 1


def tag_style_index(tag: str, palette_size: int = 7) -> int:
    """
    Índice estable de color para un tag.

    hash = suma (con desborde a 64 bits) de ord(caracter) * posición,
    módulo el tamaño de la paleta. El mismo tag siempre da el mismo índice,
    en esta y en cualquier otra corrida.
    """
    digest = 0
    for position, char in enumerate(tag):
        digest = (digest + ord(char) * position) & _USIZE_MASK
    return digest % palette_size


def tag_style(tag: str, styles: CookStyles) -> Style:
    return styles.tags[tag_style_index(tag, len(styles.tags))]


_YEAR_SECONDS = 31_557_600  # 365.25 días
_MONTH_SECONDS = 2_630_016  # 30.44 días
_DAY_SECONDS = 86_400


def _plural(value: int, unit: str) -> str:
    return f"{value}{unit}" if value == 1 else f"{value}{unit}s"


def format_duration(minutes: int) -> str:
    """
    Duración legible a partir de minutos: "45m", "1h 30m", "2days 3h".

    Mismas unidades que humantime: años de 365.25 días y meses de 30.44
    días, por eso un mes puede dejar un resto en segundos.
    """
    if minutes <= 0:
        return "0s"
    years, rest = divmod(minutes * 60, _YEAR_SECONDS)
    months, rest = divmod(rest, _MONTH_SECONDS)
    days, rest = divmod(rest, _DAY_SECONDS)
    hours, rest = divmod(rest, 3600)
    mins, secs = divmod(rest, 60)

    parts = []
    if years:
        parts.append(_plural(years, "year"))
    if months:
        parts.append(_plural(months, "month"))
    if days:
        parts.append(_plural(days, "day"))
    if hours:
        parts.append(f"{hours}h")
    if mins:
        parts.append(f"{mins}m")
    if secs:
        parts.append(f"{secs}s")
    return " ".join(parts)


def _servings_text(recipe: Recipe, painter: Painter) -> str:
    styles = painter.styles
    servings = recipe.metadata.servings or ()
    scale_data = recipe.scale_data

    selected: Optional[int] = scale_data.target.index if scale_data is not None else None
    if selected is None and recipe.default_scaled:
        selected = 0

    text = "|".join(
        painter.paint(f"[{value}]", styles.selected_servings) if i == selected else str(value)
        for i, value in enumerate(servings)
    )
    if scale_data is not None and scale_data.target.index is None:
        # El objetivo no es ninguna de las alternativas de la receta
        text = (
            f"{painter.paint(text, styles.strike)} "
            f"{painter.paint('→', styles.error)} "
            f"{painter.paint(str(scale_data.target.target_servings), styles.error)}"
        )
    return text


class RecipeRenderer:
    """
    Renderer de `Recipe` a texto legible, con estilos y ajuste de líneas.
    """

    def render(
        self,
        recipe: Recipe,
        name: str,
        context: RenderContext,
        sink: LineSink,
    ) -> None:
        """
        Renderiza la receta completa en `sink`.

        Raises
        ------
        OSError
            Si el sink rechaza una escritura.
        RecipeContractError
            Si la receta viola un invariante de construcción.
        """
        logger.debug(f"Renderizando receta '{name}' (ancho={context.width})")
        self._write_header(recipe, name, context, sink)
        self._write_metadata(recipe, context, sink)
        write_ingredients_table(recipe, context, sink)
        write_cookware_table(recipe, context, sink)
        write_steps(recipe, context, sink)

    def _write_header(self, recipe: Recipe, name: str, context: RenderContext, sink: LineSink) -> None:
        painter = context.painter
        meta = recipe.metadata

        emoji = f"{meta.emoji} " if meta.emoji else ""
        sink.write_line(painter.paint(f" {emoji}{name} ", painter.styles.title))

        if meta.tags:
            tags = "".join(
                painter.paint(f"#{tag}", tag_style(tag, painter.styles)) + " "
                for tag in meta.tags
            )
            write_wrapped(sink, tags, WrapOptions(context.width))
        sink.write_line("")

    def _write_metadata(self, recipe: Recipe, context: RenderContext, sink: LineSink) -> None:
        painter = context.painter
        meta = recipe.metadata

        if meta.description:
            write_wrapped(
                sink,
                meta.description.strip(),
                WrapOptions(
                    context.width,
                    initial_indent=DESCRIPTION_BAR,
                    subsequent_indent=DESCRIPTION_BAR,
                ),
            )
            sink.write_line("")

        def meta_line(key: str, value: str) -> None:
            sink.write_line(f"{painter.paint(key, painter.styles.meta_key)}: {value}")

        if meta.author is not None:
            meta_line("author", meta.author.display())
        if meta.source is not None:
            meta_line("source", meta.source.display())
        if meta.time is not None:
            if meta.time.is_composed:
                if meta.time.prep_minutes is not None:
                    meta_line("prep time", format_duration(meta.time.prep_minutes))
                if meta.time.cook_minutes is not None:
                    meta_line("cook time", format_duration(meta.time.cook_minutes))
                meta_line("total time", format_duration(meta.time.total()))
            else:
                meta_line("time", format_duration(meta.time.total()))
        if meta.servings:
            meta_line("servings", _servings_text(recipe, painter))
        for key, value in meta.extra.items():
            meta_line(key, str(value))

        if not meta.is_empty():
            sink.write_line("")
