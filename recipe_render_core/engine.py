from __future__ import annotations

"""
recipe_render_core.engine
=========================

API interna y estable para renderizar una receta ya parseada y escalada.

La idea es que:

- La CLI (`cli.py`) y cualquier otra capa (HTTP, scripts) usen solo estas
  funciones.
- Ninguna capa externa hable directo con `steps.py` / `tables.py`.

Contrato
--------
`render(recipe, name, context, sink)` escribe el documento línea por línea.
El único error propio del render es de I/O del sink (OSError): se propaga
inmediatamente y corta el render.
"""

import logging
import sys
from typing import Optional

from .config import Settings, detect_terminal_width, get_settings
from .core.abstractions import LineSink, UnitConverter
from .core.sinks import ListSink
from .domains.recipes.context import RenderContext
from .domains.recipes.models import Recipe
from .domains.recipes.profiles import Painter, get_profile
from .domains.recipes.renderer import RecipeRenderer

logger = logging.getLogger(__name__)


def build_render_context(
    settings: Optional[Settings] = None,
    *,
    color: Optional[bool] = None,
    width: Optional[int] = None,
    converter: Optional[UnitConverter] = None,
) -> RenderContext:
    """
    Resuelve ancho, estilos y conversor UNA vez, antes de renderizar.

    Args:
        settings: Configuración a usar (default: `get_settings()`).
        color: Forzar color (True) o texto plano (False). None aplica
            `settings.color` ("auto" = solo si stdout es una terminal).
        width: Ancho explícito. None lo detecta de la terminal con el tope
            de `settings.max_width`.
        converter: Conversor de unidades opcional para la tabla de
            ingredientes.

    Returns:
        RenderContext inmutable para todo el documento.
    """
    settings = settings or get_settings()

    if width is None:
        width = detect_terminal_width(settings)
    if color is None:
        color = settings.color == "always" or (settings.color == "auto" and sys.stdout.isatty())

    profile = get_profile("color" if color else "plain", settings.color_system)
    logger.debug(f"Contexto de render: ancho={width}, perfil={profile.id}")
    return RenderContext(width=width, painter=Painter(profile), converter=converter)


def render(recipe: Recipe, name: str, context: RenderContext, sink: LineSink) -> None:
    """
    Renderiza `recipe` con el nombre de display `name` en `sink`.

    Raises
    ------
    OSError
        Si el sink rechaza una escritura.
    """
    RecipeRenderer().render(recipe, name, context, sink)


def render_to_string(recipe: Recipe, name: str, context: RenderContext) -> str:
    """
    Igual que `render`, pero devuelve el documento completo como string.
    """
    sink = ListSink()
    render(recipe, name, context, sink)
    return sink.getvalue()
