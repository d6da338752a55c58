"""
Perfiles de estilo para el render de recetas en terminal.

El motor decide QUÉ estilo semántico corresponde a cada fragmento
(ingrediente, utensilio, timer, ...). CÓMO se traduce eso a códigos de
terminal lo resuelve `rich` (`Style.render`). Un mismo `Recipe` se puede
presentar en color o en texto plano según el perfil.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from rich.color import ColorSystem
from rich.style import Style

# Modo general del perfil
Mode = Literal["color", "plain"]

_COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
}


@dataclass(frozen=True)
class CookStyles:
    """
    Estilos semánticos usados por el renderer.

    Attributes
    ----------
    title:
        Línea de título (emoji + nombre).
    meta_key:
        Claves de las líneas "clave: valor" de metadata.
    selected_servings:
        Alternativa de porciones activa.
    ingredient / cookware / timer / inline_quantity:
        Tokens dentro del texto de un paso.
    opt_marker:
        Marcas "(opt)" / "(optional)".
    intermediate_ref:
        Texto "from step N" / "from section N".
    section_name:
        Encabezado con el nombre de una sección.
    step_igr_quantity:
        Cantidad de un ingrediente en la línea de ingredientes de un paso.
    unit:
        Unidad de una cantidad (siempre distinta del valor).
    fixed / error:
        Cantidades con escalado fijo o con error, y sus glifos.
    tags:
        Paleta de 7 estilos para los tags (el orden es parte del contrato).
    """

    title: Style
    meta_key: Style
    selected_servings: Style
    ingredient: Style
    cookware: Style
    timer: Style
    inline_quantity: Style
    opt_marker: Style
    intermediate_ref: Style
    section_name: Style
    step_igr_quantity: Style
    unit: Style
    fixed: Style
    error: Style
    strike: Style
    tags: Tuple[Style, ...]


DEFAULT_STYLES = CookStyles(
    title=Style.parse("bold white on magenta"),
    meta_key=Style.parse("green"),
    selected_servings=Style.parse("bold yellow"),
    ingredient=Style.parse("green"),
    cookware=Style.parse("yellow"),
    timer=Style.parse("cyan"),
    inline_quantity=Style.parse("red"),
    opt_marker=Style.parse("italic bright_cyan"),
    intermediate_ref=Style.parse("italic yellow"),
    section_name=Style.parse("bold underline"),
    step_igr_quantity=Style.parse("dim"),
    unit=Style.parse("italic"),
    fixed=Style.parse("yellow"),
    error=Style.parse("red"),
    strike=Style.parse("strike dim"),
    tags=(
        Style.parse("red"),
        Style.parse("blue"),
        Style.parse("cyan"),
        Style.parse("yellow"),
        Style.parse("green"),
        Style.parse("magenta"),
        Style.parse("white"),
    ),
)


@dataclass(frozen=True)
class RenderProfile:
    """
    Perfil de render.

    Attributes
    ----------
    id:
        Identificador estable del perfil (logging, tests).
    mode:
        "color" | "plain".
    label:
        Etiqueta humana.
    color_system:
        Sistema de color de rich ("standard", "256", "truecolor") o None
        para no emitir códigos de estilo.
    styles:
        Estilos semánticos.
    """

    id: str
    mode: Mode
    label: str
    color_system: Optional[str]
    styles: CookStyles = DEFAULT_STYLES


class Painter:
    """
    Aplica estilos semánticos a texto.

    Con `color_system=None` devuelve el texto tal cual, lo que permite
    renderizar a archivo o testear sin secuencias ANSI.
    """

    def __init__(self, profile: RenderProfile) -> None:
        self.profile = profile
        self.styles = profile.styles
        self._color_system = (
            _COLOR_SYSTEMS.get(profile.color_system, ColorSystem.STANDARD)
            if profile.color_system
            else None
        )

    @property
    def enabled(self) -> bool:
        return self._color_system is not None

    def paint(self, text: str, style: Style) -> str:
        return style.render(text, color_system=self._color_system)


# ============================================================
# Perfiles predefinidos (V1)
# ============================================================

COLOR_V1 = RenderProfile(
    id="color_v1",
    mode="color",
    label="Terminal (color)",
    color_system="standard",
)

PLAIN_V1 = RenderProfile(
    id="plain_v1",
    mode="plain",
    label="Texto plano",
    color_system=None,
)


def get_profile(mode: Mode, color_system: str = "standard") -> RenderProfile:
    """
    Devuelve el perfil por defecto para un `mode`.

    Parameters
    ----------
    mode:
        "color" o "plain".
    color_system:
        Sistema de color a usar en modo "color" (ver `config.Settings`).
    """
    if mode == "plain":
        return PLAIN_V1
    if color_system == COLOR_V1.color_system:
        return COLOR_V1
    return RenderProfile(
        id=f"color_v1_{color_system}",
        mode="color",
        label=f"Terminal (color, {color_system})",
        color_system=color_system,
    )
