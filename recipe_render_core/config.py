# recipe_render_core/config.py
from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv
from rich.console import Console

"""
recipe_render_core.config
=========================

Gestión centralizada de configuración del renderer.

Este módulo define:
- La estructura de configuración (`Settings`)
- El mecanismo para cargar variables desde entorno (.env)
- Un acceso único y cacheado a la configuración (`get_settings`)
- La detección del ancho de terminal (`detect_terminal_width`)

Convenciones
------------
- Las variables de entorno se cargan desde un archivo `.env` si existe.
- Los defaults están pensados para uso interactivo en terminal.
- El ancho de terminal se resuelve UNA vez por render y viaja en el
  `RenderContext`; nunca se relee a mitad de documento.
"""

# Cargar variables de entorno desde .env (si existe)
load_dotenv()

COLOR_CHOICES = ("auto", "always", "never")


@dataclass
class Settings:
    """
    Contenedor tipado de configuración del renderer.

    Attributes
    ----------
    max_width:
        Tope duro de ancho de línea. El ancho efectivo es el mínimo entre
        este valor y el ancho detectado de la terminal.
    color:
        "auto" (solo si la salida es una terminal), "always" o "never".
    color_system:
        Sistema de color de rich: "standard", "256" o "truecolor".
    log_level:
        Nivel de logging para la CLI.
    """

    max_width: int = 80
    color: str = "auto"
    color_system: str = "standard"
    log_level: str = "WARNING"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} debe ser un entero, se recibió {raw!r}") from e


@lru_cache
def get_settings() -> Settings:
    """
    Devuelve una instancia única y cacheada de `Settings`.

    Variables de entorno utilizadas
    -------------------------------
    - RECIPE_RENDER_MAX_WIDTH (default: 80)
    - RECIPE_RENDER_COLOR (default: "auto")
    - RECIPE_RENDER_COLOR_SYSTEM (default: "standard")
    - RECIPE_RENDER_LOG_LEVEL (default: "WARNING")

    Raises
    ------
    ValueError
        Si RECIPE_RENDER_MAX_WIDTH no es un entero o RECIPE_RENDER_COLOR
        no es un valor permitido.
    """
    color = os.getenv("RECIPE_RENDER_COLOR", "auto").strip().lower() or "auto"
    if color not in COLOR_CHOICES:
        raise ValueError(f"RECIPE_RENDER_COLOR debe ser uno de {COLOR_CHOICES}, se recibió {color!r}")

    return Settings(
        max_width=_int_env("RECIPE_RENDER_MAX_WIDTH", 80),
        color=color,
        color_system=os.getenv("RECIPE_RENDER_COLOR_SYSTEM", "standard").strip() or "standard",
        log_level=os.getenv("RECIPE_RENDER_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )


def detect_terminal_width(settings: Settings) -> int:
    """
    Ancho de línea efectivo: min(ancho de terminal, `settings.max_width`).

    Si la salida no es una terminal, rich usa $COLUMNS o 80.
    """
    return max(1, min(Console().width, settings.max_width))
