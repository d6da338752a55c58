"""
Contexto de render: valores resueltos UNA vez antes de renderizar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...core.abstractions import UnitConverter
from .profiles import Painter


@dataclass(frozen=True)
class RenderContext:
    """
    Attributes
    ----------
    width:
        Ancho máximo de línea para todo el documento. Se calcula antes del
        render y no cambia aunque la terminal cambie de tamaño.
    painter:
        Aplica estilos semánticos (color o texto plano).
    converter:
        Conversor de unidades opcional para agregar cantidades.
    """

    width: int
    painter: Painter
    converter: Optional[UnitConverter] = None
