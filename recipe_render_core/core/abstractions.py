"""
Abstracciones (Protocols) que el motor de render consume.

El motor no conoce el destino real de la salida ni cómo se convierten
unidades: ambos son colaboradores externos que cumplen estas interfaces.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domains.recipes.models import Quantity


class LineSink(Protocol):
    """
    Destino de líneas de texto ya renderizadas.

    Cada llamada recibe UNA línea, sin separador final; el sink decide
    cómo terminarla. Cualquier error de escritura (OSError) debe propagarse:
    el motor no reintenta ni recupera.
    """

    def write_line(self, line: str) -> None:
        """
        Escribe una línea completa.

        Args:
            line: Texto de la línea (puede incluir secuencias de estilo ANSI).
        """
        ...


class UnitConverter(Protocol):
    """
    Conversor de unidades usado al agregar cantidades de toda la receta.

    Solo se consulta cuando dos cantidades del mismo ingrediente tienen
    unidades distintas.
    """

    def convert(self, quantity: "Quantity", unit: str) -> Optional["Quantity"]:
        """
        Convierte `quantity` a `unit`.

        Args:
            quantity: Cantidad numérica con unidad.
            unit: Unidad destino (la de una cantidad ya agrupada).

        Returns:
            La cantidad expresada en `unit`, o None si no son compatibles.
        """
        ...
