"""
Formateo y combinación de cantidades.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from rich.style import Style

from ...core.abstractions import UnitConverter
from .models import Quantity
from .profiles import Painter

logger = logging.getLogger(__name__)


def format_value(value: Union[int, float, str]) -> str:
    """
    Formatea el valor de una cantidad.

    Los números enteros se muestran sin decimales; el resto con hasta 3
    decimales y sin ceros finales ("0.5", "1.333").
    """
    if isinstance(value, (str, bool, int)):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_quantity(quantity: Quantity, painter: Painter, style: Optional[Style] = None) -> str:
    """
    Formatea "valor unidad", con la unidad en su propio estilo.

    Si se indica `style`, se aplica a toda la cantidad.
    """
    value = format_value(quantity.value)
    if quantity.unit:
        text = f"{value} {painter.paint(quantity.unit, painter.styles.unit)}"
    else:
        text = value
    return painter.paint(text, style) if style is not None else text


def _same_unit(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "").strip().lower() == (b or "").strip().lower()


def merge_quantities(
    quantities: Iterable[Quantity],
    converter: Optional[UnitConverter] = None,
) -> List[Quantity]:
    """
    Combina cantidades de varias ocurrencias de un mismo componente.

    Reglas:
    - Valores numéricos con la misma unidad se suman.
    - Si las unidades difieren y hay `converter`, se intenta convertir a la
      unidad de una cantidad ya acumulada.
    - Valores de texto ("una pizca") nunca se suman: quedan como entradas
      separadas.

    El orden del resultado es el de primera aparición.
    """
    merged: List[Quantity] = []
    for quantity in quantities:
        if not quantity.is_numeric:
            merged.append(quantity)
            continue

        for pos, current in enumerate(merged):
            if not current.is_numeric:
                continue
            if _same_unit(current.unit, quantity.unit):
                merged[pos] = Quantity(current.value + quantity.value, current.unit)
                break
            if converter is not None and current.unit and quantity.unit:
                converted = converter.convert(quantity, current.unit)
                if converted is not None and converted.is_numeric:
                    logger.debug(
                        f"Convertido {quantity.value} {quantity.unit} -> "
                        f"{converted.value} {current.unit}"
                    )
                    merged[pos] = Quantity(current.value + converted.value, current.unit)
                    break
        else:
            merged.append(quantity)
    return merged
