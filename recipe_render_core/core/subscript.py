"""
Codificador de subíndices Unicode.

Se usa para numerar menciones repetidas de un mismo ingrediente dentro
de un paso (ej: "sal₁ ... sal₂").
"""

from __future__ import annotations

_SUBSCRIPT_DIGITS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


def to_subscript(digits: str) -> str:
    """
    Convierte una cadena de dígitos decimales a sus glifos de subíndice.

    Los caracteres que no son dígitos se devuelven sin cambios.
    """
    return digits.translate(_SUBSCRIPT_DIGITS)
