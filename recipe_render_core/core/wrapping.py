"""
recipe_render_core.core.wrapping
================================

Ajuste de texto (wrapping) a un ancho máximo de línea.

Características
---------------
- El ancho se mide en celdas de terminal (`rich.cells.cell_len`), así que
  glifos anchos (emoji) y subíndices se cuentan correctamente.
- Las secuencias de estilo ANSI NO ocupan ancho: el texto ya viene pintado
  cuando llega acá.
- La separación en palabras es enchufable (`word_separator`):
    * `split_whitespace`: corte en espacios (texto narrativo).
    * `split_after_comma`: corte SOLO después de cada ", " (línea de
      ingredientes de un paso, cuyas entradas tienen espacios internos).
- Algoritmo greedy (first-fit): cada palabra va en la línea actual si entra,
  si no, abre una nueva. Los espacios al final de una línea cortada se
  descartan.

Notas
-----
- Texto vacío => cero líneas (no una línea vacía). Las líneas en blanco de
  separación las decide quien llama.
- El ancho lo calcula quien llama UNA vez por render (ver `RenderContext`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List

from rich.cells import cell_len

from .abstractions import LineSink

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")
_TOKEN = re.compile(r"\x1b\[[0-9;]*m|.", re.DOTALL)
_WORD = re.compile(r"(\S*)(\s*)")

LEGEND_SEPARATOR = ", "


def display_width(text: str) -> int:
    """
    Ancho visible de `text` en celdas de terminal, ignorando estilos ANSI.
    """
    return cell_len(_ANSI_ESCAPE.sub("", text))


@dataclass(frozen=True)
class Word:
    """
    Unidad mínima de wrapping.

    Attributes
    ----------
    text:
        Contenido de la palabra (puede incluir secuencias ANSI).
    whitespace:
        Espacio que la sigue. Solo se imprime si la próxima palabra
        queda en la misma línea.
    """

    text: str
    whitespace: str = ""

    @property
    def width(self) -> int:
        return display_width(self.text)


WordSeparator = Callable[[str], List[Word]]


def split_whitespace(text: str) -> List[Word]:
    """Separador por defecto: una palabra por cada corrida sin espacios."""
    words: List[Word] = []
    for match in _WORD.finditer(text):
        if match.group(0):
            words.append(Word(match.group(1), match.group(2)))
    return words


def _trailing_space_word(part: str) -> Word:
    text = part.rstrip(" ")
    return Word(text, part[len(text):])


def split_after_comma(text: str) -> List[Word]:
    """
    Separador para la línea de ingredientes de un paso.

    Corta inmediatamente DESPUÉS de cada ", " literal: la coma queda pegada
    a la entrada anterior y los espacios internos de una entrada
    ("aceite de oliva: 2 cdas") nunca son puntos de corte.
    """
    words: List[Word] = []
    start = 0
    while True:
        end = text.find(LEGEND_SEPARATOR, start)
        if end == -1:
            break
        stop = end + len(LEGEND_SEPARATOR)
        words.append(_trailing_space_word(text[start:stop]))
        start = stop
    if start < len(text):
        words.append(_trailing_space_word(text[start:]))
    return words


@dataclass(frozen=True)
class WrapOptions:
    """
    Opciones de wrapping.

    Attributes
    ----------
    width:
        Ancho máximo de cada línea, indentación incluida.
    initial_indent:
        Prefijo de la primera línea (se aplica tal cual).
    subsequent_indent:
        Prefijo del resto de las líneas.
    word_separator:
        Función que decide dónde se puede cortar.
    """

    width: int
    initial_indent: str = ""
    subsequent_indent: str = ""
    word_separator: WordSeparator = split_whitespace


def _break_word(word: Word, limit: int) -> List[Word]:
    # Corta por celdas sin partir secuencias ANSI
    if word.width <= limit:
        return [word]
    pieces: List[Word] = []
    current = ""
    current_width = 0
    for token in _TOKEN.findall(word.text):
        token_width = 0 if _ANSI_ESCAPE.fullmatch(token) else cell_len(token)
        if current_width and current_width + token_width > limit:
            pieces.append(Word(current))
            current, current_width = "", 0
        current += token
        current_width += token_width
    pieces.append(Word(current, word.whitespace))
    return pieces


def wrap(text: str, options: WrapOptions) -> List[str]:
    """
    Ajusta `text` a `options.width` y devuelve las líneas resultantes.

    Los saltos de línea presentes en `text` se respetan (cada uno abre una
    línea nueva). Las palabras más largas que el ancho útil se parten.

    Returns
    -------
    List[str]
        Líneas sin separador final. Lista vacía si `text` es "".
    """
    if not text:
        return []

    widest_indent = max(
        display_width(options.initial_indent),
        display_width(options.subsequent_indent),
    )
    limit = max(1, options.width - widest_indent)

    lines: List[str] = []
    for paragraph in text.split("\n"):
        line = options.initial_indent if not lines else options.subsequent_indent
        line_width = display_width(line)
        has_words = False
        gap = ""

        for original in options.word_separator(paragraph):
            for word in _break_word(original, limit):
                gap_width = display_width(gap) if has_words else 0
                if has_words and line_width + gap_width + word.width > options.width:
                    lines.append(line)
                    line = options.subsequent_indent
                    line_width = display_width(line)
                    has_words = False
                    gap_width = 0
                if has_words:
                    line += gap
                    line_width += gap_width
                line += word.text
                line_width += word.width
                gap = word.whitespace
                has_words = True

        lines.append(line)
    return lines


def write_wrapped(sink: LineSink, text: str, options: WrapOptions) -> None:
    """Ajusta `text` y escribe cada línea en `sink`."""
    for line in wrap(text, options):
        sink.write_line(line)
