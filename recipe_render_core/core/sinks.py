"""
Implementaciones concretas de `LineSink`.
"""

from __future__ import annotations

from typing import List, TextIO


class StreamSink:
    """
    Escribe cada línea en un stream de texto (stdout, archivo abierto, etc.).
    """

    def __init__(self, stream: TextIO, line_separator: str = "\n") -> None:
        self.stream = stream
        self.line_separator = line_separator

    def write_line(self, line: str) -> None:
        self.stream.write(line + self.line_separator)


class ListSink:
    """
    Acumula las líneas en memoria. Útil para tests y para `render_to_string`.
    """

    def __init__(self) -> None:
        self.lines: List[str] = []

    def write_line(self, line: str) -> None:
        self.lines.append(line)

    def getvalue(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)
