"""
Piezas genéricas del motor de render, independientes del dominio:

- Abstracciones (sink de líneas, conversor de unidades)
- Sinks concretos
- Wrapping de texto
- Subíndices Unicode
"""
