"""
Dominio de recetas.

Este módulo contiene toda la lógica específica para renderizar recetas:
- Modelos de datos (Recipe, Section, Step, Ingredient, ...)
- Builder (JSON -> Recipe)
- Deduplicación de ingredientes por paso y referencias cruzadas
- Render de pasos, tablas agregadas y documento completo
- Perfiles de estilo
"""
