"""
recipe_render_core
==================

Motor de render de recetas ya parseadas y escaladas a texto legible para
terminal: deduplicación de ingredientes por paso, subíndices estables,
tablas agregadas con resultados de escalado y ajuste de líneas.
"""

from .domains.recipes.context import RenderContext
from .domains.recipes.models import Recipe, RecipeContractError
from .engine import build_render_context, render, render_to_string

__all__ = [
    "Recipe",
    "RecipeContractError",
    "RenderContext",
    "build_render_context",
    "render",
    "render_to_string",
]
