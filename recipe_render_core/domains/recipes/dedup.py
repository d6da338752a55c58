"""
Deduplicación de ingredientes por paso y referencias cruzadas.

Dentro de un paso, un mismo ingrediente (misma `name`) puede mencionarse
varias veces. Este módulo decide:

1) Qué menciones aportan información y van a la línea de ingredientes
   del paso (las que tienen cantidad o son referencias intermedias; si
   ninguna aporta, se conserva la primera).
2) Qué subíndice lleva cada mención en el texto del paso: cuando el nombre
   aparece más de una vez, TODAS las menciones se numeran según su
   posición entre las menciones originales. Así la numeración es estable
   aunque alguna mención no llegue a la línea de ingredientes.
3) El texto "section N" / "step N" de una referencia intermedia.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import Ingredient, IngredientRef, Recipe, RecipeContractError, Section, Step


@dataclass
class StepIngredientGroups:
    """
    Grupos de menciones de ingredientes de UN paso, por nombre.

    Attributes
    ----------
    original:
        nombre -> índices globales de todas las menciones, en orden de
        aparición.
    retained:
        nombre -> subconjunto que aporta información (nunca vacío).
    """

    original: Dict[str, List[int]] = field(default_factory=dict)
    retained: Dict[str, List[int]] = field(default_factory=dict)

    def subscript_position(self, index: int, name: str) -> Optional[int]:
        """
        Posición 1-based de la mención `index` entre las menciones de `name`.

        None si el nombre se menciona una sola vez en el paso.
        """
        mentions = self.original.get(name, [])
        if len(mentions) <= 1 or index not in mentions:
            return None
        return mentions.index(index) + 1

    def in_legend(self, index: int, name: str) -> bool:
        return index in self.retained.get(name, [])


def _adds_information(ingredient: Ingredient) -> bool:
    return ingredient.quantity is not None or ingredient.relation.is_intermediate_reference()


def build_step_groups(step: Step, recipe: Recipe) -> StepIngredientGroups:
    """
    Agrupa las menciones de ingredientes de `step` y filtra las redundantes.
    """
    groups = StepIngredientGroups()
    for item in step.items:
        if isinstance(item, IngredientRef):
            name = recipe.ingredients[item.index].name
            groups.original.setdefault(name, []).append(item.index)

    for name, mentions in groups.original.items():
        kept = [i for i in mentions if _adds_information(recipe.ingredients[i])]
        groups.retained[name] = kept or [mentions[0]]
    return groups


def cross_reference_text(ingredient: Ingredient, section: Section) -> Optional[str]:
    """
    Texto de la referencia intermedia de `ingredient`, sin el "from ".

    - Sección: "section N" (N = índice destino + 1).
    - Paso: "step N" (N = número de display del paso ubicado en la
      posición destino del contenido de la MISMA sección).

    Raises
    ------
    RecipeContractError
        Si la referencia a paso apunta a un bloque que no es un paso.
    """
    reference = ingredient.relation.reference()
    if reference is None:
        return None

    target_index, target = reference
    if target == "section":
        return f"section {target_index + 1}"
    if target == "step":
        content = section.content[target_index]
        if not isinstance(content, Step):
            raise RecipeContractError(
                f"'{ingredient.name}' referencia al paso {target_index}, que no es un paso"
            )
        return f"step {content.number}"
    return None
