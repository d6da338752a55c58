"""
Modelos de dominio para recetas ya parseadas y escaladas.

Estos modelos llegan construidos desde afuera (parser/escalador o el loader
JSON de `builder.py`) y el motor de render solo los LEE: todas las
dataclasses son inmutables.

Convenciones
------------
- Ingredientes, utensilios, timers y cantidades inline viven en arrays
  planos de `Recipe`; los items de un paso los referencian por posición.
  Que los índices estén en rango es un invariante de quien construye la
  receta, no se re-valida en cada acceso.
- `Item` y `Content` son uniones cerradas: quien las consume debe cubrir
  todas las variantes y terminar con `assert_never`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Literal, Optional, Tuple, Union


class RecipeContractError(ValueError):
    """
    La receta viola un invariante que debía garantizar quien la construyó.

    Ejemplos: un timer sin cantidad ni nombre, un índice fuera de rango,
    una referencia a "paso N" que apunta a un bloque de texto.
    """


# ============================================================
# Tipos base
# ============================================================

Modifier = Literal["optional", "reference", "intermediate_reference", "hidden"]
"""
Modificadores de un ingrediente o utensilio.

- optional: se marca como "(opt)" / "(optional)".
- reference: referencia a otro ingrediente ya definido.
- intermediate_reference: referencia al resultado de un paso o sección.
- hidden: existe en la receta pero no se lista en las tablas.
"""

ReferenceTarget = Literal["ingredient", "step", "section"]

OutcomeKind = Literal["scaled", "fixed", "error", "no_quantity"]

MetaValue = Union[str, int, float, bool]

_NOT_LISTED: FrozenSet[str] = frozenset({"reference", "intermediate_reference", "hidden"})


@dataclass(frozen=True)
class Quantity:
    """
    Cantidad: valor (numérico o texto libre, ej: "una pizca") y unidad opcional.
    """

    value: Union[int, float, str]
    unit: Optional[str] = None

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)


@dataclass(frozen=True)
class ComponentRelation:
    """
    Relación de una ocurrencia con otras (ingredientes y utensilios).

    Attributes
    ----------
    references_to:
        Si la ocurrencia es una referencia: índice del destino. Según
        `target` indexa ingredientes, contenido de la sección actual o
        secciones de la receta.
    target:
        Tipo de destino de la referencia.
    referenced_from:
        Si la ocurrencia es una definición: índices de las ocurrencias
        que la referencian.
    """

    references_to: Optional[int] = None
    target: ReferenceTarget = "ingredient"
    referenced_from: Tuple[int, ...] = ()

    def is_reference(self) -> bool:
        return self.references_to is not None

    def is_intermediate_reference(self) -> bool:
        return self.references_to is not None and self.target in ("step", "section")

    def reference(self) -> Optional[Tuple[int, ReferenceTarget]]:
        if self.references_to is None:
            return None
        return self.references_to, self.target


@dataclass(frozen=True)
class Ingredient:
    """
    Una ocurrencia de ingrediente en la receta.

    `name` es la clave de identidad (agrupa menciones dentro de un paso);
    `display_name` es lo que se muestra.
    """

    name: str
    alias: Optional[str] = None
    quantity: Optional[Quantity] = None
    note: Optional[str] = None
    modifiers: FrozenSet[Modifier] = frozenset()
    relation: ComponentRelation = field(default_factory=ComponentRelation)

    @property
    def display_name(self) -> str:
        return self.alias or self.name

    def is_optional(self) -> bool:
        return "optional" in self.modifiers

    def should_be_listed(self) -> bool:
        return not (self.modifiers & _NOT_LISTED)


@dataclass(frozen=True)
class Cookware:
    """Un utensilio. Mismo formato que `Ingredient`, sin escalado."""

    name: str
    alias: Optional[str] = None
    quantity: Optional[Quantity] = None
    note: Optional[str] = None
    modifiers: FrozenSet[Modifier] = frozenset()
    relation: ComponentRelation = field(default_factory=ComponentRelation)

    @property
    def display_name(self) -> str:
        return self.alias or self.name

    def is_optional(self) -> bool:
        return "optional" in self.modifiers

    def should_be_listed(self) -> bool:
        return not (self.modifiers & _NOT_LISTED)


@dataclass(frozen=True)
class Timer:
    """
    Timer de un paso. Al menos uno de `quantity` / `name` está presente.
    """

    quantity: Optional[Quantity] = None
    name: Optional[str] = None


# ============================================================
# Items y contenido de secciones
# ============================================================

@dataclass(frozen=True)
class Text:
    """Texto literal (item de un paso o bloque de texto de una sección)."""

    value: str


@dataclass(frozen=True)
class IngredientRef:
    index: int


@dataclass(frozen=True)
class CookwareRef:
    index: int


@dataclass(frozen=True)
class TimerRef:
    index: int


@dataclass(frozen=True)
class InlineQuantityRef:
    index: int


Item = Union[Text, IngredientRef, CookwareRef, TimerRef, InlineQuantityRef]


@dataclass(frozen=True)
class Step:
    """
    Paso de una sección.

    `number` es el número que se muestra; no tiene por qué coincidir con
    la posición del paso dentro de `Section.content`.
    """

    number: int
    items: Tuple[Item, ...] = ()


Content = Union[Step, Text]


@dataclass(frozen=True)
class Section:
    name: Optional[str] = None
    content: Tuple[Content, ...] = ()


# ============================================================
# Escalado
# ============================================================

@dataclass(frozen=True)
class ScaleOutcome:
    """
    Cómo se resolvió el escalado de una ocurrencia de ingrediente.

    - scaled: escalado correctamente.
    - fixed: valor fijo, no se pudo escalar (requiere ajuste manual).
    - error: falló el escalado (`details` describe el error).
    - no_quantity: no había cantidad para escalar.
    """

    kind: OutcomeKind
    details: Optional[str] = None


@dataclass(frozen=True)
class ScaleTarget:
    """
    Objetivo del escalado.

    `index` es la posición del objetivo dentro de las alternativas de
    porciones de la receta; None si el objetivo no es ninguna de ellas.
    """

    target_servings: int
    index: Optional[int] = None


@dataclass(frozen=True)
class ScaleData:
    target: ScaleTarget
    outcomes: Tuple[Optional[ScaleOutcome], ...] = ()


@dataclass(frozen=True)
class GroupedIngredient:
    """
    Ingrediente agregado para toda la receta.

    `index` apunta a la definición dentro de `Recipe.ingredients`.
    `outcome` es None si la receta no fue escalada.
    """

    index: int
    ingredient: Ingredient
    quantities: List[Quantity]
    outcome: Optional[ScaleOutcome] = None


# ============================================================
# Metadata
# ============================================================

@dataclass(frozen=True)
class NameAndUrl:
    name: Optional[str] = None
    url: Optional[str] = None

    def display(self) -> str:
        return self.name or self.url or "-"


@dataclass(frozen=True)
class RecipeTime:
    """
    Tiempo de la receta en minutos.

    Si solo hay `total_minutes` es la forma "total"; si hay preparación
    y/o cocción es la forma compuesta y el total es la suma.
    """

    total_minutes: Optional[int] = None
    prep_minutes: Optional[int] = None
    cook_minutes: Optional[int] = None

    @property
    def is_composed(self) -> bool:
        return self.prep_minutes is not None or self.cook_minutes is not None

    def total(self) -> int:
        if self.is_composed:
            return (self.prep_minutes or 0) + (self.cook_minutes or 0)
        return self.total_minutes or 0


@dataclass(frozen=True)
class RecipeMetadata:
    """
    Metadata ya extraída de la receta.

    `extra` conserva el orden de inserción: el orden de display importa.
    """

    emoji: Optional[str] = None
    tags: Tuple[str, ...] = ()
    description: Optional[str] = None
    author: Optional[NameAndUrl] = None
    source: Optional[NameAndUrl] = None
    time: Optional[RecipeTime] = None
    servings: Optional[Tuple[Union[int, str], ...]] = None
    extra: Dict[str, MetaValue] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not any(
            (
                self.emoji,
                self.tags,
                self.description,
                self.author,
                self.source,
                self.time,
                self.servings,
                self.extra,
            )
        )


# ============================================================
# Receta completa
# ============================================================

@dataclass(frozen=True)
class Recipe:
    """
    Receta completa, parseada y (opcionalmente) escalada.

    `default_scaled` indica que la receta se muestra en su escala por
    defecto: la primera alternativa de porciones es la activa.
    """

    sections: Tuple[Section, ...] = ()
    ingredients: Tuple[Ingredient, ...] = ()
    cookware: Tuple[Cookware, ...] = ()
    timers: Tuple[Timer, ...] = ()
    inline_quantities: Tuple[Quantity, ...] = ()
    metadata: RecipeMetadata = field(default_factory=RecipeMetadata)
    scale_data: Optional[ScaleData] = None
    default_scaled: bool = False

    def outcome_for(self, index: int) -> Optional[ScaleOutcome]:
        if self.scale_data is None or index >= len(self.scale_data.outcomes):
            return None
        return self.scale_data.outcomes[index]
