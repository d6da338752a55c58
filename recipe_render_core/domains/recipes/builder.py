"""
Builder para recetas ya parseadas.

Convierte un JSON con el modelo de la receta (secciones, pasos, arrays de
ingredientes/utensilios/timers/cantidades, metadata y datos de escalado)
a las dataclasses de `models.py`.

Es la frontera "upstream" del renderer: acá se validan UNA vez los
invariantes que el render da por garantizados (índices en rango, timers con
cantidad o nombre, referencias a pasos que apuntan a pasos).

Formato de cantidades
---------------------
Una cantidad puede venir como objeto `{"value": 200, "unit": "g"}` o como
valor suelto (`2`, `"una pizca"`).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, get_args

from .models import (
    ComponentRelation,
    Content,
    Cookware,
    CookwareRef,
    Ingredient,
    IngredientRef,
    InlineQuantityRef,
    Item,
    MetaValue,
    Modifier,
    NameAndUrl,
    Quantity,
    Recipe,
    RecipeContractError,
    RecipeMetadata,
    RecipeTime,
    ReferenceTarget,
    ScaleData,
    ScaleOutcome,
    ScaleTarget,
    Section,
    Step,
    Text,
    Timer,
    TimerRef,
)

logger = logging.getLogger(__name__)

_MODIFIERS = frozenset(get_args(Modifier))
_TARGETS = frozenset(get_args(ReferenceTarget))
_OUTCOMES = frozenset({"scaled", "fixed", "error", "no_quantity"})


def _opt_str(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _require_dict(raw: Any, what: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise RecipeContractError(f"{what} debe ser un objeto JSON, se recibió {raw!r}")
    return raw


def _int(raw: Any, what: str) -> int:
    if raw is None or isinstance(raw, bool):
        raise RecipeContractError(f"{what} debe ser un entero, se recibió {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise RecipeContractError(f"{what} debe ser un entero, se recibió {raw!r}") from e


def _is_quantity_value(raw: Any) -> bool:
    return isinstance(raw, (int, float, str)) and not isinstance(raw, bool)


def _parse_quantity(raw: Any) -> Optional[Quantity]:
    if raw is None:
        return None
    if isinstance(raw, dict):
        if not _is_quantity_value(raw.get("value")):
            raise RecipeContractError(f"Cantidad sin 'value' válido: {raw!r}")
        return Quantity(value=raw["value"], unit=_opt_str(raw.get("unit")))
    if _is_quantity_value(raw):
        return Quantity(value=raw)
    raise RecipeContractError(f"Cantidad inválida: {raw!r}")


def _parse_inline_quantity(raw: Any) -> Quantity:
    quantity = _parse_quantity(raw)
    if quantity is None:
        raise RecipeContractError("Las cantidades inline no pueden ser null")
    return quantity


def _parse_modifiers(raw: Any) -> frozenset:
    modifiers = frozenset(str(m).strip() for m in raw or [])
    unknown = modifiers - _MODIFIERS
    if unknown:
        raise RecipeContractError(f"Modificadores desconocidos: {sorted(unknown)}")
    return modifiers


def _parse_relation(raw: Any) -> ComponentRelation:
    if raw is None:
        return ComponentRelation()
    raw = _require_dict(raw, "La relación")
    target = str(raw.get("target", "ingredient")).strip()
    if target not in _TARGETS:
        raise RecipeContractError(f"Destino de referencia desconocido: {target!r}")
    references_to = raw.get("references_to")
    referenced_from = raw.get("referenced_from") or []
    if not isinstance(referenced_from, list):
        raise RecipeContractError(f"'referenced_from' debe ser una lista: {referenced_from!r}")
    return ComponentRelation(
        references_to=_int(references_to, "references_to") if references_to is not None else None,
        target=target,  # type: ignore[arg-type]
        referenced_from=tuple(_int(i, "referenced_from") for i in referenced_from),
    )


def _parse_ingredient(raw: Any) -> Ingredient:
    raw = _require_dict(raw, "El ingrediente")
    return Ingredient(
        name=str(raw.get("name", "")).strip(),
        alias=_opt_str(raw.get("alias")),
        quantity=_parse_quantity(raw.get("quantity")),
        note=_opt_str(raw.get("note")),
        modifiers=_parse_modifiers(raw.get("modifiers")),
        relation=_parse_relation(raw.get("relation")),
    )


def _parse_cookware(raw: Any) -> Cookware:
    raw = _require_dict(raw, "El utensilio")
    return Cookware(
        name=str(raw.get("name", "")).strip(),
        alias=_opt_str(raw.get("alias")),
        quantity=_parse_quantity(raw.get("quantity")),
        note=_opt_str(raw.get("note")),
        modifiers=_parse_modifiers(raw.get("modifiers")),
        relation=_parse_relation(raw.get("relation")),
    )


def _parse_timer(raw: Any) -> Timer:
    raw = _require_dict(raw, "El timer")
    return Timer(quantity=_parse_quantity(raw.get("quantity")), name=_opt_str(raw.get("name")))


def _parse_item(raw: Any) -> Item:
    raw = _require_dict(raw, "El item")
    kind = raw.get("type")
    if kind == "text":
        return Text(value=str(raw.get("value", "")))
    if kind == "ingredient":
        return IngredientRef(index=_int(raw.get("index"), "El índice del ingrediente"))
    if kind == "cookware":
        return CookwareRef(index=_int(raw.get("index"), "El índice del utensilio"))
    if kind == "timer":
        return TimerRef(index=_int(raw.get("index"), "El índice del timer"))
    if kind == "inline_quantity":
        return InlineQuantityRef(index=_int(raw.get("index"), "El índice de la cantidad"))
    raise RecipeContractError(f"Tipo de item desconocido: {kind!r}")


def _parse_content(raw: Any) -> Content:
    raw = _require_dict(raw, "El contenido de la sección")
    kind = raw.get("type")
    if kind == "step":
        items = raw.get("items") or []
        if not isinstance(items, list):
            raise RecipeContractError(f"Los items del paso deben ser una lista: {items!r}")
        return Step(
            number=_int(raw.get("number") or 0, "El número de paso"),
            items=tuple(_parse_item(i) for i in items),
        )
    if kind == "text":
        return Text(value=str(raw.get("value", "")))
    raise RecipeContractError(f"Tipo de contenido desconocido: {kind!r}")


def _parse_name_and_url(raw: Any) -> Optional[NameAndUrl]:
    if raw is None:
        return None
    if isinstance(raw, dict):
        return NameAndUrl(name=_opt_str(raw.get("name")), url=_opt_str(raw.get("url")))
    return NameAndUrl(name=_opt_str(raw))


def _parse_time(raw: Any) -> Optional[RecipeTime]:
    if raw is None:
        return None
    if isinstance(raw, dict):
        def minutes(key: str) -> Optional[int]:
            value = raw.get(key)
            return _int(value, f"El tiempo {key!r}") if value is not None else None

        return RecipeTime(
            total_minutes=minutes("total"),
            prep_minutes=minutes("prep"),
            cook_minutes=minutes("cook"),
        )
    return RecipeTime(total_minutes=_int(raw, "El tiempo"))


def _parse_metadata(raw: Any) -> RecipeMetadata:
    raw = _require_dict(raw, "La metadata")
    servings = raw.get("servings")
    if servings is not None and not isinstance(servings, list):
        servings = [servings]

    extra: Dict[str, MetaValue] = {}
    for key, value in _require_dict(raw.get("extra") or {}, "La metadata extra").items():
        if not isinstance(value, (str, int, float, bool)):
            logger.debug(f"Metadata '{key}' ignorada: no es un valor escalar")
            continue
        extra[str(key)] = value

    tags = raw.get("tags") or []
    return RecipeMetadata(
        emoji=_opt_str(raw.get("emoji")),
        tags=tuple(str(t).strip() for t in tags if str(t).strip()),
        description=_opt_str(raw.get("description")),
        author=_parse_name_and_url(raw.get("author")),
        source=_parse_name_and_url(raw.get("source")),
        time=_parse_time(raw.get("time")),
        servings=tuple(servings) if servings else None,
        extra=extra,
    )


def _parse_outcome(raw: Any) -> Optional[ScaleOutcome]:
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = {"kind": raw}
    raw = _require_dict(raw, "El resultado de escalado")
    kind = str(raw.get("kind", "")).strip()
    if kind not in _OUTCOMES:
        raise RecipeContractError(f"Resultado de escalado desconocido: {kind!r}")
    return ScaleOutcome(kind=kind, details=_opt_str(raw.get("details")))  # type: ignore[arg-type]


def _parse_scale(raw: Any) -> Optional[ScaleData]:
    if not raw:
        return None
    raw = _require_dict(raw, "El escalado")
    index = raw.get("index")
    return ScaleData(
        target=ScaleTarget(
            target_servings=_int(raw.get("target_servings"), "target_servings"),
            index=_int(index, "El índice de porciones") if index is not None else None,
        ),
        outcomes=tuple(_parse_outcome(o) for o in raw.get("outcomes", [])),
    )


def _check_index(kind: str, index: int, size: int) -> None:
    if not 0 <= index < size:
        raise RecipeContractError(f"Índice de {kind} fuera de rango: {index} (hay {size})")


def validate_recipe(recipe: Recipe) -> None:
    """
    Verifica los invariantes que el renderer asume.

    Raises
    ------
    RecipeContractError
        Ante el primer invariante violado.
    """
    for i, timer in enumerate(recipe.timers):
        if timer.quantity is None and timer.name is None:
            raise RecipeContractError(f"El timer {i} no tiene cantidad ni nombre")

    for kind, components in (("ingredient", recipe.ingredients), ("cookware", recipe.cookware)):
        for component in components:
            relation = component.relation
            for ref in relation.referenced_from:
                _check_index(kind, ref, len(components))
            if relation.references_to is None:
                continue
            if relation.target == "ingredient":
                _check_index(kind, relation.references_to, len(components))
            elif relation.target == "section":
                _check_index("section", relation.references_to, len(recipe.sections))

    sizes = {
        IngredientRef: ("ingredient", len(recipe.ingredients)),
        CookwareRef: ("cookware", len(recipe.cookware)),
        TimerRef: ("timer", len(recipe.timers)),
        InlineQuantityRef: ("inline quantity", len(recipe.inline_quantities)),
    }
    for section in recipe.sections:
        for content in section.content:
            if not isinstance(content, Step):
                continue
            for item in content.items:
                if isinstance(item, Text):
                    continue
                kind, size = sizes[type(item)]
                _check_index(kind, item.index, size)
                if not isinstance(item, IngredientRef):
                    continue
                relation = recipe.ingredients[item.index].relation
                if relation.references_to is not None and relation.target == "step":
                    _check_index("step", relation.references_to, len(section.content))
                    if not isinstance(section.content[relation.references_to], Step):
                        raise RecipeContractError(
                            f"La referencia al paso {relation.references_to} apunta a un texto"
                        )


class RecipeBuilder:
    """
    Builder de `Recipe` a partir de JSON.
    """

    def parse_document(self, json_str: str) -> Recipe:
        """
        Parsea el JSON de una receta a un `Recipe` validado.

        Raises
        ------
        json.JSONDecodeError
            Si el texto no es JSON válido.
        RecipeContractError
            Si el documento no respeta el modelo.
        """
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise RecipeContractError("El documento de receta debe ser un objeto JSON")
        return self.build(data)

    def build(self, data: Dict[str, Any]) -> Recipe:
        """Construye y valida un `Recipe` desde un dict ya decodificado."""
        sections: List[Section] = []
        for raw in data.get("sections", []):
            raw = _require_dict(raw, "La sección")
            sections.append(
                Section(
                    name=_opt_str(raw.get("name")),
                    content=tuple(_parse_content(c) for c in raw.get("content", [])),
                )
            )

        timers: Tuple[Timer, ...] = tuple(
            _parse_timer(t) for t in data.get("timers", [])
        )

        recipe = Recipe(
            sections=tuple(sections),
            ingredients=tuple(_parse_ingredient(i) for i in data.get("ingredients", [])),
            cookware=tuple(_parse_cookware(c) for c in data.get("cookware", [])),
            timers=timers,
            inline_quantities=tuple(
                _parse_inline_quantity(r) for r in data.get("inline_quantities", [])
            ),
            metadata=_parse_metadata(data.get("metadata") or {}),
            scale_data=_parse_scale(data.get("scale")),
            default_scaled=bool(data.get("default_scaled", False)),
        )
        validate_recipe(recipe)
        logger.debug(
            f"Receta construida: {len(recipe.sections)} secciones, "
            f"{len(recipe.ingredients)} ingredientes"
        )
        return recipe


def load_recipe(path: Path) -> Recipe:
    """Lee y parsea un archivo JSON de receta."""
    return RecipeBuilder().parse_document(Path(path).read_text(encoding="utf-8"))
