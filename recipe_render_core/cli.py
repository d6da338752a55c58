"""
recipe_render_core.cli
======================

Punto de entrada mínimo para renderizar una receta desde un JSON:

1) Leer configuración (settings).
2) Cargar el modelo de la receta (`builder.load_recipe`).
3) Resolver el contexto de render (ancho, color) UNA vez.
4) Renderizar a stdout o a un archivo.

Notas importantes
-----------------
- Al escribir a archivo se usa texto plano salvo `--color always`:
  las secuencias ANSI solo tienen sentido en una terminal.
- El parseo del formato cooklang y el escalado NO son parte de este
  paquete; el JSON ya trae la receta parseada y escalada.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import COLOR_CHOICES, get_settings
from .core.sinks import StreamSink
from .domains.recipes.builder import load_recipe
from .domains.recipes.models import RecipeContractError
from .engine import build_render_context, render


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"se esperaba un entero, se recibió {raw!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"el ancho debe ser al menos 1, se recibió {value}")
    return value


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="recipe-render",
        description="Renderiza una receta (JSON ya parseado) como texto legible.",
    )
    parser.add_argument("recipe", type=Path, help="Archivo JSON con la receta")
    parser.add_argument("--name", help="Nombre a mostrar (default: nombre del archivo)")
    parser.add_argument("--output", "-o", type=Path, help="Escribir a un archivo en vez de stdout")
    parser.add_argument("--color", choices=COLOR_CHOICES, help="Forzar o desactivar colores")
    parser.add_argument(
        "--width",
        type=_positive_int,
        help="Ancho máximo de línea (con tope en RECIPE_RENDER_MAX_WIDTH)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Ejecuta la CLI.

    Returns
    -------
    int
        Código de salida (0 si todo salió bien).
    """
    args = _parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    if not args.recipe.exists():
        print(f"❌ Error: El archivo {args.recipe} no existe", file=sys.stderr)
        return 1

    try:
        recipe = load_recipe(args.recipe)
    except json.JSONDecodeError as e:
        print(f"❌ Error: {args.recipe} no es un JSON válido: {e}", file=sys.stderr)
        return 1
    except RecipeContractError as e:
        print(f"❌ Error: receta inválida en {args.recipe}: {e}", file=sys.stderr)
        return 1

    name = args.name or args.recipe.stem.replace("_", " ")

    color_mode = args.color or settings.color
    if color_mode == "always":
        color = True
    elif color_mode == "never":
        color = False
    else:
        color = args.output is None and sys.stdout.isatty()

    width = min(args.width, settings.max_width) if args.width is not None else None
    context = build_render_context(settings, color=color, width=width)
    logger.info(f"Renderizando '{name}' (ancho={context.width}, color={color})")

    if args.output is None:
        render(recipe, name, context, StreamSink(sys.stdout))
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8") as f:
        render(recipe, name, context, StreamSink(f))
    print(f"✅ Receta generada en: {args.output.resolve()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
