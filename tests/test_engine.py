import json

from recipe_render_core import build_render_context, render_to_string
from recipe_render_core.config import Settings
from recipe_render_core.core.wrapping import display_width
from recipe_render_core.domains.recipes.builder import RecipeBuilder

PASTA = {
    "metadata": {
        "emoji": "🍝",
        "tags": ["italian", "dinner"],
        "description": "A quick weeknight pasta.",
        "author": {"name": "Ana"},
        "time": {"prep": 10, "cook": 20},
        "servings": [2, 4],
    },
    "ingredients": [
        {"name": "pasta", "quantity": {"value": 200, "unit": "g"}},
        {"name": "salt"},
        {"name": "salt", "quantity": {"value": 1, "unit": "tsp"}},
        {"name": "parmesan", "note": "grated", "modifiers": ["optional"]},
        {
            "name": "pasta",
            "modifiers": ["intermediate_reference"],
            "relation": {"references_to": 0, "target": "step"},
        },
    ],
    "cookware": [{"name": "pot"}],
    "timers": [{"quantity": {"value": 10, "unit": "min"}}],
    "sections": [
        {
            "content": [
                {
                    "type": "step",
                    "number": 1,
                    "items": [
                        {"type": "text", "value": "Boil "},
                        {"type": "ingredient", "index": 0},
                        {"type": "text", "value": " in a "},
                        {"type": "cookware", "index": 0},
                        {"type": "text", "value": " for "},
                        {"type": "timer", "index": 0},
                        {"type": "text", "value": "."},
                    ],
                },
                {
                    "type": "step",
                    "number": 2,
                    "items": [
                        {"type": "text", "value": "Season the "},
                        {"type": "ingredient", "index": 4},
                        {"type": "text", "value": " with "},
                        {"type": "ingredient", "index": 1},
                        {"type": "text", "value": ", more "},
                        {"type": "ingredient", "index": 2},
                        {"type": "text", "value": " and "},
                        {"type": "ingredient", "index": 3},
                        {"type": "text", "value": "."},
                    ],
                },
                {"type": "text", "value": "Serve immediately."},
            ]
        }
    ],
    "scale": {"target_servings": 4, "index": 1, "outcomes": ["scaled", "no_quantity", "fixed", "no_quantity", None]},
}


def _context(width=80, color=False):
    return build_render_context(Settings(), color=color, width=width)


def test_render_full_document():
    recipe = RecipeBuilder().parse_document(json.dumps(PASTA))
    text = render_to_string(recipe, "Pasta", _context())
    lines = text.splitlines()

    assert lines[0] == " 🍝 Pasta "
    assert lines[1] == "#italian #dinner"
    assert "│ A quick weeknight pasta." in lines
    assert "servings: 2|[4]" in lines
    assert "total time: 30m" in lines

    assert lines.index("Ingredients:") < lines.index("Cookware:") < lines.index("Steps:")
    assert "⚠ fixed value" in lines
    assert not any("⯃" in line for line in lines)

    assert " 1. Boil pasta in a pot for 10 min." in lines
    assert "     [pasta: 200 g]" in lines
    assert " 2. Season the pasta with salt₁, more salt₂ and parmesan." in lines
    assert "     [pasta from step 1, salt₂: 1 tsp, parmesan (opt)]" in lines
    assert "  Serve immediately." in lines
    assert text.endswith("\n")


def test_ingredient_table_lists_definitions_only():
    recipe = RecipeBuilder().parse_document(json.dumps(PASTA))
    lines = render_to_string(recipe, "Pasta", _context()).splitlines()
    start = lines.index("Ingredients:")
    table = lines[start + 1:lines.index("Cookware:")]

    names = [row.split()[0] for row in table if row.startswith("  ")]
    assert names == ["pasta", "salt", "salt", "parmesan"]


def test_color_output_respects_width():
    recipe = RecipeBuilder().parse_document(json.dumps(PASTA))
    text = render_to_string(recipe, "Pasta", _context(width=30, color=True))

    lines = text.splitlines()
    steps = lines[next(i for i, line in enumerate(lines) if line.endswith("Steps:")):]

    assert "\x1b[" in text
    assert len(steps) > 4
    assert all(display_width(line) <= 30 for line in steps)


def test_context_width_is_capped_by_settings():
    context = build_render_context(Settings(max_width=50), color=False)
    assert 1 <= context.width <= 50
    assert not context.painter.enabled
