from recipe_render_core.core.sinks import ListSink
from recipe_render_core.domains.recipes.models import (
    ComponentRelation,
    Cookware,
    Ingredient,
    Quantity,
    Recipe,
    ScaleData,
    ScaleOutcome,
    ScaleTarget,
)
from recipe_render_core.domains.recipes.quantities import format_value, merge_quantities
from recipe_render_core.domains.recipes.tables import (
    format_rows,
    group_cookware_amounts,
    group_ingredients,
    write_cookware_table,
    write_ingredients_table,
)


class GramsConverter:
    """Conversor mínimo kg -> g para tests."""

    def convert(self, quantity, unit):
        if quantity.unit == "kg" and unit == "g":
            return Quantity(quantity.value * 1000, "g")
        return None


def _scaled(ingredients, outcomes):
    return Recipe(
        ingredients=tuple(ingredients),
        scale_data=ScaleData(target=ScaleTarget(4, 1), outcomes=tuple(outcomes)),
    )


def _ingredients_table(recipe, context):
    sink = ListSink()
    write_ingredients_table(recipe, context, sink)
    return sink.lines


def test_format_value_trims_decimals():
    assert format_value(2) == "2"
    assert format_value(2.0) == "2"
    assert format_value(0.5) == "0.5"
    assert format_value(1 / 3) == "0.333"
    assert format_value("a pinch") == "a pinch"


def test_merge_adds_same_unit_and_keeps_text_apart():
    merged = merge_quantities(
        [Quantity(100, "g"), Quantity("a pinch"), Quantity(50, "g"), Quantity(2, "cups")]
    )
    assert merged == [Quantity(150, "g"), Quantity("a pinch"), Quantity(2, "cups")]


def test_merge_uses_converter_for_different_units():
    merged = merge_quantities([Quantity(200, "g"), Quantity(1, "kg")], GramsConverter())
    assert merged == [Quantity(1200, "g")]


def test_references_fold_into_their_definition():
    recipe = Recipe(
        ingredients=(
            Ingredient("flour", quantity=Quantity(200, "g"), relation=ComponentRelation(referenced_from=(1,))),
            Ingredient(
                "flour",
                quantity=Quantity(50, "g"),
                modifiers=frozenset({"reference"}),
                relation=ComponentRelation(references_to=0),
            ),
            Ingredient("egg", quantity=Quantity(2)),
        )
    )
    grouped = group_ingredients(recipe)

    assert [g.index for g in grouped] == [0, 2]
    assert grouped[0].quantities == [Quantity(250, "g")]
    assert grouped[0].outcome is None


def test_outcomes_merge_with_error_first():
    recipe = _scaled(
        [
            Ingredient("flour", relation=ComponentRelation(referenced_from=(1,))),
            Ingredient("flour", relation=ComponentRelation(references_to=0)),
        ],
        [ScaleOutcome("scaled"), ScaleOutcome("error", "bad unit")],
    )
    assert group_ingredients(recipe)[0].outcome == ScaleOutcome("error", "bad unit")


def test_table_rows_and_markers(context):
    recipe = Recipe(
        ingredients=(
            Ingredient("flour", quantity=Quantity(200, "g")),
            Ingredient("basil", quantity=Quantity(3), note="fresh", modifiers=frozenset({"optional"})),
            Ingredient("secret", modifiers=frozenset({"hidden"})),
        )
    )
    lines = _ingredients_table(recipe, context)

    assert lines[0] == "Ingredients:"
    assert lines[1].startswith("  flour")
    assert "200 g" in lines[1]
    assert "(optional)" in lines[2] and "(fresh)" in lines[2]
    assert not any("secret" in line for line in lines)
    assert lines[-1] == ""
    assert lines[1].index("200 g") == lines[2].index("3")


def test_fixed_rows_share_one_legend_entry(context):
    recipe = _scaled(
        [Ingredient("salt", quantity=Quantity(1, "tsp")), Ingredient("yeast", quantity=Quantity(7, "g"))],
        [ScaleOutcome("fixed"), ScaleOutcome("fixed")],
    )
    lines = _ingredients_table(recipe, context)

    assert "1 tsp ⚠" in lines[1]
    assert "7 g ⚠" in lines[2]
    assert lines[3:] == ["", "⚠ fixed value", ""]
    assert sum(line.count("fixed value") for line in lines) == 1


def test_both_glyphs_listed_in_order(context):
    recipe = _scaled(
        [Ingredient("salt", quantity=Quantity(1, "tsp")), Ingredient("milk", quantity=Quantity(1, "cup"))],
        [ScaleOutcome("error", "no conversion"), ScaleOutcome("fixed")],
    )
    lines = _ingredients_table(recipe, context)

    assert "1 tsp ⯃" in lines[1]
    assert "⚠ fixed value | ⯃ error scaling" in lines


def test_scaled_rows_have_no_glyph(context):
    recipe = _scaled(
        [Ingredient("salt", quantity=Quantity(2, "tsp")), Ingredient("pepper")],
        [ScaleOutcome("scaled"), ScaleOutcome("no_quantity")],
    )
    lines = _ingredients_table(recipe, context)

    assert not any("⚠" in line or "⯃" in line for line in lines)
    assert lines[-1] == ""
    assert len(lines) == 4


def test_no_ingredients_writes_nothing(context):
    assert _ingredients_table(Recipe(), context) == []


def test_cookware_table(context):
    recipe = Recipe(
        cookware=(
            Cookware("pan", quantity=Quantity(1), relation=ComponentRelation(referenced_from=(1,))),
            Cookware(
                "pan",
                quantity=Quantity(1),
                modifiers=frozenset({"reference"}),
                relation=ComponentRelation(references_to=0),
            ),
            Cookware("whisk", note="metal", modifiers=frozenset({"optional"})),
        )
    )
    assert group_cookware_amounts(recipe.cookware, 0) == [Quantity(2)]

    sink = ListSink()
    write_cookware_table(recipe, context, sink)
    lines = sink.lines

    assert lines[0] == "Cookware:"
    assert len(lines) == 4
    assert lines[1].startswith("  pan") and lines[1].rstrip().endswith("2")
    assert "(optional)" in lines[2] and lines[2].endswith("(metal)")
    assert lines[-1] == ""


def test_format_rows_aligns_columns():
    lines = format_rows([("a", "", "1", ""), ("long name", "(optional)", "2", "(x)")])
    assert lines[0].index("1") == lines[1].index("2")
    assert lines[0] == lines[0].rstrip()


def test_hidden_cookware_is_not_listed(context):
    recipe = Recipe(
        cookware=(
            Cookware("oven", modifiers=frozenset({"hidden"})),
            Cookware("bowl", quantity=Quantity(2)),
        )
    )
    sink = ListSink()
    write_cookware_table(recipe, context, sink)

    assert sink.lines == ["Cookware:", "  bowl     2", ""]
