import pytest

from recipe_render_core.domains.recipes.context import RenderContext
from recipe_render_core.domains.recipes.profiles import COLOR_V1, PLAIN_V1, Painter


@pytest.fixture
def painter():
    """Painter sin colores: las aserciones leen texto plano."""
    return Painter(PLAIN_V1)


@pytest.fixture
def color_painter():
    return Painter(COLOR_V1)


@pytest.fixture
def context(painter):
    """Contexto de render de 80 columnas, texto plano."""
    return RenderContext(width=80, painter=painter)
