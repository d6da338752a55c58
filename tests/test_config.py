import pytest

from recipe_render_core.config import Settings, detect_terminal_width, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in (
        "RECIPE_RENDER_MAX_WIDTH",
        "RECIPE_RENDER_COLOR",
        "RECIPE_RENDER_COLOR_SYSTEM",
        "RECIPE_RENDER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    assert get_settings() == Settings()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RECIPE_RENDER_MAX_WIDTH", "60")
    monkeypatch.setenv("RECIPE_RENDER_COLOR", "Never")
    monkeypatch.setenv("RECIPE_RENDER_LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.max_width == 60
    assert settings.color == "never"
    assert settings.log_level == "DEBUG"


def test_settings_are_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize("name, value", [("RECIPE_RENDER_MAX_WIDTH", "wide"), ("RECIPE_RENDER_COLOR", "rainbow")])
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        get_settings()


def test_terminal_width_is_capped(monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    assert detect_terminal_width(Settings(max_width=80)) == 80

    monkeypatch.setenv("COLUMNS", "40")
    assert detect_terminal_width(Settings(max_width=80)) == 40
