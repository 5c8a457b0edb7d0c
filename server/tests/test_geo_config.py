from server.config import env_bool, get_settings, reset_settings_cache


def test_defaults_when_env_missing():
    settings = get_settings()
    assert settings.max_points == 50_000
    assert settings.default_cluster_radius_m == 100.0
    assert settings.default_geohash_precision == 7
    assert settings.default_heatmap_grid_m == 500.0
    assert settings.require_api_key is False
    assert settings.api_keys == frozenset()


def test_env_parsing_handles_invalid(monkeypatch):
    monkeypatch.setenv("GEO_MAX_POINTS", "lots")
    monkeypatch.setenv("GEO_DEFAULT_CLUSTER_RADIUS_M", "wide")
    reset_settings_cache()
    settings = get_settings()
    assert settings.max_points == 50_000
    assert settings.default_cluster_radius_m == 100.0


def test_env_parsing_accepts_valid_values(monkeypatch):
    monkeypatch.setenv("GEO_MAX_POINTS", "10")
    monkeypatch.setenv("GEO_DEFAULT_HEATMAP_GRID_M", "42.5")
    monkeypatch.setenv("API_KEY", "a, b,,c")
    reset_settings_cache()
    settings = get_settings()
    assert settings.max_points == 10
    assert settings.default_heatmap_grid_m == 42.5
    assert settings.api_keys == frozenset({"a", "b", "c"})


def test_max_points_has_floor_of_one(monkeypatch):
    monkeypatch.setenv("GEO_MAX_POINTS", "0")
    reset_settings_cache()
    assert get_settings().max_points == 1


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("GEO_MAX_POINTS", "7")
    assert get_settings() is first
    reset_settings_cache()
    assert get_settings().max_points == 7


def test_env_bool_truthy_values(monkeypatch):
    monkeypatch.setenv("REQUIRE_API_KEY", "YeS")
    assert env_bool("REQUIRE_API_KEY") is True
    monkeypatch.setenv("REQUIRE_API_KEY", "off")
    assert env_bool("REQUIRE_API_KEY") is False
    assert env_bool("SOME_UNSET_FLAG_FOR_TESTS", True) is True
