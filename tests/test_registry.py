from core.registry import DEFAULTS, api_key, load_config, load_enabled_modules, nav_modules


def test_defaults_without_file(tmp_path):
    cfg = load_config(str(tmp_path / "missing.toml"))
    assert cfg["analysis"]["default_location"] == "Global"
    assert cfg["app"] == DEFAULTS["app"]


def test_file_overrides_merge_with_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[analysis]\ntimeout_seconds = 30\n\n[modules.trends]\nenabled = true\n', encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg["analysis"]["timeout_seconds"] == 30
    assert cfg["analysis"]["model"] == DEFAULTS["analysis"]["model"]
    assert cfg["modules"] == {"trends": {"enabled": True}}


def test_modules_load_in_order_and_respect_flags():
    cfg = {
        "modules": {
            "report": {"enabled": True, "order": 3, "nav": False},
            "trends": {"enabled": True, "order": 2},
            "dashboard": {"enabled": True, "order": 1},
            "upload": {"enabled": False, "order": 0},
        }
    }
    mods = load_enabled_modules(cfg)
    assert [m.id for m in mods] == ["dashboard", "trends", "report"]
    assert [m.id for m in nav_modules(cfg, mods)] == ["dashboard", "trends"]
    assert all(callable(m.render) for m in mods)


def test_api_key_prefers_gemini_variable(monkeypatch):
    monkeypatch.setenv("API_KEY", "fallback")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert api_key() == "fallback"
    monkeypatch.setenv("GEMINI_API_KEY", "primary")
    assert api_key() == "primary"
