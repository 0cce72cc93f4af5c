from pathlib import Path

from backend.config import PROJECT_ROOT, Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.port == 3003
    assert settings.links_file == PROJECT_ROOT / "links.json"
    assert settings.cors_origins == ["*"]


def test_relative_paths_resolve_against_project_root():
    settings = Settings(_env_file=None, links_file=Path("data/links.json"))
    assert settings.links_file == (PROJECT_ROOT / "data" / "links.json").resolve()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LINKS_LINKS_FILE", str(tmp_path / "mine.json"))
    monkeypatch.setenv("LINKS_PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.links_file == tmp_path / "mine.json"
    assert settings.port == 8080


def test_env_file_is_read_from_project_root():
    assert Settings.model_config["env_file"] == PROJECT_ROOT / ".env"
