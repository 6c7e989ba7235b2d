"""Unit tests for ConfigFileLoader."""

from pathlib import Path

from handlergen.infrastructure.config_file_loader import ConfigFileLoader


def test_loads_nearest_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.handlergen]\ncontext_type = "Ctx"\n\n[tool.handlergen.handlers]\n"app/counter.py" = "Counter"\n\n'
        '[tool.ruff]\nline-length = 100\n',
        encoding="utf-8",
    )
    nested = tmp_path / "app" / "deep"
    nested.mkdir(parents=True)

    config, tool = ConfigFileLoader.load_config_from_fs(nested)

    assert config["context_type"] == "Ctx"
    assert config["handlers"] == {"app/counter.py": "Counter"}
    assert "ruff" in tool


def test_pyproject_without_section(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    config, tool = ConfigFileLoader.load_config_from_fs(tmp_path)
    assert config == {}
    assert tool == {}


def test_invalid_toml_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.handlergen]\ncontext_type = "Ctx"\n', encoding="utf-8")
    inner = tmp_path / "inner"
    inner.mkdir()
    (inner / "pyproject.toml").write_text("[tool.handlergen\n", encoding="utf-8")
    config, _ = ConfigFileLoader.load_config_from_fs(inner)
    assert config == {"context_type": "Ctx"}
