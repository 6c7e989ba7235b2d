"""Unit tests for Typer-based CLI interface."""

from pathlib import Path
from typing import Optional
from unittest.mock import Mock

from rich.console import Console
from rich.table import Table
from typer.testing import CliRunner

from handlergen.domain.config import ConfigurationLoader
from handlergen.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from handlergen.infrastructure.gateways.libcst_handler_gateway import LibCSTHandlerExpander
from handlergen.interface.cli import CLIAppFactory, CLIDependencies
from tests.unit.handler_sources import COUNTER_SOURCE

runner = CliRunner()


def _make_deps(config: Optional[dict] = None, **overrides) -> CLIDependencies:
    """Create CLIDependencies with the real pass, filesystem and console and a mock telemetry."""
    defaults: dict = {
        "config_loader": ConfigurationLoader(config or {}, {}),
        "telemetry": Mock(),
        "filesystem": FileSystemGateway(),
        "expander": LibCSTHandlerExpander(),
        "console": Console(),
    }
    defaults.update(overrides)
    return CLIDependencies(**defaults)


def _counter_module(tmp_path: Path) -> Path:
    source = tmp_path / "counter.py"
    source.write_text(COUNTER_SOURCE, encoding="utf-8")
    return source


class TestExpandCommand:
    """Test the expand command."""

    def test_prints_expansion_to_stdout(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["expand", str(source), "--handler", "Counter"])
        assert result.exit_code == 0
        assert "class CounterClient(interchain_core.handler.AccountClient):" in result.stdout
        assert source.read_text(encoding="utf-8") == COUNTER_SOURCE

    def test_writes_output_file(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        output = tmp_path / "counter_handler.py"
        deps = _make_deps()
        app = CLIAppFactory.create_app(deps)
        result = runner.invoke(app, ["expand", str(source), "-H", "Counter", "-o", str(output)])
        assert result.exit_code == 0
        assert "class CounterIncMsg:" in output.read_text(encoding="utf-8")
        deps.telemetry.step.assert_called_once()

    def test_in_place(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["expand", str(source), "-H", "Counter", "--in-place"])
        assert result.exit_code == 0
        assert "Counter.Init = type(None)" in source.read_text(encoding="utf-8")

    def test_handler_from_configuration(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        app = CLIAppFactory.create_app(_make_deps({"handlers": {str(source): "Counter"}}))
        result = runner.invoke(app, ["expand", str(source)])
        assert result.exit_code == 0
        assert "class CounterClientFactory(" in result.stdout

    def test_missing_handler_is_a_usage_error(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["expand", str(source)])
        assert result.exit_code == 2

    def test_check_without_target_is_a_usage_error(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["expand", str(source), "-H", "Counter", "--check"])
        assert result.exit_code == 2

    def test_check_reports_stale_output(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        output = tmp_path / "counter_handler.py"
        output.write_text("stale\n", encoding="utf-8")
        deps = _make_deps()
        app = CLIAppFactory.create_app(deps)
        result = runner.invoke(app, ["expand", str(source), "-H", "Counter", "-o", str(output), "--check"])
        assert result.exit_code == 1
        assert output.read_text(encoding="utf-8") == "stale\n"
        deps.telemetry.error.assert_called_once()

    def test_expansion_error_exits_1(self, tmp_path: Path) -> None:
        source = tmp_path / "broken.py"
        source.write_text("class Counter:\n    @publish\n    def add(self, *args: int): ...\n", encoding="utf-8")
        deps = _make_deps()
        app = CLIAppFactory.create_app(deps)
        result = runner.invoke(app, ["expand", str(source), "-H", "Counter"])
        assert result.exit_code == 1
        assert "expected identifier" in deps.telemetry.error.call_args.args[0]


class TestInspectCommand:
    """Test the inspect command."""

    def test_lists_targets(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["inspect", str(source), "-H", "Counter"])
        assert result.exit_code == 0
        assert "CounterIncMsg" in result.stdout
        assert "on_create" in result.stdout

    def test_table_goes_to_injected_console(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        deps = _make_deps(console=Mock())
        app = CLIAppFactory.create_app(deps)
        result = runner.invoke(app, ["inspect", str(source), "-H", "Counter"])
        assert result.exit_code == 0
        assert result.stdout == ""
        deps.console.print.assert_called_once()
        table = deps.console.print.call_args.args[0]
        assert isinstance(table, Table)
        assert table.row_count == 3

    def test_warns_when_handler_is_missing(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        deps = _make_deps()
        app = CLIAppFactory.create_app(deps)
        result = runner.invoke(app, ["inspect", str(source), "-H", "Bank"])
        assert result.exit_code == 0
        deps.telemetry.warning.assert_called_once()


class TestBuildCommand:
    """Test the build command."""

    def test_builds_then_checks(self, tmp_path: Path) -> None:
        source = _counter_module(tmp_path)
        deps = _make_deps({"handlers": {str(source): "Counter"}})
        app = CLIAppFactory.create_app(deps)

        result = runner.invoke(app, ["build"])
        assert result.exit_code == 0
        generated = tmp_path / "counter_handler.py"
        assert "class CounterClient(" in generated.read_text(encoding="utf-8")
        deps.telemetry.handshake.assert_called_once()

        assert runner.invoke(app, ["build", "--check"]).exit_code == 0

        generated.write_text("stale\n", encoding="utf-8")
        assert runner.invoke(app, ["build", "--check"]).exit_code == 1

    def test_failed_module_exits_1(self, tmp_path: Path) -> None:
        source = tmp_path / "empty.py"
        source.write_text("", encoding="utf-8")
        app = CLIAppFactory.create_app(_make_deps({"handlers": {str(source): "Counter"}}))
        assert runner.invoke(app, ["build"]).exit_code == 1

    def test_nothing_configured(self) -> None:
        deps = _make_deps()
        app = CLIAppFactory.create_app(deps)
        result = runner.invoke(app, ["build"])
        assert result.exit_code == 0
        deps.telemetry.warning.assert_called_once()
