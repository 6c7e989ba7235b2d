"""Unit tests for FileSystemGateway."""

from pathlib import Path

from handlergen.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestFileSystemGateway:
    """Test pathlib-backed file operations."""

    def test_write_then_read(self, tmp_path: Path) -> None:
        gateway = FileSystemGateway()
        target = str(tmp_path / "counter_handler.py")
        gateway.write_text(target, "x = 1\n")
        assert gateway.exists(target)
        assert gateway.read_text(target) == "x = 1\n"

    def test_make_dirs_is_idempotent(self, tmp_path: Path) -> None:
        gateway = FileSystemGateway()
        nested = str(tmp_path / "gen" / "handlers")
        gateway.make_dirs(nested)
        gateway.make_dirs(nested)
        assert Path(nested).is_dir()

    def test_derive_output_path_next_to_source(self) -> None:
        gateway = FileSystemGateway()
        assert gateway.derive_output_path("src/app/counter.py", "_handler") == str(
            Path("src/app/counter_handler.py")
        )

    def test_derive_output_path_in_output_dir(self) -> None:
        gateway = FileSystemGateway()
        assert gateway.derive_output_path("src/app/counter.py", "_gen", "build") == str(
            Path("build/counter_gen.py")
        )
