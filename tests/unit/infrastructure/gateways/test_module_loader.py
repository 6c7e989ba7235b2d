"""Unit tests for ModuleLoader."""

import pytest

from handlergen.domain.errors import MalformedModuleError
from handlergen.infrastructure.gateways.module_loader import ModuleLoader
from tests.unit.handler_sources import BANK_SOURCE, COUNTER_SOURCE


class TestLoadModule:
    """Test parsing of handler modules."""

    def test_parses_valid_module(self) -> None:
        module = ModuleLoader.load_module(COUNTER_SOURCE)
        assert module.code == COUNTER_SOURCE

    def test_syntax_error_is_malformed(self) -> None:
        with pytest.raises(MalformedModuleError):
            ModuleLoader.load_module("class Counter(:\n")

    @pytest.mark.parametrize("source", ["", "\n\n", "# only a comment\n"])
    def test_module_without_declarations_is_malformed(self, source: str) -> None:
        with pytest.raises(MalformedModuleError):
            ModuleLoader.load_module(source)


class TestFindHandlerBlocks:
    """Test syntactic handler matching."""

    def test_matches_top_level_class_by_name(self) -> None:
        module = ModuleLoader.load_module(COUNTER_SOURCE)
        assert ModuleLoader.find_handler_blocks(module, "Counter") == [1]

    def test_other_classes_are_ignored(self) -> None:
        module = ModuleLoader.load_module(BANK_SOURCE)
        assert ModuleLoader.find_handler_blocks(module, "Bank") == [1]
        assert ModuleLoader.find_handler_blocks(module, "Auditor") == [2]

    def test_nested_class_is_not_matched(self) -> None:
        source = "class Outer:\n    class Counter:\n        pass\n"
        module = ModuleLoader.load_module(source)
        assert ModuleLoader.find_handler_blocks(module, "Counter") == []

    def test_multiple_blocks_are_all_matched(self) -> None:
        source = "class Counter:\n    pass\n\nx = 1\n\nclass Counter:\n    pass\n"
        module = ModuleLoader.load_module(source)
        assert ModuleLoader.find_handler_blocks(module, "Counter") == [0, 2]


class TestTopLevelNames:
    """Test collection of names bound at module level."""

    def test_collects_classes_functions_and_assignments(self) -> None:
        source = "A = 1\nB: int = 2\ndef f():\n    pass\nclass C:\n    pass\n"
        module = ModuleLoader.load_module(source)
        assert ModuleLoader.top_level_names(module) == {"A", "B", "f", "C"}

    def test_collects_import_bindings(self) -> None:
        source = (
            "import os\n"
            "import os.path\n"
            "import numpy as np\n"
            "from app.clients import CounterClient, Ledger as L\n"
            "from app.wildcard import *\n"
        )
        module = ModuleLoader.load_module(source)
        assert ModuleLoader.top_level_names(module) == {"os", "np", "CounterClient", "L"}
