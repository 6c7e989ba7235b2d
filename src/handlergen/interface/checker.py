"""
Pylint plugin entry point: ``pylint --load-plugins=handlergen.interface.checker``.
"""

from pylint.lint import PyLinter

from handlergen.infrastructure.di.container import HandlergenContainer
from handlergen.use_cases.checks.markers import MarkerPlacementChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = HandlergenContainer.get_instance()
    linter.register_checker(MarkerPlacementChecker(linter, config_loader=container.get_config_loader()))
