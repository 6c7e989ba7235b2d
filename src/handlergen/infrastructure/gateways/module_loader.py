"""Parse a handler module and locate the class blocks of the declared handler."""

import logging

import libcst as cst

from handlergen.domain.errors import MalformedModuleError

logger = logging.getLogger(__name__)


class ModuleLoader:
    """Loads the module under expansion and matches handler blocks by identifier."""

    @staticmethod
    def load_module(source: str) -> cst.Module:
        """Parse source into a lossless CST. Unparseable or empty modules are fatal."""
        try:
            module = cst.parse_module(source)
        except cst.ParserSyntaxError as exc:
            raise MalformedModuleError(f"cannot parse handler module: {exc.message}") from exc
        if not module.body:
            raise MalformedModuleError("handler module has no declarations")
        return module

    @staticmethod
    def find_handler_blocks(module: cst.Module, handler: str) -> list[int]:
        """
        Return body indices of top-level classes named exactly ``handler``.

        Matching is purely syntactic: classes nested elsewhere or reachable only
        through an alias are not scanned.
        """
        indices = [
            i
            for i, stmt in enumerate(module.body)
            if isinstance(stmt, cst.ClassDef) and stmt.name.value == handler
        ]
        if not indices:
            logger.warning("No class named %s in module; no publish targets collected.", handler)
        else:
            logger.debug("Matched %d block(s) for handler %s.", len(indices), handler)
        return indices

    @staticmethod
    def top_level_names(module: cst.Module) -> set[str]:
        """Names bound by top-level class, function, import and simple assignment statements."""
        names: set[str] = set()
        for stmt in module.body:
            if isinstance(stmt, (cst.ClassDef, cst.FunctionDef)):
                names.add(stmt.name.value)
            elif isinstance(stmt, cst.SimpleStatementLine):
                for small in stmt.body:
                    if isinstance(small, cst.Assign):
                        for target in small.targets:
                            if isinstance(target.target, cst.Name):
                                names.add(target.target.value)
                    elif isinstance(small, cst.AnnAssign) and isinstance(small.target, cst.Name):
                        names.add(small.target.value)
                    elif isinstance(small, (cst.Import, cst.ImportFrom)) and not isinstance(
                        small.names, cst.ImportStar
                    ):
                        for alias in small.names:
                            bound = alias.evaluated_alias or alias.evaluated_name
                            # `import a.b` binds `a`.
                            names.add(bound if alias.asname else bound.split(".")[0])
        return names
