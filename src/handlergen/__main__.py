"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging
import os

from handlergen.infrastructure.di.container import HandlergenContainer
from handlergen.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    # Telemetry already prints user-facing messages; the log stream is opt-in for debugging.
    log_level = os.environ.get("HANDLERGEN_LOG_LEVEL")
    if log_level:
        logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    container = HandlergenContainer()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        expander=container.get_expander(),
        console=container.get_console(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
