"""Interface for ``python -m valkey_rest``."""

import sys
from argparse import ArgumentParser
from typing import TYPE_CHECKING

from valkey_rest import __version__
from valkey_rest.config import get_settings
from valkey_rest.infrastructure.observability import setup_logging
from valkey_rest.lifecycle import run

if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = ["main"]


def main(args: "Sequence[str] | None" = None) -> int:
    """Parse CLI overrides, configure logging and serve until signalled."""
    parser = ArgumentParser(prog="valkey-rest", description="Valkey REST gateway")
    _ = parser.add_argument("-v", "--version", action="version", version=__version__)
    _ = parser.add_argument("--host", help="bind address (overrides HOST)")
    _ = parser.add_argument("--port", type=int, help="listening port (overrides PORT)")
    options = parser.parse_args(args)

    settings = get_settings()
    overrides = {
        name: value
        for name, value in (("host", options.host), ("port", options.port))
        if value is not None
    }
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings.log_level, settings.log_format)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
