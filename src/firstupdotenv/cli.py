"""Command-line entry point evaluated by the shell prompt hook.

Stdout carries only the generated script; diagnostics go to stderr.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import MutableMapping
from typing import TextIO

from firstupdotenv.config import Settings
from firstupdotenv.errors import FirstUpDotEnvError
from firstupdotenv.fingerprint import ChangeDetector
from firstupdotenv.loader import EnvLoader, LoadResult
from firstupdotenv.secrets import build_resolver
from firstupdotenv.session import SessionState

PROG_NAME = "firstupdotenv"

logger = logging.getLogger(PROG_NAME)


def configure_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(f"{PROG_NAME}: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def run(environ: MutableMapping[str, str], cwd: str | None = None) -> LoadResult:
    """Load from *cwd* using *environ* as both configuration and session state.

    The resolved variables are written back into *environ* so processes
    started from here see them.
    """
    settings = Settings.from_environ(environ)
    configure_logging(settings.debug)

    loader = EnvLoader(
        resolver=build_resolver(settings),
        detector=ChangeDetector(enabled=settings.use_cache),
        filename=settings.env_filename,
        min_depth=settings.min_depth,
    )
    result = loader.load(cwd or os.getcwd(), SessionState.from_environ(environ))
    environ.update(result.environment)
    return result


def main() -> int:
    configure_logging()
    try:
        result = run(os.environ)
    except (OSError, FirstUpDotEnvError) as err:
        logger.error("%s", err)
        return 1

    sys.stdout.write(result.script.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
