"""EnvLoader - discovery, resolution and script generation for one invocation."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from firstupdotenv.fingerprint import ChangeDetector, read_env_file
from firstupdotenv.models import EnvFile, LoadStatus
from firstupdotenv.parser import parse_env_text
from firstupdotenv.script import ShellScript, build_cleanup_script, build_load_script
from firstupdotenv.secrets import SecretResolver
from firstupdotenv.session import BOOKKEEPING_VARS, SessionState
from firstupdotenv.walker import DEFAULT_MIN_DEPTH, ENV_FILENAME, iter_env_candidates

logger = logging.getLogger(__name__)


class LoadResult(BaseModel):
    """Everything one run decided, before it is rendered for the shell."""

    status: LoadStatus
    env_file: EnvFile | None = None
    environment: dict[str, str] = Field(default_factory=dict)
    script: ShellScript = Field(default_factory=ShellScript)
    session: SessionState = Field(
        description="Session state once the parent shell has evaluated the script",
    )


class EnvLoader:
    """
    Runs the pipeline without touching the process environment: session
    state comes in as a value and the updated state goes out in the result.
    """

    def __init__(
        self,
        resolver: SecretResolver,
        detector: ChangeDetector | None = None,
        filename: str = ENV_FILENAME,
        min_depth: int = DEFAULT_MIN_DEPTH,
        boundary: Path | str | None = None,
    ) -> None:
        self.resolver = resolver
        self.detector = detector or ChangeDetector()
        self.filename = filename
        self.min_depth = min_depth
        self.boundary = boundary

    def load(self, cwd: Path | str, previous: SessionState) -> LoadResult:
        candidates = iter_env_candidates(
            cwd,
            self.filename,
            min_depth=self.min_depth,
            boundary=self.boundary,
        )
        for path in candidates:
            env_file = read_env_file(path)

            if self.detector.is_unchanged(env_file, previous):
                logger.debug("%s unchanged since last load, skipping", env_file.path)
                return LoadResult(
                    status=LoadStatus.unchanged,
                    env_file=env_file,
                    session=previous,
                )

            environment = self._resolve(env_file)
            if environment is None:
                logger.debug("%s has no assignments, continuing upward", env_file.path)
                continue

            logger.info("Loading %d variables from %s", len(environment), env_file.path)
            return LoadResult(
                status=LoadStatus.loaded,
                env_file=env_file,
                environment=environment,
                script=build_load_script(previous, environment, env_file),
                session=SessionState.for_loaded(list(environment), env_file),
            )

        logger.debug("No %s found above %s", self.filename, cwd)
        return LoadResult(
            status=LoadStatus.not_found,
            script=build_cleanup_script(previous),
            session=SessionState.empty(),
        )

    def _resolve(self, env_file: EnvFile) -> dict[str, str] | None:
        """Return the merged environment, or ``None`` for an empty file."""
        try:
            text = env_file.text
        except UnicodeDecodeError as err:
            raise OSError(f"{env_file.path}: not valid UTF-8: {err}") from err

        parsed = parse_env_text(text)
        if parsed.is_empty:
            return None

        environment = dict(parsed.assignments)
        # Secrets are merged last and win over same-named plain assignments.
        environment.update(self.resolver.resolve(parsed.references))

        for name in BOOKKEEPING_VARS:
            if environment.pop(name, None) is not None:
                logger.warning("Ignoring reserved variable %s in %s", name, env_file.path)
        return environment
