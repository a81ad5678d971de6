"""Line parser for ``firstup.env`` files and secret payloads."""

from __future__ import annotations

import logging
import re

from firstupdotenv.models import ParsedEnvFile

logger = logging.getLogger(__name__)

SECRET_REFERENCE_PREFIX = "op://"

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_secret_reference(line: str) -> bool:
    return line.startswith(SECRET_REFERENCE_PREFIX)


def is_shell_identifier(name: str) -> bool:
    return _IDENTIFIER_PATTERN.fullmatch(name) is not None


def _split_assignment(line: str) -> tuple[str, str] | None:
    if "=" not in line:
        return None

    key, value = line.split("=", 1)
    key = key.strip()
    if not is_shell_identifier(key):
        logger.debug("Skipping line with unusable key %r", key)
        return None
    return key, value.strip()


def _content_lines(text: str) -> list[str]:
    lines: list[str] = []
    # Only \n separates lines; \f, \u2028 and friends are value characters.
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        lines.append(line)
    return lines


def parse_key_values(text: str) -> dict[str, str]:
    """Parse newline-delimited ``KEY=value`` pairs.

    Used for resolved secret payloads: secret references are not followed
    here, a payload line that looks like one is simply skipped.
    """
    env: dict[str, str] = {}
    for line in _content_lines(text):
        pair = _split_assignment(line)
        if pair is None:
            continue
        key, value = pair
        env[key] = value
    return env


def parse_env_text(text: str) -> ParsedEnvFile:
    """Split env file content into plain assignments and secret references.

    Blank lines and ``#`` comments are ignored, lines without ``=`` are
    skipped without complaint, and so are shell-style ``export KEY=value``
    lines: the prefix is not stripped and ``export KEY`` is not a key. The
    last assignment of a key wins but the key keeps the position of its
    first occurrence.
    """
    parsed = ParsedEnvFile()
    for line in _content_lines(text):
        if is_secret_reference(line):
            parsed.references.append(line)
            continue
        pair = _split_assignment(line)
        if pair is None:
            continue
        key, value = pair
        parsed.assignments[key] = value
    return parsed

