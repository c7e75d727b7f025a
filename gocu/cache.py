"""Persistent store for the variables used as request placeholders."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

SEPARATOR = "\u200b"
PAIR_SEPARATOR = SEPARATOR + SEPARATOR
NAME_VALUE_SEPARATOR = "=" + SEPARATOR
CACHE_FILE_NAME = "gocu.cache"


class VariableError(Exception):
    """Raised when a variable operation or the cache file fails."""


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _user_cache_dir() -> Path:
    if sys.platform.startswith("win"):
        local = os.environ.get("LOCALAPPDATA", "")
        if not local:
            raise VariableError("%LocalAppData% is not defined")
        return Path(local)
    home = os.environ.get("HOME", "")
    if sys.platform == "darwin":
        if not home:
            raise VariableError("$HOME is not defined")
        return Path(home) / "Library" / "Caches"
    xdg = os.environ.get("XDG_CACHE_HOME", "")
    if xdg:
        if not os.path.isabs(xdg):
            raise VariableError("path in $XDG_CACHE_HOME is relative")
        return Path(xdg)
    if not home:
        raise VariableError("neither $XDG_CACHE_HOME nor $HOME are defined")
    return Path(home) / ".cache"


def default_cache_path() -> Path:
    """Return the location of the variables cache file in the user cache directory."""
    try:
        return _user_cache_dir() / CACHE_FILE_NAME
    except VariableError as exc:
        raise VariableError(f"Couldn't retrieve variables cache path: {exc}") from exc


def parse_cache_content(content: str) -> dict[str, str]:
    """Parse the text of a cache file into a name to value mapping."""
    if not content:
        return {}
    result: dict[str, str] = {}
    for pair in content.split(PAIR_SEPARATOR):
        parts = pair.split(NAME_VALUE_SEPARATOR)
        if len(parts) < 2:
            raise ValueError(f"Malformed variables cache entry: {pair!r}")
        result[parts[0]] = parts[1]
    return result


def format_cache_content(variables: dict[str, str]) -> str:
    """Serialise a name to value mapping into cache file text."""
    return PAIR_SEPARATOR.join(
        f"{name}{NAME_VALUE_SEPARATOR}{value}" for name, value in variables.items()
    )


class VariableStore:
    """Variables kept in a cache file, loaded on first use and saved on each change."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._vars: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = default_cache_path()
        return self._path

    def _load(self) -> dict[str, str]:
        if self._vars is None:
            path = self.path
            if not path.exists():
                self._create(path)
            try:
                with open(path, encoding="utf-8", newline="") as handle:
                    content = handle.read()
            except OSError as exc:
                raise VariableError(f"Couldn't read variables cache: {exc}") from exc
            self._vars = parse_cache_content(content)
        return self._vars

    @staticmethod
    def _create(path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as exc:
            raise VariableError(f"Couldn't create variables cache: {exc}") from exc
        logger.info("Cache created (%s)", path)

    def _save(self) -> None:
        content = format_cache_content(self._load())
        try:
            with open(self.path, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        except OSError as exc:
            raise VariableError(f"Couldn't save variables cache: {exc}") from exc

    def _set(self, name: str, value: str) -> None:
        self._load()[name] = value
        self._save()

    def variables(self) -> dict[str, str]:
        """Return a copy of all saved variables."""
        return dict(self._load())

    def get(self, name: str) -> str:
        """Return the value of a variable."""
        try:
            return self._load()[name]
        except KeyError:
            raise VariableError(f"Variable {_quote(name)} does not exist") from None

    def add(self, name: str, value: str) -> None:
        """Add a new variable; an existing one is never overwritten."""
        existing = self._load().get(name)
        if existing is not None:
            raise VariableError(
                f"Variable named {_quote(name)} (value={existing}) already exists. "
                "Use modify command to override."
            )
        self._set(name, value)
        logger.info("Added variable %s=%s", name, value)

    def modify(self, name: str, value: str) -> None:
        """Change the value of an existing variable."""
        old_value = self.get(name)
        self._set(name, value)
        logger.info("Modified value of variable %s (%s => %s)", _quote(name), old_value, value)

    def remove(self, name: str) -> None:
        """Delete a variable."""
        variables = self._load()
        if name not in variables:
            raise VariableError(f"Variable named {_quote(name)} does not exist")
        value = variables.pop(name)
        self._save()
        logger.info("Deleted variable %s=%s", name, value)

    def clear(self) -> None:
        """Delete every saved variable."""
        for name in list(self._load()):
            self.remove(name)