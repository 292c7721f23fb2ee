from __future__ import annotations

__all__ = ("Settings",)

import os
import typing as t
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ANCESTRY_SEARCH_LIMIT = 100_000


@dataclass
class Settings:
    """Contains settings for revwalk.

    Attributes
    ----------
    max_count: int | None
        The maximum number of commits a walk should emit.
        If :code:`None`, the walk is unbounded.
    ancestry_search_limit: int | None
        The maximum number of commits visited when checking whether one
        parent of a merge is an ancestor of another.
        If :code:`None`, the search is bounded by commit time only.
    time_limit: float | None
        The maximum time in seconds that the command-line interface spends
        walking history. If :code:`None`, no time limit is enforced.
    log_level: str
        The level at which log messages are reported.
    log_to_file: Path | None
        The path to a file to which log messages should also be written.
        If :code:`None`, logging to file is disabled.
    """
    max_count: int | None = field(default=None)
    ancestry_search_limit: int | None = field(default=DEFAULT_ANCESTRY_SEARCH_LIMIT)
    time_limit: float | None = field(default=None)
    log_level: str = field(default="WARNING")
    log_to_file: Path | None = field(default=None)

    @classmethod
    def from_env(cls, **kwargs: t.Any) -> Settings:  # noqa: ANN401
        """Create a settings object from environment variables.

        Parameters
        ----------
        **kwargs: t.Any
            Additional keyword arguments to pass to the constructor.
            These take precedence over environment variables.

        Returns
        -------
        Settings
            The settings object.
        """
        def fetch(name: str, envvar: str, default: t.Any) -> t.Any:  # noqa: ANN401
            value = kwargs.get(name, os.environ.get(envvar, default))
            if value == "":
                value = default
            kwargs[name] = value
            return value

        def fetch_path(name: str, envvar: str, default: Path | None) -> None:
            value = fetch(name, envvar, default)
            if isinstance(value, str):
                kwargs[name] = Path(value)

        def fetch_int(name: str, envvar: str, default: int | None) -> None:
            value = fetch(name, envvar, default)
            if isinstance(value, str):
                kwargs[name] = int(value)

        def fetch_float(name: str, envvar: str, default: float | None) -> None:
            value = fetch(name, envvar, default)
            if isinstance(value, str):
                kwargs[name] = float(value)

        fetch_int("max_count", "REVWALK_MAX_COUNT", default=None)
        fetch_int("ancestry_search_limit", "REVWALK_ANCESTRY_SEARCH_LIMIT", default=DEFAULT_ANCESTRY_SEARCH_LIMIT)
        fetch_float("time_limit", "REVWALK_TIME_LIMIT", default=None)
        fetch("log_level", "REVWALK_LOG_LEVEL", default="WARNING")
        fetch_path("log_to_file", "REVWALK_LOG_FILE", default=None)

        return cls(**kwargs)
