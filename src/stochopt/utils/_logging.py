"""
Logging setup.

Library modules log through `loguru`'s global logger and never add sinks on
import. Applications call `configure_logging()` once to choose where records
go and at which level.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def configure_logging(
    level: str = "INFO",
    sink: Optional[Union[str, Path, Any]] = None,
    *,
    rotation: Optional[str] = None,
    retention: Optional[str] = None,
) -> int:
    """
    Replace all loguru sinks with a single one.

    Parameters
    ----------
    level : str, optional
        Minimum level. Defaults to "INFO".
    sink : optional
        A file path, or any loguru sink (stream, callable). Defaults to
        ``sys.stderr``.
    rotation, retention : Optional[str], optional
        Passed to loguru for file sinks (e.g. "1 day", "30 days").

    Returns
    -------
    int
        The loguru handler id.
    """
    logger.remove()

    if sink is None:
        sink = sys.stderr

    kwargs: dict[str, Any] = {"level": level, "format": _FORMAT, "backtrace": True}
    if isinstance(sink, (str, Path)):
        Path(sink).parent.mkdir(parents=True, exist_ok=True)
        if rotation is not None:
            kwargs["rotation"] = rotation
        if retention is not None:
            kwargs["retention"] = retention
        kwargs["enqueue"] = True

    return logger.add(sink, **kwargs)


def disable_logging() -> None:
    """
    Silence records emitted by stochopt modules.
    """
    logger.disable("stochopt")


def enable_logging() -> None:
    logger.enable("stochopt")
