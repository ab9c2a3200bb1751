# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Logging setup for the pageschema CLI and embedding applications.

Library modules only ever call ``logging.getLogger(__name__)`` and log at
DEBUG; nothing is emitted until an application calls configure(). After
that, stdlib records and structlog loggers share one stderr handler whose
output is either console lines (terminals) or JSON lines (log pipelines).

Leaf module: no pageschema imports.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV = "PAGESCHEMA_LOG_LEVEL"
JSON_LOGS_ENV = "PAGESCHEMA_JSON_LOGS"
ENV_DEFAULT_LEVEL = "WARNING"

_TRUTHY = frozenset({"1", "true", "yes"})


def _pre_chain() -> list:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(json_output: bool) -> logging.Handler:
    if json_output:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=_pre_chain(),
        )
    )
    return handler


def configure(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging through a single stderr handler.

    Args:
        json_output: JSON lines instead of console lines.
        level: root logger level name; unknown names fall back to INFO.

    Calling it again replaces the previous handler instead of adding one.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(json_output))
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def configure_from_env(*, json_output: bool | None = None, level: str | None = None) -> None:
    """configure() with PAGESCHEMA_JSON_LOGS / PAGESCHEMA_LOG_LEVEL as fallbacks.

    Explicit arguments win; without either, logging is quiet (WARNING).
    """
    if json_output is None:
        json_output = os.environ.get(JSON_LOGS_ENV, "").strip().lower() in _TRUTHY
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "").strip() or ENV_DEFAULT_LEVEL
    configure(json_output=json_output, level=level)
