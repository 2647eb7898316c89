# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Structured logging for npmaccess.

Loggers returned by :func:`get_logger` are structlog wrappers around
stdlib loggers under the ``npmaccess`` namespace. Until an application
installs a handler, events follow the stdlib rules (debug events are
dropped). Nothing is configured on import.

:func:`configure_logging` attaches a single stderr handler to the
``npmaccess`` logger and leaves the root logger and any handlers the
host application installed alone:

- **Console** (default): human-readable output, colored on a TTY.
- **JSON** (``json_log=True``): one JSON object per line.

Usage::

    from npmaccess.logging import configure_logging

    configure_logging(verbose=True)
"""

from __future__ import annotations

import logging
import sys

import structlog

ROOT_LOGGER = 'npmaccess'

# Name given to the handler installed by configure_logging, so a second
# call replaces it instead of stacking another.
_HANDLER_NAME = 'npmaccess-console'

_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso'),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> logging.Handler:
    """Send npmaccess events to stderr.

    Args:
        verbose: Enable debug-level output (shows every registry request).
        quiet: Suppress info-level output (only warnings and errors).
        json_log: Use JSON output instead of console output.

    Returns:
        The installed handler.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        ),
    )

    logger = logging.getLogger(ROOT_LOGGER)
    for old in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(level)
    # Rendered here; root handlers would see the raw event dict.
    logger.propagate = False
    return handler


def get_logger(name: str = ROOT_LOGGER) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


__all__ = [
    'ROOT_LOGGER',
    'configure_logging',
    'get_logger',
]
