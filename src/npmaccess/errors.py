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

"""Structured error system for npmaccess.

Every error has a unique ``NA-NAMED-KEY`` code, a human-readable message,
and a hint with a suggested fix. Errors raised without a hint take the
one catalogued for their code in :data:`ERRORS`.

Code categories::

    NA-SPEC-*         Package spec errors (raised before any request)
    NA-ARGUMENT-*     Argument validation errors (raised before any request)
    NA-CONFIG-*       Configuration errors
    NA-REGISTRY-*     Registry request errors

Registry failures additionally carry the registry-style code derived
from the HTTP status (``E404``, ``E403``...) in
:attr:`RegistryError.registry_code`, which is what callers branch on.

Usage::

    from npmaccess.errors import E, InvalidArgumentError

    raise InvalidArgumentError(
        code=E.ARGUMENT_INVALID,
        message='`permissions` must be `read-write` or `read-only`.',
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Enumeration of all npmaccess diagnostic codes."""

    # Package specs
    SPEC_NOT_REGISTRY = 'NA-SPEC-NOT-REGISTRY'
    SPEC_INVALID_NAME = 'NA-SPEC-INVALID-NAME'

    # Arguments
    ARGUMENT_INVALID = 'NA-ARGUMENT-INVALID'

    # Configuration
    CONFIG_NOT_FOUND = 'NA-CONFIG-NOT-FOUND'
    CONFIG_PARSE_ERROR = 'NA-CONFIG-PARSE-ERROR'
    CONFIG_INVALID_KEY = 'NA-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'NA-CONFIG-INVALID-VALUE'

    # Registry
    REGISTRY_REQUEST_FAILED = 'NA-REGISTRY-REQUEST-FAILED'
    REGISTRY_CONNECTION_FAILED = 'NA-REGISTRY-CONNECTION-FAILED'
    REGISTRY_INVALID_RESPONSE = 'NA-REGISTRY-INVALID-RESPONSE'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``NA-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class NpmAccessError(Exception):
    """Base exception for all npmaccess errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Suggestion for how to fix the error. Defaults to the hint
            catalogued in :data:`ERRORS` for ``code``.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        if not hint and code in ERRORS:
            hint = ERRORS[code].hint
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class InvalidSpecError(NpmAccessError):
    """The input is not a valid registry-hosted package reference."""


class InvalidArgumentError(NpmAccessError):
    """An argument failed a domain check."""


class ConfigError(NpmAccessError):
    """The access configuration could not be loaded or is invalid."""


class RegistryError(NpmAccessError):
    """A registry request failed.

    Args:
        message: Human-readable description of what went wrong.
        registry_code: Registry-style code, ``E<status>`` for HTTP errors
            (e.g. ``E404``) or a transport code such as ``ECONNECTION``.
        status_code: HTTP status, if a response was received.
        method: HTTP method of the failed request.
        url: Full URL of the failed request.
        body: Response body text, if any.
        code: The :class:`ErrorCode` to report.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(
        self,
        message: str,
        *,
        registry_code: str,
        status_code: int | None = None,
        method: str = '',
        url: str = '',
        body: str = '',
        code: ErrorCode = ErrorCode.REGISTRY_REQUEST_FAILED,
        hint: str = '',
    ) -> None:
        """Initialize with the upstream code and request context."""
        super().__init__(code=code, message=message, hint=hint)
        self.registry_code = registry_code
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body

    @property
    def is_not_found(self) -> bool:
        """Whether the registry answered 404."""
        return self.registry_code == 'E404'


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.SPEC_NOT_REGISTRY: ErrorInfo(
        code=E.SPEC_NOT_REGISTRY,
        message='`spec` must be a registry spec.',
        hint='Pass a package name such as "foo" or "@scope/foo", not a path, URL or git reference.',
    ),
    E.SPEC_INVALID_NAME: ErrorInfo(
        code=E.SPEC_INVALID_NAME,
        message='The package name or tag is malformed.',
        hint='Names are URL-safe, do not start with "." or "_", and scoped names look like "@scope/name".',
    ),
    E.ARGUMENT_INVALID: ErrorInfo(
        code=E.ARGUMENT_INVALID,
        message='An argument is outside its allowed set of values.',
        hint='Permissions are "read-only" or "read-write"; access is "public" or "restricted".',
    ),
    E.CONFIG_NOT_FOUND: ErrorInfo(
        code=E.CONFIG_NOT_FOUND,
        message='The access configuration file does not exist.',
        hint='Check the path, or build an AccessConfig directly.',
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='The access configuration file is not valid TOML.',
        hint='Fix the TOML syntax at the reported line.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='The access configuration has an unknown key.',
        hint='Per-scope registries are written as "@scope:registry"; extra headers go under [headers].',
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A configuration value has the wrong type.',
        hint='URLs, tokens and headers are strings; timeout is a number; pool_size is an integer.',
    ),
    E.REGISTRY_REQUEST_FAILED: ErrorInfo(
        code=E.REGISTRY_REQUEST_FAILED,
        message='The registry rejected the request.',
        hint='Check the registry URL, the token, and that the package, org or team exists.',
    ),
    E.REGISTRY_CONNECTION_FAILED: ErrorInfo(
        code=E.REGISTRY_CONNECTION_FAILED,
        message='The registry could not be reached or dropped the connection.',
        hint='Check network connectivity and the registry URL.',
    ),
    E.REGISTRY_INVALID_RESPONSE: ErrorInfo(
        code=E.REGISTRY_INVALID_RESPONSE,
        message='The registry response was not valid JSON.',
        hint='Check that the registry URL points at an npm registry, not a web page or proxy.',
    ),
}


__all__ = [
    'ERRORS',
    'ConfigError',
    'E',
    'ErrorCode',
    'ErrorInfo',
    'InvalidArgumentError',
    'InvalidSpecError',
    'NpmAccessError',
    'RegistryError',
]
