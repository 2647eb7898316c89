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

"""Access configuration.

Every operation takes an :class:`AccessConfig`: a frozen settings record
with documented defaults. Each call derives a :class:`RequestOptions`
from it via :meth:`AccessConfig.concat`, adding the per-request method,
body, query and spec context, and hands that to the fetch helper.

Settings can also come from a plain mapping (:meth:`AccessConfig.from_mapping`)
or from a TOML file (:func:`load_config`). Both validate key names and
value types::

    registry          = "https://registry.npmjs.org/"
    token             = "npm_..."          # sent as a Bearer token
    otp               = "123456"           # sent as npm-otp
    user_agent        = "my-tool/1.0"
    timeout           = 30.0
    pool_size         = 10
    "@acme:registry"  = "https://npm.acme.test/"

    [scoped_registries]
    "@corp" = "https://npm.corp.test/"

    [headers]
    x-request-source = "ci"

Usage::

    from npmaccess.config import AccessConfig, load_config

    cfg = AccessConfig(registry='https://npm.acme.test/', token='...')
    cfg = load_config(Path('npmaccess.toml'))
"""

from __future__ import annotations

import dataclasses
import difflib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import tomlkit
import tomlkit.exceptions

from npmaccess import __version__
from npmaccess.errors import ConfigError, E
from npmaccess.logging import get_logger
from npmaccess.net import DEFAULT_POOL_SIZE, DEFAULT_TIMEOUT

if TYPE_CHECKING:
    from npmaccess.spec import PackageSpec

logger = get_logger(__name__)

DEFAULT_REGISTRY = 'https://registry.npmjs.org/'
DEFAULT_USER_AGENT = f'npmaccess/{__version__}'

# Suffix of npmrc-style per-scope registry keys, e.g. ``@acme:registry``.
_SCOPED_REGISTRY_SUFFIX = ':registry'

VALID_KEYS: frozenset[str] = frozenset({
    'registry',
    'scoped_registries',
    'token',
    'otp',
    'headers',
    'user_agent',
    'timeout',
    'pool_size',
})

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'registry': str,
    'scoped_registries': dict,
    'token': str,
    'otp': str,
    'headers': dict,
    'user_agent': str,
    'timeout': (int, float),
    'pool_size': int,
}


@dataclass(frozen=True)
class AccessConfig:
    """Settings shared by every access operation.

    Attributes:
        registry: Base URL of the default registry.
        scoped_registries: Registry URL per ``@scope``, used for packages
            and team scopes that live elsewhere.
        token: Bearer token sent as ``Authorization``.
        otp: One-time password sent as ``npm-otp``.
        headers: Extra headers sent with every request.
        user_agent: ``User-Agent`` header value.
        timeout: Request timeout in seconds.
        pool_size: HTTP connection pool size.
        client: A caller-owned :class:`httpx.AsyncClient`. When set, it is
            used as-is (and never closed) instead of a pooled client.
    """

    registry: str = DEFAULT_REGISTRY
    scoped_registries: Mapping[str, str] = field(default_factory=dict)
    token: str | None = None
    otp: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    pool_size: int = DEFAULT_POOL_SIZE
    client: httpx.AsyncClient | None = field(default=None, compare=False, repr=False)

    def registry_for(self, scope: str | None) -> str:
        """Return the registry URL for ``scope`` (with or without ``@``)."""
        if scope:
            key = scope if scope.startswith('@') else f'@{scope}'
            if key in self.scoped_registries:
                return self.scoped_registries[key]
        return self.registry

    def concat(
        self,
        *,
        method: str = 'GET',
        body: Mapping[str, Any] | None = None,  # noqa: ANN401 - JSON body
        query: Mapping[str, str | None] | None = None,
        spec: PackageSpec | None = None,
        scope: str | None = None,
    ) -> RequestOptions:
        """Return request options for one call, based on this config."""
        return RequestOptions(
            config=self,
            method=method,
            body=body,
            query=query,
            spec=spec,
            scope=scope,
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any], *, source: str = 'options') -> AccessConfig:  # noqa: ANN401
        """Build a config from a plain mapping of settings.

        Keys of the form ``@scope:registry`` are folded into
        :attr:`scoped_registries`.

        Raises:
            ConfigError: On unknown keys or values of the wrong type.
        """
        kwargs: dict[str, Any] = {}  # noqa: ANN401
        scoped: dict[str, str] = {}
        for key, value in options.items():
            if key.startswith('@') and key.endswith(_SCOPED_REGISTRY_SUFFIX):
                _validate_value_type(key, value, str, source=source)
                scoped[key[: -len(_SCOPED_REGISTRY_SUFFIX)]] = value
                continue
            if key not in VALID_KEYS:
                suggestion = _suggest_key(key)
                raise ConfigError(
                    code=E.CONFIG_INVALID_KEY,
                    message=f"Unknown key '{key}' in {source}",
                    hint=f"Did you mean '{suggestion}'?" if suggestion else f'Valid keys: {", ".join(sorted(VALID_KEYS))}.',
                )
            _validate_value_type(key, value, _TYPE_MAP[key], source=source)
            kwargs[key] = value

        if 'timeout' in kwargs:
            kwargs['timeout'] = float(kwargs['timeout'])
        for key in ('scoped_registries', 'headers'):
            if key in kwargs:
                kwargs[key] = _string_table(key, kwargs[key], source=source)
        if scoped:
            kwargs['scoped_registries'] = {**kwargs.get('scoped_registries', {}), **scoped}
        return cls(**kwargs)


@dataclass(frozen=True)
class RequestOptions:
    """Everything the fetch helper needs for a single request.

    Attributes:
        config: The settings the request was derived from.
        method: HTTP method.
        body: JSON request body.
        query: Query parameters; ``None`` values are dropped.
        spec: Package the request is about, used to pick a scoped registry.
        scope: Org/user scope the request is about, used the same way.
    """

    config: AccessConfig
    method: str = 'GET'
    body: Mapping[str, Any] | None = None  # noqa: ANN401 - JSON body
    query: Mapping[str, str | None] | None = None
    spec: PackageSpec | None = None
    scope: str | None = None

    def replace(self, **changes: Any) -> RequestOptions:  # noqa: ANN401
        """Return a copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


def _suggest_key(unknown: str) -> str | None:
    """Return the closest valid key for a typo, or None."""
    matches = difflib.get_close_matches(unknown, VALID_KEYS, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _validate_value_type(
    key: str,
    value: Any,  # noqa: ANN401 - dynamic config values
    expected: type | tuple[type, ...],
    *,
    source: str,
) -> None:
    """Raise if a config value has the wrong type."""
    if isinstance(value, bool) and expected is not bool:
        ok = False
    else:
        ok = isinstance(value, expected)
    if not ok:
        type_name = expected.__name__ if isinstance(expected, type) else ' or '.join(t.__name__ for t in expected)
        raise ConfigError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {source}.',
        )


def _string_table(key: str, table: Mapping[str, Any], *, source: str) -> dict[str, str]:  # noqa: ANN401
    """Check that every value of a table setting is a string."""
    for name, value in table.items():
        _validate_value_type(f'{key}.{name}', value, str, source=source)
    return dict(table)


def load_config(path: Path | str) -> AccessConfig:
    """Load and validate an :class:`AccessConfig` from a TOML file.

    Args:
        path: The TOML file to read.

    Raises:
        ConfigError: If the file is missing, unparsable, or invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Config file {path} does not exist',
            hint='Check the path, or build an AccessConfig directly.',
        )

    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise ConfigError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to read {path}: {exc}',
        ) from exc

    try:
        raw: dict[str, Any] = tomlkit.parse(text).unwrap()  # noqa: ANN401
    except tomlkit.exceptions.TOMLKitError as exc:
        raise ConfigError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {path}: {exc}',
        ) from exc

    logger.debug('access_config_loaded', path=str(path), keys=sorted(raw))
    return AccessConfig.from_mapping(raw, source=path.name)


__all__ = [
    'DEFAULT_REGISTRY',
    'DEFAULT_USER_AGENT',
    'VALID_KEYS',
    'AccessConfig',
    'RequestOptions',
    'load_config',
]
