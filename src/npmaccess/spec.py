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

"""npm package spec parsing.

Classifies the strings users type after ``npm install`` and rejects the
ones that do not live on a registry, since the access API only applies to
registry-hosted packages.

Spec forms::

    ┌────────────────────────────────┬───────────┬──────────┐
    │ Input                          │ Type      │ Registry │
    ├────────────────────────────────┼───────────┼──────────┤
    │ foo / @scope/foo               │ tag       │ yes      │
    │ foo@1.2.3                      │ version   │ yes      │
    │ foo@^1.2.0 / foo@1.x           │ range     │ yes      │
    │ foo@beta                       │ tag       │ yes      │
    │ foo@npm:bar@^2                 │ alias     │ yes      │
    │ ./foo / file:foo / foo.tgz     │ directory │ no       │
    │                                │ / file    │          │
    │ user/repo / github:user/repo   │ git       │ no       │
    │ git+https://... / git@host:... │ git       │ no       │
    │ https://host/foo.tgz           │ remote    │ no       │
    └────────────────────────────────┴───────────┴──────────┘

:func:`resolve_spec` classifies any spec. :func:`parse_spec` also
enforces that the result is registry-hosted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from npmaccess.errors import E, InvalidSpecError
from npmaccess.uri import encode_segment

SpecType = Literal['tag', 'version', 'range', 'alias', 'file', 'directory', 'git', 'remote']

REGISTRY_TYPES: frozenset[str] = frozenset({'tag', 'version', 'range', 'alias'})

DEFAULT_TAG = 'latest'

# Names the registry refuses outright.
_BLACKLISTED_NAMES: frozenset[str] = frozenset({'node_modules', 'favicon.ico'})

_SCOPED_NAME_RE = re.compile(r'^@([^/]+)/([^/]+)$')
_VERSION_RE = re.compile(
    r'^[v=]?\d+\.\d+\.\d+'
    r'(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?'
    r'(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$',
)
# Wildcard-ish tokens such as ``x``, ``X.x`` or ``v1`` are ranges, not tags.
_PARTIAL_VERSION_RE = re.compile(r'^[v=]?[\dxX*]+(?:\.[\dxX*]+){0,2}$')
_TAG_RE = re.compile(r'^[A-Za-z][A-Za-z0-9._-]*$')
_RANGE_RE = re.compile(r'^[\w\s.*^~<>=|+-]+$')

_GIT_PREFIXES = ('git+', 'git://', 'github:', 'gitlab:', 'bitbucket:', 'gist:')
_SCP_GIT_RE = re.compile(r'^git@[^:/\s]+:')
_REMOTE_RE = re.compile(r'^https?://', re.IGNORECASE)
_PATH_RE = re.compile(r'^(?:\.{1,2}(?:[/\\]|$)|~[/\\]|[/\\]|[A-Za-z]:[/\\])')
_TARBALL_RE = re.compile(r'\.(?:tgz|tar\.gz|tar)$', re.IGNORECASE)
_SHORTHAND_RE = re.compile(r'^[^@/\s:#]+/[^/\s:#]+(?:#\S*)?$')


@dataclass(frozen=True)
class PackageSpec:
    """A parsed package spec.

    Attributes:
        raw: The string the spec was parsed from.
        name: Package name, or ``None`` for unnamed non-registry specs.
        type: Kind of spec, see :data:`SpecType`.
        fetch_spec: What would be fetched: a version, range, tag, path or URL.
        sub_spec: For aliases, the spec of the real package.
    """

    raw: str
    name: str | None
    type: SpecType
    fetch_spec: str
    sub_spec: PackageSpec | None = None

    @property
    def registry(self) -> bool:
        """Whether the spec refers to a registry-hosted package."""
        return self.type in REGISTRY_TYPES

    @property
    def scope(self) -> str | None:
        """The ``@scope`` part of a scoped name, including the ``@``."""
        if self.name and self.name.startswith('@'):
            return self.name.split('/', 1)[0]
        return None

    @property
    def escaped_name(self) -> str | None:
        """Name with ``/`` escaped the way the registry stores it."""
        return self.name.replace('/', '%2f') if self.name else None

    @property
    def url_encoded_name(self) -> str:
        """Name encoded as a single URL path segment."""
        if self.name is None:
            msg = f'spec {self.raw!r} has no package name'
            raise InvalidSpecError(code=E.SPEC_INVALID_NAME, message=msg)
        return encode_segment(self.name)


def _non_registry_type(value: str) -> SpecType | None:
    """Return the spec type if ``value`` points somewhere other than a registry."""
    if value.startswith('file:'):
        return 'file' if _TARBALL_RE.search(value) else 'directory'
    if value.startswith(_GIT_PREFIXES) or _SCP_GIT_RE.match(value):
        return 'git'
    if _REMOTE_RE.match(value):
        return 'remote'
    if _PATH_RE.match(value):
        return 'file' if _TARBALL_RE.search(value) else 'directory'
    if _TARBALL_RE.search(value) and '@' not in value:
        return 'file'
    if _SHORTHAND_RE.match(value):
        return 'git'
    return None


def _split_name(raw: str) -> tuple[str, str]:
    """Split ``name@spec`` into its parts; the spec part may be empty."""
    at = raw.find('@', 1) if raw.startswith('@') else raw.find('@')
    if at == -1:
        return raw, ''
    return raw[:at], raw[at + 1 :]


def validate_name(name: str) -> None:
    """Raise :class:`InvalidSpecError` if ``name`` is not a usable package name.

    Uses the rules that apply to existing packages, so legacy names with
    uppercase letters are accepted.
    """
    reason = ''
    if not name:
        reason = 'name length must be greater than zero'
    elif name != name.strip():
        reason = 'name cannot contain leading or trailing spaces'
    elif name.startswith(('.', '_')):
        reason = 'name cannot start with a period or underscore'
    elif name.lower() in _BLACKLISTED_NAMES:
        reason = f'{name} is a blacklisted name'
    else:
        match = _SCOPED_NAME_RE.match(name)
        parts = match.groups() if match else (name,)
        if name.startswith('@') and not match:
            reason = 'scoped names must look like @scope/name'
        elif any(encode_segment(part) != part for part in parts):
            reason = 'name can only contain URL-friendly characters'
    if reason:
        raise InvalidSpecError(
            code=E.SPEC_INVALID_NAME,
            message=f'Invalid package name {name!r}: {reason}',
        )


def _registry_spec(raw: str, name: str, rest: str) -> PackageSpec:
    """Classify the part after ``name@`` for a registry spec."""
    if not rest:
        return PackageSpec(raw=raw, name=name, type='tag', fetch_spec=DEFAULT_TAG)
    if _VERSION_RE.match(rest):
        return PackageSpec(raw=raw, name=name, type='version', fetch_spec=rest.lstrip('v='))
    if _TAG_RE.match(rest) and not _PARTIAL_VERSION_RE.match(rest):
        return PackageSpec(raw=raw, name=name, type='tag', fetch_spec=rest)
    if _RANGE_RE.match(rest):
        return PackageSpec(raw=raw, name=name, type='range', fetch_spec=rest.strip())
    raise InvalidSpecError(
        code=E.SPEC_INVALID_NAME,
        message=f'Invalid tag name {rest!r} in spec {raw!r}: tags may not have any characters that encodeURIComponent encodes.',
    )


def resolve_spec(raw: str) -> PackageSpec:
    """Classify a spec string without requiring it to be registry-hosted.

    Raises:
        InvalidSpecError: If the package name or tag is malformed.
    """
    raw = raw.strip()
    if not raw:
        validate_name(raw)

    kind = _non_registry_type(raw)
    if kind is not None:
        return PackageSpec(raw=raw, name=None, type=kind, fetch_spec=raw)

    name, rest = _split_name(raw)
    validate_name(name)

    if rest.startswith('npm:'):
        target = resolve_spec(rest[len('npm:') :])
        if not target.registry or target.type == 'alias':
            raise InvalidSpecError(
                code=E.SPEC_NOT_REGISTRY,
                message=f'aliases only work for registry deps, got {rest!r}',
            )
        return PackageSpec(raw=raw, name=name, type='alias', fetch_spec=target.fetch_spec, sub_spec=target)

    kind = _non_registry_type(rest) if rest else None
    if kind is not None:
        return PackageSpec(raw=raw, name=name, type=kind, fetch_spec=rest)

    return _registry_spec(raw, name, rest)


def parse_spec(spec: str | PackageSpec) -> PackageSpec:
    """Parse ``spec`` and require that it refers to a registry package.

    Args:
        spec: A spec string such as ``@scope/pkg@1.0.0``, or an already
            parsed :class:`PackageSpec`.

    Raises:
        InvalidSpecError: If the spec is malformed or not registry-hosted.
    """
    parsed = spec if isinstance(spec, PackageSpec) else resolve_spec(spec)
    if not parsed.registry:
        raise InvalidSpecError(
            code=E.SPEC_NOT_REGISTRY,
            message=f'`spec` must be a registry spec, got {parsed.type} spec {parsed.raw!r}',
            hint='Pass a package name such as "foo" or "@scope/foo".',
        )
    return parsed


__all__ = [
    'DEFAULT_TAG',
    'REGISTRY_TYPES',
    'PackageSpec',
    'SpecType',
    'parse_spec',
    'resolve_spec',
    'validate_name',
]
