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

"""npm registry access operations.

Mutations (one request each, resolve to ``True`` on any 2xx)::

    set_access        POST   /-/package/{pkg}/access          {access}
    set_requires_2fa  POST   /-/package/{pkg}/access          {publish_requires_tfa}
    grant             PUT    /-/team/{scope}/{team}/package   {package, permissions}
    revoke            DELETE /-/team/{scope}/{team}/package   {package}

Listings (``format=cli``, permissions recoded to ``read-only`` /
``read-write``)::

    ls_packages       GET /-/team/{scope}/{team}/package   (team given)
                      GET /-/org/{scope}/package           (no team)
                        └─ E404 ─► GET /-/user/{scope}/package
    ls_collaborators  GET /-/package/{pkg}/collaborators   [user=...]

Each listing comes in two shapes. ``*_stream`` is an async generator that
yields ``(name, permission)`` pairs as the response is decoded.
The plain form collects the same pairs into a dict and returns ``None``
when the registry returned no entries.

Usage::

    from npmaccess import access

    await access.grant('@acme/widget', '@acme', 'developers', 'read-write')

    async for team, permission in access.ls_collaborators_stream('@acme/widget'):
        print(team, permission)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import AsyncExitStack
from typing import NoReturn

from npmaccess.config import AccessConfig, RequestOptions
from npmaccess.errors import RegistryError
from npmaccess.fetch import drain, registry_fetch
from npmaccess.logging import get_logger
from npmaccess.permissions import translate, validate_access, validate_permissions
from npmaccess.spec import PackageSpec, parse_spec
from npmaccess.stream import iter_kv
from npmaccess.uri import (
    collaborators_path,
    normalize_scope,
    org_package_path,
    package_access_path,
    team_package_path,
    user_package_path,
)

log = get_logger('npmaccess.access')


async def set_access(spec: str | PackageSpec, access: str, config: AccessConfig | None = None) -> bool:
    """Set a package's visibility to ``public`` or ``restricted``.

    Raises:
        InvalidSpecError: If ``spec`` is not a registry package.
        InvalidArgumentError: If ``access`` is not an allowed value.
        RegistryError: If the registry rejects the request.
    """
    config = config or AccessConfig()
    parsed = parse_spec(spec)
    access = validate_access(access)
    log.debug('set_access', package=parsed.name, access=access)
    options = config.concat(method='POST', body={'access': access}, spec=parsed)
    return await drain(package_access_path(parsed), options)


async def public(spec: str | PackageSpec, config: AccessConfig | None = None) -> bool:
    """Make a package public."""
    return await set_access(spec, 'public', config)


async def restricted(spec: str | PackageSpec, config: AccessConfig | None = None) -> bool:
    """Make a package restricted."""
    return await set_access(spec, 'restricted', config)


async def grant(
    spec: str | PackageSpec,
    scope: str,
    team: str,
    permissions: str,
    config: AccessConfig | None = None,
) -> bool:
    """Give ``scope:team`` ``read-only`` or ``read-write`` access to a package.

    Raises:
        InvalidSpecError: If ``spec`` is not a registry package.
        InvalidArgumentError: If ``permissions`` is not an allowed value.
        RegistryError: If the registry rejects the request.
    """
    config = config or AccessConfig()
    parsed = parse_spec(spec)
    scope = normalize_scope(scope)
    permissions = validate_permissions(permissions)
    log.debug('grant', package=parsed.name, scope=scope, team=team, permissions=permissions)
    options = config.concat(
        method='PUT',
        body={'package': parsed.name, 'permissions': permissions},
        scope=scope,
        spec=parsed,
    )
    return await drain(team_package_path(scope, team), options)


async def revoke(
    spec: str | PackageSpec,
    scope: str,
    team: str,
    config: AccessConfig | None = None,
) -> bool:
    """Remove ``scope:team``'s access to a package.

    Raises:
        InvalidSpecError: If ``spec`` is not a registry package.
        RegistryError: If the registry rejects the request.
    """
    config = config or AccessConfig()
    parsed = parse_spec(spec)
    scope = normalize_scope(scope)
    log.debug('revoke', package=parsed.name, scope=scope, team=team)
    options = config.concat(
        method='DELETE',
        body={'package': parsed.name},
        scope=scope,
        spec=parsed,
    )
    return await drain(team_package_path(scope, team), options)


async def set_requires_2fa(
    spec: str | PackageSpec,
    required: bool,
    config: AccessConfig | None = None,
) -> bool:
    """Require (or stop requiring) two-factor auth to publish a package.

    Raises:
        InvalidSpecError: If ``spec`` is not a registry package.
        RegistryError: If the registry rejects the request.
    """
    config = config or AccessConfig()
    parsed = parse_spec(spec)
    log.debug('set_requires_2fa', package=parsed.name, required=required)
    options = config.concat(method='POST', body={'publish_requires_tfa': required}, spec=parsed)
    return await drain(package_access_path(parsed), options)


async def tfa_required(spec: str | PackageSpec, config: AccessConfig | None = None) -> bool:
    """Require two-factor auth to publish a package."""
    return await set_requires_2fa(spec, True, config)


async def tfa_not_required(spec: str | PackageSpec, config: AccessConfig | None = None) -> bool:
    """Stop requiring two-factor auth to publish a package."""
    return await set_requires_2fa(spec, False, config)


async def _query(
    uri: str,
    options: RequestOptions,
    *,
    fallback_uri: str | None = None,
) -> AsyncIterator[tuple[str, str]]:
    """Yield translated entries of a listing, trying ``fallback_uri`` once on E404."""
    async with AsyncExitStack() as stack:
        try:
            response = await stack.enter_async_context(registry_fetch(uri, options))
        except RegistryError as exc:
            if fallback_uri is None or not exc.is_not_found:
                raise
            log.debug('listing_fallback', uri=uri, fallback_uri=fallback_uri)
            response = await stack.enter_async_context(registry_fetch(fallback_uri, options))
        async for key, value in iter_kv(response):
            yield key, translate(value)


async def _collect(entries: AsyncIterator[tuple[str, str]]) -> dict[str, str] | None:
    result: dict[str, str] = {}
    async for key, value in entries:
        result[key] = value
    return result or None


async def ls_packages_stream(
    scope: str,
    team: str | None = None,
    config: AccessConfig | None = None,
) -> AsyncIterator[tuple[str, str]]:
    """Yield ``(package, permission)`` for packages of an org, user or team.

    Without ``team`` the org listing is tried first; if the registry has
    no such org, the user listing for the same name is used instead.

    Raises:
        RegistryError: If the registry rejects the request or the
            response cannot be decoded.
    """
    config = config or AccessConfig()
    scope = normalize_scope(scope)
    options = config.concat(query={'format': 'cli'}, scope=scope)
    if team:
        entries = _query(team_package_path(scope, team), options)
    else:
        entries = _query(org_package_path(scope), options, fallback_uri=user_package_path(scope))
    async for entry in entries:
        yield entry


async def ls_packages(
    scope: str,
    team: str | None = None,
    config: AccessConfig | None = None,
) -> dict[str, str] | None:
    """Return ``{package: permission}`` for an org, user or team.

    Same requests as :func:`ls_packages_stream`; ``None`` if empty.
    """
    return await _collect(ls_packages_stream(scope, team, config))


async def ls_collaborators_stream(
    spec: str | PackageSpec,
    user: str | None = None,
    config: AccessConfig | None = None,
) -> AsyncIterator[tuple[str, str]]:
    """Yield ``(collaborator, permission)`` for a package.

    Args:
        spec: The package.
        user: Only report this user's access.
        config: Access settings; defaults apply when ``None``.

    Raises:
        InvalidSpecError: If ``spec`` is not a registry package.
        RegistryError: If the registry rejects the request or the
            response cannot be decoded.
    """
    config = config or AccessConfig()
    parsed = parse_spec(spec)
    options = config.concat(query={'format': 'cli', 'user': user or None}, spec=parsed)
    async for entry in _query(collaborators_path(parsed), options):
        yield entry


async def ls_collaborators(
    spec: str | PackageSpec,
    user: str | None = None,
    config: AccessConfig | None = None,
) -> dict[str, str] | None:
    """Return ``{collaborator: permission}`` for a package; ``None`` if empty."""
    return await _collect(ls_collaborators_stream(spec, user, config))


def edit(*args: object, **kwargs: object) -> NoReturn:
    """Reserved; always raises :class:`NotImplementedError`."""
    raise NotImplementedError('Not implemented yet')


__all__ = [
    'edit',
    'grant',
    'ls_collaborators',
    'ls_collaborators_stream',
    'ls_packages',
    'ls_packages_stream',
    'public',
    'restricted',
    'revoke',
    'set_access',
    'set_requires_2fa',
    'tfa_not_required',
    'tfa_required',
]
