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

"""Permission and access vocabularies.

The registry reports permissions as ``read`` / ``write`` while the access
API accepts ``read-only`` / ``read-write``. Listing results are recoded
into the latter so that they can be fed straight back into ``grant``.
"""

from __future__ import annotations

from typing import Literal

from npmaccess.errors import E, InvalidArgumentError

Permission = Literal['read-only', 'read-write']
Access = Literal['public', 'restricted']

PERMISSIONS: frozenset[str] = frozenset({'read-only', 'read-write'})
ACCESS_LEVELS: frozenset[str] = frozenset({'public', 'restricted'})

_REGISTRY_TO_PERMISSION: dict[str, str] = {
    'read': 'read-only',
    'write': 'read-write',
}


def translate(perm: str | None) -> str | None:
    """Recode a registry permission string.

    ``read`` becomes ``read-only`` and ``write`` becomes ``read-write``.
    Every other value, ``None`` included, is returned unchanged.
    """
    if isinstance(perm, str):
        return _REGISTRY_TO_PERMISSION.get(perm, perm)
    return perm


def validate_permissions(permissions: str) -> Permission:
    """Return ``permissions`` if it is ``read-only`` or ``read-write``.

    Raises:
        InvalidArgumentError: For any other value.
    """
    if not isinstance(permissions, str) or permissions not in PERMISSIONS:
        raise InvalidArgumentError(
            code=E.ARGUMENT_INVALID,
            message=f'`permissions` must be `read-write` or `read-only`. Got `{permissions}` instead',
        )
    return permissions  # type: ignore[return-value]


def validate_access(access: str) -> Access:
    """Return ``access`` if it is ``public`` or ``restricted``.

    Raises:
        InvalidArgumentError: For any other value.
    """
    if not isinstance(access, str) or access not in ACCESS_LEVELS:
        raise InvalidArgumentError(
            code=E.ARGUMENT_INVALID,
            message=f'`access` must be `public` or `restricted`. Got `{access}` instead',
        )
    return access  # type: ignore[return-value]


__all__ = [
    'ACCESS_LEVELS',
    'PERMISSIONS',
    'Access',
    'Permission',
    'translate',
    'validate_access',
    'validate_permissions',
]
