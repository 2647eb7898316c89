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

"""Registry access API paths.

Every caller-supplied identifier is percent-encoded as a single segment,
so ``@scope/pkg`` becomes ``%40scope%2Fpkg``. The fixed ``/`` separators
of the path templates are never encoded. Scopes are expected already
normalized with :func:`normalize_scope`; the builders encode what they
are given::

    /-/package/{name}/access             visibility, 2FA
    /-/package/{name}/collaborators      collaborators
    /-/team/{scope}/{team}/package       grant, revoke, team listing
    /-/org/{scope}/package               org listing
    /-/user/{scope}/package              user listing (org fallback)
"""

from __future__ import annotations

import urllib.parse
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from npmaccess.spec import PackageSpec

# Characters JavaScript's encodeURIComponent leaves alone, besides
# alphanumerics and ``-_.`` which urllib never quotes.
_SEGMENT_SAFE = "!~*'()"


def encode_segment(value: str) -> str:
    """Percent-encode one path segment like ``encodeURIComponent``."""
    return urllib.parse.quote(value, safe=_SEGMENT_SAFE)


def normalize_scope(scope: str) -> str:
    """Strip one leading ``@`` so ``@org`` and ``org`` name the same scope."""
    return scope[1:] if scope.startswith('@') else scope


def package_access_path(spec: PackageSpec) -> str:
    """Path for visibility and 2FA changes on a package."""
    return f'/-/package/{spec.url_encoded_name}/access'


def collaborators_path(spec: PackageSpec) -> str:
    """Path listing the collaborators of a package."""
    return f'/-/package/{spec.url_encoded_name}/collaborators'


def team_package_path(scope: str, team: str) -> str:
    """Path for a team's packages; used by grant, revoke and team listings."""
    return f'/-/team/{encode_segment(scope)}/{encode_segment(team)}/package'


def org_package_path(scope: str) -> str:
    """Path listing the packages of an org."""
    return f'/-/org/{encode_segment(scope)}/package'


def user_package_path(scope: str) -> str:
    """Path listing the packages of a user."""
    return f'/-/user/{encode_segment(scope)}/package'


__all__ = [
    'collaborators_path',
    'encode_segment',
    'normalize_scope',
    'org_package_path',
    'package_access_path',
    'team_package_path',
    'user_package_path',
]
