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

"""Client for the npm registry access API.

Set package visibility, manage team permissions, list packages and
collaborators, and toggle two-factor publishing requirements.
"""

__version__ = '0.1.0'

from npmaccess.access import (  # noqa: E402 - needs __version__ set first
    edit,
    grant,
    ls_collaborators,
    ls_collaborators_stream,
    ls_packages,
    ls_packages_stream,
    public,
    restricted,
    revoke,
    set_access,
    set_requires_2fa,
    tfa_not_required,
    tfa_required,
)
from npmaccess.config import AccessConfig, load_config  # noqa: E402
from npmaccess.errors import (  # noqa: E402
    ConfigError,
    InvalidArgumentError,
    InvalidSpecError,
    NpmAccessError,
    RegistryError,
)
from npmaccess.permissions import translate  # noqa: E402
from npmaccess.spec import PackageSpec, parse_spec  # noqa: E402

__all__ = [
    'AccessConfig',
    'ConfigError',
    'InvalidArgumentError',
    'InvalidSpecError',
    'NpmAccessError',
    'PackageSpec',
    'RegistryError',
    '__version__',
    'edit',
    'grant',
    'load_config',
    'ls_collaborators',
    'ls_collaborators_stream',
    'ls_packages',
    'ls_packages_stream',
    'parse_spec',
    'public',
    'restricted',
    'revoke',
    'set_access',
    'set_requires_2fa',
    'tfa_not_required',
    'tfa_required',
    'translate',
]
