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

"""Tests for npmaccess.permissions."""

from __future__ import annotations

import pytest
from npmaccess.errors import E, InvalidArgumentError
from npmaccess.permissions import translate, validate_access, validate_permissions


class TestTranslate:
    """Tests for translate()."""

    def test_read(self) -> None:
        """read becomes read-only."""
        assert translate('read') == 'read-only'

    def test_write(self) -> None:
        """write becomes read-write."""
        assert translate('write') == 'read-write'

    def test_unknown_passes_through(self) -> None:
        """Unrecognized values are returned unchanged."""
        assert translate('admin') == 'admin'

    def test_none(self) -> None:
        """None stays None."""
        assert translate(None) is None

    @pytest.mark.parametrize('value', ['read', 'write', 'admin', 'read-only', 'read-write', ''])
    def test_idempotent(self, value: str) -> None:
        """Translating twice is the same as translating once."""
        assert translate(translate(value)) == translate(value)


class TestValidatePermissions:
    """Tests for validate_permissions()."""

    @pytest.mark.parametrize('value', ['read-only', 'read-write'])
    def test_allowed(self, value: str) -> None:
        """The two permission levels are accepted."""
        assert validate_permissions(value) == value

    @pytest.mark.parametrize('value', ['read', 'write', 'admin', 'READ-ONLY', 'read-only ', ''])
    def test_rejected(self, value: str) -> None:
        """Everything else is rejected."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_permissions(value)
        assert exc_info.value.code == E.ARGUMENT_INVALID
        assert '`permissions` must be `read-write` or `read-only`' in str(exc_info.value)

    @pytest.mark.parametrize('value', [['read-only'], {'read-only'}, None, 0])
    def test_rejected_non_string(self, value: object) -> None:
        """Values that are not strings are rejected, not crashed on."""
        with pytest.raises(InvalidArgumentError):
            validate_permissions(value)  # type: ignore[arg-type]


class TestValidateAccess:
    """Tests for validate_access()."""

    @pytest.mark.parametrize('value', ['public', 'restricted'])
    def test_allowed(self, value: str) -> None:
        """The two access levels are accepted."""
        assert validate_access(value) == value

    def test_rejected(self) -> None:
        """Other values are rejected."""
        with pytest.raises(InvalidArgumentError):
            validate_access('private')

    @pytest.mark.parametrize('value', [['public'], {'public': True}, None, 1])
    def test_rejected_non_string(self, value: object) -> None:
        """Values that are not strings are rejected, not crashed on."""
        with pytest.raises(InvalidArgumentError):
            validate_access(value)  # type: ignore[arg-type]
