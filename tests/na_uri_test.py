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

"""Tests for npmaccess.uri."""

from __future__ import annotations

import pytest
from npmaccess.spec import parse_spec
from npmaccess.uri import (
    collaborators_path,
    encode_segment,
    normalize_scope,
    org_package_path,
    package_access_path,
    team_package_path,
    user_package_path,
)


class TestEncodeSegment:
    """Tests for encode_segment()."""

    @pytest.mark.parametrize(
        ('raw', 'encoded'),
        [
            ('plain', 'plain'),
            ('@acme/widget', '%40acme%2Fwidget'),
            ('with space', 'with%20space'),
            ("keep!~*'()", "keep!~*'()"),
            ('a?b#c&d', 'a%3Fb%23c%26d'),
            ('ünï', '%C3%BCn%C3%AF'),
        ],
    )
    def test_matches_encode_uri_component(self, raw: str, encoded: str) -> None:
        """Encoding follows encodeURIComponent."""
        assert encode_segment(raw) == encoded


class TestNormalizeScope:
    """Tests for normalize_scope()."""

    def test_strips_at(self) -> None:
        """A leading @ is removed."""
        assert normalize_scope('@acme') == 'acme'

    def test_plain(self) -> None:
        """Plain scopes are unchanged."""
        assert normalize_scope('acme') == 'acme'

    def test_only_one_at(self) -> None:
        """Only a single leading @ is removed."""
        assert normalize_scope('@@acme') == '@acme'


class TestPaths:
    """Tests for the API path builders."""

    def test_package_access(self) -> None:
        """Visibility and 2FA path."""
        assert package_access_path(parse_spec('@acme/widget')) == '/-/package/%40acme%2Fwidget/access'

    def test_collaborators(self) -> None:
        """Collaborators path."""
        assert collaborators_path(parse_spec('foo')) == '/-/package/foo/collaborators'

    def test_team_package(self) -> None:
        """Team packages path."""
        assert team_package_path('acme', 'devs') == '/-/team/acme/devs/package'

    def test_scope_encoded_as_given(self) -> None:
        """Builders do not strip @; a remaining @ is encoded."""
        assert team_package_path('@acme', 'devs') == '/-/team/%40acme/devs/package'

    def test_team_name_encoded(self) -> None:
        """Team names are encoded as one segment."""
        assert team_package_path('acme', 'front/end') == '/-/team/acme/front%2Fend/package'

    def test_org_package(self) -> None:
        """Org packages path."""
        assert org_package_path('acme') == '/-/org/acme/package'

    def test_user_package(self) -> None:
        """User packages path."""
        assert user_package_path('myorg') == '/-/user/myorg/package'
