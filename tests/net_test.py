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

"""Tests for npmaccess.net module."""

from __future__ import annotations

import httpx
import pytest
from npmaccess.net import DEFAULT_TIMEOUT, http_client


class TestHttpClient:
    """Tests for http_client() context manager."""

    @pytest.mark.asyncio()
    async def test_defaults(self) -> None:
        """The client follows redirects and uses the default timeout."""
        async with http_client() as client:
            assert isinstance(client, httpx.AsyncClient)
            assert client.follow_redirects is True
            assert client.timeout == httpx.Timeout(DEFAULT_TIMEOUT)

    @pytest.mark.asyncio()
    async def test_custom_settings(self) -> None:
        """Timeout and pool size are applied."""
        async with http_client(timeout=5.0, pool_size=2) as client:
            assert client.timeout == httpx.Timeout(5.0)

    @pytest.mark.asyncio()
    async def test_closed_on_exit(self) -> None:
        """The client is closed when the context exits."""
        async with http_client() as client:
            pass
        assert client.is_closed
