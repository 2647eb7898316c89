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

"""Fake npm registry for tests.

Provides a :class:`FakeRegistry` that answers requests through
:class:`httpx.MockTransport` and records every request it receives, so
tests can assert on method, path, query, body and headers without any
network access.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx
from npmaccess.config import AccessConfig

REGISTRY_URL = 'https://registry.test/'


@dataclass(frozen=True)
class RecordedRequest:
    """One request received by :class:`FakeRegistry`."""

    method: str
    path: str
    query: dict[str, str]
    body: Any  # noqa: ANN401 - decoded JSON body
    headers: httpx.Headers
    url: str


class ChunkedStream(httpx.AsyncByteStream):
    """Response body delivered in the given chunks, optionally failing after them."""

    def __init__(self, chunks: Iterable[bytes], *, fail_with: Exception | None = None) -> None:
        """Initialize with the chunks to send and an optional error to raise last."""
        self._chunks = list(chunks)
        self._fail_with = fail_with

    async def __aiter__(self) -> AsyncIterator[bytes]:
        """Yield each chunk, then raise the configured error if any."""
        for chunk in self._chunks:
            yield chunk
        if self._fail_with is not None:
            raise self._fail_with


@dataclass
class FakeRegistry:
    """Configurable registry test double.

    ``routes`` maps ``(method, raw_path)`` to either ``(status, body)`` or
    an :class:`httpx.Response`. ``body`` may be a ``dict`` (sent as JSON),
    ``bytes`` or ``str``. Unrouted requests get a 404 with a JSON error body.
    """

    routes: dict[tuple[str, str], Any] = field(default_factory=dict)  # noqa: ANN401
    requests: list[RecordedRequest] = field(default_factory=list)

    def route(self, method: str, path: str, status: int = 200, body: Any = None) -> None:  # noqa: ANN401
        """Answer ``method path`` with ``status`` and ``body``."""
        self.routes[(method, path)] = (status, body)

    def route_response(self, method: str, path: str, response: httpx.Response) -> None:
        """Answer ``method path`` with a prepared response."""
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        """Record ``request`` and return the routed response."""
        content = request.content
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.url.raw_path.decode('ascii').split('?', 1)[0],
                query=dict(request.url.params),
                body=json.loads(content) if content else None,
                headers=request.headers,
                url=str(request.url),
            ),
        )
        key = (request.method, self.requests[-1].path)
        routed = self.routes.get(key)
        if routed is None:
            return httpx.Response(404, json={'error': 'Not found'})
        if isinstance(routed, httpx.Response):
            return routed
        status, body = routed
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, content=body or b'')

    def client(self) -> httpx.AsyncClient:
        """Return an async client wired to this fake."""
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def config(self, **kwargs: Any) -> AccessConfig:  # noqa: ANN401
        """Return an :class:`AccessConfig` that talks to this fake."""
        kwargs.setdefault('registry', REGISTRY_URL)
        return AccessConfig(client=self.client(), **kwargs)

    @property
    def paths(self) -> list[str]:
        """Raw paths of all recorded requests, in order."""
        return [r.path for r in self.requests]
