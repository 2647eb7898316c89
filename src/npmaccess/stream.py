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

"""Incremental decoding of JSON object responses.

Listing responses are flat JSON objects (``{"name": "write", ...}``).
:func:`iter_kv` yields their top-level entries while the body is still
arriving, so large listings are never held in memory as a whole.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import ijson

from npmaccess.errors import E, RegistryError


class _BodyReader:
    """Async file-like view of a streaming response body, as ijson expects.

    Reads are short: each returns at most what has already arrived, so
    entries are decoded as soon as their bytes are received.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._chunks = response.aiter_bytes()
        self._buffer = b''
        self._eof = False
        self.empty = True

    async def read(self, size: int = -1) -> bytes:
        while not self._buffer and not self._eof:
            try:
                chunk = await anext(self._chunks)
            except StopAsyncIteration:
                self._eof = True
            else:
                self._buffer = chunk
                self.empty = self.empty and not chunk.strip()
        if size < 0 or size >= len(self._buffer):
            data, self._buffer = self._buffer, b''
        else:
            data, self._buffer = self._buffer[:size], self._buffer[size:]
        return data


def _invalid_json(response: httpx.Response, detail: object) -> RegistryError:
    return RegistryError(
        f'Invalid JSON in response from {response.url}: {detail}',
        registry_code='EJSONPARSE',
        status_code=response.status_code,
        method=response.request.method,
        url=str(response.url),
        code=E.REGISTRY_INVALID_RESPONSE,
    )


async def iter_kv(response: httpx.Response) -> AsyncIterator[tuple[str, Any]]:  # noqa: ANN401
    """Yield the top-level ``(key, value)`` pairs of a JSON object body.

    Entries are yielded in document order. A body that is not an object
    (``null``, an array...) or is empty yields nothing.

    Raises:
        RegistryError: If the body is not valid JSON or the connection
            drops mid-stream. Entries already yielded stay yielded.
    """
    reader = _BodyReader(response)
    try:
        async for key, value in ijson.kvitems_async(reader, '', use_float=True):
            yield key, value
    except ijson.JSONError as exc:
        # An empty or all-whitespace body is an empty listing.
        if not reader.empty:
            raise _invalid_json(response, exc) from exc
    except httpx.HTTPError as exc:
        raise RegistryError(
            f'Connection to {response.url} failed mid-stream: {exc}',
            registry_code='ECONNRESET',
            status_code=response.status_code,
            method=response.request.method,
            url=str(response.url),
            code=E.REGISTRY_CONNECTION_FAILED,
        ) from exc


__all__ = [
    'iter_kv',
]
