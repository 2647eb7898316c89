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

"""Registry fetch helper.

Sends one request for a registry API path and hands back the streaming
response. Callers decide whether to drain the body, decode it whole, or
decode it incrementally.

Request shaping::

    RequestOptions ──► registry URL   scoped registry for the spec/scope,
                                      else config.registry
                   ──► headers        accept, user-agent, npm-scope,
                                      authorization, npm-otp, extras
                   ──► json / params  body, query minus None values

Any non-2xx response becomes a :class:`~npmaccess.errors.RegistryError`
whose ``registry_code`` is ``E<status>`` (``E404``, ``E403``...). Transport
failures use ``ECONNECTION``. Nothing is retried.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from npmaccess.config import RequestOptions
from npmaccess.errors import E, RegistryError
from npmaccess.logging import get_logger
from npmaccess.net import http_client

log = get_logger('npmaccess.fetch')

ACCEPT = 'application/json'


def registry_url(options: RequestOptions, uri: str) -> str:
    """Return the absolute URL for ``uri`` on the registry serving the request."""
    scope = options.spec.scope if options.spec is not None else None
    registry = options.config.registry_for(scope or options.scope)
    return registry.rstrip('/') + uri


def request_headers(options: RequestOptions) -> dict[str, str]:
    """Return the headers sent with a request."""
    config = options.config
    headers = {
        'accept': ACCEPT,
        'user-agent': config.user_agent,
    }
    scope = options.spec.scope if options.spec is not None else None
    scope = scope or options.scope
    if scope:
        headers['npm-scope'] = scope if scope.startswith('@') else f'@{scope}'
    if config.token:
        headers['authorization'] = f'Bearer {config.token}'
    if config.otp:
        headers['npm-otp'] = config.otp
    headers.update(config.headers)
    return headers


def _query_params(options: RequestOptions) -> dict[str, str] | None:
    if not options.query:
        return None
    return {key: value for key, value in options.query.items() if value is not None}


@asynccontextmanager
async def _client(options: RequestOptions) -> AsyncGenerator[httpx.AsyncClient]:
    config = options.config
    if config.client is not None:
        yield config.client
        return
    async with http_client(pool_size=config.pool_size, timeout=config.timeout) as client:
        yield client


def _error_message(response: httpx.Response) -> str:
    """Return the ``error`` field of a JSON error body, if there is one."""
    try:
        data = response.json()
    except (ValueError, UnicodeDecodeError):
        return ''
    if isinstance(data, dict):
        return str(data.get('error') or data.get('message') or '')
    return ''


async def _raise_for_status(response: httpx.Response, method: str, url: str) -> None:
    if response.is_success:
        return
    await response.aread()
    status = response.status_code
    detail = _error_message(response)
    message = f'{status} {response.reason_phrase} - {method} {url}'
    if detail:
        message = f'{message} - {detail}'
    raise RegistryError(
        message,
        registry_code=f'E{status}',
        status_code=status,
        method=method,
        url=url,
        body=response.text,
    )


@asynccontextmanager
async def registry_fetch(uri: str, options: RequestOptions) -> AsyncGenerator[httpx.Response]:
    """Send a request for ``uri`` and yield the unread, streaming response.

    The response is closed when the context exits.

    Args:
        uri: API path starting with ``/``, already percent-encoded.
        options: Method, body, query and context of the request.

    Raises:
        RegistryError: On transport failure or a non-2xx response.
    """
    method = options.method
    url = registry_url(options, uri)
    async with _client(options) as client:
        request = client.build_request(
            method,
            url,
            json=options.body,
            params=_query_params(options),
            headers=request_headers(options),
        )
        log.debug('registry_request', method=method, url=str(request.url))
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise RegistryError(
                f'{method} {url} failed: {exc}',
                registry_code='ECONNECTION',
                method=method,
                url=url,
                code=E.REGISTRY_CONNECTION_FAILED,
                hint='Check network connectivity and the registry URL.',
            ) from exc
        try:
            log.debug('registry_response', method=method, url=url, status=response.status_code)
            await _raise_for_status(response, method, url)
            yield response
        finally:
            await response.aclose()


async def fetch_json(uri: str, options: RequestOptions) -> Any:  # noqa: ANN401 - decoded JSON
    """Send a request for ``uri`` and return the decoded JSON body.

    An empty body decodes to ``None``.

    Raises:
        RegistryError: On transport failure, a non-2xx response, or a body
            that is not JSON.
    """
    async with registry_fetch(uri, options) as response:
        try:
            content = await response.aread()
        except httpx.HTTPError as exc:
            raise RegistryError(
                f'{options.method} {response.url} failed while reading the body: {exc}',
                registry_code='ECONNRESET',
                status_code=response.status_code,
                method=options.method,
                url=str(response.url),
                code=E.REGISTRY_CONNECTION_FAILED,
            ) from exc
    if not content.strip():
        return None
    try:
        return json.loads(content)
    except ValueError as exc:
        raise RegistryError(
            f'Invalid JSON in response to {options.method} {uri}: {exc}',
            registry_code='EJSONPARSE',
            status_code=response.status_code,
            method=options.method,
            url=str(response.url),
            code=E.REGISTRY_INVALID_RESPONSE,
        ) from exc


async def drain(uri: str, options: RequestOptions) -> bool:
    """Send a request for ``uri``, discard the body, and return ``True``.

    Raises:
        RegistryError: On transport failure or a non-2xx response.
    """
    async with registry_fetch(uri, options) as response:
        try:
            async for _ in response.aiter_bytes():
                pass
        except httpx.HTTPError as exc:
            raise RegistryError(
                f'{options.method} {response.url} failed while reading the body: {exc}',
                registry_code='ECONNRESET',
                status_code=response.status_code,
                method=options.method,
                url=str(response.url),
                code=E.REGISTRY_CONNECTION_FAILED,
            ) from exc
    return True


__all__ = [
    'ACCEPT',
    'drain',
    'fetch_json',
    'registry_fetch',
    'registry_url',
    'request_headers',
]
