"""サービス層向けトランスポート共通処理。"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from osuapi.config import NORMALIZER_VERSION, PARSER_VERSION, SCHEMA_VERSION, ClientConfig
from osuapi.errors import (
    OsuApiError,
    OsuGatewayError,
    OsuNotFoundError,
    OsuServerError,
    OsuTransportError,
    OsuUnauthorizedError,
)
from osuapi.http import build_request_headers, redact_url
from osuapi.parsers import parse_response
from osuapi.types import ParsedResponse, ResponseMeta

logger = logging.getLogger(__name__)

UNPARSEABLE_RESPONSE = "UNPARSEABLE_RESPONSE"


def _parse_response_with_fallback(response: httpx.Response) -> ParsedResponse:
    """レスポンスを解析し、失敗時はHTTPステータスでフォールバックする。

    Args:
        response: HTTPレスポンス。

    Returns:
        解析済みレスポンス。JSONでない本文は `error` に理由を持つ。
    """

    status = int(response.status_code)
    try:
        return parse_response(response.content, http_status=status)
    except ValueError as exc:
        text = response.text
        return ParsedResponse(
            http_status=status,
            payload=None,
            error=(
                f"{UNPARSEABLE_RESPONSE}: APIレスポンスの本文を解析できませんでした。"
                f"fallback_status={status}, parser_error={type(exc).__name__}"
            ),
            raw_response_excerpt=text[:2048],
        )


def _make_api_error(
    parsed: ParsedResponse,
    *,
    request_url: str,
    capture_full_response: bool,
    raw_text: str,
) -> OsuApiError:
    message = parsed.error or f"HTTP {parsed.http_status}"
    if parsed.payload is None:
        klass: type[OsuApiError] = OsuGatewayError
    elif parsed.http_status == 401:
        klass = OsuUnauthorizedError
    elif parsed.http_status == 404:
        klass = OsuNotFoundError
    elif parsed.http_status >= 500:
        klass = OsuServerError
    else:
        klass = OsuApiError
    return klass(
        message,
        status=parsed.http_status,
        request_url=request_url,
        raw_response_excerpt=parsed.raw_response_excerpt,
        raw_response=raw_text if capture_full_response else None,
    )


def raise_for_api_error(
    parsed: ParsedResponse,
    *,
    request_url: str,
    capture_full_response: bool,
    raw_text: str,
) -> None:
    """エラー応答のとき例外を送出する。

    HTTP 200 以外、または本文に `error` を含む場合をエラーとみなす。
    """

    if parsed.http_status == 200 and parsed.error is None:
        return
    raise _make_api_error(
        parsed,
        request_url=request_url,
        capture_full_response=capture_full_response,
        raw_text=raw_text,
    )


def build_params(config: ClientConfig, options: dict[str, Any]) -> dict[str, str]:
    """APIキーを先頭にしたクエリパラメータを構築する。未指定(None)は送らない。"""

    params = {"k": config.api_key}
    for key, value in options.items():
        if value is None:
            continue
        params[key] = str(value)
    return params


def build_meta(*, endpoint: str, request_url: str, http_status: int) -> ResponseMeta:
    """レスポンス共通メタ情報を構築する。"""

    return ResponseMeta(
        endpoint=endpoint,
        request_url=request_url,
        http_status=http_status,
        schema_version=SCHEMA_VERSION,
        parser_version=PARSER_VERSION,
        normalizer_version=NORMALIZER_VERSION,
    )


def _finish(response: httpx.Response, *, capture_full_response: bool) -> tuple[ParsedResponse, str]:
    parsed = _parse_response_with_fallback(response)
    request_url = redact_url(str(response.request.url))
    logger.debug("GET %s -> %d", request_url, response.status_code)
    raise_for_api_error(
        parsed,
        request_url=request_url,
        capture_full_response=capture_full_response,
        raw_text=response.text,
    )
    return parsed, request_url


def perform_sync_request(
    *,
    client: httpx.Client,
    endpoint: str,
    params: dict[str, str],
    user_agent: str,
    capture_full_response: bool,
) -> tuple[ParsedResponse, str]:
    """同期GET要求を1回実行する。

    Returns:
        (解析済みレスポンス, マスク済みリクエストURL)。

    Raises:
        OsuTransportError: 通信に失敗した場合。
        OsuApiError: エラー応答の場合。
    """

    headers = dict(build_request_headers(user_agent))
    try:
        response = client.get(endpoint, params=params, headers=headers)
    except httpx.HTTPError as exc:
        raise OsuTransportError(str(exc), request_url=endpoint) from exc
    return _finish(response, capture_full_response=capture_full_response)


async def perform_async_request(
    *,
    client: httpx.AsyncClient,
    endpoint: str,
    params: dict[str, str],
    user_agent: str,
    capture_full_response: bool,
) -> tuple[ParsedResponse, str]:
    """非同期GET要求を1回実行する。"""

    headers = dict(build_request_headers(user_agent))
    try:
        response = await client.get(endpoint, params=params, headers=headers)
    except httpx.HTTPError as exc:
        raise OsuTransportError(str(exc), request_url=endpoint) from exc
    return _finish(response, capture_full_response=capture_full_response)


class SyncServiceBase:
    """同期サービスの共通基底。"""

    def __init__(self, *, client: httpx.Client, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    def _get(self, endpoint: str, options: dict[str, Any]) -> tuple[ParsedResponse, ResponseMeta]:
        parsed, request_url = perform_sync_request(
            client=self._client,
            endpoint=endpoint,
            params=build_params(self._config, options),
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        meta = build_meta(endpoint=endpoint, request_url=request_url, http_status=parsed.http_status)
        return parsed, meta


class AsyncServiceBase:
    """非同期サービスの共通基底。"""

    def __init__(self, *, client: httpx.AsyncClient, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    async def _get(
        self, endpoint: str, options: dict[str, Any]
    ) -> tuple[ParsedResponse, ResponseMeta]:
        parsed, request_url = await perform_async_request(
            client=self._client,
            endpoint=endpoint,
            params=build_params(self._config, options),
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        meta = build_meta(endpoint=endpoint, request_url=request_url, http_status=parsed.http_status)
        return parsed, meta
