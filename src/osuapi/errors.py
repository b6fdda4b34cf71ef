"""例外定義。"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class OsuErrorContext:
    """例外に付随する共通コンテキスト。

    Attributes:
        request_url: リクエストURL（APIキーはマスク済み）。
        raw_response_excerpt: レスポンス抜粋。
        raw_response: 完全レスポンス。
    """

    request_url: str | None = None
    raw_response_excerpt: str | None = None
    raw_response: str | None = None


class OsuError(Exception):
    """ライブラリ例外の基底クラス。

    Attributes:
        origin: 例外発生元。
        context: 追加コンテキスト。
    """

    def __init__(
        self,
        message: str,
        *,
        origin: str,
        context: OsuErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.origin = origin
        self.context = context or OsuErrorContext()


class OsuApiError(OsuError):
    """API応答由来の例外。"""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        request_url: str,
        raw_response_excerpt: str | None = None,
        raw_response: str | None = None,
    ) -> None:
        super().__init__(
            message,
            origin="server_response",
            context=OsuErrorContext(
                request_url=request_url,
                raw_response_excerpt=raw_response_excerpt,
                raw_response=raw_response,
            ),
        )
        self.status = status
        self.message = message


class OsuUnauthorizedError(OsuApiError):
    """HTTP 401（APIキー不正）の例外。"""


class OsuNotFoundError(OsuApiError):
    """HTTP 404の例外。"""


class OsuServerError(OsuApiError):
    """HTTP 5xxの例外。"""


class OsuGatewayError(OsuApiError):
    """上流ゲートウェイ等の非JSON応答。"""


class OsuTransportError(OsuError):
    """HTTP通信層の例外。"""

    def __init__(self, message: str, *, request_url: str | None = None) -> None:
        super().__init__(
            message,
            origin="transport",
            context=OsuErrorContext(request_url=request_url),
        )


class OsuValidationError(OsuError):
    """送信前バリデーションエラー。"""

    def __init__(self, message: str, *, validation_code: str) -> None:
        super().__init__(message, origin="client_validation")
        self.validation_code = validation_code


class OsuReplayError(OsuError):
    """リプレイデータ復号の例外。"""

    def __init__(self, message: str) -> None:
        super().__init__(message, origin="replay_decode")


class OsuDecodeError(OsuReplayError):
    """base64として解釈できないリプレイデータ。"""


class OsuDecompressError(OsuReplayError):
    """LZMAストリームの破損・途中切れ。"""
