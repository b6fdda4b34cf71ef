"""マルチプレイAPIサービス。"""

from __future__ import annotations

from osuapi.normalize import normalize_match
from osuapi.services._transport import AsyncServiceBase, SyncServiceBase
from osuapi.types import Match, ParsedResponse
from osuapi.validation import normalize_identifier

ENDPOINT = "/get_match"


def _to_match(parsed: ParsedResponse) -> Match:
    payload = parsed.payload if isinstance(parsed.payload, dict) else {}
    return normalize_match(payload)


class MatchService(SyncServiceBase):
    """同期マルチプレイ試合取得サービス。"""

    def get(self, match_id: str | int) -> Match:
        """試合情報を取得する。"""

        parsed, _ = self._get(ENDPOINT, {"mp": normalize_identifier(match_id, param_name="mp")})
        return _to_match(parsed)


class AsyncMatchService(AsyncServiceBase):
    """非同期マルチプレイ試合取得サービス。"""

    async def get(self, match_id: str | int) -> Match:
        """試合情報を取得する。"""

        parsed, _ = await self._get(
            ENDPOINT, {"mp": normalize_identifier(match_id, param_name="mp")}
        )
        return _to_match(parsed)
