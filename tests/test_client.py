"""OsuClient のテスト。"""

from __future__ import annotations

import base64
import json
import lzma
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import httpx
import pytest

from osuapi import (
    Approved,
    Genre,
    Language,
    Mod,
    Mode,
    OsuApiError,
    OsuClient,
    OsuDecodeError,
    OsuGatewayError,
    OsuNotFoundError,
    OsuServerError,
    OsuTransportError,
    OsuUnauthorizedError,
    OsuValidationError,
)

BASE_URL = "https://example.invalid/api"


def _client(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> OsuClient:
    transport = httpx.MockTransport(handler)
    http_client = httpx.Client(transport=transport, base_url=BASE_URL)
    return OsuClient("secret-key", http_client=http_client, base_url=BASE_URL, **kwargs)


def _json_response(
    request: httpx.Request,
    payload: Any,
    *,
    status_code: int = 200,
) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
        request=request,
    )


BEATMAP_ROW = {
    "beatmapset_id": "39804",
    "beatmap_id": "129891",
    "approved": "1",
    "total_length": "142",
    "hit_length": "109",
    "version": "FOUR DIMENSIONS",
    "file_md5": "c8f08438204abfcdd1a748ebfae67421",
    "diff_size": "4",
    "diff_overall": "8",
    "diff_approach": "9",
    "diff_drain": "7",
    "mode": "0",
    "approved_date": "2013-06-22 09:45:01",
    "last_update": "2013-06-22 09:29:03",
    "artist": "xi",
    "title": "FREEDOM DiVE",
    "creator": "Nakagawa-Kanon",
    "creator_id": "87065",
    "bpm": "222.22",
    "source": "BMS",
    "tags": "parousia",
    "genre_id": "2",
    "language_id": "5",
    "favourite_count": "7150",
    "playcount": "7361838",
    "passcount": "731029",
    "max_combo": "2385",
    "difficultyrating": "7.07",
    "rating": "9.4",
}


def test_beatmaps_query_and_normalization() -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return _json_response(request, [BEATMAP_ROW])

    with _client(handler) as client:
        frame = client.beatmaps.get(
            beatmap_id=129891,
            creator="Nakagawa-Kanon",
            mode="taiko",
            include_converted=True,
            since=datetime(2013, 1, 1),
            limit=1000,
            mods=[Mod.HIDDEN, Mod.DOUBLE_TIME],
        )

    url = seen[0]
    assert url.path == "/api/get_beatmaps"
    assert url.params["k"] == "secret-key"
    assert url.params["b"] == "129891"
    assert url.params["u"] == "Nakagawa-Kanon"
    assert url.params["type"] == "string"
    assert url.params["m"] == "1"
    assert url.params["a"] == "1"
    assert url.params["since"] == "2013-01-01"
    assert url.params["limit"] == "500"
    assert url.params["mods"] == "72"
    assert "s" not in url.params

    beatmap = frame.first()
    assert beatmap is not None
    assert beatmap.approved is Approved.RANKED
    assert beatmap.approved_date == datetime(2013, 6, 22, 9, 45, 1, tzinfo=timezone.utc)
    assert beatmap.last_update == datetime(2013, 6, 22, 9, 29, 3, tzinfo=timezone.utc)
    assert beatmap.mode is Mode.OSU
    assert beatmap.genre_id is Genre.VIDEO_GAME
    assert beatmap.language_id is Language.INSTRUMENTAL
    assert beatmap.bpm == pytest.approx(222.22)
    assert beatmap.max_combo == 2385
    assert beatmap.extras == {"rating": "9.4"}
    assert frame.meta is not None
    assert "secret-key" not in frame.meta.request_url
    assert "k=***" in frame.meta.request_url


def test_beatmaps_limit_is_clamped_to_one() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["limit"] == "1"
        return _json_response(request, [])

    with _client(handler) as client:
        frame = client.beatmaps.get(limit=0)

    assert len(frame) == 0
    assert frame.first() is None


def test_unknown_enum_codes_are_kept_as_int() -> None:
    row = dict(BEATMAP_ROW, genre_id="42", approved="9")

    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, [row])

    with _client(handler) as client:
        beatmap = client.beatmaps.get()[0]

    assert beatmap.genre_id == 42
    assert not isinstance(beatmap.genre_id, Genre)
    assert beatmap.approved == 9


def test_user_returns_single_user_with_events() -> None:
    payload = [
        {
            "user_id": "2",
            "username": "peppy",
            "join_date": "2007-08-28 03:09:12",
            "count300": "1000",
            "playcount": "300",
            "pp_raw": "123.45",
            "accuracy": "98.5",
            "level": "60.1",
            "country": "AU",
            "pp_country_rank": "1000",
            "events": [
                {
                    "display_html": "<b>peppy</b> achieved rank #1",
                    "beatmap_id": "1",
                    "beatmapset_id": "1",
                    "date": "2020-01-01 00:00:00",
                    "epicfactor": "2",
                }
            ],
        }
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/get_user"
        assert request.url.params["u"] == "2"
        assert request.url.params["type"] == "int"
        assert request.url.params["event_days"] == "31"
        return _json_response(request, payload)

    with _client(handler) as client:
        user = client.users.get(2, event_days=90)

    assert user is not None
    assert user.username == "peppy"
    assert user.join_date == datetime(2007, 8, 28, 3, 9, 12, tzinfo=timezone.utc)
    assert user.pp_raw == pytest.approx(123.45)
    assert user.count100 is None
    assert user.events[0].date == datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert user.events[0].epicfactor == 2


def test_user_returns_none_when_not_found() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, [])

    with _client(handler) as client:
        assert client.users.get("nobody") is None


def test_user_best_and_recent_limits() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen[request.url.path] = request.url.params["limit"]
        row = {
            "beatmap_id": "129891",
            "score_id": "1",
            "score": "1000",
            "enabled_mods": "24",
            "perfect": "1",
            "date": "2020-02-03 04:05:06",
            "rank": "SH",
            "pp": "300.5",
            "replay_available": "0",
        }
        return _json_response(request, [row])

    with _client(handler) as client:
        best = client.users.best("peppy", limit=500)
        recent = client.users.recent("peppy", limit=500)

    assert seen == {"/api/get_user_best": "100", "/api/get_user_recent": "50"}
    assert best[0].enabled_mods == Mod.HIDDEN | Mod.HARD_ROCK
    assert best[0].perfect is True
    assert best[0].replay_available is False
    assert best[0].pp == pytest.approx(300.5)
    assert recent[0].rank == "SH"


def test_scores_requires_beatmap_and_folds_mods() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["b"] == "129891"
        assert request.url.params["mods"] == "16"
        assert request.url.params["limit"] == "100"
        row = {
            "score_id": "7",
            "score": "132408001",
            "username": "Cookiezi",
            "maxcombo": "2385",
            "enabled_mods": "16",
            "date": "2013-06-22 10:00:00",
            "rank": "X",
            "pp": "800",
            "replay_available": "1",
        }
        return _json_response(request, [row])

    with _client(handler) as client:
        frame = client.scores.get("129891", mods=[Mod.HARD_ROCK], limit=101)

    score = frame[0]
    assert score.username == "Cookiezi"
    assert score.enabled_mods == Mod.HARD_ROCK
    assert score.replay_available is True

    with _client(handler) as client:
        with pytest.raises(OsuValidationError):
            client.scores.get(" ")


def test_match_normalization() -> None:
    payload = {
        "match": {
            "match_id": "1936471",
            "name": "OWC: (France) vs (Germany)",
            "start_time": "2016-01-01 10:00:00",
            "end_time": None,
        },
        "games": [
            {
                "game_id": "1",
                "start_time": "2016-01-01 10:05:00",
                "end_time": "2016-01-01 10:08:00",
                "beatmap_id": "129891",
                "play_mode": "0",
                "match_type": "0",
                "scoring_type": "3",
                "team_type": "2",
                "mods": "1",
                "scores": [
                    {"slot": "0", "team": "1", "user_id": "2", "score": "1000", "pass": "1", "perfect": "0"}
                ],
            }
        ],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["mp"] == "1936471"
        return _json_response(request, payload)

    with _client(handler) as client:
        match = client.matches.get(1936471)

    assert match.match.name.startswith("OWC")
    assert match.match.end_time is None
    game = match.games[0]
    assert game.end_time == datetime(2016, 1, 1, 10, 8, tzinfo=timezone.utc)
    assert game.mods == Mod.NO_FAIL
    assert int(game.scoring_type or 0) == 3
    assert game.scores[0].passed is True
    assert game.scores[0].enabled_mods is None


def test_unknown_match_returns_empty_match() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, {"match": 0, "games": []})

    with _client(handler) as client:
        match = client.matches.get(999999999)

    assert match.match.match_id == ""
    assert match.match.start_time is None
    assert match.games == []


def test_replay_endpoint_decodes_content() -> None:
    compressed = lzma.compress(b"0|1.0|2.0|0,16|3.0|4.0|1,-12345|0|0|999", format=lzma.FORMAT_ALONE)
    content = base64.b64encode(compressed).decode("ascii")

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/get_replay"
        assert request.url.params["s"] == "2177560145"
        return _json_response(request, {"content": content, "encoding": "base64"})

    with _client(handler) as client:
        frame = client.replays.get(score_id=2177560145)

    assert len(frame.events) == 2
    assert frame.events[1].time_delta == timedelta(milliseconds=16)
    assert frame.duration == timedelta(milliseconds=16)


def test_replay_endpoint_propagates_decode_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, {"content": "@@not base64@@", "encoding": "base64"})

    with _client(handler) as client:
        with pytest.raises(OsuDecodeError):
            client.replays.get(beatmap_id=1, user="peppy")


def test_replay_requires_target() -> None:
    with _client(lambda request: _json_response(request, {})) as client:
        with pytest.raises(OsuValidationError):
            client.replays.get(beatmap_id=1)


def test_error_member_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, {"error": "Replay not available."})

    with _client(handler) as client:
        with pytest.raises(OsuApiError) as exc_info:
            client.replays.get(beatmap_id=1, user=2)

    assert str(exc_info.value) == "Replay not available."
    assert exc_info.value.status == 200


def test_unauthorized_maps_to_specific_error_and_redacts_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, {"error": "Please provide a valid API key."}, status_code=401)

    with _client(handler, capture_full_response=True) as client:
        with pytest.raises(OsuUnauthorizedError) as exc_info:
            client.beatmaps.get()

    exc = exc_info.value
    assert exc.status == 401
    assert exc.context.request_url is not None
    assert "secret-key" not in exc.context.request_url
    assert exc.context.raw_response is not None


def test_404_maps_to_not_found_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, {"error": "Not found"}, status_code=404)

    with _client(handler) as client:
        with pytest.raises(OsuNotFoundError) as exc_info:
            client.scores.get(1)

    assert exc_info.value.status == 404
    assert str(exc_info.value) == "Not found"


def test_html_body_maps_to_gateway_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=502,
            content=b"<html><body><h1>Bad Gateway</h1></body></html>",
            headers={"content-type": "text/html"},
            request=request,
        )

    with _client(handler) as client:
        with pytest.raises(OsuGatewayError) as exc_info:
            client.beatmaps.get()

    assert exc_info.value.status == 502
    assert exc_info.value.context.raw_response is None


def test_json_5xx_maps_to_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _json_response(request, [], status_code=503)

    with _client(handler) as client:
        with pytest.raises(OsuServerError):
            client.beatmaps.get()


def test_transport_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(OsuTransportError) as exc_info:
            client.beatmaps.get()

    assert exc_info.value.origin == "transport"


def test_client_rejects_blank_key() -> None:
    with pytest.raises(OsuValidationError):
        OsuClient("  ")
