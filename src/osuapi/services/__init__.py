"""サービス層モジュール。"""

from osuapi.services.beatmaps import AsyncBeatmapService, BeatmapService
from osuapi.services.matches import AsyncMatchService, MatchService
from osuapi.services.replays import AsyncReplayService, ReplayService
from osuapi.services.scores import AsyncScoreService, ScoreService
from osuapi.services.users import AsyncUserService, UserService

__all__ = [
    "AsyncBeatmapService",
    "AsyncMatchService",
    "AsyncReplayService",
    "AsyncScoreService",
    "AsyncUserService",
    "BeatmapService",
    "MatchService",
    "ReplayService",
    "ScoreService",
    "UserService",
]
