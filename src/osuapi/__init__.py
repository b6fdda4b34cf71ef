"""osuapi 公開API。"""

import logging

from osuapi.client import AsyncOsuClient, OsuClient
from osuapi.enums import (
    Approved,
    Genre,
    Key,
    Language,
    Mod,
    Mode,
    ScoringType,
    TeamType,
    UsernameType,
    format_mods,
    split_mods,
)
from osuapi.errors import (
    OsuApiError,
    OsuDecodeError,
    OsuDecompressError,
    OsuError,
    OsuGatewayError,
    OsuNotFoundError,
    OsuReplayError,
    OsuServerError,
    OsuTransportError,
    OsuUnauthorizedError,
    OsuValidationError,
)
from osuapi.models import RecordFrame, ReplayFrame
from osuapi.replay import decode_replay
from osuapi.types import ReplayEvent, ReplaySequence

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Approved",
    "AsyncOsuClient",
    "Genre",
    "Key",
    "Language",
    "Mod",
    "Mode",
    "OsuApiError",
    "OsuClient",
    "OsuDecodeError",
    "OsuDecompressError",
    "OsuError",
    "OsuGatewayError",
    "OsuNotFoundError",
    "OsuReplayError",
    "OsuServerError",
    "OsuTransportError",
    "OsuUnauthorizedError",
    "OsuValidationError",
    "RecordFrame",
    "ReplayEvent",
    "ReplayFrame",
    "ReplaySequence",
    "ScoringType",
    "TeamType",
    "UsernameType",
    "decode_replay",
    "format_mods",
    "split_mods",
]
