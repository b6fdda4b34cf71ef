"""返却モデル。"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import asdict, fields, is_dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Generic, TypeVar

from osuapi.types import ReplayEvent, ResponseMeta

T = TypeVar("T")


def _plain(value: Any) -> Any:
    """JSON化できる素朴な値へ変換する。"""

    if isinstance(value, Enum):
        return int(value) if isinstance(value, int) else value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return int(value / timedelta(milliseconds=1))
    if is_dataclass(value) and not isinstance(value, type):
        return record_to_dict(value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    """dataclassレコードをJSON化できるdictへ変換する。"""

    if not is_dataclass(record):
        raise TypeError(f"dataclassではありません: {type(record).__name__}")
    return {f.name: _plain(getattr(record, f.name)) for f in fields(record)}


def _meta_to_dict(meta: ResponseMeta) -> dict[str, Any]:
    return asdict(meta)


class RecordFrame(Generic[T]):
    """一覧系APIの返却オブジェクト。"""

    def __init__(self, records: list[T], meta: ResponseMeta | None = None) -> None:
        self.records = records
        self.meta = meta

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[T]:
        return iter(self.records)

    def __getitem__(self, index: int) -> T:
        return self.records[index]

    def first(self) -> T | None:
        """先頭レコードを返す。空ならNone。"""

        return self.records[0] if self.records else None

    def to_long(self) -> list[dict[str, Any]]:
        """レコードをdictのリストへ変換する。

        列挙型は整数、日時はISO-8601文字列、経過時間はミリ秒整数になる。
        """

        return [record_to_dict(record) for record in self.records]

    def to_pandas(self) -> Any:
        """pandas.DataFrameへ変換する。"""

        try:
            import pandas as pd
        except ImportError as exc:
            raise RuntimeError("pandas が必要です。pip install 'osuapi[pandas]' を実行してください。") from exc
        return pd.DataFrame(self.to_long())

    def to_polars(self) -> Any:
        """polars.DataFrameへ変換する。"""

        try:
            import polars as pl
        except ImportError as exc:
            raise RuntimeError("polars が必要です。pip install 'osuapi[polars]' を実行してください。") from exc
        return pl.DataFrame(self.to_long())

    def to_payload(self) -> dict[str, Any]:
        """JSON保存用dictに変換する。"""

        return {
            "records": self.to_long(),
            "meta": _meta_to_dict(self.meta) if self.meta is not None else None,
        }


class ReplayFrame(RecordFrame[ReplayEvent]):
    """リプレイAPIの返却オブジェクト。"""

    @property
    def events(self) -> list[ReplayEvent]:
        """イベント列（`records` と同一）。"""

        return self.records

    @property
    def duration(self) -> timedelta:
        """全イベントの経過時間の合計。"""

        return sum((event.time_delta for event in self.records), timedelta())

    def to_long(self) -> list[dict[str, Any]]:
        """イベント列をdictのリストへ変換する。

        `time` 列に先頭からの累積ミリ秒を付与する。
        """

        rows: list[dict[str, Any]] = []
        elapsed = 0
        for event in self.records:
            row = record_to_dict(event)
            elapsed += row["time_delta"]
            row["time"] = elapsed
            rows.append(row)
        return rows
