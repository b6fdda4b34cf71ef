"""CLIエントリポイント。"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from osuapi.config import API_KEY_ENV
from osuapi.models import RecordFrame, ReplayFrame, record_to_dict
from osuapi.replay import decode_replay


def _configure_logging(level: int) -> None:
    """`osuapi` ロガーにstderr出力を設定する。"""

    logger = logging.getLogger("osuapi")
    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def _user_arg(user: str, user_type: str | None) -> str | int:
    """CLI引数のユーザー指定を変換する。

    `--type` 未指定で数字のみの場合はユーザーIDとして扱う。
    """

    text = user.strip()
    if user_type is None and text.isdigit():
        return int(text)
    return text


def _require_typer() -> Any:
    try:
        import typer
    except ImportError as exc:
        raise RuntimeError(
            "CLIには typer が必要です。pip install 'osuapi[cli]' を実行してください。"
        ) from exc
    return typer


def _stringify_nested_columns(df: Any) -> Any:
    """CSV・Parquetに書けないネスト型セルをJSON文字列へ変換する。"""

    columns = list(getattr(df, "columns", []))
    for column in columns:
        values = list(df[column])
        if any(isinstance(value, (dict, list, tuple)) for value in values):
            df[column] = [
                json.dumps(value, ensure_ascii=False, sort_keys=True, default=str)
                if isinstance(value, (dict, list, tuple))
                else value
                for value in values
            ]
    return df


def _dump_frame(frame: Any, out: Path) -> None:
    suffix = out.suffix.lower()
    if suffix == ".json":
        if hasattr(frame, "to_payload"):
            payload = frame.to_payload()
        else:
            payload = {"meta": None, "records": [record_to_dict(frame)] if frame is not None else []}
        out.write_text(json.dumps(payload, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
        return
    if not hasattr(frame, "to_pandas"):
        frame = RecordFrame([frame] if frame is not None else [])
    if suffix == ".csv":
        df = frame.to_pandas()
        df = _stringify_nested_columns(df)
        df.to_csv(out, index=False)
        return
    if suffix == ".parquet":
        try:
            import pyarrow  # noqa: F401
        except ImportError as exc:
            raise RuntimeError(
                "Parquet backend is required. pip install 'osuapi[cli]' を実行してください。"
            ) from exc
        df = frame.to_pandas()
        df = _stringify_nested_columns(df)
        df.to_parquet(out, index=False)
        return
    raise ValueError("出力拡張子は .json / .csv / .parquet のみ対応です。")


def _read_replay_file(path: Path) -> ReplayFrame:
    """リプレイテキストを読み込んで復号する。

    `get_replay` の応答JSONそのもの、または `content` の値だけを保存したファイルを受け付ける。
    """

    text = path.read_text(encoding="utf-8").strip()
    if text.startswith("{"):
        text = str(json.loads(text).get("content", ""))
    return ReplayFrame(decode_replay(text))


def app_entry() -> None:
    """CLIアプリを起動する。"""

    typer = _require_typer()
    from osuapi import OsuClient

    app = typer.Typer(no_args_is_help=True)

    def key_option() -> Any:
        return typer.Option(..., "--key", envvar=API_KEY_ENV)

    @app.callback()
    def main(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
        """osu! API v1 クライアント。"""

        if verbose:
            _configure_logging(logging.DEBUG)

    @app.command("beatmaps")
    def beatmaps_command(
        key: str = key_option(),
        beatmapset_id: str | None = typer.Option(None, "--set"),
        beatmap_id: str | None = typer.Option(None, "--beatmap"),
        creator: str | None = typer.Option(None, "--creator"),
        mode: str | None = typer.Option(None, "--mode"),
        since: str | None = typer.Option(None, "--since"),
        limit: int | None = typer.Option(None, "--limit"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """譜面一覧を取得する。"""

        with OsuClient(key) as client:
            frame = client.beatmaps.get(
                beatmapset_id=beatmapset_id,
                beatmap_id=beatmap_id,
                creator=creator,
                mode=mode,
                since=since,
                limit=limit,
            )
            _dump_frame(frame, out)

    @app.command("user")
    def user_command(
        user: str = typer.Argument(...),
        key: str = key_option(),
        user_type: str | None = typer.Option(
            None, "--type", help="int または string。未指定時は数字のみならユーザーIDとして扱う。"
        ),
        mode: str | None = typer.Option(None, "--mode"),
        event_days: int | None = typer.Option(None, "--event-days"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """ユーザー情報を取得する。"""

        with OsuClient(key) as client:
            frame = client.users.get(
                _user_arg(user, user_type), user_type=user_type, mode=mode, event_days=event_days
            )
            _dump_frame(frame, out)

    @app.command("best")
    def best_command(
        user: str = typer.Argument(...),
        key: str = key_option(),
        user_type: str | None = typer.Option(
            None, "--type", help="int または string。未指定時は数字のみならユーザーIDとして扱う。"
        ),
        mode: str | None = typer.Option(None, "--mode"),
        limit: int | None = typer.Option(None, "--limit"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """ユーザーのベストスコアを取得する。"""

        with OsuClient(key) as client:
            frame = client.users.best(
                _user_arg(user, user_type), user_type=user_type, mode=mode, limit=limit
            )
            _dump_frame(frame, out)

    @app.command("recent")
    def recent_command(
        user: str = typer.Argument(...),
        key: str = key_option(),
        user_type: str | None = typer.Option(
            None, "--type", help="int または string。未指定時は数字のみならユーザーIDとして扱う。"
        ),
        mode: str | None = typer.Option(None, "--mode"),
        limit: int | None = typer.Option(None, "--limit"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """ユーザーの最近のプレイを取得する。"""

        with OsuClient(key) as client:
            frame = client.users.recent(
                _user_arg(user, user_type), user_type=user_type, mode=mode, limit=limit
            )
            _dump_frame(frame, out)

    @app.command("scores")
    def scores_command(
        beatmap_id: str = typer.Argument(...),
        key: str = key_option(),
        user: str | None = typer.Option(None, "--user"),
        mode: str | None = typer.Option(None, "--mode"),
        limit: int | None = typer.Option(None, "--limit"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """譜面のスコア一覧を取得する。"""

        with OsuClient(key) as client:
            frame = client.scores.get(
                beatmap_id,
                user=_user_arg(user, None) if user is not None else None,
                mode=mode,
                limit=limit,
            )
            _dump_frame(frame, out)

    @app.command("match")
    def match_command(
        match_id: str = typer.Argument(...),
        key: str = key_option(),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """マルチプレイ試合を取得する（.json のみ）。"""

        if out.suffix.lower() != ".json":
            raise typer.BadParameter("match は .json 出力のみ対応です。", param_hint="--out")
        with OsuClient(key) as client:
            _dump_frame(client.matches.get(match_id), out)

    @app.command("replay")
    def replay_command(
        key: str = key_option(),
        beatmap_id: str | None = typer.Option(None, "--beatmap"),
        user: str | None = typer.Option(None, "--user"),
        score_id: str | None = typer.Option(None, "--score"),
        mode: str | None = typer.Option(None, "--mode"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """リプレイを取得してイベント列に復号する。"""

        with OsuClient(key) as client:
            frame = client.replays.get(
                beatmap_id=beatmap_id,
                user=_user_arg(user, None) if user is not None else None,
                score_id=score_id,
                mode=mode,
            )
            _dump_frame(frame, out)

    @app.command("decode-replay")
    def decode_replay_command(
        source: Path = typer.Argument(..., exists=True, dir_okay=False),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """保存済みのリプレイデータをオフラインで復号する。"""

        _dump_frame(_read_replay_file(source), out)

    app()


if __name__ == "__main__":
    app_entry()
