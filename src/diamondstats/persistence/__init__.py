"""SQLite storage for players, positions and player statistics."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from diamondstats.models import (
    COUNT_FIELDS,
    RATE_FIELDS,
    STAT_FIELDS,
    Player,
    PlayerStatistic,
    PlayerSummary,
    Position,
    StatLine,
)


logger = logging.getLogger(__name__)

_SUMMARY_SELECT = """
    SELECT
        p.id AS id,
        p.name AS name,
        p.description AS description,
        pos.abbreviation AS position,
        pos.name AS position_name,
        {stat_columns},
        CASE
            WHEN s.id IS NULL THEN NULL
            WHEN s.games > 0 THEN CAST(s.hits AS REAL) / s.games
            ELSE 0.0
        END AS hits_per_game
    FROM players p
    LEFT JOIN player_statistics s ON s.player_id = p.id
    LEFT JOIN positions pos ON pos.id = s.position_id
""".format(stat_columns=", ".join(f"s.{field} AS {field}" for field in STAT_FIELDS))


def _round_rate(value: float | None) -> float | None:
    if value is None:
        return None
    return round(float(value), 3)


class StatsRepository:
    """Entity-level reads and writes bound to one open connection."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    # positions

    def find_position(self, abbreviation: str) -> Optional[Position]:
        row = self._conn.execute(
            "SELECT * FROM positions WHERE abbreviation = ?",
            (abbreviation,),
        ).fetchone()
        return self._row_to_position(row) if row is not None else None

    def upsert_position(self, abbreviation: str, name: str) -> Position:
        """Return the position for ``abbreviation``, creating it with ``name`` if missing.

        An existing position keeps its original display name.
        """

        self._conn.execute(
            """
            INSERT INTO positions (abbreviation, name) VALUES (?, ?)
            ON CONFLICT(abbreviation) DO NOTHING
            """,
            (abbreviation, name),
        )
        position = self.find_position(abbreviation)
        if position is None:  # pragma: no cover
            raise KeyError(f"Position {abbreviation} not found after upsert")
        return position

    def delete_all_positions(self) -> int:
        return self._conn.execute("DELETE FROM positions").rowcount

    # players

    def get_player(self, player_id: int) -> Optional[Player]:
        row = self._conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        return self._row_to_player(row) if row is not None else None

    def find_player(self, name: str) -> Optional[Player]:
        row = self._conn.execute("SELECT * FROM players WHERE name = ?", (name,)).fetchone()
        return self._row_to_player(row) if row is not None else None

    def upsert_player(self, name: str) -> Player:
        # name is both the match key and the only written column
        self._conn.execute(
            """
            INSERT INTO players (name) VALUES (?)
            ON CONFLICT(name) DO UPDATE SET name = excluded.name
            """,
            (name,),
        )
        player = self.find_player(name)
        if player is None:  # pragma: no cover
            raise KeyError(f"Player {name!r} not found after upsert")
        return player

    def update_player(
        self,
        player_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise KeyError(f"Player {player_id} not found")
        self._conn.execute(
            "UPDATE players SET name = ?, description = ? WHERE id = ?",
            (
                name if name is not None else player.name,
                description if description is not None else player.description,
                player_id,
            ),
        )
        updated = self.get_player(player_id)
        if updated is None:  # pragma: no cover
            raise KeyError(f"Player {player_id} not found after update")
        return updated

    def list_players(self) -> List[Player]:
        rows = self._conn.execute("SELECT * FROM players ORDER BY id").fetchall()
        return [self._row_to_player(row) for row in rows]

    def delete_all_players(self) -> int:
        return self._conn.execute("DELETE FROM players").rowcount

    # statistics

    def find_statistic(self, player_id: int) -> Optional[PlayerStatistic]:
        row = self._conn.execute(
            """
            SELECT s.*, pos.abbreviation AS position_abbreviation, pos.name AS position_name
            FROM player_statistics s
            LEFT JOIN positions pos ON pos.id = s.position_id
            WHERE s.player_id = ?
            """,
            (player_id,),
        ).fetchone()
        return self._row_to_statistic(row) if row is not None else None

    def upsert_statistic(self, player_id: int, position_id: int, stats: StatLine) -> PlayerStatistic:
        """Insert or fully replace the single statistics row of ``player_id``."""

        columns = ("player_id", "position_id") + STAT_FIELDS
        placeholders = ", ".join("?" for _ in columns)
        assignments = ", ".join(
            f"{column} = excluded.{column}" for column in columns if column != "player_id"
        )
        self._conn.execute(
            f"""
            INSERT INTO player_statistics ({", ".join(columns)}) VALUES ({placeholders})
            ON CONFLICT(player_id) DO UPDATE SET {assignments}
            """,
            (player_id, position_id, *self._stat_params(stats)),
        )
        statistic = self.find_statistic(player_id)
        if statistic is None:  # pragma: no cover
            raise KeyError(f"Statistics for player {player_id} not found after upsert")
        return statistic

    def update_statistic(self, player_id: int, stats: StatLine) -> bool:
        """Overwrite the stat fields of an existing row; returns False when there is none."""

        assignments = ", ".join(f"{field} = ?" for field in STAT_FIELDS)
        cursor = self._conn.execute(
            f"UPDATE player_statistics SET {assignments} WHERE player_id = ?",
            (*self._stat_params(stats), player_id),
        )
        return cursor.rowcount > 0

    def delete_all_statistics(self) -> int:
        return self._conn.execute("DELETE FROM player_statistics").rowcount

    # projections

    def fetch_summaries(self, order_by: str) -> List[PlayerSummary]:
        """Return one flattened row per player.

        ``order_by`` is interpolated verbatim and must come from a fixed allow-list.
        """

        rows = self._conn.execute(f"{_SUMMARY_SELECT} ORDER BY {order_by}").fetchall()
        return [PlayerSummary.model_validate(dict(row)) for row in rows]

    def get_summary(self, player_id: int) -> Optional[PlayerSummary]:
        row = self._conn.execute(f"{_SUMMARY_SELECT} WHERE p.id = ?", (player_id,)).fetchone()
        return PlayerSummary.model_validate(dict(row)) if row is not None else None

    def counts(self) -> dict[str, int]:
        return {
            table: self._conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            for table in ("players", "positions", "player_statistics")
        }

    def _stat_params(self, stats: StatLine) -> tuple:
        counts = tuple(int(getattr(stats, field)) for field in COUNT_FIELDS)
        rates = tuple(_round_rate(getattr(stats, field)) for field in RATE_FIELDS)
        return counts + rates

    def _row_to_position(self, row: sqlite3.Row) -> Position:
        return Position(id=row["id"], abbreviation=row["abbreviation"], name=row["name"])

    def _row_to_player(self, row: sqlite3.Row) -> Player:
        return Player(id=row["id"], name=row["name"], description=row["description"])

    def _row_to_statistic(self, row: sqlite3.Row) -> PlayerStatistic:
        position = None
        if row["position_abbreviation"] is not None:
            position = Position(
                id=row["position_id"],
                abbreviation=row["position_abbreviation"],
                name=row["position_name"],
            )
        return PlayerStatistic(
            id=row["id"],
            player_id=row["player_id"],
            position_id=row["position_id"],
            position=position,
            **{field: row[field] for field in STAT_FIELDS},
        )


class StatsStore:
    """SQLite-backed store for imported player statistics."""

    def __init__(self, db_path: Path | str):
        self._use_uri = isinstance(db_path, str) and db_path.startswith("file:")
        self.db_path = db_path if self._use_uri else Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        # autocommit; multi-statement writes go through transaction()
        conn = sqlite3.connect(self.db_path, uri=self._use_uri, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        count_columns = ",\n".join(
            f"                {field} INTEGER NOT NULL DEFAULT 0 CHECK ({field} >= 0)"
            for field in COUNT_FIELDS
        )
        rate_columns = ",\n".join(f"                {field} REAL" for field in RATE_FIELDS)
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                description TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS positions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                abbreviation TEXT NOT NULL UNIQUE
            )
            """
        )
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS player_statistics (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                player_id INTEGER NOT NULL UNIQUE
                    REFERENCES players(id) ON DELETE CASCADE,
                position_id INTEGER NOT NULL
                    REFERENCES positions(id) ON DELETE CASCADE,
{count_columns},
{rate_columns}
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_player_statistics_position ON player_statistics(position_id)"
        )

    @contextmanager
    def session(self) -> Iterator[StatsRepository]:
        """Repository in autocommit mode, for reads and single-statement writes."""

        with closing(self._connect()) as conn:
            yield StatsRepository(conn)

    @contextmanager
    def transaction(self) -> Iterator[StatsRepository]:
        """Repository whose writes commit together or not at all."""

        with closing(self._connect()) as conn:
            conn.execute("BEGIN")
            logger.debug("Transaction started")
            try:
                yield StatsRepository(conn)
            except Exception:
                # sqlite may already have rolled back on its own (SQLITE_FULL, IOERR)
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                logger.debug("Transaction rolled back")
                raise
            conn.execute("COMMIT")
            logger.debug("Transaction committed")
