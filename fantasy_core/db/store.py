import logging
import sqlite3
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from fantasy_core.exceptions import PersistenceError, ValidationError
from fantasy_core.models import Insight, Outcome, OutcomeStatus, ResearchResult

logger = logging.getLogger(__name__)

ACTIONABLE_THRESHOLD = 0.70
DEFAULT_WEEK = 1


def _category_key(category: Union[str, Enum]) -> str:
    return category.value if isinstance(category, Enum) else category


def init_database(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS leagues (
            league_key TEXT PRIMARY KEY,
            current_week INTEGER NOT NULL DEFAULT 1,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS ai_insights (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            query_type TEXT NOT NULL,
            query_text TEXT NOT NULL,
            response TEXT NOT NULL,
            confidence_score REAL NOT NULL,
            week INTEGER NOT NULL,
            is_actionable INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP NOT NULL
        )
    ''')

    cursor.execute('CREATE INDEX IF NOT EXISTS idx_insights_type_created ON ai_insights(query_type, created_at)')

    conn.commit()
    return conn


class InsightStore:
    """
    Append-only persistence for research answers.

    Rows are inserted once and never updated or deleted here. Readers get
    Insight copies built from the row, never a handle to it.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def save(self, category: Union[str, Enum], query_text: str, result: Optional[ResearchResult]) -> Outcome[int]:
        """
        Persist one research answer.

        Args:
            category: Research category (ai_insights.query_type)
            query_text: Prompt that produced the answer
            result: Scored answer; None is a no-op

        Returns:
            Outcome carrying the new row id, an OK outcome with no value for
            a None result, or PERSISTENCE_FAILURE. Never raises.
        """
        if result is None:
            return Outcome.success()

        week = self.current_week()
        try:
            cursor = self.conn.cursor()
            cursor.execute('''
                INSERT INTO ai_insights
                (query_type, query_text, response, confidence_score, week, is_actionable, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            ''', (
                _category_key(category),
                query_text,
                result.model_dump_json(),
                result.confidence,
                week,
                1 if result.confidence > ACTIONABLE_THRESHOLD else 0,
                datetime.now(timezone.utc).isoformat()
            ))
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to save {_category_key(category)} insight: {e}", exc_info=True)
            return Outcome.failure(OutcomeStatus.PERSISTENCE_FAILURE, PersistenceError(str(e)))

        return Outcome.success(cursor.lastrowid)

    def recent_insights(self, category: Optional[Union[str, Enum]] = None, limit: int = 10) -> list[Insight]:
        """Newest insights first, optionally narrowed to one category."""
        if limit < 1:
            raise ValidationError(f"limit must be at least 1, got {limit}")

        sql = '''
            SELECT id, query_type, query_text, response, confidence_score, week, is_actionable, created_at
            FROM ai_insights
        '''
        params: list = []
        if category:
            sql += ' WHERE query_type = ?'
            params.append(_category_key(category))
        sql += ' ORDER BY created_at DESC, id DESC LIMIT ?'
        params.append(limit)

        try:
            cursor = self.conn.cursor()
            cursor.execute(sql, params)
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read insights: {e}") from e

        insights: list[Insight] = []
        for row in rows:
            insights.append(Insight(
                id=row[0],
                query_type=row[1],
                query_text=row[2],
                response_json=row[3],
                confidence_score=row[4],
                week=row[5],
                is_actionable=bool(row[6]),
                created_at=row[7]
            ))

        return insights

    def current_week(self) -> int:
        try:
            cursor = self.conn.cursor()
            cursor.execute('SELECT current_week FROM leagues LIMIT 1')
            row = cursor.fetchone()
        except sqlite3.Error:
            logger.warning("Could not read current week, defaulting to 1", exc_info=True)
            return DEFAULT_WEEK

        if not row or row[0] is None:
            return DEFAULT_WEEK

        try:
            week = int(row[0])
        except (TypeError, ValueError):
            logger.warning(f"Current week {row[0]!r} is not a number, defaulting to 1")
            return DEFAULT_WEEK

        return week if week >= 1 else DEFAULT_WEEK

    def set_current_week(self, week: int, league_key: str = "default") -> None:
        if week < 1:
            raise ValidationError(f"week must be at least 1, got {week}")

        cursor = self.conn.cursor()
        cursor.execute('''
            INSERT OR REPLACE INTO leagues (league_key, current_week, updated_at)
            VALUES (?, ?, ?)
        ''', (league_key, week, datetime.now(timezone.utc).isoformat()))
        self.conn.commit()
