"""
repositories/frc_ranking_repo.py
--------------------------------
Data access layer for FRC event rankings.
All SQL queries related to the `frc_team_rankings` table live here.
"""

from typing import Optional

from models.frc import FrcTeamRanking
from repositories.base import BaseRepository, require, require_positive


class FrcTeamRankingRepository(BaseRepository):
    """Read-only queries on the frc_team_rankings table."""

    table = "frc_team_rankings"
    model = FrcTeamRanking
    columns = (
        "id", "frc_event_id", "team_number", "rank", "season_year",
        "wins", "losses", "ties", "ranking_points", "updated_at",
    )

    # ── READ ──────────────────────────────────────────────

    def find_by_event_order_by_rank(self, event_id: int) -> list[FrcTeamRanking]:
        """Event standings, best rank first."""
        require(event_id, "event_id")
        return self._fetch_all(
            "find_by_event_order_by_rank",
            self._select("frc_event_id = %s", order_by="rank ASC, team_number ASC"),
            (event_id,),
        )

    def find_by_event_and_team(self, event_id: int, team_number: int) -> Optional[FrcTeamRanking]:
        require(event_id, "event_id")
        require(team_number, "team_number")
        return self._fetch_one(
            "find_by_event_and_team",
            self._select("frc_event_id = %s AND team_number = %s", order_by=""),
            (event_id, team_number),
        )

    def find_by_team_number(self, team_number: int) -> list[FrcTeamRanking]:
        """A team's rankings across all seasons, most recent season first."""
        require(team_number, "team_number")
        return self._fetch_all(
            "find_by_team_number",
            self._select("team_number = %s", order_by="season_year DESC, rank ASC, id ASC"),
            (team_number,),
        )

    def find_by_team_and_season(self, team_number: int, season_year: int) -> list[FrcTeamRanking]:
        require(team_number, "team_number")
        require(season_year, "season_year")
        return self._fetch_all(
            "find_by_team_and_season",
            self._select("team_number = %s AND season_year = %s", order_by="rank ASC, id ASC"),
            (team_number, season_year),
        )

    def find_by_season(self, season_year: int) -> list[FrcTeamRanking]:
        require(season_year, "season_year")
        return self._fetch_all(
            "find_by_season",
            self._select("season_year = %s", order_by="frc_event_id ASC, rank ASC"),
            (season_year,),
        )

    def find_top_ranked(self, event_id: int, limit: int) -> list[FrcTeamRanking]:
        """The best `limit` teams at an event."""
        require(event_id, "event_id")
        require_positive(limit, "limit")
        return self._fetch_all(
            "find_top_ranked",
            self._select("frc_event_id = %s", order_by="rank ASC, team_number ASC", limit=True),
            (event_id, limit),
        )

    def count_by_event(self, event_id: int) -> int:
        require(event_id, "event_id")
        return self._count("count_by_event", "frc_event_id = %s", (event_id,))

    # ── AGGREGATES ────────────────────────────────────────

    def average_rank_by_team_and_season(self, team_number: int, season_year: int) -> Optional[float]:
        """
        Average event rank of a team over one season.

        Returns:
            The average as a float, or None if the team has no rankings that season.
        """
        require(team_number, "team_number")
        require(season_year, "season_year")
        sql = """
            SELECT AVG(rank) FROM frc_team_rankings
            WHERE team_number = %s AND season_year = %s;
        """
        value = self._fetch_scalar("average_rank_by_team_and_season", sql, (team_number, season_year))
        return float(value) if value is not None else None

    def get_average_rank_by_season(self, season_year: int) -> list[dict]:
        """
        Average rank per team for one season, best average first.

        Returns:
            List of dicts: [{'team_number': int, 'average_rank': float, 'events': int}, ...]
        """
        require(season_year, "season_year")
        sql = """
            SELECT team_number, AVG(rank) AS average_rank, COUNT(*) AS events
            FROM frc_team_rankings
            WHERE season_year = %s
            GROUP BY team_number
            ORDER BY average_rank ASC, team_number ASC;
        """
        return [
            {"team_number": r[0], "average_rank": float(r[1]), "events": r[2]}
            for r in self._fetch_rows("get_average_rank_by_season", sql, (season_year,))
        ]
