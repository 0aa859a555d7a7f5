"""Season and election overview statistics."""

from dataclasses import asdict, fields
from typing import Any, Iterable, Optional

import pandas as pd

from .models import CandidateRecord, ConstituencySummary, Country, MatchRecord, TeamSeason


def _frame(records: Iterable[Any], record_type: type) -> pd.DataFrame:
    columns = [f.name for f in fields(record_type)]
    return pd.DataFrame([asdict(r) for r in records], columns=columns)


def _counts(series: pd.Series) -> dict:
    return {key: int(value) for key, value in series.items()}


# ============================================================================
# Football
# ============================================================================


def season_overview(matches: Iterable[MatchRecord]) -> dict[str, Any]:
    """Team counts, goal totals and home/away/draw split for a season."""
    df = _frame(matches, MatchRecord)
    played = len(df)
    home_goals = int(df["home_score"].sum())
    away_goals = int(df["away_score"].sum())
    margin = df["home_score"].astype("int64") - df["away_score"].astype("int64")

    return {
        "matches": played,
        "home_teams": int(df["home_team"].nunique()),
        "away_teams": int(df["away_team"].nunique()),
        "home_goals": home_goals,
        "away_goals": away_goals,
        "average_home_score": round(home_goals / played, 2) if played else 0.0,
        "average_away_score": round(away_goals / played, 2) if played else 0.0,
        "home_wins": int((margin > 0).sum()),
        "away_wins": int((margin < 0).sum()),
        "draws": int((margin == 0).sum()),
    }


def score_frequencies(matches: Iterable[MatchRecord]) -> dict[str, dict]:
    """How many matches ended with each home score, away score and full score."""
    df = _frame(matches, MatchRecord)
    scores = df.groupby(["home_score", "away_score"]).size()
    return {
        "home_goals": _counts(df.groupby("home_score").size()),
        "away_goals": _counts(df.groupby("away_score").size()),
        "scores": {f"{home}-{away}": int(n) for (home, away), n in scores.items()},
    }


def team_record(matches: Iterable[MatchRecord], team: str) -> dict[str, Any]:
    """Home wins, away wins and draws for one team (case-insensitive)."""
    df = _frame(matches, MatchRecord)
    wanted = team.casefold()
    home = df["home_team"].str.casefold() == wanted
    away = df["away_team"].str.casefold() == wanted
    margin = df["home_score"].astype("int64") - df["away_score"].astype("int64")

    return {
        "team": team,
        "played": int((home | away).sum()),
        "home_wins": int((home & (margin > 0)).sum()),
        "away_wins": int((away & (margin < 0)).sum()),
        "draws": int(((home | away) & (margin == 0)).sum()),
    }


def points_summary(seasons: Iterable[TeamSeason]) -> dict[str, Optional[float]]:
    points = pd.Series([ts.points for ts in seasons], dtype="int64")
    if points.empty:
        return {"count": 0, "average": None, "sum": 0, "max": None, "min": None}
    return {
        "count": int(points.count()),
        "average": float(points.mean()),
        "sum": int(points.sum()),
        "max": int(points.max()),
        "min": int(points.min()),
    }


# ============================================================================
# Elections
# ============================================================================


def election_overview(candidates: Iterable[CandidateRecord]) -> dict[str, int]:
    df = _frame(candidates, CandidateRecord)
    full_names = df["first_name"] + " " + df["surname"]
    return {
        "candidates": len(df),
        "constituencies": int(df["constituency"].nunique()),
        "parties": int(df["party_identifier"].nunique()),
        "distinct_surnames": int(df["surname"].nunique()),
        "distinct_first_names": int(df["first_name"].nunique()),
        "distinct_names": int(full_names.nunique()),
        "total_votes": int(df["votes"].sum()),
    }


def _winners(constituencies: Iterable[ConstituencySummary]) -> pd.DataFrame:
    return pd.DataFrame(
        [(c.name, str(c.country), c.winning_party) for c in constituencies],
        columns=["constituency", "country", "winning_party"],
    )


def _seats(df: pd.DataFrame) -> dict[str, int]:
    seats = (
        df.groupby("winning_party").size().reset_index(name="seats")
        .sort_values(["seats", "winning_party"], ascending=[False, True])
    )
    return {party: int(n) for party, n in zip(seats["winning_party"], seats["seats"])}


def seats_by_party(constituencies: Iterable[ConstituencySummary]) -> dict[str, int]:
    """Seats won per party, most seats first."""
    return _seats(_winners(constituencies))


def seats_by_country(
    constituencies: Iterable[ConstituencySummary],
) -> dict[str, dict[str, Any]]:
    """Constituency count and seats per party for each nation."""
    df = _winners(constituencies)
    summary = {}
    for country in Country:
        rows = df[df["country"] == str(country)]
        if rows.empty:
            continue
        summary[str(country)] = {
            "constituencies": len(rows),
            "seats": _seats(rows),
        }
    return summary
