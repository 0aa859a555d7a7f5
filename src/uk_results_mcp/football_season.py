"""League table and season statistics from a football results file.

Data files come from http://www.football-data.co.uk/englandm.php, e.g.::

    Div,Date,HomeTeam,AwayTeam,FTHG,FTAG,FTR,HTHG,HTAG,HTR,Referee,...
    E0,13/08/16,Burnley,Swansea,0,1,A,0,0,D,J Moss,...
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .aggregation import build_league
from .config import DEFAULT_ENCODING, Settings, configure_logging
from .errors import FileAccessError
from .loader import load_matches
from .models import LineRejection, MatchRecord
from .ranking import League
from .reporting import render_table
from .statistics import points_summary, score_frequencies, season_overview, team_record

logger = logging.getLogger(__name__)


@dataclass
class Season:
    league: League
    matches: list[MatchRecord] = field(default_factory=list)
    rejections: list[LineRejection] = field(default_factory=list)


def load_season(
    path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
    name: str = "English Premier League",
) -> Season:
    """Parse a results file and build its league table."""
    parsed = load_matches(path, encoding)
    league = League(name, build_league(parsed.records))
    return Season(league, parsed.records, parsed.rejections)


def overview_report(season: Season, team: str) -> str:
    o = season_overview(season.matches)
    r = team_record(season.matches, team)
    return "\n".join([
        f"Read in {o['matches']} matches",
        f"- contains {o['home_teams']} home teams and {o['away_teams']} away teams",
        f"- {o['home_goals']} home goals and {o['away_goals']} away goals",
        f"- average score {o['average_home_score']}-{o['average_away_score']}",
        f"- {o['home_wins']} home wins, {o['away_wins']} away wins and {o['draws']} draws",
        f"- {team} : {r['home_wins']} home wins, {r['away_wins']} away wins and {r['draws']} draws",
    ])


def frequency_report(season: Season) -> str:
    freq = score_frequencies(season.matches)
    lines = ["Home goals scored frequencies: "]
    lines += [f"{goals} goals : {n} matches" for goals, n in freq["home_goals"].items()]
    lines += ["", "Away goals scored frequencies: "]
    lines += [f"{goals} goals : {n} matches" for goals, n in freq["away_goals"].items()]
    lines += ["", "Match score frequencies: "]
    lines += [f"Score {score} : {n} matches" for score, n in freq["scores"].items()]
    return "\n".join(lines)


def points_report(season: Season) -> str:
    s = points_summary(entry.item for entry in season.league.positions)
    return "\n".join([
        "Stats:",
        f"- points count: {s['count']}",
        f"- points average: {s['average']}",
        f"- points sum: {s['sum']}",
        f"- points max: {s['max']}",
        f"- points min: {s['min']}",
    ])


def season_report(season: Season, team: str = "Leicester", table_length: int = 5) -> str:
    league = season.league
    sections = [
        overview_report(season, team),
        frequency_report(season),
        f"{league.name}\n{render_table(league.table())}",
        f"Top of table:\n{render_table(league.top(table_length))}",
        f"Bottom of table:\n{render_table(league.bottom(table_length))}",
        points_report(season),
    ]
    return "\n\n".join(sections)


def main() -> None:
    """Print the league table and season statistics."""
    settings = Settings()
    configure_logging(settings.log_level)

    try:
        season = load_season(settings.matches_path, settings.encoding, settings.league_name)
    except FileAccessError as exc:
        logger.error("%s", exc)
        return

    print(season_report(season, team=settings.focus_team))


if __name__ == "__main__":
    main()
