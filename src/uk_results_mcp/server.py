"""MCP Server for UK football league tables and general-election results."""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

from .aggregation import notable_parties
from .config import Settings, configure_logging
from .errors import FileAccessError
from .football_season import Season, load_season
from .general_election import Election, load_election
from .models import CandidateRecord
from .ranking import CONSTITUENCY_ORDERINGS, rank, top
from .reporting import render_constituencies, render_table
from .statistics import (
    election_overview,
    points_summary,
    season_overview,
    seats_by_country,
    seats_by_party,
    team_record as season_team_record,
)


# Initialize the server
server = FastMCP("uk-results")

# Loaded lazily, once per process
_settings: Optional[Settings] = None
_season: Optional[Season] = None
_election: Optional[Election] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def get_season() -> Season:
    """Get the parsed season, loading the results file on first use."""
    global _season
    if _season is None:
        settings = get_settings()
        _season = load_season(settings.matches_path, settings.encoding, settings.league_name)
    return _season


def get_election() -> Election:
    """Get the parsed election, loading the candidate file on first use."""
    global _election
    if _election is None:
        settings = get_settings()
        _election = load_election(settings.election_path, settings.encoding)
    return _election


def _text(output: str) -> list[TextContent]:
    return [TextContent(type="text", text=output)]


# ============================================================================
# League Tools
# ============================================================================


@server.tool()
async def league_table() -> list[TextContent]:
    """Get the full league table, ordered by points then goal difference."""
    try:
        league = get_season().league
    except FileAccessError as exc:
        return _text(str(exc))

    if not len(league):
        return _text("No matches loaded")

    return _text(f"**{league.name}**\n\n{render_table(league.table())}")


@server.tool()
async def top_of_table(limit: int = 5) -> list[TextContent]:
    """Get the teams at the top of the league table.

    Args:
        limit: Number of teams to return (default 5)
    """
    try:
        league = get_season().league
    except FileAccessError as exc:
        return _text(str(exc))

    return _text(f"**Top of table**\n\n{render_table(league.top(limit))}")


@server.tool()
async def bottom_of_table(limit: int = 5) -> list[TextContent]:
    """Get the teams at the bottom of the league table, in table order.

    Args:
        limit: Number of teams to return (default 5)
    """
    try:
        league = get_season().league
    except FileAccessError as exc:
        return _text(str(exc))

    return _text(f"**Bottom of table**\n\n{render_table(league.bottom(limit))}")


@server.tool()
async def team_record(team: str) -> list[TextContent]:
    """Get a team's league position and home/away record.

    Args:
        team: Team name as it appears in the results file (case-insensitive)
    """
    try:
        season = get_season()
    except FileAccessError as exc:
        return _text(str(exc))

    entry = season.league.find(team)
    if entry is None:
        return _text(f"Team '{team}' not found")

    ts = entry.item
    record = season_team_record(season.matches, ts.team)

    output = f"**{ts.team}** ({season.league.name})\n\n"
    output += f"- Position: {entry.position}\n"
    output += f"- Played: {ts.played}\n"
    output += f"- Wins: {ts.wins} ({record['home_wins']} home, {record['away_wins']} away)\n"
    output += f"- Draws: {ts.draws}\n"
    output += f"- Losses: {ts.losses}\n"
    output += f"- Goals For: {ts.goals_for}\n"
    output += f"- Goals Against: {ts.goals_against}\n"
    output += f"- Goal Difference: {ts.goal_difference}\n"
    output += f"- Points: {ts.points}\n"

    return _text(output)


@server.tool()
async def season_summary() -> list[TextContent]:
    """Get goal totals, result split and points statistics for the season."""
    try:
        season = get_season()
    except FileAccessError as exc:
        return _text(str(exc))

    o = season_overview(season.matches)
    p = points_summary(entry.item for entry in season.league.positions)

    output = f"**{season.league.name} season**\n\n"
    output += f"- Matches: {o['matches']}\n"
    output += f"- Teams: {len(season.league)}\n"
    output += f"- Goals: {o['home_goals']} home, {o['away_goals']} away\n"
    output += f"- Average score: {o['average_home_score']}-{o['average_away_score']}\n"
    output += f"- Results: {o['home_wins']} home wins, {o['away_wins']} away wins, {o['draws']} draws\n"
    output += f"- Points: max {p['max']}, min {p['min']}, average {p['average']}\n"
    if season.rejections:
        output += f"- Rejected lines: {len(season.rejections)}\n"

    return _text(output)


# ============================================================================
# Election Tools
# ============================================================================


@server.tool()
async def election_summary() -> list[TextContent]:
    """Get candidate, party and vote totals plus seats won per party and nation."""
    try:
        election = get_election()
    except FileAccessError as exc:
        return _text(str(exc))

    o = election_overview(election.candidates)

    output = "**General election**\n\n"
    output += f"- Candidates: {o['candidates']}\n"
    output += f"- Constituencies: {o['constituencies']}\n"
    output += f"- Parties: {o['parties']}\n"
    output += f"- Total votes: {o['total_votes']}\n\n"
    output += "**Seats:**\n"
    for party, seats in seats_by_party(election.constituencies).items():
        output += f"- {party}: {seats}\n"

    for country, summary in seats_by_country(election.constituencies).items():
        output += f"\n**{country}** ({summary['constituencies']} constituencies)\n"
        for party, seats in summary["seats"].items():
            output += f"- {party}: {seats}\n"

    if election.issues:
        output += "\n**Data issues:**\n"
        for issue in election.issues:
            output += f"- {issue}\n"

    return _text(output)


@server.tool()
async def constituency_rankings(
    measure: str = "smallest_majority", limit: int = 10
) -> list[TextContent]:
    """Rank constituencies by one election measure.

    Args:
        measure: One of fewest_winning_votes, most_winning_votes,
            smallest_majority, smallest_winning_share, largest_losing_share
        limit: Maximum number of constituencies to return (default 10)
    """
    ordering = CONSTITUENCY_ORDERINGS.get(measure)
    if ordering is None:
        return _text(
            f"Unknown measure '{measure}'. Choose from: " + ", ".join(CONSTITUENCY_ORDERINGS)
        )

    try:
        election = get_election()
    except FileAccessError as exc:
        return _text(str(exc))

    entries = top(rank(election.constituencies, ordering), limit)
    body = render_constituencies(entries, show_last_place=(measure == "largest_losing_share"))
    return _text(f"**{ordering.label}**\n\n{body}")


def _candidate_line(position: int, candidate: CandidateRecord, total: int) -> str:
    share = candidate.votes * 100.0 / total if total else 0.0
    return (
        f"{position}. {candidate.full_name} ({candidate.party_identifier}) - "
        f"{candidate.votes} votes, {share:.1f}%\n"
    )


@server.tool()
async def constituency_details(name: str) -> list[TextContent]:
    """Get the full result for one constituency.

    Args:
        name: Constituency name (case-insensitive)
    """
    try:
        election = get_election()
    except FileAccessError as exc:
        return _text(str(exc))

    c = election.constituency(name)
    if c is None:
        return _text(f"Constituency '{name}' not found")

    output = f"**{c.name}** ({c.country})\n\n"
    output += f"- Winner: {c.winning_candidate} ({c.winning_party})\n"
    output += f"- Majority: {c.majority}\n"
    output += f"- Winning share: {c.winning_share:.1f}%\n"
    output += f"- Total votes: {c.total_votes}\n\n"
    output += "**Candidates:**\n"
    for position, candidate in enumerate(c.candidates, 1):
        output += _candidate_line(position, candidate, c.total_votes)

    return _text(output)


@server.tool()
async def party_results(min_votes: int = 100000) -> list[TextContent]:
    """Get wins, placings and votes for parties with a seat or enough votes.

    Args:
        min_votes: Include parties without a seat that polled at least this many votes
    """
    try:
        election = get_election()
    except FileAccessError as exc:
        return _text(str(exc))

    parties = notable_parties(election.parties, min_votes)
    if not parties:
        return _text("No parties matching the criteria")

    output = f"Found {len(parties)} part{'y' if len(parties) == 1 else 'ies'}:\n\n"
    for party in parties:
        output += f"- {party}\n"

    return _text(output)


async def main():
    """Run the MCP server."""
    configure_logging(get_settings().log_level)
    await server.run_stdio_async()


def run() -> None:
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    run()
