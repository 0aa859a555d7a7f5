"""Group flat records into per-team and per-constituency summaries.

Grouping is a two-phase fold: ``group_by`` partitions records into a
first-seen ordered mapping, then ``fold_groups`` maps every group through a
summary builder. Both phases are pure.
"""

import logging
from collections import Counter
from dataclasses import replace
from functools import partial, reduce
from operator import attrgetter
from typing import Callable, Hashable, Iterable, Mapping, Optional, Sequence, TypeVar

from .config import COUNTRY_BY_PARTY, DEFAULT_COUNTRY
from .errors import DataConsistencyError, ValidationError
from .models import (
    CandidateRecord,
    ConstituencySummary,
    Country,
    MatchRecord,
    OutcomeKind,
    PartyResult,
    TeamOutcome,
    TeamSeason,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
S = TypeVar("S")

PartyTally = dict[str, PartyResult]


def group_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    """Partition items by key, keeping groups in first-seen order."""
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def fold_groups(
    groups: Mapping[K, list[T]], build: Callable[[K, list[T]], S]
) -> list[S]:
    """Build one summary per group, in group order."""
    return [build(key, members) for key, members in groups.items()]


# ============================================================================
# Football
# ============================================================================


def team_outcomes(match: MatchRecord) -> tuple[TeamOutcome, TeamOutcome]:
    """Split a match into the home side's and the away side's outcome."""
    return (
        TeamOutcome(match.home_team, match.home_score, match.away_score, home=True),
        TeamOutcome(match.away_team, match.away_score, match.home_score, home=False),
    )


def build_team_season(team: str, outcomes: Sequence[TeamOutcome]) -> TeamSeason:
    kinds = Counter(o.outcome for o in outcomes)
    return TeamSeason(
        team=team,
        played=len(outcomes),
        points=sum(o.points for o in outcomes),
        goals_for=sum(o.goals_for for o in outcomes),
        goals_against=sum(o.goals_against for o in outcomes),
        wins=kinds[OutcomeKind.WIN],
        draws=kinds[OutcomeKind.DRAW],
        losses=kinds[OutcomeKind.LOSE],
    )


def build_league(matches: Iterable[MatchRecord]) -> list[TeamSeason]:
    """Fold every match into one season summary per team."""
    outcomes = [outcome for match in matches for outcome in team_outcomes(match)]
    return fold_groups(group_by(outcomes, attrgetter("team")), build_team_season)


# ============================================================================
# Elections
# ============================================================================


def assign_country(
    party_identifiers: Iterable[str],
    country_table: Mapping[str, Country] = COUNTRY_BY_PARTY,
    default: Country = DEFAULT_COUNTRY,
) -> tuple[Country, tuple[Country, ...]]:
    """Work out which nation a constituency is in from the parties standing.

    Returns the assigned country and any other nations implied by later
    candidates. The first nation-specific party found wins.
    """
    country: Optional[Country] = None
    conflicts: list[Country] = []

    for identifier in party_identifiers:
        found = country_table.get(identifier.strip().casefold())
        if found is None:
            if country is None:
                country = default
        elif country is None or country is default:
            country = found
        elif found is not country and found not in conflicts:
            conflicts.append(found)

    return country or default, tuple(conflicts)


def build_constituency(
    name: str,
    candidates: Sequence[CandidateRecord],
    country_table: Mapping[str, Country] = COUNTRY_BY_PARTY,
) -> ConstituencySummary:
    if not candidates:
        raise ValidationError(f"Constituency {name!r} has no candidates")

    # sorted() is stable, so tied candidates keep their file order
    ranked = tuple(sorted(candidates, key=attrgetter("votes"), reverse=True))
    total = sum(c.votes for c in ranked)
    winner = ranked[0]
    runner_up_votes = ranked[1].votes if len(ranked) > 1 else 0

    def share(votes: int) -> float:
        return votes * 100.0 / total if total else 0.0

    country, conflicts = assign_country(
        (c.party_identifier for c in ranked), country_table
    )
    if conflicts:
        logger.warning(
            "Unexpected country combination in constituency %s: %s and %s",
            name,
            country,
            ", ".join(str(c) for c in conflicts),
        )

    return ConstituencySummary(
        name=name,
        candidates=ranked,
        total_votes=total,
        winning_party=winner.party_identifier,
        winning_candidate=f"{winner.surname}, {winner.first_name}",
        winning_votes=winner.votes,
        majority=winner.votes - runner_up_votes,
        winning_share=share(winner.votes),
        losing_share=share(ranked[-1].votes),
        country=country,
        conflicting_countries=conflicts,
    )


def build_constituencies(
    candidates: Iterable[CandidateRecord],
    country_table: Mapping[str, Country] = COUNTRY_BY_PARTY,
) -> list[ConstituencySummary]:
    """Fold candidate results into one summary per constituency."""
    groups = group_by(candidates, attrgetter("constituency"))
    return fold_groups(groups, partial(build_constituency, country_table=country_table))


def consistency_errors(
    constituencies: Iterable[ConstituencySummary],
) -> list[DataConsistencyError]:
    """Report constituencies whose candidates imply more than one nation."""
    return [
        DataConsistencyError(
            f"Constituency {c.name} assigned to {c.country} but also implies "
            + ", ".join(str(other) for other in c.conflicting_countries),
            subject=c.name,
        )
        for c in constituencies
        if c.conflicting_countries
    ]


# ============================================================================
# Party tallies
# ============================================================================


def tally_constituency(tally: PartyTally, constituency: ConstituencySummary) -> PartyTally:
    """Add one constituency's placings to a running party tally."""
    for position, candidate in enumerate(constituency.candidates, 1):
        party = tally.get(candidate.party_identifier)
        if party is None:
            party = tally[candidate.party_identifier] = PartyResult(candidate.party_identifier)
        party.contested += 1
        party.votes += candidate.votes
        if position == 1:
            party.wins += 1
        elif position == 2:
            party.seconds += 1
        elif position == 3:
            party.thirds += 1
    return tally


def merge_party_tallies(first: PartyTally, second: PartyTally) -> PartyTally:
    """Combine two partial tallies into a new one.

    Every field is a sum, so the merge is associative and commutative.
    Neither input is modified.
    """
    merged = {name: replace(result) for name, result in first.items()}
    for name, other in second.items():
        mine = merged.get(name)
        if mine is None:
            merged[name] = replace(other)
            continue
        mine.wins += other.wins
        mine.seconds += other.seconds
        mine.thirds += other.thirds
        mine.contested += other.contested
        mine.votes += other.votes
    return merged


def tally_parties(
    constituencies: Iterable[ConstituencySummary], chunk_size: Optional[int] = None
) -> PartyTally:
    """Tally wins, placings and votes per party.

    With ``chunk_size`` the constituencies are tallied in independent chunks
    which are then merged, giving the same totals as a single pass.
    """
    constituencies = list(constituencies)
    if not chunk_size:
        return reduce(tally_constituency, constituencies, {})

    partials = [
        reduce(tally_constituency, constituencies[i : i + chunk_size], {})
        for i in range(0, len(constituencies), chunk_size)
    ]
    return reduce(merge_party_tallies, partials, {})


def ranked_parties(tally: Mapping[str, PartyResult]) -> list[PartyResult]:
    """Order parties by seats won, then votes, then name."""
    return sorted(tally.values(), key=lambda p: (-p.wins, -p.votes, p.name))


def notable_parties(
    parties: Iterable[PartyResult], min_votes: int = 100000
) -> list[PartyResult]:
    return [p for p in parties if p.wins > 0 or p.votes >= min_votes]
