"""Sort summaries and assign table positions."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Sequence, TypeVar

from .models import ConstituencySummary, RankedEntry, TeamSeason

T = TypeVar("T")


@dataclass(frozen=True)
class Ordering(Generic[T]):
    key: Callable[[T], Any]
    descending: bool = False
    label: str = ""


LEAGUE_ORDERING: Ordering[TeamSeason] = Ordering(
    key=lambda ts: (ts.points, ts.goal_difference),
    descending=True,
    label="points, then goal difference",
)

CONSTITUENCY_ORDERINGS: Mapping[str, Ordering[ConstituencySummary]] = MappingProxyType({
    "fewest_winning_votes": Ordering(
        lambda c: c.winning_votes, False, "Smallest number of votes for the winner"
    ),
    "most_winning_votes": Ordering(
        lambda c: c.winning_votes, True, "Largest number of votes for the winner"
    ),
    "smallest_majority": Ordering(lambda c: c.majority, False, "Smallest majority"),
    "smallest_winning_share": Ordering(
        lambda c: c.winning_share, False, "Smallest share of the vote for the winner"
    ),
    "largest_losing_share": Ordering(
        lambda c: c.losing_share, True, "Largest share of the vote for last place"
    ),
})


def rank(items: Iterable[T], ordering: Ordering[T]) -> list[RankedEntry[T]]:
    """Sort items and number them 1..N.

    Equal keys keep their input order and still get distinct positions.
    """
    ordered = sorted(items, key=ordering.key, reverse=ordering.descending)
    return [RankedEntry(position, item) for position, item in enumerate(ordered, 1)]


def top(ranked: Sequence[RankedEntry[T]], n: int) -> list[RankedEntry[T]]:
    return list(ranked[: max(n, 0)])


def bottom(ranked: Sequence[RankedEntry[T]], n: int) -> list[RankedEntry[T]]:
    """The last ``n`` entries of the full order, still in that order."""
    if n <= 0:
        return []
    return list(ranked[-n:])


class League:
    """A league table built from team-season summaries."""

    def __init__(
        self,
        name: str,
        seasons: Iterable[TeamSeason],
        ordering: Ordering[TeamSeason] = LEAGUE_ORDERING,
    ):
        self.name = name
        self.positions = rank(seasons, ordering)

    def __len__(self) -> int:
        return len(self.positions)

    def table(self) -> list[RankedEntry[TeamSeason]]:
        return list(self.positions)

    def top(self, n: int) -> list[RankedEntry[TeamSeason]]:
        return top(self.positions, n)

    def bottom(self, n: int) -> list[RankedEntry[TeamSeason]]:
        return bottom(self.positions, n)

    def find(self, team: str) -> Optional[RankedEntry[TeamSeason]]:
        """Look up a team's position, ignoring case."""
        wanted = team.casefold()
        return next(
            (entry for entry in self.positions if entry.item.team.casefold() == wanted),
            None,
        )
