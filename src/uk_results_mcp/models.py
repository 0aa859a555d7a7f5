"""Data models for UK football and general-election results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultKind(Enum):
    HOME_WIN = "H"
    AWAY_WIN = "A"
    DRAW = "D"


class OutcomeKind(Enum):
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"


POINTS_FOR_OUTCOME = {
    OutcomeKind.WIN: 3,
    OutcomeKind.DRAW: 1,
    OutcomeKind.LOSE: 0,
}


class Country(Enum):
    ENGLAND = "England"
    SCOTLAND = "Scotland"
    WALES = "Wales"
    NORTHERN_IRELAND = "Northern Ireland"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MatchRecord:
    league: str
    date: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int

    @property
    def result(self) -> ResultKind:
        if self.home_score > self.away_score:
            return ResultKind.HOME_WIN
        if self.home_score < self.away_score:
            return ResultKind.AWAY_WIN
        return ResultKind.DRAW

    @property
    def score(self) -> str:
        return f"{self.home_score}-{self.away_score}"

    def __str__(self) -> str:
        return f"{self.date} {self.home_team} {self.score} {self.away_team}"


@dataclass(frozen=True)
class TeamOutcome:
    team: str
    goals_for: int
    goals_against: int
    home: bool

    @property
    def outcome(self) -> OutcomeKind:
        if self.goals_for > self.goals_against:
            return OutcomeKind.WIN
        if self.goals_for < self.goals_against:
            return OutcomeKind.LOSE
        return OutcomeKind.DRAW

    @property
    def points(self) -> int:
        return POINTS_FOR_OUTCOME[self.outcome]


@dataclass(frozen=True)
class TeamSeason:
    team: str
    played: int
    points: int
    goals_for: int
    goals_against: int
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def __str__(self) -> str:
        return f"{self.team} played={self.played} points={self.points} gd={self.goal_difference}"


@dataclass(frozen=True)
class CandidateRecord:
    ons_code: str
    pano: str
    constituency: str
    surname: str
    first_name: str
    party: str
    party_identifier: str
    votes: int

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.surname}"

    def __str__(self) -> str:
        return f"{self.constituency} / {self.full_name} / {self.party} : {self.votes}"


@dataclass(frozen=True)
class ConstituencySummary:
    name: str
    candidates: tuple[CandidateRecord, ...]  # highest votes first
    total_votes: int
    winning_party: str
    winning_candidate: str
    winning_votes: int
    majority: int
    winning_share: float  # percent of total for the winner
    losing_share: float  # percent of total for last place
    country: Country
    conflicting_countries: tuple[Country, ...] = ()

    @property
    def last_place(self) -> CandidateRecord:
        return self.candidates[-1]

    def __str__(self) -> str:
        return (
            f"{self.name} ({self.country}) : total votes {self.total_votes}, "
            f"{len(self.candidates)} candidates : won by {self.winning_party} "
            f"({self.winning_candidate}) : {self.winning_votes} votes, "
            f"maj {self.majority}, share {round(self.winning_share)} %"
        )


@dataclass
class PartyResult:
    name: str
    wins: int = 0
    seconds: int = 0
    thirds: int = 0
    contested: int = 0
    votes: int = 0

    @property
    def votes_per_win(self) -> int:
        return self.votes if self.wins == 0 else self.votes // self.wins

    def __str__(self) -> str:
        return (
            f"{self.name} : wins={self.wins}, seconds={self.seconds}, "
            f"thirds={self.thirds}, contested={self.contested}, "
            f"votes={self.votes}, votes per win={self.votes_per_win}"
        )


@dataclass(frozen=True)
class AugmentedCandidateResult:
    candidate: CandidateRecord
    position: int
    outcome: str  # 'Winner' or 'Loser'
    vote_share: float  # fraction of the constituency total
    majority: int
    candidate_count: int
    simplified_party: str
    country: Country


@dataclass(frozen=True)
class RankedEntry(Generic[T]):
    position: int
    item: T

    def __str__(self) -> str:
        return f"Position = {self.position} : {self.item}"


@dataclass(frozen=True)
class LineRejection:
    line_number: int
    line: str
    reason: str


@dataclass
class ParseResult(Generic[T]):
    records: list[T] = field(default_factory=list)
    rejections: list[LineRejection] = field(default_factory=list)
    skipped: int = 0
    source: Optional[str] = None
