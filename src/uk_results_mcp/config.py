"""Settings and static lookup tables."""

import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .models import Country

PathLike = Union[str, Path]

DEFAULT_ENCODING = "iso-8859-1"

# Parties that only stand in one nation, keyed case-folded
COUNTRY_BY_PARTY: Mapping[str, Country] = MappingProxyType({
    "snp": Country.SCOTLAND,
    "plaid cymru": Country.WALES,
    "dup": Country.NORTHERN_IRELAND,
    "sdlp": Country.NORTHERN_IRELAND,
    "uup": Country.NORTHERN_IRELAND,
    "sinn féin": Country.NORTHERN_IRELAND,
})

DEFAULT_COUNTRY = Country.ENGLAND

# Party identifiers reported as-is; everything else is 'Other' unless it won
KEEP_PARTIES: tuple[str, ...] = (
    "Conservative",
    "Labour",
    "Liberal Democrats",
    "SNP",
    "UKIP",
    "Green Party",
    "DUP",
    "Sinn Féin",
    "Plaid Cymru",
    "SDLP",
    "UUP",
    "Alliance",
    "Independent",
)

DUMP_HEADER: tuple[str, ...] = (
    "ONS Code",
    "PANO",
    "Constituency",
    "Surname",
    "First name",
    "Party",
    "Party Identifier",
    "Valid votes",
    "Position",
    "Outcome",
    "Share",
    "Majority",
    "Candidate count",
    "Simplified party",
    "Country",
)

MATCH_HEADER_PREFIXES: tuple[str, ...] = ("Div,Date",)
CANDIDATE_HEADER_PREFIXES: tuple[str, ...] = ("RESULTS", "ONS Code")


class Settings:
    """File locations and run options, overridable from the environment."""

    def __init__(
        self,
        data_dir: Optional[PathLike] = None,
        matches_file: Optional[str] = None,
        election_file: Optional[str] = None,
        output_dir: Optional[PathLike] = None,
        encoding: Optional[str] = None,
        league_name: Optional[str] = None,
        log_level: Optional[str] = None,
        focus_team: Optional[str] = None,
    ):
        self.data_dir = Path(data_dir or os.getenv("UK_RESULTS_DATA_DIR", "data"))
        self.matches_file = matches_file or os.getenv(
            "UK_RESULTS_MATCHES_FILE", "EnglishPremierLeagueResults2016-17.csv"
        )
        self.election_file = election_file or os.getenv(
            "UK_RESULTS_ELECTION_FILE", "UKGeneralElection2017.csv"
        )
        self.output_dir = Path(output_dir or os.getenv("UK_RESULTS_OUTPUT_DIR", "output"))
        self.encoding = encoding or os.getenv("UK_RESULTS_ENCODING", DEFAULT_ENCODING)
        self.league_name = league_name or os.getenv(
            "UK_RESULTS_LEAGUE_NAME", "English Premier League"
        )
        self.log_level = (log_level or os.getenv("UK_RESULTS_LOG_LEVEL", "INFO")).upper()
        self.focus_team = focus_team or os.getenv("UK_RESULTS_FOCUS_TEAM", "Leicester")

    @property
    def matches_path(self) -> Path:
        return self.data_dir / self.matches_file

    @property
    def election_path(self) -> Path:
        return self.data_dir / self.election_file

    @property
    def dump_path(self) -> Path:
        return self.output_dir / f"Extended{Path(self.election_file).stem}.csv"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr so reports on stdout stay clean."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
