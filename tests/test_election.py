"""BDD tests for constituency summaries and party tallies."""

import pytest
from pytest_bdd import scenarios, given, when, then, parsers

from uk_results_mcp.general_election import build_election
from uk_results_mcp.parser import parse_candidate_line, parse_lines
from uk_results_mcp.ranking import CONSTITUENCY_ORDERINGS, rank

# Load scenarios from feature file
scenarios("election.feature")


@pytest.fixture
def context():
    """Shared context for test steps."""
    return {"lines": [], "election": None, "ranking": None}


@given(parsers.parse("the candidate line: {line}"))
def candidate_line(context, line):
    context["lines"].append(line)


@given("the sample election")
def sample_election(context, candidate_lines):
    context["lines"].extend(candidate_lines)


@when("I summarise the constituencies")
def summarise(context):
    parsed = parse_lines(context["lines"], parse_candidate_line)
    assert not parsed.rejections
    context["election"] = build_election(parsed.records)


@when(parsers.parse('I rank the constituencies by "{measure}"'))
def rank_constituencies(context, measure):
    context["ranking"] = rank(context["election"].constituencies, CONSTITUENCY_ORDERINGS[measure])


def _constituency(context, name):
    c = context["election"].constituency(name)
    assert c is not None, f"{name} not summarised"
    return c


def _party(context, name):
    return next(p for p in context["election"].parties if p.name == name)


@then(parsers.parse('"{name}" is won by "{party}" with a majority of {majority:d}'))
def won_by(context, name, party, majority):
    c = _constituency(context, name)
    assert c.winning_party == party
    assert c.majority == majority


@then(parsers.parse('"{name}" has {total:d} votes in total'))
def total_votes(context, name, total):
    assert _constituency(context, name).total_votes == total


@then(parsers.parse('"{name}" has a winning share of {share:f} percent'))
def winning_share(context, name, share):
    assert _constituency(context, name).winning_share == pytest.approx(share, abs=0.01)


@then(parsers.parse('"{name}" has a losing share of {share:f} percent'))
def losing_share(context, name, share):
    assert _constituency(context, name).losing_share == pytest.approx(share, abs=0.01)


@then(parsers.parse('"{name}" is in {country}'))
def in_country(context, name, country):
    assert str(_constituency(context, name).country) == country


@then(parsers.parse("there are {count:d} constituencies"))
def constituency_count(context, count):
    assert len(context["election"].constituencies) == count


@then(parsers.parse('"{party}" won {wins:d} seats from {contested:d} contested with {votes:d} votes'))
def party_tally(context, party, wins, contested, votes):
    result = _party(context, party)
    assert result.wins == wins
    assert result.contested == contested
    assert result.votes == votes


@then(parsers.parse('"{party}" came second {seconds:d} times and third {thirds:d} times'))
def party_placings(context, party, seconds, thirds):
    result = _party(context, party)
    assert result.seconds == seconds
    assert result.thirds == thirds


@then(parsers.parse('the party order starts with "{first}", "{second}", "{third}"'))
def party_order(context, first, second, third):
    names = [p.name for p in context["election"].parties[:3]]
    assert names == [first, second, third]


@then(parsers.parse('the ranking is "{first}", "{second}", "{third}"'))
def ranking_order(context, first, second, third):
    assert [e.item.name for e in context["ranking"]] == [first, second, third]
    assert [e.position for e in context["ranking"]] == [1, 2, 3]


@then(parsers.parse('{count:d} consistency issue is reported for "{name}"'))
def consistency_issue(context, count, name):
    issues = context["election"].issues
    assert len(issues) == count
    assert issues[0].subject == name
