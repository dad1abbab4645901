"""Tests for core data models."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from awards.models import (
    Nominee,
    Standing,
    VoteOrder,
    VotingPhase,
    coerce_datetime,
    coerce_decimal,
    round_money,
)
from tests.conftest import make_category, utc


class TestCoerceDatetime:
    def test_z_suffix(self):
        assert coerce_datetime("2025-01-31T23:59:00Z") == utc(2025, 1, 31, 23, 59)

    def test_offset_is_kept(self):
        value = coerce_datetime("2025-01-01T02:00:00+02:00")
        assert value == utc(2025, 1, 1)
        assert value.utcoffset() == timedelta(hours=2)

    def test_naive_string_is_utc(self):
        assert coerce_datetime("2025-01-15T12:00:00") == utc(2025, 1, 15, 12)

    def test_date_only(self):
        assert coerce_datetime("2025-01-15") == utc(2025, 1, 15)

    def test_datetime_passthrough(self):
        value = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert coerce_datetime(value) is value

    @pytest.mark.parametrize("value", [None, "", "tomorrow", "2025-13-01", 12345, []])
    def test_absent_or_malformed(self, value):
        assert coerce_datetime(value) is None


class TestCoerceDecimal:
    @pytest.mark.parametrize("value, expected", [
        (2.5, Decimal("2.5")),
        (0.1, Decimal("0.1")),
        (3, Decimal("3")),
        ("1.50", Decimal("1.50")),
        (Decimal("4"), Decimal("4")),
    ])
    def test_numbers(self, value, expected):
        assert coerce_decimal(value) == expected

    @pytest.mark.parametrize("value", [None, True, "abc", "", float("nan"), "Infinity", {}])
    def test_not_numbers(self, value):
        assert coerce_decimal(value) is None


class TestVotingPhase:
    def test_values(self):
        assert [p.value for p in VotingPhase] == [
            "upcoming", "voting_open", "voting_closed", "completed",
        ]

    def test_labels(self):
        assert VotingPhase.VOTING_OPEN.label == "Voting Open"
        assert VotingPhase.UPCOMING.label == "Upcoming"

    def test_compares_to_string(self):
        assert VotingPhase.COMPLETED == "completed"


class TestCategory:
    def setup_method(self):
        self.category = make_category(3, ["Ama Owusu", "Kwame Boateng", "Efua Asante"])
        self.category.nominees[1].nominee_code = "KB-02"

    def test_get_nominee_compares_ids_as_strings(self):
        assert self.category.get_nominee("302").name == "Kwame Boateng"

    def test_get_nominee_missing(self):
        assert self.category.get_nominee(999) is None

    def test_search_by_name(self):
        assert [n.name for n in self.category.search_nominees("owusu")] == ["Ama Owusu"]

    def test_search_by_code(self):
        assert [n.name for n in self.category.search_nominees("kb-")] == ["Kwame Boateng"]

    def test_blank_search_returns_everyone(self):
        assert len(self.category.search_nominees("  ")) == 3

    def test_has_nominee(self):
        assert self.category.has_nominee(Nominee(id=301, name="x"))
        assert not self.category.has_nominee(Nominee(id=401, name="x"))


class TestAward:
    def test_find_nominee(self, january_award):
        category, nominee = january_award.find_nominee("202")
        assert category.id == 2
        assert nominee.name == "Akosua"

    def test_find_nominee_missing(self, january_award):
        assert january_award.find_nominee(999) is None

    def test_get_category(self, january_award):
        assert january_award.get_category("1").name == "Category 1"
        assert january_award.get_category(9) is None


class TestVoteOrder:
    def test_money_rounds_half_up(self):
        order = VoteOrder(
            award_id=1, category_id=2, nominee_id=3, quantity=1,
            unit_price=Decimal("0.125"), total=Decimal("0.125"),
        )
        assert order.to_dict()["total"] == "0.13"
        assert order.to_dict()["unit_price"] == "0.13"

    def test_round_money(self):
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("7.5")) == Decimal("7.50")

    def test_to_dict(self):
        order = VoteOrder(
            award_id=1, category_id=2, nominee_id=3, quantity=3,
            unit_price=Decimal("2.5"), total=Decimal("7.5"),
        )
        assert order.to_dict() == {
            "award_id": 1,
            "category_id": 2,
            "nominee_id": 3,
            "quantity": 3,
            "unit_price": "2.50",
            "total": "7.50",
        }


class TestBuildRanking:
    def setup_method(self):
        self.a = Nominee(id=1, name="A", vote_count=50)
        self.b = Nominee(id=2, name="B", vote_count=25)
        self.c = Nominee(id=3, name="C", vote_count=25)

    def test_no_ties(self):
        result = Standing.build_ranking([self.a, self.b], 75)
        assert [(s.nominee.name, s.rank, s.tied) for s in result] == [
            ("A", 1, False),
            ("B", 2, False),
        ]

    def test_tie_skips_next_rank(self):
        d = Nominee(id=4, name="D", vote_count=0)
        result = Standing.build_ranking([self.a, [self.b, self.c], d], 100)
        assert [(s.nominee.name, s.rank, s.tied) for s in result] == [
            ("A", 1, False),
            ("B", 2, True),
            ("C", 2, True),
            ("D", 4, False),
        ]

    def test_percentages(self):
        result = Standing.build_ranking([self.a, [self.b, self.c]], 100)
        assert [s.percentage for s in result] == [
            Decimal("50.0"), Decimal("25.0"), Decimal("25.0"),
        ]

    def test_zero_total(self):
        result = Standing.build_ranking([Nominee(id=1, name="A")], 0)
        assert result[0].percentage == Decimal("0")
        assert result[0].votes == 0

    def test_empty(self):
        assert Standing.build_ranking([], 0) == []

    def test_to_dict(self):
        result = Standing.build_ranking([self.a], 150)
        assert result[0].to_dict() == {
            "nominee_id": 1,
            "name": "A",
            "rank": 1,
            "tied": False,
            "votes": 50,
            "percentage": "33.3",
        }
