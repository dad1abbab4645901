"""Shared test helpers and fixtures."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from awards.models import Award, Category, Nominee

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def utc(*args: int) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


def make_category(
    category_id: int,
    nominee_names: list[str],
    cost_per_vote: Decimal | float | None = None,
    **kwargs,
) -> Category:
    """Build a Category whose nominees get ids category_id * 100 + n."""
    nominees = [
        Nominee(id=category_id * 100 + i, name=name)
        for i, name in enumerate(nominee_names, start=1)
    ]
    return Category(
        id=category_id,
        name=f"Category {category_id}",
        cost_per_vote=cost_per_vote,
        nominees=nominees,
        **kwargs,
    )


def make_award(**kwargs) -> Award:
    """Build an Award with sensible identity fields; override anything."""
    kwargs.setdefault("id", 1)
    kwargs.setdefault("title", "Test Awards")
    kwargs.setdefault("slug", "test-awards")
    return Award(**kwargs)


@pytest.fixture
def award_payload() -> dict:
    """Anonymized award payload captured from the API."""
    return json.loads((FIXTURES_DIR / "award.json").read_text(encoding="utf-8"))


@pytest.fixture
def january_award() -> Award:
    """Voting through January 2025, no ceremony date.

    Category 1 costs 1.5 per vote, category 2 has no price configured.
    """
    return make_award(
        voting_start=utc(2025, 1, 1),
        voting_end=utc(2025, 1, 31, 23, 59),
        categories=[
            make_category(1, ["Ama", "Kwame", "Efua"], Decimal("1.5"), award_id=1),
            make_category(2, ["Yaw", "Akosua"], None, award_id=1),
        ],
    )
