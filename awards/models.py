"""Core data models for awards, categories, nominees and vote orders."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Self

logger = logging.getLogger(__name__)


def coerce_datetime(value: Any) -> datetime | None:
    """Turn an API date value into an aware datetime, or None.

    Accepts datetimes and ISO 8601 strings (a trailing "Z" is fine). Naive
    values are taken to be UTC. Anything absent or unparseable gives None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            logger.debug("Ignoring unparseable date %r", value)
            return None
    else:
        logger.debug("Ignoring non-date value %r", value)
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_decimal(value: Any) -> Decimal | None:
    """Turn an API number into a Decimal, or None if absent or non-numeric.

    Floats go through str() so that 2.5 becomes Decimal("2.5") rather than
    its binary expansion.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            logger.debug("Ignoring non-numeric amount %r", value)
            return None
    else:
        return None

    if not result.is_finite():
        return None
    return result


def round_money(amount: Decimal) -> Decimal:
    """Round to cents, halves away from zero (0.125 -> 0.13)."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class VotingPhase(str, Enum):
    """Lifecycle state of an award's voting window at a given instant."""
    UPCOMING = "upcoming"
    VOTING_OPEN = "voting_open"
    VOTING_CLOSED = "voting_closed"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass
class Nominee:
    """A candidate within a category.

    Attributes:
        id: Nominee identifier
        name: Display name
        nominee_code: Optional short code shown next to the name (e.g. "BA01")
        image: Optional image URL
        vote_count: Display-only vote tally from the backend
    """
    id: int | str
    name: str
    nominee_code: str | None = None
    image: str | None = None
    vote_count: int | None = None


@dataclass
class Category:
    """A votable grouping of nominees within an award.

    Attributes:
        id: Category identifier
        name: Category name
        description: Optional description
        cost_per_vote: Price of one vote; 0 or None means "not configured"
        nominees: Nominees in display order
        award_id: Identifier of the owning award, when known
        voting_status: Manual per-category toggle ("open" / "closed"), if set
        total_votes: Display-only vote tally from the backend
    """
    id: int | str
    name: str
    description: str | None = None
    cost_per_vote: Decimal | None = None
    nominees: list[Nominee] = field(default_factory=list)
    award_id: int | str | None = None
    voting_status: str | None = None
    total_votes: int = 0

    def get_nominee(self, nominee_id: int | str) -> Nominee | None:
        """Find a nominee by id. Ids are compared as strings."""
        for nominee in self.nominees:
            if str(nominee.id) == str(nominee_id):
                return nominee
        return None

    def has_nominee(self, nominee: Nominee) -> bool:
        return self.get_nominee(nominee.id) is not None

    def search_nominees(self, term: str) -> list[Nominee]:
        """Nominees whose name or code contains the term, case-insensitively."""
        needle = term.strip().lower()
        if not needle:
            return list(self.nominees)
        return [
            n for n in self.nominees
            if needle in n.name.lower()
            or (n.nominee_code and needle in n.nominee_code.lower())
        ]


@dataclass
class Award:
    """One award ceremony/competition with its categories.

    Example:
        >>> award = Award(
        ...     id=7,
        ...     title="Campus Choice Awards",
        ...     slug="campus-choice-2025",
        ...     voting_start=datetime(2025, 1, 1, tzinfo=timezone.utc),
        ...     voting_end=datetime(2025, 1, 31, 23, 59, tzinfo=timezone.utc),
        ...     categories=[Category(id=1, name="Best Artist")],
        ... )
    """
    id: int | str
    title: str
    slug: str = ""
    ceremony_date: datetime | None = None
    voting_start: datetime | None = None
    voting_end: datetime | None = None
    status: str | None = None
    voting_status: str | None = None
    show_results: bool = True
    total_votes: int = 0
    categories: list[Category] = field(default_factory=list)

    def get_category(self, category_id: int | str) -> Category | None:
        for category in self.categories:
            if str(category.id) == str(category_id):
                return category
        return None

    def find_nominee(self, nominee_id: int | str) -> tuple[Category, Nominee] | None:
        """Locate a nominee anywhere in the award, with the category holding it."""
        for category in self.categories:
            nominee = category.get_nominee(nominee_id)
            if nominee is not None:
                return category, nominee
        return None


@dataclass(frozen=True)
class VoteOrder:
    """A priced, validated request to cast votes for one nominee.

    Produced by awards.pricing.price_order and handed to the payment step.
    The total here is advisory; the backend re-derives the charge.
    """
    award_id: int | str | None
    category_id: int | str
    nominee_id: int | str
    quantity: int
    unit_price: Decimal
    total: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "award_id": self.award_id,
            "category_id": self.category_id,
            "nominee_id": self.nominee_id,
            "quantity": self.quantity,
            "unit_price": str(round_money(self.unit_price)),
            "total": str(round_money(self.total)),
        }


@dataclass
class Standing:
    """A nominee's position on a category leaderboard.

    Attributes:
        nominee: The ranked nominee
        rank: 1-indexed placement (nominees with equal votes share a rank)
        tied: Whether this nominee shares its rank with others
        votes: Vote count used for ranking
        percentage: Share of the category's votes, one decimal place
    """
    nominee: Nominee
    rank: int
    tied: bool
    votes: int
    percentage: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "nominee_id": self.nominee.id,
            "name": self.nominee.name,
            "rank": self.rank,
            "tied": self.tied,
            "votes": self.votes,
            "percentage": f"{self.percentage:.1f}",
        }

    @classmethod
    def build_ranking(
        cls, ordered: list[Nominee | list[Nominee]], total_votes: int
    ) -> list[Self]:
        """Build Standings from nominees ordered 1st to last.

        Args:
            ordered: Each element is a single Nominee, or a list of Nominees
                tied on votes.
            total_votes: Category total used for the percentage share.

        Returns:
            Standings with correct ranks and tied flags.
        """
        standings = []
        rank = 1
        for entry in ordered:
            group = entry if isinstance(entry, list) else [entry]
            tied = isinstance(entry, list)
            for nominee in group:
                votes = nominee.vote_count or 0
                standings.append(cls(
                    nominee=nominee,
                    rank=rank,
                    tied=tied,
                    votes=votes,
                    percentage=_share(votes, total_votes),
                ))
            rank += len(group)

        return standings


def _share(votes: int, total: int) -> Decimal:
    if total <= 0:
        return Decimal("0.0")
    share = Decimal(votes) * 100 / Decimal(total)
    return share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
