"""Orchestrator: find the nominee, check the voting phase, price the order."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from awards.models import Award, Category, Nominee, VoteOrder, VotingPhase
from awards.pricing import ValidationError, price_order
from awards.status import resolve_phase, voting_allowed

logger = logging.getLogger(__name__)


@dataclass
class VoteCheckout:
    """Everything the payment step needs for one vote purchase."""
    award: Award
    category: Category
    nominee: Nominee
    phase: VotingPhase
    order: VoteOrder

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "award": {"id": self.award.id, "title": self.award.title, "slug": self.award.slug},
            "category": {"id": self.category.id, "name": self.category.name},
            "nominee": {
                "id": self.nominee.id,
                "name": self.nominee.name,
                "nominee_code": self.nominee.nominee_code,
            },
            "phase": self.phase.value,
            "order": self.order.to_dict(),
        }


class CheckoutError(Exception):
    """Error preparing a vote purchase, with a message fit for the voter."""
    pass


def prepare_vote(
    award: Award, nominee_id: int | str, quantity: int, now: datetime
) -> VoteCheckout:
    """Prepare a priced vote for a nominee in an award.

    Args:
        award: Award aggregate as loaded from the API
        nominee_id: Nominee the voter picked
        quantity: Number of votes requested
        now: Current instant, supplied by the caller

    Returns:
        VoteCheckout ready to hand to the payment step

    Raises:
        CheckoutError: If the nominee is unknown, voting is not open, or the
            request fails validation
    """
    found = award.find_nominee(nominee_id)
    if found is None:
        raise CheckoutError("Nominee not found")
    category, nominee = found

    phase = resolve_phase(award, now)
    if not voting_allowed(award, category, now):
        logger.info(
            "Refusing vote for nominee %s in %r: phase is %s",
            nominee_id, award.slug, phase.value,
        )
        raise CheckoutError(
            f"Voting is not open for {category.name}. "
            f"Current status: {phase.label}."
        )

    try:
        order = price_order(category, nominee, quantity, award=award)
    except ValidationError as e:
        raise CheckoutError(e.message) from e

    return VoteCheckout(
        award=award, category=category, nominee=nominee, phase=phase, order=order
    )
