"""Voting phase resolution for awards."""

from datetime import datetime

from awards.models import Award, Category, VotingPhase, coerce_datetime

_STATUS_ALIASES = {
    "upcoming": VotingPhase.UPCOMING,
    "voting_open": VotingPhase.VOTING_OPEN,
    "voting open": VotingPhase.VOTING_OPEN,
    "voting_closed": VotingPhase.VOTING_CLOSED,
    "voting closed": VotingPhase.VOTING_CLOSED,
    "completed": VotingPhase.COMPLETED,
}


def parse_phase(value: str | None) -> VotingPhase | None:
    """Map a status string onto a VotingPhase, or None if it names none."""
    if not value:
        return None
    return _STATUS_ALIASES.get(value.strip().lower())


def resolve_phase(
    award: Award,
    now: datetime,
    *,
    ceremony_override: bool = True,
    status_fallback: bool = False,
) -> VotingPhase:
    """Derive the voting phase of an award at the instant ``now``.

    Rules, in order:
    - If ``ceremony_override`` is set and the ceremony date has passed, the
      award is completed, whatever the voting window says.
    - Without both a voting start and end, the award is upcoming. With
      ``status_fallback`` set and no timestamps at all, a recognised
      ``award.status`` is returned instead.
    - Otherwise ``now`` is compared against the window, inclusive at both
      ends.

    Dates that are missing or cannot be parsed count as absent. This never
    raises.

    Args:
        award: The award to inspect
        now: Current instant, supplied by the caller (naive means UTC)
        ceremony_override: Let a past ceremony date force ``completed``
        status_fallback: Use ``award.status`` when the award has no dates

    Returns:
        The VotingPhase at ``now``
    """
    now = coerce_datetime(now)
    start = coerce_datetime(award.voting_start)
    end = coerce_datetime(award.voting_end)
    ceremony = coerce_datetime(award.ceremony_date)

    if now is None:
        return VotingPhase.UPCOMING

    if ceremony_override and ceremony is not None and now > ceremony:
        return VotingPhase.COMPLETED

    if start is None or end is None:
        if status_fallback and start is None and end is None and ceremony is None:
            return parse_phase(award.status) or VotingPhase.UPCOMING
        return VotingPhase.UPCOMING

    if now < start:
        return VotingPhase.UPCOMING
    if now > end:
        return VotingPhase.VOTING_CLOSED
    return VotingPhase.VOTING_OPEN


def voting_allowed(award: Award, category: Category, now: datetime) -> bool:
    """Whether nominees in this category can be voted for at ``now``.

    The award must be in its open phase, and neither the award nor the
    category may have been closed by hand.
    """
    if resolve_phase(award, now) is not VotingPhase.VOTING_OPEN:
        return False
    return not (_closed_by_hand(award.voting_status) or _closed_by_hand(category.voting_status))


def _closed_by_hand(toggle: str | None) -> bool:
    return (toggle or "").strip().lower() == "closed"


def phase_label(value: VotingPhase | str | None) -> str:
    """Badge label for a phase or a raw status string."""
    if isinstance(value, VotingPhase):
        return value.label
    phase = parse_phase(value)
    if phase is not None:
        return phase.label
    if value and value.strip().lower() == "draft":
        return "Draft"
    return value or "Unknown"
