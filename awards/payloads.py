"""Parse award JSON payloads from the backend API into models.

The API is loose about types: dates arrive as ISO strings or null, prices as
numbers, numeric strings, zero or null, and single objects are sometimes
wrapped in a ``{"data": ...}`` envelope. Parsing is forgiving about all of
that. Only a missing identifier is fatal.
"""

import logging
from typing import Any

from awards.models import (
    Award,
    Category,
    Nominee,
    coerce_datetime,
    coerce_decimal,
)

logger = logging.getLogger(__name__)


class PayloadError(ValueError):
    """Raised when an API payload cannot be turned into a model."""
    pass


def unwrap(payload: Any) -> Any:
    """Strip a ``{"data": ...}`` envelope if there is one."""
    if isinstance(payload, dict) and "data" in payload and "id" not in payload:
        return payload["data"]
    return payload


def _require_id(data: Any, kind: str) -> int | str:
    if not isinstance(data, dict):
        raise PayloadError(f"Expected a JSON object for {kind}, got {type(data).__name__}")
    identifier = data.get("id")
    if identifier is None or identifier == "":
        raise PayloadError(f"{kind} is missing an 'id'")
    return identifier


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-integer count %r", value)
        return 0


def parse_nominee(data: dict[str, Any]) -> Nominee:
    identifier = _require_id(data, "Nominee")
    # the API reports tallies as "votes"; older endpoints use "total_votes"
    votes = next(
        (data[k] for k in ("votes", "total_votes", "vote_count") if data.get(k) is not None),
        None,
    )
    return Nominee(
        id=identifier,
        name=str(data.get("name") or ""),
        nominee_code=data.get("nominee_code") or None,
        image=data.get("image") or None,
        vote_count=None if votes is None else _to_int(votes),
    )


def parse_category(data: dict[str, Any], award_id: int | str | None = None) -> Category:
    identifier = _require_id(data, "Category")
    return Category(
        id=identifier,
        name=str(data.get("name") or ""),
        description=data.get("description") or None,
        cost_per_vote=coerce_decimal(data.get("cost_per_vote")),
        nominees=[parse_nominee(n) for n in data.get("nominees") or []],
        award_id=data.get("award_id", award_id),
        voting_status=data.get("voting_status") or None,
        total_votes=_to_int(data.get("total_votes")),
    )


def parse_award(payload: Any) -> Award:
    """Build an Award aggregate (categories and nominees included).

    Args:
        payload: Decoded JSON from the award endpoint

    Returns:
        Parsed Award

    Raises:
        PayloadError: If the payload is not an object or lacks an id
    """
    data = unwrap(payload)
    identifier = _require_id(data, "Award")
    return Award(
        id=identifier,
        title=str(data.get("title") or ""),
        slug=str(data.get("slug") or ""),
        ceremony_date=coerce_datetime(data.get("ceremony_date")),
        voting_start=coerce_datetime(data.get("voting_start")),
        voting_end=coerce_datetime(data.get("voting_end")),
        status=data.get("status") or None,
        voting_status=data.get("voting_status") or None,
        show_results=data.get("show_results") is not False,
        total_votes=_to_int(data.get("total_votes")),
        categories=[
            parse_category(c, identifier) for c in data.get("categories") or []
        ],
    )


def parse_award_list(payload: Any) -> list[Award]:
    """Parse a list endpoint response, skipping entries that are unusable."""
    items = unwrap(payload)
    if isinstance(items, dict):
        items = items.get("awards") or items.get("items") or []
    if not isinstance(items, list):
        raise PayloadError(f"Expected a list of awards, got {type(items).__name__}")

    awards = []
    for item in items:
        try:
            awards.append(parse_award(item))
        except PayloadError as e:
            logger.warning("Skipping award entry: %s", e)
    return awards
