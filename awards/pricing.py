"""Vote order validation and pricing."""

from decimal import Decimal
from enum import Enum

from awards.models import Award, Category, Nominee, VoteOrder, coerce_decimal, round_money

# Pre-filled quantities offered by the voting UI. They are ordinary inputs to
# price_order, nothing more.
VOTE_PACKAGES = (1, 5, 10, 50)

DEFAULT_UNIT_PRICE = Decimal("1")


class ValidationErrorKind(str, Enum):
    INVALID_QUANTITY = "InvalidQuantity"
    NOMINEE_NOT_IN_CATEGORY = "NomineeNotInCategory"


_MESSAGES = {
    ValidationErrorKind.INVALID_QUANTITY: "Please enter a valid number of votes",
    ValidationErrorKind.NOMINEE_NOT_IN_CATEGORY: "Please select a nominee to vote for",
}


class ValidationError(ValueError):
    """Raised when a vote purchase request fails validation.

    Attributes:
        kind: Which rule was broken
        message: Text suitable for showing to the voter
    """

    def __init__(self, kind: ValidationErrorKind, detail: str = ""):
        self.kind = kind
        self.message = _MESSAGES[kind]
        super().__init__(detail or self.message)


def unit_price(category: Category) -> Decimal:
    """Price of one vote in this category.

    Categories without a positive configured price still sell votes at one
    currency unit each.
    """
    cost = coerce_decimal(category.cost_per_vote)
    if cost is None or cost <= 0:
        return DEFAULT_UNIT_PRICE
    return cost


def validate_quantity(quantity: object) -> int:
    # bool is an int subclass but never a vote count
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            ValidationErrorKind.INVALID_QUANTITY,
            f"Vote quantity must be a whole number, got {quantity!r}",
        )
    if quantity < 1:
        raise ValidationError(
            ValidationErrorKind.INVALID_QUANTITY,
            f"Vote quantity must be at least 1, got {quantity}",
        )
    return quantity


def price_order(
    category: Category,
    nominee: Nominee,
    quantity: int,
    award: Award | None = None,
) -> VoteOrder:
    """Validate a vote purchase and compute its price.

    Validation happens before any arithmetic, so a rejected request never
    produces a total. Nothing is mutated and nothing is sent anywhere.

    Args:
        category: Category being voted in
        nominee: Selected nominee; must belong to ``category``
        quantity: Number of votes, a whole number >= 1
        award: Owning award, used for the order's award reference. Falls back
            to ``category.award_id``.

    Returns:
        VoteOrder with unit price and total in Decimal

    Raises:
        ValidationError: kind INVALID_QUANTITY or NOMINEE_NOT_IN_CATEGORY
    """
    quantity = validate_quantity(quantity)
    if nominee is None or not category.has_nominee(nominee):
        raise ValidationError(
            ValidationErrorKind.NOMINEE_NOT_IN_CATEGORY,
            f"Nominee {getattr(nominee, 'id', None)!r} is not in "
            f"category {category.id!r}",
        )

    price = unit_price(category)
    return VoteOrder(
        award_id=award.id if award is not None else category.award_id,
        category_id=category.id,
        nominee_id=nominee.id,
        quantity=quantity,
        unit_price=price,
        total=price * quantity,
    )


def format_amount(amount: Decimal, currency: str = "GH₵") -> str:
    """Format a money amount for display, e.g. "GH₵7.50"."""
    return f"{currency}{round_money(amount):,.2f}"
