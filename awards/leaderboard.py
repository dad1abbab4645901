"""Category leaderboards ranked by vote count."""

from awards.models import Award, Category, Nominee, Standing


class ResultsHiddenError(Exception):
    """Raised when results are requested for an award that hides them."""
    pass


def rank_nominees(category: Category) -> list[Standing]:
    """Rank a category's nominees by votes, highest first.

    Nominees with equal votes share a rank and the next rank skips ahead
    (1, 2, 2, 4). Percentages are relative to the sum of nominee votes.
    """
    groups: dict[int, list[Nominee]] = {}
    for nominee in category.nominees:
        groups.setdefault(nominee.vote_count or 0, []).append(nominee)

    ordered: list[Nominee | list[Nominee]] = []
    for votes in sorted(groups.keys(), reverse=True):
        group = groups[votes]
        ordered.append(group[0] if len(group) == 1 else group)

    total = sum(n.vote_count or 0 for n in category.nominees)
    return Standing.build_ranking(ordered, total)


def award_leaderboard(award: Award) -> dict[int | str, list[Standing]]:
    """Standings for every category in the award, keyed by category id.

    Raises:
        ResultsHiddenError: If the organizer has turned results off
    """
    if not award.show_results:
        raise ResultsHiddenError(
            f"Results for {award.title!r} are not public yet."
        )
    return {category.id: rank_nominees(category) for category in award.categories}
