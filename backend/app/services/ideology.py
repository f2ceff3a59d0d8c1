"""Map compass coordinates to a discrete ideology label."""
from __future__ import annotations

import enum
from typing import Iterable, Optional


class Ideology(str, enum.Enum):
    CENTRIST = "centrist"
    LIBERAL = "liberal"
    CONSERVATIVE = "conservative"
    LIBERTARIAN = "libertarian"
    AUTHORITARIAN = "authoritarian"
    SOCIALIST = "socialist"
    GREEN = "green"


IDEOLOGY_LABELS: dict[Ideology, str] = {
    Ideology.LIBERAL: "Liberal",
    Ideology.CONSERVATIVE: "Conservative",
    Ideology.LIBERTARIAN: "Libertarian",
    Ideology.AUTHORITARIAN: "Authoritarian",
    Ideology.CENTRIST: "Centrist",
    Ideology.SOCIALIST: "Socialist",
    Ideology.GREEN: "Green",
}


def classify(economic: float, personal: float) -> Ideology:
    """Return the ideology for an (economic freedom, personal freedom) pair.

    First match wins; the quadrant rules overlap with the single-axis rules,
    so the order below is significant. All comparisons are strict.
    """
    if abs(economic) < 1 and abs(personal) < 1:
        return Ideology.CENTRIST
    if economic < -2 and personal > 2:
        return Ideology.LIBERAL
    if economic > 2 and personal < -2:
        return Ideology.CONSERVATIVE
    if economic > 2 and personal > 2:
        return Ideology.LIBERTARIAN
    if economic < -2 and personal < -2:
        return Ideology.AUTHORITARIAN
    if economic < -3:
        return Ideology.SOCIALIST
    if personal > 3:
        return Ideology.GREEN
    return Ideology.CENTRIST


# (economic, personal) contribution of each policy category
CATEGORY_WEIGHTS: dict[str, tuple[float, float]] = {
    "strongly left": (-5.0, 0.0),
    "moderately left": (-2.5, 0.0),
    "centrist": (0.0, 0.0),
    "moderately right": (2.5, 0.0),
    "strongly right": (5.0, 0.0),
    "strongly authoritarian": (0.0, -5.0),
    "moderately authoritarian": (0.0, -2.5),
    "moderately libertarian": (0.0, 2.5),
    "strongly libertarian": (0.0, 5.0),
}

IMPACT_FACTORS: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


def estimate_position(
    policies: Iterable[tuple[str, list[str]]],
) -> Optional[tuple[float, float]]:
    """Estimate compass coordinates from (impact, categories) pairs.

    Every recognised category adds its weight scaled by the policy's impact
    factor. Returns the weighted average rounded to one decimal, or None
    when no category was recognised.
    """
    total_economic = 0.0
    total_personal = 0.0
    total_weight = 0

    for impact, categories in policies:
        factor = IMPACT_FACTORS.get(impact, 1)
        for category in categories:
            weight = CATEGORY_WEIGHTS.get(category.strip().lower())
            if weight is None:
                continue
            total_economic += weight[0] * factor
            total_personal += weight[1] * factor
            total_weight += factor

    if total_weight == 0:
        return None

    return (
        round(total_economic / total_weight, 1),
        round(total_personal / total_weight, 1),
    )
