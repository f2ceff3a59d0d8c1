"""Decode stored rows into the shapes consumed by the compass UI.

Rows are read by column name (``id``, ``econ_freedom``, ``policy_text``...)
whichever store produced them, so each entity has exactly one decoder.
"""
from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any, Mapping, Optional

from app.schemas.country import CountryResponse
from app.schemas.party import PartyResponse
from app.schemas.policy import PolicyAnalysisResponse
from app.services.ideology import classify
from app.utils.logger import get_logger

logger = get_logger(__name__)

COUNTRY_FLAGS: dict[str, str] = {
    "Czech Republic": "\U0001F1E8\U0001F1FF",
    "Slovakia": "\U0001F1F8\U0001F1F0",
    "Poland": "\U0001F1F5\U0001F1F1",
    "Germany": "\U0001F1E9\U0001F1EA",
    "Austria": "\U0001F1E6\U0001F1F9",
    "Hungary": "\U0001F1ED\U0001F1FA",
    "United States": "\U0001F1FA\U0001F1F8",
    "United Kingdom": "\U0001F1EC\U0001F1E7",
    "France": "\U0001F1EB\U0001F1F7",
}

VALID_IMPACTS = ("high", "medium", "low")


def to_nullable_number(value: Any) -> Optional[float]:
    """Coerce a stored numeric column to float, or None if it isn't one.

    Some drivers hand back numeric columns as text or Decimal.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def to_nullable_int(value: Any) -> Optional[int]:
    number = to_nullable_number(value)
    if number is None or math.isinf(number):
        return None
    return int(number)


def derive_short_name(name: str) -> str:
    words = name.split(" ")
    if len(words) > 2:
        return words[0]
    return " ".join(words[:2])


def to_country(name: str) -> CountryResponse:
    return CountryResponse(code=name, name=name, flag=COUNTRY_FLAGS.get(name))


def to_party(raw: Mapping[str, Any]) -> PartyResponse:
    economic = to_nullable_number(raw.get("econ_freedom"))
    personal = to_nullable_number(raw.get("personal_freedom"))
    economic = economic if economic is not None else 0.0
    personal = personal if personal is not None else 0.0

    name = str(raw.get("name") or "")
    party_type = raw.get("type") or ""
    country = str(raw.get("country") or "")

    return PartyResponse(
        id=str(raw["id"]),
        name=name,
        short_name=derive_short_name(name),
        econ_freedom=economic,
        personal_freedom=personal,
        ideology=classify(economic, personal),
        description=f"{name} is a {party_type} in {country.upper()}.",
        website=raw.get("website") or None,
        founded=to_nullable_int(raw.get("founded")),
    )


def parse_categories(category_json: Optional[str]) -> list[str]:
    """Decode the JSON category column; anything unusable becomes []."""
    if not category_json:
        return []
    try:
        parsed = json.loads(category_json)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Failed to parse category JSON: %r", category_json)
        return []
    if not isinstance(parsed, list):
        return []
    return [c for c in parsed if isinstance(c, str)]


def to_policy(raw: Mapping[str, Any]) -> Optional[PolicyAnalysisResponse]:
    """Normalize one policy row, or return None if the row must be skipped."""
    policy_text = raw.get("policy_text")
    short_name = raw.get("short_name")
    if not policy_text or not short_name:
        return None

    impact = raw.get("impact")
    if impact not in VALID_IMPACTS:
        impact = "medium"

    return PolicyAnalysisResponse(
        policy_text=policy_text,
        short_name=short_name,
        impact=impact,
        categories=parse_categories(raw.get("category")),
        explanation=raw.get("explanation") or raw.get("impact_explanation") or "",
        econ_freedom=to_nullable_number(raw.get("econ_freedom")),
        personal_freedom=to_nullable_number(raw.get("personal_freedom")),
    )
