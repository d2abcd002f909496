"""Compatibility scoring — brief x partner.

Weighted sum of five dimensions, each on a 0-100 scale:

    moduleFit      0.30  required modules covered by the partner's services
    industryMatch  0.25  partner industry vs. the client's industry
    budgetFit      0.20  partner's average rate vs. the rate the budget implies
    capacity       0.10  available / limited / full
    rating         0.15  stars x 20

``score`` is pure: no I/O, no settings lookups beyond the defaults passed in,
and no exceptions for missing or malformed inputs (they score neutral).
"""
import math
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from django.conf import settings

from apps.core.utils import normalize_text

WEIGHTS = {
    "moduleFit": 0.30,
    "industryMatch": 0.25,
    "budgetFit": 0.20,
    "capacity": 0.10,
    "rating": 0.15,
}

NEUTRAL_MODULE_FIT = 50
NEUTRAL_INDUSTRY = 50
NEUTRAL_BUDGET = 70
NEUTRAL_RATING = 60
BUDGET_FLOOR = 50

CAPACITY_SCORES = {
    "available": 100,
    "limited": 60,
    "full": 30,
    "booked": 30,
}
UNKNOWN_CAPACITY = 60

FALLBACK_REASON = "Good overall match"

_AMOUNT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([km])?\b", re.IGNORECASE)
_MULTIPLIERS = {"k": 1_000, "m": 1_000_000}


@dataclass(frozen=True)
class ScoreResult:
    score: int
    breakdown: dict = field(default_factory=dict)
    reasons: list = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "score": self.score,
            "breakdown": dict(self.breakdown),
            "reasons": list(self.reasons),
        }


def score(
    brief,
    partner,
    client_industry: str = "",
    hours_per_week: int = 40,
    default_timeline_weeks: int = 12,
) -> ScoreResult:
    """Score how well ``partner`` fits ``brief``.

    ``client_industry`` is the industry the client declared on their profile;
    the brief itself carries none.
    """
    breakdown = {
        "moduleFit": module_fit(getattr(brief, "modules", None), getattr(partner, "services", None)),
        "industryMatch": industry_match(getattr(partner, "industry", ""), client_industry),
        "budgetFit": budget_fit(
            getattr(brief, "budget", None),
            getattr(brief, "timeline_weeks", None),
            getattr(partner, "hourly_rate_min", None),
            getattr(partner, "hourly_rate_max", None),
            hours_per_week=hours_per_week,
            default_timeline_weeks=default_timeline_weeks,
        ),
        "capacity": capacity_score(getattr(partner, "capacity", None)),
        "rating": rating_score(getattr(partner, "rating", None)),
    }
    total = sum(WEIGHTS[dim] * value for dim, value in breakdown.items())
    final = max(0, min(100, round(total)))
    return ScoreResult(
        score=final,
        breakdown=breakdown,
        reasons=build_reasons(breakdown, partner),
    )


def module_fit(modules, services) -> int:
    modules = [m for m in (normalize_text(x) for x in modules or [] if x) if m]
    if not modules:
        return NEUTRAL_MODULE_FIT
    services = [s for s in (normalize_text(x) for x in services or [] if x) if s]
    covered = sum(
        1 for module in modules
        if any(module in service or service in module for service in services)
    )
    return round(covered / len(modules) * 100)


def industry_match(partner_industry, client_industry) -> int:
    partner_industry = normalize_text(partner_industry or "")
    client_industry = normalize_text(client_industry or "")
    if not partner_industry or not client_industry:
        return NEUTRAL_INDUSTRY
    if partner_industry == client_industry:
        return 100
    if partner_industry in client_industry or client_industry in partner_industry:
        return 60
    if set(re.findall(r"\w+", partner_industry)) & set(re.findall(r"\w+", client_industry)):
        return 60
    return 40


def parse_budget(budget):
    """Turn a budget bucket or amount into a single total, or None.

    "$50,000 - $100,000" -> 75000, "< $10,000" -> 5000, "> $100,000" -> 125000,
    "75k" -> 75000, 42000 -> 42000.
    """
    if budget is None or isinstance(budget, bool):
        return None
    if isinstance(budget, (int, float, Decimal)):
        value = float(budget)
        return value if math.isfinite(value) and value > 0 else None

    text = str(budget).replace(",", "").strip()
    amounts = []
    for number, suffix in _AMOUNT_RE.findall(text):
        try:
            value = Decimal(number)
        except InvalidOperation:
            continue
        amounts.append(float(value) * _MULTIPLIERS.get(suffix.lower(), 1))
    amounts = [a for a in amounts if a > 0]
    if not amounts:
        return None
    if len(amounts) >= 2:
        return (amounts[0] + amounts[1]) / 2
    amount = amounts[0]
    if text.startswith("<") or text.lower().startswith(("under", "less than", "up to")):
        return amount / 2
    if text.startswith(">") or text.endswith("+") or text.lower().startswith(("over", "more than")):
        return amount * 1.25
    return amount


def budget_fit(
    budget,
    timeline_weeks,
    rate_min,
    rate_max,
    hours_per_week: int = 40,
    default_timeline_weeks: int = 12,
) -> int:
    total = parse_budget(budget)
    if total is None or rate_min is None or rate_max is None:
        return NEUTRAL_BUDGET
    weeks = timeline_weeks if timeline_weeks and timeline_weeks > 0 else default_timeline_weeks
    hours = weeks * max(hours_per_week, 1)
    implied_rate = total / hours
    partner_rate = (rate_min + rate_max) / 2
    if implied_rate <= 0:
        return NEUTRAL_BUDGET
    deviation = abs(partner_rate - implied_rate) / implied_rate * 100
    return max(BUDGET_FLOOR, round(100 - deviation))


def capacity_score(capacity) -> int:
    return CAPACITY_SCORES.get(normalize_text(capacity or ""), UNKNOWN_CAPACITY)


def rating_score(rating) -> int:
    if rating is None or isinstance(rating, bool):
        return NEUTRAL_RATING
    try:
        value = float(rating) * 20
    except (TypeError, ValueError):
        return NEUTRAL_RATING
    if not math.isfinite(value):
        return NEUTRAL_RATING
    return max(0, min(100, round(value)))


def build_reasons(breakdown: dict, partner) -> list[str]:
    reasons = []
    if breakdown["moduleFit"] > 70:
        reasons.append(f"Strong fit for your required modules ({breakdown['moduleFit']}%)")
    if breakdown["industryMatch"] > 60:
        reasons.append(f"Experience in the {getattr(partner, 'industry', '')} industry")
    if breakdown["budgetFit"] > 70:
        reasons.append("Hourly rate fits your budget")
    if breakdown["capacity"] == 100:
        reasons.append("Available to start now")
    if breakdown["rating"] >= 80:
        reasons.append(f"{round(breakdown['rating'] / 20)}-star rated partner")
    return reasons or [FALLBACK_REASON]


def score_partner(brief, partner, client_industry: str = "") -> ScoreResult:
    """``score`` with the effort assumptions taken from Django settings."""
    return score(
        brief,
        partner,
        client_industry=client_industry,
        hours_per_week=settings.MATCHING_HOURS_PER_WEEK,
        default_timeline_weeks=settings.MATCHING_DEFAULT_TIMELINE_WEEKS,
    )
