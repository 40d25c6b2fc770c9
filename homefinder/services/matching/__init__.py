from homefinder.services.matching.criteria import (
    ALL_CRITERIA,
    RELAXED_CRITERIA,
    CriterionEnum,
    ListingData,
    PreferenceCriteria,
    PreferenceData,
    coerce_price,
)
from homefinder.services.matching.engine import (
    MatchEvaluation,
    MatchOutcome,
    MatchStatusEnum,
    PreferenceMatchEngine,
)

__all__ = [
    "ALL_CRITERIA",
    "RELAXED_CRITERIA",
    "CriterionEnum",
    "ListingData",
    "PreferenceCriteria",
    "PreferenceData",
    "coerce_price",
    "MatchEvaluation",
    "MatchOutcome",
    "MatchStatusEnum",
    "PreferenceMatchEngine",
]
