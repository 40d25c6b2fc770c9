import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from homefinder.services.matching.criteria import (
    ALL_CRITERIA,
    CriterionEnum,
    ListingData,
    PreferenceCriteria,
    PreferenceData,
)

class MatchStatusEnum(str, enum.Enum):

    MATCHED = "matched"
    NO_PREFERENCE = "no_preference"

@dataclass
class MatchEvaluation:


    listing: ListingData
    is_match: bool
    reasons: list[str] = field(default_factory=list)

@dataclass
class MatchOutcome:
    """
    Result of running a preference over a candidate set.

    ``NO_PREFERENCE`` is a signal, not an error: the caller decides what to
    show a user who never saved a preference.
    """

    status: MatchStatusEnum
    listings: list[ListingData] = field(default_factory=list)
    evaluations: list[MatchEvaluation] = field(default_factory=list)

    @property
    def has_preference(self) -> bool:
        return self.status != MatchStatusEnum.NO_PREFERENCE

    @property
    def rejections(self) -> dict[Any, list[str]]:
        return {
            evaluation.listing.id: evaluation.reasons
            for evaluation in self.evaluations
            if not evaluation.is_match
        }

    @classmethod
    def no_preference(cls) -> "MatchOutcome":

        return cls(status=MatchStatusEnum.NO_PREFERENCE)

class PreferenceMatchEngine:

    def __init__(self, criteria: Optional[PreferenceCriteria] = None):

        self.criteria = criteria or PreferenceCriteria()

    def evaluate_listing(
        self,
        preference: PreferenceData,
        listing: ListingData,
        criteria: Sequence[CriterionEnum] = ALL_CRITERIA,
    ) -> MatchEvaluation:
        """
        Run every active criterion against one listing.

        All criteria are evaluated even after the first failure so that
        diagnostics can show the complete list of reasons.
        """
        reasons = []
        for criterion in criteria:
            reason = self.criteria.check(criterion, preference, listing)
            if reason is not None:
                reasons.append(reason)

        return MatchEvaluation(
            listing=listing,
            is_match=not reasons,
            reasons=reasons,
        )

    def match(
        self,
        preference: Optional[PreferenceData],
        listings: Iterable[ListingData],
        *,
        criteria: Sequence[CriterionEnum] = ALL_CRITERIA,
        explain: bool = False,
    ) -> MatchOutcome:
        """
        Filter listings down to the ones satisfying a preference.

        The result keeps the input order. When ``preference`` is None the
        listings are left untouched and a NO_PREFERENCE outcome is returned.

        Args:
            preference: The user's saved preference, if any
            listings: Candidate listings in display order
            criteria: Criteria to apply, all of them by default
            explain: Keep the evaluation of every listing, failures included

        Returns:
            MatchOutcome with the matching listings
        """
        if preference is None:
            return MatchOutcome.no_preference()

        matched: list[ListingData] = []
        evaluations: list[MatchEvaluation] = []

        for listing in listings:
            evaluation = self.evaluate_listing(preference, listing, criteria)
            if evaluation.is_match:
                matched.append(listing)
            if explain:
                evaluations.append(evaluation)

        return MatchOutcome(
            status=MatchStatusEnum.MATCHED,
            listings=matched,
            evaluations=evaluations,
        )

    def filter_listings(
        self,
        preference: PreferenceData,
        listings: Iterable[ListingData],
        criteria: Sequence[CriterionEnum] = ALL_CRITERIA,
    ) -> list[ListingData]:

        return self.match(preference, listings, criteria=criteria).listings
