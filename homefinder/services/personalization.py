import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence

from homefinder.core.config import Settings, get_settings
from homefinder.models.preference import UserPreference
from homefinder.services.matching import (
    ALL_CRITERIA,
    RELAXED_CRITERIA,
    CriterionEnum,
    ListingData,
    MatchEvaluation,
    PreferenceData,
    PreferenceMatchEngine,
)
from homefinder.services.matching.vocabulary import listing_purpose_for
from homefinder.services.store import ListingQuery, PropertyStore

logger = logging.getLogger(__name__)

NO_PREFERENCE_MESSAGE = "No preferences set"
NEAR_MATCH_MESSAGE = (
    "No exact matches found, but here are some options within your price range."
)

@dataclass
class PersonalizedListings:


    properties: list[Any] = field(default_factory=list)
    is_personalized: bool = True
    is_near_match: bool = False
    message: Optional[str] = None

class PersonalizationService:
    """Loads a user's preference and candidates and runs the match engine."""

    def __init__(
        self,
        store: PropertyStore,
        engine: Optional[PreferenceMatchEngine] = None,
        settings: Optional[Settings] = None,
    ):

        self.store = store
        self.engine = engine or PreferenceMatchEngine()
        self.settings = settings or get_settings()

    async def get_preference(self, user_id: uuid.UUID) -> Optional[UserPreference]:

        return await self.store.get_preference(user_id)

    async def save_preference(
        self,
        user_id: uuid.UUID,
        values: dict[str, Any],
    ) -> UserPreference:

        preference = await self.store.save_preference(user_id, values)
        logger.info(f"Saved preferences for user {user_id}")
        return preference

    async def get_personalized(self, user_id: uuid.UUID) -> PersonalizedListings:
        """
        Personalized listings for a user, newest first.

        Falls back to the configured no-preference policy when the user has
        no saved preference, and to a relaxed price/purpose match when the
        strict match comes back empty.
        """
        preference = await self._load_preference(user_id)

        if preference is None:
            candidates = await self._load_fallback()
            outcome = self.engine.match(preference, candidates)
            logger.info(
                f"No preference for user {user_id}, "
                f"fallback={self.settings.no_preference_fallback}"
            )
            return PersonalizedListings(
                properties=[listing.source for listing in candidates],
                is_personalized=outcome.has_preference,
                message=NO_PREFERENCE_MESSAGE,
            )

        purpose = listing_purpose_for(preference.purpose)
        matched, scanned = await self._collect(
            preference,
            ListingQuery(purpose=purpose, city_id=preference.city_id),
        )

        if matched or not self.settings.near_match_enabled:
            logger.info(
                f"Personalized {len(matched)} of {scanned} candidates for user {user_id}"
            )
            return PersonalizedListings(properties=[listing.source for listing in matched])

        near, _ = await self._collect(
            preference,
            ListingQuery(purpose=purpose),
            criteria=RELAXED_CRITERIA,
        )

        if not near:
            logger.info(f"No personalized matches for user {user_id}")
            return PersonalizedListings()

        logger.info(f"Returning {len(near)} near matches for user {user_id}")
        return PersonalizedListings(
            properties=[listing.source for listing in near],
            is_near_match=True,
            message=NEAR_MATCH_MESSAGE,
        )

    async def explain(self, user_id: uuid.UUID) -> Optional[list[MatchEvaluation]]:
        """
        Evaluate every candidate against the user's preference.

        Returns None when the user has no preference.
        """
        preference = await self._load_preference(user_id)
        if preference is None:
            return None

        candidates = await self._fetch(ListingQuery(limit=self.settings.candidate_limit))
        outcome = self.engine.match(preference, candidates, explain=True)
        return outcome.evaluations

    async def _load_preference(self, user_id: uuid.UUID) -> Optional[PreferenceData]:
        preference = await self.store.get_preference(user_id)
        if preference is None:
            return None

        data = PreferenceData.from_model(preference)
        if data.has_inverted_bounds:
            logger.warning(
                f"Preference for user {user_id} has min_price {data.min_price} "
                f"above max_price {data.max_price}; no listing can match"
            )
        return data

    async def _load_fallback(self) -> list[ListingData]:
        if self.settings.no_preference_fallback == "empty":
            return []
        return await self._fetch(ListingQuery(limit=self.settings.personalized_limit))

    async def _collect(
        self,
        preference: PreferenceData,
        query: ListingQuery,
        criteria: Sequence[CriterionEnum] = ALL_CRITERIA,
    ) -> tuple[list[ListingData], int]:
        """
        Page through candidates until enough of them match.

        Candidates are fetched ``candidate_limit`` at a time, newest first,
        so older matches are still found in a large catalog.

        Returns:
            Up to ``personalized_limit`` matches and the number of candidates scanned
        """
        limit = self.settings.personalized_limit
        page_size = self.settings.candidate_limit
        matched: list[ListingData] = []
        scanned = 0

        while len(matched) < limit:
            page = await self._fetch(replace(query, skip=scanned, limit=page_size))
            scanned += len(page)
            matched.extend(self.engine.filter_listings(preference, page, criteria))
            if not page or len(page) < page_size:
                break

        return matched[:limit], scanned

    async def _fetch(self, query: ListingQuery) -> list[ListingData]:
        rows: Sequence[Any] = await self.store.list_listings(query)
        listings = [ListingData.from_model(row) for row in rows]

        untyped = [listing.id for listing in listings if listing.property_type is None]
        if untyped:
            logger.warning(f"{len(untyped)} listings have no property type: {untyped[:5]}")

        return listings
