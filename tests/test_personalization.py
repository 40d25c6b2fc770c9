"""Tests for PersonalizationService against the in-memory store."""

from decimal import Decimal

import pytest

from homefinder.core.config import Settings
from homefinder.models import (
    ListingPurposeEnum,
    PreferencePropertyTypeEnum,
    PreferencePurposeEnum,
    PropertyStyleEnum,
    User,
)
from homefinder.services.personalization import (
    NEAR_MATCH_MESSAGE,
    NO_PREFERENCE_MESSAGE,
    PersonalizationService,
)
from tests.factories import (
    APARTMENT,
    DUHOK,
    ERBIL,
    InMemoryPropertyStore,
    make_preference,
    make_property,
)


def service_for(store: InMemoryPropertyStore, **overrides) -> PersonalizationService:
    return PersonalizationService(store, settings=Settings(**overrides))


class TestNoPreference:

    @pytest.mark.asyncio
    async def test_unfiltered_fallback_returns_newest_listings(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        old = make_property(age_days=10)
        new = make_property(age_days=1, purpose=ListingPurposeEnum.RENT)
        store.add_properties(old, new)

        result = await service_for(store, no_preference_fallback="unfiltered").get_personalized(user.id)

        assert result.properties == [new, old]
        assert result.is_personalized is False
        assert result.message == NO_PREFERENCE_MESSAGE

    @pytest.mark.asyncio
    async def test_unfiltered_fallback_respects_limit(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        store.add_properties(*[make_property(age_days=i) for i in range(5)])

        result = await service_for(store, personalized_limit=2).get_personalized(user.id)

        assert len(result.properties) == 2

    @pytest.mark.asyncio
    async def test_empty_fallback_does_not_load_listings(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        store.add_properties(make_property())

        result = await service_for(store, no_preference_fallback="empty").get_personalized(user.id)

        assert result.properties == []
        assert result.is_personalized is False
        assert store.queries == []


class TestPersonalized:

    @pytest.mark.asyncio
    async def test_strict_match(self, store: InMemoryPropertyStore, user: User) -> None:
        match = make_property(project_id=make_property().id)
        store.add_properties(
            match,
            make_property(purpose=ListingPurposeEnum.RENT),
            make_property(property_type=APARTMENT),
        )
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.HOUSE,
            property_style=PropertyStyleEnum.PROJECT,
            min_price=Decimal("100000"),
            max_price=Decimal("300000"),
        )

        result = await service_for(store).get_personalized(user.id)

        assert result.properties == [match]
        assert result.is_personalized is True
        assert result.is_near_match is False
        assert result.message is None

    @pytest.mark.asyncio
    async def test_candidates_are_prefiltered_by_mapped_purpose_and_city(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.BOTH,
            city_id=ERBIL.id,
        )

        await service_for(store).get_personalized(user.id)

        assert store.queries[0].purpose == ListingPurposeEnum.SALE
        assert store.queries[0].city_id == ERBIL.id

    @pytest.mark.asyncio
    async def test_results_are_newest_first_and_limited(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        listings = [make_property(age_days=i) for i in range(4)]
        store.add_properties(*reversed(listings))
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BOTH,
            property_type=PreferencePropertyTypeEnum.BOTH,
        )

        result = await service_for(store, personalized_limit=3).get_personalized(user.id)

        assert result.properties == listings[:3]

    @pytest.mark.asyncio
    async def test_older_exact_match_beyond_first_candidate_page(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        house = make_property(age_days=5)
        store.add_properties(
            house,
            make_property(property_type=APARTMENT, age_days=1),
            make_property(property_type=APARTMENT, age_days=2),
        )
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.HOUSE,
        )

        result = await service_for(store, candidate_limit=2).get_personalized(user.id)

        assert result.properties == [house]
        assert result.is_near_match is False
        assert [q.skip for q in store.queries] == [0, 2]

    @pytest.mark.asyncio
    async def test_paging_stops_once_limit_is_filled(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        listings = [make_property(age_days=i) for i in range(3)]
        store.add_properties(*listings)
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.HOUSE,
        )

        result = await service_for(
            store, candidate_limit=1, personalized_limit=1
        ).get_personalized(user.id)

        assert result.properties == listings[:1]
        assert len(store.queries) == 1

    @pytest.mark.asyncio
    async def test_near_match_fallback(self, store: InMemoryPropertyStore, user: User) -> None:
        apartment = make_property(property_type=APARTMENT, city=DUHOK)
        store.add_properties(apartment, make_property(price=Decimal("900000")))
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.HOUSE,
            city_id=ERBIL.id,
            min_price=Decimal("100000"),
            max_price=Decimal("300000"),
        )

        result = await service_for(store).get_personalized(user.id)

        assert result.properties == [apartment]
        assert result.is_near_match is True
        assert result.message == NEAR_MATCH_MESSAGE

    @pytest.mark.asyncio
    async def test_near_match_can_be_disabled(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        store.add_properties(make_property(property_type=APARTMENT))
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.HOUSE,
        )

        result = await service_for(store, near_match_enabled=False).get_personalized(user.id)

        assert result.properties == []
        assert result.is_near_match is False

    @pytest.mark.asyncio
    async def test_inverted_bounds_return_nothing_and_log(
        self, store: InMemoryPropertyStore, user: User, caplog: pytest.LogCaptureFixture
    ) -> None:
        store.add_properties(make_property(price=Decimal("200000")))
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BOTH,
            property_type=PreferencePropertyTypeEnum.BOTH,
            min_price=Decimal("300000"),
            max_price=Decimal("100000"),
        )

        with caplog.at_level("WARNING"):
            result = await service_for(store).get_personalized(user.id)

        assert result.properties == []
        assert result.is_personalized is True
        assert "above max_price" in caplog.text

    @pytest.mark.asyncio
    async def test_untyped_listings_are_logged_and_still_evaluated(
        self, store: InMemoryPropertyStore, user: User, caplog: pytest.LogCaptureFixture
    ) -> None:
        untyped = make_property(property_type=None, price=None)
        store.add_properties(untyped)
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.BOTH,
        )

        with caplog.at_level("WARNING"):
            result = await service_for(store).get_personalized(user.id)

        assert result.properties == [untyped]
        assert "no property type" in caplog.text


class TestExplain:

    @pytest.mark.asyncio
    async def test_explain_without_preference(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        assert await service_for(store).explain(user.id) is None

    @pytest.mark.asyncio
    async def test_explain_covers_every_candidate(
        self, store: InMemoryPropertyStore, user: User
    ) -> None:
        rent = make_property(purpose=ListingPurposeEnum.RENT)
        sale = make_property()
        store.add_properties(rent, sale)
        store.preferences[user.id] = make_preference(
            user.id,
            purpose=PreferencePurposeEnum.BUY,
            property_type=PreferencePropertyTypeEnum.BOTH,
        )

        evaluations = await service_for(store).explain(user.id)

        by_id = {e.listing.id: e for e in evaluations}
        assert by_id[sale.id].is_match
        assert by_id[rent.id].reasons == ["purpose RENT != SALE"]
