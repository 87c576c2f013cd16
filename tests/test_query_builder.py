"""Tests for QueryStrategyBuilder and FieldQueryBuilder."""

import pytest

from hotel_search.application.search import FieldQueryBuilder, QueryStrategyBuilder
from hotel_search.application.search.field_query_builder import FUZZY_BOOSTS
from hotel_search.application.search.query_builder import (
    BOOST_HIGHEST,
    BRAND_TERM_OVERLAP,
)
from hotel_search.domain.entities import CompoundClause, FieldSearchParameters, MatchKind, QueryClause, SearchIntent


@pytest.fixture
def builder():
    return QueryStrategyBuilder()


def _kinds(plan):
    return [(c.field, c.match_kind) for c in plan.clauses if isinstance(c, QueryClause)]


def _boost(plan, field, kind):
    return next(c.boost for c in plan.clauses if isinstance(c, QueryClause) and (c.field, c.match_kind) == (field, kind))


class TestPlanShape:
    @pytest.mark.parametrize("intent", list(SearchIntent))
    def test_every_intent_builds_or_group(self, builder, intent):
        plan = builder.build("jakarta", "jakarta", intent)
        assert plan.intent == intent
        assert plan.minimum_should_match == 1
        assert plan.clauses

    @pytest.mark.parametrize("intent", list(SearchIntent))
    def test_exact_outranks_fuzzy_on_same_field(self, builder, intent):
        plan = builder.build("jakarta", "jakarta", intent)
        leaves = [c for c in plan.clauses if isinstance(c, QueryClause)]
        for exact in (c for c in leaves if c.match_kind == MatchKind.EXACT):
            for other in leaves:
                if other.field == exact.field and other.match_kind in (
                    MatchKind.FUZZY,
                    MatchKind.PARTIAL,
                    MatchKind.EDGE_NGRAM,
                ):
                    assert exact.boost > other.boost

    def test_plan_is_immutable(self, builder):
        plan = builder.build("jakarta", "jakarta", SearchIntent.CITY_NAME)
        with pytest.raises(AttributeError):
            plan.clauses = ()  # type: ignore[misc]


class TestIntentClauses:
    def test_hotel_code(self, builder):
        plan = builder.build("jkt12345", "jkt12345", SearchIntent.HOTEL_CODE)
        assert _kinds(plan) == [
            ("code", MatchKind.EXACT),
            ("code", MatchKind.FUZZY),
            ("code", MatchKind.PREFIX),
            ("code", MatchKind.PARTIAL),
        ]
        assert plan.fields == {"code"}
        assert _boost(plan, "code", MatchKind.EXACT) == BOOST_HIGHEST

    def test_specific_intents_skip_geo_fields(self, builder):
        for intent in (SearchIntent.HOTEL_CODE, SearchIntent.EXACT_HOTEL_NAME):
            plan = builder.build("x", "x", intent)
            assert not plan.fields & {"city", "country"}

    def test_exact_hotel_name_with_correction(self, builder):
        plan = builder.build("hotel mulai", "hotel mulia", SearchIntent.EXACT_HOTEL_NAME)
        exact = [c for c in plan.clauses if c.match_kind == MatchKind.EXACT]
        assert [c.text for c in exact] == ["hotel mulai", "hotel mulia"]
        assert exact[0].boost > exact[1].boost

    def test_exact_hotel_name_without_correction(self, builder):
        plan = builder.build("the savoy", "the savoy", SearchIntent.EXACT_HOTEL_NAME)
        assert _kinds(plan) == [
            ("name", MatchKind.EXACT),
            ("name", MatchKind.PHRASE),
            ("name", MatchKind.FUZZY),
        ]

    def test_hotel_brand(self, builder):
        plan = builder.build("marriott", "marriott", SearchIntent.HOTEL_BRAND)
        assert _kinds(plan) == [
            ("name", MatchKind.PHRASE),
            ("name", MatchKind.FUZZY),
            ("name", MatchKind.EDGE_NGRAM),
        ]
        fuzzy = plan.clauses[1]
        assert fuzzy.minimum_should_match == BRAND_TERM_OVERLAP

    def test_brand_with_location(self, builder):
        plan = builder.build("golden tulip resort bali", "golden tulip resort bali", SearchIntent.BRAND_WITH_LOCATION)
        whole, compound, fuzzy = plan.clauses
        assert whole.match_kind == MatchKind.PHRASE and whole.text == "golden tulip resort bali"
        assert isinstance(compound, CompoundClause)
        name_part, city_part = compound.clauses
        assert (name_part.field, name_part.match_kind, name_part.text) == ("name", MatchKind.PHRASE, "golden tulip")
        assert (city_part.field, city_part.match_kind, city_part.text) == ("city", MatchKind.FUZZY, "bali")
        assert whole.boost > compound.boost > fuzzy.boost

    def test_city_name(self, builder):
        plan = builder.build("jakrata", "jakarta", SearchIntent.CITY_NAME)
        assert _kinds(plan) == [
            ("city", MatchKind.EXACT),
            ("city", MatchKind.EXACT),
            ("city", MatchKind.PHRASE),
            ("city", MatchKind.FUZZY),
            ("city", MatchKind.PREFIX),
            ("city", MatchKind.EDGE_NGRAM),
        ]
        assert plan.clauses[0].text == "jakrata"
        assert plan.clauses[1].text == "jakarta"
        assert plan.clauses[0].boost == plan.clauses[1].boost == BOOST_HIGHEST

    def test_country_name(self, builder):
        plan = builder.build("indonesia", "indonesia", SearchIntent.COUNTRY_NAME)
        assert _kinds(plan) == [
            ("country", MatchKind.EXACT),
            ("country", MatchKind.FUZZY),
            ("country", MatchKind.EDGE_NGRAM),
        ]

    def test_general_descending_boosts(self, builder):
        plan = builder.build("beachfront villa", "beachfront villa", SearchIntent.GENERAL)
        assert _kinds(plan) == [
            ("name", MatchKind.EXACT),
            ("name", MatchKind.PHRASE),
            ("name", MatchKind.FUZZY),
            ("city", MatchKind.EXACT),
            ("city", MatchKind.FUZZY),
            ("country", MatchKind.EXACT),
            ("country", MatchKind.FUZZY),
        ]
        boosts = [c.boost for c in plan.clauses]
        assert boosts == sorted(boosts, reverse=True)

    def test_missing_corrected_falls_back_to_normalized(self, builder):
        plan = builder.build("jakarta", "", SearchIntent.CITY_NAME)
        assert all(c.text == "jakarta" for c in plan.clauses)

    def test_to_dict(self, builder):
        data = builder.build("golden tulip resort bali", "golden tulip resort bali", SearchIntent.BRAND_WITH_LOCATION).to_dict()
        assert data["intent"] == "brand_with_location"
        assert "all_of" in data["clauses"][1]


class TestFieldQueryBuilder:
    @pytest.fixture
    def field_builder(self):
        return FieldQueryBuilder()

    def test_no_fields(self, field_builder):
        assert field_builder.build(FieldSearchParameters()) is None
        assert field_builder.build(FieldSearchParameters(city="   ")) is None

    def test_fuzzy_only(self, field_builder):
        plan = field_builder.build(FieldSearchParameters(code="jkt0001", name="mulia"), use_ngram=False)
        assert _kinds(plan) == [("code", MatchKind.FUZZY), ("name", MatchKind.FUZZY)]
        assert _boost(plan, "code", MatchKind.FUZZY) == FUZZY_BOOSTS["code"]
        assert _boost(plan, "name", MatchKind.FUZZY) == FUZZY_BOOSTS["name"]
        assert plan.minimum_should_match == 1

    def test_ngram_adds_partial_per_field(self, field_builder):
        params = FieldSearchParameters(code="jkt", name="mulia", city="jakarta", address1="jl thamrin")
        plan = field_builder.build(params)
        assert _kinds(plan) == [
            ("code", MatchKind.FUZZY),
            ("code", MatchKind.PARTIAL),
            ("name", MatchKind.FUZZY),
            ("name", MatchKind.PARTIAL),
            ("city", MatchKind.FUZZY),
            ("city", MatchKind.PARTIAL),
            ("address1", MatchKind.FUZZY),
            ("address1", MatchKind.PARTIAL),
        ]
        assert plan.fields == {"code", "name", "city", "address1"}

    def test_fuzzy_outranks_partial(self, field_builder):
        params = FieldSearchParameters(code="jkt", name="mulia", city="jakarta", address1="jl thamrin")
        plan = field_builder.build(params)
        for field_name in params.to_dict():
            assert _boost(plan, field_name, MatchKind.FUZZY) > _boost(plan, field_name, MatchKind.PARTIAL)

    def test_code_weighted_highest(self, field_builder):
        plan = field_builder.build(FieldSearchParameters(code="jkt", address1="jl thamrin"), use_ngram=False)
        assert _boost(plan, "code", MatchKind.FUZZY) > _boost(plan, "address1", MatchKind.FUZZY)
