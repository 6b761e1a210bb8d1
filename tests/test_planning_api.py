"""
Tests for the planning rights facade.

Tests that fact lookup, rules evaluation and summary generation are
combined correctly, and that missing facts degrade to a fallback result.
"""

import pytest

from pd_checker.api import (
    FALLBACK_CONFIDENCE,
    PlanningResult,
    build_fallback_result,
    check_planning_rights,
)
from pd_checker.facts import (
    FactLookup,
    FactProviderError,
    PropertyFactStore,
    create_sample_properties,
)
from pd_checker.rules import (
    CheckStatus,
    PlanningConstraints,
    PlanningRule,
    PlanningRulesEngine,
    PropertyFacts,
    RuleResult,
    RuleSeverity,
    FULL_RIGHTS_SUMMARY,
)


class FixedProvider:
    """Provider returning a fixed lookup and recording calls."""

    def __init__(self, lookup):
        self._lookup = lookup
        self.calls = []

    def lookup(self, address, coordinates=None):
        self.calls.append((address, coordinates))
        return self._lookup


class BrokenProvider:
    """Provider whose upstream is down."""

    def lookup(self, address, coordinates=None):
        raise FactProviderError("geocoding service timed out")


# --- Test Data Fixtures ---

@pytest.fixture
def sample_store():
    store = PropertyFactStore()
    create_sample_properties(store)
    return store


@pytest.fixture
def clear_lookup():
    return FactLookup(
        facts=PropertyFacts(
            address="8 Station Road, Frome",
            postcode="BA11 1AA",
            local_authority="Somerset Council",
        ),
        confidence=90.0,
        sources=["Government Open Data"],
    )


# --- Facade Tests ---

class TestCheckPlanningRights:
    """Test the main planning rights entry point."""

    def test_clear_property(self, clear_lookup):
        """Test an unconstrained house retains PD rights."""
        result = check_planning_rights(FixedProvider(clear_lookup), "8 Station Road, Frome")

        assert isinstance(result, PlanningResult)
        assert result.has_permitted_development_rights is True
        assert result.summary == FULL_RIGHTS_SUMMARY
        assert result.local_authority == "Somerset Council"
        assert result.sources == ["Government Open Data"]
        assert len(result.checks) == 9
        assert result.is_fallback is False

    def test_confidence_is_minimum(self, clear_lookup):
        """Test the lower of provider and engine confidence is reported."""
        result = check_planning_rights(FixedProvider(clear_lookup), "8 Station Road")
        # Engine clamps to 99.8; provider says 90
        assert result.confidence == 90.0

    def test_engine_confidence_when_lower(self):
        """Test engine confidence wins when the provider is more confident."""
        lookup = FactLookup(
            facts=PropertyFacts(
                address="1 Abbey Green, Bath",
                constraints=PlanningConstraints(
                    article_4_direction=True,
                    listed_building=True,
                    world_heritage=True,
                    conservation_area=True,
                ),
            ),
            confidence=99.8,
        )
        result = check_planning_rights(FixedProvider(lookup), "1 Abbey Green")

        # 95 - 2 - 3 + 2 - 2.5 - 1.5 + 0.5 + 0.5 + 0.2 + 0.2
        assert result.confidence == pytest.approx(89.4)
        assert result.has_permitted_development_rights is False

    def test_coordinates_passed_when_both_given(self, clear_lookup):
        """Test coordinates reach the provider only as a pair."""
        provider = FixedProvider(clear_lookup)

        result = check_planning_rights(provider, "8 Station Road", latitude=51.23, longitude=-2.32)
        assert provider.calls[-1] == ("8 Station Road", (51.23, -2.32))
        assert result.coordinates == (51.23, -2.32)

        check_planning_rights(provider, "8 Station Road", latitude=51.23)
        assert provider.calls[-1] == ("8 Station Road", None)

    def test_address_trimmed(self, clear_lookup):
        """Test surrounding whitespace is stripped before lookup."""
        provider = FixedProvider(clear_lookup)
        check_planning_rights(provider, "  8 Station Road  ")
        assert provider.calls[0][0] == "8 Station Road"

    @pytest.mark.parametrize("address", ["", "   ", None])
    def test_blank_address(self, clear_lookup, address):
        """Test blank addresses are rejected."""
        with pytest.raises(ValueError):
            check_planning_rights(FixedProvider(clear_lookup), address)

    def test_sample_bath_property(self, sample_store):
        """Test a blocked reference property uses its notes in the summary."""
        result = check_planning_rights(sample_store, "45 Georgian Square, Bath")

        assert result.has_permitted_development_rights is False
        assert result.summary == (
            "Planning permission will likely be required due to Article 4 Direction. "
            "Located in Bath World Heritage Site with strict Article 4 Direction"
        )

    def test_sample_clear_property(self, sample_store):
        """Test the unconstrained reference property."""
        result = check_planning_rights(sample_store, "123 High Street, Westminster")

        assert result.has_permitted_development_rights is True
        assert result.confidence == 99.8
        assert all(c.status == CheckStatus.PASS for c in result.checks)

    def test_custom_engine(self, clear_lookup):
        """Test an injected engine is used instead of the defaults."""
        always_blocks = PlanningRule(
            id="moratorium",
            name="Development Moratorium",
            description="Temporary halt on all development",
            severity=RuleSeverity.BLOCKING,
            priority=200,
            evaluate=lambda facts: RuleResult(
                applies=True,
                status=CheckStatus.FAIL,
                message="Development moratorium in force - planning permission required",
                confidence_impact=-1.0,
            ),
        )
        engine = PlanningRulesEngine([always_blocks])

        result = check_planning_rights(FixedProvider(clear_lookup), "8 Station Road", engine=engine)

        assert result.has_permitted_development_rights is False
        assert [c.type for c in result.checks] == ["Development Moratorium"]


class TestFallback:
    """Test behaviour when no facts can be obtained."""

    @pytest.mark.parametrize("address", [
        "10 Downing Street, London",
        "Flat 3, 7 Park Road, Manchester M1 1AA",
        "22 Mill Lane, Bath BA2 4QP",
    ])
    def test_unknown_address(self, sample_store, address):
        """Test an unmatched address yields the fallback result."""
        result = check_planning_rights(sample_store, address)

        assert result.is_fallback is True
        assert result.has_permitted_development_rights is True
        assert result.confidence == FALLBACK_CONFIDENCE
        assert result.local_authority == "Unknown Council"
        assert result.address == address

    def test_provider_error(self):
        """Test provider failures never reach the caller."""
        result = check_planning_rights(BrokenProvider(), "4 Quay Street", latitude=50.1, longitude=-5.0)

        assert result.is_fallback is True
        assert result.coordinates == (50.1, -5.0)
        assert "local planning authority" in result.summary

    def test_fallback_checks(self):
        """Test every rule is reported as unverified and low confidence."""
        engine = PlanningRulesEngine()
        result = build_fallback_result("4 Quay Street", engine)

        assert result.checks[0].type == "Data Availability"
        assert [c.type for c in result.checks[1:]] == [r.name for r in engine.rules]
        assert all(c.status == CheckStatus.WARNING for c in result.checks)
        assert all(c.low_confidence for c in result.checks)
        assert result.confidence <= 85.0
        assert result.local_authority == "Unknown Council"

    def test_to_dict(self):
        """Test serialization of a fallback result."""
        data = build_fallback_result("4 Quay Street", coordinates=(50.1, -5.0)).to_dict()

        assert data["coordinates"] == {"latitude": 50.1, "longitude": -5.0}
        assert data["is_fallback"] is True
        assert data["checks"][0]["low_confidence"] is True
        assert len(data["checks"]) == 10
