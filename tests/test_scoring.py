"""Tests for metadata-driven weighted scoring and the generic fallback scorer."""

import logging

import pytest

from partmatch.component_types import CAPACITOR, CRYSTAL, RESISTOR, TypeTag
from partmatch.importance import Importance
from partmatch.metadata import ComponentTypeMetadata, MetadataRegistry, reset_registry
from partmatch.profiles import SimilarityProfile
from partmatch.scoring import weighted_score, score, fallback_spec_score
from partmatch.tolerance import exact_match, percentage_tolerance, minimum_required
from partmatch.values import SpecValue


@pytest.fixture(autouse=True)
def fresh_registry():
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def two_spec_metadata():
    """One CRITICAL spec and one HIGH spec."""
    return (
        ComponentTypeMetadata.builder(CRYSTAL)
        .add_spec("frequency", Importance.CRITICAL, percentage_tolerance(0.01))
        .add_spec("package", Importance.HIGH, exact_match())
        .build()
    )


CAPACITOR_REFERENCE = {
    "capacitance": 100e-9,
    "voltage": 50.0,
    "dielectric": "X7R",
    "package": "0603",
    "tolerance": 10.0,
}


class TestWeightedScore:
    """Tests for weighted_score()."""

    def test_all_specs_match(self, two_spec_metadata):
        specs = {"frequency": 8e6, "package": "HC49"}
        # (1.0 x 1.0 + 1.0 x 0.49) / (1.0 + 0.49)
        assert weighted_score(two_spec_metadata, specs, dict(specs), SimilarityProfile.REPLACEMENT) == 1.0

    def test_weighted_normalization(self, two_spec_metadata):
        reference = {"frequency": 8e6, "package": "HC49"}
        candidate = {"frequency": 8e6, "package": "SMD3225"}
        result = weighted_score(two_spec_metadata, reference, candidate, SimilarityProfile.REPLACEMENT)
        assert result == pytest.approx(1.0 / 1.49)

    def test_profile_changes_weights(self, two_spec_metadata):
        reference = {"frequency": 8e6, "package": "HC49"}
        candidate = {"frequency": 8e6, "package": "SMD3225"}
        design = weighted_score(two_spec_metadata, reference, candidate, SimilarityProfile.DESIGN_PHASE)
        cost = weighted_score(two_spec_metadata, reference, candidate, SimilarityProfile.COST_OPTIMIZATION)
        # HIGH weighs 0.7 x 0.9 under DESIGN_PHASE and 0.7 x 0.4 under COST_OPTIMIZATION
        assert design == pytest.approx(1.0 / 1.63)
        assert cost == pytest.approx(1.0 / 1.28)
        assert cost > design

    def test_default_profile_from_metadata(self):
        metadata = (
            ComponentTypeMetadata.builder(CRYSTAL)
            .add_spec("frequency", Importance.CRITICAL, exact_match())
            .add_spec("package", Importance.HIGH, exact_match())
            .default_profile(SimilarityProfile.COST_OPTIMIZATION)
            .build()
        )
        reference = {"frequency": 1.0, "package": "A"}
        candidate = {"frequency": 1.0, "package": "B"}
        assert weighted_score(metadata, reference, candidate) == pytest.approx(1.0 / 1.28)

    def test_missing_critical_spec_disqualifies(self, two_spec_metadata):
        reference = {"frequency": 8e6, "package": "HC49"}
        assert weighted_score(two_spec_metadata, reference, {"package": "HC49"}) == 0.0
        assert weighted_score(two_spec_metadata, {"package": "HC49"}, reference) == 0.0

    def test_none_critical_value_disqualifies(self, two_spec_metadata):
        reference = {"frequency": 8e6, "package": "HC49"}
        assert weighted_score(two_spec_metadata, reference, {"frequency": None, "package": "HC49"}) == 0.0

    def test_disqualification_is_logged(self, two_spec_metadata, caplog):
        with caplog.at_level(logging.INFO, logger="partmatch.scoring"):
            weighted_score(two_spec_metadata, {"frequency": 8e6}, {})
        assert "Disqualified" in caplog.text
        assert "frequency" in caplog.text

    def test_missing_optional_side_is_skipped(self, two_spec_metadata):
        reference = {"frequency": 8e6, "package": "HC49"}
        assert weighted_score(two_spec_metadata, reference, {"frequency": 8e6}) == 1.0

    def test_undeclared_specs_ignored(self, two_spec_metadata):
        reference = {"frequency": 8e6, "colour": "blue"}
        candidate = {"frequency": 8e6, "colour": "red"}
        assert weighted_score(two_spec_metadata, reference, candidate) == 1.0

    def test_no_comparable_specs(self):
        metadata = (
            ComponentTypeMetadata.builder(CRYSTAL)
            .add_spec("package", Importance.HIGH, exact_match())
            .build()
        )
        assert weighted_score(metadata, {"package": "HC49"}, {}) == 0.0
        assert weighted_score(metadata, {}, {}) == 0.0

    def test_zero_weight_profile(self):
        metadata = (
            ComponentTypeMetadata.builder(CRYSTAL)
            .add_spec("package", Importance.LOW, exact_match())
            .build()
        )
        # LOW carries no weight under COST_OPTIMIZATION, so nothing is comparable
        specs = {"package": "HC49"}
        assert weighted_score(metadata, specs, specs, SimilarityProfile.COST_OPTIMIZATION) == 0.0

    def test_spec_values_accepted(self, two_spec_metadata):
        reference = {"frequency": SpecValue(8e6, "Hz"), "package": SpecValue("HC49")}
        candidate = {"frequency": 8e6, "package": "hc49"}
        assert weighted_score(two_spec_metadata, reference, candidate) == 1.0


class TestScore:
    """Tests for score() with registry lookup."""

    def test_capacitor_identical(self):
        assert score(CAPACITOR, CAPACITOR_REFERENCE, dict(CAPACITOR_REFERENCE)) == 1.0

    def test_capacitor_higher_voltage_is_fine(self):
        candidate = dict(CAPACITOR_REFERENCE, voltage=100.0)
        assert score(CAPACITOR, CAPACITOR_REFERENCE, candidate) == 1.0

    def test_capacitor_lower_voltage_penalized(self):
        candidate = dict(CAPACITOR_REFERENCE, voltage=16.0)
        # voltage (critical, weight 1.0) scores 0 out of total weight 1+1+1+0.49+0.16
        assert score(CAPACITOR, CAPACITOR_REFERENCE, candidate) == pytest.approx(2.65 / 3.65)

    def test_capacitor_missing_dielectric_disqualifies(self):
        candidate = {k: v for k, v in CAPACITOR_REFERENCE.items() if k != "dielectric"}
        assert score(CAPACITOR, CAPACITOR_REFERENCE, candidate) == 0.0

    def test_subtype_uses_base_metadata(self):
        tag = CAPACITOR.subtype("CERAMIC_MURATA")
        candidate = dict(CAPACITOR_REFERENCE, voltage=16.0)
        assert score(tag, CAPACITOR_REFERENCE, candidate) == score(CAPACITOR, CAPACITOR_REFERENCE, candidate)

    def test_string_tag(self):
        assert score("capacitor", CAPACITOR_REFERENCE, CAPACITOR_REFERENCE) == 1.0

    def test_resistor_profiles(self):
        reference = {"resistance": 10000.0, "tolerance": 1.0, "package": "0603"}
        candidate = {"resistance": 10000.0, "tolerance": 1.0, "package": "0805"}
        design = score(RESISTOR, reference, candidate, SimilarityProfile.DESIGN_PHASE)
        emergency = score(RESISTOR, reference, candidate, SimilarityProfile.EMERGENCY_SOURCING)
        assert design < emergency < 1.0

    def test_none_tag_raises(self):
        with pytest.raises(ValueError):
            score(None, {}, {})

    def test_unregistered_type_falls_back(self, caplog):
        reference = {"frequency": 8e6, "package": "HC49"}
        with caplog.at_level(logging.WARNING, logger="partmatch.scoring"):
            result = score(CRYSTAL, reference, dict(reference))
        assert result == 1.0
        assert "No metadata" in caplog.text

    def test_unknown_tag_name_falls_back(self):
        assert score("WIDGET", {"a": 1}, {"a": 1}) == 1.0

    def test_explicit_registry(self, two_spec_metadata):
        registry = MetadataRegistry({CRYSTAL: two_spec_metadata})
        reference = {"frequency": 8e6, "package": "HC49"}
        assert score(CRYSTAL, reference, {"package": "HC49"}, registry=registry) == 0.0
        # Same inputs without the registry entry take the fallback path
        assert score(CRYSTAL, reference, {"package": "HC49"}) == pytest.approx(0.5)

    @pytest.mark.parametrize("candidate", [
        {},
        {"capacitance": 1.0, "voltage": 1.0, "dielectric": "Y5V"},
        {"capacitance": -1.0, "voltage": -50.0, "dielectric": "X7R", "package": None},
        dict(CAPACITOR_REFERENCE, capacitance=1e3),
    ])
    def test_result_in_range(self, candidate):
        assert 0.0 <= score(CAPACITOR, CAPACITOR_REFERENCE, candidate) <= 1.0


class TestFallbackSpecScore:
    """Tests for the scorer used when a type has no metadata."""

    def test_identical(self):
        specs = {"frequency": 8e6, "package": "HC49"}
        assert fallback_spec_score(specs, dict(specs)) == 1.0

    def test_numeric_closeness(self):
        assert fallback_spec_score({"frequency": 10.0}, {"frequency": 8.0}) == pytest.approx(0.8)

    def test_string_similarity(self):
        result = fallback_spec_score({"package": "SOT-23"}, {"package": "SOT-23-5"})
        assert 0.0 < result < 1.0

    def test_one_sided_keys_count_as_zero(self):
        assert fallback_spec_score({"a": 1.0}, {"a": 1.0, "b": 2.0}) == pytest.approx(0.5)

    def test_empty(self):
        assert fallback_spec_score({}, {}) == 0.0
        assert fallback_spec_score(None, None) == 0.0

    def test_none_values_ignored(self):
        assert fallback_spec_score({"a": 1.0, "b": None}, {"a": 1.0}) == 1.0

    def test_zero_values(self):
        assert fallback_spec_score({"offset": 0}, {"offset": 0.0}) == 1.0

    def test_case_insensitive_strings(self):
        assert fallback_spec_score({"package": "hc49"}, {"package": "HC49"}) == 1.0

    def test_subtype_with_unregistered_base(self):
        assert score(TypeTag("CRYSTAL", "EPSON"), {"a": "X"}, {"a": "X"}) == 1.0
