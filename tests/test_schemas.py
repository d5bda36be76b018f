"""Tests for carapace/schemas.py: the constraints checked before any request."""

import pytest
from pydantic import ValidationError

from carapace.schemas import (
    ContributeParams,
    ContributionRef,
    QueryParams,
    UpdateParams,
    UpdateToolInput,
)


class TestQueryParams:
    def test_accepts_wire_names(self):
        params = QueryParams.model_validate(
            {"question": "q", "maxResults": 20, "minConfidence": 0, "domainTags": ["b", "a"]}
        )
        assert params.max_results == 20
        assert params.domain_tags == ["b", "a"]

    def test_payload_omits_unset_fields(self):
        assert QueryParams(question="q").to_payload() == {"question": "q"}

    def test_null_optional_is_not_transmitted(self):
        params = QueryParams.model_validate({"question": "q", "context": None})
        assert params.to_payload() == {"question": "q"}

    def test_unknown_keys_dropped(self):
        params = QueryParams.model_validate({"question": "q", "debug": True})
        assert params.to_payload() == {"question": "q"}

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"question": ""},
            {"question": 42},
            {"question": "q", "maxResults": 0},
            {"question": "q", "maxResults": 21},
            {"question": "q", "maxResults": "5"},
            {"question": "q", "maxResults": 2.5},
            {"question": "q", "minConfidence": 1.5},
            {"question": "q", "domainTags": "agent-memory"},
        ],
    )
    def test_rejects_invalid(self, payload):
        with pytest.raises(ValidationError):
            QueryParams.model_validate(payload)

    def test_error_location_uses_wire_name(self):
        with pytest.raises(ValidationError) as excinfo:
            QueryParams.model_validate({"question": "q", "maxResults": 50})
        assert excinfo.value.errors()[0]["loc"] == ("maxResults",)

    def test_integral_float_max_results_accepted(self):
        params = QueryParams.model_validate({"question": "q", "maxResults": 5.0})
        assert params.max_results == 5
        assert params.to_payload() == {"question": "q", "maxResults": 5}

    @pytest.mark.parametrize("value", [2.5, "5", True, 21.0])
    def test_non_integral_max_results_rejected(self, value):
        with pytest.raises(ValidationError):
            QueryParams.model_validate({"question": "q", "maxResults": value})

    def test_is_immutable(self):
        params = QueryParams(question="q")
        with pytest.raises(ValidationError):
            params.question = "other"


class TestContributeParams:
    def test_bounds_are_inclusive(self):
        assert ContributeParams(claim="c", confidence=0).confidence == 0
        assert ContributeParams(claim="c", confidence=1.0).confidence == 1.0
        assert len(ContributeParams(claim="x" * 2000, confidence=0.5).claim) == 2000

    @pytest.mark.parametrize(
        "payload",
        [
            {"claim": "c"},
            {"confidence": 0.5},
            {"claim": "c", "confidence": -0.01},
            {"claim": "c", "confidence": 1.01},
            {"claim": "x" * 2001, "confidence": 0.5},
            {"claim": "c", "confidence": 0.5, "reasoning": "x" * 5001},
            {"claim": "c", "confidence": 0.5, "applicability": "x" * 3001},
            {"claim": "c", "confidence": 0.5, "limitations": "x" * 3001},
        ],
    )
    def test_rejects_invalid(self, payload):
        with pytest.raises(ValidationError):
            ContributeParams.model_validate(payload)


class TestUpdate:
    def test_all_fields_optional(self):
        assert UpdateParams().to_payload() == {}

    def test_split_keeps_only_provided_fields(self):
        args = UpdateToolInput.model_validate(
            {"id": "abc-123", "confidence": 0.95, "domainTags": ["x"]}
        )
        contribution_id, updates = args.split()
        assert contribution_id == "abc-123"
        assert updates.to_payload() == {"confidence": 0.95, "domainTags": ["x"]}

    def test_update_enforces_same_caps(self):
        with pytest.raises(ValidationError):
            UpdateToolInput.model_validate({"id": "abc", "claim": "x" * 2001})

    def test_split_drops_null_fields(self):
        args = UpdateToolInput.model_validate({"id": "abc", "claim": None})
        contribution_id, updates = args.split()
        assert contribution_id == "abc"
        assert updates.to_payload() == {}

    def test_update_requires_id(self):
        with pytest.raises(ValidationError):
            UpdateToolInput.model_validate({"claim": "c"})


class TestContributionRef:
    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            ContributionRef.model_validate({"id": ""})

    def test_schema_requires_id(self):
        assert ContributionRef.model_json_schema()["required"] == ["id"]
