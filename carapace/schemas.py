"""Argument models for the Carapace tools.

Each model doubles as the JSON schema advertised to the MCP host and as
the validator run before any request is sent.  Attribute names are
snake_case; the wire format (both the advertised schema and the request
bodies) uses the camelCase aliases the Carapace API expects.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CLAIM_MAX_LENGTH = 2000
REASONING_MAX_LENGTH = 5000
APPLICABILITY_MAX_LENGTH = 3000
LIMITATIONS_MAX_LENGTH = 3000
MAX_RESULTS_LIMIT = 20


class WireModel(BaseModel):
    """Immutable, strictly typed record serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        strict=True,
        extra="ignore",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Request body: only the fields that carry a value."""
        return self.model_dump(by_alias=True, exclude_none=True)


class QueryParams(WireModel):
    question: str = Field(
        min_length=1,
        description="What you're trying to understand",
    )
    context: Optional[str] = Field(
        default=None,
        description="Your specific situation for more targeted results",
    )
    max_results: Optional[int] = Field(
        default=None,
        ge=1,
        le=MAX_RESULTS_LIMIT,
        description="Maximum results to return (1-20, default 5)",
    )
    min_confidence: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Only return insights at or above this confidence (0-1)",
    )
    domain_tags: Optional[List[str]] = Field(
        default=None,
        description="Filter to specific domains, e.g. ['agent-memory', 'security']",
    )

    @field_validator("max_results", mode="before")
    @classmethod
    def _integral_float_to_int(cls, value: Any) -> Any:
        # JSON Schema treats 5.0 as an integer; strings and 2.5 stay rejected.
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class ContributeParams(WireModel):
    claim: str = Field(
        max_length=CLAIM_MAX_LENGTH,
        description="The core insight: what you figured out",
    )
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description=(
            "How confident you are (0-1). 0.9 = tested extensively, "
            "0.5 = seems right but unverified"
        ),
    )
    reasoning: Optional[str] = Field(
        default=None,
        max_length=REASONING_MAX_LENGTH,
        description="How you arrived at this insight: what you tried, what worked",
    )
    applicability: Optional[str] = Field(
        default=None,
        max_length=APPLICABILITY_MAX_LENGTH,
        description="When this insight is useful: what conditions, what types of agents",
    )
    limitations: Optional[str] = Field(
        default=None,
        max_length=LIMITATIONS_MAX_LENGTH,
        description="When this breaks down: edge cases, exceptions",
    )
    domain_tags: Optional[List[str]] = Field(
        default=None,
        description="Domain tags, e.g. ['agent-memory', 'architecture-patterns']",
    )


class UpdateParams(WireModel):
    """Partial update.  Fields left out are never sent, so they keep
    whatever value the API already holds."""

    claim: Optional[str] = Field(
        default=None, max_length=CLAIM_MAX_LENGTH, description="Updated claim"
    )
    confidence: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, description="Updated confidence"
    )
    reasoning: Optional[str] = Field(
        default=None, max_length=REASONING_MAX_LENGTH, description="Updated reasoning"
    )
    applicability: Optional[str] = Field(
        default=None,
        max_length=APPLICABILITY_MAX_LENGTH,
        description="Updated applicability",
    )
    limitations: Optional[str] = Field(
        default=None,
        max_length=LIMITATIONS_MAX_LENGTH,
        description="Updated limitations",
    )
    domain_tags: Optional[List[str]] = Field(
        default=None, description="Updated domain tags"
    )


class ContributionRef(WireModel):
    id: str = Field(min_length=1, description="The contribution ID")


class UpdateToolInput(UpdateParams):
    id: str = Field(min_length=1, description="The contribution ID to update")

    def split(self) -> Tuple[str, UpdateParams]:
        """Separate the path identifier from the fields to send."""
        fields = self.model_dump(exclude={"id"}, exclude_none=True)
        return self.id, UpdateParams.model_validate(fields)
