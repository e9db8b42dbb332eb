"""Core domain entities."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

GENERAL = "general"


class Provenance(str, Enum):
    """Origin of an evidence item."""

    REAL = "real"
    SYNTHETIC = "synthetic"


class SelectionReason(str, Enum):
    """Why a community was selected."""

    DOMAIN_MATCH = "domain_match"
    AUDIENCE_MATCH = "audience_match"
    SOLUTION_MATCH = "solution_match"
    FALLBACK_BACKFILL = "fallback_backfill"


class ConfidenceTag(str, Enum):
    """Synthesis path that produced a result."""

    AI_PRIMARY = "ai_primary"
    AI_SECONDARY = "ai_secondary"
    HEURISTIC_FALLBACK = "heuristic_fallback"


@dataclass(frozen=True)
class Idea:
    """Normalized startup idea."""

    original_text: str
    normalized_text: str
    tokens: tuple[str, ...]


@dataclass(frozen=True)
class Classification:
    """Category per classification dimension."""

    problem_domain: str = GENERAL
    target_audience: str = GENERAL
    solution_type: str = GENERAL
    hinted_dimensions: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommunityTarget:
    """Discussion community selected for an idea."""

    name: str
    reason: SelectionReason

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Community name cannot be empty")


@dataclass(frozen=True)
class EvidenceItem:
    """Single discussion record used as market signal."""

    source_community: str
    title: str
    engagement_score: int
    comment_count: int
    provenance: Provenance
    body_text: Optional[str] = None
    url: Optional[str] = None
    created_utc: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Title cannot be empty")
        if self.engagement_score < 0:
            raise ValueError("Engagement score cannot be negative")
        if self.comment_count < 0:
            raise ValueError("Comment count cannot be negative")


@dataclass(frozen=True)
class EvidenceSet:
    """Evidence gathered for one idea."""

    items: tuple[EvidenceItem, ...] = ()
    fetch_failures: tuple[tuple[str, str], ...] = ()

    @property
    def real_count(self) -> int:
        return sum(1 for item in self.items if item.provenance is Provenance.REAL)

    @property
    def synthetic_count(self) -> int:
        return sum(1 for item in self.items if item.provenance is Provenance.SYNTHETIC)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def quality(self) -> str:
        """Data-quality tier based on the number of real items."""
        real = self.real_count
        if real == 0:
            return "synthetic_only"
        if real < 4:
            return "limited_real"
        if real < 10:
            return "mixed_real_synthetic"
        return "real_discussion_data"

    def real_items(self) -> list[EvidenceItem]:
        return [item for item in self.items if item.provenance is Provenance.REAL]


@dataclass(frozen=True)
class PainPoint:
    """Problem reported by the target audience."""

    title: str
    urgency: str = "medium"
    examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class Competitor:
    """Existing alternative in the market."""

    name: str
    description: str = ""
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()


@dataclass(frozen=True)
class Recommendation:
    """Suggested next step for the founder."""

    title: str
    rationale: str
    priority: str = "medium"


@dataclass(frozen=True)
class SynthesisContent:
    """Synthesized market insights."""

    industry: str
    keywords: tuple[str, ...]
    target_audience: str
    business_model: str
    revenue_potential: str
    challenges: tuple[str, ...] = ()
    pain_points: tuple[PainPoint, ...] = ()
    competitors: tuple[Competitor, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()


@dataclass(frozen=True)
class ProviderAttempt:
    """Record of one synthesis attempt."""

    provider: str
    outcome: str
    reason: str = ""


@dataclass(frozen=True)
class EngagementMetrics:
    """Market signal scores derived from real discussion engagement.

    Sentiment values are percentages; scores are on a 1-10 scale.
    """

    posts_analyzed: int
    avg_score: float
    avg_comments: float
    high_engagement_ratio: float
    enthusiastic: int
    mixed: int
    frustrated: int
    overall_score: float
    viability_score: float
    market_interest_level: str


@dataclass(frozen=True)
class AnalysisHints:
    """Optional caller-supplied priors for classification."""

    industry: Optional[str] = None
    target_audience: Optional[str] = None
    solution_type: Optional[str] = None


@dataclass(frozen=True)
class AnalysisResult:
    """Market-research report for one idea."""

    idea: Idea
    classification: Classification
    communities: tuple[CommunityTarget, ...]
    evidence: EvidenceSet
    synthesis: SynthesisContent
    confidence: ConfidenceTag
    provenance_note: str
    provider: str
    attempts: tuple[ProviderAttempt, ...] = field(default_factory=tuple)
    engagement: Optional[EngagementMetrics] = None

    @property
    def community_names(self) -> list[str]:
        return [target.name for target in self.communities]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready mapping."""
        data = asdict(self)
        data["evidence"]["real_count"] = self.evidence.real_count
        data["evidence"]["synthetic_count"] = self.evidence.synthetic_count
        data["evidence"]["quality"] = self.evidence.quality
        return _jsonify(data)


def _jsonify(value: Any) -> Any:
    """Turn enums and tuples into plain JSON values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _jsonify(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonify(item) for item in value]
    return value
