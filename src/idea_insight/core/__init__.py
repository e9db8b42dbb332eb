"""Core domain layer."""

from idea_insight.core.classifier import DimensionClassifier, IdeaClassifier
from idea_insight.core.community_selector import select_communities
from idea_insight.core.entities import (
    GENERAL,
    AnalysisHints,
    AnalysisResult,
    Classification,
    CommunityTarget,
    Competitor,
    ConfidenceTag,
    EngagementMetrics,
    EvidenceItem,
    EvidenceSet,
    Idea,
    PainPoint,
    Provenance,
    ProviderAttempt,
    Recommendation,
    SelectionReason,
    SynthesisContent,
)
from idea_insight.core.errors import (
    AssemblyError,
    EvidenceFetchError,
    IdeaInsightError,
    InvalidInputError,
    OperationCancelledError,
    ProviderUnavailableError,
    SchemaParseError,
)
from idea_insight.core.interfaces import CompletionProvider, DiscussionSource
from idea_insight.core.normalizer import normalize_idea
from idea_insight.core.taxonomy import Taxonomy

__all__ = [
    "GENERAL",
    "Idea",
    "Classification",
    "CommunityTarget",
    "SelectionReason",
    "EvidenceItem",
    "EvidenceSet",
    "EngagementMetrics",
    "Provenance",
    "PainPoint",
    "Competitor",
    "Recommendation",
    "SynthesisContent",
    "ConfidenceTag",
    "ProviderAttempt",
    "AnalysisHints",
    "AnalysisResult",
    "IdeaInsightError",
    "InvalidInputError",
    "EvidenceFetchError",
    "ProviderUnavailableError",
    "SchemaParseError",
    "OperationCancelledError",
    "AssemblyError",
    "DiscussionSource",
    "CompletionProvider",
    "Taxonomy",
    "DimensionClassifier",
    "IdeaClassifier",
    "normalize_idea",
    "select_communities",
]
