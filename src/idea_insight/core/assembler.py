"""Result assembly."""

from typing import Optional

from idea_insight.core.entities import (
    AnalysisResult,
    Classification,
    CommunityTarget,
    ConfidenceTag,
    EvidenceSet,
    Idea,
    ProviderAttempt,
    SynthesisContent,
)
from idea_insight.core.engagement import compute_engagement
from idea_insight.core.errors import AssemblyError

_CONFIDENCE_TEXT = {
    ConfidenceTag.AI_PRIMARY: "synthesized by the primary AI provider",
    ConfidenceTag.AI_SECONDARY: "synthesized by the secondary AI provider after the primary failed",
    ConfidenceTag.HEURISTIC_FALLBACK: "produced by keyword heuristics because no AI provider was available",
}


def build_provenance_note(evidence: EvidenceSet, confidence: ConfidenceTag) -> str:
    """Human-readable summary of where the result came from."""
    if evidence.real_count == 0:
        evidence_text = f"Based on {evidence.synthetic_count} synthetic placeholder discussions only"
    elif evidence.synthetic_count == 0:
        evidence_text = f"Based on {evidence.real_count} real community discussions"
    else:
        evidence_text = (
            f"Based on {evidence.real_count} real and "
            f"{evidence.synthetic_count} synthetic community discussions"
        )
    return f"{evidence_text} ({evidence.quality}); insights {_CONFIDENCE_TEXT[confidence]}."


def assemble_result(
    idea: Optional[Idea],
    classification: Optional[Classification],
    communities: Optional[tuple[CommunityTarget, ...]],
    evidence: Optional[EvidenceSet],
    synthesis: Optional[SynthesisContent],
    confidence: Optional[ConfidenceTag],
    provider: str = "",
    attempts: tuple[ProviderAttempt, ...] = (),
) -> AnalysisResult:
    """Merge pipeline outputs into an AnalysisResult.

    Also derives the provenance note and engagement metrics.

    Raises:
        AssemblyError: if any required part is missing.
    """
    parts = {
        "idea": idea,
        "classification": classification,
        "communities": communities,
        "evidence": evidence,
        "synthesis": synthesis,
        "confidence": confidence,
    }
    missing = [name for name, value in parts.items() if value is None]
    if missing:
        raise AssemblyError(f"Cannot assemble result, missing: {', '.join(missing)}")
    if not communities:
        raise AssemblyError("Cannot assemble result without community targets")

    names = {target.name for target in communities}
    stray = {item.source_community for item in evidence.items} - names
    if stray:
        raise AssemblyError(f"Evidence from unselected communities: {', '.join(sorted(stray))}")

    return AnalysisResult(
        idea=idea,
        classification=classification,
        communities=tuple(communities),
        evidence=evidence,
        synthesis=synthesis,
        confidence=confidence,
        provenance_note=build_provenance_note(evidence, confidence),
        provider=provider,
        attempts=tuple(attempts),
        engagement=compute_engagement(evidence, synthesis, classification),
    )
