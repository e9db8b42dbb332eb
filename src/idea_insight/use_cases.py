"""Business logic use cases."""

import asyncio
import logging
from dataclasses import replace
from typing import Optional

from idea_insight.core import (
    GENERAL,
    AnalysisHints,
    AnalysisResult,
    Classification,
    CommunityTarget,
    CompletionProvider,
    DiscussionSource,
    EvidenceFetchError,
    EvidenceItem,
    EvidenceSet,
    Idea,
    IdeaClassifier,
    OperationCancelledError,
    ProviderAttempt,
    ProviderUnavailableError,
    Taxonomy,
    normalize_idea,
    select_communities,
)
from idea_insight.core.assembler import assemble_result
from idea_insight.core.cancellation import Deadline, run_cancellable
from idea_insight.core.synthesis import (
    HEURISTIC_PROVIDER,
    INITIAL_STATE,
    AttemptOutcome,
    Attempting,
    Cancelled,
    Done,
    Failed,
    Slot,
    Succeeded,
    build_prompt_messages,
    heuristic_synthesis,
    parse_synthesis,
    template_recommendations,
    transition,
)
from idea_insight.core.synthetic_evidence import build_synthetic_items

logger = logging.getLogger(__name__)

AI_ENGAGEMENT_BOOST = 1.4
FITNESS_ENGAGEMENT_BOOST = 1.2


class EvidenceGatherer:
    """Fetch discussions for all communities concurrently, backfilling with placeholders."""

    def __init__(
        self,
        source: Optional[DiscussionSource],
        items_per_community: int = 8,
        min_evidence_items: int = 8,
        fetch_timeout: float = 8.0,
    ) -> None:
        self.source = source
        self.items_per_community = items_per_community
        self.min_evidence_items = min_evidence_items
        self.fetch_timeout = fetch_timeout

    async def gather(
        self,
        idea: Idea,
        targets: tuple[CommunityTarget, ...],
        industry: str,
        boost: float = 1.0,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> EvidenceSet:
        """Collect evidence for the targets.

        Each community is fetched in its own task with its own timeout. A failed
        community is recorded and skipped. When fewer than `min_evidence_items`
        real items arrive, synthetic items make up the difference.
        """
        items: list[EvidenceItem] = []
        failures: list[tuple[str, str]] = []

        if self.source is not None and targets:
            results = await asyncio.gather(
                *(self._fetch_one(target, cancel_event) for target in targets)
            )
            for target, (fetched, failure) in zip(targets, results):
                items.extend(fetched)
                if failure:
                    failures.append((target.name, failure))

        real_count = len(items)
        missing = self.min_evidence_items - real_count
        if missing > 0:
            logger.info(
                "Only %d real items collected, adding %d synthetic placeholders",
                real_count,
                missing,
            )
            items.extend(build_synthetic_items(idea, industry, targets, missing, boost))

        return EvidenceSet(items=tuple(items), fetch_failures=tuple(failures))

    async def _fetch_one(
        self, target: CommunityTarget, cancel_event: Optional[asyncio.Event]
    ) -> tuple[list[EvidenceItem], Optional[str]]:
        """Fetch one community, returning (items, failure reason)."""
        try:
            fetched = await run_cancellable(
                self.source.fetch_items(target.name, self.items_per_community),
                cancel_event,
                self.fetch_timeout,
            )
            # Attribute to the requested name so evidence always maps to a target
            items = [
                replace(item, source_community=target.name)
                for item in fetched[: self.items_per_community]
            ]
        except asyncio.TimeoutError:
            reason = f"timed out after {self.fetch_timeout}s"
        except OperationCancelledError:
            reason = "cancelled"
        except EvidenceFetchError as e:
            reason = e.reason
        except Exception as e:
            reason = str(e)
        else:
            return items, None

        logger.warning("Evidence fetch failed for r/%s: %s", target.name, reason)
        return [], reason


class SynthesisOrchestrator:
    """Runs the primary -> secondary -> heuristic fallback chain."""

    def __init__(
        self,
        primary: Optional[CompletionProvider],
        secondary: Optional[CompletionProvider],
        timeout: float = 30.0,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.timeout = timeout

    async def synthesize(
        self,
        idea: Idea,
        classification: Classification,
        communities: tuple[CommunityTarget, ...],
        evidence: EvidenceSet,
        industry: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> tuple[Done, tuple[ProviderAttempt, ...]]:
        """Drive the state machine to a Done state.

        Returns:
            Terminal state and the log of provider attempts.
        """
        messages = build_prompt_messages(idea, classification, communities, evidence, industry)
        defaults = template_recommendations(classification, evidence)
        attempts: list[ProviderAttempt] = []

        state = INITIAL_STATE
        while not isinstance(state, Done):
            if isinstance(state, Attempting):
                provider = self._provider_for(state.slot)
                outcome = await self._attempt(provider, messages, defaults, cancel_event)
                attempts.append(self._record(state.slot, provider, outcome))
            else:
                content = heuristic_synthesis(idea, classification, evidence, industry)
                outcome = Succeeded(content, HEURISTIC_PROVIDER)

            next_state = transition(state, outcome)
            if isinstance(outcome, (Failed, Cancelled)):
                logger.warning(
                    "%s provider failed (%s), moving to %s",
                    state.slot.value,
                    outcome.reason,
                    type(next_state).__name__,
                )
            state = next_state

        logger.info("Synthesis finished with %s via %s", state.confidence.value, state.provider)
        return state, tuple(attempts)

    def _provider_for(self, slot: Slot) -> Optional[CompletionProvider]:
        return self.primary if slot is Slot.PRIMARY else self.secondary

    async def _attempt(
        self,
        provider: Optional[CompletionProvider],
        messages: list[dict[str, str]],
        defaults: tuple,
        cancel_event: Optional[asyncio.Event],
    ) -> AttemptOutcome:
        if cancel_event is not None and cancel_event.is_set():
            return Cancelled()
        if provider is None:
            return Failed("provider not configured")

        try:
            payload = await run_cancellable(
                provider.complete_json(messages), cancel_event, self.timeout
            )
            content = parse_synthesis(payload, provider.name, defaults)
        except OperationCancelledError:
            return Cancelled()
        except asyncio.TimeoutError:
            return Failed(f"timed out after {self.timeout}s")
        except ProviderUnavailableError as e:
            return Failed(e.reason)
        except Exception as e:
            logger.exception("Unexpected error from %s provider", provider.name)
            return Failed(f"unexpected error: {e}")

        return Succeeded(content, provider.name)

    def _record(
        self,
        slot: Slot,
        provider: Optional[CompletionProvider],
        outcome: AttemptOutcome,
    ) -> ProviderAttempt:
        name = provider.name if provider else f"{slot.value} (unconfigured)"
        if isinstance(outcome, Succeeded):
            return ProviderAttempt(provider=name, outcome="success")
        if isinstance(outcome, Cancelled):
            return ProviderAttempt(provider=name, outcome="cancelled", reason=outcome.reason)
        return ProviderAttempt(provider=name, outcome="failed", reason=outcome.reason)


class AnalysisService:
    """Runs the full analysis pipeline for one idea."""

    def __init__(
        self,
        classifier: IdeaClassifier,
        gatherer: EvidenceGatherer,
        orchestrator: SynthesisOrchestrator,
        taxonomy: Optional[Taxonomy] = None,
    ) -> None:
        self.classifier = classifier
        self.gatherer = gatherer
        self.orchestrator = orchestrator
        self.taxonomy = taxonomy or classifier.taxonomy

    async def analyze(
        self,
        idea_text: str,
        hints: Optional[AnalysisHints] = None,
        cancel_event: Optional[asyncio.Event] = None,
        deadline: Optional[float] = None,
    ) -> AnalysisResult:
        """Analyze an idea.

        Args:
            idea_text: Free-form idea description.
            hints: Optional caller-supplied classification priors.
            cancel_event: Set to abort in-flight network calls.
            deadline: Seconds after which the cancel event is set.

        Returns:
            Assembled analysis result.

        Raises:
            InvalidInputError: if the idea text is empty, too short or too long.
        """
        idea = normalize_idea(idea_text)
        classification = self.classifier.classify(idea, hints)
        communities = select_communities(classification, idea.tokens, self.taxonomy)
        industry = self._industry(classification, hints)
        logger.info(
            "Classified idea as %s / %s / %s, communities: %s",
            classification.problem_domain,
            classification.target_audience,
            classification.solution_type,
            ", ".join(t.name for t in communities),
        )

        if cancel_event is None:
            cancel_event = asyncio.Event()

        with Deadline(cancel_event, deadline):
            evidence = await self.gatherer.gather(
                idea, communities, industry, self._boost(classification), cancel_event
            )
            done, attempts = await self.orchestrator.synthesize(
                idea, classification, communities, evidence, industry, cancel_event
            )

        return assemble_result(
            idea=idea,
            classification=classification,
            communities=communities,
            evidence=evidence,
            synthesis=done.content,
            confidence=done.confidence,
            provider=done.provider,
            attempts=attempts,
        )

    def _industry(self, classification: Classification, hints: Optional[AnalysisHints]) -> str:
        industry_hint = (hints.industry or "").strip() if hints else ""
        if classification.problem_domain == GENERAL and industry_hint:
            return industry_hint
        return self.taxonomy.domain_label(classification.problem_domain)

    def _boost(self, classification: Classification) -> float:
        if classification.solution_type == "ai_solution":
            return AI_ENGAGEMENT_BOOST
        if classification.problem_domain == "fitness":
            return FITNESS_ENGAGEMENT_BOOST
        return 1.0
