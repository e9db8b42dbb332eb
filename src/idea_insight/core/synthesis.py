"""Synthesis schema, provider fallback state machine and heuristic synthesis."""

import json
import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from idea_insight.core.entities import (
    GENERAL,
    Classification,
    CommunityTarget,
    Competitor,
    ConfidenceTag,
    EvidenceSet,
    Idea,
    PainPoint,
    Recommendation,
    SynthesisContent,
)
from idea_insight.core.errors import SchemaParseError

HEURISTIC_PROVIDER = "heuristic"
EVIDENCE_SAMPLE_SIZE = 12
MAX_KEYWORDS = 10
MAX_PAIN_POINTS = 6
PAIN_SCAN_LIMIT = 40

REQUIRED_FIELDS = (
    "industry",
    "keywords",
    "target_audience",
    "business_model",
    "competitors",
    "challenges",
    "revenue_potential",
)
URGENCY_LEVELS = ("high", "medium", "low")

PAIN_SIGNALS: dict[str, str] = {
    "problem": "Unsolved problems with current options",
    "issue": "Recurring issues with existing tools",
    "struggle": "Users struggle to get results",
    "hard": "Core tasks are hard to do today",
    "difficult": "Existing workflows are difficult",
    "confusing": "Current options are confusing",
    "annoying": "Annoying friction in daily use",
    "need": "Unmet needs in the market",
    "pain": "Explicitly reported pain points",
    "frustrated": "Frustrated users looking for alternatives",
}

STOP_WORDS = frozenset({
    "with", "that", "have", "this", "about", "from", "https", "reddit", "they",
    "their", "will", "your", "just", "what", "when", "where", "which", "whom",
    "these", "those", "then", "than", "some", "such", "also", "here", "there",
    "into", "over", "under", "should", "would", "could", "been", "were",
    "comment", "post", "like", "want", "need", "make", "good", "best", "know",
    "think", "time", "help", "work", "find", "user", "people", "anyone", "does",
    "more", "much", "every", "looking", "something", "them", "many", "very",
})

AUDIENCE_DESCRIPTIONS: dict[str, str] = {
    "seniors": "Seniors and their caregivers",
    "parents": "Parents and families",
    "students": "Students and learners",
    "medical": "Healthcare professionals and patients",
    "developers": "Software developers",
    "artists": "Artists and creative professionals",
    "gamers": "Gamers and streamers",
    "athletes": "Athletes and fitness enthusiasts",
    "entrepreneurs": "Founders and small business owners",
    "professionals": "Working professionals and teams",
}

_WORD_SPLIT_RE = re.compile(r"[^a-z0-9]+")


class Slot(str, Enum):
    """Provider slot in the fallback chain."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class Attempting:
    slot: Slot


@dataclass(frozen=True)
class Heuristic:
    pass


@dataclass(frozen=True)
class Done:
    content: SynthesisContent
    confidence: ConfidenceTag
    provider: str


@dataclass(frozen=True)
class Succeeded:
    content: SynthesisContent
    provider: str


@dataclass(frozen=True)
class Failed:
    reason: str


@dataclass(frozen=True)
class Cancelled:
    reason: str = "cancelled"


SynthesisState = Union[Attempting, Heuristic, Done]
AttemptOutcome = Union[Succeeded, Failed, Cancelled]

INITIAL_STATE: SynthesisState = Attempting(Slot.PRIMARY)


def transition(state: SynthesisState, outcome: AttemptOutcome) -> SynthesisState:
    """Next orchestrator state for an attempt outcome.

    Raises:
        ValueError: if the outcome is not valid for the state.
    """
    if isinstance(state, Attempting):
        if isinstance(outcome, Succeeded):
            confidence = (
                ConfidenceTag.AI_PRIMARY
                if state.slot is Slot.PRIMARY
                else ConfidenceTag.AI_SECONDARY
            )
            return Done(outcome.content, confidence, outcome.provider)
        if isinstance(outcome, Cancelled):
            return Heuristic()
        if state.slot is Slot.PRIMARY:
            return Attempting(Slot.SECONDARY)
        return Heuristic()

    if isinstance(state, Heuristic) and isinstance(outcome, Succeeded):
        return Done(outcome.content, ConfidenceTag.HEURISTIC_FALLBACK, HEURISTIC_PROVIDER)

    raise ValueError(f"Invalid transition from {state!r} on {outcome!r}")


def build_prompt_messages(
    idea: Idea,
    classification: Classification,
    communities: tuple[CommunityTarget, ...],
    evidence: EvidenceSet,
    industry: str,
) -> list[dict[str, str]]:
    """Build the system and user messages for a synthesis request."""
    sample = [
        f"- [{item.provenance.value}] r/{item.source_community}: {item.title} "
        f"({item.engagement_score} upvotes, {item.comment_count} comments)"
        for item in evidence.items[:EVIDENCE_SAMPLE_SIZE]
    ]
    schema = {
        "industry": "string",
        "keywords": ["string"],
        "target_audience": "string",
        "business_model": "string",
        "revenue_potential": "string",
        "challenges": ["string"],
        "competitors": [
            {"name": "string", "description": "string", "strengths": ["string"], "weaknesses": ["string"]}
        ],
        "pain_points": [{"title": "string", "urgency": "high|medium|low", "examples": ["string"]}],
        "recommendations": [{"title": "string", "rationale": "string", "priority": "high|medium|low"}],
    }

    system = (
        "You are a startup market validation analyst. "
        "Return ONLY a valid JSON object, without markdown or commentary."
    )
    user = (
        f'Startup idea: "{idea.original_text}"\n'
        f"Industry: {industry}\n"
        f"Problem domain: {classification.problem_domain}\n"
        f"Target audience: {classification.target_audience}\n"
        f"Solution type: {classification.solution_type}\n"
        f"Communities: {', '.join(t.name for t in communities)}\n"
        f"Evidence ({evidence.real_count} real, {evidence.synthetic_count} synthetic):\n"
        + ("\n".join(sample) or "- none")
        + "\n\nAnalyze the idea and respond with JSON matching this structure:\n"
        + json.dumps(schema, indent=2)
    )
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def parse_synthesis(
    payload: Any,
    provider: str,
    default_recommendations: tuple[Recommendation, ...] = (),
) -> SynthesisContent:
    """Validate a provider response and convert it to SynthesisContent.

    Raises:
        SchemaParseError: if required fields are missing or malformed.
    """
    if not isinstance(payload, dict):
        raise SchemaParseError(provider, f"expected JSON object, got {type(payload).__name__}")

    missing = [key for key in REQUIRED_FIELDS if key not in payload]
    if missing:
        raise SchemaParseError(provider, f"missing fields: {', '.join(missing)}")

    challenges = _string_list(payload["challenges"], "challenges", provider)

    if payload.get("pain_points"):
        pain_points = _parse_pain_points(payload["pain_points"], provider)
    else:
        pain_points = pain_points_from_challenges(challenges)

    if payload.get("recommendations"):
        recommendations = _parse_recommendations(payload["recommendations"], provider)
    else:
        recommendations = default_recommendations

    return SynthesisContent(
        industry=_text(payload["industry"], "industry", provider),
        keywords=_string_list(payload["keywords"], "keywords", provider),
        target_audience=_text(payload["target_audience"], "target_audience", provider),
        business_model=_text(payload["business_model"], "business_model", provider),
        revenue_potential=_text(payload["revenue_potential"], "revenue_potential", provider),
        challenges=challenges,
        pain_points=pain_points,
        competitors=_parse_competitors(payload["competitors"], provider),
        recommendations=recommendations,
    )


def pain_points_from_challenges(challenges: tuple[str, ...]) -> tuple[PainPoint, ...]:
    """Turn challenge strings into pain points, most urgent first."""
    pain_points = []
    for i, challenge in enumerate(challenges[:MAX_PAIN_POINTS]):
        urgency = "high" if i == 0 else "medium" if i < 3 else "low"
        pain_points.append(PainPoint(title=challenge, urgency=urgency))
    return tuple(pain_points)


def template_recommendations(
    classification: Classification, evidence: EvidenceSet
) -> tuple[Recommendation, ...]:
    """Rule-based recommendations from solution type and evidence quality."""
    recommendations = []

    if evidence.real_count == 0:
        recommendations.append(Recommendation(
            title="Validate demand with real conversations",
            rationale="No real discussions were collected; all evidence is synthetic.",
            priority="high",
        ))
    elif evidence.quality == "limited_real":
        recommendations.append(Recommendation(
            title="Collect more market evidence",
            rationale=f"Only {evidence.real_count} real discussions were found.",
            priority="high",
        ))

    by_solution = {
        "mobile_app": ("Ship a focused mobile MVP", "Test one core workflow with early users before expanding features."),
        "web_platform": ("Launch a landing page and web MVP", "Measure sign-up intent before building the full platform."),
        "ai_solution": ("Prototype the AI workflow manually", "Confirm output quality and willingness to pay before investing in models."),
        "hardware": ("Build a low-cost prototype", "Hardware iterations are expensive; validate the form factor early."),
        "marketplace": ("Seed one side of the marketplace", "Marketplaces fail without initial supply or demand; start with the scarcer side."),
        "service": ("Run the service manually first", "Deliver to a handful of customers to learn the workflow before automating."),
    }
    if classification.solution_type in by_solution:
        title, rationale = by_solution[classification.solution_type]
        recommendations.append(Recommendation(title=title, rationale=rationale, priority="medium"))

    recommendations.append(Recommendation(
        title="Interview people in the selected communities",
        rationale="Direct conversations reveal pain points and pricing expectations.",
        priority="medium",
    ))
    return tuple(recommendations)


def extract_keywords(idea: Idea, evidence: EvidenceSet, limit: int = MAX_KEYWORDS) -> tuple[str, ...]:
    """Most frequent meaningful terms over the evidence and the idea."""
    corpus = " ".join(
        [item.title + " " + (item.body_text or "") for item in evidence.items]
        + [idea.normalized_text]
    ).lower()
    words = [
        word
        for word in _WORD_SPLIT_RE.split(corpus)
        if 4 <= len(word) <= 20 and word not in STOP_WORDS and not word.isdigit()
    ]
    frequent = [word for word, _ in Counter(words).most_common(12)]

    idea_terms = [
        word
        for word in _WORD_SPLIT_RE.split(idea.normalized_text)
        if len(word) > 3 and word not in STOP_WORDS
    ][:4]

    keywords: list[str] = []
    for word in frequent + idea_terms:
        if word not in keywords:
            keywords.append(word)
    return tuple(keywords[:limit])


def extract_pain_points(evidence: EvidenceSet) -> tuple[PainPoint, ...]:
    """Group evidence items by the first pain signal word they contain."""
    counts: Counter = Counter()
    examples: dict[str, list[str]] = {}
    for item in evidence.items[:PAIN_SCAN_LIMIT]:
        text = (item.title + " " + (item.body_text or "")).lower()
        signal = next((s for s in PAIN_SIGNALS if s in text), None)
        if signal is None:
            continue
        counts[signal] += 1
        bucket = examples.setdefault(signal, [])
        if len(bucket) < 3:
            bucket.append(item.title[:120])

    pain_points = []
    for signal, count in counts.most_common(MAX_PAIN_POINTS):
        urgency = "high" if count > 5 else "medium" if count > 2 else "low"
        pain_points.append(PainPoint(
            title=PAIN_SIGNALS[signal],
            urgency=urgency,
            examples=tuple(examples[signal]),
        ))
    return tuple(pain_points)


def heuristic_synthesis(
    idea: Idea,
    classification: Classification,
    evidence: EvidenceSet,
    industry: str,
) -> SynthesisContent:
    """Deterministic synthesis from keyword rules and templates."""
    audience = AUDIENCE_DESCRIPTIONS.get(
        classification.target_audience, "General consumers and businesses"
    )
    solution = (
        classification.solution_type.replace("_", " ")
        if classification.solution_type != GENERAL
        else "software"
    )

    challenges = (
        f"Standing out among existing {industry.lower()} solutions",
        f"Reaching {audience.lower()} cost-effectively",
        "Validating willingness to pay",
    )
    pain_points = extract_pain_points(evidence) or pain_points_from_challenges(challenges)

    competitors = (
        Competitor(
            name=f"Established {industry} providers",
            description="Incumbent products already serving this market.",
            strengths=("Brand recognition", "Existing user base"),
            weaknesses=("Slow to adapt to niche needs",),
        ),
        Competitor(
            name=f"General-purpose {solution} tools",
            description="Broad tools that users adapt to this problem.",
            strengths=("Familiar to users",),
            weaknesses=("Not tailored to the use case",),
        ),
        Competitor(
            name="Manual workarounds",
            description="Spreadsheets, notes and ad-hoc processes.",
            strengths=("Free", "Flexible"),
            weaknesses=("Time-consuming", "Error-prone"),
        ),
    )

    if evidence.real_count == 0:
        revenue = "Unknown: no real market discussions were available to estimate demand"
    else:
        revenue = (
            f"Unvalidated: estimate from {evidence.real_count} real discussions "
            "before committing to a pricing model"
        )

    return SynthesisContent(
        industry=industry,
        keywords=extract_keywords(idea, evidence),
        target_audience=audience,
        business_model="To be determined based on market research",
        revenue_potential=revenue,
        challenges=challenges,
        pain_points=pain_points,
        competitors=competitors,
        recommendations=template_recommendations(classification, evidence),
    )


def _text(value: Any, key: str, provider: str) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str) or not value.strip():
        raise SchemaParseError(provider, f"field '{key}' must be a non-empty string")
    return value.strip()


def _string_list(value: Any, key: str, provider: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [part.strip() for part in value.split(",")]
    if not isinstance(value, list):
        raise SchemaParseError(provider, f"field '{key}' must be a list")
    return tuple(str(v).strip() for v in value if isinstance(v, (str, int, float)) and str(v).strip())


def _urgency(value: Any) -> str:
    value = str(value or "medium").lower()
    return value if value in URGENCY_LEVELS else "medium"


def _parse_competitors(value: Any, provider: str) -> tuple[Competitor, ...]:
    if not isinstance(value, list):
        raise SchemaParseError(provider, "field 'competitors' must be a list")
    competitors = []
    for entry in value:
        if isinstance(entry, str) and entry.strip():
            competitors.append(Competitor(name=entry.strip()))
        elif isinstance(entry, dict) and entry.get("name"):
            competitors.append(Competitor(
                name=str(entry["name"]),
                description=str(entry.get("description", "")),
                strengths=_loose_list(entry.get("strengths")),
                weaknesses=_loose_list(entry.get("weaknesses")),
            ))
        else:
            raise SchemaParseError(provider, f"invalid competitor entry: {entry!r}")
    return tuple(competitors)


def _parse_pain_points(value: Any, provider: str) -> tuple[PainPoint, ...]:
    if not isinstance(value, list):
        raise SchemaParseError(provider, "field 'pain_points' must be a list")
    pain_points = []
    for entry in value:
        if isinstance(entry, str) and entry.strip():
            pain_points.append(PainPoint(title=entry.strip()))
        elif isinstance(entry, dict) and entry.get("title"):
            pain_points.append(PainPoint(
                title=str(entry["title"]),
                urgency=_urgency(entry.get("urgency")),
                examples=_loose_list(entry.get("examples")),
            ))
        else:
            raise SchemaParseError(provider, f"invalid pain point entry: {entry!r}")
    return tuple(pain_points)


def _parse_recommendations(value: Any, provider: str) -> tuple[Recommendation, ...]:
    if not isinstance(value, list):
        raise SchemaParseError(provider, "field 'recommendations' must be a list")
    recommendations = []
    for entry in value:
        if isinstance(entry, str) and entry.strip():
            recommendations.append(Recommendation(title=entry.strip(), rationale=""))
        elif isinstance(entry, dict) and entry.get("title"):
            recommendations.append(Recommendation(
                title=str(entry["title"]),
                rationale=str(entry.get("rationale", entry.get("description", ""))),
                priority=_urgency(entry.get("priority")),
            ))
        else:
            raise SchemaParseError(provider, f"invalid recommendation entry: {entry!r}")
    return tuple(recommendations)


def _loose_list(value: Optional[Any]) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(str(v) for v in value)
    return ()
