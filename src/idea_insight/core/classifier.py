"""Keyword classifiers for problem domain, target audience and solution type."""

import logging
import re
from typing import Optional

from idea_insight.core.entities import GENERAL, AnalysisHints, Classification, Idea
from idea_insight.core.normalizer import normalize_text, tokenize
from idea_insight.core.taxonomy import CategoryRule, Taxonomy

logger = logging.getLogger(__name__)


def keyword_pattern(keyword: str) -> re.Pattern:
    """Regex matching keyword as a whole word inside normalized text."""
    return re.compile(r"(?<![a-z0-9])" + re.escape(keyword) + r"(?![a-z0-9])")


class DimensionClassifier:
    """Classify an idea along one dimension using an ordered keyword table.

    The first category with a matching keyword wins. A keyword matches when it
    equals one of the idea tokens, or when it appears as a whole word inside the
    normalized text. Hyphenated keywords can therefore only match the text,
    since tokens have their hyphens removed.
    """

    def __init__(self, dimension: str, rules: tuple[CategoryRule, ...]):
        self.dimension = dimension
        self.rules = rules
        self._patterns = {
            rule.name: tuple(keyword_pattern(k) for k in sorted(rule.keywords))
            for rule in rules
        }

    @property
    def categories(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def classify(self, tokens: tuple[str, ...], normalized_text: str) -> str:
        """Return the first matching category, or "general"."""
        token_set = set(tokens)
        for rule in self.rules:
            if rule.keywords & token_set:
                return rule.name
            if any(p.search(normalized_text) for p in self._patterns[rule.name]):
                return rule.name
        return GENERAL

    def resolve_hint(self, hint: Optional[str]) -> str:
        """Map free-form hint text onto a category of this dimension."""
        if not hint or not hint.strip():
            return GENERAL

        candidate = hint.strip().lower().replace(" ", "_").replace("-", "_")
        if candidate in self.categories:
            return candidate

        normalized = normalize_text(hint)
        return self.classify(tokenize(normalized), normalized)


class IdeaClassifier:
    """Combines the three dimension classifiers and applies caller hints."""

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy
        self.domain = DimensionClassifier("problem_domain", taxonomy.domains)
        self.audience = DimensionClassifier("target_audience", taxonomy.audiences)
        self.solution = DimensionClassifier("solution_type", taxonomy.solution_types)

    def classify(self, idea: Idea, hints: Optional[AnalysisHints] = None) -> Classification:
        """Classify a normalized idea.

        Categories inferred from the idea text take precedence. A hint only
        fills a dimension that the text left at "general"; disagreements are
        logged.
        """
        inferred = {
            "problem_domain": self.domain.classify(idea.tokens, idea.normalized_text),
            "target_audience": self.audience.classify(idea.tokens, idea.normalized_text),
            "solution_type": self.solution.classify(idea.tokens, idea.normalized_text),
        }
        if hints is None:
            return Classification(**inferred)

        hinted = []
        hint_values = {
            "problem_domain": (self.domain, hints.industry),
            "target_audience": (self.audience, hints.target_audience),
            "solution_type": (self.solution, hints.solution_type),
        }
        for dimension, (classifier, hint) in hint_values.items():
            hint = (hint or "").strip()
            if not hint:
                continue
            resolved = classifier.resolve_hint(hint)
            if resolved == GENERAL:
                logger.info("Ignoring unrecognized %s hint %r", dimension, hint)
                continue
            if inferred[dimension] == GENERAL:
                inferred[dimension] = resolved
                hinted.append(dimension)
            elif inferred[dimension] != resolved:
                logger.info(
                    "Hint %r for %s disagrees with inferred %r; keeping inferred",
                    hint,
                    dimension,
                    inferred[dimension],
                )

        return Classification(**inferred, hinted_dimensions=tuple(hinted))
