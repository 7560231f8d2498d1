"""
Analogy Service - cross-domain analogy synthesis.

Extracts the structure of a problem statement, scores every candidate
pattern in the library against it, and ranks the results.  A confident best
match reinforces its pattern in the library, so analogies that keep proving
useful keep rising.
"""

import logging

from ..config import AnalogySettings, settings
from ..models.pattern import Pattern
from ..models.responses import Analogy, BestAnalogy, MappingEntry, SynthesisResult
from ..storage.pattern_library import PatternLibrary
from ..utils.analogy_mapping import generate_approach, generate_insights, generate_mapping
from ..utils.similarity import adjust_for_abstraction, score_pattern
from ..utils.structure_extraction import StructuralSignature, extract_structure

logger = logging.getLogger(__name__)

PROBLEM_EXCERPT_LENGTH = 100


def problem_excerpt(problem_description: str) -> str:
    """First 100 characters of the problem, with an ellipsis when truncated."""
    if len(problem_description) <= PROBLEM_EXCERPT_LENGTH:
        return problem_description
    return problem_description[:PROBLEM_EXCERPT_LENGTH] + "..."


class AnalogyService:
    """Ranks library patterns as analogies for a new problem."""

    def __init__(self, pattern_library: PatternLibrary, config: AnalogySettings | None = None):
        self.pattern_library = pattern_library
        self.config = config or settings.analogy

    def _candidates(self, source_domains: list[str] | None) -> list[Pattern]:
        patterns = self.pattern_library.get_all()
        if not source_domains:
            return patterns
        wanted = [d.lower() for d in source_domains]
        return [p for p in patterns if any(d in p.source_domain.lower() for d in wanted)]

    def _build_analogy(
        self, pattern: Pattern, signature: StructuralSignature, problem_description: str, abstraction_level: str
    ) -> Analogy:
        confidence = adjust_for_abstraction(
            score_pattern(signature, pattern),
            abstraction_level,
            shallow_boost=self.config.shallow_boost,
            deep_damping=self.config.deep_damping,
        )
        return Analogy(
            source_domain=pattern.source_domain,
            structural_match=pattern.abstract_structure,
            mapping=[MappingEntry(**m.to_dict()) for m in generate_mapping(pattern, problem_description)],
            transferable_insights=generate_insights(pattern, problem_description),
            confidence=round(confidence, 2),
            pattern_id=pattern.id,
        )

    def synthesize(
        self,
        problem_description: str,
        source_domains: list[str] | None = None,
        abstraction_level: str = "deep",
        max_results: int | None = None,
    ) -> SynthesisResult:
        """
        Find the library patterns most analogous to a problem.

        Args:
            problem_description: Free-text problem statement
            source_domains: Optional domain filters; a pattern qualifies when
                any filter is a case-insensitive substring of its domain
            abstraction_level: "shallow" boosts scores, "deep" damps them
            max_results: Number of analogies to return (defaults to config,
                values below 1 return a single analogy)

        Returns:
            SynthesisResult; best_analogy is the "none" placeholder when no
            pattern qualified
        """
        limit = self.config.default_max_results if max_results is None else max(max_results, 1)
        signature = extract_structure(problem_description)

        analogies = [
            self._build_analogy(pattern, signature, problem_description, abstraction_level)
            for pattern in self._candidates(source_domains)
        ]
        # sorted() is stable: equal confidences keep library order
        analogies = sorted(analogies, key=lambda a: a.confidence, reverse=True)[:limit]

        best = BestAnalogy()
        reinforced = False
        if analogies:
            top = analogies[0]
            best = BestAnalogy(
                domain=top.source_domain,
                rationale=top.structural_match,
                suggested_approach=generate_approach(
                    top.source_domain, top.structural_match, top.transferable_insights, problem_description
                ),
                confidence=top.confidence,
            )
            if top.confidence > self.config.reinforce_threshold:
                reinforced = self.pattern_library.strengthen(top.pattern_id)
                logger.debug(f"Reinforced pattern {top.pattern_id} (confidence={top.confidence})")
        else:
            logger.info(f"No candidate patterns for domains {source_domains}")

        return SynthesisResult(
            problem_analyzed=problem_excerpt(problem_description),
            extracted_structure=signature.to_dict(),
            analogies=analogies,
            best_analogy=best,
            abstraction_level=abstraction_level,
            reinforced=reinforced,
        )
