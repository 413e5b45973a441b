"""
Strategy Selection
==================
Decision table mapping text metadata to a dissection strategy.

Rules are evaluated top to bottom and the first match wins; the last
rule always matches, so every input gets a strategy.
"""

from typing import Callable, List, Tuple

from ..models import TextMetadata, DissectionStrategy, Complexity, ContentType

PRESERVE_MAX_LENGTH = 300

StrategyRule = Tuple[str, Callable[[TextMetadata], bool], DissectionStrategy]

STRATEGY_RULES: List[StrategyRule] = [
    (
        "short simple text keeps its structure",
        lambda m: m.total_length < PRESERVE_MAX_LENGTH and m.complexity == Complexity.SIMPLE,
        DissectionStrategy.PRESERVE,
    ),
    (
        "structured instructions break at logical boundaries",
        lambda m: m.has_instructions and m.has_lists,
        DissectionStrategy.LOGICAL_BREAK,
    ),
    (
        "complex analytical text is chunked by meaning",
        lambda m: m.complexity == Complexity.COMPLEX and m.has_content_type(ContentType.ANALYTICAL),
        DissectionStrategy.SEMANTIC_CHUNK,
    ),
    (
        "strategic text is ordered by importance",
        lambda m: m.has_content_type(ContentType.STRATEGIC),
        DissectionStrategy.PRIORITY_BASED,
    ),
    (
        "educational text with examples builds up progressively",
        lambda m: m.has_content_type(ContentType.EDUCATIONAL) and m.has_examples,
        DissectionStrategy.PROGRESSIVE,
    ),
    (
        "default",
        lambda m: True,
        DissectionStrategy.SENTENCE_SPLIT,
    ),
]


def determine_strategy(content: str, metadata: TextMetadata) -> DissectionStrategy:
    """Return the strategy of the first rule that matches `metadata`."""
    for _, predicate, strategy in STRATEGY_RULES:
        if predicate(metadata):
            return strategy
    return DissectionStrategy.SENTENCE_SPLIT


def explain_strategy(metadata: TextMetadata) -> str:
    """Human-readable reason for the strategy `metadata` resolves to."""
    for reason, predicate, _ in STRATEGY_RULES:
        if predicate(metadata):
            return reason
    return "default"
