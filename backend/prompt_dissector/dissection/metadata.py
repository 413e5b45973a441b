"""
Text Metadata Extraction
========================
Single pass over the raw response to derive the statistics used to
pick a dissection strategy.

The complexity ladder is fixed:
    complex   length > 1000, or instructions + examples + lists together
    moderate  length > 500, or instructions, or lists
    simple    everything else
"""

import math
from typing import Optional, List

from ..models import TextMetadata, Complexity, ContentType, AnalysisContext
from .classification import (
    INSTRUCTION_PATTERN,
    EXAMPLE_PATTERN,
    QUESTION_PATTERN,
    LIST_PATTERN,
    CODE_PATTERN,
    CREATIVE_PATTERN,
    ANALYTICAL_PATTERN,
    COLLABORATIVE_PATTERN,
    TECHNICAL_PATTERN,
    STRATEGIC_PATTERN,
)

WORDS_PER_MINUTE = 200

COMPLEX_LENGTH_THRESHOLD = 1000
MODERATE_LENGTH_THRESHOLD = 500


def estimate_reading_time(word_count: int) -> int:
    """Minutes needed to read `word_count` words, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def classify_complexity(
    length: int,
    has_instructions: bool,
    has_examples: bool,
    has_lists: bool
) -> Complexity:
    if length > COMPLEX_LENGTH_THRESHOLD or (has_instructions and has_examples and has_lists):
        return Complexity.COMPLEX
    if length > MODERATE_LENGTH_THRESHOLD or has_instructions or has_lists:
        return Complexity.MODERATE
    return Complexity.SIMPLE


def infer_content_types(
    content: str,
    has_instructions: bool,
    has_examples: bool,
    has_code_snippets: bool
) -> List[ContentType]:
    """
    Tag the text with every matching content type, in fixed check order.

    Falls back to educational when nothing matches.
    """
    checks = [
        (ContentType.INSTRUCTIONAL, has_instructions),
        (ContentType.EDUCATIONAL, has_examples),
        (ContentType.CREATIVE, CREATIVE_PATTERN.search(content) is not None),
        (ContentType.ANALYTICAL, ANALYTICAL_PATTERN.search(content) is not None),
        (ContentType.COLLABORATIVE, COLLABORATIVE_PATTERN.search(content) is not None),
        (ContentType.TECHNICAL, has_code_snippets or TECHNICAL_PATTERN.search(content) is not None),
        (ContentType.STRATEGIC, STRATEGIC_PATTERN.search(content) is not None),
    ]
    content_types = [content_type for content_type, matched in checks if matched]
    return content_types or [ContentType.EDUCATIONAL]


def extract_metadata(content: str, context: Optional[AnalysisContext] = None) -> TextMetadata:
    """
    Derive TextMetadata for a response.

    Args:
        content: Raw response text
        context: Optional workflow context, copied through for display

    Returns:
        TextMetadata snapshot (an empty string yields zero counts and
        `simple` complexity)
    """
    word_count = len(content.split())

    has_instructions = INSTRUCTION_PATTERN.search(content) is not None
    has_examples = EXAMPLE_PATTERN.search(content) is not None
    has_questions = QUESTION_PATTERN.search(content) is not None
    has_lists = LIST_PATTERN.search(content) is not None
    has_code_snippets = CODE_PATTERN.search(content) is not None

    context = context or AnalysisContext()

    return TextMetadata(
        total_length=len(content),
        word_count=word_count,
        estimated_reading_time=estimate_reading_time(word_count),
        complexity=classify_complexity(len(content), has_instructions, has_examples, has_lists),
        content_type=tuple(infer_content_types(content, has_instructions, has_examples, has_code_snippets)),
        has_instructions=has_instructions,
        has_examples=has_examples,
        has_questions=has_questions,
        has_lists=has_lists,
        has_code_snippets=has_code_snippets,
        framework=context.framework,
        stage=context.stage,
        tool=context.tool,
    )
