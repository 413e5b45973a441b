"""
Dissection Strategies Module
============================
Implements the six algorithms that split a response into segments.

STRATEGY COMPARISON:
-------------------

PRESERVE:
  - Keeps the whole response as one bubble
  - Use: short, simple replies where splitting only adds noise

LOGICAL_BREAK:
  - Splits before numbered items, markdown headers and "Label:" lines
  - Drops fragments too short to stand alone
  - Use: step-by-step instructions with list structure

SEMANTIC_CHUNK / SENTENCE_SPLIT:
  - Greedily packs whole sentences into bubbles up to the length cap
  - A single sentence longer than the cap becomes its own bubble
  - Use: long analytical prose (semantic) and the general fallback

PRIORITY_BASED:
  - One segment per paragraph, re-sorted high -> medium -> low
  - The only strategy that does not keep source order; kept that way for
    compatibility with existing chat transcripts

PROGRESSIVE:
  - Pulls out introduction, numbered steps, examples and questions and
    emits them in that category order regardless of source position
  - Use: educational text with examples
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Dict, Type
import logging

from ..models import (
    AnalyzedSegment,
    BubbleConfiguration,
    DissectionStrategy,
    Priority,
    SegmentType,
    TextMetadata,
)
from .classification import (
    SENTENCE_BOUNDARY,
    LOGICAL_BREAK_BOUNDARY,
    PARAGRAPH_BOUNDARY,
    FIRST_SENTENCE_PATTERN,
    NUMBERED_LINE_PATTERN,
    NUMBERED_OR_BULLET_PATTERN,
    TERMINATOR_SPLIT,
    EXAMPLE_SENTENCE_PATTERNS,
    QUOTED_EXAMPLE_PATTERN,
    classify_segment_type,
    determine_priority,
    is_actionable_content,
    priority_for_type,
)

logger = logging.getLogger(__name__)

PRIORITY_ORDER = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


@dataclass(frozen=True)
class DissectionParams:
    """Parameters shared by all dissection strategies."""

    max_bubble_length: int = 280
    min_bubble_length: int = 50

    delay_ms_per_char: int = 15
    min_base_delay_ms: int = 300
    max_base_delay_ms: int = 1000

    preserve_delay_ms: int = 500
    logical_break_delay_ms: int = 400

    @classmethod
    def from_config(cls, config) -> "DissectionParams":
        """Create parameters from DissectionConfig."""
        return cls(
            max_bubble_length=config.max_bubble_length,
            min_bubble_length=config.min_bubble_length,
            delay_ms_per_char=config.delay_ms_per_char,
            min_base_delay_ms=config.min_base_delay_ms,
            max_base_delay_ms=config.max_base_delay_ms,
            preserve_delay_ms=config.preserve_delay_ms,
            logical_break_delay_ms=config.logical_break_delay_ms,
        )


def create_bubble_config(
    content_length: int,
    order_index: int,
    params: DissectionParams
) -> BubbleConfiguration:
    """Bubble configuration whose base delay grows with content length."""
    delay_ms = max(
        params.min_base_delay_ms,
        min(params.max_base_delay_ms, content_length * params.delay_ms_per_char)
    )
    return BubbleConfiguration(
        max_length=min(content_length, params.max_bubble_length),
        delay_ms=delay_ms,
        allow_split=content_length > params.max_bubble_length,
        order_index=order_index,
    )


def split_sentences(content: str) -> List[str]:
    """Split at sentence terminators followed by whitespace, dropping blanks."""
    return [s.strip() for s in SENTENCE_BOUNDARY.split(content) if s.strip()]


class SegmentationStrategy(ABC):
    """
    Abstract base class for dissection strategies.

    Strategies are stateless: they take text, its metadata and the
    parameters, and return segments in output order.
    """

    strategy: DissectionStrategy

    @property
    def name(self) -> str:
        """Strategy name for logging."""
        return self.strategy.value

    @property
    def description(self) -> str:
        """Strategy description."""
        doc = (self.__class__.__doc__ or "").strip()
        return doc.splitlines()[0] if doc else f"Dissection strategy: {self.name}"

    @abstractmethod
    def segment(
        self,
        content: str,
        metadata: TextMetadata,
        params: DissectionParams
    ) -> List[AnalyzedSegment]:
        """
        Split text into segments.

        Args:
            content: Raw response text
            metadata: Metadata extracted from the same text
            params: Dissection parameters

        Returns:
            List of AnalyzedSegment objects
        """
        pass

    def _classified_segment(
        self,
        segment_id: str,
        text: str,
        order_index: int,
        params: DissectionParams
    ) -> AnalyzedSegment:
        """Helper that runs the shared classifier over a fragment."""
        return AnalyzedSegment(
            segment_id=segment_id,
            type=classify_segment_type(text),
            content=text.strip(),
            priority=determine_priority(text),
            is_actionable=is_actionable_content(text),
            bubble_config=create_bubble_config(len(text), order_index, params),
        )


class PreserveStrategy(SegmentationStrategy):
    """Keep the whole response as a single instruction bubble."""

    strategy = DissectionStrategy.PRESERVE

    def segment(self, content, metadata, params):
        return [AnalyzedSegment(
            segment_id='preserved-content',
            type=SegmentType.INSTRUCTION,
            content=content.strip(),
            priority=Priority.HIGH,
            is_actionable=metadata.has_instructions,
            bubble_config=BubbleConfiguration(
                max_length=len(content),
                delay_ms=params.preserve_delay_ms,
                allow_split=False,
                order_index=1,
            ),
        )]


class LogicalBreakStrategy(SegmentationStrategy):
    """Split before numbered items, headers and labelled sections."""

    strategy = DissectionStrategy.LOGICAL_BREAK

    def segment(self, content, metadata, params):
        segments = []

        for index, section in enumerate(LOGICAL_BREAK_BOUNDARY.split(content)):
            text = section.strip()
            if len(text) < params.min_bubble_length:
                continue

            segment_type = classify_segment_type(section)
            segments.append(AnalyzedSegment(
                segment_id=f"logical-{index}",
                type=segment_type,
                content=text,
                priority=priority_for_type(segment_type),
                is_actionable=NUMBERED_OR_BULLET_PATTERN.search(section) is not None,
                bubble_config=BubbleConfiguration(
                    max_length=params.max_bubble_length,
                    delay_ms=params.logical_break_delay_ms,
                    allow_split=len(section) > params.max_bubble_length,
                    order_index=index + 1,
                ),
            ))

        logger.debug(f"Logical break kept {len(segments)} sections")
        return segments


class SentenceGroupingStrategy(SegmentationStrategy):
    """Pack whole sentences into bubbles up to the length cap."""

    id_prefix = "group"

    def segment(self, content, metadata, params):
        segments = []
        current = ""

        for sentence in split_sentences(content):
            if current and len(current) + 1 + len(sentence) > params.max_bubble_length:
                segments.append(self._classified_segment(
                    f"{self.id_prefix}-{len(segments)}", current, len(segments), params
                ))
                current = sentence
            else:
                current = f"{current} {sentence}" if current else sentence

        if current.strip():
            segments.append(self._classified_segment(
                f"{self.id_prefix}-{len(segments)}", current, len(segments), params
            ))

        return segments


class SemanticChunkStrategy(SentenceGroupingStrategy):
    """Group consecutive sentences of analytical text into bounded chunks."""

    strategy = DissectionStrategy.SEMANTIC_CHUNK
    id_prefix = "semantic"


class SentenceSplitStrategy(SentenceGroupingStrategy):
    """Default: group sentences into bubbles of bounded length."""

    strategy = DissectionStrategy.SENTENCE_SPLIT
    id_prefix = "sentence-group"


class PriorityBasedStrategy(SegmentationStrategy):
    """One segment per paragraph, ordered by priority."""

    strategy = DissectionStrategy.PRIORITY_BASED

    def segment(self, content, metadata, params):
        segments = []
        paragraphs = [p for p in PARAGRAPH_BOUNDARY.split(content) if p.strip()]

        for index, paragraph in enumerate(paragraphs):
            priority = determine_priority(paragraph)
            segments.append(AnalyzedSegment(
                segment_id=f"priority-{index}",
                type=classify_segment_type(paragraph),
                content=paragraph.strip(),
                priority=priority,
                is_actionable=is_actionable_content(paragraph),
                bubble_config=create_bubble_config(len(paragraph), PRIORITY_ORDER[priority], params),
            ))

        # sorted() is stable, so equal priorities keep paragraph order
        return sorted(segments, key=lambda s: PRIORITY_ORDER[s.priority])


class ProgressiveStrategy(SegmentationStrategy):
    """Introduction, then steps, then examples, then questions."""

    strategy = DissectionStrategy.PROGRESSIVE

    def segment(self, content, metadata, params):
        intro = FIRST_SENTENCE_PATTERN.match(content)
        instructions = NUMBERED_LINE_PATTERN.findall(content)
        examples = extract_examples(content)
        questions = extract_question_fragments(content)

        segments = []

        def add(kind, text, segment_type, priority, is_actionable, order_index):
            if not text.strip():
                return
            segments.append(AnalyzedSegment(
                segment_id=f"progressive-{kind}-{len(segments)}",
                type=segment_type,
                content=text.strip(),
                priority=priority,
                is_actionable=is_actionable,
                bubble_config=create_bubble_config(len(text), order_index, params),
            ))

        if intro:
            add("intro", intro.group(0), SegmentType.INTRODUCTION, Priority.HIGH, False, 0)

        for index, instruction in enumerate(instructions):
            add("instruction", instruction, SegmentType.INSTRUCTION, Priority.HIGH, True, index + 1)

        offset = len(instructions)
        for index, example in enumerate(examples):
            add("example", example, SegmentType.EXAMPLE, Priority.MEDIUM, False, offset + index + 1)

        offset += len(examples)
        for index, question in enumerate(questions):
            add("question", question, SegmentType.QUESTION, Priority.MEDIUM, True, offset + index + 1)

        return segments


def extract_examples(content: str) -> List[str]:
    """Example sentences ("for example", then "such as"), then quoted strings."""
    # Sentence matches need a terminator, so nothing past the last one can match
    end = max(content.rfind(t) for t in ".!?") + 1
    examples = []
    for pattern in EXAMPLE_SENTENCE_PATTERNS:
        examples.extend(pattern.findall(content, 0, end))
    examples.extend(QUOTED_EXAMPLE_PATTERN.findall(content))
    return examples


def extract_question_fragments(content: str) -> List[str]:
    """
    Question fragments: the run before each "?" (unless an earlier
    fragment already took it as its tail), the "?", and the run after it.

    One pass over the terminator split, so long unterminated runs cost
    linear time.
    """
    parts = TERMINATOR_SPLIT.split(content)
    fragments = []
    lead = parts[0]
    for index in range(1, len(parts), 2):
        tail = parts[index + 1]
        if parts[index] == '?':
            fragments.append(lead + '?' + tail)
            lead = ""
        else:
            lead = tail
    return fragments


# Strategy registry
STRATEGY_REGISTRY: Dict[DissectionStrategy, Type[SegmentationStrategy]] = {
    DissectionStrategy.PRESERVE: PreserveStrategy,
    DissectionStrategy.LOGICAL_BREAK: LogicalBreakStrategy,
    DissectionStrategy.SEMANTIC_CHUNK: SemanticChunkStrategy,
    DissectionStrategy.PRIORITY_BASED: PriorityBasedStrategy,
    DissectionStrategy.PROGRESSIVE: ProgressiveStrategy,
    DissectionStrategy.SENTENCE_SPLIT: SentenceSplitStrategy,
}


def get_strategy(strategy) -> SegmentationStrategy:
    """
    Instantiate a strategy by enum member or name.

    Raises:
        ValueError: If the name is not a registered strategy
    """
    try:
        key = DissectionStrategy(strategy)
    except ValueError:
        raise ValueError(
            f"Unknown strategy: {strategy}. Available: {[s.value for s in STRATEGY_REGISTRY]}"
        )
    return STRATEGY_REGISTRY[key]()
