"""
Bubble Sequencing and Formatting
================================
Turns analyzed segments into display-ready chat bubbles.

Three steps:
1. Sequence: stable sort by type precedence, then priority, then the
   segment's own order index
2. Format: whitespace cleanup plus type-specific decoration
3. Pace: first bubble fixed, later ones scale with length up to a cap
"""

import re
from typing import List, Optional, Sequence

from ..config import PacingConfig
from ..models import AnalyzedSegment, BubbleMetadata, ChatBubble, SegmentType
from .classification import LEADING_ACTION_VERB_PATTERN, LEADING_EXAMPLE_PATTERN
from .strategies import PRIORITY_ORDER

TYPE_FLOW_ORDER = {
    SegmentType.INTRODUCTION: 0,
    SegmentType.INSTRUCTION: 1,
    SegmentType.EXPLANATION: 2,
    SegmentType.LIST: 3,
    SegmentType.EXAMPLE: 4,
    SegmentType.CODE: 5,
    SegmentType.QUESTION: 6,
    SegmentType.EMPHASIS: 7,
    SegmentType.TRANSITION: 8,
    SegmentType.CONCLUSION: 9,
}

INSTRUCTION_PREFIX = "→ "
EXAMPLE_PREFIX = "💡 Example: "

EXCESS_NEWLINES = re.compile(r'\n{3,}')
EXCESS_SPACES = re.compile(r'[ \t]{2,}')


def sort_segments_by_flow(segments: Sequence[AnalyzedSegment]) -> List[AnalyzedSegment]:
    """Order segments for reading: type category first, then priority, then index."""
    return sorted(
        segments,
        key=lambda s: (
            TYPE_FLOW_ORDER[s.type],
            PRIORITY_ORDER[s.priority],
            s.bubble_config.order_index,
        )
    )


def clean_bubble_text(content: str) -> str:
    """Collapse 3+ newlines to 2 and runs of spaces to one, then trim."""
    content = EXCESS_NEWLINES.sub('\n\n', content)
    content = EXCESS_SPACES.sub(' ', content)
    return content.strip()


def format_segment_for_bubble(segment: AnalyzedSegment) -> str:
    """
    Format a segment's text for display.

    Only whitespace is ever removed; decoration adds a prefix for
    instructions and examples and a trailing "?" for questions.
    """
    content = clean_bubble_text(segment.content)
    if not content:
        return content

    if segment.type == SegmentType.INSTRUCTION:
        if not LEADING_ACTION_VERB_PATTERN.match(content):
            content = INSTRUCTION_PREFIX + content
    elif segment.type == SegmentType.EXAMPLE:
        if not LEADING_EXAMPLE_PATTERN.match(content):
            content = EXAMPLE_PREFIX + content
    elif segment.type == SegmentType.QUESTION:
        if not content.endswith('?'):
            content += '?'

    return content


def calculate_bubble_delay(
    formatted_content: str,
    segment: AnalyzedSegment,
    position: int,
    pacing: PacingConfig
) -> int:
    """Reveal delay in ms for the bubble at `position` in display order."""
    if position == 0:
        return pacing.first_bubble_delay_ms

    content_delay = max(
        pacing.min_content_delay_ms,
        len(formatted_content) * pacing.content_delay_ms_per_char
    )
    return min(segment.bubble_config.delay_ms + content_delay, pacing.max_bubble_delay_ms)


def build_chat_bubbles(
    segments: Sequence[AnalyzedSegment],
    pacing: Optional[PacingConfig] = None
) -> List[ChatBubble]:
    """Sequence, format and pace segments into chat bubbles."""
    pacing = pacing or PacingConfig()
    bubbles = []

    for position, segment in enumerate(sort_segments_by_flow(segments)):
        content = format_segment_for_bubble(segment)
        bubbles.append(ChatBubble(
            content=content,
            delay=calculate_bubble_delay(content, segment, position, pacing),
            metadata=BubbleMetadata(
                type=segment.type,
                priority=segment.priority,
                is_actionable=segment.is_actionable,
                segment_id=segment.segment_id,
            ),
        ))

    return bubbles
