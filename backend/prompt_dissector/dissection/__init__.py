"""
Prompt Dissection Module
========================
Splits AI-generated responses into typed segments and chat bubbles.

This module implements six dissection strategies:
- Preserve: keep short, simple replies whole
- Logical break: split structured instructions at their sections
- Semantic chunk / sentence split: pack sentences into bounded bubbles
- Priority based: paragraphs ordered by importance
- Progressive: introduction, steps, examples, then questions

Usage:
    from prompt_dissector.dissection import analyze_prompt, convert_to_chat_bubbles

    analysis = analyze_prompt(response_text, {"tool": "User Interviews"})
    bubbles = convert_to_chat_bubbles(analysis)
"""

from .analyzer import analyze_prompt, convert_to_chat_bubbles, dissect_prompt, segment_content
from .metadata import extract_metadata
from .selector import determine_strategy
from .classification import classify_segment_type, determine_priority, is_actionable_content
from .bubbles import sort_segments_by_flow, format_segment_for_bubble, build_chat_bubbles
from .recommendations import generate_recommendations
from .strategies import (
    SegmentationStrategy,
    DissectionParams,
    PreserveStrategy,
    LogicalBreakStrategy,
    SemanticChunkStrategy,
    PriorityBasedStrategy,
    ProgressiveStrategy,
    SentenceSplitStrategy,
    STRATEGY_REGISTRY,
    get_strategy,
)

__all__ = [
    'analyze_prompt',
    'convert_to_chat_bubbles',
    'dissect_prompt',
    'segment_content',
    'extract_metadata',
    'determine_strategy',
    'classify_segment_type',
    'determine_priority',
    'is_actionable_content',
    'sort_segments_by_flow',
    'format_segment_for_bubble',
    'build_chat_bubbles',
    'generate_recommendations',
    'SegmentationStrategy',
    'DissectionParams',
    'PreserveStrategy',
    'LogicalBreakStrategy',
    'SemanticChunkStrategy',
    'PriorityBasedStrategy',
    'ProgressiveStrategy',
    'SentenceSplitStrategy',
    'STRATEGY_REGISTRY',
    'get_strategy',
]
