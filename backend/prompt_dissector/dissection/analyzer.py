"""
Prompt Analyzer
===============
Main interface for dissecting an AI response into chat bubbles.

Control flow:
    text + context -> metadata -> strategy -> segments -> bubbles

Every function here is pure over its inputs (apart from logging) and
total over strings: empty text, text without sentence boundaries and
text made only of code fences all produce a valid analysis.
"""

import time
from typing import List, Optional, Union, Dict, Any

from ..config import AppConfig, get_config
from ..models import (
    AnalysisContext,
    AnalyzedSegment,
    ChatBubble,
    DissectionStrategy,
    PromptAnalysis,
    SegmentType,
    TextMetadata,
    generate_run_id,
)
from ..logging_config import get_dissection_logger, log_dissection_decision, log_stage_complete
from .bubbles import build_chat_bubbles
from .classification import determine_priority, is_actionable_content
from .metadata import extract_metadata
from .recommendations import generate_recommendations
from .selector import determine_strategy, explain_strategy
from .strategies import DissectionParams, SentenceSplitStrategy, create_bubble_config, get_strategy

logger = get_dissection_logger("analysis")

ContextLike = Union[AnalysisContext, Dict[str, Any], None]


def _resolve_context(context: ContextLike) -> AnalysisContext:
    if isinstance(context, AnalysisContext):
        return context
    return AnalysisContext.from_dict(context)


def segment_content(
    content: str,
    strategy: DissectionStrategy,
    metadata: TextMetadata,
    params: DissectionParams
) -> List[AnalyzedSegment]:
    """
    Run `strategy` and guarantee at least one segment for non-blank text.

    Length filtering (logical_break) or pattern extraction (progressive)
    can leave nothing behind; sentence grouping is tried next, and a
    single explanation segment is the last resort.
    """
    segments = get_strategy(strategy).segment(content, metadata, params)
    if segments or not content.strip():
        return segments

    logger.info(
        f"Strategy '{strategy.value}' produced no segments, falling back to sentence grouping",
        extra={'strategy': strategy.value, 'content_length': len(content)}
    )
    segments = SentenceSplitStrategy().segment(content, metadata, params)
    if segments:
        return segments

    text = content.strip()
    return [AnalyzedSegment(
        segment_id='fallback-0',
        type=SegmentType.EXPLANATION,
        content=text,
        priority=determine_priority(text),
        is_actionable=is_actionable_content(text),
        bubble_config=create_bubble_config(len(text), 0, params),
    )]


def analyze_prompt(
    content: str,
    context: ContextLike = None,
    config: Optional[AppConfig] = None
) -> PromptAnalysis:
    """
    Analyze an AI-generated response and dissect it into segments.

    Args:
        content: Raw response text
        context: Optional workflow context (AnalysisContext or dict with
            framework/stage/tool/userIntent/previousContext)
        config: Optional configuration (default: global config)

    Returns:
        Read-only PromptAnalysis snapshot
    """
    config = config or get_config()
    content = content or ""
    context = _resolve_context(context)
    params = DissectionParams.from_config(config.dissection)
    run_id = generate_run_id(content, context)
    started = time.perf_counter()

    logger.debug(f"Analyzing prompt: {content[:100]}", extra={'run_id': run_id})

    metadata = extract_metadata(content, context)
    strategy = determine_strategy(content, metadata)

    log_dissection_decision(
        "strategy_selected",
        {
            'strategy': strategy.value,
            'reason': explain_strategy(metadata),
            'total_length': metadata.total_length,
            'complexity': metadata.complexity.value,
            'content_type': [t.value for t in metadata.content_type],
            'tool': metadata.tool,
        },
        run_id=run_id
    )

    segments = segment_content(content, strategy, metadata, params)
    recommendations = generate_recommendations(segments, metadata)

    log_stage_complete(
        "analysis",
        run_id,
        time.perf_counter() - started,
        {'strategy': strategy.value, 'segment_count': len(segments)}
    )

    return PromptAnalysis(
        run_id=run_id,
        segments=tuple(segments),
        metadata=metadata,
        recommendations=tuple(recommendations),
        strategy=strategy,
    )


def convert_to_chat_bubbles(
    analysis: PromptAnalysis,
    config: Optional[AppConfig] = None
) -> List[ChatBubble]:
    """
    Convert an analysis into chat bubbles in display order.

    Args:
        analysis: Result of analyze_prompt()
        config: Optional configuration (default: global config)

    Returns:
        List of ChatBubble objects
    """
    config = config or get_config()
    bubbles = build_chat_bubbles(analysis.segments, config.pacing)

    log_dissection_decision(
        "bubbles_generated",
        {
            'strategy': analysis.strategy.value,
            'bubble_count': len(bubbles),
            'total_delay_ms': sum(b.delay for b in bubbles),
            'segment_order': [b.metadata.segment_id for b in bubbles],
        },
        run_id=analysis.run_id
    )

    return bubbles


def dissect_prompt(
    content: str,
    context: ContextLike = None,
    config: Optional[AppConfig] = None
) -> List[ChatBubble]:
    """Convenience function: analyze and convert in one call."""
    analysis = analyze_prompt(content, context, config=config)
    return convert_to_chat_bubbles(analysis, config=config)
