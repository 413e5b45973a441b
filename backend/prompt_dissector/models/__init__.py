"""
Data Models Package
===================
Exports all data model classes for the prompt dissection service.

Usage:
    from prompt_dissector.models import PromptAnalysis, AnalyzedSegment, ChatBubble
    from prompt_dissector.models import SegmentType, DissectionStrategy
"""

from .schemas import (
    # Enums
    SegmentType,
    Priority,
    Complexity,
    ContentType,
    DissectionStrategy,

    # Base
    BaseModel,

    # Input
    AnalysisContext,

    # Analysis
    TextMetadata,
    BubbleConfiguration,
    AnalyzedSegment,
    PromptAnalysis,

    # Output
    BubbleMetadata,
    ChatBubble,

    # Utilities
    generate_run_id,
)

__all__ = [
    # Enums
    'SegmentType',
    'Priority',
    'Complexity',
    'ContentType',
    'DissectionStrategy',

    # Base
    'BaseModel',

    # Input
    'AnalysisContext',

    # Analysis
    'TextMetadata',
    'BubbleConfiguration',
    'AnalyzedSegment',
    'PromptAnalysis',

    # Output
    'BubbleMetadata',
    'ChatBubble',

    # Utilities
    'generate_run_id',
]
