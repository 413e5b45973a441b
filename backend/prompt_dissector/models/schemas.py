"""
Data Models and Schemas Module
==============================
Defines structured data representations for every dissection stage.

This module provides:
- Immutable dataclasses for analysis entities
- Serialization/deserialization methods
- Enumerations for the closed vocabularies (segment types, strategies, ...)

These models form the contract between the dissection stages:
- Metadata extraction produces TextMetadata
- Strategies produce AnalyzedSegment records
- The analyzer bundles them into a read-only PromptAnalysis
- Bubble conversion projects segments into ChatBubble records

Usage:
    from prompt_dissector.models import PromptAnalysis, ChatBubble

    analysis = analyze_prompt(text)
    payload = analysis.to_dict()
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Tuple
from enum import Enum
import json
import hashlib


# =============================================================================
# ENUMS
# =============================================================================

class SegmentType(str, Enum):
    """Role a piece of text plays in the response."""
    INTRODUCTION = "introduction"
    INSTRUCTION = "instruction"
    EXPLANATION = "explanation"
    EXAMPLE = "example"
    QUESTION = "question"
    LIST = "list"
    CODE = "code"
    CONCLUSION = "conclusion"
    TRANSITION = "transition"
    EMPHASIS = "emphasis"


class Priority(str, Enum):
    """Display priority of a segment."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Complexity(str, Enum):
    """Coarse structural complexity of a response."""
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class ContentType(str, Enum):
    """Topical tag inferred from keywords; steers strategy selection only."""
    INSTRUCTIONAL = "instructional"
    EDUCATIONAL = "educational"
    CREATIVE = "creative"
    ANALYTICAL = "analytical"
    COLLABORATIVE = "collaborative"
    TECHNICAL = "technical"
    STRATEGIC = "strategic"


class DissectionStrategy(str, Enum):
    """Algorithm used to split a response into segments."""
    PRESERVE = "preserve"
    LOGICAL_BREAK = "logical_break"
    SENTENCE_SPLIT = "sentence_split"
    SEMANTIC_CHUNK = "semantic_chunk"
    PRIORITY_BASED = "priority_based"
    PROGRESSIVE = "progressive"


# =============================================================================
# BASE CLASSES
# =============================================================================

class BaseModel:
    """Mixin for dataclass models with common serialization methods."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary, handling nested objects."""
        def convert(obj):
            if isinstance(obj, BaseModel):
                return obj.to_dict()
            elif isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, (list, tuple)):
                return [convert(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            return obj

        return {k: convert(v) for k, v in asdict(self).items()}

    def to_json(self, indent: int = 2) -> str:
        """Convert model to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseModel":
        """Create model from dictionary. Override in subclasses for nested objects."""
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "BaseModel":
        """Create model from JSON string."""
        return cls.from_dict(json.loads(json_str))


# =============================================================================
# ANALYSIS CONTEXT
# =============================================================================

@dataclass(frozen=True)
class AnalysisContext(BaseModel):
    """
    Where a response came from in the workflow canvas.

    Carried through to metadata for display only; it never changes how
    text is segmented.

    Attributes:
        framework: UX framework name (e.g. "Design Thinking")
        stage: Stage within the framework (e.g. "Empathize")
        tool: Tool that generated the prompt (e.g. "User Interviews")
        user_intent: Free-text description of what the user asked for
        previous_context: Earlier messages in the same conversation
    """
    framework: Optional[str] = None
    stage: Optional[str] = None
    tool: Optional[str] = None
    user_intent: Optional[str] = None
    previous_context: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AnalysisContext":
        """Accepts both the frontend's camelCase keys and snake_case keys."""
        if not data:
            return cls()
        previous = data.get('previous_context', data.get('previousContext')) or ()
        return cls(
            framework=data.get('framework'),
            stage=data.get('stage'),
            tool=data.get('tool'),
            user_intent=data.get('user_intent', data.get('userIntent')),
            previous_context=tuple(str(item) for item in previous),
        )


# =============================================================================
# TEXT METADATA
# =============================================================================

@dataclass(frozen=True)
class TextMetadata(BaseModel):
    """
    Coarse statistics of a response, recomputed on every analysis.

    Attributes:
        total_length: Character count of the raw input
        word_count: Whitespace-delimited word count
        estimated_reading_time: Minutes at 200 words per minute, rounded up
        complexity: simple / moderate / complex
        content_type: Topical tags in fixed check order (never empty)
        has_instructions: Numbered steps, bullets or sequencing words present
        has_examples: Example markers present
        has_questions: At least one question mark
        has_lists: Line-leading list markers present
        has_code_snippets: Fenced or inline code present
        framework: Context framework (display only)
        stage: Context stage (display only)
        tool: Context tool (display only)
    """
    total_length: int
    word_count: int
    estimated_reading_time: int
    complexity: Complexity
    content_type: Tuple[ContentType, ...]
    has_instructions: bool = False
    has_examples: bool = False
    has_questions: bool = False
    has_lists: bool = False
    has_code_snippets: bool = False
    framework: Optional[str] = None
    stage: Optional[str] = None
    tool: Optional[str] = None

    def has_content_type(self, content_type: ContentType) -> bool:
        return content_type in self.content_type

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextMetadata":
        data = dict(data)
        data['complexity'] = Complexity(data['complexity'])
        data['content_type'] = tuple(ContentType(t) for t in data['content_type'])
        return cls(**data)


# =============================================================================
# SEGMENTS
# =============================================================================

@dataclass(frozen=True)
class BubbleConfiguration(BaseModel):
    """
    Display settings attached to a segment when it is created.

    Attributes:
        max_length: Longest content the bubble is expected to hold
        delay_ms: Base reveal delay for this segment
        allow_split: Whether the UI may split the bubble further
        order_index: Position hint used to break ties when sequencing
        show_timestamp: Always true
        enable_actions: Always true
    """
    max_length: int
    delay_ms: int
    allow_split: bool
    order_index: int
    show_timestamp: bool = True
    enable_actions: bool = True


@dataclass(frozen=True)
class AnalyzedSegment(BaseModel):
    """
    A typed, classified fragment of the analyzed text.

    Attributes:
        segment_id: Identifier unique within one analysis run
        type: Role of the fragment (instruction, example, ...)
        content: Trimmed text of the fragment
        priority: high / medium / low
        is_actionable: Whether the fragment asks the reader to do something
        bubble_config: Display settings
        related_segments: Reserved for cross-references, always empty today
    """
    segment_id: str
    type: SegmentType
    content: str
    priority: Priority
    is_actionable: bool
    bubble_config: BubbleConfiguration
    related_segments: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzedSegment":
        return cls(
            segment_id=data['segment_id'],
            type=SegmentType(data['type']),
            content=data['content'],
            priority=Priority(data['priority']),
            is_actionable=data['is_actionable'],
            bubble_config=BubbleConfiguration.from_dict(data['bubble_config']),
            related_segments=tuple(data.get('related_segments', ())),
        )


# =============================================================================
# ANALYSIS OUTPUT
# =============================================================================

@dataclass(frozen=True)
class PromptAnalysis(BaseModel):
    """
    Read-only snapshot of one analysis run.

    Attributes:
        run_id: Deterministic identifier of the input and context
        segments: Segments in strategy output order
        metadata: Extracted text metadata
        recommendations: Advisory strings about the response's shape
        strategy: Strategy chosen by the decision table
    """
    run_id: str
    segments: Tuple[AnalyzedSegment, ...]
    metadata: TextMetadata
    recommendations: Tuple[str, ...]
    strategy: DissectionStrategy

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptAnalysis":
        return cls(
            run_id=data['run_id'],
            segments=tuple(AnalyzedSegment.from_dict(s) for s in data['segments']),
            metadata=TextMetadata.from_dict(data['metadata']),
            recommendations=tuple(data.get('recommendations', ())),
            strategy=DissectionStrategy(data['strategy']),
        )


@dataclass(frozen=True)
class BubbleMetadata(BaseModel):
    """
    Metadata copied from the source segment onto a chat bubble.

    `type` is a plain string so legacy and fallback bubbles can carry
    "legacy" or "unknown" alongside the SegmentType values.
    """
    type: str
    priority: Priority
    is_actionable: bool
    segment_id: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape expected by the chat UI."""
        return {
            'type': self.type.value if isinstance(self.type, Enum) else self.type,
            'priority': self.priority.value,
            'isActionable': self.is_actionable,
            'segmentId': self.segment_id,
        }


@dataclass(frozen=True)
class ChatBubble(BaseModel):
    """
    A display-ready bubble: formatted text plus reveal delay.

    Attributes:
        content: Formatted bubble text
        delay: Delay in milliseconds before the bubble appears
        metadata: Copy of the source segment's type, priority and id
    """
    content: str
    delay: int
    metadata: BubbleMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            'content': self.content,
            'delay': self.delay,
            'metadata': self.metadata.to_dict(),
        }

    def with_content(self, content: str) -> "ChatBubble":
        """Copy of this bubble with different text."""
        return ChatBubble(content=content, delay=self.delay, metadata=self.metadata)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def generate_run_id(content: str, context: Optional[AnalysisContext] = None) -> str:
    """Generate a deterministic run ID from the input text and context."""
    context_key = json.dumps(context.to_dict(), sort_keys=True) if context else ""
    # surrogatepass keeps lone surrogates (valid str, e.g. from JSON escapes) hashable
    digest = hashlib.md5(f"{content}\x00{context_key}".encode('utf-8', 'surrogatepass'))
    return digest.hexdigest()[:16]
