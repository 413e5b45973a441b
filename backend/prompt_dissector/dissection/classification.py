"""
Segment Classification Module
=============================
Regex patterns and the rule tables built on them.

Classification is an explicit ordered list of (pattern, type) rules:
the first pattern that matches decides the segment type, and text that
matches nothing is an explanation. Priority and actionability use the
same patterns so all three judgements agree on what a "step" looks like.
"""

import re
from typing import List, Tuple, Pattern

from ..models import SegmentType, Priority


# =============================================================================
# PATTERNS
# =============================================================================

# Line-start indentation is [^\S\n]* so a blank-line run is scanned once per line

# Numbered line start anywhere in the text, bullet, "Step N" or sequencing word
INSTRUCTION_PATTERN = re.compile(r'^[^\S\n]*\d+\.|\*\s|Step \d+|First|Next|Then|Finally', re.IGNORECASE | re.MULTILINE)

# Same alternatives, but the numbered form only counts at the very start
LEADING_INSTRUCTION_PATTERN = re.compile(r'^\s*\d+\.|\*\s|step \d+|first|next|then|finally', re.IGNORECASE)

NUMBERED_STEP_PATTERN = re.compile(r'^\s*\d+\.|\*\s|step \d+', re.IGNORECASE)
NUMBERED_OR_BULLET_PATTERN = re.compile(r'^\s*\d+\.|\*\s')
NUMBERED_LINE_PATTERN = re.compile(r'^[^\S\n]*\d+\..*$', re.MULTILINE)

EXAMPLE_PATTERN = re.compile(r'example|sample|instance|such as|for example|e\.g\.', re.IGNORECASE)
QUESTION_PATTERN = re.compile(r'\?')
LIST_PATTERN = re.compile(r'^[^\S\n]*[\d\w\-\*\+][\.\)\:]?\s+', re.MULTILINE)
CODE_PATTERN = re.compile(r'```[\s\S]*?```|`[^`]+`')
EMPHASIS_PATTERN = re.compile(r'\*\*[^*]+\*\*|__[^_]+__|##+\s[^\n]+')
INTRODUCTION_PATTERN = re.compile(r'^\s*(introduction|overview|background|context)', re.IGNORECASE)
CONCLUSION_PATTERN = re.compile(r'^\s*(conclusion|summary|in summary|to conclude|finally)', re.IGNORECASE)
TRANSITION_PATTERN = re.compile(r'however|therefore|consequently|as a result', re.IGNORECASE)

MEDIUM_PRIORITY_PATTERN = re.compile(r'example|sample|\?', re.IGNORECASE)

ACTION_VERBS = (
    'create', 'generate', 'build', 'design', 'list', 'define', 'analyze',
    'evaluate', 'identify', 'develop', 'implement', 'execute', 'perform', 'conduct',
)
ACTION_VERB_PATTERN = re.compile('|'.join(ACTION_VERBS), re.IGNORECASE)

# Instructions opening with one of these read as commands already
LEADING_ACTION_VERB_PATTERN = re.compile(r'^(create|generate|build|design|list|define|analyze)', re.IGNORECASE)
LEADING_EXAMPLE_PATTERN = re.compile(r'^(example|for example|e\.g\.)', re.IGNORECASE)

# Content-type keywords
CREATIVE_PATTERN = re.compile(r'brainstorm|idea|creative|innovative', re.IGNORECASE)
ANALYTICAL_PATTERN = re.compile(r'analyze|evaluate|assess|review', re.IGNORECASE)
COLLABORATIVE_PATTERN = re.compile(r'team|collaborate|group|together', re.IGNORECASE)
TECHNICAL_PATTERN = re.compile(r'implement|code|technical|api', re.IGNORECASE)
STRATEGIC_PATTERN = re.compile(r'strategy|plan|roadmap|vision', re.IGNORECASE)

# Sentence boundary: terminator run followed by whitespace, terminator kept
SENTENCE_BOUNDARY = re.compile(r'(?<=[.!?])\s+')

# Before numbered items, markdown headers or "Capitalized phrase:" line starts
LOGICAL_BREAK_BOUNDARY = re.compile(r'(?=^[^\S\n]*(?:\d+\.|#{1,6}\s|[A-Z][^.!?\n]*:))', re.MULTILINE)

PARAGRAPH_BOUNDARY = re.compile(r'\n\s*\n')

FIRST_SENTENCE_PATTERN = re.compile(r'[^.!?]*[.!?]')
# Captured terminator split: runs at even indexes, terminators at odd ones
TERMINATOR_SPLIT = re.compile(r'([.!?])')
EXAMPLE_SENTENCE_PATTERNS = (
    re.compile(r'for example[^.!?]*[.!?]', re.IGNORECASE),
    re.compile(r'such as[^.!?]*[.!?]', re.IGNORECASE),
)
QUOTED_EXAMPLE_PATTERN = re.compile(r'"[^"]+"')


# =============================================================================
# RULE TABLES
# =============================================================================

CLASSIFICATION_RULES: List[Tuple[Pattern, SegmentType]] = [
    (LEADING_INSTRUCTION_PATTERN, SegmentType.INSTRUCTION),
    (EXAMPLE_PATTERN, SegmentType.EXAMPLE),
    (QUESTION_PATTERN, SegmentType.QUESTION),
    (CODE_PATTERN, SegmentType.CODE),
    (EMPHASIS_PATTERN, SegmentType.EMPHASIS),
    (INTRODUCTION_PATTERN, SegmentType.INTRODUCTION),
    (CONCLUSION_PATTERN, SegmentType.CONCLUSION),
    (LIST_PATTERN, SegmentType.LIST),
    (TRANSITION_PATTERN, SegmentType.TRANSITION),
]


def classify_segment_type(content: str) -> SegmentType:
    """Return the type of the first rule whose pattern matches."""
    for pattern, segment_type in CLASSIFICATION_RULES:
        if pattern.search(content):
            return segment_type
    return SegmentType.EXPLANATION


def is_actionable_content(content: str) -> bool:
    """True when the text contains one of the action verbs."""
    return ACTION_VERB_PATTERN.search(content) is not None


def determine_priority(content: str) -> Priority:
    """
    Steps and actionable text are high priority, examples and
    questions medium, everything else low.
    """
    if NUMBERED_STEP_PATTERN.search(content) or is_actionable_content(content):
        return Priority.HIGH
    if MEDIUM_PRIORITY_PATTERN.search(content):
        return Priority.MEDIUM
    return Priority.LOW


def priority_for_type(segment_type: SegmentType) -> Priority:
    """Priority derived from the type alone, used for logical sections."""
    if segment_type == SegmentType.INSTRUCTION:
        return Priority.HIGH
    if segment_type == SegmentType.EXAMPLE:
        return Priority.MEDIUM
    return Priority.LOW
