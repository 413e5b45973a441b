"""
Chat Text Formatting
====================
Helpers that clean AI responses for chat display and split them into
conversation bubbles.

Long or structured responses go through the prompt analyzer; short
plain replies use the legacy paragraph splitter, which is also the
fallback when analysis fails.
"""

import re
import logging
from typing import List, Optional

from ..config import AppConfig, get_config
from ..models import BubbleMetadata, ChatBubble, Priority
from ..dissection import analyze_prompt, convert_to_chat_bubbles
from ..dissection.analyzer import ContextLike
from ..dissection.classification import ACTION_VERB_PATTERN

logger = logging.getLogger(__name__)


CODE_BLOCK = re.compile(r'```[\s\S]*?```')
CODE_FENCE_LINE = re.compile(r'```.*?\n?')
INLINE_CODE = re.compile(r'`([^`]+)`')

EMPHASIS_MARKERS = [
    re.compile(r'\*\*\*(.+?)\*\*\*'),
    re.compile(r'\*\*(.+?)\*\*'),
    re.compile(r'\*(.+?)\*'),
    re.compile(r'___(.+?)___'),
    re.compile(r'__(.+?)__'),
    re.compile(r'_(.+?)_'),
]

LINK = re.compile(r'\[([^\]]+)\]\([^)]+\)')

STRUCTURE_MARKERS = re.compile(r'^[^\S\n]*\d+\.|\*\s|Step \d+|first|next|then|finally|example|for example', re.IGNORECASE | re.MULTILINE)
SENTENCE_TERMINATORS = re.compile(r'[.!?]+')


def _unfence(match: re.Match) -> str:
    return CODE_FENCE_LINE.sub('', match.group(0)).replace('```', '')


def _strip_emphasis(text: str) -> str:
    for pattern in EMPHASIS_MARKERS:
        text = pattern.sub(r'\1', text)
    return text


def strip_markdown_formatting(text: str) -> str:
    """
    Remove markdown so text reads as plain prose in a chat bubble.

    Removes code fences and spans, headers, bold/italic markers, link
    syntax (keeping the label) and list markers, then collapses all
    whitespace to single spaces.
    """
    if not text or not isinstance(text, str):
        return text

    text = CODE_BLOCK.sub(_unfence, text)
    text = INLINE_CODE.sub(r'\1', text)
    text = re.sub(r'^#+\s*', '', text, flags=re.MULTILINE)
    text = _strip_emphasis(text)
    text = LINK.sub(r'\1', text)
    text = re.sub(r'^\s*[-*+]\s+', '', text, flags=re.MULTILINE)
    text = re.sub(r'^\s*\d+\.\s+', '', text, flags=re.MULTILINE)
    text = re.sub(r'\n\s*\n', '\n\n', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def format_for_chat_display(text: str) -> str:
    """
    Remove markdown syntax but keep line and paragraph structure.

    Headers become their text on a line of their own, bullets become
    "• ", numbered items are normalized to "N. " and stray "#", "-" and
    "_" characters are dropped.
    """
    if not text or not isinstance(text, str):
        return text

    text = CODE_BLOCK.sub(lambda m: _unfence(m).strip(), text)
    text = INLINE_CODE.sub(r'\1', text)
    text = re.sub(r'^#+\s*(.+)$', r'\1\n', text, flags=re.MULTILINE)
    text = _strip_emphasis(text)
    text = LINK.sub(r'\1', text)
    text = re.sub(r'^\s*[-*+]\s+(.+)', r'• \1', text, flags=re.MULTILINE)
    text = re.sub(r'^\s*(\d+)\.\s+(.+)', r'\1. \2', text, flags=re.MULTILINE)
    text = re.sub(r'[#\-_]+', '', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


def should_use_intelligent_analysis(text: str, config: Optional[AppConfig] = None) -> bool:
    """
    Decide between analyzer bubbles and legacy splitting.

    Analysis pays off for longer text (at least the configured minimum)
    that has structure markers, several sentences, or action verbs.
    """
    config = config or get_config()
    if len(text) < config.formatting.intelligent_analysis_min_length:
        return False

    has_structure = STRUCTURE_MARKERS.search(text) is not None
    has_multiple_sentences = len(SENTENCE_TERMINATORS.findall(text)) > 2
    has_complex_content = ACTION_VERB_PATTERN.search(text) is not None

    return has_structure or has_multiple_sentences or has_complex_content


def create_legacy_bubbles(text: str) -> List[str]:
    """
    Split cleaned text by paragraphs, else numbered sections, else
    "Header:" sections, else keep it as one bubble.
    """
    cleaned = format_for_chat_display(text) or ""

    sections = [s.strip() for s in re.split(r'\n\s*\n+', cleaned) if s.strip()]
    if len(sections) > 1:
        return sections

    numbered = re.split(r'(?=\d+\.\s)', cleaned)
    if len(numbered) > 1 and numbered[0].strip():
        return [s.strip() for s in numbered if s.strip()]

    headers = re.split(r'(?=^[A-Z][^.\n]*:)', cleaned, flags=re.MULTILINE)
    headers = [s.strip() for s in headers if s.strip()]
    if len(headers) > 1:
        return headers

    return [cleaned]


def _legacy_chat_bubbles(text: str, config: AppConfig) -> List[ChatBubble]:
    formatting = config.formatting
    return [
        ChatBubble(
            content=content,
            delay=formatting.legacy_first_delay_ms + index * formatting.legacy_delay_step_ms,
            metadata=BubbleMetadata(
                type='legacy',
                priority=Priority.MEDIUM,
                is_actionable=ACTION_VERB_PATTERN.search(content) is not None,
                segment_id=f"legacy-{index}",
            ),
        )
        for index, content in enumerate(create_legacy_bubbles(text))
    ]


def split_into_conversation_bubbles(
    text: str,
    context: ContextLike = None,
    config: Optional[AppConfig] = None
) -> List[str]:
    """
    Split an AI response into the texts of its conversation bubbles.

    Args:
        text: Raw response text
        context: Optional workflow context
        config: Optional configuration (default: global config)

    Returns:
        Bubble texts in display order
    """
    if not text or not isinstance(text, str):
        return [text]

    if not should_use_intelligent_analysis(text, config):
        logger.debug("Using legacy bubble splitting")
        return create_legacy_bubbles(text)

    logger.debug("Using prompt analyzer for bubble dissection")
    return [
        bubble.content
        for bubble in create_analyzed_chat_bubbles(text, context, config)
    ]


def create_analyzed_chat_bubbles(
    text: str,
    context: ContextLike = None,
    config: Optional[AppConfig] = None
) -> List[ChatBubble]:
    """
    Analyze a response and return chat-display formatted bubbles with metadata.

    Empty input yields a single "unknown" fallback bubble. If analysis
    raises, the legacy splitter's bubbles are returned with evenly
    stepped delays.
    """
    config = config or get_config()

    if not text or not isinstance(text, str):
        return [ChatBubble(
            content=text or '',
            delay=config.formatting.legacy_first_delay_ms,
            metadata=BubbleMetadata(
                type='unknown',
                priority=Priority.MEDIUM,
                is_actionable=False,
                segment_id='fallback',
            ),
        )]

    try:
        analysis = analyze_prompt(text, context, config=config)
        bubbles = convert_to_chat_bubbles(analysis, config=config)
    except Exception:
        logger.exception("Prompt analysis failed, falling back to legacy bubbles")
        return _legacy_chat_bubbles(text, config)

    return [bubble.with_content(format_for_chat_display(bubble.content)) for bubble in bubbles]
