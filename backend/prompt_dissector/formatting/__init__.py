"""
Formatting Package
==================
Chat display helpers and prompt template variable handling.

Usage:
    from prompt_dissector.formatting import split_into_conversation_bubbles
    from prompt_dissector.formatting import replace_prompt_variables
"""

from .text_formatting import (
    strip_markdown_formatting,
    format_for_chat_display,
    should_use_intelligent_analysis,
    create_legacy_bubbles,
    split_into_conversation_bubbles,
    create_analyzed_chat_bubbles,
)
from .variables import replace_prompt_variables, extract_prompt_variables

__all__ = [
    'strip_markdown_formatting',
    'format_for_chat_display',
    'should_use_intelligent_analysis',
    'create_legacy_bubbles',
    'split_into_conversation_bubbles',
    'create_analyzed_chat_bubbles',
    'replace_prompt_variables',
    'extract_prompt_variables',
]
