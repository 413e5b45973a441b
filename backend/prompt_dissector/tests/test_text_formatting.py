"""
Text Formatting Tests
=====================
Tests for markdown cleanup, legacy splitting and the bubble entry points
used by the chat UI.
"""

import os
import sys
from unittest.mock import patch

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from prompt_dissector.formatting import (
    strip_markdown_formatting,
    format_for_chat_display,
    should_use_intelligent_analysis,
    create_legacy_bubbles,
    split_into_conversation_bubbles,
    create_analyzed_chat_bubbles,
)
from prompt_dissector.models import Priority


STRUCTURED_RESPONSE = (
    "Overview: this guide walks you through planning a round of user interviews.\n"
    "1. Define the research goal and the questions you want answered first.\n"
    "2. Recruit five to eight participants across different shifts and roles.\n"
    "3. Conduct each interview in a quiet room and record it with consent."
)


# =============================================================================
# MARKDOWN CLEANUP
# =============================================================================

def test_strip_markdown_formatting():
    """Test that all markdown is removed and whitespace collapsed."""
    text = (
        "# Title\n\n"
        "**Bold** and *italic* with `code` and [link](http://example.com).\n\n"
        "- item one\n"
        "1. step"
    )

    assert strip_markdown_formatting(text) == (
        "Title Bold and italic with code and link. item one step"
    )

    print("[PASS] strip_markdown_formatting test passed")


def test_strip_code_fences():
    """Test fenced code keeps its body."""
    assert strip_markdown_formatting("```\nprint(1)\n```") == "print(1)"
    assert strip_markdown_formatting("Run `make test` now") == "Run make test now"

    print("[PASS] Code fence stripping test passed")


def test_format_for_chat_display():
    """Test markdown removal keeps line structure."""
    text = (
        "## Plan\n"
        "**Bold** text\n"
        "- first item\n"
        "* second item\n"
        "3.  third\n"
        "snake_case"
    )

    assert format_for_chat_display(text) == (
        "Plan\n\nBold text\n• first item\n• second item\n3. third\nsnakecase"
    )

    print("[PASS] format_for_chat_display test passed")


def test_formatting_passes_through_empty():
    """Test empty and non-string input is returned unchanged."""
    assert strip_markdown_formatting("") == ""
    assert strip_markdown_formatting(None) is None
    assert format_for_chat_display("") == ""

    print("[PASS] Empty formatting input test passed")


# =============================================================================
# ANALYSIS GATE
# =============================================================================

def test_should_use_intelligent_analysis():
    """Test the length and structure gate."""
    assert not should_use_intelligent_analysis("1. Short list")
    assert not should_use_intelligent_analysis("a" * 250)
    assert should_use_intelligent_analysis(STRUCTURED_RESPONSE)
    assert should_use_intelligent_analysis("One. Two. Three. Four. " + "z" * 200)

    print("[PASS] Intelligent analysis gate test passed")


# =============================================================================
# LEGACY SPLITTING
# =============================================================================

def test_legacy_paragraphs():
    """Test paragraphs split first."""
    assert create_legacy_bubbles("First para.\n\nSecond para.") == ["First para.", "Second para."]

    print("[PASS] Legacy paragraph split test passed")


def test_legacy_numbered_sections():
    """Test inline numbered sections split when there is a lead-in."""
    assert create_legacy_bubbles("Intro 1. one 2. two") == ["Intro", "1. one", "2. two"]

    print("[PASS] Legacy numbered split test passed")


def test_legacy_header_sections():
    """Test "Label:" sections split last."""
    assert create_legacy_bubbles("Goals: be fast\nRisks: be slow") == ["Goals: be fast", "Risks: be slow"]
    assert create_legacy_bubbles("just one line") == ["just one line"]

    print("[PASS] Legacy header split test passed")


# =============================================================================
# BUBBLE ENTRY POINTS
# =============================================================================

def test_split_short_text_uses_legacy():
    """Test short replies bypass the analyzer."""
    assert split_into_conversation_bubbles("Hello there, how are you?") == ["Hello there, how are you?"]
    assert split_into_conversation_bubbles("") == [""]

    print("[PASS] Short text split test passed")


def test_split_structured_text_uses_analyzer():
    """Test structured replies go through the analyzer."""
    bubbles = split_into_conversation_bubbles(STRUCTURED_RESPONSE, {'tool': 'User Interviews'})

    assert len(bubbles) == 4
    assert bubbles[0].startswith("Overview:")
    assert bubbles[1] == "→ 1. Define the research goal and the questions you want answered first."

    print("[PASS] Structured text split test passed")


def test_analyzed_bubbles_empty_input():
    """Test empty input yields a single fallback bubble."""
    bubbles = create_analyzed_chat_bubbles("")

    assert len(bubbles) == 1
    assert bubbles[0].content == ""
    assert bubbles[0].delay == 300
    assert bubbles[0].metadata.type == 'unknown'
    assert bubbles[0].metadata.segment_id == 'fallback'

    print("[PASS] Empty analyzed bubbles test passed")


def test_analyzed_bubbles_are_display_formatted():
    """Test analyzer bubbles have markdown removed."""
    bubbles = create_analyzed_chat_bubbles("Use **bold** words sparingly.")

    assert len(bubbles) == 1
    assert "**" not in bubbles[0].content
    assert "bold" in bubbles[0].content

    print("[PASS] Display formatted bubbles test passed")


def test_analyzed_bubbles_fall_back_to_legacy():
    """Test analyzer failures fall back to legacy bubbles."""
    with patch(
        'prompt_dissector.formatting.text_formatting.analyze_prompt',
        side_effect=RuntimeError("analysis unavailable")
    ):
        bubbles = create_analyzed_chat_bubbles("First para.\n\nSecond para.")

    assert [b.content for b in bubbles] == ["First para.", "Second para."]
    assert [b.delay for b in bubbles] == [300, 700]
    assert [b.metadata.segment_id for b in bubbles] == ["legacy-0", "legacy-1"]
    assert all(b.metadata.type == 'legacy' for b in bubbles)
    assert all(b.metadata.priority == Priority.MEDIUM for b in bubbles)

    print("[PASS] Legacy fallback test passed")


def run_all_tests():
    """Run all formatting tests."""
    print("\n" + "="*60)
    print("TEXT FORMATTING TESTS")
    print("="*60 + "\n")

    test_strip_markdown_formatting()
    test_strip_code_fences()
    test_format_for_chat_display()
    test_formatting_passes_through_empty()
    test_should_use_intelligent_analysis()
    test_legacy_paragraphs()
    test_legacy_numbered_sections()
    test_legacy_header_sections()
    test_split_short_text_uses_legacy()
    test_split_structured_text_uses_analyzer()
    test_analyzed_bubbles_empty_input()
    test_analyzed_bubbles_are_display_formatted()
    test_analyzed_bubbles_fall_back_to_legacy()

    print("\n" + "="*60)
    print("ALL FORMATTING TESTS PASSED")
    print("="*60 + "\n")


if __name__ == "__main__":
    run_all_tests()
