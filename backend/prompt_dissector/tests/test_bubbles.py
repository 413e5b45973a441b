"""
Bubble Sequencing Tests
=======================
Tests for ordering, formatting and pacing of chat bubbles.
"""

import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from prompt_dissector.config import PacingConfig
from prompt_dissector.dissection import (
    sort_segments_by_flow,
    format_segment_for_bubble,
    build_chat_bubbles,
    generate_recommendations,
)
from prompt_dissector.dissection.bubbles import clean_bubble_text, calculate_bubble_delay
from prompt_dissector.dissection.recommendations import (
    CONSOLIDATE_SEGMENTS,
    ADD_ACTIONABLE,
    ADD_EXAMPLES,
    ADD_QUESTIONS,
)
from prompt_dissector.models import (
    AnalyzedSegment,
    BubbleConfiguration,
    Priority,
    SegmentType,
    TextMetadata,
    Complexity,
    ContentType,
)


# =============================================================================
# TEST FIXTURES
# =============================================================================

def make_segment(
    segment_id,
    segment_type=SegmentType.EXPLANATION,
    content="Some content.",
    priority=Priority.LOW,
    order_index=0,
    delay_ms=300,
    is_actionable=False
):
    return AnalyzedSegment(
        segment_id=segment_id,
        type=segment_type,
        content=content,
        priority=priority,
        is_actionable=is_actionable,
        bubble_config=BubbleConfiguration(
            max_length=280,
            delay_ms=delay_ms,
            allow_split=False,
            order_index=order_index,
        ),
    )


def make_metadata(complexity=Complexity.SIMPLE, has_examples=False):
    return TextMetadata(
        total_length=100,
        word_count=20,
        estimated_reading_time=1,
        complexity=complexity,
        content_type=(ContentType.EDUCATIONAL,),
        has_examples=has_examples,
    )


# =============================================================================
# SEQUENCING
# =============================================================================

def test_sort_by_type_flow():
    """Test type precedence dominates source order."""
    segments = [
        make_segment("c", SegmentType.CONCLUSION),
        make_segment("q", SegmentType.QUESTION),
        make_segment("i", SegmentType.INSTRUCTION),
        make_segment("intro", SegmentType.INTRODUCTION),
    ]

    ordered = sort_segments_by_flow(segments)

    assert [s.segment_id for s in ordered] == ["intro", "i", "q", "c"]

    print("[PASS] Type flow ordering test passed")


def test_sort_ties_by_priority_then_index():
    """Test priority and then order index break ties within a type."""
    segments = [
        make_segment("low", priority=Priority.LOW, order_index=0),
        make_segment("high-late", priority=Priority.HIGH, order_index=5),
        make_segment("high-early", priority=Priority.HIGH, order_index=1),
    ]

    ordered = sort_segments_by_flow(segments)

    assert [s.segment_id for s in ordered] == ["high-early", "high-late", "low"]

    print("[PASS] Tie-break ordering test passed")


def test_sort_is_stable():
    """Test fully tied segments keep their input order."""
    segments = [make_segment(f"s{i}") for i in range(4)]

    assert [s.segment_id for s in sort_segments_by_flow(segments)] == ["s0", "s1", "s2", "s3"]

    print("[PASS] Stable sort test passed")


# =============================================================================
# FORMATTING
# =============================================================================

def test_clean_bubble_text():
    """Test whitespace cleanup."""
    assert clean_bubble_text("  a\n\n\n\nb   c\t\td  ") == "a\n\nb c d"

    print("[PASS] Bubble text cleanup test passed")


def test_instruction_prefix():
    """Test instructions get an arrow unless they open with a verb."""
    plain = make_segment("a", SegmentType.INSTRUCTION, "1. Open the survey tool.")
    verb = make_segment("b", SegmentType.INSTRUCTION, "Create three personas.")

    assert format_segment_for_bubble(plain) == "→ 1. Open the survey tool."
    assert format_segment_for_bubble(verb) == "Create three personas."

    print("[PASS] Instruction prefix test passed")


def test_example_prefix():
    """Test examples get a label unless already labelled."""
    plain = make_segment("a", SegmentType.EXAMPLE, "A nurse on night shift.")
    labelled = make_segment("b", SegmentType.EXAMPLE, "For example, a nurse on night shift.")

    assert format_segment_for_bubble(plain) == "💡 Example: A nurse on night shift."
    assert format_segment_for_bubble(labelled) == "For example, a nurse on night shift."

    print("[PASS] Example prefix test passed")


def test_question_mark_appended():
    """Test questions always end with a question mark."""
    open_question = make_segment("a", SegmentType.QUESTION, "Which goals matter most")
    closed = make_segment("b", SegmentType.QUESTION, "Which goals matter most?")

    assert format_segment_for_bubble(open_question) == "Which goals matter most?"
    assert format_segment_for_bubble(closed) == "Which goals matter most?"

    print("[PASS] Question mark test passed")


def test_formatting_keeps_text():
    """Test that formatting never drops non-whitespace characters."""
    content = "**Bold** claim   with  spacing."
    segment = make_segment("a", SegmentType.EMPHASIS, content)

    formatted = format_segment_for_bubble(segment)

    assert "".join(content.split()) in "".join(formatted.split())

    print("[PASS] Formatting preserves text test passed")


def test_empty_segment_not_decorated():
    """Test blank content stays blank."""
    assert format_segment_for_bubble(make_segment("a", SegmentType.INSTRUCTION, "   ")) == ""
    assert format_segment_for_bubble(make_segment("b", SegmentType.QUESTION, "")) == ""

    print("[PASS] Empty segment test passed")


# =============================================================================
# PACING
# =============================================================================

def test_first_bubble_delay_fixed():
    """Test the first bubble appears after the fixed delay."""
    pacing = PacingConfig()
    segment = make_segment("a", content="x" * 500, delay_ms=1000)

    assert calculate_bubble_delay("x" * 500, segment, 0, pacing) == 300

    print("[PASS] First bubble delay test passed")


def test_later_bubble_delay():
    """Test later delays scale with length and are capped."""
    pacing = PacingConfig()

    short = make_segment("a", delay_ms=300)
    assert calculate_bubble_delay("Hi.", short, 1, pacing) == 600

    medium = make_segment("b", delay_ms=400)
    assert calculate_bubble_delay("x" * 50, medium, 1, pacing) == 1400

    long = make_segment("c", delay_ms=1000)
    assert calculate_bubble_delay("x" * 200, long, 2, pacing) == 3000

    print("[PASS] Later bubble delay test passed")


def test_build_chat_bubbles():
    """Test end-to-end bubble construction."""
    segments = [
        make_segment("q", SegmentType.QUESTION, "Any questions", Priority.MEDIUM, delay_ms=300),
        make_segment("i", SegmentType.INSTRUCTION, "Define the goal.", Priority.HIGH,
                     delay_ms=400, is_actionable=True),
    ]

    bubbles = build_chat_bubbles(segments)

    assert [b.metadata.segment_id for b in bubbles] == ["i", "q"]
    assert bubbles[0].content == "Define the goal."
    assert bubbles[0].delay == 300
    assert bubbles[0].metadata.type == SegmentType.INSTRUCTION
    assert bubbles[0].metadata.is_actionable is True
    assert bubbles[1].content == "Any questions?"
    assert bubbles[1].delay == 300 + 300
    assert all(b.delay > 0 for b in bubbles)

    print("[PASS] Build chat bubbles test passed")


def test_build_chat_bubbles_empty():
    """Test no segments means no bubbles."""
    assert build_chat_bubbles([]) == []

    print("[PASS] Empty bubble list test passed")


# =============================================================================
# RECOMMENDATIONS
# =============================================================================

def test_recommendations_for_plain_segments():
    """Test a short, passive response gets engagement hints."""
    recommendations = generate_recommendations([make_segment("a")], make_metadata())

    assert recommendations == [ADD_ACTIONABLE, ADD_QUESTIONS]

    print("[PASS] Plain recommendations test passed")


def test_recommendations_for_many_segments():
    """Test consolidation and example hints."""
    segments = [make_segment(f"s{i}", is_actionable=True) for i in range(7)]
    segments.append(make_segment("q", SegmentType.QUESTION))

    recommendations = generate_recommendations(segments, make_metadata(Complexity.COMPLEX))

    assert recommendations == [CONSOLIDATE_SEGMENTS, ADD_EXAMPLES]

    print("[PASS] Many segments recommendations test passed")


def test_no_recommendations_needed():
    """Test a well-shaped response gets no advice."""
    segments = [
        make_segment("i", SegmentType.INSTRUCTION, is_actionable=True),
        make_segment("q", SegmentType.QUESTION),
    ]

    assert generate_recommendations(segments, make_metadata(Complexity.COMPLEX, has_examples=True)) == []

    print("[PASS] No recommendations test passed")


def run_all_tests():
    """Run all bubble tests."""
    print("\n" + "="*60)
    print("BUBBLE SEQUENCING TESTS")
    print("="*60 + "\n")

    print("\n--- Sequencing Tests ---")
    test_sort_by_type_flow()
    test_sort_ties_by_priority_then_index()
    test_sort_is_stable()

    print("\n--- Formatting Tests ---")
    test_clean_bubble_text()
    test_instruction_prefix()
    test_example_prefix()
    test_question_mark_appended()
    test_formatting_keeps_text()
    test_empty_segment_not_decorated()

    print("\n--- Pacing Tests ---")
    test_first_bubble_delay_fixed()
    test_later_bubble_delay()
    test_build_chat_bubbles()
    test_build_chat_bubbles_empty()

    print("\n--- Recommendation Tests ---")
    test_recommendations_for_plain_segments()
    test_recommendations_for_many_segments()
    test_no_recommendations_needed()

    print("\n" + "="*60)
    print("ALL BUBBLE TESTS PASSED")
    print("="*60 + "\n")


if __name__ == "__main__":
    run_all_tests()
