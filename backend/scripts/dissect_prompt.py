#!/usr/bin/env python3
"""
Prompt Dissection Script
========================
Dissects an AI response and visualizes the resulting chat bubbles.

Creates an ASCII-art timeline showing:
- When each bubble appears (cumulative delay)
- Bubble type and priority
- Metadata and recommendations

Usage:
    python scripts/dissect_prompt.py --file response.md
    cat response.md | python scripts/dissect_prompt.py
    python scripts/dissect_prompt.py --sample --json
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from prompt_dissector.config import get_config, apply_environment_overrides, load_config_file
from prompt_dissector.dissection import analyze_prompt, convert_to_chat_bubbles


SAMPLE_RESPONSE = """Overview: this interview guide helps you understand how nurses hand over patients between shifts.

1. Define the research goal and the questions you want answered before recruiting anyone.
2. Recruit five to eight participants across day and night shifts, such as charge nurses and new hires.
3. Conduct each interview in a quiet room and record it with consent.

Summary: For example, "Walk me through your last handover" is a strong opening question. What surprised you most in earlier rounds?
"""

PRIORITY_MARKS = {'high': '#', 'medium': '+', 'low': '.'}


def format_ms(milliseconds: int) -> str:
    """Format milliseconds as S.ss seconds."""
    return f"{milliseconds / 1000:.2f}s"


def read_input(args) -> str:
    if args.sample:
        return SAMPLE_RESPONSE
    if args.file:
        return Path(args.file).read_text(encoding='utf-8')
    if sys.stdin.isatty():
        raise SystemExit("No input: pass --file, --sample or pipe text on stdin")
    return sys.stdin.read()


def visualize_bubbles(analysis, bubbles, width: int = 80):
    """
    Print the bubble timeline for an analysis.

    Args:
        analysis: PromptAnalysis from analyze_prompt()
        bubbles: ChatBubble list from convert_to_chat_bubbles()
        width: Output width in characters
    """
    metadata = analysis.metadata
    total_delay = sum(b.delay for b in bubbles)

    print("\n" + "=" * width)
    print("PROMPT DISSECTION")
    print(f"Length: {metadata.total_length} chars, {metadata.word_count} words "
          f"(~{metadata.estimated_reading_time} min read)")
    print(f"Complexity: {metadata.complexity.value}")
    print(f"Content types: {', '.join(t.value for t in metadata.content_type)}")
    print(f"Strategy: {analysis.strategy.value}")
    print(f"Run ID: {analysis.run_id}")
    print("=" * width + "\n")

    # === TIMELINE VISUALIZATION ===
    print("TIMELINE (bubble reveal points, mark shows priority: # high, + medium, . low)")
    print("-" * width)

    timeline_chars = width - 10
    row = ['-'] * timeline_chars
    elapsed = 0
    for bubble in bubbles:
        elapsed += bubble.delay
        pos = min(int(elapsed / total_delay * (timeline_chars - 1)), timeline_chars - 1) if total_delay else 0
        row[pos] = PRIORITY_MARKS.get(bubble.metadata.priority.value, '|')

    print("Reveal:  " + "".join(row))
    print(f"         0{' ' * (timeline_chars - 8)}{format_ms(total_delay)}")

    # === BUBBLE DETAILS ===
    print("\n" + "-" * width)
    print("BUBBLES")
    print("-" * width)

    elapsed = 0
    for i, bubble in enumerate(bubbles):
        elapsed += bubble.delay
        meta = bubble.metadata
        print(f"\nBubble {i + 1}: +{format_ms(bubble.delay)} (at {format_ms(elapsed)})")
        print(f"  Type: {meta.type.value if hasattr(meta.type, 'value') else meta.type}"
              f"  Priority: {meta.priority.value}"
              f"  Actionable: {'yes' if meta.is_actionable else 'no'}"
              f"  Segment: {meta.segment_id}")

        preview = bubble.content.replace('\n', ' ')
        if len(preview) > width - 14:
            preview = preview[:width - 17] + "..."
        print(f"  Text: \"{preview}\"")

    # === RECOMMENDATIONS ===
    print("\n" + "-" * width)
    print("RECOMMENDATIONS")
    print("-" * width)

    if analysis.recommendations:
        for recommendation in analysis.recommendations:
            print(f"  - {recommendation}")
    else:
        print("  None")

    print("\n" + "=" * width + "\n")


def main():
    parser = argparse.ArgumentParser(
        description="Dissect an AI response into chat bubbles",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--file', '-f',
        help='Read the response from a file (default: stdin)'
    )

    parser.add_argument(
        '--sample',
        action='store_true',
        help='Use a built-in sample response'
    )

    parser.add_argument(
        '--tool',
        help='Workflow tool that produced the response'
    )

    parser.add_argument(
        '--framework',
        help='Workflow framework name'
    )

    parser.add_argument(
        '--stage',
        help='Workflow stage name'
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to a configuration JSON file'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print analysis and bubbles as JSON instead of the timeline'
    )

    parser.add_argument(
        '--width', '-w',
        type=int,
        default=80,
        help='Output width in characters (default: 80)'
    )

    args = parser.parse_args()

    if args.config:
        config = load_config_file(args.config)
    else:
        config = get_config()
    apply_environment_overrides(config)

    context = {
        'framework': args.framework,
        'stage': args.stage,
        'tool': args.tool,
    }

    content = read_input(args)
    analysis = analyze_prompt(content, context, config=config)
    bubbles = convert_to_chat_bubbles(analysis, config=config)

    if args.json:
        print(json.dumps({
            'analysis': analysis.to_dict(),
            'bubbles': [b.to_dict() for b in bubbles],
        }, indent=2, ensure_ascii=False))
    else:
        visualize_bubbles(analysis, bubbles, args.width)


if __name__ == "__main__":
    main()
