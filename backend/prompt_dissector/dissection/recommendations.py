"""
Advisory notes about the shape of an analyzed response.

Purely informational: nothing downstream depends on these strings.
"""

from typing import List, Sequence

from ..models import AnalyzedSegment, TextMetadata, Complexity, SegmentType

MAX_COMFORTABLE_SEGMENTS = 6

CONSOLIDATE_SEGMENTS = "Consider consolidating some segments for better flow"
ADD_ACTIONABLE = "Add more actionable instructions for better user engagement"
ADD_EXAMPLES = "Add examples to help clarify complex concepts"
ADD_QUESTIONS = "Consider adding questions to encourage user interaction"


def generate_recommendations(
    segments: Sequence[AnalyzedSegment],
    metadata: TextMetadata
) -> List[str]:
    recommendations = []

    if len(segments) > MAX_COMFORTABLE_SEGMENTS:
        recommendations.append(CONSOLIDATE_SEGMENTS)

    if not any(s.is_actionable for s in segments):
        recommendations.append(ADD_ACTIONABLE)

    if metadata.complexity == Complexity.COMPLEX and not metadata.has_examples:
        recommendations.append(ADD_EXAMPLES)

    if not any(s.type == SegmentType.QUESTION for s in segments):
        recommendations.append(ADD_QUESTIONS)

    return recommendations
