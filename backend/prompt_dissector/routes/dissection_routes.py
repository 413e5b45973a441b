"""
Dissection Routes Module
========================
REST API endpoints for analyzing AI responses into chat bubbles.

Endpoints:
- POST /api/dissection/analyze     - Full analysis (metadata, segments, strategy)
- POST /api/dissection/bubbles     - Analyzed chat bubbles with metadata
- POST /api/dissection/split       - Bubble texts only (analyzer or legacy)
- GET  /api/dissection/strategies  - Available dissection strategies
"""

from flask import Blueprint, current_app, request, jsonify

from ..dissection import analyze_prompt, STRATEGY_REGISTRY
from ..formatting import create_analyzed_chat_bubbles, split_into_conversation_bubbles
from ..logging_config import get_dissection_logger

logger = get_dissection_logger("routes.dissection", log_to_file=False)

dissection_bp = Blueprint('dissection', __name__)


def _read_content(data: dict):
    """Return (content, context) or raise ValueError describing the problem."""
    content = data.get('content')
    if content is None:
        raise ValueError("No content provided")
    if not isinstance(content, str):
        raise ValueError("Content must be a string")

    context = data.get('context')
    if context is not None and not isinstance(context, dict):
        raise ValueError("Context must be an object")

    return content, context


@dissection_bp.route('/analyze', methods=['POST'])
def analyze():
    """
    Analyze an AI response.

    Request JSON:
        {
            "content": "1. Define the research goal...",   # Required
            "context": {"framework": "...", "tool": "..."} # Optional
        }

    Response JSON:
        PromptAnalysis as a dictionary (run_id, segments, metadata,
        recommendations, strategy)
    """
    try:
        content, context = _read_content(request.get_json(silent=True) or {})
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        analysis = analyze_prompt(content, context, config=current_app.app_config)
        return jsonify(analysis.to_dict()), 200

    except Exception as e:
        logger.exception(f"Analysis error: {str(e)}")
        return jsonify({'error': str(e)}), 500


@dissection_bp.route('/bubbles', methods=['POST'])
def bubbles():
    """
    Analyze an AI response into chat-ready bubbles.

    Request JSON:
        {"content": "...", "context": {...}}

    Response JSON:
        {
            "bubbles": [
                {"content": "...", "delay": 300,
                 "metadata": {"type": "...", "priority": "...",
                              "isActionable": true, "segmentId": "..."}}
            ],
            "bubble_count": 3
        }
    """
    try:
        content, context = _read_content(request.get_json(silent=True) or {})
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        result = create_analyzed_chat_bubbles(content, context, current_app.app_config)
        return jsonify({
            'bubbles': [b.to_dict() for b in result],
            'bubble_count': len(result),
        }), 200

    except Exception as e:
        logger.exception(f"Bubble generation error: {str(e)}")
        return jsonify({'error': str(e)}), 500


@dissection_bp.route('/split', methods=['POST'])
def split():
    """
    Split an AI response into bubble texts.

    Short plain replies use legacy paragraph splitting; longer or
    structured replies go through the analyzer.
    """
    try:
        content, context = _read_content(request.get_json(silent=True) or {})
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        bubble_texts = split_into_conversation_bubbles(content, context, current_app.app_config)
        return jsonify({'bubbles': bubble_texts}), 200

    except Exception as e:
        logger.exception(f"Split error: {str(e)}")
        return jsonify({'error': str(e)}), 500


@dissection_bp.route('/strategies', methods=['GET'])
def list_strategies():
    """List registered dissection strategies."""
    strategies = []
    for strategy_cls in STRATEGY_REGISTRY.values():
        strategy = strategy_cls()
        strategies.append({'name': strategy.name, 'description': strategy.description})
    return jsonify({'strategies': strategies}), 200
