"""
Formatting Routes Module
========================
Endpoints for chat text cleanup and prompt template variables.

Endpoints:
- POST /api/formatting/strip              - Remove all markdown
- POST /api/formatting/chat-display       - Remove markdown, keep structure
- POST /api/formatting/variables/render   - Substitute template variables
- POST /api/formatting/variables/extract  - List template variables
"""

from flask import Blueprint, request, jsonify
import logging

from ..formatting import (
    strip_markdown_formatting,
    format_for_chat_display,
    replace_prompt_variables,
    extract_prompt_variables,
)

logger = logging.getLogger(__name__)

formatting_bp = Blueprint('formatting', __name__)


def _require_string(data: dict, key: str):
    value = data.get(key)
    if not isinstance(value, str):
        return None, (jsonify({'error': f"'{key}' must be a string"}), 400)
    return value, None


@formatting_bp.route('/strip', methods=['POST'])
def strip():
    """Strip markdown: {"text": "..."} -> {"text": "..."}"""
    text, error = _require_string(request.get_json(silent=True) or {}, 'text')
    if error:
        return error
    return jsonify({'text': strip_markdown_formatting(text)}), 200


@formatting_bp.route('/chat-display', methods=['POST'])
def chat_display():
    """Format for chat display: {"text": "..."} -> {"text": "..."}"""
    text, error = _require_string(request.get_json(silent=True) or {}, 'text')
    if error:
        return error
    return jsonify({'text': format_for_chat_display(text)}), 200


@formatting_bp.route('/variables/render', methods=['POST'])
def render_variables():
    """
    Substitute template variables.

    Request JSON:
        {"content": "Interview {{persona}} about [topic]",
         "variables": {"persona": "nurses", "topic": "handovers"}}
    """
    data = request.get_json(silent=True) or {}
    content, error = _require_string(data, 'content')
    if error:
        return error

    variables = data.get('variables') or {}
    if not isinstance(variables, dict):
        return jsonify({'error': "'variables' must be an object"}), 400

    rendered = replace_prompt_variables(content, variables)
    return jsonify({
        'content': rendered,
        'unresolved': extract_prompt_variables(rendered),
    }), 200


@formatting_bp.route('/variables/extract', methods=['POST'])
def extract_variables():
    """List variables: {"content": "..."} -> {"variables": [...]}"""
    content, error = _require_string(request.get_json(silent=True) or {}, 'content')
    if error:
        return error
    return jsonify({'variables': extract_prompt_variables(content)}), 200
