"""
Prompt template variables: `{{name}}` and `[name]` placeholders.
"""

import re
from typing import Dict, List, Any

DOUBLE_BRACE_VARIABLE = re.compile(r'\{\{([^}]+)\}\}')

# Lowercase-leading identifiers only, so "[Write your notes here]" stays put
BRACKET_VARIABLE = re.compile(r'\[([a-z_][a-z0-9_]*)\]', re.IGNORECASE)


def replace_prompt_variables(content: str, variables: Dict[str, Any]) -> str:
    """Substitute every `{{key}}` and `[key]` occurrence with its value."""
    result = content
    for key, value in variables.items():
        escaped = re.escape(key)
        replacement = str(value)
        result = re.sub(r'\{\{' + escaped + r'\}\}', lambda _: replacement, result)
        result = re.sub(r'\[' + escaped + r'\]', lambda _: replacement, result)
    return result


def extract_prompt_variables(content: str) -> List[str]:
    """Sorted, de-duplicated variable names referenced by a template."""
    variables = set(DOUBLE_BRACE_VARIABLE.findall(content))
    for name in BRACKET_VARIABLE.findall(content):
        if not name[0].isupper():
            variables.add(name)
    return sorted(variables)
