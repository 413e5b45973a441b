"""
Prompt Dissector
================
Heuristic dissection of AI responses into typed segments and paced chat bubbles.
"""

__version__ = "1.0.0"
