"""HTTP blueprints for the dissection service."""

from .dissection_routes import dissection_bp
from .formatting_routes import formatting_bp

__all__ = ['dissection_bp', 'formatting_bp']
