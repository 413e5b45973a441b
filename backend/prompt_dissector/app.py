"""
Prompt Dissector - Chat Bubble Service
======================================
Main application entry point that configures Flask and registers blueprints.

This module:
- Creates the Flask application factory
- Registers all API blueprints
- Defines core routes (/health)
- Installs JSON error handlers

Route Organization:
- /health              -> Health check
- /api/dissection/*    -> Analysis, bubbles, strategies
- /api/formatting/*    -> Markdown cleanup and template variables
"""

from flask import Flask, jsonify
from dotenv import load_dotenv
from flask_cors import CORS

# Import blueprints
from prompt_dissector import __version__
from prompt_dissector.routes.dissection_routes import dissection_bp
from prompt_dissector.routes.formatting_routes import formatting_bp

# Import configuration system
from prompt_dissector.config import get_config, apply_environment_overrides

# Import logging system
from prompt_dissector.logging_config import get_dissection_logger

# Load environment variables
load_dotenv()

# Initialize configuration with environment overrides
config = get_config()
apply_environment_overrides(config)

# Configure logging
logger = get_dissection_logger("app", log_to_file=False)


def create_app(config_override=None):
    """
    Application factory function.

    Creates and configures the Flask application with:
    - CORS support
    - Blueprint registration
    - JSON error responses

    Args:
        config_override: Optional AppConfig instance to use instead of global config

    Returns:
        Configured Flask application instance
    """
    # Use provided config or get global config
    app_config = config_override or get_config()

    app = Flask(__name__)
    CORS(app, origins=app_config.flask.cors_origins)

    # Store config in app for access in routes
    app.app_config = app_config
    app.config['SECRET_KEY'] = app_config.flask.secret_key

    # ==========================================================================
    # REGISTER BLUEPRINTS
    # ==========================================================================

    app.register_blueprint(dissection_bp, url_prefix='/api/dissection')
    app.register_blueprint(formatting_bp, url_prefix='/api/formatting')

    logger.info(
        "Initialized Flask app",
        extra={
            'run_name': app_config.logging.run_name,
            'max_bubble_length': app_config.dissection.max_bubble_length,
        }
    )

    # ==========================================================================
    # CORE ROUTES
    # ==========================================================================

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint for monitoring."""
        return {
            'status': 'healthy',
            'run_name': app_config.logging.run_name,
            'version': __version__
        }, 200

    @app.route('/favicon.ico')
    def favicon():
        """Return empty favicon to prevent 404 errors."""
        return '', 204

    # ==========================================================================
    # ERROR HANDLERS
    # ==========================================================================

    @app.errorhandler(400)
    def bad_request(error):
        """Handle malformed requests."""
        return jsonify({'error': 'Bad request'}), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle wrong HTTP methods."""
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {error}")
        return jsonify({'error': 'Internal server error'}), 500

    return app


if __name__ == '__main__':
    app = create_app()
    flask_config = get_config().flask
    app.run(
        debug=flask_config.debug,
        host=flask_config.host,
        port=flask_config.port
    )
