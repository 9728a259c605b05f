# app.py
"""
Main application entry point.
This module creates the Flask application instance and handles application startup.
"""

import os
import logging
from logging.handlers import SysLogHandler

from gym_scheduler import create_app


def create_application():
    """
    Create and configure the Flask application.

    Returns:
        Flask: Configured application instance
    """
    config_name = os.environ.get('FLASK_ENV', 'development')

    app = create_app(config_name)

    if config_name == 'production':
        setup_production_features(app)

    return app


def setup_production_features(app):
    """
    Setup production-specific features.

    Args:
        app: Flask application instance
    """
    syslog_server = os.environ.get('SYSLOG_SERVER')
    if syslog_server:
        syslog_handler = SysLogHandler(address=syslog_server)
        syslog_handler.setLevel(logging.ERROR)
        app.logger.addHandler(syslog_handler)

    os.makedirs(app.config['LOG_DIR'], exist_ok=True)

    app.logger.info("Production features configured")


# Create the application instance
app = create_application()


# Development server configuration
if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_ENV') == 'development'

    app.logger.info(f"Starting development server on port {port}, debug={debug}")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug,
        threaded=True
    )
