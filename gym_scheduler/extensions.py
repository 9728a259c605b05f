# extensions.py
"""
Flask extensions initialization.
This file initializes all Flask extensions to avoid circular imports.
Extensions are initialized here and then bound to the app in the application factory.
"""

import time
import logging
import threading

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from sqlalchemy import text

# Initialize extensions without app binding
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()

# Connection monitoring
connection_stats = {
    'total_checks': 0,
    'failed_checks': 0,
    'last_check': 0,
    'healthy': True
}
connection_lock = threading.Lock()

logger = logging.getLogger(__name__)


def get_connection_stats():
    """
    Get current database connection statistics.

    Returns:
        dict: Connection statistics
    """
    with connection_lock:
        return connection_stats.copy()


def check_database_health():
    """
    Check if the database connection is healthy.
    This function requires an active Flask application context.

    Returns:
        tuple: (bool, str) indicating health status and message
    """
    try:
        if not current_app:
            return False, "No application context available"

        connection = db.engine.connect()
        try:
            result = connection.execute(text("SELECT 1"))
            result.fetchone()
        finally:
            connection.close()

        with connection_lock:
            connection_stats['total_checks'] += 1
            connection_stats['healthy'] = True
            connection_stats['last_check'] = time.time()

        return True, "Database connection is healthy"

    except Exception as e:
        logger.error(f"Database health check failed: {e}")

        with connection_lock:
            connection_stats['total_checks'] += 1
            connection_stats['failed_checks'] += 1
            connection_stats['healthy'] = False
            connection_stats['last_check'] = time.time()

        return False, f"Database connection failed: {str(e)}"


def init_extensions(app):
    """
    Initialize all extensions with proper order and configuration.

    Args:
        app: Flask application instance
    """
    # Step 1: Initialize database first (required by other extensions)
    db.init_app(app)
    migrate.init_app(app, db)

    # Step 2: Initialize Flask-Login (requires SECRET_KEY from config)
    login_manager.init_app(app)
    login_manager.session_protection = 'basic'

    # Step 3: Define user_loader callback (requires db and User model)
    @login_manager.user_loader
    def load_user(user_id):
        # Import here to avoid circular imports
        from gym_scheduler.models import User

        user = db.session.get(User, user_id)
        if user is None or not user.is_active:
            return None
        return user

    # JSON API: answer 401 instead of redirecting to a login page
    @login_manager.unauthorized_handler
    def unauthorized():
        from flask import jsonify
        return jsonify({
            'success': False,
            'message': 'Authentication required',
            'error_code': 'authentication_required'
        }), 401

    app.logger.info("Extensions initialized successfully in correct order")
