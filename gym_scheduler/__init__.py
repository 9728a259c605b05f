# __init__.py
"""
Application factory for the gym class scheduler.
This module creates and configures the Flask application using the application factory pattern.
"""

import os
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from gym_scheduler.config import config_by_name, ProductionConfig
from gym_scheduler.extensions import init_extensions, db


def setup_logging(app):
    """
    Configure structured logging for the application.

    Args:
        app: Flask application instance
    """
    log_format = logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s'
    )
    level = logging.DEBUG if app.debug else logging.INFO

    handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_format)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    # File handler with rotation
    if app.config.get('LOG_TO_FILE', True):
        log_dir = app.config.get('LOG_DIR') or os.path.join(app.root_path, 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'gym_scheduler.log'),
            maxBytes=1024 * 1024 * 10,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(log_format)
        file_handler.setLevel(logging.INFO)
        handlers.append(file_handler)

    # Handlers live on the root logger; service loggers and app.logger propagate to it
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not app.testing and not root_logger.handlers:
        for handler in handlers:
            root_logger.addHandler(handler)

    app.logger.setLevel(level)

    # Forcefully suppress SQLAlchemy logs
    sa_logger = logging.getLogger('sqlalchemy.engine')
    sa_logger.setLevel(logging.WARNING)
    sa_logger.propagate = False


def register_blueprints(app):
    """
    Register all application blueprints.

    Args:
        app: Flask application instance
    """
    try:
        # Import blueprints here to avoid circular imports
        from .controllers.auth import auth_bp
        from .controllers.classes import classes_bp
        from .controllers.attendance import attendance_bp

        app.register_blueprint(auth_bp, url_prefix='/auth')
        app.register_blueprint(classes_bp, url_prefix='/api/classes')
        app.register_blueprint(attendance_bp, url_prefix='/api/attendance')

        app.logger.info("All blueprints registered successfully")

    except ImportError as e:
        app.logger.error(f"Failed to import blueprint: {str(e)}")
        raise


def register_error_handlers(app):
    """
    Register global error handlers.

    Args:
        app: Flask application instance
    """
    from gym_scheduler.services.errors import SchedulingError

    @app.errorhandler(SchedulingError)
    def handle_scheduling_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({
            'success': False,
            'message': e.description,
            'error_code': e.name.lower().replace(' ', '_')
        }), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        app.logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
        db.session.rollback()
        return jsonify({
            'success': False,
            'message': str(e) if app.debug else 'Internal server error',
            'error_code': 'internal_error'
        }), 500


def register_shell_context(app):
    """
    Register shell context for flask shell command.

    Args:
        app: Flask application instance
    """

    @app.shell_context_processor
    def make_shell_context():
        from gym_scheduler.models import (
            Gym, User, FitnessClass, Staff, Member, ClassSession, SessionEnrollment, Attendance
        )
        from gym_scheduler.services import (
            CatalogService, SessionSchedulerService, EnrollmentService, AttendanceService
        )
        return {
            'db': db,
            'Gym': Gym,
            'User': User,
            'FitnessClass': FitnessClass,
            'Staff': Staff,
            'Member': Member,
            'ClassSession': ClassSession,
            'SessionEnrollment': SessionEnrollment,
            'Attendance': Attendance,
            'CatalogService': CatalogService,
            'SessionSchedulerService': SessionSchedulerService,
            'EnrollmentService': EnrollmentService,
            'AttendanceService': AttendanceService
        }


def register_health_checks(app):
    """
    Register health check endpoints.

    Args:
        app: Flask application instance
    """

    @app.route('/health')
    def health_check():
        """Basic health check endpoint."""
        return jsonify({
            'status': 'ok',
            'timestamp': datetime.now().isoformat(),
            'version': app.config.get('VERSION', '1.0.0')
        })

    @app.route('/health/database')
    def database_health_check():
        """Database health check endpoint."""
        from gym_scheduler.extensions import check_database_health, get_connection_stats

        healthy, message = check_database_health()
        stats = get_connection_stats()

        return jsonify({
            'status': 'healthy' if healthy else 'unhealthy',
            'message': message,
            'stats': stats,
            'timestamp': datetime.now().isoformat()
        }), 200 if healthy else 503


def create_app(config_name=None):
    """
    Application factory function.

    Args:
        config_name (str): Configuration name ('development', 'production', 'testing')

    Returns:
        Flask: Configured Flask application instance
    """
    # Load environment variables
    load_dotenv()

    app = Flask(__name__)

    config_name = config_name or os.environ.get('FLASK_ENV', 'development')
    config_class = config_by_name[config_name]
    if config_class is ProductionConfig:
        ProductionConfig.validate()
    app.config.from_object(config_class)

    # Setup logging first
    setup_logging(app)
    app.logger.info(f"Starting application with config: {config_name}")

    init_extensions(app)

    register_blueprints(app)
    register_error_handlers(app)
    register_shell_context(app)
    register_health_checks(app)

    # Register CLI commands
    from .cli import register_cli_commands
    register_cli_commands(app)

    app.logger.info("Application factory completed successfully")

    return app
