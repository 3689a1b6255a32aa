import logging
import os
from dotenv import load_dotenv
load_dotenv()
import click
from flask import Flask
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from config import config_dict
from models import db
from routes.quizzes import quizzes_bp
from routes.quiz_questions import questions_bp
from routes.answers import answers_bp
from routes.quiz_complete import quiz_complete_bp
from routes.health import health_bp
from utils.logging_config import setup_logging
from utils.response import ApiResponse
from utils.security import init_security
from utils.security_report import generate_security_report

migrate = Migrate()

HTTP_ERROR_MESSAGES = {
    400: "Bad request",
    404: "Resource not found",
    405: "Method not allowed",
    413: "Request entity too large",
}


def register_error_handlers(app):
    logger = logging.getLogger("quiz_api")

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        message = HTTP_ERROR_MESSAGES.get(error.code, error.name)
        response = ApiResponse(message, None, error.code).to_response()
        if error.code == 405 and getattr(error, "valid_methods", None):
            response.headers["Allow"] = ", ".join(error.valid_methods)
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error: %s", error)
        db.session.rollback()
        return ApiResponse("Internal server error", None, 500).to_response()


def register_commands(app):
    @app.cli.command("security-report")
    @click.option("--days", default=7, show_default=True, help="How many days of events to include.")
    def security_report(days):
        """Summarise the security log."""
        report = generate_security_report(app.config.get("SECURITY_LOG_FILE"), days=days)
        click.echo(report.to_json())

    @app.cli.command("create-tables")
    def create_tables():
        """Create the quiz tables without running migrations."""
        db.create_all()
        click.echo("Tables created.")


def create_app(config_name=None):
    env = config_name or os.environ.get("FLASK_ENV", "production")

    app = Flask(__name__)
    app.config.from_object(config_dict.get(env, config_dict["production"]))

    logger = setup_logging(app)
    logger.info("Starting %s", app.config.get("API_NAME"), extra={"environment": env})

    db.init_app(app)
    migrate.init_app(app, db)
    init_security(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(quizzes_bp)
    app.register_blueprint(questions_bp)
    app.register_blueprint(answers_bp)
    app.register_blueprint(quiz_complete_bp)

    register_error_handlers(app)
    register_commands(app)

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'])
