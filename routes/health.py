import logging
from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError
from utils.response import ApiResponse
from utils.security_logger import log_database_error
from utils.utils import get_database_helper

health_bp = Blueprint("health", __name__)
logger = logging.getLogger("quiz_api")


@health_bp.route("/")
def home():
    return ApiResponse("Welcome to the Quiz API", {
        "name": current_app.config.get("API_NAME"),
        "version": current_app.config.get("API_VERSION"),
    }).to_response()


@health_bp.route("/db_health", methods=["GET"])
def db_health():
    helper = get_database_helper()
    try:
        helper.ping()
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        log_database_error(e)
        helper.session.rollback()
        return ApiResponse("Database connection failed", {"status": "disconnected"}).to_response()

    return ApiResponse("Database connected successfully", {"status": "connected"}).to_response()
