from flask import current_app, request
from models import db
from classes.database_helper import DatabaseHelper


def get_database_helper():
    """DatabaseHelper bound to the request's scoped session."""
    return DatabaseHelper(db.session, db.metadata)


def read_json_payload():
    """Decoded JSON body, or None when the body is missing or malformed."""
    if request.method not in ("POST", "PUT"):
        return None
    return request.get_json(silent=True, force=True)


def dispatch(controller_class, resource_id=None):
    controller = controller_class(get_database_helper(), current_app.config)
    result = controller.handle_request(
        request.method,
        resource_id=resource_id,
        args=request.args,
        payload=read_json_payload(),
    )
    return result.to_response()
