import logging

from sqlalchemy.exc import SQLAlchemyError

from classes.errors import (
    ApiError,
    EntityValidationError,
    MalformedRequest,
    MethodNotAllowed,
    NotFoundError,
    SecurityViolation,
    ValidationError,
)
from classes.validators import Validator
from utils.response import ApiResponse
from utils.security_logger import log_database_error

logger = logging.getLogger("quiz_api")


class BaseController:
    """
    Common CRUD dispatch for one resource table.

    Subclasses set the table, the model used to check invariants, the
    singular/plural labels used in messages, and the field rules; they
    override the hooks that need parent lookups.
    """

    table = None
    model = None
    entity_name = None
    plural_name = None

    def __init__(self, helper, config):
        self.db = helper
        self.config = config
        self.validator = Validator(
            self.build_rules(config),
            check_security=config.get("SECURITY_PATTERN_CHECK", True),
        )

    def build_rules(self, config):
        raise NotImplementedError

    # Dispatch
    # --------------------------------------------------------------------------------
    def handle_request(self, method, resource_id=None, args=None, payload=None):
        """
        Run the handler for method/resource_id and return exactly one ApiResponse.

        payload is the decoded JSON body, or None when the body was missing
        or not valid JSON.
        """
        args = args or {}
        has_id = resource_id is not None

        try:
            if method in ("GET", "HEAD"):
                return self.get_by_id(resource_id) if has_id else self.get_all(args)
            if method == "POST" and not has_id:
                return self.create(self.require_object(payload))
            if method == "PUT" and has_id:
                return self.update(resource_id, self.require_object(payload))
            if method == "DELETE" and has_id:
                return self.delete(resource_id)
            raise MethodNotAllowed()

        except SecurityViolation as e:
            logger.warning("Blocked request on %s: %s", self.table, e.reason)
            self.db.session.rollback()
            return ApiResponse.from_error(e)
        except EntityValidationError as e:
            logger.info("Validation error on %s: %s", self.table, e)
            self.db.session.rollback()
            return ApiResponse("Validation error", str(e), 400)
        except ApiError as e:
            if isinstance(e, ValidationError):
                logger.info("Validation failed on %s: %s", self.table, e.errors)
            else:
                logger.info("%s %s: %s", method, self.table, e.message)
            self.db.session.rollback()
            return ApiResponse.from_error(e)
        except SQLAlchemyError as e:
            logger.exception("Database error on %s %s", method, self.table)
            self.db.session.rollback()
            log_database_error(e)
            return ApiResponse("Internal server error", None, 500)
        except Exception:
            logger.exception("Unexpected error on %s %s", method, self.table)
            self.db.session.rollback()
            return ApiResponse("Internal server error", None, 500)

    @staticmethod
    def require_object(payload):
        if not isinstance(payload, dict):
            raise MalformedRequest()
        return payload

    @staticmethod
    def parse_id_filter(args, *names):
        """Return the first integer query parameter among names, or None."""
        for name in names:
            raw = args.get(name)
            if raw is None or raw == "":
                continue
            try:
                return int(raw)
            except (TypeError, ValueError):
                raise ValidationError(f"Query parameter '{name}' must be an integer") from None
        return None

    def not_found(self):
        return NotFoundError(f"{self.entity_name} not found")

    # Hooks
    # --------------------------------------------------------------------------------
    def list_filters(self, args):
        return {}

    def fetch_list(self, args):
        return self.db.find_all(self.table, self.list_filters(args))

    def resolve_parent(self, values, partial=False):
        """Check parent references in values and fill derived columns."""
        return values

    def before_delete(self, resource_id):
        pass

    # Handlers
    # --------------------------------------------------------------------------------
    def get_all(self, args):
        rows = self.fetch_list(args)
        if not rows:
            return ApiResponse(f"No {self.plural_name} found", None, 404)
        return ApiResponse("Success", rows)

    def get_by_id(self, resource_id):
        row = self.db.find_by_id(self.table, resource_id)
        if not row:
            raise self.not_found()
        return ApiResponse("Success", row)

    def create(self, payload):
        values = self.validator.validate(payload)
        values = self.apply_defaults(values)
        values = self.resolve_parent(values)

        entity = self.model(**values)
        record = self.validator.sanitize(entity.to_record())
        new_id = self.db.insert(self.table, record, commit=False)
        self.db.session.commit()

        if not new_id:
            logger.error("Insert into %s did not report an id", self.table)
            return ApiResponse(f"Failed to create {self.entity_name.lower()}", None, 500)

        row = self.db.find_by_id(self.table, new_id)
        logger.info("Created %s %s", self.table, new_id)
        return ApiResponse(f"{self.entity_name} created successfully", row, 201)

    def update(self, resource_id, payload):
        if not self.db.exists(self.table, resource_id):
            raise self.not_found()

        values = self.validator.validate(payload, partial=True)
        if not values:
            return ApiResponse("No valid fields to update", None, 400)
        values = self.resolve_parent(values, partial=True)

        # Model invariants apply to the text as submitted, before escaping
        entity = self.model(**values)
        changes = self.validator.sanitize({column: getattr(entity, column) for column in values})

        updated = self.db.update(self.table, resource_id, changes, commit=False)
        self.db.session.commit()
        if not updated:
            raise self.not_found()

        row = self.db.find_by_id(self.table, resource_id)
        logger.info("Updated %s %s", self.table, resource_id)
        return ApiResponse(f"{self.entity_name} updated successfully", row)

    def delete(self, resource_id):
        self.before_delete(resource_id)

        if not self.db.delete(self.table, resource_id):
            raise self.not_found()

        logger.info("Deleted %s %s", self.table, resource_id)
        return ApiResponse(f"{self.entity_name} deleted successfully", None)

    def apply_defaults(self, values):
        for field, rule in self.validator.rules.items():
            if field not in values and rule.default is not None:
                values[field] = rule.default
        return values
