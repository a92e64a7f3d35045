import json
from functools import wraps
from flask import request
from pydantic import ValidationError
from .responses import validation_error_response


def _errors(ve: ValidationError):
    # ve.json() knows how to serialize ctx values that jsonify does not
    return json.loads(ve.json())


def validate_schema(schema):
    """Decorator to validate request JSON against a Pydantic schema."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                payload = {}
            try:
                obj = schema(**payload)
            except ValidationError as ve:
                return validation_error_response(_errors(ve))
            request.validated_data = obj
            return fn(*args, **kwargs)
        return wrapper

    return decorator


def validate_query(schema):
    """Same as validate_schema, but for query-string parameters."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            params = {k: v for k, v in request.args.items() if v != ""}
            try:
                obj = schema(**params)
            except ValidationError as ve:
                return validation_error_response(_errors(ve))
            request.validated_query = obj
            return fn(*args, **kwargs)
        return wrapper

    return decorator
