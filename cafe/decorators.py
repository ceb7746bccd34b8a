# coding: utf8
from functools import wraps

from flask import request
from flask_jwt_extended import verify_jwt_in_request
from jsonschema import FormatChecker, validate
from jsonschema.exceptions import ValidationError as SchemaValidationError

from cafe.errors.exceptions import AuthError, AuthorizationError, ValidationError
from cafe.services.auth import AuthService


def _verify_token():
    try:
        verify_jwt_in_request()
    except Exception as e:
        raise AuthError(message=str(e) or "Invalid token")


def jwt_any(fn):
    """Any valid token, customer or admin."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        _verify_token()
        return fn(*args, **kwargs)

    return wrapper


def user_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        _verify_token()
        if AuthService.is_admin():
            raise AuthorizationError(message="Customer account required")
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        _verify_token()
        if not AuthService.is_admin():
            raise AuthorizationError(message="Access denied. Admin only.")
        return fn(*args, **kwargs)

    return wrapper


def parameters(**schema):
    def decorated(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            req_args = request.args.to_dict()
            if request.method in ("POST", "PUT", "PATCH", "DELETE") and request.is_json:
                req_args.update(request.get_json(silent=True) or {})

            req_args = {
                k: v for k, v in req_args.items() if k in schema["properties"].keys()
            }

            for field in schema.get("required", []):
                if field not in req_args or req_args[field] in (None, ""):
                    raise ValidationError(message=f"{field} is required")

            try:
                validate(
                    instance=req_args, schema=schema, format_checker=FormatChecker()
                )
            except SchemaValidationError as exp:
                path = list(exp.absolute_path)
                field = path[0] if path else None
                valid_values = schema["properties"].get(field, {}).get("enum", [])
                message = f"Field '{field}' is not valid." if field else exp.message
                if valid_values:
                    message += f" Valid values: {', '.join(valid_values)}."
                raise ValidationError(message=message)

            new_args = args + (req_args,)
            return func(*new_args, **kwargs)

        return wrapper

    return decorated
