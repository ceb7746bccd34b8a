# coding: utf8
import traceback

from werkzeug.exceptions import HTTPException

from cafe.errors.exceptions import ApiError
from cafe.lib.logger import logger
from cafe.lib.response import Response


def api_error_handler(error):
    if isinstance(error, ApiError):
        if error.status_code >= 500:
            logger.error(f"{error.__class__.__name__}: {error.message}")
        body, status = Response(
            code=error.status_code, message=error.message, status=error.status_code
        ).to_error()
        body.update(error.details)
        return body, status

    if isinstance(error, HTTPException):
        return Response(
            code=error.code, message=error.description, status=error.code
        ).to_error()

    logger.error(f"Unhandled error: {error}\n{traceback.format_exc()}")
    return Response(code=500, message="Server Error", status=500).to_error()
