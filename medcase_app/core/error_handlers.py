"""
JSON errors for the case API.

Service code raises a MedCaseError subclass; the handlers registered here
turn it, and any HTTP error on an API path, into the
``{"success": false, "message", "code"}`` envelope.
"""

from typing import Any, Dict, Optional

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

API_PREFIX = '/cases/api/'


class MedCaseError(Exception):
    """Base class; subclasses set ``code`` and ``status_code``."""

    code = 'INTERNAL_ERROR'
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        body = {'success': False, 'message': self.message, 'code': self.code}
        if self.details:
            body['details'] = self.details
        return body


class NotFoundError(MedCaseError):
    code = 'NOT_FOUND'
    status_code = 404

    def __init__(self, message: str = 'Resource not found', resource: Optional[str] = None):
        super().__init__(message, {'resource': resource} if resource else None)


class ValidationError(MedCaseError):
    code = 'VALIDATION_ERROR'
    status_code = 400

    def __init__(self, message: str = 'Invalid request', errors: Optional[Dict[str, Any]] = None):
        super().__init__(message, {'errors': errors} if errors else None)


class SessionStateError(MedCaseError):
    """The viewing session does not allow this action (e.g. answering twice)."""

    code = 'SESSION_STATE'
    status_code = 409


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return body


def error_response(message: str, code: str = 'ERROR', status_code: int = 400,
                   details: Optional[Dict[str, Any]] = None):
    body = {'success': False, 'message': message, 'code': code}
    if details:
        body['details'] = details
    return jsonify(body), status_code


def _is_api_request() -> bool:
    return request.path.startswith(API_PREFIX)


def register_error_handlers(app) -> None:

    @app.errorhandler(MedCaseError)
    def handle_case_error(error: MedCaseError):
        log = app.logger.error if error.status_code >= 500 else app.logger.warning
        log("%s %s -> %s: %s", request.method, request.path, error.code, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        if not _is_api_request():
            return error
        if error.code and error.code >= 500:
            app.logger.error("Unhandled error on %s", request.path,
                             exc_info=getattr(error, 'original_exception', None))
        code = (error.name or 'error').upper().replace(' ', '_')
        return error_response(error.description or error.name, code, error.code or 500)
