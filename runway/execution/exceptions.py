# ============================================
# execution/exceptions.py
# ============================================
from rest_framework import status
from rest_framework.exceptions import APIException


class AuthorizationError(APIException):
    """Caller is not a workspace member, or lacks the required role."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'authorization_error'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class ValidationError(APIException):
    """Bad input or an illegal state transition."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'validation_error'


class PersistenceError(APIException):
    """The database call behind an operation failed; nothing was applied."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'The operation could not be saved. Try again.'
    default_code = 'persistence_error'
