"""
Centralized error handling and user-friendly error messages.
"""
import logging
from fastapi import HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, DisconnectionError

logger = logging.getLogger(__name__)


ERROR_MESSAGES = {
    # Authentication
    "credentials_required": "Email and password are required",
    "missing_fields": "Please add all required fields",
    "invalid_credentials": "Invalid credentials",
    "email_exists": "User already exists",
    "token_required": "Authorization token required",
    "not_authorized": "Request is not authorized",
    "signup_failed": "Failed to signup user",
    "login_failed": "Failed to login user",

    # Jobs
    "job_not_found": "Job not found",
    "job_required_fields": "Title and company.name are required",
    "invalid_job_data": "Invalid job data",
    "job_forbidden": "You can only modify your own jobs",
    "jobs_fetch_failed": "Failed to retrieve jobs",
    "job_fetch_failed": "Failed to retrieve job",
    "job_create_failed": "Failed to create job",
    "job_update_failed": "Failed to update job",
    "job_delete_failed": "Failed to delete job",

    # General
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Please check your input and try again.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def is_disconnect(error: Exception) -> bool:
    """True only when the database itself is unreachable, not when a query fails."""
    if isinstance(error, DisconnectionError):
        return True
    return isinstance(error, DBAPIError) and bool(error.connection_invalidated)


def handle_database_error(error: Exception, operation: str = "", fallback_key: str = "server_error") -> HTTPException:
    """Log a database failure and turn it into a generic HTTP error."""
    logger.error(f"Database error during {operation}: {error}")

    if is_disconnect(error):
        return HTTPException(
            status_code=503,
            detail=get_error_message("database_error")
        )

    return HTTPException(
        status_code=500,
        detail=get_error_message(fallback_key)
    )


def create_error_response(
    status_code: int,
    message: str,
    details: dict | list | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
        "status_code": status_code,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )
