from typing import List, Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class ValidationError(ServiceError):
    """Caller input failed validation; ``details`` lists every violation."""

    def __init__(self, message: str, details: Optional[List[str]] = None) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class AuthenticationError(ServiceError):
    def __init__(self, message: str = "Invalid access code") -> None:
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class AuthorizationError(ServiceError):
    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class InternalError(ServiceError):
    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
