class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AuthError(CustomBaseError):
    def __init__(self, message: str = 'Invalid credentials') -> None:
        super().__init__(message, 401)


class AuthzError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class StorageError(CustomBaseError):
    """Persistence failure; clients only ever see the generic message"""

    def __init__(self, message: str = 'Storage operation failed') -> None:
        super().__init__(message, 500)
