from fastapi import HTTPException
from assetflow.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | list | None = None,
        headers: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.error_code = error_code
        self.details = details


class BadRequestError(AppException):
    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.VALIDATION_ERROR, details=None):
        super().__init__(400, message, error_code, details)


class AuthError(AppException):
    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.UNAUTHORIZED):
        super().__init__(401, message, error_code, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppException):
    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.PERMISSION_DENIED):
        super().__init__(403, message, error_code)


class NotFoundError(AppException):
    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.NOT_FOUND):
        super().__init__(404, message, error_code)


class ConflictError(AppException):
    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.CONFLICT):
        super().__init__(409, message, error_code)
