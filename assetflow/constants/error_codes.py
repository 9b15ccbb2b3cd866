# assetflow/constants/error_codes.py
from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- AUTH ----------------
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_EXISTS = "USER_EXISTS"

    # ---------------- ASSETS ----------------
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    ASSET_INVALID_DEPARTMENT = "ASSET_INVALID_DEPARTMENT"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_INVALID = "FILE_INVALID"

    # ---------------- DEPARTMENTS ----------------
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    DEPARTMENT_EXISTS = "DEPARTMENT_EXISTS"
    DEPARTMENT_IN_USE = "DEPARTMENT_IN_USE"

    # ---------------- VENDORS ----------------
    VENDOR_NOT_FOUND = "VENDOR_NOT_FOUND"
    VENDOR_EXISTS = "VENDOR_EXISTS"

    # ---------------- REPORTS ----------------
    REPORT_INVALID_FORMAT = "REPORT_INVALID_FORMAT"
