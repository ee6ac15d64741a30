# core/api/__init__.py
"""
Backend API client layer: one method per backend operation.
"""
from core.api.client import ApiClient, ApiError, Upload
from core.api.auth import AuthApi
from core.api.admin import AdminApi
from core.api.student import StudentApi

__all__ = ["ApiClient", "ApiError", "Upload", "AuthApi", "AdminApi", "StudentApi"]
