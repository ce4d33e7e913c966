"""
backend.api.security.exceptions

Purpose:
    Exceptions raised by the authentication/authorization layer.
    They are deliberately not ServiceErrors; the error translator adapts them.

Author:
    Kanir Pandya

Created:
    2026-10-17
"""

from __future__ import annotations


class SecurityException(Exception):
    pass


class AccessDeniedException(SecurityException):
    pass


class InvalidTokenException(SecurityException):
    pass


class InvalidGrantException(SecurityException):
    pass
