"""
Custom exceptions for the authentication services
"""


class AuthError(Exception):
    """Base exception for authentication and session errors"""

    default_message = "Authentication error."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class MissingCredentialsError(AuthError):
    """Raised when a required field is missing or empty"""
    default_message = "Email and password are required."


class EmailAlreadyRegisteredError(AuthError):
    """Raised when the normalized email already has a user record"""
    default_message = "Email already registered."


class InvalidCredentialsError(AuthError):
    """Raised for an unknown email or a wrong password (same message for both)"""
    default_message = "Invalid email or password."


class InvalidTokenError(AuthError):
    """Raised when a token is malformed, tampered with or expired"""
    default_message = "Invalid or expired token."


class StorageError(AuthError):
    """Raised when the credential store cannot be read or written"""
    default_message = "Internal server error."


class NotLoggedInError(AuthError):
    """Raised when no current user is recorded in local storage"""
    default_message = "Not logged in."
