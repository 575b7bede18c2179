"""
Custom exception classes.

Represent errors raised while parsing and reading request data.
Validation failures are not exceptions; they are collected by the Validator.
"""


class FormsError(Exception):
    """Base exception class for request data handling."""

    pass


class TransportReadError(FormsError):
    """Raised when the request body cannot be read from the transport."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to read request body: {cause}")


class DecodeError(FormsError, ValueError):
    """Raised when a request body or a JSON field value is malformed."""

    pass


class FileReadError(FormsError, OSError):
    """Raised when the content of an uploaded file cannot be read."""

    def __init__(self, key: str, cause: Exception):
        self.key = key
        self.cause = cause
        super().__init__(f"Could not read file for {key}: {cause}")


class CoercionError(FormsError, ValueError):
    """
    Raised when a typed getter is used on a present value that does not parse.

    Typed getters expect the field to have been validated first
    (e.g. Validator.type_int); absent fields return a zero value instead.
    """

    def __init__(self, key: str, value: str, target: str):
        self.key = key
        self.value = value
        self.target = target
        super().__init__(f"Cannot convert {key}={value!r} to {target}")
