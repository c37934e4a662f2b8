"""Errors raised by the resource shaping engine.

Client-facing errors subclass ``ShapingError`` (a ``ValueError``) so routes
can translate them into 400 responses. ``MappingConfigurationError`` signals
a programming mistake in the mapping declarations and surfaces at startup.
"""


class ShapingError(ValueError):
    """Base class for rejected client input."""

    pass


class UnknownSortFieldError(ShapingError):
    """Raised when a sort key is not in the representation's mapping table."""

    def __init__(self, sort_key: str):
        self.sort_key = sort_key
        super().__init__(f"Key mapping for '{sort_key}' is missing")


class InvalidFieldListError(ShapingError):
    """Raised when a requested field is not declared on the representation."""

    def __init__(self, field_name: str, representation: type):
        self.field_name = field_name
        self.representation = representation
        super().__init__(f"Field '{field_name}' is not declared on {representation.__name__}")


class MalformedMediaTypeError(ShapingError):
    """Raised when an accept token cannot be parsed as a media type."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Malformed media type: '{token}'")


class NotAcceptableError(ShapingError):
    """Raised when the requested media type cannot be answered with JSON."""

    def __init__(self, media_type: str):
        self.media_type = media_type
        super().__init__(f"Media type '{media_type}' is not supported; responses are JSON")


class MappingConfigurationError(RuntimeError):
    """Raised for invalid or missing sort mapping declarations."""

    pass
