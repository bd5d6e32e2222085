"""
Error kinds raised by the template store and the request resolver.

Every error carries the text that the tool layer hands back to the caller,
so str(exc) is always a complete, human-readable message.
"""


class RequestProxyError(Exception):
    """Base class for all template/registry/request failures."""


class ValidationError(RequestProxyError):
    """Template is missing required fields."""


class DuplicateIdError(RequestProxyError):
    def __init__(self, template_id):
        self.template_id = template_id
        super().__init__(f"API ID {template_id} already exists")


class NotFoundError(RequestProxyError):
    def __init__(self, template_id, message=None):
        self.template_id = template_id
        super().__init__(message or f"API {template_id} not found")


class ArgumentFormatError(RequestProxyError):
    """Caller arguments are not a JSON object."""


class MissingParameterError(RequestProxyError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Missing required URL parameter: {name}")


class TransportError(RequestProxyError):
    """The HTTP call failed or returned a non-2xx status."""
