# errors.py - exceptions raised by the request sender


class RequestSenderError(Exception):
    """Base class for everything the sender raises."""


class InvalidUriError(RequestSenderError, ValueError):
    """Base URL or path has no letters or digits in it."""


class EncodingError(RequestSenderError, LookupError):
    """The configured text encoding is not known to the runtime."""


class TransportError(RequestSenderError, IOError):
    def __init__(self, message, status_code=None, url=None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ResponseParseError(RequestSenderError, ValueError):
    def __init__(self, message, text=None):
        super().__init__(message)
        self.text = text
