# http_method.py - HTTP verbs and how each one carries its args
from enum import Enum


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, value: str) -> "HttpMethod":
        """Look a verb up by its wire name, case-insensitive."""
        name = (value or "").strip().upper()
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown HTTP method: {value!r}") from None


class Strategy(Enum):
    BODY = "body"  # args form-encoded in the request body
    URI = "uri"    # args form-encoded in the query string


# Only these verbs write a body. DELETE goes through the query string because
# some servers reject a DELETE that carries one.
STRATEGIES = {
    HttpMethod.POST: Strategy.BODY,
    HttpMethod.PUT: Strategy.BODY,
    HttpMethod.CONNECT: Strategy.BODY,
}


def strategy_for(method: HttpMethod) -> Strategy:
    return STRATEGIES.get(method, Strategy.URI)
