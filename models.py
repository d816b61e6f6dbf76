# models.py - request value consumed by the sender
from typing import Mapping, NamedTuple, Optional

from http_method import HttpMethod


class Request(NamedTuple):
    method: HttpMethod
    uri: str
    args: Optional[Mapping[str, str]] = None
