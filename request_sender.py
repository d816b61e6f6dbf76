# request_sender.py - send form-encoded requests to a REST API and parse JSON replies
import json
from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional
from urllib.parse import quote_plus

import requests
import urllib3

import config
from errors import EncodingError, InvalidUriError, ResponseParseError, TransportError
from http_method import HttpMethod, Strategy, strategy_for
from models import Request
from utils.payload_loader import get_logger
from utils.stream_reader import read_as_string

logger = get_logger("request-sender")

StreamReader = Callable[..., str]

# Errors the transport may raise while the body is being read
_READ_ERRORS = (requests.RequestException, urllib3.exceptions.HTTPError, OSError)


def letters_and_digits_portion(value: str) -> str:
    """
    Return value cut down to the span between its first and last letter or
    digit. Anything inside the span (slashes, dashes, dots) is kept.
    """
    begin = next((i for i, ch in enumerate(value) if ch.isalnum()), -1)
    if begin < 0:
        raise InvalidUriError(f"Invalid URI {value!r}")
    end = next(i for i in range(len(value) - 1, -1, -1) if value[i].isalnum())
    return value[begin:end + 1]


def valid_uri(value: str) -> str:
    """'/' + sanitized path, or '' for a blank path (bare base URL)."""
    value = value.strip()
    if not value:
        return value
    return "/" + letters_and_digits_portion(value)


def encode_args(args: Optional[Mapping[str, str]], encoding: str = "utf-8") -> str:
    """k1=v1&k2=v2 with form encoding, in the mapping's own order."""
    if not args:
        return ""
    pairs = []
    try:
        for key, value in args.items():
            encoded_key = quote_plus(str(key), encoding=encoding)
            encoded_value = quote_plus("" if value is None else str(value), encoding=encoding)
            pairs.append(f"{encoded_key}={encoded_value}")
    except LookupError as e:
        raise EncodingError(f"Unsupported encoding: {encoding}") from e
    return "&".join(pairs)


def build_url(base_url: str, uri: str, args: Optional[Mapping[str, str]] = None,
              encoding: str = "utf-8") -> str:
    url = base_url + valid_uri(uri)
    query = encode_args(args, encoding)
    if not query:
        return url
    return f"{url}?{query}"


def build_body(args: Optional[Mapping[str, str]], encoding: str = "utf-8") -> bytes:
    data = encode_args(args, encoding)
    try:
        return data.encode(encoding)
    except LookupError as e:
        raise EncodingError(f"Unsupported encoding: {encoding}") from e


class ReadResult(NamedTuple):
    """Outcome of reading one channel ('input' or 'error') of a response."""
    channel: str
    text: Optional[str] = None
    error: Optional[TransportError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _read_channel(channel: str, response, reader: StreamReader, encoding: str) -> ReadResult:
    stream = getattr(response, "raw", None)
    url = getattr(response, "url", None)
    status = response.status_code
    if channel == "input" and status >= 400:
        return ReadResult(channel, error=TransportError(
            f"Server returned HTTP {status} for {url}", status_code=status, url=url))
    if channel == "error" and (status < 400 or stream is None):
        return ReadResult(channel, error=TransportError(
            f"No error stream for HTTP {status} from {url}", status_code=status, url=url))
    if stream is None:
        return ReadResult(channel, error=TransportError(
            f"No response stream from {url}", status_code=status, url=url))

    # requests leaves the raw stream undecoded (gzip etc.)
    if hasattr(stream, "decode_content"):
        stream.decode_content = True
    try:
        return ReadResult(channel, text=reader(stream, encoding))
    except _READ_ERRORS as e:
        error = TransportError(f"Reading {channel} stream failed: {e}", status_code=status, url=url)
        error.__cause__ = e
        return ReadResult(channel, error=error)


def parse_json(text: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise ResponseParseError(f"Response is not valid JSON: {e}", text=text) from e
    if not isinstance(parsed, dict):
        raise ResponseParseError(
            f"Response JSON is a {type(parsed).__name__}, expected an object", text=text)
    return parsed


def read_response(response, reader: StreamReader = read_as_string,
                  encoding: str = "utf-8") -> Dict[str, Any]:
    """
    Read the success stream of response, falling back to the error stream when
    the server answered with a failure status, and parse what was read.

    Raises TransportError when neither stream can be read and
    ResponseParseError when the text is not a JSON object.
    """
    result = _read_channel("input", response, reader, encoding)
    if not result.ok:
        logger.debug("Input stream unavailable (%s); reading error stream", result.error)
        fallback = _read_channel("error", response, reader, encoding)
        if not fallback.ok:
            raise fallback.error from result.error
        result = fallback
    return parse_json(result.text)


class RequestSender:
    """
    Sends Requests against one API base URL.

    POST, PUT and CONNECT carry their args as a form-encoded body; every other
    verb carries them in the query string. Each call opens its own connection.
    """

    def __init__(self, base_url: str, encoding: str = None, timeout: Optional[float] = None,
                 reader: StreamReader = read_as_string):
        self._base_url = letters_and_digits_portion(base_url.strip())
        self.encoding = encoding or config.REQUEST_ENCODING
        self.timeout = timeout if timeout is not None else config.TIMEOUT
        self.reader = reader

    @property
    def base_url(self) -> str:
        return self._base_url

    def send_request(self, request: Request) -> Dict[str, Any]:
        """Send request and return the parsed JSON object of the reply."""
        strategy = strategy_for(request.method)
        if strategy is Strategy.BODY:
            return self._send_body_request(request.uri, request.method, request.args)
        return self._send_uri_request(request.uri, request.method, request.args)

    def _send_uri_request(self, uri: str, method: HttpMethod,
                          args: Optional[Mapping[str, str]]) -> Dict[str, Any]:
        url = build_url(self._base_url, uri, args, self.encoding)
        headers = {"accept": "application/json"}
        return self._dispatch(method, url, headers, None)

    def _send_body_request(self, uri: str, method: HttpMethod,
                           args: Optional[Mapping[str, str]]) -> Dict[str, Any]:
        url = self._base_url + valid_uri(uri)
        body = build_body(args, self.encoding)
        headers = {
            "accept": "application/json",
            "Content-Type": f"application/x-www-form-urlencoded; charset={self.encoding}",
        }
        return self._dispatch(method, url, headers, body)

    def _dispatch(self, method: HttpMethod, url: str, headers: Dict[str, str],
                  body: Optional[bytes]) -> Dict[str, Any]:
        logger.debug("%s %s (%s)", method.value, url,
                     "body" if body is not None else "query")
        try:
            resp = requests.request(
                method.value,
                url,
                headers=headers,
                data=body,
                timeout=self.timeout,
                allow_redirects=False,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method.value} {url} failed: {e}", url=url) from e

        try:
            return read_response(resp, self.reader, self.encoding)
        finally:
            resp.close()
