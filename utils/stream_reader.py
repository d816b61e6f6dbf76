# utils/stream_reader.py - slurp a byte stream into a string
import codecs

from errors import EncodingError


def read_as_string(stream, encoding: str = "utf-8") -> str:
    """
    Read everything left in a file-like byte stream and decode it.

    Works for urllib3 raw responses as well as io.BytesIO, which keeps the
    response reader testable without a server.
    """
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise EncodingError(f"Unsupported encoding: {encoding}") from e

    chunks = []
    while True:
        chunk = stream.read(8192)
        if not chunk:
            break
        chunks.append(chunk)
    data = b"".join(chunks)
    return data.decode(encoding, errors="replace")
