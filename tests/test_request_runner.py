import csv
import json
from unittest import mock

import pytest

from errors import ResponseParseError, TransportError
from http_method import HttpMethod
from models import Request
from request_runner import run_cases, write_reports


@pytest.fixture
def cases():
    return [
        {"id": "ok", "row": {}, "request": Request(HttpMethod.GET, "/users", {"id": "42"})},
        {"id": "parse", "row": {}, "request": Request(HttpMethod.GET, "/text")},
        {"id": "down", "row": {}, "request": Request(HttpMethod.POST, "/users", {"a": "1"})},
        {"id": "bad", "row": {"method": "FETCH", "uri": "/x"}, "request": None,
         "error": "Unknown HTTP method: 'FETCH'"},
    ]


@pytest.fixture
def sender():
    def send(request):
        if request.uri == "/users" and request.method is HttpMethod.GET:
            return {"id": "42"}
        if request.uri == "/text":
            raise ResponseParseError("not json", text="oops")
        raise TransportError("refused")

    fake = mock.Mock()
    fake.send_request.side_effect = send
    return fake


def test_run_cases_statuses(sender, cases):
    results = run_cases(sender, cases)
    assert [r["status"] for r in results] == ["OK", "PARSE_ERROR", "TRANSPORT_ERROR", "INVALID_CASE"]
    assert results[0]["body"] == {"id": "42"}
    assert results[1]["body"] == "oops"
    assert results[3]["method"] == "FETCH"
    assert sender.send_request.call_count == 3


def test_write_reports(tmp_path, sender, cases):
    results = run_cases(sender, cases)
    out_json, out_csv = write_reports(results, tmp_path / "reports")

    assert json.loads(out_json.read_text(encoding="utf-8"))[0]["id"] == "ok"
    with out_csv.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 4
    assert rows[0]["body"] == '{"id": "42"}'
    assert rows[2]["status"] == "TRANSPORT_ERROR"
