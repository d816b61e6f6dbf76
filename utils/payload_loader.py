# utils/payload_loader.py - logger setup and CSV loader that yields Request cases
import csv
import json
import logging

import config
from http_method import HttpMethod
from models import Request


def get_logger(name: str = "request-sender"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL)
    return logger


def parse_args(raw):
    """Parse the args column: a JSON object of name -> value, or blank."""
    if raw is None or not raw.strip():
        return None
    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError("args must be a JSON object")
    return {str(k): ("" if v is None else str(v)) for k, v in parsed.items()}


def load_request_cases(csv_path):
    rows = []
    with open(csv_path, newline='', encoding='utf-8') as fh:
        reader = csv.DictReader(fh)
        for r in reader:
            method = (r.get('method') or r.get('Method') or '').strip()
            if not method:
                continue
            case = {
                'id': (r.get('id') or r.get('ID') or r.get('TestCaseID') or '').strip(),
                'row': r,
                'request': None,
            }
            try:
                case['request'] = Request(
                    HttpMethod.parse(method),
                    r.get('uri') or '',
                    parse_args(r.get('args')),
                )
            except ValueError as e:
                case['error'] = str(e)
            rows.append(case)
    return rows
