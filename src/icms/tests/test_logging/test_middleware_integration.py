import json
import logging

from fastapi import FastAPI
from starlette.testclient import TestClient

from icms.core.logging.builder import setup_logging
from icms.core.logging.middleware import REQUEST_ID_HEADER, RequestIDMiddleware

from icms.tests.test_fixtures.logging_fixtures import make_log_settings


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    async def hello():
        logging.getLogger("icms.test").info("handling hello")
        return {"ok": True}

    return app


def test_request_id_in_response_and_logs(tmp_path, capsys):
    setup_logging(make_log_settings(tmp_path, LOG_TO_STDOUT=True, ENV="production"))

    resp = TestClient(_app()).get("/hello")

    assert resp.status_code == 200
    rid = resp.headers.get(REQUEST_ID_HEADER)
    assert rid

    lines = capsys.readouterr().err.strip().splitlines()
    records = []
    for line in lines:
        try:
            records.append(json.loads(line))
        except ValueError:
            continue
    assert any(r.get("request_id") == rid and r.get("message") == "handling hello" for r in records)


def test_well_formed_incoming_id_is_echoed(tmp_path):
    setup_logging(make_log_settings(tmp_path, LOG_TO_STDOUT=True))

    resp = TestClient(_app()).get("/hello", headers={REQUEST_ID_HEADER: "client-id-1"})

    assert resp.headers[REQUEST_ID_HEADER] == "client-id-1"


def test_malformed_incoming_id_is_replaced(tmp_path):
    setup_logging(make_log_settings(tmp_path, LOG_TO_STDOUT=True))

    resp = TestClient(_app()).get("/hello", headers={REQUEST_ID_HEADER: "bad id with spaces"})

    assert resp.headers[REQUEST_ID_HEADER] != "bad id with spaces"
    assert len(resp.headers[REQUEST_ID_HEADER]) == 36
