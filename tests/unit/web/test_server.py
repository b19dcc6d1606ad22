"""Tests for the FastAPI application factory and uvicorn runner."""

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from ridebook.app import App
from ridebook.web import runner


class TestRequestId:
    """Tests for the request-id middleware."""

    async def test_request_id_generated(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert len(response.headers["X-Request-ID"]) == 32

    async def test_request_id_echoed(self, client):
        response = await client.post("/api/v1/ids/admin", headers={"X-Request-ID": "trace-7"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "trace-7"

    async def test_request_id_on_error_responses(self, client):
        response = await client.post("/api/v1/ids/booking", json={"scopeCode": "OP/1"}, headers={"X-Request-ID": "trace-8"})

        assert response.status_code == 400
        assert response.headers["X-Request-ID"] == "trace-8"


class TestRunner:
    """Tests for uvicorn configuration."""

    def test_log_config_leaves_uvicorn_defaults_untouched(self):
        default_access_fmt = LOGGING_CONFIG["formatters"]["access"]["fmt"]

        log_config = runner.build_log_config(debug=True)

        assert "%(client_addr)s" in log_config["formatters"]["access"]["fmt"]
        assert log_config["loggers"]["uvicorn.access"]["level"] == "DEBUG"
        assert LOGGING_CONFIG["formatters"]["access"]["fmt"] == default_access_fmt

    def test_run_server_passes_config(self, config, monkeypatch):
        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        runner.run_server(App(config), config)

        [(fastapi_app, kwargs)] = calls
        assert fastapi_app.title == "Ridebook Identifier API"
        assert kwargs["host"] == config.host
        assert kwargs["port"] == config.port
        assert kwargs["log_config"]["loggers"]["uvicorn"]["level"] == "INFO"
