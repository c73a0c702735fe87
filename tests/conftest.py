"""Shared fixtures for dgx-spark-tools tests."""

import json

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from dgx_spark_tools.plugin import ToolDefinition, ToolPlugin, ToolResponse
from dgx_spark_tools.schema import object_schema, string_enum, string_param


class StubController:
    """Stand-in for the Platform Controller: records requests, replays canned replies."""

    def __init__(self):
        self.requests: list[dict] = []
        self._replies: dict[str, tuple[int, str]] = {}

    def reply(self, path: str, body, status: int = 200) -> None:
        self._replies[path] = (status, json.dumps(body))

    def reply_text(self, path: str, text: str, status: int = 200) -> None:
        self._replies[path] = (status, text)

    async def _handle(self, request: web.Request) -> web.Response:
        raw = await request.read()
        self.requests.append({
            "method": request.method,
            "path": request.path,
            "content_type": request.headers.get("Content-Type"),
            "body": json.loads(raw) if raw else None,
        })
        status, text = self._replies.get(request.path, (404, json.dumps({"detail": "no route"})))
        return web.Response(status=status, text=text, content_type="application/json")

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self._handle)
        return app

    def server(self) -> TestServer:
        return TestServer(self.app())

    @staticmethod
    def base_url(server: TestServer) -> str:
        return f"http://{server.host}:{server.port}"


class EchoPlugin(ToolPlugin):
    """Minimal plugin for exercising the registry and server."""

    id = "echo"
    name = "Echo"
    description = "Echoes its parameters back"

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.config = None

    def register(self, api):
        self.config = api.plugin_config

        async def echo(call_id, params):
            self.calls.append((call_id, params))
            return ToolResponse.from_result({"echo": params["text"], "mode": params["mode"]})

        api.register_tool(
            ToolDefinition(
                name="echo",
                label="Echo",
                description="Echo text back",
                parameters=object_schema(
                    text=string_param("Text to echo"),
                    mode=string_enum(["plain", "loud"]),
                ),
                execute=echo,
            )
        )


@pytest.fixture
def controller():
    return StubController()


@pytest.fixture
def echo_plugin():
    return EchoPlugin()
