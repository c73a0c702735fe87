"""HTTP REST API server hosting registered tools."""

import logging

from aiohttp import web

from . import __version__
from .registry import ToolRegistry, UnknownToolError
from .schema import ParameterError

logger = logging.getLogger("dgx_spark_tools")


class PluginServer:
    """Exposes a ToolRegistry over HTTP.

    Lists tools and dispatches invocations; tool failures come back inside
    the tool response, only host-level errors map to 4xx statuses.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        host: str = "0.0.0.0",
        port: int = 8090,
        token: str | None = None,
    ):
        self.registry = registry
        self.host = host
        self.port = port
        self.token = token
        self._runner: web.AppRunner | None = None

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def _check_auth(self, request: web.Request) -> bool:
        if not self.token:
            return True
        auth = request.headers.get("Authorization", "")
        return auth == f"Bearer {self.token}"

    @web.middleware
    async def _auth_middleware(self, request: web.Request, handler):
        if request.path.startswith("/health"):
            return await handler(request)
        if not self._check_auth(request):
            return web.json_response({"error": "unauthorized"}, status=401)
        return await handler(request)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def _health(self, _request: web.Request) -> web.Response:
        return web.json_response({
            "status": "ok",
            "version": __version__,
            "plugins": [p.id for p in self.registry.plugins],
            "tools": len(self.registry),
        })

    async def _list_tools(self, _request: web.Request) -> web.Response:
        return web.json_response(self.registry.list_tools())

    async def _invoke(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        if name not in self.registry:
            return web.json_response({"error": f"unknown tool: {name}"}, status=404)

        try:
            body = await request.json() if request.can_read_body else {}
        except ValueError:
            return web.json_response({"error": "invalid JSON body"}, status=400)
        if not isinstance(body, dict):
            return web.json_response({"error": "body must be a JSON object"}, status=400)

        params = body.get("params", {})
        call_id = body.get("call_id")
        try:
            response = await self.registry.invoke(name, params, call_id=call_id)
        except ParameterError as exc:
            return web.json_response(
                {"error": "invalid parameters", "details": exc.errors}, status=400
            )
        except UnknownToolError as exc:
            return web.json_response({"error": str(exc)}, status=404)
        return web.json_response(response.to_dict())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _build_app(self) -> web.Application:
        app = web.Application(middlewares=[self._auth_middleware])
        app.router.add_get("/health", self._health)
        app.router.add_get("/api/tools", self._list_tools)
        app.router.add_post("/api/tools/{name}", self._invoke)
        return app

    async def start(self) -> None:
        """Start serving; returns once the site is listening."""
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("dgx-spark-tools listening on %s:%s", self.host, self.port)

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            logger.info("dgx-spark-tools stopped")
