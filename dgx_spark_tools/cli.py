"""Command line entry point for serving plugin tools over HTTP."""

import argparse
import asyncio
import importlib
import json
import logging
import os
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .controller import ConfigError
from .plugin import ToolPlugin
from .registry import ToolRegistry
from .server import PluginServer

logger = logging.getLogger("dgx_spark_tools.cli")

ENV_PREFIX = "DGX_SPARK_"


class CliError(Exception):
    """Startup problem reported to the user without a traceback."""


def _env(name: str, default: str = "") -> str:
    return os.environ.get(ENV_PREFIX + name, default)


def build_parser() -> argparse.ArgumentParser:
    """Flags default to DGX_SPARK_<FLAG> environment variables."""
    parser = argparse.ArgumentParser(
        prog="dgx-spark-tools",
        description="Serve DGX Spark Platform Controller tools to agent hosts over HTTP.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    plugin = parser.add_argument_group("plugin")
    plugin.add_argument(
        "--plugin",
        default=_env("PLUGIN", "dgx_spark"),
        help="built-in plugin name, or an importable module exporting a Plugin class",
    )
    plugin.add_argument(
        "--config",
        default=_env("CONFIG"),
        help="JSON file with the plugin config object",
    )
    plugin.add_argument(
        "--base-url",
        default=_env("BASE_URL"),
        help="controller URL, stored as baseUrl in the plugin config",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", default=_env("HOST", "0.0.0.0"))
    server.add_argument("--port", type=int, default=int(_env("PORT", "8090")))
    server.add_argument(
        "--token",
        default=_env("TOKEN"),
        help="require 'Authorization: Bearer <token>' on /api routes",
    )
    return parser


def resolve_plugin(name: str) -> type[ToolPlugin]:
    """Find the Plugin class for ``name``, built-ins first."""
    candidates = [f"dgx_spark_tools.plugins.{name}", name]
    last_error: ImportError | None = None
    for module_name in candidates:
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            last_error = exc
            continue
        plugin_cls = getattr(module, "Plugin", None)
        if isinstance(plugin_cls, type) and issubclass(plugin_cls, ToolPlugin):
            return plugin_cls
        raise CliError(f"module '{module_name}' has no ToolPlugin subclass named 'Plugin'")
    raise CliError(f"plugin '{name}' not found (tried {', '.join(candidates)}): {last_error}")


def read_plugin_config(path: str, base_url: str = "") -> dict:
    config: dict = {}
    if path:
        try:
            config = json.loads(Path(path).read_text())
        except (OSError, ValueError) as exc:
            raise CliError(f"cannot read plugin config {path}: {exc}") from exc
        if not isinstance(config, dict):
            raise CliError(f"plugin config {path} must hold a JSON object")
    if base_url:
        config["baseUrl"] = base_url
    return config


def build_registry(args: argparse.Namespace) -> ToolRegistry:
    plugin_cls = resolve_plugin(args.plugin)
    config = read_plugin_config(args.config, args.base_url)
    registry = ToolRegistry()
    try:
        registry.load_plugin(plugin_cls(), config)
    except ConfigError as exc:
        raise CliError(f"plugin '{args.plugin}' rejected its config: {exc}") from exc
    logger.info(
        "Registered tools: %s",
        ", ".join(tool["name"] for tool in registry.list_tools()) or "(none)",
    )
    return registry


async def serve(server: PluginServer) -> None:
    """Run ``server`` until SIGINT or SIGTERM."""
    stopped = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stopped.set)

    await server.start()
    try:
        await stopped.wait()
    finally:
        await server.stop()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        registry = build_registry(args)
    except CliError as exc:
        print(f"dgx-spark-tools: {exc}", file=sys.stderr)
        return 1

    server = PluginServer(
        registry, host=args.host, port=args.port, token=args.token or None
    )
    asyncio.run(serve(server))
    return 0


if __name__ == "__main__":
    sys.exit(main())
