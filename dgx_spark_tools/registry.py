"""Tool registry: the host's table of registered tools."""

import logging
import uuid
from typing import Any, Mapping

from .plugin import PluginApi, ToolDefinition, ToolPlugin, ToolResponse
from .schema import validate_params

logger = logging.getLogger("dgx_spark_tools.registry")


class UnknownToolError(LookupError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class _RegistryApi(PluginApi):
    """PluginApi bound to one plugin's config, writing into a shared registry."""

    def __init__(self, registry: "ToolRegistry", config: Mapping[str, Any]):
        self._registry = registry
        self._config = config

    @property
    def plugin_config(self) -> Mapping[str, Any]:
        return self._config

    def register_tool(self, tool: ToolDefinition, *, name: str | None = None) -> None:
        self._registry.register_tool(tool, name=name)


class ToolRegistry:
    """Maps tool names to their definitions and dispatches invocations.

    Parameters are validated against the tool's schema before the handler
    runs, so handlers only ever see well-formed input.
    """

    def __init__(self):
        self._tools: dict[str, ToolDefinition] = {}
        self.plugins: list[ToolPlugin] = []

    def load_plugin(self, plugin: ToolPlugin, config: Mapping[str, Any] | None = None) -> None:
        plugin.register(_RegistryApi(self, dict(config or {})))
        self.plugins.append(plugin)
        logger.info("Loaded plugin '%s'", plugin.id)

    def register_tool(self, tool: ToolDefinition, *, name: str | None = None) -> None:
        key = name or tool.name
        if key in self._tools:
            raise ValueError(f"Tool '{key}' is already registered")
        self._tools[key] = tool
        logger.debug("Registered tool '%s'", key)

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> list[dict]:
        return [{**tool.describe(), "name": key} for key, tool in self._tools.items()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def invoke(
        self, name: str, params: Any, call_id: str | None = None
    ) -> ToolResponse:
        tool = self.get(name)
        validate_params(name, params, tool.parameters)
        call_id = call_id or f"call_{uuid.uuid4().hex[:12]}"
        logger.debug("Invoking '%s' (%s)", name, call_id)
        return await tool.execute(call_id, params)
