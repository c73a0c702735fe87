"""Plugin interface: implement this to expose tools to a dgx-spark-tools host."""

import json
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, Mapping


@dataclass
class TextContent:
    """A single text block in a tool response."""

    text: str
    type: str = "text"


@dataclass
class ToolResponse:
    """What a tool hands back to the host.

    The host expects a list of content blocks.  Tools that forward JSON
    results wrap them as one pretty-printed text block via from_result().
    """

    content: list[TextContent] = field(default_factory=list)

    @classmethod
    def from_result(cls, result: Any) -> "ToolResponse":
        text = json.dumps(result, indent=2, ensure_ascii=False)
        return cls(content=[TextContent(text=text)])

    def to_dict(self) -> dict:
        return {"content": [asdict(block) for block in self.content]}


ToolHandler = Callable[[str, dict], Awaitable[ToolResponse]]


@dataclass
class ToolDefinition:
    """Static descriptor of one tool.

    Fields:
        name       : unique tool name the host dispatches on
        label      : human readable title
        description: shown to the calling model
        parameters : JSON Schema object for the tool's params
        execute    : async handler(call_id, params) -> ToolResponse
    """

    name: str
    label: str
    description: str
    parameters: dict
    execute: ToolHandler

    def describe(self) -> dict:
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "parameters": self.parameters,
        }


class PluginApi(ABC):
    """Host-side handle passed to ToolPlugin.register()."""

    @property
    @abstractmethod
    def plugin_config(self) -> Mapping[str, Any]:
        """Configuration supplied by the host for this plugin."""
        ...

    @abstractmethod
    def register_tool(self, tool: ToolDefinition, *, name: str | None = None) -> None:
        """Register a tool. ``name`` overrides the registration key."""
        ...


class ToolPlugin(ABC):
    """Implement this to contribute tools to the host.

    A plugin is a static description (id, name, description) plus a
    register() hook that is called once with the host's PluginApi.
    """

    id: str = ""
    name: str = ""
    description: str = ""

    @abstractmethod
    def register(self, api: PluginApi) -> None:
        """Read config from ``api.plugin_config`` and register tools."""
        ...
