"""dgx-spark-tools: DGX Spark Platform Controller tools for agent hosts."""

from importlib.metadata import version as _pkg_version

from .controller import ConfigError
from .plugin import PluginApi, TextContent, ToolDefinition, ToolPlugin, ToolResponse
from .registry import ToolRegistry, UnknownToolError
from .schema import ParameterError

__version__ = _pkg_version("dgx-spark-tools")
__all__ = [
    "ConfigError",
    "ParameterError",
    "PluginApi",
    "TextContent",
    "ToolDefinition",
    "ToolPlugin",
    "ToolRegistry",
    "ToolResponse",
    "UnknownToolError",
    "__version__",
]
