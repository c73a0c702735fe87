"""DGX Spark plugin: forwards tool calls to the DGX Spark Platform Controller."""

import logging
from typing import Any

from dgx_spark_tools.controller import ControllerClient, normalize_base_url
from dgx_spark_tools.plugin import PluginApi, ToolDefinition, ToolPlugin, ToolResponse
from dgx_spark_tools.schema import object_schema, string_enum, string_param

logger = logging.getLogger("dgx_spark_tools.dgx_spark")

PACKAGE_ACTIONS = ("install", "remove")
SETTING_KEYS = ("cuda_version", "os_name", "home_directory")


class DgxSparkTools:
    """The three controller operations, one POST each."""

    def __init__(self, client: ControllerClient):
        self.client = client

    async def execute_command(self, command: str) -> Any:
        return await self.client.post("/run_command", {"command": command})

    async def manage_package(self, action: str, package_name: str) -> Any:
        return await self.client.post(
            "/manage_package", {"action": action, "package_name": package_name}
        )

    async def get_setting(self, setting_key: str) -> Any:
        return await self.client.post("/get_settings", {"setting_key": setting_key})


class Plugin(ToolPlugin):
    """Tool plugin wrapping the DGX Spark Platform Controller (MPC) service."""

    id = "dgx-spark"
    name = "DGX Spark"
    description = "Tool plugin wrapping the DGX Spark Platform Controller (MPC) service."

    def __init__(self):
        self.tools: DgxSparkTools | None = None

    def register(self, api: PluginApi) -> None:
        base_url = normalize_base_url(api.plugin_config.get("baseUrl"))
        self.tools = tools = DgxSparkTools(ControllerClient(base_url))
        logger.info("DGX Spark controller at %s", base_url)

        # dgx_spark_exec -- POST /run_command
        async def exec_command(_call_id: str, params: dict) -> ToolResponse:
            result = await tools.execute_command(params["command"])
            return ToolResponse.from_result(result)

        api.register_tool(
            ToolDefinition(
                name="dgx_spark_exec",
                label="DGX Spark Exec",
                description=(
                    "Execute a shell command inside a sandboxed Docker container on the DGX Spark host. "
                    "The container has GPU access but no network. Use for compiling/running CUDA code or diagnostics."
                ),
                parameters=object_schema(
                    command=string_param("Shell command to execute in the sandbox"),
                ),
                execute=exec_command,
            ),
            name="dgx_spark_exec",
        )

        # dgx_spark_package -- POST /manage_package
        async def package(_call_id: str, params: dict) -> ToolResponse:
            result = await tools.manage_package(params["action"], params["package_name"])
            return ToolResponse.from_result(result)

        api.register_tool(
            ToolDefinition(
                name="dgx_spark_package",
                label="DGX Spark Package",
                description="Install or remove a system package (apt) on the DGX Spark host.",
                parameters=object_schema(
                    action=string_enum(
                        PACKAGE_ACTIONS, "Whether to install or remove the package"
                    ),
                    package_name=string_param("Name of the apt package"),
                ),
                execute=package,
            ),
            name="dgx_spark_package",
        )

        # dgx_spark_settings -- POST /get_settings
        async def settings(_call_id: str, params: dict) -> ToolResponse:
            result = await tools.get_setting(params["setting_key"])
            return ToolResponse.from_result(result)

        api.register_tool(
            ToolDefinition(
                name="dgx_spark_settings",
                label="DGX Spark Settings",
                description=(
                    "Retrieve a system setting from the DGX Spark host "
                    "(CUDA version, OS name, or home directory)."
                ),
                parameters=object_schema(
                    setting_key=string_enum(SETTING_KEYS, "Setting to retrieve"),
                ),
                execute=settings,
            ),
            name="dgx_spark_settings",
        )
