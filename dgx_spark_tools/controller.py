"""HTTP client for the DGX Spark Platform Controller service."""

import json
import logging
from typing import Any

import aiohttp

logger = logging.getLogger("dgx_spark_tools.controller")

DEFAULT_BASE_URL = "http://127.0.0.1:5001"


class ConfigError(ValueError):
    """Plugin configuration is unusable."""


def normalize_base_url(value: Any) -> str:
    """Return the controller base URL with trailing slashes removed.

    ``None`` or an empty string falls back to DEFAULT_BASE_URL.
    """
    if value is None:
        return DEFAULT_BASE_URL
    if not isinstance(value, str):
        raise ConfigError(f"baseUrl must be a string, got {type(value).__name__}")
    if not value:
        return DEFAULT_BASE_URL
    return value.rstrip("/")


def error_result(detail: Any, status: int | None = None) -> dict:
    result: dict[str, Any] = {"error": True}
    if status is not None:
        result["status"] = status
    result["detail"] = detail
    return result


class ControllerClient:
    """Forwards JSON POSTs to the controller and shapes the outcome.

    post() never raises for transport or HTTP failures; they come back as
    error dicts so the calling agent sees them inline.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = normalize_base_url(base_url)

    async def post(self, path: str, body: dict) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("POST %s", url)
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url,
                    data=json.dumps(body),
                    headers={"Content-Type": "application/json"},
                ) as resp:
                    data = json.loads(await resp.text())
                    status = resp.status
                    reason = resp.reason
        except Exception as exc:
            logger.warning("Controller call %s failed: %s", path, exc)
            return error_result(str(exc) or type(exc).__name__)

        if not 200 <= status < 300:
            if isinstance(data, dict) and "detail" in data:
                detail = data["detail"]
            else:
                detail = reason
            logger.info("Controller %s returned %s", path, status)
            return error_result(detail, status=status)
        return data
