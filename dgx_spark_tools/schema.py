"""JSON Schema builders for tool parameters, plus validation via jsonschema."""

from typing import Any, Iterable

from jsonschema import Draft202012Validator


class ParameterError(ValueError):
    """Tool parameters did not match the tool's schema."""

    def __init__(self, tool: str, errors: list[str]):
        self.tool = tool
        self.errors = errors
        super().__init__(f"Invalid parameters for '{tool}': {'; '.join(errors)}")


def string_param(description: str = "") -> dict:
    schema: dict[str, Any] = {"type": "string"}
    if description:
        schema["description"] = description
    return schema


def string_enum(values: Iterable[str], description: str = "") -> dict:
    """A string restricted to a closed set of values."""
    schema = string_param(description)
    schema["enum"] = list(values)
    return schema


def object_schema(**properties: dict) -> dict:
    """Object schema where every listed property is required."""
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
    }


def validate_params(tool: str, params: Any, schema: dict) -> None:
    """Raise ParameterError if ``params`` violates ``schema``."""
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(params), key=lambda e: list(e.path))
    if not errors:
        return
    messages = []
    for err in errors:
        where = ".".join(str(p) for p in err.path)
        messages.append(f"{where}: {err.message}" if where else err.message)
    raise ParameterError(tool, messages)
