"""
JSON schemas for structured outputs and tool definitions.

Schemas are generated from pydantic models. OpenAI's strict mode accepts
only a subset of JSON Schema: every object must list all of its properties
as required and forbid additional properties, and references are resolved
inline here so the schema is self-contained.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, Field

from .common import WireModel


JsonSchemaStyle = Literal["openai", "grok"]

# Schema keywords whose value is a single subschema
_SUBSCHEMA_KEYS = ("items", "not", "additionalProperties", "contains")
# Schema keywords whose value is a list of subschemas
_SUBSCHEMA_LIST_KEYS = ("anyOf", "oneOf", "allOf", "prefixItems")
# Keywords rejected by strict mode
_STRICT_DROPPED_KEYS = ("title", "default")

_REF_PREFIX = "#/$defs/"


class ToolCallFunctionDefinition(WireModel):
    """
    Function exposed to the model as a tool.
    """

    name: str = Field(..., description="Function name", min_length=1)
    description: Optional[str] = Field(None, description="What the function does")
    parameters: Optional[Dict[str, Any]] = Field(
        None, description="Function parameters formatted in JSON Schema"
    )
    strict: Optional[bool] = Field(None, description="Enforce the schema exactly")

    @classmethod
    def from_model(
        cls, model: Type[BaseModel], strict: Optional[bool] = None
    ) -> ToolCallFunctionDefinition:
        """Describe a function whose arguments are an instance of ``model``."""
        raw = model.model_json_schema()
        style: JsonSchemaStyle = "openai" if strict else "grok"
        return cls(
            name=raw.get("title") or model.__name__,
            description=raw.get("description"),
            parameters=json_schema_for(model, style),
            strict=strict,
        )


class ChatCompletionResponseFormatJsonSchema(WireModel):
    """
    ``json_schema`` member of a structured output response format.
    """

    name: str = Field(..., description="Schema name", min_length=1)
    description: Optional[str] = Field(None, description="What the output represents")
    json_schema: Dict[str, Any] = Field(..., alias="schema", description="JSON Schema")
    strict: bool = Field(False, description="Enforce the schema exactly")

    @classmethod
    def from_model(
        cls, model: Type[BaseModel], strict: bool, style: JsonSchemaStyle = "openai"
    ) -> ChatCompletionResponseFormatJsonSchema:
        raw = model.model_json_schema()
        return cls(
            name=raw.get("title") or model.__name__,
            description=raw.get("description"),
            json_schema=json_schema_for(model, style),
            strict=strict,
        )


def json_schema_for(model: Type[BaseModel], style: JsonSchemaStyle = "openai") -> Dict[str, Any]:
    """
    Build the JSON schema of ``model`` in the given style.

    Both styles resolve ``$ref``s inline. The ``openai`` style additionally
    makes every property required, forbids additional properties and drops
    the ``title`` and ``default`` keywords.
    """
    if style not in ("openai", "grok"):
        raise ValueError(f"Unknown JSON schema style: {style}")

    schema = model.model_json_schema()
    definitions = schema.pop("$defs", {})
    resolved = _inline_refs(schema, definitions, [])

    # Recursive models keep the definitions they still reference
    remaining = _remaining_refs(resolved)
    if remaining:
        resolved["$defs"] = {
            name: _inline_refs(definitions[name], definitions, [name])
            for name in remaining
        }

    if style == "openai":
        resolved = _strict(resolved)
    return resolved


def _inline_refs(node: Any, definitions: Dict[str, Any], stack: List[str]) -> Any:
    if isinstance(node, list):
        return [_inline_refs(item, definitions, stack) for item in node]
    if not isinstance(node, dict):
        return node

    ref = node.get("$ref")
    if isinstance(ref, str) and ref.startswith(_REF_PREFIX):
        name = ref[len(_REF_PREFIX):]
        if name in stack or name not in definitions:
            return dict(node)
        target = _inline_refs(copy.deepcopy(definitions[name]), definitions, stack + [name])
        siblings = {key: value for key, value in node.items() if key != "$ref"}
        target.update(_inline_refs(siblings, definitions, stack))
        return target

    return {key: _inline_refs(value, definitions, stack) for key, value in node.items()}


def _remaining_refs(node: Any) -> List[str]:
    found: List[str] = []

    def _walk(item: Any) -> None:
        if isinstance(item, list):
            for child in item:
                _walk(child)
        elif isinstance(item, dict):
            ref = item.get("$ref")
            if isinstance(ref, str) and ref.startswith(_REF_PREFIX):
                name = ref[len(_REF_PREFIX):]
                if name not in found:
                    found.append(name)
            for child in item.values():
                _walk(child)

    _walk(node)
    return found


def _strict(node: Any) -> Any:
    """Apply strict-mode rules to a schema node and its subschemas."""
    if not isinstance(node, dict):
        return node

    result = {key: value for key, value in node.items() if key not in _STRICT_DROPPED_KEYS}

    if isinstance(result.get("properties"), dict):
        result["properties"] = {
            name: _strict(subschema) for name, subschema in result["properties"].items()
        }
        result["required"] = list(result["properties"])
        result["additionalProperties"] = False
    elif result.get("type") == "object" and "additionalProperties" not in result:
        result["additionalProperties"] = False

    for key in _SUBSCHEMA_KEYS:
        if isinstance(result.get(key), dict):
            result[key] = _strict(result[key])
    for key in _SUBSCHEMA_LIST_KEYS:
        if isinstance(result.get(key), list):
            result[key] = [_strict(item) for item in result[key]]
    if isinstance(result.get("$defs"), dict):
        result["$defs"] = {name: _strict(item) for name, item in result["$defs"].items()}

    return result
