"""Input validation helpers for MCP tool parameters."""

from typing import Any, Dict, Mapping, Optional

# JSON Schema type name -> accepted Python types
_JSON_TYPES = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list, tuple),
    "null": (type(None),),
}


def _matches(value: Any, json_type: str) -> bool:
    accepted = _JSON_TYPES.get(json_type)
    if accepted is None:
        return True  # unknown schema type, nothing to enforce
    # bool is a subclass of int but never a JSON number
    if isinstance(value, bool) and json_type in ("number", "integer"):
        return False
    return isinstance(value, accepted)


def validate_arguments(schema: Mapping[str, Any], args: Any) -> Optional[str]:
    """
    Check tool arguments against a tool's inputSchema.

    Only ``required`` and per-property ``type`` are enforced. Arguments
    not declared in ``properties`` are ignored.

    Returns a human-readable error message, or None when args are valid.
    """
    if not isinstance(args, dict):
        return f"Arguments must be an object, got {type(args).__name__}"

    properties: Dict[str, Any] = schema.get("properties", {})

    for name in schema.get("required", []):
        if name not in args:
            return f'Missing required argument "{name}"'

    for name, value in args.items():
        declared = properties.get(name)
        if not declared or "type" not in declared:
            continue
        expected = declared["type"]
        if not _matches(value, expected):
            return (
                f'Invalid argument "{name}": expected {expected}, '
                f"got {type(value).__name__}"
            )

    return None
