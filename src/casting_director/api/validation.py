"""Request body validation helpers."""

from typing import Any, Mapping, Sequence


def validate_required_params(body: Mapping[str, Any], required: Sequence[str]) -> list[str]:
    """
    Return the required parameters that are missing from ``body``.
    
    A parameter counts as missing when absent or falsy (None, "", 0, False,
    empty collection), matching how the frontend has always been validated.
    """
    return [param for param in required if not body.get(param)]
