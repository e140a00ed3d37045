"""Memory quantity parsing for container limits.

Kubernetes quantities such as ``512Mi`` or ``1G`` are converted to bytes.
Unparseable values count as no limit (0.0).
"""

from typing import Any

# Binary suffixes are checked before decimal ones so "Mi" never matches "M".
_MEMORY_BYTES_MULTIPLIERS: tuple[tuple[str, int], ...] = (
    ("Ki", 1024),
    ("Mi", 1024**2),
    ("Gi", 1024**3),
    ("Ti", 1024**4),
    ("Pi", 1024**5),
    ("Ei", 1024**6),
    ("k", 1000),
    ("K", 1000),
    ("M", 1000**2),
    ("G", 1000**3),
    ("T", 1000**4),
    ("P", 1000**5),
    ("E", 1000**6),
)


def memory_str_to_bytes(memory_str: str) -> float:
    """Bytes in a memory quantity, e.g. ``"512Mi"`` -> 536870912.0."""
    if not memory_str:
        return 0.0

    quantity = str(memory_str).strip()
    multiplier = 1
    for suffix, mult in _MEMORY_BYTES_MULTIPLIERS:
        if quantity.endswith(suffix):
            quantity, multiplier = quantity[: -len(suffix)], mult
            break

    try:
        return float(quantity) * multiplier
    except ValueError:
        return 0.0


def parse_memory_from_dict(
    values: dict[str, Any], container_type: str, resource: str
) -> float:
    """Read ``resources.<container_type>.<resource>`` of a container as bytes.

    Args:
        values: Container entry of a pod spec.
        container_type: ``"limits"`` or ``"requests"``.
        resource: Resource name, normally ``"memory"``.

    Returns:
        The quantity in bytes, 0.0 when absent or malformed.
    """
    resources = values.get("resources") if isinstance(values, dict) else None
    block = resources.get(container_type) if isinstance(resources, dict) else None
    if not isinstance(block, dict) or resource not in block:
        return 0.0
    return memory_str_to_bytes(block[resource])
