import re
from typing import Optional

from cloudtag_exporter.shared.core.config import get_settings

_REPLACEMENTS = (
    (" ", "_"),
    (",", "_"),
    ("\t", "_"),
    ("/", "_"),
    ("\\", "_"),
    (".", "_"),
    ("-", "_"),
    (":", "_"),
    ("=", "_"),
    ("“", "_"),
    ("@", "_"),
    ("<", "_"),
    (">", "_"),
    ("%", "_percent"),
)
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NOT_LABEL_SAFE = re.compile(r"[^a-zA-Z0-9_]")


def sanitize(text: str) -> str:
    """Replace every character Prometheus does not accept in names with `_`."""
    for old, new in _REPLACEMENTS:
        text = text.replace(old, new)
    return _NOT_LABEL_SAFE.sub("_", text)


def prom_string(text: str) -> str:
    """`ecs-svc` -> `ecs_svc`, `CostCenter` -> `cost_center`."""
    return sanitize(_CAMEL_BOUNDARY.sub(r"\1.\2", text)).lower()


def prom_string_tag(text: str, snake_case: Optional[bool] = None) -> str:
    """Label-safe tag key; case is preserved unless snake-case labels are enabled."""
    if snake_case is None:
        snake_case = get_settings().LABELS_SNAKE_CASE
    if snake_case:
        return prom_string(text)
    return sanitize(text)
