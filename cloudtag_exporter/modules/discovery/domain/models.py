"""
Tag discovery data model.

Every discovery path, whatever the shape of the provider response, produces
`TagRecord`s so that the metric layer only ever sees one resource shape.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Tag:
    key: str
    value: str

    @classmethod
    def from_aws(cls, raw: Dict[str, Any]) -> "Tag":
        """Build from an AWS `{"Key": ..., "Value": ...}` dict. Missing values are empty."""
        return cls(key=str(raw["Key"]), value=str(raw.get("Value") or ""))


def tags_from_aws(raw_tags: Optional[Sequence[Dict[str, Any]]]) -> List[Tag]:
    """Convert a provider tag list, keeping provider order."""
    return [Tag.from_aws(raw) for raw in raw_tags or []]


@dataclass(frozen=True)
class Job:
    """One discovery request: a resource-type key and the tags every result must carry."""

    resource_type: str
    search_tags: Tuple[Tag, ...] = ()


@dataclass
class TagRecord:
    """
    Normalized tagged resource.

    `id` is the native ARN or a synthesized equivalent and is never empty.
    `matcher`, when set, replaces `id` as the identity shown downstream.
    """

    id: str
    tags: List[Tag] = field(default_factory=list)
    service: str = ""
    region: str = ""
    matcher: Optional[str] = None

    @property
    def effective_id(self) -> str:
        return self.matcher if self.matcher is not None else self.id

