from typing import Iterable, Sequence

from cloudtag_exporter.modules.discovery.domain.models import Tag


def filter_through_tags(tags: Sequence[Tag], search_tags: Iterable[Tag]) -> bool:
    """
    True iff every required tag is carried by the resource with an equal key and
    an equal value. No wildcard or regex semantics; an empty requirement set passes.
    """
    carried = {(tag.key, tag.value) for tag in tags}
    return all((wanted.key, wanted.value) in carried for wanted in search_tags)
