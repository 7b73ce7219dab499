"""Legacy tag support.

Older test files carried requirements as prefixed string tags
("function:parse", "feature:comments", ...) instead of typed metadata.
"""

from typing import Iterable, NamedTuple

TAG_PREFIXES = ("function", "feature", "behavior", "variant")


class TagMetadata(NamedTuple):
    functions: list[str]
    features: list[str]
    behaviors: list[str]
    variants: list[str]


def extract_metadata_from_tags(tags: Iterable[str]) -> TagMetadata:
    """Split prefixed tags into typed metadata lists; other tags are ignored."""
    buckets: dict[str, list[str]] = {prefix: [] for prefix in TAG_PREFIXES}
    for tag in tags:
        prefix, sep, value = tag.partition(":")
        if sep and prefix in buckets and value:
            buckets[prefix].append(value)
    return TagMetadata(
        functions=buckets["function"],
        features=buckets["feature"],
        behaviors=buckets["behavior"],
        variants=buckets["variant"],
    )
