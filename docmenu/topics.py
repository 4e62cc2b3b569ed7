"""Topic-type registry consulted for index entries.

Topic types are identified by lowercase strings such as ``"function"``.
Older snapshots stored them as small integers; ``type_from_legacy`` maps
those codes back to identifiers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

TOPIC_GENERAL = "general"

# Position is the legacy numeric code.
LEGACY_TOPIC_CODES: tuple[str, ...] = (
    "general",
    "class",
    "section",
    "file",
    "group",
    "function",
    "variable",
    "generic",
    "type",
    "constant",
    "property",
)


@dataclass(frozen=True)
class TopicType:
    """One topic type with its display names."""

    identifier: str
    name: str
    plural: str
    indexable: bool = True


DEFAULT_TOPIC_TYPES: tuple[TopicType, ...] = (
    TopicType("general", "General", "Everything"),
    TopicType("generic", "Generic", "Generics", indexable=False),
    TopicType("group", "Group", "Groups", indexable=False),
    TopicType("section", "Section", "Sections", indexable=False),
    TopicType("class", "Class", "Classes"),
    TopicType("interface", "Interface", "Interfaces"),
    TopicType("file", "File", "Files"),
    TopicType("function", "Function", "Functions"),
    TopicType("variable", "Variable", "Variables"),
    TopicType("property", "Property", "Properties"),
    TopicType("type", "Type", "Types"),
    TopicType("constant", "Constant", "Constants"),
    TopicType("enumeration", "Enumeration", "Enumerations"),
    TopicType("event", "Event", "Events"),
    TopicType("delegate", "Delegate", "Delegates"),
    TopicType("macro", "Macro", "Macros"),
)


class TopicTypes:
    """Lookup table for topic types by identifier and by display name."""

    def __init__(self, types: Iterable[TopicType] = DEFAULT_TOPIC_TYPES) -> None:
        self._types: dict[str, TopicType] = {}
        self._by_name: dict[str, str] = {}
        for topic in types:
            self._types[topic.identifier] = topic
            self._by_name[topic.name.lower()] = topic.identifier
            self._by_name[topic.plural.lower()] = topic.identifier
        if TOPIC_GENERAL in self._types:
            # "General Index" reads better than "Everything Index" but both parse.
            self._by_name.setdefault("general", TOPIC_GENERAL)

    @classmethod
    def with_indexable(cls, indexable: Iterable[str]) -> "TopicTypes":
        """Return the default registry with only ``indexable`` marked indexable."""
        wanted = set(indexable)
        return cls(
            TopicType(t.identifier, t.name, t.plural, indexable=t.identifier in wanted)
            for t in DEFAULT_TOPIC_TYPES
        )

    def is_valid_type(self, topic_type: str | None) -> bool:
        return topic_type is not None and topic_type in self._types

    def is_indexable(self, topic_type: str) -> bool:
        topic = self._types.get(topic_type)
        return topic is not None and topic.indexable

    def all_indexable_types(self) -> frozenset[str]:
        return frozenset(identifier for identifier, topic in self._types.items() if topic.indexable)

    def type_from_name(self, name: str) -> str | None:
        """Return the identifier for a singular or plural name, or ``None``."""
        return self._by_name.get(" ".join(name.split()).lower())

    def name_of_type(self, topic_type: str, plural: bool = False) -> str:
        topic = self._types[topic_type]
        return topic.plural if plural else topic.name

    def type_from_legacy(self, code: int) -> str | None:
        """Translate a pre-1.3 numeric topic code."""
        if 0 <= code < len(LEGACY_TOPIC_CODES):
            return LEGACY_TOPIC_CODES[code]
        return None

    def legacy_code_of(self, topic_type: str) -> int:
        """Return the pre-1.3 numeric code; raises ``ValueError`` for newer types."""
        try:
            return LEGACY_TOPIC_CODES.index(topic_type)
        except ValueError:
            raise ValueError(f"topic type {topic_type!r} has no legacy code") from None

    def index_sort_key(self, topic_type: str) -> tuple[int, str]:
        """Order used when adding indexes: general first, then by name."""
        if topic_type == TOPIC_GENERAL:
            return (0, "")
        return (1, self.name_of_type(topic_type).lower())


__all__ = [
    "TOPIC_GENERAL",
    "LEGACY_TOPIC_CODES",
    "TopicType",
    "DEFAULT_TOPIC_TYPES",
    "TopicTypes",
]
