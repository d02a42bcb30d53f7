"""Section builder.

Projects a trip's flat item list into ordered (optionally nested) view
sections. Provides build_sections(items, grouping, filters=None, orders=None).

Ordering rules, applied at every level:
  - keys present in the registry come first, in registry order;
  - keys missing from the registry (orphans) follow, sorted lexicographically;
  - inside a leaf, unpacked items precede packed ones, otherwise input order.
Grouping is exact-match and case-sensitive. Empty sections are never returned.
"""
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from packing.domain.Item import Item
from packing.utilities.constants import CATEGORY, LOCATION, GROUP

TIERS: Tuple[str, ...] = (CATEGORY, LOCATION, GROUP)
FLAT, SINGLE, NESTED = "flat", "single", "nested"


class _NoGroup:
    def __repr__(self) -> str:
        return "NO_GROUP"


# Filter value selecting exactly the items without a group
NO_GROUP = _NoGroup()


def _check_tier(tier: str) -> str:
    if tier not in TIERS:
        raise ValueError(f"Unknown grouping tier: {tier!r} (expected one of {', '.join(TIERS)})")
    return tier


@dataclass(frozen=True)
class Grouping:
    kind: str
    tiers: Tuple[str, ...] = ()

    @classmethod
    def flat(cls) -> "Grouping":
        return cls(FLAT)

    @classmethod
    def single(cls, tier: str) -> "Grouping":
        return cls(SINGLE, (_check_tier(tier),))

    @classmethod
    def nested(cls, outer: str, inner: str) -> "Grouping":
        if _check_tier(outer) == _check_tier(inner):
            raise ValueError("Nested grouping needs two different tiers")
        return cls(NESTED, (outer, inner))

    @classmethod
    def from_mode(cls, mode: str) -> "Grouping":
        """Parse the API/view mode string.

        "flat", a tier name ("location"), or "outer-inner" ("category-location").
        "nested" is shorthand for category-location.
        """
        mode = (mode or "").strip().lower()
        if mode == FLAT:
            return cls.flat()
        if mode == NESTED:
            return cls.nested(CATEGORY, LOCATION)
        if "-" in mode:
            outer, inner = mode.split("-", 1)
            return cls.nested(outer, inner)
        return cls.single(mode)


@dataclass(frozen=True)
class Filters:
    """AND-combined filters; None or "" means no restriction."""
    group: Union[str, _NoGroup, None] = None
    location: Optional[str] = None

    def matches(self, item: Item) -> bool:
        if self.group is NO_GROUP:
            if item.group:
                return False
        elif self.group and item.group != self.group:
            return False
        if self.location and item.location != self.location:
            return False
        return True


class Section(NamedTuple):
    key: str
    entries: list  # Items for leaf sections, Sections for outer nested ones

    @property
    def is_nested(self) -> bool:
        return bool(self.entries) and isinstance(self.entries[0], Section)

    @property
    def items(self) -> List[Item]:
        return section_items(self)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def packed_count(self) -> int:
        return sum(1 for i in self.items if i.is_packed)


def section_items(section: Section) -> List[Item]:
    '''Flattens a (possibly nested) section into its items, in display order.'''
    if section.is_nested:
        return [item for sub in section.entries for item in section_items(sub)]
    return list(section.entries)


def pack_order(items: Iterable[Item]) -> List[Item]:
    # sorted() is stable and False < True, so unpacked first, input order kept
    return sorted(items, key=lambda item: item.is_packed)


def ordered_keys(keys: Iterable[str], canonical: Sequence[str]) -> List[str]:
    present = set(keys)
    result: List[str] = []
    seen = set()
    for name in canonical:
        if name in present and name not in seen:
            result.append(name)
            seen.add(name)
    result.extend(sorted(present - seen))
    return result


def _group(items: List[Item], tiers: Tuple[str, ...], orders: Mapping[str, Sequence[str]]) -> List[Section]:
    tier = tiers[0]
    partition: Dict[str, List[Item]] = defaultdict(list)
    for item in items:
        partition[getattr(item, tier) or ""].append(item)

    sections: List[Section] = []
    for key in ordered_keys(partition.keys(), orders.get(tier, ())):
        bucket = partition[key]
        entries = _group(bucket, tiers[1:], orders) if len(tiers) > 1 else pack_order(bucket)
        if entries:
            sections.append(Section(key, entries))
    return sections


def build_sections(items: Iterable[Item], grouping: Grouping, filters: Optional[Filters] = None,
                   orders: Optional[Mapping[str, Sequence[str]]] = None) -> List[Section]:
    """Group items into ordered view sections.

    Args:
        items: items of one trip, in their stored order.
        grouping: Grouping.flat(), Grouping.single(tier) or Grouping.nested(outer, inner).
        filters: optional Filters(group=..., location=...).
        orders: {tier: [registry names in display order]}; tiers absent here
            have no canonical keys, so all their keys sort as orphans.

    Returns:
        List of Section(key, entries). A flat grouping yields at most one
        section keyed "".
    """
    filtered = [item for item in items if filters is None or filters.matches(item)]
    if grouping.kind == FLAT:
        return [Section("", pack_order(filtered))] if filtered else []
    return _group(filtered, grouping.tiers, orders or {})


def sections_to_dict(sections: List[Section]) -> List[Dict[str, Any]]:
    '''JSON view-model used by the API layer.'''
    result = []
    for section in sections:
        data: Dict[str, Any] = {
            'key': section.key,
            'count': section.item_count,
            'packed': section.packed_count,
        }
        if section.is_nested:
            data['sections'] = sections_to_dict(section.entries)
        else:
            data['items'] = [item.to_dict() for item in section.entries]
        result.append(data)
    return result


__all__ = [
    'Grouping', 'Filters', 'Section', 'NO_GROUP', 'TIERS',
    'build_sections', 'sections_to_dict', 'section_items', 'pack_order', 'ordered_keys'
]
