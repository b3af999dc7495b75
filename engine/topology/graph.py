"""
Read-only adjacency view over configuration items and their typed relationships, built once per analysis call so every engine operation works on a frozen snapshot of the dependency graph.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from config import BUSINESS_SERVICE_TYPE
from engine.enums import Criticality, Direction
from engine.exceptions import ComponentNotFound

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigurationItem:
    id: str
    name: str
    type: str
    status: str = "OPERATIONAL"
    criticality: Optional[Criticality] = None
    properties: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_business_service(self) -> bool:
        return self.type == BUSINESS_SERVICE_TYPE

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ConfigurationItem:
        ci_id = str(raw.get("id") or "").strip()
        return cls(
            id=ci_id,
            name=str(raw.get("name") or ci_id),
            type=str(raw.get("type") or "Unknown"),
            status=str(raw.get("status") or "OPERATIONAL"),
            criticality=Criticality.parse(raw.get("criticality")),
            properties=dict(raw.get("properties") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "status": self.status,
            "criticality": self.criticality.value if self.criticality else None,
            "properties": dict(self.properties),
        }


@dataclass(frozen=True)
class Relationship:
    source: str
    target: str
    kind: str

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Relationship:
        return cls(
            source=str(raw.get("from", raw.get("source")) or "").strip(),
            target=str(raw.get("to", raw.get("target")) or "").strip(),
            kind=str(raw.get("type", raw.get("kind")) or "RELATED_TO").strip().upper(),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.source, "to": self.target, "type": self.kind}


class GraphSnapshot:
    def __init__(
        self,
        components: Iterable[ConfigurationItem] = (),
        relationships: Iterable[Relationship] = (),
    ) -> None:
        items: Dict[str, ConfigurationItem] = {}
        for ci in components:
            if ci.id:
                items[ci.id] = ci
        self._items = items

        forward: Dict[str, List[Relationship]] = defaultdict(list)
        reverse: Dict[str, List[Relationship]] = defaultdict(list)
        edges: List[Relationship] = []
        dropped = 0
        for rel in relationships:
            if rel.source == rel.target or rel.source not in items or rel.target not in items:
                dropped += 1
                continue
            forward[rel.source].append(rel)
            reverse[rel.target].append(rel)
            edges.append(rel)
        if dropped:
            log.debug("Dropped %d relationship(s) with unknown or identical endpoints", dropped)

        self._forward: Dict[str, Tuple[Relationship, ...]] = {k: tuple(v) for k, v in forward.items()}
        self._reverse: Dict[str, Tuple[Relationship, ...]] = {k: tuple(v) for k, v in reverse.items()}
        self._edges: Tuple[Relationship, ...] = tuple(edges)

    @classmethod
    def from_payload(
        cls,
        components: Iterable[Mapping[str, Any]],
        relationships: Iterable[Mapping[str, Any]],
    ) -> GraphSnapshot:
        return cls(
            (ConfigurationItem.from_dict(c) for c in components if isinstance(c, Mapping)),
            (Relationship.from_dict(r) for r in relationships if isinstance(r, Mapping)),
        )

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    @property
    def components(self) -> Tuple[ConfigurationItem, ...]:
        return tuple(self._items.values())

    @property
    def relationships(self) -> Tuple[Relationship, ...]:
        return self._edges

    def component(self, component_id: Optional[str]) -> Optional[ConfigurationItem]:
        if not component_id:
            return None
        return self._items.get(component_id)

    def require(self, component_id: Optional[str]) -> ConfigurationItem:
        ci = self.component(component_id)
        if ci is None:
            raise ComponentNotFound(str(component_id))
        return ci

    def outgoing(self, component_id: str) -> Tuple[Relationship, ...]:
        return self._forward.get(component_id, ())

    def incoming(self, component_id: str) -> Tuple[Relationship, ...]:
        return self._reverse.get(component_id, ())

    def neighbors(self, component_id: str, direction: Direction = Direction.both) -> List[Tuple[str, str]]:
        """Adjacent ``(component_id, relationship_kind)`` pairs, one per neighbor.

        Parallel edges collapse onto the first one seen; outgoing edges are
        listed before incoming ones when ``direction`` is ``both``.
        """
        pairs: List[Tuple[str, str]] = []
        seen: set[str] = set()
        if direction in (Direction.downstream, Direction.both):
            for rel in self.outgoing(component_id):
                if rel.target not in seen:
                    seen.add(rel.target)
                    pairs.append((rel.target, rel.kind))
        if direction in (Direction.upstream, Direction.both):
            for rel in self.incoming(component_id):
                if rel.source not in seen:
                    seen.add(rel.source)
                    pairs.append((rel.source, rel.kind))
        return pairs

    def of_type(self, *types: str) -> List[ConfigurationItem]:
        wanted = set(types)
        return [ci for ci in self._items.values() if ci.type in wanted]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [ci.to_dict() for ci in self._items.values()],
            "relationships": [rel.to_dict() for rel in self._edges],
        }
