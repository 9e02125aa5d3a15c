from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import json
import logging
import random
import threading
from typing import Literal
import weakref


LOGGER = logging.getLogger(__name__)

MarkIDScheme = Literal["global", "namespaced"]
DatumKind = Literal["unparseable", "untagged", "tagged", "invalid-tag"]

# Type tags whose elements are containers rather than addressable marks.
UNADDRESSABLE_TYPES = frozenset({"axis", "legend", "nested-chart"})
NAMESPACE_BLOCK = 1000
UNIQUE_ID_LENGTH = 11

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class DatumDescriptor:
    """A data-datum payload parsed once into the kinds identity cares about."""

    raw: str | None
    kind: DatumKind
    type_tag: str | None = None
    mark_field: str | None = None


@lru_cache(maxsize=4096)
def parse_datum(payload: str | None) -> DatumDescriptor:
    """Parse a data-datum payload; a leading JSON array unwraps to its first item."""

    if not payload:
        return DatumDescriptor(raw=payload, kind="unparseable")
    try:
        data = json.loads(payload)
    except ValueError:
        LOGGER.debug("data-datum is not JSON; using it verbatim: %.60s", payload)
        return DatumDescriptor(raw=payload, kind="unparseable")
    if isinstance(data, list):
        if not data:
            return DatumDescriptor(raw=payload, kind="unparseable")
        data = data[0]
    if data is None:
        return DatumDescriptor(raw=payload, kind="unparseable")
    if not isinstance(data, dict):
        return DatumDescriptor(raw=payload, kind="untagged")
    tag = data.get("_TYPE")
    if not tag:
        return DatumDescriptor(raw=payload, kind="untagged")
    if not isinstance(tag, str):
        # Still a data-bound mark, but the tag cannot be classified.
        LOGGER.debug("data-datum _TYPE is not a string: %r", tag)
        return DatumDescriptor(raw=payload, kind="invalid-tag", type_tag=str(tag))
    mark_field = data.get("_MARKID")
    return DatumDescriptor(
        raw=payload,
        kind="tagged",
        type_tag=tag,
        mark_field=None if mark_field is None else str(mark_field),
    )


def _as_descriptor(datum: str | DatumDescriptor | None) -> DatumDescriptor:
    if isinstance(datum, DatumDescriptor):
        return datum
    return parse_datum(datum)


def get_element_class_type(datum: str | DatumDescriptor | None) -> list[str]:
    """Class tags for an element, derived from its data-datum payload."""

    descriptor = _as_descriptor(datum)
    if descriptor.kind in ("unparseable", "invalid-tag"):
        return []
    if descriptor.kind == "untagged":
        return ["mark"]
    tag = descriptor.type_tag or ""
    if tag.startswith("axis-") or tag.startswith("legend-"):
        return ["mark", tag]
    if tag in UNADDRESSABLE_TYPES:
        return [tag]
    if descriptor.mark_field is None:
        return ["mark", tag]
    return ["mark", descriptor.mark_field, tag]


class IdentityService:
    """Identifier state for one render session.

    Owns the opaque-id pool, the mark-id counters and the object-hash table.
    All operations are serialized by a re-entrant lock, so one service can
    be shared by renders on several threads.
    """

    def __init__(self, *, mark_id_scheme: MarkIDScheme = "global", seed: int | None = None) -> None:
        if mark_id_scheme not in ("global", "namespaced"):
            raise ValueError(f"unknown mark id scheme: {mark_id_scheme}")
        self.mark_id_scheme = mark_id_scheme
        self._lock = threading.RLock()
        self._random = random.Random(seed)
        self._issued: set[str] = set()
        self._mark_counter = 0
        self._namespace_counters: dict[str, int] = {}
        self._namespace_order: dict[str, int] = {}
        self._object_hashes: dict[int, str] = {}
        self._pinned: dict[int, object] = {}
        self._hash_index = 1

    def unique_id(self) -> str:
        with self._lock:
            while True:
                token = "".join(self._random.choice(_BASE36) for _ in range(UNIQUE_ID_LENGTH))
                if token not in self._issued:
                    self._issued.add(token)
                    return token

    def release_id(self, token: str) -> None:
        with self._lock:
            self._issued.discard(token)

    def is_issued(self, token: str) -> bool:
        with self._lock:
            return token in self._issued

    def uuid(self) -> str:
        with self._lock:
            parts = [f"{self._random.randrange(0x10000):04x}" for _ in range(8)]
        return f"{parts[0]}{parts[1]}-{parts[2]}-{parts[3]}-{parts[4]}-{parts[5]}{parts[6]}{parts[7]}"

    def object_hash(self, obj: object) -> str:
        """Stable `<#n>` label for a live object; forgotten when it is collected.

        Objects that cannot be weakly referenced (dicts, lists, ...) are held
        by the service so their id cannot be reused while labelled.
        """

        key = id(obj)
        with self._lock:
            existing = self._object_hashes.get(key)
            if existing is not None:
                return existing
            label = f"<#{self._hash_index}>"
            try:
                weakref.finalize(obj, self._forget_object, key)
            except TypeError:
                self._pinned[key] = obj
            self._hash_index += 1
            self._object_hashes[key] = label
            return label

    def release_object(self, obj: object) -> None:
        """Drop the label (and any pin) held for `obj`."""

        key = id(obj)
        with self._lock:
            self._pinned.pop(key, None)
            self._object_hashes.pop(key, None)

    def _forget_object(self, key: int) -> None:
        with self._lock:
            self._object_hashes.pop(key, None)

    def mark_id(self, datum: str | DatumDescriptor | None) -> str | None:
        descriptor = _as_descriptor(datum)
        if not descriptor.raw:
            return None
        if descriptor.kind == "unparseable":
            return descriptor.raw
        if descriptor.type_tag in UNADDRESSABLE_TYPES:
            return None
        with self._lock:
            if self.mark_id_scheme == "global":
                self._mark_counter += 1
                number = self._mark_counter
            else:
                namespace = descriptor.type_tag or ""
                block = self._namespace_order.setdefault(namespace, len(self._namespace_order))
                count = self._namespace_counters.get(namespace, 0) + 1
                self._namespace_counters[namespace] = count
                number = block * NAMESPACE_BLOCK + count
        return f"mark{number}"

    def reset_mark_id(self) -> None:
        with self._lock:
            self._mark_counter = 0
            self._namespace_counters.clear()
            self._namespace_order.clear()
        LOGGER.debug("mark id counters reset (%s scheme)", self.mark_id_scheme)


_DEFAULT_IDENTITY = IdentityService()


def default_identity() -> IdentityService:
    """The process-wide service used when callers do not pass their own."""

    return _DEFAULT_IDENTITY


def unique_id() -> str:
    return _DEFAULT_IDENTITY.unique_id()


def uuid() -> str:
    return _DEFAULT_IDENTITY.uuid()


def object_hash(obj: object) -> str:
    return _DEFAULT_IDENTITY.object_hash(obj)


def mark_id(datum: str | DatumDescriptor | None) -> str | None:
    return _DEFAULT_IDENTITY.mark_id(datum)


def reset_mark_id() -> None:
    _DEFAULT_IDENTITY.reset_mark_id()
