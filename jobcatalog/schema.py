"""
Job catalog schema and decoder.

A catalog payload is a JSON object with an ``entries`` list; every entry
carries the six fields listed in ENTRY_FIELDS. Decoding is all-or-nothing:
either every entry is well formed and a JobCollection comes back, or a
SchemaError subclass is raised describing the first problem found.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

U32_MAX = 2**32 - 1

COLLECTION_FIELD = "entries"


class FieldSpec(NamedTuple):
    name: str
    kind: str
    required: bool = True


ENTRY_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("key", "u32"),
    FieldSpec("name", "str"),
    FieldSpec("details", "str"),
    FieldSpec("tools", "str"),
    FieldSpec("screen", "str"),
    FieldSpec("link", "str"),
)


class SchemaError(ValueError):
    """
    Base class for structural decode failures.

    Attributes:
        message: Error description
        field: Name of the offending member, if any
        index: Position of the offending entry in the list, if any
    """

    def __init__(self, message: str, field: Optional[str] = None, index: Optional[int] = None):
        self.message = message
        self.field = field
        self.index = index

        where = []
        if index is not None:
            where.append(f"entry {index}")
        if field is not None:
            where.append(f"field '{field}'")
        text = f"{', '.join(where)}: {message}" if where else message
        super().__init__(text)


class MalformedInput(SchemaError):
    """Payload is not a JSON object at all."""


class MissingCollectionField(SchemaError):
    """Top-level entries member is absent or not a list."""


class MissingField(SchemaError):
    """A required entry field is absent."""


class TypeMismatch(SchemaError):
    """A member is present but holds the wrong kind of value."""


def _is_u32(v: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a key
    return isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= U32_MAX


_KIND_CHECKS = {
    "u32": (_is_u32, "an unsigned 32-bit integer"),
    "str": (lambda v: isinstance(v, str), "a string"),
}


@dataclass(frozen=True)
class JobEntry:
    """One catalog record."""

    key: int
    name: str
    details: str
    tools: str
    screen: str
    link: str

    def to_dict(self) -> Dict[str, Any]:
        return {spec.name: getattr(self, spec.name) for spec in ENTRY_FIELDS}


@dataclass(frozen=True)
class JobCollection:
    """Ordered, read-only sequence of JobEntry values."""

    entries: Tuple[JobEntry, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable from direct construction but store a tuple
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[JobEntry]:
        return iter(self.entries)

    def __getitem__(self, i: int) -> JobEntry:
        return self.entries[i]

    def to_dict(self) -> Dict[str, Any]:
        return {COLLECTION_FIELD: [e.to_dict() for e in self.entries]}


def parse_payload(data: Union[str, bytes, bytearray]) -> Any:
    """Parse JSON text or bytes into a generic tree."""
    try:
        return json.loads(data)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting recurses
        raise MalformedInput(f"payload is not valid JSON ({e})") from e


def _decode_entry(item: Any, index: int) -> JobEntry:
    if not isinstance(item, Mapping):
        raise TypeMismatch(
            f"expected an object, got {type(item).__name__}", index=index
        )

    values: Dict[str, Any] = {}
    for spec in ENTRY_FIELDS:
        if spec.name not in item:
            if spec.required:
                raise MissingField("missing required field", field=spec.name, index=index)
            continue
        value = item[spec.name]
        check, expected = _KIND_CHECKS[spec.kind]
        if not check(value):
            raise TypeMismatch(
                f"expected {expected}, got {type(value).__name__} {value!r}",
                field=spec.name,
                index=index,
            )
        values[spec.name] = value
    return JobEntry(**values)


def decode(raw: Any) -> JobCollection:
    """
    Decode a raw catalog payload into a JobCollection.

    Args:
        raw: Parsed JSON tree (a mapping), or JSON text as str/bytes

    Returns:
        JobCollection with entries in payload order

    Raises:
        MalformedInput: text is not JSON, or the root is not an object
        MissingCollectionField: 'entries' is absent or not a list
        MissingField: an entry lacks one of the six fields
        TypeMismatch: a field holds the wrong kind of value
    """
    if isinstance(raw, (str, bytes, bytearray)):
        raw = parse_payload(raw)

    if not isinstance(raw, Mapping):
        raise MalformedInput(f"payload root must be an object, got {type(raw).__name__}")

    if COLLECTION_FIELD not in raw:
        raise MissingCollectionField("missing required field", field=COLLECTION_FIELD)
    items = raw[COLLECTION_FIELD]
    if not isinstance(items, list):
        raise MissingCollectionField(
            f"expected a list, got {type(items).__name__}", field=COLLECTION_FIELD
        )

    entries: List[JobEntry] = [_decode_entry(item, i) for i, item in enumerate(items)]
    return JobCollection(tuple(entries))


def encode(collection: JobCollection, indent: Optional[int] = 2) -> str:
    """Serialize a collection back into the JSON shape decode() accepts."""
    return json.dumps(collection.to_dict(), indent=indent, ensure_ascii=False)
