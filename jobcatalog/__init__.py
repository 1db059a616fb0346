__version__ = "0.1.0"

from .schema import (  # noqa: E402
    JobCollection,
    JobEntry,
    MalformedInput,
    MissingCollectionField,
    MissingField,
    SchemaError,
    TypeMismatch,
    decode,
    encode,
)
