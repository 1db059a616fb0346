from pathlib import Path
from typing import Union

from .logger import get_logger
from .schema import JobCollection, SchemaError, decode, encode


class SourceError(ValueError):
    """A catalog payload could not be read from its source."""


def load_collection(path: Union[str, Path]) -> JobCollection:
    """Read a catalog JSON file and decode it.

    Raises SourceError if the file cannot be read; SchemaError subclasses
    propagate unchanged.
    """
    path = Path(path)
    logger = get_logger()
    logger.record_load_attempt("file")

    try:
        data = path.read_bytes()
    except OSError as e:
        logger.record_load_failure("file", type(e).__name__)
        logger.error("Catalog file unreadable", path=str(path), error=str(e))
        raise SourceError(f"Cannot read catalog file {path}: {e.strerror or e}") from e

    try:
        collection = decode(data)
    except SchemaError as e:
        logger.record_load_failure("file", type(e).__name__)
        logger.error("Catalog file failed schema check", path=str(path), error=str(e))
        raise

    logger.record_load_success("file", len(collection))
    logger.info("Catalog loaded", path=str(path), entries=len(collection))
    return collection


def save_collection(path: Union[str, Path], collection: JobCollection) -> None:
    """Write collection as JSON, creating parent directories.

    Raises SourceError if the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(encode(collection))
            f.write("\n")
    except OSError as e:
        get_logger().error("Catalog file unwritable", path=str(path), error=str(e))
        raise SourceError(f"Cannot write catalog file {path}: {e.strerror or e}") from e
    get_logger().info("Catalog saved", path=str(path), entries=len(collection))
