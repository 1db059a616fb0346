"""Fetch a catalog payload over HTTP and decode it."""

import requests

from .env import DEFAULT_HTTP_TIMEOUT, DEFAULT_MAX_RETRIES
from .logger import get_logger
from .retry import RetryError, TransientHTTPError, exponential_backoff, should_retry_http_status
from .schema import JobCollection, SchemaError, decode
from .storage import SourceError

RETRYABLE_EXCEPTIONS = (
    requests.exceptions.Timeout,
    requests.exceptions.ConnectionError,
    TransientHTTPError,
)


def _get(url: str, timeout: float) -> requests.Response:
    resp = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
    if should_retry_http_status(resp.status_code):
        raise TransientHTTPError(resp.status_code, url)
    return resp


def fetch_response(
    url: str,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = 1.0,
) -> requests.Response:
    """GET a URL, retrying timeouts, connection errors and retryable statuses.

    Raises:
        SourceError: on any HTTP error, exhausted retries, or request failure
    """
    logger = get_logger()

    def on_retry(attempt, exc, delay):
        logger.warning("Catalog fetch retry", url=url, attempt=attempt, delay=delay, error=str(exc))

    getter = exponential_backoff(
        max_retries=max_retries,
        base_delay=base_delay,
        exceptions=RETRYABLE_EXCEPTIONS,
        on_retry=on_retry,
    )(_get)

    try:
        resp = getter(url, timeout)
        resp.raise_for_status()
        return resp
    except RetryError as e:
        cause = e.__cause__
        if isinstance(cause, TransientHTTPError):
            error_type = f"HTTPError_{cause.status_code}"
        else:
            error_type = type(cause).__name__
        logger.record_load_failure("http", error_type)
        logger.error("Catalog fetch gave up", url=url, attempts=e.attempts, error=str(cause))
        raise SourceError(f"Catalog fetch failed after {e.attempts} attempts: {url} ({cause})") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_load_failure("http", f"HTTPError_{status}")
        if status == 404:
            logger.warning("Catalog URL not found", url=url, status=404)
            raise SourceError(f"Catalog URL not found (404): {url}") from e
        logger.error("Catalog request failed", url=url, status=status)
        raise SourceError(f"Catalog request failed ({status}): {url}") from e
    except requests.exceptions.RequestException as e:
        logger.record_load_failure("http", "RequestException")
        logger.error("Catalog request error", url=url, error=str(e))
        raise SourceError(f"Catalog request error: {e}") from e


def fetch_collection(
    url: str,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = 1.0,
) -> JobCollection:
    """Download a catalog from url and decode the response body."""
    logger = get_logger()
    logger.record_load_attempt("http")

    resp = fetch_response(url, timeout=timeout, max_retries=max_retries, base_delay=base_delay)

    try:
        collection = decode(resp.content)
    except SchemaError as e:
        logger.record_load_failure("http", type(e).__name__)
        logger.error("Catalog response failed schema check", url=url, error=str(e))
        raise

    logger.record_load_success("http", len(collection))
    logger.info("Catalog fetched", url=url, entries=len(collection))
    return collection
