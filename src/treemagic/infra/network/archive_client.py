from __future__ import annotations

"""
Database Archive Download Client.

Fetches the remote archive into memory. Every attempt is raced against a
fixed timeout: the GET runs on a worker thread and the caller only waits
for it for a bounded time. An abandoned attempt is not interrupted, its
result is simply ignored.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional

import requests

from treemagic.domain.constants import ATTEMPT_TIMEOUT_SECONDS, DOWNLOAD_RETRIES
from treemagic.domain.errors import NetworkFailure
from treemagic.infra.network.common import USER_AGENT

logger = logging.getLogger(__name__)


def fetch_archive(
        url: str,
        retries: int = DOWNLOAD_RETRIES,
        attempt_timeout: float = ATTEMPT_TIMEOUT_SECONDS,
) -> Optional[bytes]:
    """
    Download the archive body, retrying sequentially on failure.

    No delay is applied between attempts.

    Args:
        url: Archive location.
        retries: Total number of attempts.
        attempt_timeout: Seconds each attempt may take before it is abandoned.

    Returns:
        Optional[bytes]: Body of the first successful attempt, or None once
                         every attempt has failed.
    """
    executor = ThreadPoolExecutor(
        max_workers=max(1, retries),
        thread_name_prefix="ArchiveDownload",
    )
    try:
        for attempt in range(1, retries + 1):
            logger.debug(f"Download attempt {attempt}/{retries}: {url}")
            future = executor.submit(_get_body, url, attempt_timeout)
            try:
                return future.result(timeout=attempt_timeout)
            except FutureTimeoutError:
                future.cancel()
                logger.error(f"Download failed: timed out in {attempt_timeout}s")
            except (requests.exceptions.RequestException, NetworkFailure) as e:
                logger.error(f"Download failed: {e}")
            except Exception as e:
                logger.error(f"Download failed: unexpected error: {e}")

            if attempt < retries:
                logger.warning("Retrying ...")
        return None
    finally:
        executor.shutdown(wait=False)


def _get_body(url: str, timeout: float) -> bytes:
    """Perform a single GET and return its non-empty body."""
    headers = {"User-Agent": USER_AGENT}
    response = requests.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()

    body = response.content
    if not body:
        raise NetworkFailure(f"Empty response body from {url}")
    return body
