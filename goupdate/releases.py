"""
List and download Go toolchain releases from the go.dev catalog
"""
import os
from collections import namedtuple
from contextlib import contextmanager
from functools import cmp_to_key
from typing import Optional, List

import requests

from .config import UpdaterConfig, CATALOG_URL, PRODUCT
from .errors import FetchError, ParseError, DownloadError, WriteError
import logging
logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

Release = namedtuple('Release', ['version', 'stable'])


def _parse_release(entry) -> Release:
    if not isinstance(entry, dict):
        raise ParseError(f'failed to parse the body: expected an object, got {type(entry).__name__}')

    version = entry.get('version')
    stable = entry.get('stable')
    if not isinstance(version, str):
        raise ParseError(f'failed to parse the body: release has no version string ({entry!r:.80})')
    if not isinstance(stable, bool):
        raise ParseError(f'failed to parse the body: release {version} has no stable flag')
    return Release(version, stable)


def get_releases(url: str = CATALOG_URL, session=None) -> List[Release]:
    """
    Retrieve every release listed in the catalog

    Parameters:
        url: Catalog endpoint returning a JSON array of {version, stable} objects
        session: Optional requests session (defaults to the requests module)

    Returns:
        List of Release records, in catalog order
    """
    http = session or requests
    logger.debug('Fetching release catalog from %s', url)
    try:
        resp = http.get(url)
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FetchError(f'failed to get the releases: {e}') from e

    try:
        body = resp.json()
    except ValueError as e:
        raise ParseError(f'failed to parse the body: {e}') from e

    if not isinstance(body, list):
        raise ParseError(f'failed to parse the body: expected a list, got {type(body).__name__}')

    releases = [_parse_release(entry) for entry in body]
    logger.debug('Catalog lists %d releases', len(releases))
    return releases


def _segment_value(segment: str) -> int:
    try:
        return int(segment)
    except ValueError:
        return 0


def compare_versions(a: str, b: str) -> int:
    """
    Order two dotted version strings, newest first.

    Only the first segment that differs textually is compared, as an
    integer (segments that are not numbers count as 0). When one version
    is a prefix of the other, the one with more segments comes first.

    Returns -1 if a sorts before b, 1 if after, 0 if tied.
    """
    parts_a = a.split('.')
    parts_b = b.split('.')

    for seg_a, seg_b in zip(parts_a, parts_b):
        if seg_a != seg_b:
            val_a = _segment_value(seg_a)
            val_b = _segment_value(seg_b)
            if val_a > val_b:
                return -1
            if val_a < val_b:
                return 1
            return 0

    if len(parts_a) > len(parts_b):
        return -1
    if len(parts_a) < len(parts_b):
        return 1
    return 0


def sort_versions(versions) -> List[str]:
    """Sort version strings newest first. Ties keep their original order."""
    return sorted(versions, key=cmp_to_key(compare_versions))


def _strip_prefix(version: str, prefix: str) -> str:
    if prefix and version.startswith(prefix):
        return version[len(prefix):]
    return version


def stable_versions(releases, prefix: str = PRODUCT) -> List[str]:
    """
    Version strings of the stable releases, prefix removed, newest first

    Parameters:
        releases: Release records from get_releases
        prefix: Leading text to strip from each version (eg 'go')
    """
    versions = [_strip_prefix(r.version, prefix) for r in releases if r.stable]
    return sort_versions(versions)


def list_available_versions(config: UpdaterConfig, session=None) -> List[str]:
    """
    List the stable versions available for installation, newest first
    """
    releases = get_releases(config.catalog_url, session=session)
    return stable_versions(releases, prefix=config.product)


def latest_version(config: UpdaterConfig, session=None) -> Optional[str]:
    """
    Get the newest stable version, or None if the catalog has none
    """
    versions = list_available_versions(config, session=session)
    if versions:
        return versions[0]
    return None


def download_url(version: str, config: UpdaterConfig) -> str:
    """
    URL of the archive for a version on the configured platform,
    eg https://go.dev/dl/go1.21.3.linux-amd64.tar.gz
    """
    return f'{config.download_base}/{config.product}{version}.{config.platform}.tar.gz'


@contextmanager
def open_scratch_file(path: str):
    """
    Create (or truncate) the scratch file that receives the archive.

    The handle is closed on the way out unless the file has already been
    removed from disk, in which case closing is skipped.
    """
    try:
        f = open(path, 'wb')
    except OSError as e:
        raise WriteError(f'failed to create the output file: {e}') from e

    try:
        yield f
    finally:
        if os.path.exists(path):
            try:
                f.close()
            except OSError as e:
                print(f'failed to close the file: {e}')


def download_release(url: str, destination, session=None, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Stream a release archive into an open binary file

    Parameters:
        url: Archive URL (see download_url)
        destination: Writable binary file object
        session: Optional requests session (defaults to the requests module)
        chunk_size: Bytes read from the response at a time

    Returns:
        Number of bytes written

    A partially written destination is left as it is on failure.
    """
    http = session or requests
    print(f'Downloading {url}...')
    written = 0
    try:
        resp = http.get(url, stream=True)
        try:
            resp.raise_for_status()
            for chunk in resp.iter_content(chunk_size=chunk_size):
                if not chunk:
                    continue
                try:
                    destination.write(chunk)
                except OSError as e:
                    raise WriteError(f'failed to write to the file: {e}') from e
                written += len(chunk)
        finally:
            resp.close()
    except requests.exceptions.RequestException as e:
        raise DownloadError(f'failed to get the file: {e}') from e

    try:
        destination.flush()
    except OSError as e:
        raise WriteError(f'failed to write to the file: {e}') from e

    logger.info('Downloaded %d bytes from %s', written, url)
    return written
