"""Binary download helpers."""

from __future__ import annotations

import shutil
import ssl
import uuid
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from setupbuildx import __version__
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

USER_AGENT = f"setupbuildx/{__version__}"


def secure_urlopen(url: str, timeout: Optional[float] = None) -> Any:
    """Open an HTTPS URL with certificate verification.

    Args:
        url: URL to open. Only https:// is accepted.
        timeout: Optional socket timeout in seconds.

    Returns:
        The response object from urlopen.

    Raises:
        ValueError: If the URL scheme is not https.
    """
    scheme = urlparse(url).scheme
    if scheme != "https":
        raise ValueError(f"Refusing to download over insecure scheme: {url}")

    request = Request(url, headers={"User-Agent": USER_AGENT})
    context = ssl.create_default_context()
    if timeout is None:
        return urlopen(request, context=context)
    return urlopen(request, context=context, timeout=timeout)


def download_tool(url: str, dest_dir: Path) -> Path:
    """Download a URL to a uniquely named file in dest_dir.

    Args:
        url: Download URL.
        dest_dir: Directory receiving the file (created if missing).

    Returns:
        Path to the downloaded file.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest = dest_dir / str(uuid.uuid4())

    LOGGER.info(f"Downloading {url}")
    try:
        with secure_urlopen(url) as response, open(dest, "wb") as f:
            shutil.copyfileobj(response, f)
    except BaseException:
        dest.unlink(missing_ok=True)
        raise

    LOGGER.debug(f"Downloaded to {dest}")
    return dest
