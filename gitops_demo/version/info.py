"""Process-wide build metadata holder and read accessor.

Build metadata is installed once at process start by the entrypoint. Request
handling code only reads it through `version_get_info`.
"""

from __future__ import annotations

import platform
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from gitops_demo.domain import BuildInfo, BuildMetadata

_build_metadata = BuildMetadata()
_override_lock = threading.RLock()


def version_configure(metadata: BuildMetadata) -> None:
    """Install process-wide build metadata before serving requests.

    Installation waits for any active `version_override` block to exit.

    Args:
        metadata: Build metadata resolved from the packaging environment.

    Returns:
        None: Metadata is stored as process-wide state.

    Raises:
        ValueError: Raised when metadata is None.
    """

    global _build_metadata

    if metadata is None:
        raise ValueError("metadata must not be None")
    with _override_lock:
        _build_metadata = metadata


def version_get_metadata() -> BuildMetadata:
    """Return the currently installed build metadata.

    Returns:
        BuildMetadata: Current process-wide build metadata.
    """

    return _build_metadata


def version_get_info() -> BuildInfo:
    """Return an immutable snapshot of build metadata and interpreter version.

    Returns:
        BuildInfo: Snapshot read fresh on every call.
    """

    metadata = _build_metadata
    return BuildInfo(
        tag=metadata.tag,
        commit=metadata.commit,
        build_time=metadata.build_time,
        python_version=platform.python_version(),
    )


@contextmanager
def version_override(
    tag: str | None = None,
    commit: str | None = None,
    build_time: str | None = None,
) -> Iterator[BuildMetadata]:
    """Temporarily replace build metadata fields for test scenarios.

    Overrides hold a process-wide lock for their whole duration, so concurrent
    overrides are serialized. The previous metadata is restored on exit.

    Args:
        tag: Optional replacement tag.
        commit: Optional replacement commit hash.
        build_time: Optional replacement build timestamp.

    Yields:
        BuildMetadata: Metadata active inside the block.
    """

    global _build_metadata

    with _override_lock:
        previous_metadata = _build_metadata
        changes = {
            name: value
            for name, value in (("tag", tag), ("commit", commit), ("build_time", build_time))
            if value is not None
        }
        _build_metadata = replace(previous_metadata, **changes)
        try:
            yield _build_metadata
        finally:
            _build_metadata = previous_metadata
