"""Finalizer handling for Gslb resources."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from k8gb.api import Gslb

logger = logging.getLogger(__name__)


class _Finalizer(Protocol):
    def finalize(self, gslb: Gslb) -> None: ...


class _GslbUpdater(Protocol):
    def update(self, gslb: Gslb) -> None: ...


def contains(items: Iterable[str], s: str) -> bool:
    """Return True if ``s`` is one of ``items``."""
    return s in items


def remove(items: Iterable[str], s: str) -> list[str]:
    """Return ``items`` without any occurrence of ``s``."""
    return [item for item in items if item != s]


def finalize_gslb(provider: _Finalizer, gslb: Gslb) -> None:
    """Release what the DNS provider holds for ``gslb`` before it is deleted."""
    try:
        provider.finalize(gslb)
    except Exception:
        logger.exception("Can't finalize GSLB")
        raise
    logger.info("Successfully finalized Gslb")


def add_finalizer(client: _GslbUpdater, gslb: Gslb, finalizer: str) -> None:
    """Append ``finalizer`` to the Gslb's finalizers and store the Gslb."""
    logger.info("Adding Finalizer for the Gslb")
    gslb.metadata.finalizers = [*gslb.metadata.finalizers, finalizer]
    try:
        client.update(gslb)
    except Exception:
        logger.exception("Failed to update Gslb with finalizer")
        raise