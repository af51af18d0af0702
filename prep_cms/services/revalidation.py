# revalidation.py
from __future__ import annotations

import logging
from typing import Callable


logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class Revalidator:
    """Collects admin view paths made stale by a mutation.

    One instance lives for one request; the routers hand the collected paths
    back to the UI so it can refetch those views.
    """

    def __init__(self, listeners: list[Listener] | None = None):
        self._listeners: list[Listener] = list(listeners or [])
        self._paths: list[str] = []

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def revalidate(self, path: str) -> None:
        if path in self._paths:
            return
        self._paths.append(path)
        logger.debug("revalidate path=%s", path)
        for listener in self._listeners:
            listener(path)
