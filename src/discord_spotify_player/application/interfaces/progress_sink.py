"""Port interface for reporting progress text back to the requester."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ProgressSink(ABC):
    """A single updatable status message.

    The first ``send`` posts the message; later calls replace its content.
    """

    @abstractmethod
    async def send(self, content: str) -> None:
        ...
