from __future__ import annotations

"""Speech collaborator.

The session core never speaks; renderers call a Speaker with the plain text
of the current item. Voice selection and playback live behind this protocol.
"""

from typing import Callable, List, Optional, Protocol


class Speaker(Protocol):
    def speak(self, text: str | None) -> None: ...


class ConsoleSpeaker:
    """Prints what would be spoken. Used by the terminal runner."""

    def __init__(self, enabled: bool = True, out: Optional[Callable[[str], None]] = None) -> None:
        self.enabled = enabled
        self._out = out or print

    def speak(self, text: str | None) -> None:
        if not self.enabled or not text:
            return
        self._out(f"🔊 {text}")


class RecordingSpeaker:
    """Keeps spoken lines in memory."""

    def __init__(self) -> None:
        self.spoken: List[str] = []

    def speak(self, text: str | None) -> None:
        if text:
            self.spoken.append(text)
