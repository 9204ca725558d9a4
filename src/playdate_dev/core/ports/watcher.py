from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any, Protocol

ChangeCallback = Callable[[set[Path]], Coroutine[Any, Any, None]]


class FileWatcherPort(Protocol):
    """A backend that calls its change callback whenever project files change."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...

    async def wait(self) -> None: ...
