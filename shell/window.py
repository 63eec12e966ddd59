"""Window lifecycle for the desktop shell.

The shell owns at most one main window. ``WindowController`` holds that
reference explicitly and moves it through its lifecycle; the actual window
toolkit is plugged in through a factory so the controller stays
toolkit-agnostic.
"""

import logging
import sys
from typing import Callable, Protocol

from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


class WindowOptions(BaseModel):
    """Settings used when creating the main window.

    Attributes:
        width: Initial window width in pixels.
        height: Initial window height in pixels.
        entry_page: Page loaded into a new window.
        open_dev_tools: Whether developer tools open with the window.
    """

    width: int = Field(1200, gt=0)
    height: int = Field(800, gt=0)
    entry_page: str = "index.html"
    open_dev_tools: bool = True


class Window(Protocol):
    """What the controller needs from a toolkit window."""

    def load_file(self, path: str) -> None: ...

    def open_dev_tools(self) -> None: ...

    def on_closed(self, callback: Callable[[], None]) -> None: ...


WindowFactory = Callable[[WindowOptions], Window]


class WindowController:
    """Owns the shell's main window and handles its lifecycle events.

    Transitions:
        create(): build a window, load the entry page, remember it.
        on_closed(): forget the window once the toolkit reports it closed.
        on_activate(): re-create the window if none is open (dock click on macOS).
        on_all_closed(): decide whether the application should quit.

    Example:
        controller = WindowController(factory=make_toolkit_window)
        controller.create()
    """

    def __init__(self, factory: WindowFactory, options: WindowOptions | None = None) -> None:
        self._factory = factory
        self.options = options or WindowOptions()
        self._window: Window | None = None

    @property
    def window(self) -> Window | None:
        """The open main window, or None."""
        return self._window

    @property
    def has_window(self) -> bool:
        return self._window is not None

    def create(self) -> Window:
        """Create the main window and load the entry page.

        Returns:
            The new window.
        """
        window = self._factory(self.options)
        window.load_file(self.options.entry_page)
        if self.options.open_dev_tools:
            window.open_dev_tools()
        window.on_closed(self.on_closed)

        self._window = window
        logger.info(
            "Created main window %dx%d with %s",
            self.options.width,
            self.options.height,
            self.options.entry_page,
        )
        return window

    def on_closed(self) -> None:
        """Drop the reference to the closed window."""
        self._window = None
        logger.info("Main window closed")

    def on_activate(self) -> Window:
        """Return the main window, creating one if none is open."""
        if self._window is None:
            return self.create()
        return self._window

    def on_all_closed(self, platform: str = sys.platform) -> bool:
        """Return whether the app should quit after its last window closed.

        macOS apps conventionally stay active until the user quits explicitly.
        """
        return platform != "darwin"
