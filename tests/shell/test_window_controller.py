"""Unit tests for WindowController."""

import pytest

from shell.window import WindowController, WindowOptions


class FakeWindow:
    """Records what the controller asked the toolkit window to do."""

    def __init__(self, options: WindowOptions):
        self.options = options
        self.loaded: list[str] = []
        self.dev_tools_open = False
        self.closed_callbacks = []

    def load_file(self, path: str) -> None:
        self.loaded.append(path)

    def open_dev_tools(self) -> None:
        self.dev_tools_open = True

    def on_closed(self, callback) -> None:
        self.closed_callbacks.append(callback)

    def close(self) -> None:
        for callback in self.closed_callbacks:
            callback()


@pytest.fixture
def created_windows():
    return []


@pytest.fixture
def controller(created_windows):
    def factory(options: WindowOptions) -> FakeWindow:
        window = FakeWindow(options)
        created_windows.append(window)
        return window

    return WindowController(factory=factory)


class TestCreate:
    def test_starts_without_window(self, controller):
        assert controller.window is None
        assert controller.has_window is False

    def test_create_loads_entry_page_and_opens_dev_tools(self, controller):
        window = controller.create()

        assert controller.window is window
        assert window.loaded == ["index.html"]
        assert window.dev_tools_open is True
        assert (window.options.width, window.options.height) == (1200, 800)

    def test_dev_tools_can_be_disabled(self):
        controller = WindowController(
            factory=lambda options: FakeWindow(options),
            options=WindowOptions(open_dev_tools=False),
        )

        assert controller.create().dev_tools_open is False

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            WindowOptions(width=0)


class TestLifecycle:
    def test_toolkit_close_drops_reference(self, controller):
        window = controller.create()

        window.close()

        assert controller.window is None

    def test_activate_recreates_when_no_window(self, controller, created_windows):
        controller.create()
        controller.window.close()

        window = controller.on_activate()

        assert len(created_windows) == 2
        assert controller.window is window

    def test_activate_keeps_open_window(self, controller, created_windows):
        window = controller.create()

        assert controller.on_activate() is window
        assert len(created_windows) == 1

    @pytest.mark.parametrize(
        "platform,should_quit",
        [("linux", True), ("win32", True), ("darwin", False)],
    )
    def test_all_closed_quits_except_on_macos(self, controller, platform, should_quit):
        assert controller.on_all_closed(platform) is should_quit
