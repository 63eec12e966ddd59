"""Desktop shell front door.

Window lifecycle control and the IPC bridge that gives the shell's
renderer the same file operations as the HTTP API.
"""

from shell.ipc import IpcBridge, IpcError
from shell.window import Window, WindowController, WindowOptions

__all__ = [
    "IpcBridge",
    "IpcError",
    "Window",
    "WindowController",
    "WindowOptions",
]
