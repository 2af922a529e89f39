"""
Lifecycle hooks for the surrounding spec runner.

Options such as -V/--verbose and -m/--marker do not act at parse time; they
attach small objects that the runner calls back at well-known points of a run:

- Event.START: once, before any spec file is loaded, with the list of files.
- Event.LOAD: every time a spec file is loaded, with that file.

Hook implementations subclass Hook and override only what they need; Hooks
keeps them in registration order per event and dispatches to them.
"""
import logging
from collections import defaultdict
from enum import Enum

from rich.console import Console
from rich.text import Text

logger = logging.getLogger(__name__)

console = Console()


class Event(Enum):
    START = "start"
    LOAD = "load"


class Hook:
    """
    Base lifecycle hook; every callback is an optional no-op.
    """

    def start(self, files):
        pass

    def load(self, file):
        pass


class Hooks:
    """
    Ordered hook registry keyed by Event.
    """

    def __init__(self):
        self._hooks = defaultdict(list)

    def register(self, event, hook, /):
        if not isinstance(event, Event):
            raise TypeError("register() first argument must be an Event")
        if not isinstance(hook, Hook):
            raise TypeError("register() second argument must be a Hook")
        self._hooks[event].append(hook)
        return hook

    def __getitem__(self, event):
        return tuple(self._hooks.get(event, ()))

    def __len__(self):
        return sum(map(len, self._hooks.values()))

    def start(self, files):
        files = list(files)
        for hook in self._hooks[Event.START]:
            logger.debug("start hook %r", hook)
            hook.start(files)

    def load(self, file):
        for hook in self._hooks[Event.LOAD]:
            logger.debug("load hook %r for %r", hook, file)
            hook.load(file)


class FileWidthHook(Hook):
    """
    Prints each loaded file on its own line, padded to the widest file name.
    """

    def __init__(self):
        self.width = 0

    def start(self, files):
        self.width = max(map(len, files), default=0)

    def load(self, file):
        console.print(Text("\n" + file.ljust(self.width)), end="", soft_wrap=True)


class MarkerHook(Hook):
    """
    Prints a fixed marker every time a file is loaded.
    """

    def __init__(self, marker):
        if not isinstance(marker, str):
            raise TypeError("MarkerHook() argument must be a string")
        self.marker = marker

    def load(self, file):
        console.print(Text(self.marker), end="", soft_wrap=True)

    def __repr__(self):
        return "MarkerHook(%r)" % self.marker


__all__ = (
    "Event",
    "Hook",
    "Hooks",
    "FileWidthHook",
    "MarkerHook",
)
