__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'specopts'
__author__ = 'specopts developers'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

from .bundles import *
from .config import *
from .faults import *
from .hooks import *
from .options import *
from .parser import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the descriptor
__all__ += options.__all__  # type: ignore[attr-defined]
# Load the exposed API of the registry and parse loop
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the runner hooks, configuration and bundles
__all__ += hooks.__all__  # type: ignore[attr-defined]
__all__ += config.__all__  # type: ignore[attr-defined]
__all__ += bundles.__all__  # type: ignore[attr-defined]
