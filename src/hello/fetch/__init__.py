import logging
import os
import platform
from logging import NullHandler
from pathlib import Path

logging.getLogger(__name__).addHandler(NullHandler())

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0"

DEFAULT_URL = "https://google.ca"

DEFAULT_CONFIG_FILE_PATH = str(
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "hello-fetch" / "config.json"
)

# The HTTP library and its version are appended by each client factory
USER_AGENT = f"hello-fetch/{__version__} python/{platform.python_version()}"
