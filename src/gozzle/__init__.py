"""gozzle: declarative HTTP request builder and dispatcher."""

import logging

from .networking import *  # noqa: F401,F403
from .networking import __all__ as _networking_all

__version__ = "1.0.0"
__all__ = list(_networking_all) + ["__version__"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
