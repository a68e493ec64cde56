#!/usr/bin/env python
import logging

__version__ = "0.1.0"

from .sigepclient import get_client
from .sigepclient import SigepClient

## Silence notification of no default logging handler
log = logging.getLogger("sigep")


class NullHandler(logging.Handler):
    def emit(self, record) -> None:
        pass


log.addHandler(NullHandler())

__all__ = ["__version__", "SigepClient", "get_client"]
