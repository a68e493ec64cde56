#!/usr/bin/env python
from typing import ClassVar
from typing import Dict

from .base import BaseElement
from sigep.lib.namespace import ns
from sigep.lib.namespace import nsmap


class SoapElement(BaseElement):
    nsmap: ClassVar[Dict[str, str]] = nsmap


# Envelope
class Envelope(SoapElement):
    tag: ClassVar[str] = ns("soapenv", "Envelope")


class Header(SoapElement):
    tag: ClassVar[str] = ns("soapenv", "Header")


class Body(SoapElement):
    tag: ClassVar[str] = ns("soapenv", "Body")


# Operations
class Method(SoapElement):
    """The ``cli:<name>`` element naming the remote operation"""

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("a remote method name is needed")
        self.name = name
        self.tag = ns("cli", name)
        super(Method, self).__init__()
