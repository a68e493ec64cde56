#!/usr/bin/env python
"""
Elements of the ``correioslog`` document, the dispatch manifest
carried inside the ``fechaPlpVariosServicos`` call.  The document has
no namespace.  Leaf fields are plain ``Element(tag, value)`` objects.
"""
from typing import ClassVar

from .base import BaseElement


class CorreiosLog(BaseElement):
    tag: ClassVar[str] = "correioslog"


class Plp(BaseElement):
    tag: ClassVar[str] = "plp"


class Remetente(BaseElement):
    tag: ClassVar[str] = "remetente"


class ObjetoPostal(BaseElement):
    tag: ClassVar[str] = "objeto_postal"


class Destinatario(BaseElement):
    tag: ClassVar[str] = "destinatario"


class Nacional(BaseElement):
    tag: ClassVar[str] = "nacional"


class ServicoAdicional(BaseElement):
    tag: ClassVar[str] = "servico_adicional"


class DimensaoObjeto(BaseElement):
    tag: ClassVar[str] = "dimensao_objeto"
