#!/usr/bin/env python
import sys
from collections.abc import Iterable
from typing import Any
from typing import ClassVar
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

from lxml import etree
from lxml.etree import _Element

from sigep.lib.python_utilities import to_unicode

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class BaseElement:
    """
    A node in an outgoing XML document: a tag, an ordered list of
    children and an optional text leaf.  The text leaf may be flagged
    as CDATA, in which case it is carried as inert character data.

    Elements are combined with ``+``::

        Body() + (Method("consultaCEP") + Element("cep", "70002900"))

    and turned into lxml elements by ``xmlelement()`` when the document
    is serialized.
    """

    children: Optional[List[Self]] = None
    tag: ClassVar[Optional[str]] = None
    nsmap: ClassVar[Optional[Dict[str, str]]] = None
    value: Optional[str] = None
    cdata: bool = False
    attributes: Optional[dict] = None

    def __init__(self, value: Any = None, cdata: bool = False) -> None:
        self.children = []
        self.attributes = {}
        self.value = None
        self.cdata = cdata
        value = to_unicode(value)
        if value is not None:
            self.value = str(value)

    def __add__(
        self, other: Union["BaseElement", Iterable["BaseElement"]]
    ) -> "BaseElement":
        return self.append(other)

    def __str__(self) -> str:
        return etree.tostring(self.xmlelement(), encoding="unicode")

    def xmlelement(self) -> _Element:
        if self.tag is None:
            raise ValueError("Unexpected value None for self.tag")

        if self.attributes is None:
            raise ValueError("Unexpected value None for self.attributes")

        root = etree.Element(self.tag, nsmap=self.nsmap)
        if self.value is not None:
            root.text = etree.CDATA(self.value) if self.cdata else self.value

        for k in self.attributes:
            root.set(k, self.attributes[k])

        self.xmlchildren(root)
        return root

    def xmlchildren(self, root: _Element) -> None:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        for c in self.children:
            root.append(c.xmlelement())

    def append(self, element: Union[Self, Iterable[Self]]) -> Self:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        if isinstance(element, Iterable):
            self.children.extend(element)
        else:
            self.children.append(element)

        return self


class Element(BaseElement):
    """An element with a tag decided at run time, like a SOAP parameter"""

    def __init__(self, tag: str, value: Any = None, cdata: bool = False) -> None:
        if not tag:
            raise ValueError("an element needs a tag")
        self.tag = tag
        super(Element, self).__init__(value=value, cdata=cdata)


class CData(Element):
    def __init__(self, tag: str, value: Any = None) -> None:
        super(CData, self).__init__(tag, value=value, cdata=True)
