#!/usr/bin/env python
from typing import Dict
from typing import Optional

nsmap: Dict[str, str] = {
    "soapenv": "http://schemas.xmlsoap.org/soap/envelope/",
    "cli": "http://cliente.bean.master.sigep.bsb.correios.com.br/",
}


def ns(prefix: str, tag: Optional[str] = None) -> str:
    name = "{%s}" % nsmap[prefix]
    if tag is not None:
        name = "%s%s" % (name, tag)
    return name
