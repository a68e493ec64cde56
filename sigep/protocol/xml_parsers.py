"""
Pure functions for parsing SIGEP XML responses.

All functions in this module are pure - they take XML in and return
structured data out, with no side effects or I/O.

Responses are first turned into a generic tree of dicts:

* an element becomes a dict keyed by ``prefix$localname`` (or just
  ``localname`` when the element has no prefix),
* its text, if any, is found under the pseudo-field ``"$t"``,
* attributes are plain keys,
* a tag occurring more than once among siblings becomes a list, a tag
  occurring once stays a single dict.

The last rule is how the service itself behaves: a result with one
item is not distinguishable from a scalar result.  The decoders
further down turn the tree into the result types, raising
``DecodeError`` when an expected field is missing.
"""

import logging
import re
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

from lxml import etree
from lxml.etree import _Element

from sigep.lib import error

from .types import ClientInfo
from .types import ObjectHistory
from .types import TrackingEvent
from .types import ZipCodeInfo

log = logging.getLogger(__name__)

TEXT = "$t"

## Prefixes seen wrapping the envelope, tried in this order
ENVELOPE_ALIASES = ("soap", "soapenv")

## Event types carrying an origin and a destination
TRANSFER_EVENTS = ("DO", "RO", "PMT", "TRI")
## Event types closing the history of an object
FINAL_EVENTS = ("BDE", "BDI", "BDR")

_xml_declaration = re.compile(r"^\s*<\?xml[^>]*\?>")


def _tag_key(elem: _Element) -> str:
    localname = etree.QName(elem).localname
    if elem.prefix:
        return "%s$%s" % (elem.prefix, localname)
    return localname


def element_to_tree(elem: _Element) -> Dict[str, Any]:
    """Convert an lxml element to the generic response tree"""
    node: Dict[str, Any] = dict(elem.attrib)
    if elem.text is not None and elem.text.strip():
        node[TEXT] = elem.text
    for child in elem:
        if not isinstance(child.tag, str):
            ## comments and processing instructions
            continue
        key = _tag_key(child)
        value = element_to_tree(child)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]
    return node


def parse_tree(body: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse a XML document into the generic response tree.

    Raises:
        XMLSyntaxError: If body is not valid XML
    """
    parser = etree.XMLParser(remove_blank_text=True)
    if isinstance(body, bytes):
        root = etree.fromstring(body, parser)
    else:
        ## lxml refuses str input with an encoding declaration.  The
        ## declaration is useless once the text is decoded anyway.
        root = etree.fromstring(_xml_declaration.sub("", body, count=1), parser)
    return {_tag_key(root): element_to_tree(root)}


def extract_body(tree: Dict[str, Any], aliases=ENVELOPE_ALIASES) -> Dict[str, Any]:
    """
    Returns the content of the SOAP body.  Deployments of the service
    differ in which prefix they use for the envelope, each alias
    candidate is tried in order.

    Raises:
        ParseError: If none of the aliases matches
    """
    for alias in aliases:
        try:
            return tree["%s$Envelope" % alias]["%s$Body" % alias]
        except (KeyError, TypeError):
            continue
    raise error.ParseError(
        reason="response is not a SOAP envelope with any of the prefixes %s"
        % ", ".join(aliases)
    )


def parse_soap_body(body: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse a raw response into a tree and return the content of its
    SOAP body.

    Raises:
        ParseError: If body is not valid XML, or not an envelope
    """
    try:
        tree = parse_tree(body)
    except etree.XMLSyntaxError as e:
        raise error.ParseError(reason=str(e)) from e
    return extract_body(tree)


def parse_fault(body: Union[str, bytes, None]) -> Optional[str]:
    """
    Returns the faultstring if body is a SOAP fault, None otherwise.
    Bodies that are not XML at all are not faults.
    """
    if not body:
        return None
    try:
        content = extract_body(parse_tree(body))
    except (etree.XMLSyntaxError, error.ParseError):
        return None
    for key, value in content.items():
        if key.endswith("$Fault") or key == "Fault":
            if not isinstance(value, dict):
                return ""
            return text_of(value.get("faultstring")) or ""
    return None


def text_of(node: Any) -> Optional[str]:
    """The text of a tree node, None if it has none or is a repeated tag"""
    if node is None or isinstance(node, list):
        return None
    if isinstance(node, dict):
        return node.get(TEXT)
    return str(node)


def as_list(node: Any) -> List[Any]:
    """A repeated tag is a list, a single one is not.  Make it a list."""
    if node is None:
        return []
    if isinstance(node, list):
        return node
    return [node]


def dig(tree: Any, *path: str) -> Any:
    """
    Walk down the tree following path, i.e.
    ``dig(body, "ns2$consultaCEPResponse", "return", "cep")``

    Raises:
        DecodeError: If the path is not found
    """
    node = tree
    for step in path:
        try:
            node = node[step]
        except (KeyError, TypeError, IndexError) as e:
            raise error.DecodeError(
                reason="field %s missing in response (%s)" % (".".join(path), e),
                path=".".join(path),
            ) from None
    return node


def dig_text(tree: Any, *path: str) -> str:
    """Like ``dig``, but returns the text of the node found"""
    value = text_of(dig(tree, *path))
    if value is None:
        raise error.DecodeError(
            reason="field %s has no text" % ".".join(path),
            path=".".join(path),
        )
    return value


def _response(body: Dict[str, Any], method: str) -> Any:
    return dig(body, "ns2$%sResponse" % method, "return")


def _return_text(body: Dict[str, Any], method: str) -> str:
    return dig_text(body, "ns2$%sResponse" % method, "return")


def parse_object_history(body: Dict[str, Any]) -> ObjectHistory:
    """
    Decode a ``consultaSRO`` response.  The return text is itself a XML
    document, ``<rastro><objeto><evento/>...</objeto></rastro>``.
    """
    inner = _return_text(body, "consultaSRO")
    try:
        tracking = parse_tree(inner)
    except etree.XMLSyntaxError as e:
        raise error.DecodeError(reason=str(e), path="rastro") from None

    obj = dig(tracking, "rastro", "objeto")
    if isinstance(obj, list):
        error.weirdness("one object asked for, several objects returned")
        obj = obj[0]
    if "erro" in obj:
        raise error.DecodeError(reason=text_of(obj["erro"]), path="rastro.objeto")

    result = ObjectHistory()
    for idx, ev in enumerate(as_list(dig(obj, "evento"))):
        type_ = dig_text(ev, "tipo")
        status = dig_text(ev, "status")
        description = dig_text(ev, "descricao")
        if type_ in TRANSFER_EVENTS:
            description += " de: %s, %s/%s para: %s, %s/%s" % (
                dig_text(ev, "local"),
                dig_text(ev, "cidade"),
                dig_text(ev, "uf"),
                dig_text(ev, "destino", "local"),
                dig_text(ev, "destino", "cidade"),
                dig_text(ev, "destino", "uf"),
            )
        if idx == 0 and type_ in FINAL_EVENTS:
            result.ended = True
            try:
                result.delivered = int(status) <= 1
            except ValueError:
                ## a status that is not a number does not count as delivered
                result.delivered = False

        result.history.append(
            TrackingEvent(
                type=type_,
                status=status,
                date="%s %s" % (dig_text(ev, "data"), dig_text(ev, "hora")),
                description=description,
                details=text_of(ev.get("detalhe")) or "",
            )
        )
    return result


def parse_client_info(body: Dict[str, Any]) -> ClientInfo:
    ret = _response(body, "buscaCliente")
    if not isinstance(ret, dict):
        raise error.DecodeError(
            reason="unexpected buscaCliente result", path="buscaCliente.return"
        )
    return ClientInfo(
        cnpj=text_of(ret.get("cnpj")),
        name=text_of(ret.get("nome")),
        status_code=text_of(ret.get("statusCodigo")),
        status_description=text_of(ret.get("descricaoStatusCliente")),
        contracts=as_list(ret.get("contratos")),
        raw=ret,
    )


def parse_service_availability(body: Dict[str, Any]) -> str:
    return _return_text(body, "verificaDisponibilidadeServico")


def parse_post_card_status(body: Dict[str, Any]) -> bool:
    return _return_text(body, "getStatusCartaoPostagem") == "Normal"


def parse_zip_code(body: Dict[str, Any]) -> ZipCodeInfo:
    ret = _response(body, "consultaCEP")
    return ZipCodeInfo(
        zip_code=dig_text(ret, "cep"),
        address=text_of(ret.get("end")),
        complement=text_of(ret.get("complemento2")),
        neighborhood=text_of(ret.get("bairro")),
        city=text_of(ret.get("cidade")),
        state=text_of(ret.get("uf")),
    )


def parse_label_range(body: Dict[str, Any]) -> str:
    """The comma separated pair of boundary codes of ``solicitaEtiquetas``"""
    return _return_text(body, "solicitaEtiquetas")


def parse_check_digits(body: Dict[str, Any]) -> Any:
    """
    The ``return`` node of ``geraDigitoVerificadorEtiquetas``.  It is a
    single node when one code was asked for, a list otherwise - see
    ``sigep.protocol.labels.zip_check_digits``.
    """
    return _response(body, "geraDigitoVerificadorEtiquetas")


def parse_close_plp(body: Dict[str, Any]) -> str:
    return _return_text(body, "fechaPlpVariosServicos")


def parse_block_object(body: Dict[str, Any]) -> str:
    """Empty string when the block was registered, the service message otherwise"""
    result = _return_text(body, "bloquearObjeto")
    return "" if result == "Registro gravado" else result
