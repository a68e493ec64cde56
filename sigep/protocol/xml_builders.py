"""
Pure functions for building SIGEP XML request bodies.

All functions in this module are pure - they take data in and return XML out,
with no side effects or I/O.
"""
from typing import Any
from typing import Iterable
from typing import List
from typing import Optional
from typing import Tuple
from typing import Union

from lxml import etree

from sigep.config import SigepConfig
from sigep.elements import plp
from sigep.elements import soap
from sigep.elements.base import BaseElement
from sigep.elements.base import Element
from sigep.lib import error
from sigep.lib.text import remove_accents

from .types import Label

## Codes of the additional services
SERVICE_REGISTERED = "025"
SERVICE_DELIVERED_NOTICE = "001"
SERVICE_IN_HANDS = "002"
SERVICE_DECLARED_VALUE_PAC = "064"
SERVICE_DECLARED_VALUE_SEDEX = "019"

Param = Union[Tuple[str, Any], BaseElement]


def _param_element(param: Param) -> BaseElement:
    if isinstance(param, BaseElement):
        return param
    key, value = param
    return Element(key, value)


def build_envelope(
    method: str,
    params: Optional[Iterable[Param]] = None,
    include_credentials: bool = False,
    login: Optional[str] = None,
    password: Optional[str] = None,
) -> str:
    """
    Build the SOAP envelope for a call to ``method``.

    Args:
        method: Name of the remote operation, i.e. ``consultaCEP``
        params: (tag, value) pairs, emitted in the given order.  A ready
                made element (like a ``CData``) may be given instead of a pair.
        include_credentials: Append ``usuario`` and ``senha`` after the params
        login: Value of ``usuario``
        password: Value of ``senha``

    Returns:
        The envelope as a string
    """
    call = soap.Method(method)
    call += [_param_element(p) for p in params or []]
    if include_credentials:
        call += [Element("usuario", login), Element("senha", password)]

    envelope = soap.Envelope() + [soap.Header(), soap.Body() + call]
    return str(envelope)


def strip_newlines(text: str) -> str:
    return text.replace("\r", "").replace("\n", "")


def _flag(value: Union[bool, str, None]) -> bool:
    if isinstance(value, str):
        return value.upper() == "S"
    return bool(value)


def _or_default(value: Any, default: str) -> Any:
    return value if value else default


def format_invoice(invoice: Optional[str]) -> str:
    """Invoice numbers are left padded to 5 digits, 00000 when absent"""
    if invoice is None or invoice == "" or invoice == "null":
        return "00000"
    return str(invoice).rjust(5, "0")


def _sender(config: SigepConfig) -> BaseElement:
    return plp.Remetente() + [
        Element("numero_contrato", config.contract),
        Element("numero_diretoria", config.director_code),
        Element("codigo_administrativo", config.administrative_code),
        Element("nome_remetente", remove_accents(config.sender_name)),
        Element("logradouro_remetente", remove_accents(config.sender_address)),
        Element("numero_remetente", config.sender_number),
        Element("complemento_remetente", remove_accents(config.sender_complement)),
        Element("bairro_remetente", remove_accents(config.sender_neighbor)),
        Element("cep_remetente", config.sender_zip_code),
        Element("cidade_remetente", remove_accents(config.sender_city)),
        Element("uf_remetente", config.sender_state),
        Element("telefone_remetente", config.sender_phone),
        Element("fax_remetente"),
        Element("email_remetente", config.sender_email),
        Element("celular_remetente", config.sender_mobile),
    ]


def _additional_services(label: Label) -> List[BaseElement]:
    codes = [SERVICE_REGISTERED]
    if _flag(label.arrive_notice):
        codes.append(SERVICE_DELIVERED_NOTICE)
    if _flag(label.in_hands):
        codes.append(SERVICE_IN_HANDS)
    if _flag(label.declared_value):
        if "SEDEX" in (label.service_description or ""):
            codes.append(SERVICE_DECLARED_VALUE_SEDEX)
        else:
            codes.append(SERVICE_DECLARED_VALUE_PAC)
    return [Element("codigo_servico_adicional", c) for c in codes]


def _postal_object(label: Label) -> BaseElement:
    recipient = plp.Destinatario() + [
        Element("nome_destinatario", remove_accents(label.name)),
        Element("telefone_destinatario", label.phone),
        Element("celular_destinatario", label.phone),
        Element("email_destinatario", label.email),
        Element("logradouro_destinatario", remove_accents(label.address)),
        Element("complemento_destinatario", remove_accents(label.address_complement)),
        Element("numero_end_destinatario", label.address_number),
    ]
    national = plp.Nacional() + [
        Element("bairro_destinatario", remove_accents(label.address_neighbor)),
        Element("cidade_destinatario", remove_accents(label.address_city)),
        Element("uf_destinatario", label.address_state),
        Element("cep_destinatario", label.address_zip_code),
        Element("codigo_usuario_postal"),
        Element("centro_custo_cliente"),
        Element("numero_nota_fiscal", format_invoice(label.invoice)),
        Element("serie_nota_fiscal"),
        Element("valor_nota_fiscal", _or_default(label.invoice_value, "0,00")),
        Element("natureza_nota_fiscal"),
        Element("descricao_objeto"),
        Element("valor_a_cobrar", _or_default(label.charge_value, "0,00")),
    ]
    services = plp.ServicoAdicional() + _additional_services(label)
    services += Element("valor_declarado", _or_default(label.insurance_value, "0,00"))
    dimensions = plp.DimensaoObjeto() + [
        Element("tipo_objeto", "00" + str(label.object_type)),
        Element("dimensao_altura", _or_default(label.height, "16")),
        Element("dimensao_largura", _or_default(label.width, "16")),
        Element("dimensao_comprimento", _or_default(label.length, "16")),
        Element("dimensao_diametro", _or_default(label.diameter, "16")),
    ]
    return plp.ObjetoPostal() + [
        Element("numero_etiqueta", label.tracking_code),
        Element("codigo_objeto_cliente"),
        Element("codigo_servico_postagem", label.service_code),
        Element("cubagem", "0,00"),
        Element("peso", _or_default(label.weight, "0")),
        Element("rt1", label.remarks),
        Element("rt2"),
        recipient,
        national,
        services,
        dimensions,
        Element("data_postagem_sara"),
        Element("status_processamento", "0"),
        Element("numero_comprovante_postagem"),
        Element("valor_cobrado"),
    ]


def build_plp_document(config: SigepConfig, labels: Iterable[Label]) -> str:
    """
    Build the ``correioslog`` manifest listing the labels handed over
    to the carrier in one PLP.

    The document is declared as ISO-8859-1 and has all newlines
    removed, as it travels as character data inside the envelope.

    Raises:
        SigepError: if no labels are given
    """
    labels = list(labels or [])
    if not labels:
        raise error.SigepError(
            reason="labels are required to close a PLP, none were given"
        )

    header = plp.Plp() + [
        Element("id_plp"),
        Element("valor_global"),
        Element("mcu_unidade_postagem"),
        Element("nome_unidade_postagem"),
        Element("cartao_postagem", config.post_card),
    ]
    document = plp.CorreiosLog() + [
        Element("tipo_arquivo", "Postagem"),
        Element("versao_arquivo", "2.3"),
        header,
        _sender(config),
        Element("forma_pagamento"),
    ]
    document += [_postal_object(label) for label in labels]

    xml = etree.tostring(
        document.xmlelement(), encoding="ISO-8859-1", xml_declaration=True
    )
    return strip_newlines(xml.decode("ISO-8859-1"))
