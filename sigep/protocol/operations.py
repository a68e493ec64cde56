"""
SIGEP protocol operations.

This class builds the request of every remote operation while remaining
completely I/O-free.  Responses are decoded by the functions in
``xml_parsers``.
"""

from typing import Any, Iterable, List, Optional

from sigep.config import SigepConfig
from sigep.elements.base import CData

from .types import Label, SoapRequest
from .xml_builders import Param, build_envelope, build_plp_document

## Remote operations of the SIGEP service
METHOD_OBJECT_HISTORY = "consultaSRO"
METHOD_CLIENT = "buscaCliente"
METHOD_SERVICE_AVAILABILITY = "verificaDisponibilidadeServico"
METHOD_POST_CARD_STATUS = "getStatusCartaoPostagem"
METHOD_ZIP_CODE = "consultaCEP"
METHOD_REQUEST_LABELS = "solicitaEtiquetas"
METHOD_CHECK_DIGITS = "geraDigitoVerificadorEtiquetas"
METHOD_CLOSE_PLP = "fechaPlpVariosServicos"
METHOD_BLOCK_OBJECT = "bloquearObjeto"

CONTENT_TYPE = "text/xml;charset=UTF-8"


def _zip_code(value: Any) -> str:
    return str(value).replace("-", "")


class SigepProtocol:
    """
    Sans-I/O SIGEP protocol handler.

    Example:
        protocol = SigepProtocol(config)

        # Build request
        request = protocol.zip_code_request("70002-900")

        # Execute with your I/O (not shown)
        body = io.execute(request)

        # Decode response
        info = xml_parsers.parse_zip_code(body)
    """

    def __init__(self, config: SigepConfig):
        self.config = config

    def request(
        self,
        method: str,
        params: Optional[Iterable[Param]] = None,
        include_user: bool = True,
    ) -> SoapRequest:
        """
        Build the request for a call to ``method``.  The account
        credentials go into the body unless include_user is False.
        """
        body = build_envelope(
            method,
            params,
            include_credentials=include_user,
            login=self.config.login,
            password=self.config.password,
        )
        return SoapRequest(
            url=self.config.url,
            method=method,
            body=body,
            headers={"Content-Type": CONTENT_TYPE},
        )

    def object_history_request(self, track_number: str) -> SoapRequest:
        params = [
            ("listaObjetos", track_number),
            ("tipoConsulta", "L"),
            ("tipoResultado", "T"),
            ("usuarioSro", self.config.login_object_history),
            ("senhaSro", self.config.password_object_history),
        ]
        return self.request(METHOD_OBJECT_HISTORY, params, include_user=False)

    def client_request(self) -> SoapRequest:
        params = [
            ("idContrato", self.config.contract),
            ("idCartaoPostagem", self.config.post_card),
        ]
        return self.request(METHOD_CLIENT, params)

    def service_availability_request(
        self, service_code: Optional[str], origin: str, destiny: str
    ) -> SoapRequest:
        params = [
            ("codAdministrativo", self.config.administrative_code),
            ("numeroServico", service_code or self.config.service_code),
            ("cepOrigem", _zip_code(origin)),
            ("cepDestino", _zip_code(destiny)),
        ]
        return self.request(METHOD_SERVICE_AVAILABILITY, params)

    def post_card_status_request(self) -> SoapRequest:
        params = [("numeroCartaoPostagem", self.config.post_card)]
        return self.request(METHOD_POST_CARD_STATUS, params)

    def zip_code_request(self, zip_code: str) -> SoapRequest:
        return self.request(
            METHOD_ZIP_CODE, [("cep", _zip_code(zip_code))], include_user=False
        )

    def request_labels_request(self, service_id: str, amount: int) -> SoapRequest:
        params = [
            ("tipoDestinatario", "C"),
            ("identificador", self.config.cnpj),
            ("idServico", service_id),
            ("qtdEtiquetas", amount),
        ]
        return self.request(METHOD_REQUEST_LABELS, params)

    def check_digits_request(self, codes: List[str]) -> SoapRequest:
        """
        The second step of the label allocation.  codes are the
        expanded range of the ``solicitaEtiquetas`` call, sent as
        repeated ``etiquetas`` parameters.
        """
        params = [("etiquetas", code) for code in codes]
        return self.request(METHOD_CHECK_DIGITS, params)

    def close_plp_request(self, labels: List[Label]) -> SoapRequest:
        """
        The manifest goes into the ``xml`` parameter as CDATA, the
        tracking codes, without check digit, into repeated
        ``listaEtiquetas`` parameters.
        """
        document = build_plp_document(self.config, labels)
        params: List[Param] = [
            CData("xml", document),
            ("idPlpCliente", labels[0].id_internal_plp),
            ("cartaoPostagem", self.config.post_card),
        ]
        for label in labels:
            code = label.tracking_code
            params.append(("listaEtiquetas", code[0:10] + code[11:]))
        return self.request(METHOD_CLOSE_PLP, params)

    def block_object_request(self, plp_number: str, track_number: str) -> SoapRequest:
        params = [
            ("tipoBloqueio", "FRAUDE_BLOQUEIO"),
            ("acao", "DEVOLVIDO_AO_REMETENTE"),
            ("numeroEtiqueta", track_number),
            ("idPlp", plp_number),
        ]
        return self.request(METHOD_BLOCK_OBJECT, params)
