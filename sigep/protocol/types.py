"""
Core protocol types for the SIGEP client.

These dataclasses represent SOAP requests, transport results and the
decoded result of each remote operation, independent of any I/O.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class SoapRequest:
    """
    Represents one SOAP call to be made.  Always sent as an HTTP POST.

    Attributes:
        url: Endpoint of the service
        method: Name of the remote operation, i.e. ``consultaCEP``
        body: The serialized envelope
        headers: HTTP headers as dict
    """

    url: str
    method: str
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    def with_header(self, name: str, value: str) -> "SoapRequest":
        """Return new request with additional header."""
        return SoapRequest(
            url=self.url,
            method=self.method,
            body=self.body,
            headers={**self.headers, name: value},
        )


@dataclass(frozen=True)
class SoapResult:
    """
    Outcome of one HTTP round trip.

    On success ``result`` holds the raw response body.  A status other
    than 200 without a SOAP fault gives ``success=False`` and
    ``result="statusCode: <status>"``.
    """

    success: bool
    result: Any = None


@dataclass
class TrackingEvent:
    type: str
    status: str
    date: str
    description: str
    details: str = ""


@dataclass
class ObjectHistory:
    """
    Decoded ``consultaSRO`` result.

    Attributes:
        delivered: The most recent event is a final one with status 0 or 1
        ended: The most recent event is a final one (BDE, BDI or BDR)
        history: Events, most recent first, as delivered by the service
    """

    delivered: bool = False
    ended: bool = False
    history: list[TrackingEvent] = field(default_factory=list)


@dataclass
class ClientInfo:
    """
    Decoded ``buscaCliente`` result.  The contracts are passed on as
    response trees, since their shape varies with the contract type.
    """

    cnpj: Optional[str] = None
    name: Optional[str] = None
    status_code: Optional[str] = None
    status_description: Optional[str] = None
    contracts: list[dict] = field(default_factory=list)
    raw: dict = field(default_factory=dict)


@dataclass
class ZipCodeInfo:
    """Decoded ``consultaCEP`` result."""

    zip_code: Optional[str] = None
    address: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass
class Label:
    """
    One shipped item as it goes into the dispatch manifest.

    ``arrive_notice``, ``in_hands`` and ``declared_value`` select
    additional services; they accept either a boolean or the ``"S"``
    flag used by the service.
    """

    tracking_code: str
    service_code: str = ""
    service_description: str = ""
    id_internal_plp: Optional[str] = None
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    address_complement: str = ""
    address_number: str = ""
    address_neighbor: str = ""
    address_city: str = ""
    address_state: str = ""
    address_zip_code: str = ""
    remarks: str = ""
    invoice: Optional[str] = None
    invoice_value: Optional[str] = None
    charge_value: Optional[str] = None
    insurance_value: Optional[str] = None
    arrive_notice: Union[bool, str] = False
    in_hands: Union[bool, str] = False
    declared_value: Union[bool, str] = False
    object_type: str = "2"
    weight: Optional[str] = None
    height: Optional[str] = None
    width: Optional[str] = None
    length: Optional[str] = None
    diameter: Optional[str] = None
