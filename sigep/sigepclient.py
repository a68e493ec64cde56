#!/usr/bin/env python
import os
from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional

from sigep.config import SigepConfig
from sigep.lib import error
from sigep.lib.error import log
from sigep.protocol import xml_parsers
from sigep.protocol.labels import expand_range
from sigep.protocol.labels import zip_check_digits
from sigep.protocol.operations import SigepProtocol
from sigep.protocol.types import ClientInfo
from sigep.protocol.types import Label
from sigep.protocol.types import ObjectHistory
from sigep.protocol.types import SoapRequest
from sigep.protocol.types import SoapResult
from sigep.protocol.types import ZipCodeInfo
from sigep.soapclient import SoapClient

"""
The ``SigepClient`` class gives access to the operations of the SIGEP
web service of Correios.  ``get_client`` will return a SigepClient
object, based either on parameters, environmental variables or a
configuration file.
"""


class SigepClient(SoapClient):
    """
    Client for the SIGEP web service.  Each method is one remote
    operation (two for ``get_labels``), decoded into plain data.

    All methods raise a ``sigep.lib.error.SigepError`` subclass on
    failure, there is no partial success.
    """

    def __init__(self, config: Optional[SigepConfig] = None, **config_data) -> None:
        """
        Args:
          config: a SigepConfig.  If not given, one is built from the
            keyword arguments, i.e. ``SigepClient(url=..., login=...)``
        """
        if config is None:
            config = SigepConfig.from_dict(config_data)
        elif config_data:
            raise TypeError("give either a config or keyword arguments, not both")
        self.config = config
        self.protocol = SigepProtocol(config)
        log.debug("url: " + str(config.url))
        super(SigepClient, self).__init__(timeout=config.timeout)

    def sigep_call(self, request: SoapRequest) -> Dict[str, Any]:
        """
        Performs the request and returns the content of the SOAP body.
        A status other than 200 is raised as a ResponseError here, as
        none of the operations has a way to return it.
        """
        response = self.execute(request)
        if isinstance(response, SoapResult):
            raise error.ResponseError(url=request.url, reason=response.result)
        return response

    def object_history(self, track_number: str) -> ObjectHistory:
        """
        Fetches the tracking history of one object.  Uses the separate
        object history credentials of the config.
        """
        body = self.sigep_call(self.protocol.object_history_request(track_number))
        return xml_parsers.parse_object_history(body)

    def get_client_info(self) -> ClientInfo:
        """Fetches the contract and postage card details of the account"""
        body = self.sigep_call(self.protocol.client_request())
        return xml_parsers.parse_client_info(body)

    def check_zip_codes(
        self, service_code: Optional[str], origin_zip_code: str, destiny_zip_code: str
    ) -> str:
        """
        Checks if a service is available between two postal codes.
        The service code of the config is used when service_code is None.
        """
        request = self.protocol.service_availability_request(
            service_code, origin_zip_code, destiny_zip_code
        )
        return xml_parsers.parse_service_availability(self.sigep_call(request))

    def post_card_status(self) -> bool:
        """
        True if the postage card of the config is usable.  Correios asks
        for this to be checked once a day.
        """
        body = self.sigep_call(self.protocol.post_card_status_request())
        return xml_parsers.parse_post_card_status(body)

    def query_zip_code(self, zip_code: str) -> ZipCodeInfo:
        body = self.sigep_call(self.protocol.zip_code_request(zip_code))
        return xml_parsers.parse_zip_code(body)

    def get_labels(self, service_id: str, amount: int) -> List[str]:
        """
        Allocates ``amount`` tracking codes for a service, complete
        with their check digits.

        This is two round trips: the range is requested first, then the
        check digits of all the codes in it.
        """
        body = self.sigep_call(self.protocol.request_labels_request(service_id, amount))
        raw_range = xml_parsers.parse_label_range(body)
        log.debug(f"tracking code range allocated: {raw_range}")

        codes = expand_range(raw_range)
        request = self.protocol.check_digits_request(codes)
        digits = xml_parsers.parse_check_digits(self.sigep_call(request))
        return zip_check_digits(codes, digits)

    def close_plp(self, labels: Iterable[Label]) -> str:
        """
        Hands a dispatch manifest (PLP) with the given labels over to
        Correios.  Returns the PLP number given by Correios.
        """
        body = self.sigep_call(self.protocol.close_plp_request(list(labels)))
        return xml_parsers.parse_close_plp(body)

    def cancel_object(self, plp_number: str, track_number: str) -> str:
        """
        Asks for an object to be blocked and returned to the sender.
        Returns an empty string on success, the message of the service
        otherwise.
        """
        request = self.protocol.block_object_request(plp_number, track_number)
        return xml_parsers.parse_block_object(self.sigep_call(request))


def get_client(
    check_config_file: bool = True,
    config_file: Optional[str] = None,
    config_section: Optional[str] = None,
    environment: bool = True,
    **config_data,
) -> Optional[SigepClient]:
    """
    This function will yield a SigepClient object.  It will not try to
    connect.  It will read configuration from various sources,
    dependent on the parameters given, in this order:

    * Data from the parameters given
    * Environment variables prepended with `SIGEP_`, like `SIGEP_URL`, `SIGEP_LOGIN`, `SIGEP_PASSWORD`.
    * Environment variables `SIGEP_CONFIG_FILE` and `SIGEP_CONFIG_SECTION` will be honored if environment is set
    * Configuration file, see ``sigep.config``
    """
    if config_data:
        return SigepClient(**config_data)

    if environment:
        conf = {}
        for conf_key in (
            x
            for x in os.environ
            if x.startswith("SIGEP_") and not x.startswith("SIGEP_CONFIG")
        ):
            conf[conf_key[6:].lower()] = os.environ[conf_key]
        if conf:
            return SigepClient(**conf)
        if not config_file:
            config_file = os.environ.get("SIGEP_CONFIG_FILE")
        if not config_section:
            config_section = os.environ.get("SIGEP_CONFIG_SECTION")

    if check_config_file:
        from . import config

        if not config_section:
            config_section = "default"

        cfg = config.read_config(config_file)
        if cfg:
            section = config.config_section(cfg, config_section)
            if section:
                return SigepClient(config=SigepConfig.from_dict(section))
    return None
