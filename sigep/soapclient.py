#!/usr/bin/env python
"""
The ``SoapClient`` class handles the basic communication with a SOAP
service: one HTTP POST per call, using the requests lib.

``call`` returns a ``SoapResult`` with the raw body, ``call_json_result``
goes one step further and returns the content of the SOAP body as a
response tree (see ``sigep.protocol.xml_parsers``).
"""
import sys
from collections.abc import Mapping
from types import TracebackType
from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

import requests
from requests.auth import HTTPBasicAuth
from requests.structures import CaseInsensitiveDict

from sigep import __version__
from sigep.config import DEFAULT_TIMEOUT
from sigep.lib import error
from sigep.lib.error import log
from sigep.lib.python_utilities import to_normal_str
from sigep.lib.python_utilities import to_wire
from sigep.protocol.types import SoapRequest
from sigep.protocol.types import SoapResult
from sigep.protocol.xml_parsers import parse_fault
from sigep.protocol.xml_parsers import parse_soap_body

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class SoapClient:
    """
    Basic client for SOAP over HTTP.  No retries: every failure is
    passed on to the caller on the first attempt.
    """

    proxy: Optional[str] = None

    def __init__(
        self,
        timeout: Optional[int] = DEFAULT_TIMEOUT,
        proxy: Optional[str] = None,
        ssl_verify_cert: Union[bool, str] = True,
        headers: Mapping[str, str] = None,
    ) -> None:
        """
        Args:
          timeout: seconds to wait for the service to answer
          proxy: A string defining a proxy server: `scheme://hostname:port`
          ssl_verify_cert can be the path of a CA-bundle or False.
          headers: extra headers sent with every request
        """
        self.session = requests.Session()
        self.timeout = timeout
        self.proxy = proxy
        self.ssl_verify_cert = ssl_verify_cert

        # Build global headers
        self.headers = CaseInsensitiveDict(
            {
                "User-Agent": "python-sigep/" + __version__,
                "Content-Type": "text/xml;charset=UTF-8",
                "Accept": "text/xml",
            }
        )
        self.headers.update(headers or {})

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[BaseException] = None,
        exc_value: Optional[BaseException] = None,
        traceback: Optional[TracebackType] = None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """
        Closes the session object
        """
        self.session.close()

    def call(
        self,
        url: str,
        xml: str,
        username: str = "",
        password: str = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> SoapResult:
        """
        POSTs the envelope to the service.

        Basic authentication is only used when both username and
        password are given.
        headers are sent on top of the headers of the client.

        Returns:
          SoapResult(success=True, result=<body>) on status 200,
          SoapResult(success=False, result="statusCode: <status>") on
          any other status, unless the body is a SOAP fault.

        Raises:
          SoapFaultError: the service answered with a SOAP fault
          TransportError: the request could not be performed
        """
        combined_headers = self.headers.copy()
        combined_headers.update(headers or {})

        auth = None
        if username and password:
            auth = HTTPBasicAuth(username, password)

        proxies = None
        if self.proxy is not None:
            proxies = {"http": self.proxy, "https": self.proxy}
            log.debug("using proxy - %s" % (proxies))

        log.debug(
            "sending request - url={0}, headers={1}\nbody:\n{2}".format(
                url, combined_headers, to_normal_str(xml)
            )
        )

        try:
            r = self.session.request(
                "POST",
                url,
                data=to_wire(xml),
                headers=combined_headers,
                proxies=proxies,
                auth=auth,
                timeout=self.timeout,
                verify=self.ssl_verify_cert,
            )
        except requests.exceptions.RequestException as e:
            raise error.TransportError(url=url, reason=str(e)) from e

        log.debug("server responded with %i %s" % (r.status_code, r.reason))
        log.debug(r.content)

        if error.debug_dump_communication:
            self._dump_communication(url, combined_headers, xml, r)

        if r.status_code != 200:
            faultstring = parse_fault(r.content)
            if faultstring is not None:
                raise error.SoapFaultError(url=url, reason=faultstring)
            log.info("request to %s failed: %s" % (url, error.errmsg(r)))
            return SoapResult(success=False, result="statusCode: %s" % r.status_code)

        return SoapResult(success=True, result=r.content)

    def call_json_result(
        self,
        url: str,
        xml: str,
        username: str = "",
        password: str = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> Union[Dict[str, Any], SoapResult]:
        """
        Like ``call``, but parses the response.  The caller must check
        what comes back: a failing ``SoapResult`` is passed on as it is,
        on success the content of the SOAP body is returned as a
        response tree.

        Raises:
          ParseError: the response is not a SOAP envelope
        """
        response = self.call(url, xml, username, password, headers)
        if not response.success:
            return response
        return parse_soap_body(response.result)

    def execute(self, request: SoapRequest) -> Union[Dict[str, Any], SoapResult]:
        return self.call_json_result(
            request.url, request.body, headers=request.headers
        )

    def _dump_communication(
        self, url: str, headers: Mapping[str, str], xml: str, r: requests.Response
    ) -> None:
        import datetime
        from tempfile import NamedTemporaryFile

        with NamedTemporaryFile(prefix="sigepcomm", delete=False) as commlog:
            commlog.write(b"=" * 80 + b"\n")
            commlog.write(f"{datetime.datetime.now():%FT%H:%M:%S}".encode("utf-8"))
            commlog.write(b"\n====>\n")
            commlog.write(f"POST {url}\n".encode("utf-8"))
            commlog.write(
                b"\n".join(to_wire(f"{x}: {headers[x]}") for x in headers)
            )
            commlog.write(b"\n\n")
            commlog.write(to_wire(xml))
            commlog.write(b"<====\n")
            commlog.write(f"{r.status_code} {r.reason}\n".encode("utf-8"))
            commlog.write(to_wire(r.content))
            commlog.write(b"\n")
