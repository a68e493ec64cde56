#!/usr/bin/env python
import logging
import os
from typing import Optional

from sigep import __version__

## Environmental variables prepended with "PYTHON_SIGEP" are used for debug purposes,
## environmental variables prepended with "SIGEP_" are for connection parameters
debug_dump_communication = os.environ.get("PYTHON_SIGEP_COMMDUMP", False)
## one of DEBUG_PDB, DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_SIGEP_DEBUGMODE")
if not debugmode:
    if "dev" in __version__:
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("sigep")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def errmsg(r) -> str:
    """Utility for formatting an error response to an error string"""
    return "%s %s\n\n%s" % (r.status_code, r.reason, r.text)


def weirdness(*reasons):
    from sigep.lib.debug import xmlstring

    reason = " : ".join([xmlstring(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")
    if debugmode == "DEBUG_PDB":
        log.error(f"Dropping into debugger due to {reason}")
        import pdb

        pdb.set_trace()


def assert_(condition: object) -> None:
    try:
        assert condition
    except AssertionError:
        if debugmode == "PRODUCTION":
            log.error(
                "Deviation from expectations found.  %s" % ERR_FRAGMENT, exc_info=True
            )
        elif debugmode == "DEBUG_PDB":
            log.error("Deviation from expectations found.  Dropping into debugger")
            import pdb

            pdb.set_trace()
        else:
            raise


ERR_FRAGMENT: str = "The SIGEP web service answered with something this library did not expect.  Please include this error, the traceback and the service url when reporting it"


class SigepError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None) -> None:
        if url:
            self.url = url
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)

    def __str__(self) -> str:
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class TransportError(SigepError):
    """
    The HTTP round trip itself failed (connection refused, timeout,
    TLS problems ...).  The reason property holds the message of the
    underlying requests exception.
    """

    pass


class SoapFaultError(SigepError):
    """
    The service answered with a SOAP fault.  The reason property
    contains the faultstring sent by the service.
    """

    pass


class ParseError(SigepError):
    """
    The response body could not be parsed as XML, or it did not match
    any of the known envelope shapes.
    """

    pass


class DecodeError(SigepError):
    """
    The response was parsed fine, but an expected field was missing.
    The path property tells which field.
    """

    path: Optional[str] = None

    def __init__(
        self,
        url: Optional[str] = None,
        reason: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        if path:
            self.path = path
        super().__init__(url=url, reason=reason)


class ResponseError(SigepError):
    pass
