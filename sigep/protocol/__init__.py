"""
Sans-I/O SIGEP protocol implementation.

This module provides protocol-level operations without any I/O.
It builds requests and parses responses as pure data transformations.

The protocol layer is organized into:
- types: Core data structures (SoapRequest, SoapResult, result types)
- xml_builders: Pure functions to build the envelope and the PLP manifest
- xml_parsers: Pure functions to parse responses and decode results
- labels: Tracking code range expansion and check digit zipping
- operations: SigepProtocol class building the request of each remote operation
"""

from .types import (
    # Request/Response
    SoapRequest,
    SoapResult,
    # Result types
    ClientInfo,
    Label,
    ObjectHistory,
    TrackingEvent,
    ZipCodeInfo,
)
from .xml_builders import (
    build_envelope,
    build_plp_document,
)
from .xml_parsers import (
    ENVELOPE_ALIASES,
    parse_block_object,
    parse_check_digits,
    parse_client_info,
    parse_close_plp,
    parse_fault,
    parse_label_range,
    parse_object_history,
    parse_post_card_status,
    parse_service_availability,
    parse_soap_body,
    parse_tree,
    parse_zip_code,
)
from .labels import expand_range, zip_check_digits
from .operations import SigepProtocol

__all__ = [
    # Request/Response
    "SoapRequest",
    "SoapResult",
    # Result types
    "ClientInfo",
    "Label",
    "ObjectHistory",
    "TrackingEvent",
    "ZipCodeInfo",
    # XML Builders
    "build_envelope",
    "build_plp_document",
    # XML Parsers
    "ENVELOPE_ALIASES",
    "parse_block_object",
    "parse_check_digits",
    "parse_client_info",
    "parse_close_plp",
    "parse_fault",
    "parse_label_range",
    "parse_object_history",
    "parse_post_card_status",
    "parse_service_availability",
    "parse_soap_body",
    "parse_tree",
    "parse_zip_code",
    # Labels
    "expand_range",
    "zip_check_digits",
    # Protocol
    "SigepProtocol",
]
