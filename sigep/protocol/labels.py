"""
Tracking code ranges.

``solicitaEtiquetas`` hands out a range of tracking codes as two
boundary codes, ``"DL76023727 BR,DL76023736 BR"``: a 2 letter prefix,
an 8 digit sequence number, a slot for the check digit and a 2 letter
suffix.  The check digits are computed by a second call,
``geraDigitoVerificadorEtiquetas``, and zipped back onto the codes.
"""
from typing import Any
from typing import List

from sigep.lib import error

from .xml_parsers import text_of


def expand_range(raw_range: str) -> List[str]:
    """
    Expands the boundaries into one code per sequence number, both
    boundaries included.  The codes come without check digit,
    i.e. ``"AB00000001CC"``.  Prefix and suffix are taken from the
    first boundary.

    Example:
        >>> expand_range("AB00000001CC,AB00000003CC")
        ['AB00000001CC', 'AB00000002CC', 'AB00000003CC']
    """
    try:
        first, last = [x.strip() for x in raw_range.split(",")]
        prefix = first[0:2]
        suffix = first[-2:]
        start = int(first[2:10])
        end = int(last[2:10])
    except ValueError:
        raise error.DecodeError(
            reason="unexpected tracking code range %r" % raw_range,
            path="solicitaEtiquetasResponse.return",
        ) from None
    ## both boundaries are expected to share prefix and suffix
    error.assert_(last[0:2] == prefix and last[-2:] == suffix)

    return ["%s%08d%s" % (prefix, number, suffix) for number in range(start, end + 1)]


def zip_check_digits(codes: List[str], digits: Any) -> List[str]:
    """
    Puts the check digits into the codes returned by ``expand_range``,
    giving the final 13 character tracking codes.

    ``digits`` is the ``return`` node of the check digit response.
    When one code was asked for the service returns a single node, for
    more codes a list of nodes.
    """
    if len(codes) == 1:
        if isinstance(digits, list):
            raise error.DecodeError(
                reason="one check digit expected, %i received" % len(digits),
                path="geraDigitoVerificadorEtiquetasResponse.return",
            )
        digits = [text_of(digits)]
    else:
        if not isinstance(digits, list):
            raise error.DecodeError(
                reason="%i check digits expected, one received" % len(codes),
                path="geraDigitoVerificadorEtiquetasResponse.return",
            )
        digits = [text_of(d) for d in digits]

    if len(digits) != len(codes) or None in digits:
        raise error.DecodeError(
            reason="%i check digits expected, %i received" % (len(codes), len(digits)),
            path="geraDigitoVerificadorEtiquetasResponse.return",
        )

    return [code[0:10] + digit + code[-2:] for code, digit in zip(codes, digits)]
