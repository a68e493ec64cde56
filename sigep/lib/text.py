"""
Text helpers for the fixed-width manifest format.

The manifest consumed by the SIGEP service does not cope with accented
letters, so names and address fields are folded into plain ASCII
before they are put into the document.
"""

from typing import Optional

ACCENTS = "áéíóúàèìòùãõñâêîôûçüÁÉÍÓÚÀÈÌÒÙÃÕÑÂÊÎÔÛÇÜ"
PLAIN = "aeiouaeiouaonaeioucuAEIOUAEIOUAONAEIOUCU"

_table = str.maketrans(ACCENTS, PLAIN)


def remove_accents(text: Optional[str]) -> str:
    """
    Replaces the accented latin letters in ``ACCENTS`` with their plain
    counterpart.  Everything else is passed on untouched, so the result
    always has the same length as the input.

    Example:
        >>> remove_accents("São João")
        'Sao Joao'
    """
    if text is None:
        return ""
    return str(text).translate(_table)


fold = remove_accents
