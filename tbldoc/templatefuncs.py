"""Helper functions made available to documentation templates."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional, Union

from tbldoc.cardinality import Cardinality
from tbldoc.schema import Label

__all__ = [
    "nl2br",
    "nl2br_slash",
    "nl2mdnl",
    "nl2space",
    "escape_nl",
    "show_only_first_paragraph",
    "label_join",
    "escape",
    "escape_mermaid",
    "lcardi",
    "rcardi",
    "template_funcs",
]

_NEWLINE_RE = re.compile(r"\r\n|\n|\r")
_MERMAID_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_\-]")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_URL_SAFE = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    ";/?:@&=+$,-_.!~*'()#"
)


def _replace_newlines(text: str, replacement: str) -> str:
    return _NEWLINE_RE.sub(replacement, text)


def nl2br(text: str) -> str:
    """Turn every line break into ``<br>``."""
    return _replace_newlines(text, "<br>")


def nl2br_slash(text: str) -> str:
    """Turn every line break into ``<br />``."""
    return _replace_newlines(text, "<br />")


def nl2mdnl(text: str) -> str:
    """Turn every line break into a Markdown hard break."""
    return _replace_newlines(text, "  \n")


def nl2space(text: str) -> str:
    """Turn every line break into a single space."""
    return _replace_newlines(text, " ")


def escape_nl(text: str) -> str:
    """Turn every line break into the two characters ``\\n``."""
    return _replace_newlines(text, "\\n")


def show_only_first_paragraph(text: str) -> str:
    """Return the text up to the first blank line."""
    for separator in ("\r\n\r\n", "\r\r"):
        if separator in text:
            return text.split(separator, 1)[0]
    return text.split("\n\n", 1)[0]


def label_join(labels: Iterable[Label]) -> str:
    """Render label names as space separated code spans."""
    names = [label.name for label in labels]
    if not names:
        return ""
    return "`" + "` `".join(names) + "`"


def escape(text: str) -> str:
    """Percent-encode a string for use in a Markdown link target.

    Existing ``%XX`` escapes are kept; URL punctuation is left alone.
    """
    out: list[str] = []
    length = len(text)
    pos = 0
    while pos < length:
        char = text[pos]
        if char == "%":
            if pos + 2 < length + 0 and pos + 2 <= length - 1 + 0 and text[pos + 1] in _HEX_DIGITS and text[pos + 2] in _HEX_DIGITS:
                out.append(text[pos : pos + 3])
                pos += 3
                continue
            out.append("%25")
        elif char in _URL_SAFE:
            out.append(char)
        else:
            out.extend(f"%{byte:02X}" for byte in char.encode("utf-8", "surrogatepass"))
        pos += 1
    return "".join(out)


def escape_mermaid(text: str) -> str:
    """Replace every character Mermaid identifiers cannot hold with ``_``."""
    return _MERMAID_UNSAFE_RE.sub("_", text)


_LEFT_CARDINALITY = {
    Cardinality.ZERO_OR_ONE: "|o",
    Cardinality.EXACTLY_ONE: "||",
    Cardinality.ZERO_OR_MORE: "}o",
    Cardinality.ONE_OR_MORE: "}|",
}

_RIGHT_CARDINALITY = {
    Cardinality.ZERO_OR_ONE: "o|",
    Cardinality.EXACTLY_ONE: "||",
    Cardinality.ZERO_OR_MORE: "o{",
    Cardinality.ONE_OR_MORE: "|{",
}


def lcardi(cardinality: Union[Cardinality, str]) -> str:
    """Mermaid marker for the left end of a relation."""
    return _LEFT_CARDINALITY.get(cardinality, "}")


def rcardi(cardinality: Union[Cardinality, str]) -> str:
    """Mermaid marker for the right end of a relation."""
    return _RIGHT_CARDINALITY.get(cardinality, "")


def template_funcs(
    lookup: Optional[Union[Callable[[str], str], Mapping[str, str]]] = None,
) -> dict[str, Callable[..., Any]]:
    """Return the functions templates may call, keyed by template name.

    ``lookup`` translates words; it may be a callable or a mapping, where
    missing words are returned unchanged. ``None`` leaves words as they are.
    """
    if lookup is None:
        translate: Callable[[str], str] = lambda text: text
    elif isinstance(lookup, Mapping):
        table = lookup
        translate = lambda text: table.get(text, text)
    else:
        translate = lookup

    return {
        "nl2br": nl2br,
        "nl2br_slash": nl2br_slash,
        "nl2mdnl": nl2mdnl,
        "nl2space": nl2space,
        "escape_nl": escape_nl,
        "show_only_first_paragraph": show_only_first_paragraph,
        "lookup": translate,
        "label_join": label_join,
        "escape": escape,
        "escape_mermaid": escape_mermaid,
        "lcardi": lcardi,
        "rcardi": rcardi,
    }