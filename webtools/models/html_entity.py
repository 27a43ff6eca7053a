"""
HTML entity encoding and decoding.
"""

import re
from html.entities import codepoint2name, html5
from typing import Literal

from pydantic import BaseModel

EntityEncoding = Literal["named", "numeric", "hex"]
ProcessMode = Literal["encode", "decode"]

# Markup-significant ASCII characters that are always escaped
ASCII_NAMED = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "`": "&#x60;",
    "=": "&#x3D;",
}

_ENCODE_TARGETS = re.compile("[&<>\"'/`=]|[^\x00-\x9f]")
_ENTITY = re.compile(r"&(?:#(\d+)|#[xX]([0-9A-Fa-f]+)|([A-Za-z][A-Za-z0-9]*));")
_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_ENTITY_COUNT = re.compile(r"&[#a-zA-Z0-9]+;")


class EntityOptions(BaseModel):
    mode: ProcessMode = "encode"
    encoding: EntityEncoding = "named"
    encode_spaces: bool = False
    encode_line_breaks: bool = False


class EntityStats(BaseModel):
    chars: int = 0
    entities: int = 0
    saved: int = 0


class EntityResult(BaseModel):
    output: str
    stats: EntityStats


def _named(char: str) -> str:
    if char in ASCII_NAMED:
        return ASCII_NAMED[char]
    code = ord(char)
    # Latin-1 names only; everything above falls back to decimal
    if code <= 0xFF and code in codepoint2name:
        return f"&{codepoint2name[code]};"
    return f"&#{code};"


def encode(
    text: str,
    encoding: EntityEncoding = "named",
    encode_spaces: bool = False,
    encode_line_breaks: bool = False,
) -> str:
    """Escape markup characters and everything from U+00A0 upwards."""
    if encoding == "named":
        replace = _named
    elif encoding == "numeric":
        replace = lambda char: f"&#{ord(char)};"  # noqa: E731
    else:
        replace = lambda char: f"&#x{ord(char):X};"  # noqa: E731

    encoded = _ENCODE_TARGETS.sub(lambda m: replace(m.group(0)), text)
    if encode_spaces:
        encoded = encoded.replace(" ", "&nbsp;")
    if encode_line_breaks:
        encoded = encoded.replace("\n", "<br>")
    return encoded


def _decode_entity(match: "re.Match[str]") -> str:
    decimal, hexadecimal, name = match.groups()
    if name is not None:
        return html5.get(f"{name};", match.group(0))
    code = int(decimal) if decimal is not None else int(hexadecimal, 16)
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return match.group(0)
    return chr(code)


def decode(text: str) -> str:
    """Decode named, decimal and hex references (with ``;``) and ``<br>`` tags."""
    return _LINE_BREAK.sub("\n", _ENTITY.sub(_decode_entity, text))


def process(text: str, options: EntityOptions) -> EntityResult:
    """
    Encode or decode ``text`` and report statistics.

    ``saved`` is the change in length: characters added when encoding,
    characters removed when decoding.
    """
    if not text.strip():
        return EntityResult(output="", stats=EntityStats())

    if options.mode == "encode":
        output = encode(
            text, options.encoding, options.encode_spaces, options.encode_line_breaks
        )
    else:
        output = decode(text)

    difference = len(output) - len(text)
    return EntityResult(
        output=output,
        stats=EntityStats(
            chars=len(output),
            entities=len(_ENTITY_COUNT.findall(output)),
            saved=-difference if options.mode == "decode" else difference,
        ),
    )
