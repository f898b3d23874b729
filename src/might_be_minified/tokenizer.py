"""Approximate JavaScript tokenization.

This is known to be broken as a real lexer: regex literals are not
delimited, template interpolation is ignored and so is any context
sensitive grammar. It is good enough to build a histogram of identifier
lengths, which is all the scoring needs.
"""

from __future__ import annotations

import logging
import re
import sys
import unicodedata
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Longer words sharing a prefix must come first (instanceof before in)
KEYWORDS: Tuple[str, ...] = (
    "async", "await", "break", "case", "catch", "class", "continue",
    "debugger", "default", "delete", "do", "else", "export", "extends",
    "finally", "for", "function", "if", "import", "instanceof", "in",
    "let", "new", "null", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with",
)
RESERVED_KEYWORDS = frozenset(KEYWORDS)

ID_START_CATEGORIES = frozenset({"Lu", "Ll", "Lt", "Lm", "Lo", "Nl"})
ID_CONTINUE_CATEGORIES = ID_START_CATEGORIES | {"Mn", "Mc", "Nd", "Pc"}

# Branch order matters: earlier alternatives shadow later ones
TOKEN_KINDS = ("comment", "whitespace", "string", "regex_op", "keyword", "ident")

_TOKEN_TEMPLATE = r"""
    (?P<comment>
        //.*?$ |
        /\*.*?\*/) |
    (?P<whitespace>
        \s+) |
    (?P<string>
        '[^'\\]*(?:\\.[^'\\]*)*' |
        "[^"\\]*(?:\\.[^"\\]*)*" |
        `[^`\\]*(?:\\.[^`\\]*)*`) |
    (?P<regex_op>
        \\/|/) |
    (?P<keyword>
        (?<!@WORD@)(?:@KEYWORDS@)(?!@WORD@)) |
    (?P<ident>
        @IDENT@)
"""


@dataclass(frozen=True)
class TokenPatterns:
    token: "re.Pattern[str]"
    ident: "re.Pattern[str]"


_patterns: Optional[TokenPatterns] = None


def _char_class(codepoints: Sequence[int], extra: str = r"\$_") -> str:
    """Render sorted code points as a compact regex character class."""
    parts = [extra]
    i = 0
    while i < len(codepoints):
        lo = hi = codepoints[i]
        while i + 1 < len(codepoints) and codepoints[i + 1] == hi + 1:
            i += 1
            hi = codepoints[i]
        if lo == hi:
            parts.append(f"\\U{lo:08x}")
        else:
            parts.append(f"\\U{lo:08x}-\\U{hi:08x}")
        i += 1
    return "[" + "".join(parts) + "]"


def identifier_classes() -> Tuple[str, str, str]:
    """Return the (start, continue, word) character classes.

    The word class bounds keywords: letters, marks, digits and connector
    punctuation, but not ``$``.
    """
    start: List[int] = []
    cont: List[int] = []
    for cp in range(sys.maxunicode + 1):
        cat = unicodedata.category(chr(cp))
        if cat in ID_CONTINUE_CATEGORIES:
            cont.append(cp)
            if cat in ID_START_CATEGORIES:
                start.append(cp)
    return _char_class(start), _char_class(cont), _char_class(cont, extra=r"\w")


def get_patterns() -> TokenPatterns:
    """Compile the token patterns on first use."""
    global _patterns
    if _patterns is None:
        start, cont, word = identifier_classes()
        ident = f"{start}{cont}*"
        token = (
            _TOKEN_TEMPLATE
            .replace("@KEYWORDS@", "|".join(KEYWORDS))
            .replace("@WORD@", word)
            .replace("@IDENT@", ident)
        )
        _patterns = TokenPatterns(
            token=re.compile(token, re.MULTILINE | re.VERBOSE),
            ident=re.compile(ident),
        )
        logger.debug("Compiled token patterns (unicode %s)", unicodedata.unidata_version)
    return _patterns


def iter_tokens(code: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(kind, text)`` for every span the token pattern matches.

    Characters no branch accepts (punctuation, digits) are skipped.
    """
    for m in get_patterns().token.finditer(code):
        yield m.lastgroup or "", m.group()


def is_identifier(token: str) -> bool:
    """True if ``token`` is one whole identifier.

    Reserved words pass too; they are told apart by the branch that matched.
    """
    return get_patterns().ident.fullmatch(token) is not None


def identifier_lengths(code: str) -> List[int]:
    """Return the code point length of every identifier, in source order."""
    return [
        len(text)
        for kind, text in iter_tokens(code)
        if kind != "keyword" and is_identifier(text)
    ]
