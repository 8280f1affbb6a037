"""String literal escape processing."""
from __future__ import annotations


_SIMPLE_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '"': '"',
    "'": "'",
    '0': '\0',
}


def process_string_escapes(raw_string: str) -> str:
    r"""Process escape sequences in a string literal body.

    Handles \n, \t, \r, \\, \", \', \0 and Unicode scalars written as
    \u{1F363}. Unknown escapes are kept verbatim.
    """
    result = []
    i = 0
    while i < len(raw_string):
        ch = raw_string[i]
        if ch != '\\' or i + 1 >= len(raw_string):
            result.append(ch)
            i += 1
            continue

        next_char = raw_string[i + 1]
        if next_char in _SIMPLE_ESCAPES:
            result.append(_SIMPLE_ESCAPES[next_char])
            i += 2
        elif next_char == 'u' and raw_string.startswith('{', i + 2) and '}' in raw_string[i + 3:]:
            close = raw_string.index('}', i + 3)
            try:
                result.append(chr(int(raw_string[i + 3:close], 16)))
                i = close + 1
            except (ValueError, OverflowError):
                result.append(ch)
                i += 1
        else:
            result.append(ch)
            i += 1

    return ''.join(result)


def parse_string_token(token: str) -> str:
    """Strip the surrounding quotes and process escapes."""
    return process_string_escapes(token[1:-1])
