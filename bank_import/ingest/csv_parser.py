"""Quote-aware line tokenizer and delimiter detection for exported bank statements.

Statement exports differ per bank: semicolon-separated files with decimal
commas, plain comma CSVs, and tab-separated dumps all occur. Free-text
columns (payment notes, counterparty names) may contain the delimiter, so
fields are read with a conventional CSV quoting scan:

1. Outside quotes the delimiter ends a field and a quote opens quoted mode.
2. Inside quotes the delimiter is literal and a doubled quote is one quote.
3. End of line ends the last field; an unterminated quote closes there.
"""

_CANDIDATE_DELIMITERS = (";", ",", "\t")
_SAMPLE_LINES = 5


def normalize_newlines(text: str) -> str:
    """Drop a leading BOM and turn CRLF / CR line endings into LF."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> list[str]:
    """Split raw statement text into non-blank lines."""
    return [line for line in normalize_newlines(text).split("\n") if line.strip()]


def detect_delimiter(text: str) -> str:
    """Pick the field separator from the first few lines of the file.

    Tab wins only when it outnumbers both other candidates. Semicolon beats
    comma on a plain majority, otherwise comma is the default, so decimal
    commas inside a semicolon file do not flip the result.
    """
    sample = "\n".join(normalize_newlines(text).split("\n")[:_SAMPLE_LINES])
    counts = {d: sample.count(d) for d in _CANDIDATE_DELIMITERS}

    if counts["\t"] > counts[";"] and counts["\t"] > counts[","]:
        return "\t"
    if counts[";"] > counts[","]:
        return ";"
    return ","


def _read_field(line: str, pos: int, delimiter: str) -> tuple[str, int]:
    """Read one field starting at ``pos``.

    Returns (raw field value, position after the terminating delimiter).
    The returned position is ``len(line) + 1`` once the line is exhausted.
    """
    current = []
    in_quotes = False
    n = len(line)

    while pos < n:
        ch = line[pos]

        if in_quotes:
            if ch == '"':
                # Doubled quote is an escaped literal quote
                if pos + 1 < n and line[pos + 1] == '"':
                    current.append('"')
                    pos += 2
                    continue
                in_quotes = False
            else:
                current.append(ch)
            pos += 1
            continue

        if ch == '"':
            in_quotes = True
        elif ch == delimiter:
            return "".join(current), pos + 1
        else:
            current.append(ch)
        pos += 1

    # End of line closes an unterminated quote implicitly
    return "".join(current), n + 1


def parse_line(line: str, delimiter: str) -> list[str]:
    """Split one statement line into trimmed field values.

    A trailing delimiter produces an empty last field.
    """
    fields = []
    pos = 0
    n = len(line)

    while pos <= n:
        value, pos = _read_field(line, pos, delimiter)
        fields.append(value.strip())

    return fields
