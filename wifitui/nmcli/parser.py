def parse_terse_line(line: str) -> list[str]:
    """
    Split one line of nmcli terse (-t) output into its fields.

    Fields are separated by ":" and a literal colon inside a field is
    written as "\\:". Any other backslash is kept as is, and an empty
    segment between two separators is an empty string.
    """
    fields: list[str] = []
    current: list[str] = []
    i = 0

    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line) and line[i + 1] == ":":
            current.append(":")
            i += 2
            continue
        if ch == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append("".join(current))
    return fields


def parse_terse_output(output: str) -> list[list[str]]:
    return [parse_terse_line(line) for line in output.splitlines()]
