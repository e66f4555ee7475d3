def normalize_code(code: str) -> str:
    """Normalize submitted code before it is graded and stored.

    - Strips trailing whitespace on every line.
    - Unifies line endings and ends the text with a single newline.
    """

    if not code:
        return code

    lines = [line.rstrip() for line in code.replace("\r\n", "\n").split("\n")]
    normalized = "\n".join(lines).rstrip("\n")

    if normalized:
        normalized += "\n"

    return normalized
