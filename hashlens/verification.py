import re

HEX_FORMAT = re.compile(r"[0-9a-fA-F]+")
BASE64_FORMAT = re.compile(r"[A-Za-z0-9+/]*={0,2}")

def verify_digest(computed: str, expected: str):
    """Checks an expected digest against a computed one (case-insensitive).
    Returns a (match, reason) tuple; reason is None on a match.

    Arguments:
    computed    -- digest produced by the hashing engine (hex or base64)
    expected    -- digest given by the user
    """
    # blank only counts as missing; the format check sees the raw value
    if not expected or not expected.strip():
        return False, "No expected hash provided"

    if not HEX_FORMAT.fullmatch(expected) and not BASE64_FORMAT.fullmatch(expected):
        return False, "Invalid hash format (must be hex or base64)"

    if computed.lower() == expected.lower():
        return True, None
    return False, "Hash values don't match"
