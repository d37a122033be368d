"""Well-formedness checks for backup entries.

These predicates never raise: anything that is not the expected shape,
including non-string values, simply fails the check.
"""

import base64
import binascii
import json


def _reject_constant(name: str):
    # NaN and Infinity are accepted by the json module but are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def is_valid_base64(value: object) -> bool:
    """Check that a value is canonical base64.

    Decoding and re-encoding must give back the identical string, so
    whitespace, missing or extra padding and stray trailing bits are all
    rejected even though a lenient decoder would accept them.

    Args:
        value: Candidate payload from a backup

    Returns:
        True if the value is a canonical base64 string
    """
    if not isinstance(value, str):
        return False
    try:
        decoded = base64.b64decode(value.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error, ValueError):
        return False
    return base64.b64encode(decoded).decode("ascii") == value


def parse_json_object(value: str) -> dict:
    """Parse a string holding a JSON object.

    Args:
        value: JSON document from a backup

    Returns:
        The parsed object

    Raises:
        ValueError: If the text is not JSON, uses NaN or Infinity, nests too
            deeply, or holds anything other than an object
    """
    try:
        parsed = json.loads(value, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON document is nested too deeply") from e
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def is_valid_json_object(value: object) -> bool:
    """Check that a value is a string holding a JSON object.

    Arrays, primitives and the ``null`` literal do not count.

    Args:
        value: Candidate JSON document from a backup

    Returns:
        True if the value parses to a JSON object
    """
    if not isinstance(value, str):
        return False
    try:
        parse_json_object(value)
    except ValueError:
        return False
    return True


def is_upper_case_identifier(name: str) -> bool:
    """Check that a key is upper case and contains at least one cased character.

    Purely numeric or empty names are both "upper" and "lower" case and are
    therefore rejected.
    """
    return name == name.upper() and name != name.lower()
