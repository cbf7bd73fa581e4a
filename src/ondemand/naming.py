"""Mapping between package identifiers and cache slot directory names.

Pure functions, no I/O. Only the first scope separator and the first path
separator are substituted. Two shapes fall outside the round trip:

- identifiers with more than one "@" or more than one "/";
- identifiers without "@" that contain the marker text "at__", such as
  "cat__dog", which decodes to "c@dog". Such a slot still works for import,
  but listing reports the decoded name, which then has no matching metadata.

Extending or escaping the substitution would rename existing slots and
orphan caches built by earlier releases.
"""

SCOPE_MARKER = "at__"
SLASH_MARKER = "__slash__"


def encode_identifier(identifier: str) -> str:
    """Encode a package identifier as a single filesystem path segment.

    Examples:
        >>> encode_identifier("requests")
        "requests"
        >>> encode_identifier("@scope/name")
        "at__scope__slash__name"
    """
    return identifier.replace("@", SCOPE_MARKER, 1).replace("/", SLASH_MARKER, 1)


def decode_slot_name(slot_name: str) -> str:
    """Recover the package identifier from a slot directory name.

    Inverse of encode_identifier for identifiers with at most one "@" and at
    most one "/". Substitutions are undone in reverse order so that a marker
    straddling a path separator ("cat/dog" -> "cat__slash__dog") is not
    mistaken for a scope marker.
    """
    return slot_name.replace(SLASH_MARKER, "/", 1).replace(SCOPE_MARKER, "@", 1)
