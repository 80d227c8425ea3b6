"""
Document-style identifiers.

Records are keyed by the 24-character hex form of a BSON ObjectId.
"""
import re

from bson import ObjectId

_HEX_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    return str(ObjectId())


def is_valid_object_id(value) -> bool:
    # ObjectId.is_valid also accepts raw 12-byte strings; only the hex form is an id here.
    return isinstance(value, str) and bool(_HEX_ID_RE.match(value)) and ObjectId.is_valid(value)
