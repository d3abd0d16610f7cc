"""
Shared schema base.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for view rows, filters and API payloads.

    Strings are trimmed, so a filter of " L1 " selects line "L1".
    Assignments are validated the same way as construction.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )
