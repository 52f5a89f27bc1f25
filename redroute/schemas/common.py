"""
Shared schema base: camelCase JSON on the wire, snake_case in Python.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OkResponse(CamelModel):
    ok: bool = True


class ErrorResponse(CamelModel):
    ok: bool = False
    error: str


# Primary keys are int4 columns
MAX_ID = 2**31 - 1
