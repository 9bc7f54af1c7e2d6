from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models: snake_case attributes, camelCase JSON (documents are stored camelCase too)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SuccessMessage(CamelModel):
    success: bool = True
    message: str
