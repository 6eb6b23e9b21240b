from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for request schemas.

    JSON uses camelCase (numEmployees), Python code uses snake_case
    (num_employees); unknown fields are rejected.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"
