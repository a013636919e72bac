"""
Shared Pydantic base for API schemas.

Fields are declared in snake_case and exchanged as camelCase JSON
(dueDate, invoiceCode, ...). Both spellings are accepted on input.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          from_attributes=True,
     )
