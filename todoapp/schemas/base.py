from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Largest value a 64-bit INTEGER key column can hold
MAX_ID = 2**63 - 1


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON"""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
