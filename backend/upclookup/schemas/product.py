from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ProductRecord(BaseModel):
    """
    Canonical product shape returned to callers, whatever provider matched.
    Absent fields are None and are left out of the JSON.
    """
    model_config = ConfigDict(populate_by_name=True)

    upc: str
    title: Optional[str] = None
    brand: Optional[str] = None
    model: str = ""                       # never absent
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    category: Optional[str] = None
