from pydantic import BaseModel, Field


class Product(BaseModel):
    name: str = Field(min_length=1)
    price: int | float = Field(ge=0)
    category: str
    stock: int = Field(ge=0)

    def to_document(self) -> dict:
        return self.model_dump()
