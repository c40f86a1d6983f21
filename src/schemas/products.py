from typing import Any, Optional

from pydantic import BaseModel


class ProductIn(BaseModel):
    # Values go to the database untouched; it decides what is acceptable.
    name: Any = None
    description: Any = None
    price: Any = None
    img: Any = None


class WriteResult(BaseModel):
    affectedRows: int
    insertId: Optional[int] = None


class ErrorResponse(BaseModel):
    error: str
    errorKind: str
