# worker/app/models.py
from typing import List

from pydantic import BaseModel


class AltTextRequest(BaseModel):
    image_path: str
    model: str = "llava"
    count: int = 3


class AltTextResponse(BaseModel):
    alt_texts: List[str] = []
