from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class PostBase(BaseModel):
    tag: str
    comment: Optional[str] = None
    attachment: Optional[str] = None
    alias: Optional[str] = None

class PostOut(PostBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True

    @property
    def display_key(self) -> str:
        return self.alias if self.alias is not None else str(self.id)


class Reply(BaseModel):
    content: str
    image: Optional[str] = None

class CreatedReply(Reply):
    id: int
