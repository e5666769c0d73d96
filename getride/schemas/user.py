from pydantic import BaseModel, Field, field_validator
from typing import Optional


class User(BaseModel):
    id: str
    name: str = ""
    email: str
    # json-server hands the stored password back; keep it out of reprs and logs
    password: str = Field(default="", repr=False)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v):
        return str(v) if v is not None else v


class UserCreate(BaseModel):
    name: str
    email: str
    password: str = Field(repr=False)


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
