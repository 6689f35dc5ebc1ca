from pydantic import BaseModel, Field, model_validator
from typing import Any, List, Literal, Optional


class HashResult(BaseModel):
    id: int = Field(..., ge=1, description="1-based position in the batch")
    hash: str = Field(..., description="Uppercase hex digest")
    salt: str = ""
    algorithm: str


class HashRequest(BaseModel):
    cmd: Literal["hash"] = "hash"
    strings: List[str] = Field(..., description="Strings to hash")
    algorithm: str = "SHA256"
    salt: Optional[str] = None
    random_salt: bool = False

    @model_validator(mode="after")
    def _check_salt_mode(self) -> "HashRequest":
        if self.salt and self.random_salt:
            raise ValueError("salt and random_salt are mutually exclusive")
        return self


class SaltRequest(BaseModel):
    cmd: Literal["salt"] = "salt"
    count: int = Field(1, ge=1, le=1000)


class IPCResponse(BaseModel):
    result: Optional[Any] = None
    error: Optional[str] = None
