from pydantic import BaseModel, Field


class PinVerifyRequest(BaseModel):
    pin: str = Field(min_length=1, max_length=32)


class PinVerifyResponse(BaseModel):
    ok: bool
