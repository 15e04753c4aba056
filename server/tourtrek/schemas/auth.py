"""Token issuance schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TokenRequest(BaseModel):
    """Identity to sign. Any extra fields are carried into the token claims."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(..., description="Caller email, becomes the authenticated identity")


class TokenResponse(BaseModel):
    token: str = Field(..., description="Signed bearer token")
