from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from datetime import date
from typing import Optional, List, Dict, Any

STATUS_FILTERS = ("all", "available", "used")


def _blank_to_none(v):
    # Los query strings llegan como "" cuando el parámetro va vacío
    if isinstance(v, str) and not v.strip():
        return None
    return v


class GrantRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    sponsor_id: int = Field(gt=0)
    # Placeholder: se valida y se devuelve, pero no se persiste
    expiry: Optional[date] = None

    @field_validator("expiry", mode="before")
    @classmethod
    def empty_expiry(cls, v):
        return _blank_to_none(v)


class CheckTokensQuery(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    status: str = "all"

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        v = _blank_to_none(v)
        return "all" if v is None else str(v).lower()

    @field_validator("status")
    @classmethod
    def known_status(cls, v):
        if v not in STATUS_FILTERS:
            raise ValueError(f"status must be one of: {', '.join(STATUS_FILTERS)}")
        return v


class JoinQueueRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=32)
    user_id: Optional[int] = Field(default=None, gt=0)

    @field_validator("user_id", mode="before")
    @classmethod
    def empty_user_id(cls, v):
        return _blank_to_none(v)


def validation_details(err: ValidationError) -> List[Dict[str, Any]]:
    """Aplana los errores de pydantic a [{field, message}] serializable."""
    out: List[Dict[str, Any]] = []
    for e in err.errors():
        out.append({
            "field": ".".join(str(p) for p in e.get("loc", ())) or None,
            "message": e.get("msg"),
        })
    return out
