from pydantic import BaseModel, Field, ValidationError, field_validator


class SettingsSchema(BaseModel):
    backend_url: str = "http://localhost:8000"
    request_timeout: float = Field(default=10.0, gt=0)
    default_sets: int = Field(default=3, gt=0)
    default_reps: int = Field(default=10, gt=0)
    default_rest_seconds: int = Field(default=90, ge=0)

    @field_validator("backend_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
