"""Speech request value object passed into the delivery pipeline."""

from pydantic import BaseModel, ConfigDict, field_validator


class SpeechRequest(BaseModel):
    """Text to be spoken. Stateless, never persisted."""

    model_config = ConfigDict(frozen=True)

    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value
