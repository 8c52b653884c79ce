# app/models/llm_models.py
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator
from pydantic_core import PydanticCustomError


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: StrictStr
    user_id: StrictStr = Field(alias="userId")

    @field_validator("message", "user_id")
    @classmethod
    def strip_and_require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("empty_field", "must not be empty")
        return value


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    conversation_id: str = Field(alias="conversationId")
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    code: str
    timestamp: str


class ConversationResetResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(alias="conversationId")
    cleared: bool
    timestamp: str


def describe_validation_errors(exc: ValidationError) -> str:
    """
    Collapses every field problem in a ChatRequest ValidationError into one
    client-facing sentence list.
    """
    messages: list[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc:
            messages.append("Invalid input. Expected an object.")
            continue

        field = ".".join(str(part) for part in loc)
        error_type = error.get("type")
        if error_type == "missing":
            messages.append(f"Missing field. '{field}' is required.")
        elif error_type == "string_type":
            messages.append(f"Invalid input type. '{field}' must be a string.")
        elif error_type == "empty_field":
            messages.append(f"Empty input field. '{field}' must not be empty.")
        else:
            messages.append(f"Invalid field '{field}': {error.get('msg')}.")
    return " ".join(messages)
