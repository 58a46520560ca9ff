from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    prompt: str | None = Field(default=None, description="Prompt to send to Gemini")


class TextResponse(BaseModel):
    response: str


class ImageResponse(BaseModel):
    imageUrl: str | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
