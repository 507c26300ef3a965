from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class MockupContent(BaseModel):
    # Any JSON value except null; the product page shape is owned by the editor
    content: Any = Field(..., description="Product page document, stored as-is")

    @field_validator("content")
    @classmethod
    def content_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("content must not be null")
        return value


class MockupCreate(MockupContent):
    password: Optional[str] = Field(None, description="Optional viewer password; empty means public")


class MockupUpdate(MockupContent):
    password: Optional[str] = Field(None, description="Replaces the viewer password when given")
    remove_password: bool = Field(False, description="Make the mockup public again")

    @model_validator(mode="after")
    def password_or_removal(self) -> "MockupUpdate":
        if self.password and self.remove_password:
            raise ValueError("Send either a new password or remove_password, not both")
        return self


class MockupCreated(BaseModel):
    id: str


class MockupRead(BaseModel):
    id: str
    content: Any
    view_count: int
    current_version: int
    viewing_version: int
    is_current_version: bool


class MockupSummary(BaseModel):
    id: str
    content: Any
    password_protected: bool
    view_count: int
    current_version: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
