from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, model_validator

# Rounding slack for boxes that end exactly on the image edge
EDGE_TOLERANCE = 1e-9


class CommentPosition(BaseModel):
    x: float = Field(..., ge=0, le=1, description="Left edge of the annotation box, fraction of image width")
    y: float = Field(..., ge=0, le=1, description="Top edge of the annotation box, fraction of image height")
    width: float = Field(0.0, ge=0, le=1)
    height: float = Field(0.0, ge=0, le=1)
    image_index: int = Field(0, ge=0, description="Which product image the box is drawn on")

    @model_validator(mode="after")
    def box_inside_image(self) -> "CommentPosition":
        if self.x + self.width > 1 + EDGE_TOLERANCE:
            raise ValueError("x + width must not exceed 1")
        if self.y + self.height > 1 + EDGE_TOLERANCE:
            raise ValueError("y + height must not exceed 1")
        return self


class CommentCreate(CommentPosition):
    body: str = Field(..., min_length=1, max_length=5000)
    author_name: str = Field(..., min_length=1, max_length=100)
    author_token: str = Field(
        ...,
        min_length=8,
        max_length=200,
        description="Client generated secret, required later to edit or delete this comment",
    )


class CommentUpdate(BaseModel):
    body: str = Field(..., min_length=1, max_length=5000)


class CommentResolve(BaseModel):
    resolved: bool = True


class CommentResponse(CommentPosition):
    id: str
    mockup_id: str
    version_number: int
    body: str
    author_name: str
    resolved: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CommentsCleared(BaseModel):
    deleted: int
