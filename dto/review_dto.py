from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Any, Dict, List
from database.models import UserType


class ReviewCreateRequest(BaseModel):
    """Review payload after it passed ReviewValidator"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str
    email: str
    phone: str = ""
    subject: str
    message: str
    rating: int
    terms_accepted: bool = Field(..., alias="termsAccepted")
    user_type: UserType = Field(..., alias="userType")
    user_id: Optional[str] = Field(None, alias="userId")
    rank_and_position: str = Field("", alias="rankAndPosition")
    image: Optional[str] = None
    public_id: Optional[str] = Field(None, alias="publicId")


class ReviewStatusUpdateRequest(BaseModel):
    """Body of PATCH /api/reviews/{id}; checked by the controller"""
    field: Optional[str] = None
    value: Any = None


class ReviewCreateResponse(BaseModel):
    success: bool
    message: str
    id: str


class ReviewListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reviews: List[Dict[str, Any]]
    total_pages: int = Field(..., alias="totalPages")
