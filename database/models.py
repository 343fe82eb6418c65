from beanie import Document, init_beanie
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List
from datetime import datetime
from motor.motor_asyncio import AsyncIOMotorClient
from enum import Enum
import logging
from config.variable import (
    MONGODB_URI,
    DATABASE_NAME,
    MONGO_SERVER_SELECTION_TIMEOUT_MS,
    MONGO_CONNECT_TIMEOUT_MS,
    MONGO_SOCKET_TIMEOUT_MS,
)

logger = logging.getLogger("craftcode.database")


class UserType(str, Enum):
    GENERAL = "General"
    CLIENT = "Client"


class ProjectCategory(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    BACKEND = "Backend"
    FRONTEND = "Frontend"
    FULLSTACK = "Fullstack"
    DESIGN = "Design"
    OTHER = "Other"


class ProjectStatus(str, Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    INR = "INR"
    AUD = "AUD"
    BDT = "BDT"


class ContractType(str, Enum):
    NONE = ""
    FIXED_PRICE = "fixed-price"
    HOURLY = "hourly"
    RETAINER = "retainer"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


def _serialize(document: Document) -> Dict[str, Any]:
    """Dump a document with its stored field names and a string ``_id``"""
    data = document.model_dump(by_alias=True, exclude={"revision_id"})
    data["_id"] = str(document.id)
    return data


class Review(Document):
    """Review submitted from the public site; content never changes after insert"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=100)
    phone: str = ""
    subject: str = Field(..., max_length=200)
    message: str = Field(..., max_length=5000)
    rating: int = Field(..., ge=1, le=5)
    terms_accepted: bool = Field(..., alias="termsAccepted")
    image: Optional[str] = None
    public_id: Optional[str] = Field(None, alias="publicId")
    user_type: UserType = Field(..., alias="userType")
    user_id: Optional[str] = Field(None, alias="userId")
    rank_and_position: str = Field("", alias="rankAndPosition")

    # Moderation flag, only ever set through the status PATCH
    status: Optional[bool] = None
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")

    class Settings:
        name = "reviews"
        indexes = ["createdAt", "status"]

    def to_response(self) -> Dict[str, Any]:
        return _serialize(self)


class Milestone(BaseModel):
    name: str
    completed: bool
    date: str


class Project(Document):
    """Portfolio project managed from the dashboard"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    author: str = Field(..., description="User id of the owner")
    co_authors: List[str] = Field(default_factory=list, alias="coAuthors")
    client: str
    start_date: Optional[datetime] = Field(None, alias="startDate")
    deadline: Optional[datetime] = None
    delivery_date: Optional[datetime] = Field(None, alias="deliveryDate")
    description: str
    tech_stack: List[str] = Field(default_factory=list, alias="techStack")
    tools: List[str] = Field(default_factory=list)
    category: ProjectCategory
    status: ProjectStatus = ProjectStatus.ONGOING
    priority: Priority = Priority.MEDIUM
    slug: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    public_id: Optional[str] = Field(None, alias="publicId")
    project_url: str = Field("", alias="projectUrl")
    repo_url: str = Field("", alias="repoUrl")
    deployment: str = ""
    budget: Optional[float] = None
    currency: Currency = Currency.USD
    contract_type: ContractType = Field(ContractType.NONE, alias="contractType")
    payment_status: PaymentStatus = Field(PaymentStatus.PENDING, alias="paymentStatus")
    featured: bool = False
    case_study: str = Field("", alias="caseStudy")
    milestones: List[Milestone] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")

    class Settings:
        name = "projects"
        indexes = ["slug", "author", "createdAt"]

    def to_response(self) -> Dict[str, Any]:
        return _serialize(self)


DOCUMENT_MODELS = [Review, Project]

# Process-wide client, created on first use and shared by every request
_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Return the shared Mongo client, creating it on first call"""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            MONGODB_URI,
            serverSelectionTimeoutMS=MONGO_SERVER_SELECTION_TIMEOUT_MS,
            connectTimeoutMS=MONGO_CONNECT_TIMEOUT_MS,
            socketTimeoutMS=MONGO_SOCKET_TIMEOUT_MS,
        )
    return _client


async def init_database(client: Optional[AsyncIOMotorClient] = None):
    """Initialize MongoDB connection and Beanie

    Passing a client replaces the shared one (tests hand in an in-memory client).
    """
    global _client
    if client is not None:
        _client = client
    await init_beanie(
        database=get_client()[DATABASE_NAME],
        document_models=DOCUMENT_MODELS
    )
    logger.info(f"Connected to MongoDB: {DATABASE_NAME}")


def close_database():
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")
