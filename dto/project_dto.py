from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from database.models import (
    Milestone,
    ProjectCategory,
    ProjectStatus,
    Priority,
    Currency,
    ContractType,
    PaymentStatus,
)


class ProjectInput(BaseModel):
    """Project payload after it passed ProjectValidator"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    author: Optional[str] = None
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


class ProjectListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    projects: List[Dict[str, Any]]
    total_pages: int = Field(..., alias="totalPages")
    current_page: int = Field(..., alias="currentPage")
