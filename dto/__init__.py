from dto.review_dto import (
    ReviewCreateRequest,
    ReviewStatusUpdateRequest,
    ReviewCreateResponse,
    ReviewListResponse,
)
from dto.project_dto import ProjectInput, ProjectListResponse
