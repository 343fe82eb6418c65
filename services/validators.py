"""
Ordered payload validation for write endpoints.

Each validator walks its rules in a fixed order and raises ValidationFailure
for the first one that fails, so a caller always sees exactly one message.
"""
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from database.models import (
    UserType,
    ProjectCategory,
    ProjectStatus,
    Priority,
    Currency,
    ContractType,
    PaymentStatus,
)
from dto.review_dto import ReviewCreateRequest
from dto.project_dto import ProjectInput
from middleware.errors import ValidationFailure

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _enum_values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


class ReviewValidator:
    """Validates a raw review payload and builds a ReviewCreateRequest"""

    FIELDS = (
        "name", "email", "phone", "subject", "message", "rating", "termsAccepted",
        "image", "publicId", "userType", "userId", "rankAndPosition",
    )

    def validate(self, payload: Any) -> ReviewCreateRequest:
        if not isinstance(payload, dict):
            raise ValidationFailure("Request body must be a JSON object")

        name = payload.get("name")
        if not name or not _is_str(name) or len(name) > 100:
            raise ValidationFailure("Name is required and must be less than 100 characters")

        email = payload.get("email")
        if not email or not _is_str(email) or not EMAIL_PATTERN.fullmatch(email) or len(email) > 100:
            raise ValidationFailure("Valid email is required and must be less than 100 characters")

        phone = payload.get("phone")
        if phone and (not _is_str(phone) or len(phone) > 20):
            raise ValidationFailure("Phone must be less than 20 characters")

        subject = payload.get("subject")
        if not subject or not _is_str(subject) or len(subject) > 200:
            raise ValidationFailure("Subject is required and must be less than 200 characters")

        message = payload.get("message")
        if not message or not _is_str(message) or len(message) > 5000:
            raise ValidationFailure("Message is required and must be less than 5000 characters")

        rating = payload.get("rating")
        if not _is_number(rating) or not 1 <= rating <= 5 or not float(rating).is_integer():
            raise ValidationFailure("Rating must be an integer between 1 and 5")

        if payload.get("termsAccepted") is not True:
            raise ValidationFailure("Terms acceptance is required")

        image = payload.get("image")
        if image and not _is_str(image):
            raise ValidationFailure("Image must be a string")
        public_id = payload.get("publicId")
        if public_id and not _is_str(public_id):
            raise ValidationFailure("Public ID must be a string")

        user_type = payload.get("userType")
        if user_type not in _enum_values(UserType):
            raise ValidationFailure("User type is required and must be either General or Client")

        user_id: Optional[str] = None
        rank_and_position = ""
        if user_type == UserType.CLIENT.value:
            user_id = payload.get("userId")
            if not user_id or not _is_str(user_id):
                raise ValidationFailure("User ID is required for Client reviews")
            rank_and_position = payload.get("rankAndPosition")
            if not rank_and_position or not _is_str(rank_and_position) or len(rank_and_position) > 100:
                raise ValidationFailure(
                    "Rank and position is required for Client reviews and must be less than 100 characters"
                )

        unknown = sorted(key for key in payload if key not in self.FIELDS)
        if unknown:
            raise ValidationFailure(f"Unknown field(s): {', '.join(unknown)}")

        return ReviewCreateRequest(
            name=name,
            email=email.lower(),
            phone=phone or "",
            subject=subject,
            message=message,
            rating=int(rating),
            terms_accepted=True,
            user_type=UserType(user_type),
            user_id=user_id,
            rank_and_position=rank_and_position,
            image=image or None,
            public_id=public_id or None,
        )


class ProjectValidator:
    """Validates a raw project payload for create (author required) or update"""

    REQUIRED = ("title", "client", "description", "category", "slug")
    STRING_LISTS = ("coAuthors", "techStack", "tools")
    DATES = ("startDate", "deadline", "deliveryDate")

    def validate(self, payload: Any, require_author: bool = True) -> ProjectInput:
        if not isinstance(payload, dict):
            raise ValidationFailure("Request body must be a JSON object")

        required = ("author",) + self.REQUIRED if require_author else self.REQUIRED
        if any(not payload.get(field) or not _is_str(payload.get(field)) for field in required):
            raise ValidationFailure("All required fields must be provided")

        if len(payload["title"]) < 3:
            raise ValidationFailure("Title must be at least 3 characters long")
        if len(payload["description"]) < 10:
            raise ValidationFailure("Description must be at least 10 characters long")

        self._check_choice(payload, "category", ProjectCategory, None, "Invalid category")
        self._check_choice(payload, "status", ProjectStatus, ProjectStatus.ONGOING, "Invalid status")
        self._check_choice(payload, "priority", Priority, Priority.MEDIUM, "Invalid priority")
        self._check_choice(payload, "currency", Currency, Currency.USD, "Invalid currency")
        self._check_choice(payload, "contractType", ContractType, ContractType.NONE, "Invalid contract type")
        self._check_choice(payload, "paymentStatus", PaymentStatus, PaymentStatus.PENDING, "Invalid payment status")

        for field in self.STRING_LISTS:
            value = payload.get(field) or []
            if not isinstance(value, list) or not all(_is_str(item) for item in value):
                raise ValidationFailure(f"{field} must be an array of strings")

        for milestone in payload.get("milestones") or []:
            if (
                not isinstance(milestone, dict)
                or not milestone.get("name")
                or not isinstance(milestone.get("completed"), bool)
                or not milestone.get("date")
            ):
                raise ValidationFailure("Invalid milestone data")

        budget = payload.get("budget")
        if budget is not None and not _is_number(budget):
            raise ValidationFailure("Budget must be a number")

        dates: Dict[str, Optional[datetime]] = {}
        for field in self.DATES:
            dates[field] = self._parse_date(payload.get(field), field)

        data = dict(payload)
        data.update(dates)
        data["budget"] = budget or None
        data["imageUrl"] = payload.get("imageUrl") or None
        data["publicId"] = payload.get("publicId") or None
        for field in self.STRING_LISTS + ("milestones",):
            data[field] = payload.get(field) or []
        # Optional plain-string fields arrive as null from some forms
        for field in ("projectUrl", "repoUrl", "deployment", "caseStudy"):
            data[field] = payload.get(field) or ""
        data["featured"] = bool(payload.get("featured", False))

        try:
            return ProjectInput.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationFailure(f"Invalid value for {location}")

    @staticmethod
    def _check_choice(payload: Dict[str, Any], field: str, enum_cls, default, message: str) -> None:
        value = payload.get(field, default.value if default is not None else None)
        if value not in _enum_values(enum_cls):
            raise ValidationFailure(message)

    @staticmethod
    def _parse_date(value: Any, field: str) -> Optional[datetime]:
        if not value:
            return None
        if not _is_str(value):
            raise ValidationFailure(f"Invalid date for {field}")
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationFailure(f"Invalid date for {field}")
