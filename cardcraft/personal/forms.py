"""
Form boundary for profile data.

The stores accept whatever they are given; required fields and option
lists are checked here, where the user submits a form.
"""
import re
from typing import List

from pydantic import ConfigDict, field_validator

from .models import EXPERIENCE_LEVELS, INDUSTRIES, PersonalData, ProfessionalData

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")

LIST_FIELDS = ("skills", "services", "products")

def _strip(value):
    return value.strip() if isinstance(value, str) else value

class PersonalDataForm(PersonalData):
    """Submitted personal information form."""
    model_config = ConfigDict(validate_default=True)

    @field_validator("name", "email", "phone", "address", "city", "state", "zip_code", mode="before")
    @classmethod
    def required(cls, value):
        value = _strip(value)
        if not value:
            raise ValueError("This field is required")
        return value

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Enter a valid email address")
        return value

    def to_data(self) -> PersonalData:
        return PersonalData(**self.model_dump())

class ProfessionalDataForm(ProfessionalData):
    """Submitted professional information form."""
    model_config = ConfigDict(validate_default=True)

    @field_validator("job_title", "company", "industry", "experience", mode="before")
    @classmethod
    def required(cls, value):
        value = _strip(value)
        if not value:
            raise ValueError("This field is required")
        return value

    @field_validator("website", "linked_in", "portfolio", "bio", mode="before")
    @classmethod
    def optional_text(cls, value):
        return _strip(value)

    @field_validator("industry")
    @classmethod
    def known_industry(cls, value: str) -> str:
        if value not in INDUSTRIES:
            raise ValueError(f"Industry must be one of: {', '.join(INDUSTRIES)}")
        return value

    @field_validator("experience")
    @classmethod
    def known_experience(cls, value: str) -> str:
        if value not in EXPERIENCE_LEVELS:
            raise ValueError(f"Experience must be one of: {', '.join(EXPERIENCE_LEVELS)}")
        return value

    @field_validator("skills", "services", "products", mode="before")
    @classmethod
    def clean_items(cls, value):
        if value is None:
            return []
        return [item.strip() for item in value if item and item.strip()]

    def to_data(self) -> ProfessionalData:
        return ProfessionalData(**self.model_dump())

def add_item(data: ProfessionalData, kind: str, value: str) -> ProfessionalData:
    """Return a copy of data with value appended to the skills/services/products list.

    Blank values are ignored.
    """
    if kind not in LIST_FIELDS:
        raise ValueError(f"Unknown list field: {kind}")
    value = value.strip()
    if not value:
        return data
    items: List[str] = [*getattr(data, kind), value]
    return data.model_copy(update={kind: items})

def remove_item(data: ProfessionalData, kind: str, index: int) -> ProfessionalData:
    """Return a copy of data without the item at index; out-of-range indexes change nothing."""
    if kind not in LIST_FIELDS:
        raise ValueError(f"Unknown list field: {kind}")
    items = [item for i, item in enumerate(getattr(data, kind)) if i != index]
    return data.model_copy(update={kind: items})
