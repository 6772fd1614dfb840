"""
Data models for accounts and business cards.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, NamedTuple, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class StoredModel(BaseModel):
    """Base model persisted with the camelCase keys of the storage layout."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> Dict[str, Any]:
        """JSON-ready dict using the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

class AccountType(str, Enum):
    """Kind of registered account."""
    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"

class TemplateStyle(NamedTuple):
    name: str
    description: str
    gradient: Tuple[str, str]

class CardTemplate(str, Enum):
    """Visual template of a business card."""
    MODERN = "modern"
    PROFESSIONAL = "professional"
    CREATIVE = "creative"
    MINIMAL = "minimal"
    CORPORATE = "corporate"
    TECH = "tech"

    @property
    def style(self) -> TemplateStyle:
        return TEMPLATE_STYLES[self]

TEMPLATE_STYLES = {
    CardTemplate.MODERN: TemplateStyle(
        "Modern", "Clean and minimalist design with bold colors", ("#2563eb", "#0d9488")
    ),
    CardTemplate.PROFESSIONAL: TemplateStyle(
        "Professional", "Classic business card with elegant typography", ("#1f2937", "#4b5563")
    ),
    CardTemplate.CREATIVE: TemplateStyle(
        "Creative", "Vibrant colors and unique layout for creative professionals", ("#9333ea", "#db2777")
    ),
    CardTemplate.MINIMAL: TemplateStyle(
        "Minimal", "Simple and clean design focusing on content", ("#16a34a", "#2563eb")
    ),
    CardTemplate.CORPORATE: TemplateStyle(
        "Corporate", "Professional corporate design with structured layout", ("#4f46e5", "#2563eb")
    ),
    CardTemplate.TECH: TemplateStyle(
        "Tech", "Modern tech-inspired design with geometric elements", ("#0891b2", "#2563eb")
    ),
}

class SessionUser(StoredModel):
    """Public projection of an account, stored as the current session."""
    id: str
    phone: str
    name: str
    type: AccountType
    username: str

class Account(SessionUser):
    """Registered account, including its password."""
    password: str

    def to_session(self) -> SessionUser:
        return SessionUser(**self.model_dump(exclude={"password"}))

class CardRecord(StoredModel):
    """A business card created by an account."""
    id: str
    account_id: str
    template: CardTemplate
    is_active: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
