"""
Personal and professional profile data models.
"""
from typing import List, Optional

from ..storage.models import StoredModel

INDUSTRIES = [
    "Technology",
    "Healthcare",
    "Finance",
    "Education",
    "Marketing",
    "Consulting",
    "Other",
]

EXPERIENCE_LEVELS = ["0-1 years", "1-3 years", "3-5 years", "5-10 years", "10+ years"]

class PersonalData(StoredModel):
    """Contact details shown on the front of a card."""
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    avatar: Optional[str] = None  # image data URI

class ProfessionalData(StoredModel):
    """Work details shown on the card and the public profile."""
    job_title: str = ""
    company: str = ""
    industry: str = ""
    experience: str = ""
    skills: List[str] = []
    services: List[str] = []
    products: List[str] = []
    website: str = ""
    linked_in: str = ""
    portfolio: str = ""
    bio: str = ""
    company_logo: Optional[str] = None  # image data URI
