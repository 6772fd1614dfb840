"""
Gallery of published cards and public profile lookup.
"""
from typing import List, Optional

from pydantic import BaseModel

from ..accounts.service import AccountService
from ..personal.models import PersonalData, ProfessionalData
from ..profile.service import ProfileService
from ..storage.models import AccountType, CardRecord, SessionUser

class GalleryEntry(BaseModel):
    """A card joined with its owner's account and profile data."""
    card: CardRecord
    account: SessionUser
    personal: PersonalData
    professional: ProfessionalData

class GalleryFilter(BaseModel):
    """Active gallery filters; empty values match everything."""
    search: str = ""
    industry: str = ""
    account_type: Optional[AccountType] = None

    def is_empty(self) -> bool:
        return not self.search and not self.industry and self.account_type is None

class PublicProfile(BaseModel):
    """Everything shown on /profile/<username>."""
    account: SessionUser
    personal: Optional[PersonalData] = None
    professional: Optional[ProfessionalData] = None
    cards: List[CardRecord] = []
    active_card: Optional[CardRecord] = None

def all_published_cards(accounts: AccountService, profiles: ProfileService) -> List[GalleryEntry]:
    """Join every card with its account's data.

    Accounts missing personal or professional data are not listed.
    Rescans the whole store on every call.
    """
    entries = []
    for account in accounts.list_accounts():
        personal = profiles.get_personal(account.id)
        professional = profiles.get_professional(account.id)
        if personal is None or professional is None:
            continue
        for card in profiles.list_cards(account.id):
            entries.append(GalleryEntry(
                card=card,
                account=account.to_session(),
                personal=personal,
                professional=professional,
            ))
    return entries

def _matches_search(entry: GalleryEntry, term: str) -> bool:
    term = term.lower()
    fields = [entry.personal.name, entry.professional.job_title, entry.professional.company]
    if any(term in field.lower() for field in fields):
        return True
    return any(term in item.lower() for item in entry.professional.skills + entry.professional.services)

def filter_cards(entries: List[GalleryEntry], gallery_filter: GalleryFilter) -> List[GalleryEntry]:
    """Apply search, industry and account type filters together (logical AND)."""
    filtered = entries

    if gallery_filter.search:
        filtered = [e for e in filtered if _matches_search(e, gallery_filter.search)]

    if gallery_filter.industry:
        filtered = [e for e in filtered if e.professional.industry == gallery_filter.industry]

    if gallery_filter.account_type is not None:
        filtered = [e for e in filtered if e.account.type == gallery_filter.account_type]

    return filtered

def public_profile(
    username: str,
    accounts: AccountService,
    profiles: ProfileService
) -> Optional[PublicProfile]:
    """Look up the public profile for username; None when no account has it.

    No authentication is required.
    """
    account = accounts.find_by_username(username)
    if account is None:
        return None
    cards = profiles.list_cards(account.id)
    return PublicProfile(
        account=account.to_session(),
        personal=profiles.get_personal(account.id),
        professional=profiles.get_professional(account.id),
        cards=cards,
        active_card=next((card for card in cards if card.is_active), None),
    )
