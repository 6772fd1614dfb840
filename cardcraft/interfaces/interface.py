"""
Main interface for CardCraft users.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from ..accounts.service import AccountService
from ..export.card_export import CardRasterizer, download_both_sides, download_card
from ..gallery.catalog import (
    GalleryEntry,
    GalleryFilter,
    PublicProfile,
    all_published_cards,
    filter_cards,
    public_profile,
)
from ..personal.models import PersonalData, ProfessionalData
from ..profile.service import ProfileService
from ..storage.kv_store import KeyValueStore
from ..storage.models import Account, AccountType, CardRecord, CardTemplate, SessionUser
from ..utils.config import Config
from ..utils.errors import NotLoggedInError

logger = logging.getLogger(__name__)

GUEST_ONLY_ROUTES = {"/login", "/register"}
PROTECTED_ROUTES = {
    "/personal-data": "personal_data",
    "/professional-data": "professional_data",
    "/business-cards": "business_cards",
    "/create-card": "create_card",
    "/gallery": "gallery",
    "/edit-profile": "edit_profile",
}
PROFILE_PREFIX = "/profile/"

class RouteResult(BaseModel):
    """Outcome of navigating to a path: a view to show or a redirect."""
    path: str
    view: Optional[str] = None
    redirect: Optional[str] = None
    context: Dict[str, Any] = {}

class CardCraft:
    """Digital business card builder.

    Owns one key/value store and the two services built on it.
    """

    def __init__(self, storage_path: Optional[str] = None, config: Optional[Config] = None):
        """Initialize CardCraft with optional storage location and configuration.

        Args:
            storage_path: Directory of the persisted key/value document.
                          If None, uses the configured data directory
            config: Optional configuration; a default Config is created if omitted
        """
        self.config = config or Config()
        if storage_path is None:
            storage_path = self.config.data_dir

        self._store = KeyValueStore(storage_path)
        self.accounts = AccountService(self._store)
        self.profiles = ProfileService(self._store)
        self._rasterizer = CardRasterizer()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def session(self) -> Optional[SessionUser]:
        return self.accounts.current_session()

    def _require_session(self) -> SessionUser:
        session = self.accounts.current_session()
        if session is None:
            raise NotLoggedInError()
        return session

    def register(
        self,
        phone: str,
        password: str,
        name: str,
        type: AccountType = AccountType.INDIVIDUAL
    ) -> Account:
        return self.accounts.register(phone, password, name, type)

    def login(self, phone: str, password: str) -> Account:
        return self.accounts.login(phone, password)

    def logout(self):
        self.accounts.logout()

    def update_personal_data(self, data: PersonalData):
        self.profiles.set_personal(self._require_session().id, data)

    def update_professional_data(self, data: ProfessionalData):
        self.profiles.set_professional(self._require_session().id, data)

    def personal_data(self) -> Optional[PersonalData]:
        return self.profiles.get_personal(self._require_session().id)

    def professional_data(self) -> Optional[ProfessionalData]:
        return self.profiles.get_professional(self._require_session().id)

    def business_cards(self) -> List[CardRecord]:
        return self.profiles.list_cards(self._require_session().id)

    def create_business_card(self, template: CardTemplate) -> CardRecord:
        return self.profiles.create_card(self._require_session().id, template)

    def set_active_card(self, card_id: str):
        self.profiles.set_active_card(self._require_session().id, card_id)

    def gallery(self, gallery_filter: Optional[GalleryFilter] = None) -> List[GalleryEntry]:
        """Published cards, narrowed by the given filter."""
        entries = all_published_cards(self.accounts, self.profiles)
        if gallery_filter is None:
            return entries
        return filter_cards(entries, gallery_filter)

    def public_profile(self, username: str) -> Optional[PublicProfile]:
        return public_profile(username, self.accounts, self.profiles)

    def _card_for_export(self, card_id: Optional[str]) -> CardRecord:
        session = self._require_session()
        cards = self.profiles.list_cards(session.id)
        if card_id is None:
            card = next((c for c in cards if c.is_active), None)
        else:
            card = next((c for c in cards if c.id == card_id), None)
        if card is None:
            raise ValueError(f"Card not found: {card_id or 'active card'}")
        return card

    async def export_card(
        self,
        side: str = "front",
        card_id: Optional[str] = None,
        out_dir: Optional[str] = None
    ) -> Optional[Path]:
        """Export one side of a card (the active card by default) as PNG."""
        card = self._card_for_export(card_id)
        return await download_card(
            self._rasterizer,
            side,
            card.template,
            self.personal_data(),
            self.professional_data(),
            out_dir or self.config.export_dir,
        )

    async def export_both_sides(
        self,
        card_id: Optional[str] = None,
        out_dir: Optional[str] = None
    ) -> Tuple[Optional[Path], Optional[Path]]:
        card = self._card_for_export(card_id)
        return await download_both_sides(
            self._rasterizer,
            card.template,
            self.personal_data(),
            self.professional_data(),
            out_dir or self.config.export_dir,
        )

    def navigate(self, path: str) -> RouteResult:
        """Resolve a path against the current session.

        Signed-out users are redirected to /login from account pages;
        signed-in users are redirected away from /login and /register.
        /profile/<username> is public.
        """
        path = path.rstrip("/") or "/"
        session = self.accounts.current_session()
        authenticated = session is not None

        if path == "/":
            return RouteResult(path=path, redirect="/business-cards" if authenticated else "/login")

        if path in GUEST_ONLY_ROUTES:
            if authenticated:
                return RouteResult(path=path, redirect="/personal-data")
            return RouteResult(path=path, view=path.lstrip("/"))

        if path in PROTECTED_ROUTES:
            if not authenticated:
                return RouteResult(path=path, redirect="/login")
            return RouteResult(path=path, view=PROTECTED_ROUTES[path], context={"user": session})

        if path.startswith(PROFILE_PREFIX):
            username = path[len(PROFILE_PREFIX):]
            profile = self.public_profile(username)
            if profile is None:
                logger.info("Profile not found: %s", username)
                return RouteResult(path=path, view="not_found", context={"username": username})
            return RouteResult(path=path, view="profile", context={"profile": profile})

        return RouteResult(path=path, view="not_found")
