"""
Per-account profile data and business cards.
"""
import logging
from typing import List, Optional

from ..personal.models import PersonalData, ProfessionalData
from ..storage.kv_store import (
    KeyValueStore,
    USERS_KEY,
    business_cards_key,
    personal_data_key,
    professional_data_key,
)
from ..storage.models import CardRecord, CardTemplate
from ..utils.ids import new_timestamp_id

logger = logging.getLogger(__name__)

class ProfileService:
    """Profile data store keyed by account id.

    Personal and professional data are replaced whole on every update.
    Card lists keep insertion order and hold at most one active card.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def get_personal(self, account_id: str) -> Optional[PersonalData]:
        raw = self._store.get(personal_data_key(account_id))
        return PersonalData.model_validate(raw) if raw is not None else None

    def set_personal(self, account_id: str, data: PersonalData):
        self._store.set(personal_data_key(account_id), data.to_storage())
        logger.debug("Saved personal data for %s", account_id)

    def get_professional(self, account_id: str) -> Optional[ProfessionalData]:
        raw = self._store.get(professional_data_key(account_id))
        return ProfessionalData.model_validate(raw) if raw is not None else None

    def set_professional(self, account_id: str, data: ProfessionalData):
        self._store.set(professional_data_key(account_id), data.to_storage())
        logger.debug("Saved professional data for %s", account_id)

    def list_cards(self, account_id: str) -> List[CardRecord]:
        """Cards of an account in creation order."""
        raw = self._store.get(business_cards_key(account_id)) or []
        return [CardRecord.model_validate(card) for card in raw]

    def create_card(self, account_id: str, template: CardTemplate) -> CardRecord:
        """Append a new card; the first card of an account starts active."""
        cards = self.list_cards(account_id)
        card = CardRecord(
            id=new_timestamp_id({c.id for c in cards}),
            account_id=account_id,
            template=CardTemplate(template),
            is_active=len(cards) == 0,
        )
        self._save_cards(account_id, cards + [card])
        logger.info("Created %s card %s for %s", card.template.value, card.id, account_id)
        return card

    def set_active_card(self, account_id: str, card_id: str):
        """Mark card_id active and every other card inactive.

        An unknown card_id leaves no card active; the list is saved
        either way.
        """
        cards = self.list_cards(account_id)
        if not any(card.id == card_id for card in cards):
            logger.warning("Card %s not found for %s; no card is active now", card_id, account_id)
        updated = [card.model_copy(update={"is_active": card.id == card_id}) for card in cards]
        self._save_cards(account_id, updated)

    def active_card(self, account_id: str) -> Optional[CardRecord]:
        for card in self.list_cards(account_id):
            if card.is_active:
                return card
        return None

    def all_business_cards(self) -> List[CardRecord]:
        """Every card of every registered account, account by account."""
        cards: List[CardRecord] = []
        for raw_account in self._store.get(USERS_KEY) or []:
            cards.extend(self.list_cards(raw_account["id"]))
        return cards

    def _save_cards(self, account_id: str, cards: List[CardRecord]):
        self._store.set(business_cards_key(account_id), [card.to_storage() for card in cards])
