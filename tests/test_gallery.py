"""
Tests for the card gallery and public profiles.
"""
import pytest
from cardcraft.gallery.catalog import (
    GalleryFilter,
    all_published_cards,
    filter_cards,
    public_profile,
)
from cardcraft.personal.models import PersonalData, ProfessionalData
from cardcraft.storage.models import AccountType, CardTemplate

def _publish(accounts, profiles, phone, name, industry, skills, account_type=AccountType.INDIVIDUAL,
             templates=(CardTemplate.MODERN,), job_title="Engineer", company="Acme", services=()):
    account = accounts.register(phone, "pw", name, account_type)
    profiles.set_personal(account.id, PersonalData(name=name, email=f"{phone}@example.com"))
    profiles.set_professional(account.id, ProfessionalData(
        job_title=job_title,
        company=company,
        industry=industry,
        skills=list(skills),
        services=list(services),
    ))
    for template in templates:
        profiles.create_card(account.id, template)
    return account

@pytest.fixture
def populated(accounts, profiles):
    """Three published accounts plus one incomplete profile."""
    jane = _publish(accounts, profiles, "555-0001", "Jane Doe", "Technology", ["Python", "Go"],
                    templates=(CardTemplate.MODERN, CardTemplate.TECH))
    bank = _publish(accounts, profiles, "555-0002", "Big Bank", "Finance", ["Python", "Risk"],
                    account_type=AccountType.ORGANIZATION, job_title="Lending", company="Big Bank",
                    services=["Mortgages"])
    bob = _publish(accounts, profiles, "555-0003", "Bob Smith", "Technology", ["Rust"],
                   job_title="Designer", company="Studio")

    incomplete = accounts.register("555-0004", "pw", "No Professional")
    profiles.set_personal(incomplete.id, PersonalData(name="No Professional"))
    profiles.create_card(incomplete.id, CardTemplate.MINIMAL)

    return {"jane": jane, "bank": bank, "bob": bob, "incomplete": incomplete}

def test_all_published_cards_excludes_incomplete_profiles(accounts, profiles, populated):
    entries = all_published_cards(accounts, profiles)

    assert len(entries) == 4  # Jane has two cards
    assert populated["incomplete"].id not in {e.account.id for e in entries}
    assert [e.card.account_id for e in entries] == [
        populated["jane"].id, populated["jane"].id, populated["bank"].id, populated["bob"].id,
    ]

def test_entries_join_account_and_profile(accounts, profiles, populated):
    entry = next(e for e in all_published_cards(accounts, profiles) if e.account.id == populated["bank"].id)

    assert entry.account.type == AccountType.ORGANIZATION
    assert entry.personal.name == "Big Bank"
    assert entry.professional.industry == "Finance"
    assert not hasattr(entry.account, "password")

def test_missing_personal_data_excluded(accounts, profiles):
    account = accounts.register("555-0009", "pw", "Pro Only")
    profiles.set_professional(account.id, ProfessionalData(industry="Finance"))
    profiles.create_card(account.id, CardTemplate.MODERN)

    assert all_published_cards(accounts, profiles) == []

def test_industry_filter(accounts, profiles, populated):
    entries = all_published_cards(accounts, profiles)

    tech = filter_cards(entries, GalleryFilter(industry="Technology"))
    assert {e.professional.industry for e in tech} == {"Technology"}
    assert len(tech) == 3

def test_search_and_industry_combine(accounts, profiles, populated):
    entries = all_published_cards(accounts, profiles)

    result = filter_cards(entries, GalleryFilter(search="pyth", industry="Technology"))
    assert {e.account.id for e in result} == {populated["jane"].id}

    # Same search without the industry filter also finds the Finance card
    result = filter_cards(entries, GalleryFilter(search="pyth"))
    assert {e.account.id for e in result} == {populated["jane"].id, populated["bank"].id}

@pytest.mark.parametrize("term,expected", [
    ("jane", {"jane"}),
    ("DESIGNER", {"bob"}),
    ("studio", {"bob"}),
    ("mortgage", {"bank"}),
    ("rust", {"bob"}),
    ("nobody", set()),
])
def test_search_fields(accounts, profiles, populated, term, expected):
    entries = all_published_cards(accounts, profiles)
    result = filter_cards(entries, GalleryFilter(search=term))
    assert {e.account.id for e in result} == {populated[key].id for key in expected}

def test_account_type_filter(accounts, profiles, populated):
    entries = all_published_cards(accounts, profiles)

    result = filter_cards(entries, GalleryFilter(account_type=AccountType.ORGANIZATION))
    assert {e.account.id for e in result} == {populated["bank"].id}

    result = filter_cards(entries, GalleryFilter(search="python", account_type=AccountType.INDIVIDUAL))
    assert {e.account.id for e in result} == {populated["jane"].id}

def test_empty_filter_matches_everything(accounts, profiles, populated):
    entries = all_published_cards(accounts, profiles)
    gallery_filter = GalleryFilter()

    assert gallery_filter.is_empty()
    assert filter_cards(entries, gallery_filter) == entries

def test_public_profile(accounts, profiles, populated):
    jane = populated["jane"]
    cards = profiles.list_cards(jane.id)
    profiles.set_active_card(jane.id, cards[1].id)

    profile = public_profile(jane.username, accounts, profiles)

    assert profile.account.name == "Jane Doe"
    assert profile.professional.skills == ["Python", "Go"]
    assert len(profile.cards) == 2
    assert profile.active_card.id == cards[1].id

def test_public_profile_without_active_card(accounts, profiles):
    account = accounts.register("555-0010", "pw", "New User")

    profile = public_profile(account.username, accounts, profiles)
    assert profile.personal is None
    assert profile.cards == []
    assert profile.active_card is None

def test_public_profile_not_found(accounts, profiles):
    assert public_profile("doesnotexist", accounts, profiles) is None
