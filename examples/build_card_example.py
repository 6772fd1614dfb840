"""
Example script: register, fill in a profile, create a card and export it.

Optional environment variables in .env:
- CARDCRAFT_DATA_DIR: Where the local store is kept
- CARDCRAFT_EXPORT_DIR: Where exported PNGs are written
"""
import asyncio
from dotenv import load_dotenv
from cardcraft.gallery.catalog import GalleryFilter
from cardcraft.interfaces.interface import CardCraft
from cardcraft.personal.models import PersonalData, ProfessionalData
from cardcraft.storage.models import AccountType, CardTemplate
from cardcraft.utils.errors import DuplicatePhoneError

async def main():
    load_dotenv()

    app = CardCraft()

    try:
        app.register("+1 (555) 010-2030", "secret", "Jane Doe", AccountType.INDIVIDUAL)
    except DuplicatePhoneError:
        app.login("+1 (555) 010-2030", "secret")

    app.update_personal_data(PersonalData(
        name="Jane Doe",
        email="jane@example.com",
        phone="+1 (555) 010-2030",
        address="1 Main St",
        city="Austin",
        state="TX",
        zip_code="73301",
    ))
    app.update_professional_data(ProfessionalData(
        job_title="Software Engineer",
        company="Acme",
        industry="Technology",
        experience="3-5 years",
        skills=["Python", "Data Engineering"],
        services=["Consulting", "Code Review"],
    ))

    if not app.business_cards():
        app.create_business_card(CardTemplate.MODERN)

    front, back = await app.export_both_sides()
    print(f"Front: {front}")
    print(f"Back: {back}")

    entries = app.gallery(GalleryFilter(search="python", industry="Technology"))
    print(f"\n{len(entries)} matching cards in the gallery")

    route = app.navigate(f"/profile/{app.session.username}")
    print(f"Public profile view: {route.view}")

if __name__ == "__main__":
    asyncio.run(main())
