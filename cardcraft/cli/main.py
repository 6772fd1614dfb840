"""
Command-line interface for CardCraft.
"""
import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError

from cardcraft.gallery.catalog import GalleryFilter
from cardcraft.interfaces.interface import CardCraft
from cardcraft.personal.forms import (
    LIST_FIELDS,
    PersonalDataForm,
    ProfessionalDataForm,
    add_item,
    remove_item,
)
from cardcraft.personal.models import EXPERIENCE_LEVELS, INDUSTRIES, PersonalData, ProfessionalData
from cardcraft.storage.models import AccountType, CardTemplate
from cardcraft.utils.config import Config
from cardcraft.utils.errors import CardCraftError
from cardcraft.utils.logger import setup_logger

def _image_to_data_uri(path: str) -> str:
    p = Path(path)
    if not p.exists():
        raise click.ClickException(f"File not found: {path}")
    mime, _ = mimetypes.guess_type(p.name)
    if not mime or not mime.startswith("image/"):
        raise click.ClickException(f"Not an image file: {path}")
    return f"data:{mime};base64,{base64.b64encode(p.read_bytes()).decode('ascii')}"

def _echo_form_errors(error: ValidationError) -> None:
    click.echo("Please fix the following fields:", err=True)
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"])
        click.echo(f"  {field}: {item['msg']}", err=True)

def _run(action):
    """Call action, turning store errors into CLI errors."""
    try:
        return action()
    except CardCraftError as e:
        raise click.ClickException(str(e))

@click.group()
@click.option("--data-dir", type=str, help="Directory of the persisted store (default: CARDCRAFT_DATA_DIR or data/active)")
@click.option("--env-file", type=str, help="Path to a .env file")
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[str], env_file: Optional[str]) -> None:
    """cardcraft CLI: build and share digital business cards."""
    config = Config(env_file)
    setup_logger("cardcraft", log_file=config.log_file, level=config.log_level)
    ctx.obj = _run(lambda: CardCraft(storage_path=data_dir, config=config))

@cli.command()
@click.option("--phone", type=str, required=True, help="Phone number (also your public username)")
@click.option("--password", type=str, prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--name", type=str, required=True, help="Display name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    default=AccountType.INDIVIDUAL.value,
    help="Account type (default: individual)",
)
@click.pass_obj
def register(app: CardCraft, phone: str, password: str, name: str, account_type: str) -> None:
    """Create an account and sign in."""
    account = _run(lambda: app.register(phone, password, name, AccountType(account_type.lower())))
    click.echo(f"Welcome, {account.name}! Your profile will be at /profile/{account.username}")

@cli.command()
@click.option("--phone", type=str, required=True)
@click.option("--password", type=str, prompt=True, hide_input=True)
@click.pass_obj
def login(app: CardCraft, phone: str, password: str) -> None:
    """Sign in with phone number and password."""
    account = _run(lambda: app.login(phone, password))
    click.echo(f"Logged in as {account.name}")

@cli.command()
@click.pass_obj
def logout(app: CardCraft) -> None:
    """Sign out."""
    app.logout()
    click.echo("Logged out")

@cli.command()
@click.pass_obj
def whoami(app: CardCraft) -> None:
    """Show the signed-in account."""
    session = app.session
    if session is None:
        click.echo("Not logged in")
        return
    click.echo(f"{session.name} ({session.type.value})")
    click.echo(f"  Phone: {session.phone}")
    click.echo(f"  Username: {session.username}")

@cli.group()
def personal() -> None:
    """View or update personal information."""

@personal.command("show")
@click.pass_obj
def personal_show(app: CardCraft) -> None:
    data = _run(app.personal_data)
    if data is None:
        click.echo("No personal information saved yet.")
        return
    click.echo("\n=== Personal Information ===\n")
    click.echo(f"Name: {data.name}")
    click.echo(f"Email: {data.email}")
    click.echo(f"Phone: {data.phone}")
    click.echo(f"Address: {data.address}, {data.city}, {data.state} {data.zip_code}")
    click.echo(f"Avatar: {'yes' if data.avatar else 'no'}")

@personal.command("set")
@click.option("--name", type=str)
@click.option("--email", type=str)
@click.option("--phone", type=str)
@click.option("--address", type=str)
@click.option("--city", type=str)
@click.option("--state", type=str)
@click.option("--zip-code", type=str)
@click.option("--avatar", type=str, help="Path to an avatar image")
@click.pass_obj
def personal_set(app: CardCraft, avatar: Optional[str], **fields: Optional[str]) -> None:
    """Save personal information; omitted fields keep their saved values."""
    current = _run(app.personal_data) or PersonalData()
    values = current.model_dump()
    values.update({k: v for k, v in fields.items() if v is not None})
    if avatar:
        values["avatar"] = _image_to_data_uri(avatar)

    try:
        form = PersonalDataForm(**values)
    except ValidationError as e:
        _echo_form_errors(e)
        raise click.ClickException("Personal information not saved")

    _run(lambda: app.update_personal_data(form.to_data()))
    click.echo("Personal information updated successfully!")

@cli.group()
def professional() -> None:
    """View or update professional information."""

@professional.command("show")
@click.pass_obj
def professional_show(app: CardCraft) -> None:
    data = _run(app.professional_data)
    if data is None:
        click.echo("No professional information saved yet.")
        return
    click.echo("\n=== Professional Information ===\n")
    click.echo(f"Job Title: {data.job_title}")
    click.echo(f"Company: {data.company}")
    click.echo(f"Industry: {data.industry}")
    click.echo(f"Experience: {data.experience}")
    for kind in LIST_FIELDS:
        items = getattr(data, kind)
        click.echo(f"{kind.capitalize()}:")
        for index, item in enumerate(items):
            click.echo(f"  [{index}] {item}")
    if data.website:
        click.echo(f"Website: {data.website}")
    if data.linked_in:
        click.echo(f"LinkedIn: {data.linked_in}")
    if data.portfolio:
        click.echo(f"Portfolio: {data.portfolio}")
    if data.bio:
        click.echo(f"\n{data.bio}")

@professional.command("set")
@click.option("--job-title", type=str)
@click.option("--company", type=str)
@click.option("--industry", type=click.Choice(INDUSTRIES))
@click.option("--experience", type=click.Choice(EXPERIENCE_LEVELS))
@click.option("--website", type=str)
@click.option("--linked-in", type=str)
@click.option("--portfolio", type=str)
@click.option("--bio", type=str)
@click.option("--skill", "skills", multiple=True, help="Add a skill (repeatable)")
@click.option("--service", "services", multiple=True, help="Add a service (repeatable)")
@click.option("--product", "products", multiple=True, help="Add a product (repeatable)")
@click.option("--remove-skill", "remove_skills", type=int, multiple=True, help="Remove the skill at INDEX")
@click.option("--remove-service", "remove_services", type=int, multiple=True, help="Remove the service at INDEX")
@click.option("--remove-product", "remove_products", type=int, multiple=True, help="Remove the product at INDEX")
@click.option("--logo", type=str, help="Path to a company logo image")
@click.pass_obj
def professional_set(
    app: CardCraft,
    skills: Tuple[str, ...],
    services: Tuple[str, ...],
    products: Tuple[str, ...],
    remove_skills: Tuple[int, ...],
    remove_services: Tuple[int, ...],
    remove_products: Tuple[int, ...],
    logo: Optional[str],
    **fields: Optional[str],
) -> None:
    """Save professional information; omitted fields keep their saved values."""
    data = _run(app.professional_data) or ProfessionalData()

    # Remove from the highest index down so earlier indexes stay valid
    removals = {"skills": remove_skills, "services": remove_services, "products": remove_products}
    additions = {"skills": skills, "services": services, "products": products}
    for kind in LIST_FIELDS:
        for index in sorted(set(removals[kind]), reverse=True):
            data = remove_item(data, kind, index)
        for value in additions[kind]:
            data = add_item(data, kind, value)

    values = data.model_dump()
    values.update({k: v for k, v in fields.items() if v is not None})
    if logo:
        values["company_logo"] = _image_to_data_uri(logo)

    try:
        form = ProfessionalDataForm(**values)
    except ValidationError as e:
        _echo_form_errors(e)
        raise click.ClickException("Professional information not saved")

    _run(lambda: app.update_professional_data(form.to_data()))
    click.echo("Professional information updated successfully!")

@cli.command()
def templates() -> None:
    """List card templates."""
    for template in CardTemplate:
        style = template.style
        click.echo(f"{template.value:<14}{style.name}: {style.description}")

@cli.command("create-card")
@click.argument("template", type=click.Choice([t.value for t in CardTemplate], case_sensitive=False))
@click.pass_obj
def create_card(app: CardCraft, template: str) -> None:
    """Create a business card with TEMPLATE."""
    card = _run(lambda: app.create_business_card(CardTemplate(template.lower())))
    status = " (active)" if card.is_active else ""
    click.echo(f"Created {card.template.style.name} card {card.id}{status}")

@cli.command()
@click.pass_obj
def cards(app: CardCraft) -> None:
    """List your business cards."""
    records = _run(app.business_cards)
    if not records:
        click.echo("No business cards yet. Create one with: cardcraft create-card <template>")
        return
    for card in records:
        marker = "*" if card.is_active else " "
        click.echo(
            f"{marker} {card.id}  {card.template.style.name:<13}"
            f"created {card.created_at.strftime('%Y-%m-%d %H:%M:%S')}"
        )

@cli.command()
@click.argument("card_id")
@click.pass_obj
def activate(app: CardCraft, card_id: str) -> None:
    """Make CARD_ID the card shown on your public profile."""
    _run(lambda: app.set_active_card(card_id))
    if not any(card.is_active for card in app.business_cards()):
        click.echo(f"Card {card_id} not found; no card is active now")
        return
    click.echo(f"Active card: {card_id}")

@cli.command()
@click.option("--search", type=str, default="", help="Match name, job title, company, skills or services")
@click.option("--industry", type=click.Choice(INDUSTRIES), help="Only this industry")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    help="Only individuals or organizations",
)
@click.pass_obj
def gallery(app: CardCraft, search: str, industry: Optional[str], account_type: Optional[str]) -> None:
    """Browse published business cards."""
    route = app.navigate("/gallery")
    if route.redirect:
        raise click.ClickException("Not logged in")

    gallery_filter = GalleryFilter(
        search=search,
        industry=industry or "",
        account_type=AccountType(account_type.lower()) if account_type else None,
    )
    total = len(app.gallery())
    entries = app.gallery(gallery_filter)

    click.echo(f"{len(entries)} of {total} cards\n")
    for entry in entries:
        click.echo(f"{entry.personal.name} - {entry.professional.job_title} at {entry.professional.company}")
        click.echo(f"  {entry.professional.industry} | {entry.account.type.value} | {entry.card.template.value}")
        click.echo(f"  /profile/{entry.account.username}")

@cli.command()
@click.argument("username")
@click.pass_obj
def profile(app: CardCraft, username: str) -> None:
    """Show the public profile of USERNAME."""
    route = app.navigate(f"/profile/{username}")
    if route.view == "not_found":
        click.echo("Profile Not Found")
        click.echo("The profile you're looking for doesn't exist.")
        return

    public = route.context["profile"]
    click.echo(f"\n=== {public.account.name} ===\n")
    if public.active_card:
        click.echo(f"Card: {public.active_card.template.style.name}")
    if public.personal:
        click.echo(f"Email: {public.personal.email}")
        click.echo(f"Phone: {public.personal.phone}")
        click.echo(f"Location: {public.personal.city}, {public.personal.state}")
    if public.professional:
        click.echo(f"{public.professional.job_title} at {public.professional.company}")
        if public.professional.bio:
            click.echo(f"\n{public.professional.bio}")
        if public.professional.skills:
            click.echo(f"\nSkills: {', '.join(public.professional.skills)}")
        if public.professional.services:
            click.echo(f"Services: {', '.join(public.professional.services)}")

@cli.command()
@click.option("--side", type=click.Choice(["front", "back", "both"]), default="front")
@click.option("--card-id", type=str, help="Card to export (default: active card)")
@click.option("--out", "out_dir", type=str, help="Output directory (default: CARDCRAFT_EXPORT_DIR or exports)")
@click.pass_obj
def export(app: CardCraft, side: str, card_id: Optional[str], out_dir: Optional[str]) -> None:
    """Export a business card as PNG."""
    try:
        if side == "both":
            paths = asyncio.run(app.export_both_sides(card_id=card_id, out_dir=out_dir))
        else:
            paths = (asyncio.run(app.export_card(side=side, card_id=card_id, out_dir=out_dir)),)
    except (CardCraftError, ValueError) as e:
        raise click.ClickException(str(e))

    for path in paths:
        if path is not None:
            click.echo(f"Saved {path}")

@cli.command()
@click.pass_obj
def backup(app: CardCraft) -> None:
    """Back up the local store."""
    target = app.store.backup(app.config.backup_dir, max_backups=app.config.max_backups)
    stats = app.store.get_storage_stats()
    click.echo(f"Backup created: {target}")
    click.echo(f"  Accounts: {stats['num_accounts']}  Cards: {stats['num_cards']}")

@cli.command()
@click.argument("backup_dir")
@click.pass_obj
def restore(app: CardCraft, backup_dir: str) -> None:
    """Restore the local store from BACKUP_DIR."""
    try:
        app.store.restore_from_backup(backup_dir)
    except (ValueError, CardCraftError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Restored from {backup_dir}")

def main() -> None:
    cli()

if __name__ == "__main__":
    main()
