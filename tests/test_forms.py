"""
Tests for the profile form boundary.
"""
import pytest
from pydantic import ValidationError
from cardcraft.personal.forms import (
    PersonalDataForm,
    ProfessionalDataForm,
    add_item,
    remove_item,
)
from cardcraft.personal.models import PersonalData, ProfessionalData

VALID_PERSONAL = {
    "name": " Jane Doe ",
    "email": "jane@example.com",
    "phone": "555-0101",
    "address": "1 Main St",
    "city": "Austin",
    "state": "TX",
    "zip_code": "73301",
}

VALID_PROFESSIONAL = {
    "job_title": "Engineer",
    "company": "Acme",
    "industry": "Technology",
    "experience": "3-5 years",
}

def _error_fields(error: ValidationError):
    return {str(item["loc"][0]) for item in error.errors()}

def test_personal_form_strips_and_converts():
    data = PersonalDataForm(**VALID_PERSONAL).to_data()

    assert type(data) is PersonalData
    assert data.name == "Jane Doe"

def test_personal_form_accepts_camel_case_keys():
    payload = {**VALID_PERSONAL}
    payload["zipCode"] = payload.pop("zip_code")
    assert PersonalDataForm.model_validate(payload).zip_code == "73301"

@pytest.mark.parametrize("field", ["name", "email", "city", "zip_code"])
def test_personal_form_required_fields(field):
    payload = {**VALID_PERSONAL, field: "   "}
    with pytest.raises(ValidationError):
        PersonalDataForm(**payload)

def test_personal_form_missing_field_reported():
    payload = {k: v for k, v in VALID_PERSONAL.items() if k != "address"}
    with pytest.raises(ValidationError) as exc_info:
        PersonalDataForm(**payload)
    assert _error_fields(exc_info.value) == {"address"}

def test_personal_form_rejects_bad_email():
    with pytest.raises(ValidationError) as exc_info:
        PersonalDataForm(**{**VALID_PERSONAL, "email": "not-an-email"})
    assert _error_fields(exc_info.value) == {"email"}

def test_professional_form_valid():
    data = ProfessionalDataForm(**VALID_PROFESSIONAL, skills=[" Python ", "", "  "]).to_data()

    assert type(data) is ProfessionalData
    assert data.skills == ["Python"]
    assert data.services == []

@pytest.mark.parametrize("field,value", [
    ("industry", "Aerospace"),
    ("experience", "20 years"),
    ("job_title", ""),
    ("company", " "),
])
def test_professional_form_rejects(field, value):
    with pytest.raises(ValidationError):
        ProfessionalDataForm(**{**VALID_PROFESSIONAL, field: value})

def test_add_item_trims_and_ignores_blank():
    data = ProfessionalData()
    data = add_item(data, "skills", "  Python ")
    data = add_item(data, "skills", "   ")
    data = add_item(data, "services", "Consulting")

    assert data.skills == ["Python"]
    assert data.services == ["Consulting"]

def test_add_item_does_not_mutate_original():
    original = ProfessionalData(products=["A"])
    updated = add_item(original, "products", "B")

    assert original.products == ["A"]
    assert updated.products == ["A", "B"]

def test_remove_item():
    data = ProfessionalData(skills=["a", "b", "c"])

    assert remove_item(data, "skills", 1).skills == ["a", "c"]
    assert remove_item(data, "skills", 9).skills == ["a", "b", "c"]

def test_unknown_list_field():
    with pytest.raises(ValueError, match="Unknown list field"):
        add_item(ProfessionalData(), "hobbies", "chess")
