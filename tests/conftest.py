"""
Pytest configuration and shared fixtures.
"""
import pytest

from cardcraft.accounts.service import AccountService
from cardcraft.personal.models import PersonalData, ProfessionalData
from cardcraft.profile.service import ProfileService
from cardcraft.storage.kv_store import KeyValueStore

# Register the asyncio marker
pytest.mark.asyncio = pytest.mark.asyncio

# Configure pytest to use asyncio
pytest_plugins = ('pytest_asyncio',)

@pytest.fixture
def temp_storage_dir(tmp_path):
    """Create a temporary storage directory for testing."""
    storage_dir = tmp_path / "test_storage"
    storage_dir.mkdir()
    return storage_dir

@pytest.fixture
def store(temp_storage_dir):
    return KeyValueStore(str(temp_storage_dir))

@pytest.fixture
def accounts(store):
    return AccountService(store)

@pytest.fixture
def profiles(store):
    return ProfileService(store)

@pytest.fixture
def sample_personal():
    """Create sample personal data for testing."""
    return PersonalData(
        name="Jane Doe",
        email="jane@example.com",
        phone="+1 (555) 010-2030",
        address="1 Main St",
        city="Austin",
        state="TX",
        zip_code="73301",
    )

@pytest.fixture
def sample_professional():
    """Create sample professional data for testing."""
    return ProfessionalData(
        job_title="Software Engineer",
        company="Acme",
        industry="Technology",
        experience="3-5 years",
        skills=["Python", "Kubernetes"],
        services=["Consulting"],
        website="https://acme.example.com",
        linked_in="https://linkedin.com/in/jane",
        bio="Builds things.",
    )
