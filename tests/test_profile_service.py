"""Unit tests for ProfileService — profile lifecycle and completion rule."""
import uuid

import pytest

from roomease.errors import Conflict, InvalidArgument, NotFound, Unauthorized
from roomease.models.profile import PreferredLocation, ProfileDetails
from roomease.models.user import User
from roomease.schemas.profile import ProfileComplete, ProfileResponse, ProfileUpdate
from roomease.schemas.user import RegisterRequest
from roomease.services.profile_service import ProfileService, is_profile_complete


def _complete_user(**overrides):
    fields = dict(
        name="Alice",
        email="alice@example.com",
        gender="Female",
        profession="Designer",
        budget_min=10000,
        budget_max=15000,
        details=ProfileDetails(
            preferred_locations=[PreferredLocation(position=0, area="Dhanmondi")]
        ),
    )
    fields.update(overrides)
    return User(**fields)


def _register(name="Alice", email="alice@example.com", password="secret123", **extra):
    return RegisterRequest.model_validate(
        {"name": name, "email": email, "password": password, **extra}
    )


ALICE_COMPLETION = {
    "gender": "Female",
    "profession": "Designer",
    "budgetMin": 10000,
    "budgetMax": 15000,
    "preferredLocations": [{"area": "Dhanmondi", "city": "Dhaka"}],
    "habits": {"smoking": "No", "nightOwl": True},
    "languages": ["Bangla", "English"],
}


@pytest.fixture
def service(db):
    return ProfileService(db)


class TestCompletionRule:
    """The derived ``is_profile_complete`` flag."""

    def test_all_fields_present(self):
        assert is_profile_complete(_complete_user()) is True

    @pytest.mark.parametrize("field", ["name", "gender", "profession"])
    def test_blank_required_text(self, field):
        assert is_profile_complete(_complete_user(**{field: "   "})) is False

    @pytest.mark.parametrize("field", ["budget_min", "budget_max"])
    def test_missing_budget_bound(self, field):
        assert is_profile_complete(_complete_user(**{field: None})) is False

    def test_zero_budget_counts_as_present(self):
        assert is_profile_complete(_complete_user(budget_min=0)) is True

    def test_no_details(self):
        assert is_profile_complete(_complete_user(details=None)) is False

    def test_no_locations(self):
        user = _complete_user(details=ProfileDetails(preferred_locations=[]))
        assert is_profile_complete(user) is False


class TestRegistrationFlow:
    """Register -> complete -> partial update."""

    @pytest.mark.asyncio
    async def test_register_is_incomplete(self, service):
        user = await service.create_profile(_register())
        assert user.id is not None
        assert user.is_profile_complete is False
        assert user.currency == "BDT"
        assert user.password_hash.startswith("scrypt$")

    @pytest.mark.asyncio
    async def test_alice_scenario(self, service):
        user = await service.create_profile(_register())

        user = await service.complete_profile(
            user.id, ProfileComplete.model_validate(ALICE_COMPLETION)
        )
        assert user.is_profile_complete is True
        assert (user.budget_min, user.budget_max) == (10000, 15000)
        assert [loc.area for loc in user.details.preferred_locations] == ["Dhanmondi"]

        user = await service.update_profile(
            user.id, ProfileUpdate.model_validate({"bio": "Quiet, tidy, loves plants"})
        )
        assert user.bio == "Quiet, tidy, loves plants"
        assert (user.budget_min, user.budget_max) == (10000, 15000)
        assert [loc.area for loc in user.details.preferred_locations] == ["Dhanmondi"]
        assert user.is_profile_complete is True

    @pytest.mark.asyncio
    async def test_complete_is_idempotent(self, service):
        user = await service.create_profile(_register())
        payload = ProfileComplete.model_validate(ALICE_COMPLETION)

        first = ProfileResponse.model_validate(
            await service.complete_profile(user.id, payload)
        ).model_dump(exclude={"updated_at"})
        second = ProfileResponse.model_validate(
            await service.complete_profile(user.id, payload)
        ).model_dump(exclude={"updated_at"})

        assert first == second
        assert len(user.details.preferred_locations) == 1

    @pytest.mark.asyncio
    async def test_register_with_full_profile_is_complete(self, service):
        user = await service.create_profile(_register(**ALICE_COMPLETION))
        assert user.is_profile_complete is True
        assert user.details.languages == ["Bangla", "English"]

    @pytest.mark.asyncio
    async def test_complete_unknown_user(self, service):
        with pytest.raises(NotFound):
            await service.complete_profile(
                uuid.uuid4(), ProfileComplete.model_validate(ALICE_COMPLETION)
            )


class TestUpdateSemantics:

    @pytest.mark.asyncio
    async def test_blank_values_are_ignored(self, service):
        user = await service.create_profile(_register(**ALICE_COMPLETION))
        user = await service.update_profile(
            user.id,
            ProfileUpdate.model_validate({"profession": "  ", "name": "", "phone": None}),
        )
        assert user.profession == "Designer"
        assert user.name == "Alice"
        assert user.is_profile_complete is True

    @pytest.mark.asyncio
    async def test_caller_cannot_set_completion_flag(self, service):
        user = await service.create_profile(_register())
        user = await service.update_profile(
            user.id,
            ProfileUpdate.model_validate({"isProfileComplete": True, "bio": "hi"}),
        )
        assert user.is_profile_complete is False

    @pytest.mark.asyncio
    async def test_habits_merge_key_by_key(self, service):
        user = await service.create_profile(_register())
        await service.update_profile(
            user.id, ProfileUpdate.model_validate({"habits": {"smoking": "Yes"}})
        )
        user = await service.update_profile(
            user.id, ProfileUpdate.model_validate({"habits": {"pets": "Have pets"}})
        )
        habits = user.details.habits
        assert habits["smoking"] == "Yes"
        assert habits["pets"] == "Have pets"
        assert habits["cleanliness"] == "Moderate"
        assert habits["guests"] == "Sometimes"

    @pytest.mark.asyncio
    async def test_locations_are_replaced(self, service):
        user = await service.create_profile(_register(**ALICE_COMPLETION))
        user = await service.update_profile(
            user.id,
            ProfileUpdate.model_validate(
                {"preferredLocations": [{"area": "Gulshan"}, {"area": "Banani"}]}
            ),
        )
        assert [loc.area for loc in user.details.preferred_locations] == [
            "Gulshan",
            "Banani",
        ]

    @pytest.mark.asyncio
    async def test_budget_min_above_max_rejected(self, service):
        user = await service.create_profile(_register(**ALICE_COMPLETION))
        with pytest.raises(InvalidArgument):
            await service.update_profile(
                user.id, ProfileUpdate.model_validate({"budgetMin": 20000})
            )
        assert user.budget_min == 10000

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, service):
        with pytest.raises(NotFound):
            await service.update_profile(uuid.uuid4(), ProfileUpdate())


class TestAccounts:

    @pytest.mark.asyncio
    async def test_duplicate_email_case_insensitive(self, service):
        await service.create_profile(_register())
        with pytest.raises(Conflict):
            await service.create_profile(_register(name="Other", email="ALICE@example.com"))

    @pytest.mark.asyncio
    async def test_response_never_contains_credentials(self, service):
        user = await service.create_profile(_register())
        dumped = ProfileResponse.model_validate(user).model_dump(by_alias=True)
        assert "passwordHash" not in dumped
        assert "password" not in dumped
        assert dumped["isProfileComplete"] is False

    @pytest.mark.asyncio
    async def test_authenticate(self, service):
        created = await service.create_profile(_register())
        user = await service.authenticate("Alice@Example.com", "secret123")
        assert user.id == created.id

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self, service):
        await service.create_profile(_register())
        with pytest.raises(Unauthorized):
            await service.authenticate("alice@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_authenticate_deactivated(self, service):
        user = await service.create_profile(_register())
        await service.deactivate_profile(user.id)
        with pytest.raises(Unauthorized):
            await service.authenticate("alice@example.com", "secret123")

    @pytest.mark.asyncio
    async def test_delete_profile(self, service):
        user = await service.create_profile(_register(**ALICE_COMPLETION))
        await service.delete_profile(user.id)
        with pytest.raises(NotFound):
            await service.get_profile(user.id)
        with pytest.raises(NotFound):
            await service.delete_profile(user.id)
