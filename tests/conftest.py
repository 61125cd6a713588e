"""
Shared fixtures: in-memory stand-ins for the managed database and auth platform.
"""
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
import pytest
from onboarding.modules.hires.auth.session import Session
from onboarding.modules.hires.services.account_service import AccountProvisioningService, ProvisionedAccount
from onboarding.modules.hires.services.checklist_service import ChecklistService
from onboarding.modules.hires.services.new_hire_service import NewHireService

HIRE_ID = "0b9a7d4e-5f0c-4c55-9d8a-3f6f8a1b2c3d"
TASK_IDS = [
    "7c1e2d3f-0000-4000-8000-000000000001",
    "7c1e2d3f-0000-4000-8000-000000000002",
    "7c1e2d3f-0000-4000-8000-000000000003",
]


def make_hire_row(**overrides):
    row = {
        "id": uuid.UUID(HIRE_ID),
        "name": "Jane Doe",
        "email": "jane.doe@company.com",
        "unique_token": "k3j4h5g6f7d8s9a0q1w2e3",
        "verification_code": "482913",
        "verification_status": "pending",
        "created_at": datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


def make_task_rows():
    names = ["Sign employment contract", "Submit tax forms", "Set up workstation"]
    return [
        {"id": uuid.UUID(task_id), "task_name": name, "task_description": f"{name}."}
        for task_id, name in zip(TASK_IDS, names)
    ]


@pytest.fixture
def hire_row():
    return make_hire_row()


@pytest.fixture
def task_rows():
    return make_task_rows()


@pytest.fixture
def new_hire_repository(hire_row):
    repo = MagicMock()
    repo.ping = AsyncMock(return_value=1)
    repo.create = AsyncMock(side_effect=lambda **kw: make_hire_row(**kw))
    repo.list = AsyncMock(return_value=[hire_row])
    repo.get_by_id = AsyncMock(return_value=hire_row)
    repo.get_by_token = AsyncMock(return_value=hire_row)
    repo.get_by_verification_code = AsyncMock(return_value=hire_row)
    repo.update_verification_status = AsyncMock(
        side_effect=lambda new_hire_id, status: make_hire_row(verification_status=status)
    )
    return repo


@pytest.fixture
def task_repository(task_rows):
    repo = MagicMock()
    repo.list_tasks = AsyncMock(return_value=task_rows)
    repo.get_task = AsyncMock(return_value=task_rows[0])
    repo.list_completions = AsyncMock(return_value=[])
    repo.get_completion = AsyncMock(return_value=None)

    def _row(new_hire_id, task_id, completed, completed_at):
        return {
            "id": uuid.uuid4(),
            "new_hire_id": new_hire_id,
            "task_id": task_id,
            "completed": completed,
            "completed_at": completed_at,
        }

    repo.update_completion = AsyncMock(side_effect=_row)
    repo.insert_completion = AsyncMock(side_effect=_row)
    return repo


@pytest.fixture
def provisioning():
    service = MagicMock(spec=AccountProvisioningService)
    service.create_account = AsyncMock(
        return_value=ProvisionedAccount(user={"id": "auth-user-1", "email": "jane.doe@company.com"}, password="abc123def4xyz789!A9")
    )
    return service


@pytest.fixture
def mailer():
    m = MagicMock()
    m.send = MagicMock(return_value={"status": "logged", "method": "log"})
    return m


@pytest.fixture
def new_hire_service(new_hire_repository, provisioning, mailer):
    return NewHireService(repository=new_hire_repository, provisioning=provisioning, mailer=mailer)


@pytest.fixture
def checklist_service(task_repository, new_hire_service):
    return ChecklistService(repository=task_repository, new_hire_service=new_hire_service)


@pytest.fixture
def hr_session():
    return Session(user_id="hr-user-1", email="hr@company.com", access_token="hr-access-token")
