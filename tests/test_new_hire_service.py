"""
Tests for NewHireService: adding hires, token/code lookup and verification.
"""
import re
import threading
import httpx
import pytest
from unittest.mock import AsyncMock
from onboarding.modules.platform_auth import PlatformAuthClient
from onboarding.modules.hires.exceptions import NotFoundError, OnboardingError, UnavailableError, ValidationError
from onboarding.modules.hires.services.account_service import AccountProvisioningService
from onboarding.modules.hires.services.new_hire_service import ACCOUNT_WARNING, NewHireService
from conftest import HIRE_ID


@pytest.mark.asyncio
async def test_add_new_hire_normalizes_and_stores_pending(new_hire_service, new_hire_repository, provisioning):
    result = await new_hire_service.add_new_hire("  Jane Doe ", " Jane.Doe@Company.COM ")

    kwargs = new_hire_repository.create.call_args.kwargs
    assert kwargs["name"] == "Jane Doe"
    assert kwargs["email"] == "jane.doe@company.com"
    assert kwargs["verification_status"] == "pending"
    assert re.fullmatch(r"\d{6}", kwargs["verification_code"])
    assert re.fullmatch(r"[0-9a-z]{20,26}", kwargs["unique_token"])
    provisioning.create_account.assert_awaited_once_with("jane.doe@company.com", "Jane Doe")

    assert result["generated_password"] == "abc123def4xyz789!A9"
    assert result["invite_link"].endswith(f"/checklist/{kwargs['unique_token']}")
    assert result["warnings"] == []
    assert kwargs["verification_code"] in result["invitation"]


@pytest.mark.asyncio
async def test_add_new_hire_sends_invitation(new_hire_service, mailer):
    await new_hire_service.add_new_hire("Jane Doe", "jane.doe@company.com")
    to, subject, message = mailer.send.call_args.args
    assert to == "jane.doe@company.com"
    assert "Welcome" in subject
    assert message.startswith("Hello Jane Doe,")


@pytest.mark.asyncio
async def test_add_new_hire_continues_when_account_fails(new_hire_service, new_hire_repository, provisioning):
    provisioning.create_account.side_effect = OnboardingError("User already exists", status_code=409)

    result = await new_hire_service.add_new_hire("Jane Doe", "jane.doe@company.com")

    new_hire_repository.create.assert_awaited_once()
    assert result["generated_password"] is None
    assert result["warnings"] == [ACCOUNT_WARNING]
    assert "METHOD 1 (RECOMMENDED)" in result["invitation"]


@pytest.mark.asyncio
async def test_add_new_hire_reports_unsent_invitation(new_hire_service, mailer):
    mailer.send.side_effect = ValueError("Failed to send email: connection refused")
    result = await new_hire_service.add_new_hire("Jane Doe", "jane.doe@company.com")
    assert len(result["warnings"]) == 1
    assert "Invitation email could not be sent" in result["warnings"][0]


@pytest.mark.asyncio
@pytest.mark.parametrize("name,email", [("", "jane@company.com"), ("Jane", "not-an-email"), ("Jane", "")])
async def test_add_new_hire_rejects_bad_input(new_hire_service, new_hire_repository, name, email):
    with pytest.raises(ValidationError):
        await new_hire_service.add_new_hire(name, email)
    new_hire_repository.create.assert_not_called()


@pytest.mark.asyncio
async def test_add_new_hire_database_failure(new_hire_service, new_hire_repository):
    new_hire_repository.create.side_effect = RuntimeError("duplicate key")
    with pytest.raises(OnboardingError) as exc:
        await new_hire_service.add_new_hire("Jane Doe", "jane.doe@company.com")
    assert exc.value.message == "Error adding new hire"


@pytest.mark.asyncio
async def test_get_new_hires_failure_message(new_hire_service, new_hire_repository):
    new_hire_repository.list.side_effect = RuntimeError("timeout")
    with pytest.raises(OnboardingError) as exc:
        await new_hire_service.get_new_hires()
    assert exc.value.message == "Error fetching new hires"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, "", "   "])
async def test_get_by_token_blank_returns_none(new_hire_service, new_hire_repository, token):
    assert await new_hire_service.get_new_hire_by_token(token) is None
    new_hire_repository.get_by_token.assert_not_called()


@pytest.mark.asyncio
async def test_get_by_token_unknown_returns_none(new_hire_service, new_hire_repository):
    new_hire_repository.get_by_token.return_value = None
    assert await new_hire_service.get_new_hire_by_token("nope") is None


@pytest.mark.asyncio
async def test_get_by_token_database_error(new_hire_service, new_hire_repository):
    new_hire_repository.get_by_token.side_effect = RuntimeError("down")
    with pytest.raises(OnboardingError) as exc:
        await new_hire_service.get_new_hire_by_token("abc")
    assert exc.value.message == "Error fetching new hire"


@pytest.mark.asyncio
async def test_get_by_verification_code_normalizes(new_hire_service, new_hire_repository):
    new_hire = await new_hire_service.get_new_hire_by_verification_code(" 482913 ", " Jane.Doe@Company.com")
    new_hire_repository.get_by_verification_code.assert_awaited_once_with("482913", "jane.doe@company.com")
    assert new_hire.name == "Jane Doe"


@pytest.mark.asyncio
async def test_get_by_verification_code_blank_returns_none(new_hire_service, new_hire_repository):
    assert await new_hire_service.get_new_hire_by_verification_code("", "jane@company.com") is None
    assert await new_hire_service.get_new_hire_by_verification_code("123456", " ") is None
    new_hire_repository.get_by_verification_code.assert_not_called()


@pytest.mark.asyncio
async def test_update_verification_status_rejects_unknown_value(new_hire_service):
    with pytest.raises(ValidationError):
        await new_hire_service.update_verification_status(HIRE_ID, "approved")


@pytest.mark.asyncio
async def test_update_verification_status_unknown_id(new_hire_service, new_hire_repository):
    assert await new_hire_service.update_verification_status("not-a-uuid", "verified") is None
    new_hire_repository.update_verification_status.assert_not_called()


@pytest.mark.asyncio
async def test_verify_access_marks_verified(new_hire_service, new_hire_repository):
    new_hire = await new_hire_service.verify_access("jane.doe@company.com", "482913")
    new_hire_repository.update_verification_status.assert_awaited_once_with(HIRE_ID, "verified")
    assert new_hire.verification_status == "verified"


@pytest.mark.asyncio
async def test_verify_access_requires_both_fields(new_hire_service):
    with pytest.raises(ValidationError) as exc:
        await new_hire_service.verify_access(" ", "482913")
    assert exc.value.message == "Please enter both email and verification code"


@pytest.mark.asyncio
async def test_verify_access_checks_connection_first(new_hire_service, new_hire_repository):
    new_hire_repository.ping.side_effect = RuntimeError("connection refused")
    with pytest.raises(UnavailableError):
        await new_hire_service.verify_access("jane.doe@company.com", "482913")
    new_hire_repository.get_by_verification_code.assert_not_called()


@pytest.mark.asyncio
async def test_verify_access_wrong_code(new_hire_service, new_hire_repository):
    new_hire_repository.get_by_verification_code.return_value = None
    with pytest.raises(NotFoundError) as exc:
        await new_hire_service.verify_access("jane.doe@company.com", "000000")
    assert exc.value.message == "Invalid verification code or email. Please check and try again."
    new_hire_repository.update_verification_status.assert_not_called()


@pytest.mark.asyncio
async def test_send_reminder(new_hire_service, mailer):
    result = await new_hire_service.send_reminder(HIRE_ID)
    assert result["message"] == "Reminder sent to jane.doe@company.com"
    assert mailer.send.call_args.args[1].startswith("Reminder")


@pytest.mark.asyncio
async def test_send_reminder_unknown_hire(new_hire_service, new_hire_repository):
    new_hire_repository.get_by_id = AsyncMock(return_value=None)
    with pytest.raises(NotFoundError):
        await new_hire_service.send_reminder(HIRE_ID)


@pytest.mark.asyncio
async def test_send_reminder_mail_failure(new_hire_service, mailer):
    mailer.send.side_effect = ValueError("Failed to send email: auth")
    with pytest.raises(OnboardingError) as exc:
        await new_hire_service.send_reminder(HIRE_ID)
    assert exc.value.message == "Failed to send reminder. Please try again."


@pytest.mark.asyncio
@pytest.mark.parametrize("email", [
    "a@b..c",
    "jane@.company.com",
    "<script>@x.io",
    "j..d@company.com",
    "a@b.c.",
    "Jane Doe <jane@company.com>",
])
async def test_add_new_hire_rejects_malformed_email(new_hire_service, new_hire_repository, provisioning, email):
    with pytest.raises(ValidationError) as exc:
        await new_hire_service.add_new_hire("Jane", email)
    assert exc.value.message == "Invalid email format"
    new_hire_repository.create.assert_not_called()
    provisioning.create_account.assert_not_called()


@pytest.mark.asyncio
async def test_add_new_hire_continues_when_platform_returns_garbage(new_hire_repository, mailer):
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>")

    client = PlatformAuthClient(
        base_url="https://project.example.co",
        anon_key="anon-key",
        service_role_key="service-key",
        transport=httpx.MockTransport(handler),
    )
    service = NewHireService(
        repository=new_hire_repository,
        provisioning=AccountProvisioningService(client),
        mailer=mailer,
    )

    result = await service.add_new_hire("Jane Doe", "jane.doe@company.com")

    new_hire_repository.create.assert_awaited_once()
    assert result["generated_password"] is None
    assert result["warnings"] == [ACCOUNT_WARNING]


@pytest.mark.asyncio
async def test_add_new_hire_continues_on_unexpected_provisioning_error(new_hire_service, new_hire_repository, provisioning):
    provisioning.create_account.side_effect = RuntimeError("socket closed")
    result = await new_hire_service.add_new_hire("Jane Doe", "jane.doe@company.com")
    new_hire_repository.create.assert_awaited_once()
    assert result["warnings"] == [ACCOUNT_WARNING]


@pytest.mark.asyncio
async def test_mail_is_sent_off_the_event_loop_thread(new_hire_service, mailer):
    threads = []
    mailer.send.side_effect = lambda *args: threads.append(threading.get_ident()) or {"status": "sent"}

    await new_hire_service.add_new_hire("Jane Doe", "jane.doe@company.com")
    await new_hire_service.send_reminder(HIRE_ID)

    assert len(threads) == 2
    assert threading.get_ident() not in threads
