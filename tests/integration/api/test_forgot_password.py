"""
Integration tests for PUT /forgotPassword

- Successful reset with username, email and phone
- Missing fields and policy failures never touch the store
- Unknown identity triple returns 404 without mutation
- New password verifies after rotation, old one does not
"""
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.depends import get_token_issuer
from src.domain.credentials import verify_password
from src.domain.entities import AccountCredential
from tests.utils.json_compare import assert_error, exclude_keys


async def stored_credential(db_session: AsyncSession, account_id: int) -> AccountCredential:
    db_session.expire_all()
    result = await db_session.exec(
        select(AccountCredential).where(AccountCredential.account_id == account_id)
    )
    return result.one()


@pytest.mark.asyncio
async def test_successful_forgot_password(client: AsyncClient, db_session: AsyncSession, seed_account, test_data):
    """Matching account gets a new credential and a reset token

    Given alice exists with email a@x.com and phone 123-456-7890
    When she resets her password with all three attributes
    Then the response is 200 with the confirmation message and a token
    And only the new password verifies against the stored credential
    """
    account = await seed_account("alice")
    account_id = account.account_id
    before = await stored_credential(db_session, account_id)
    old_salt = before.salt

    response = await client.put("/forgotPassword", json=test_data.get_copy("forgot_password_request"))

    assert response.status_code == 200
    data = response.json()
    assert exclude_keys(data, {"resetToken"}) == {"message": "Password updated successfully"}
    assert isinstance(data["resetToken"], str) and data["resetToken"]

    payload = get_token_issuer().verify(data["resetToken"])
    assert payload["id"] == account_id

    after = await stored_credential(db_session, account_id)
    assert after.salt != old_salt
    assert verify_password("Abcde1!2", after.salt, after.salted_hash)
    assert not verify_password("OldPass1!", after.salt, after.salted_hash)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "missing", ["username", "email", "phone", "newPassword", "confirmNewPassword"]
)
async def test_missing_parameter(client: AsyncClient, db_session: AsyncSession, seed_account, test_data, missing):
    account = await seed_account("alice")
    account_id = account.account_id
    before = await stored_credential(db_session, account_id)
    old_hash = before.salted_hash
    body = test_data.get_copy("forgot_password_request")
    del body[missing]

    response = await client.put("/forgotPassword", json=body)

    assert_error(response, 400, "MISSING_PARAMETER")
    after = await stored_credential(db_session, account_id)
    assert after.salted_hash == old_hash


@pytest.mark.asyncio
async def test_empty_parameter(client: AsyncClient, test_data):
    body = test_data.get_copy("forgot_password_request")
    body["email"] = ""

    response = await client.put("/forgotPassword", json=body)

    assert_error(response, 400, "MISSING_PARAMETER")


@pytest.mark.asyncio
async def test_non_string_parameter(client: AsyncClient, test_data):
    body = test_data.get_copy("forgot_password_request")
    body["phone"] = 1234567890

    response = await client.put("/forgotPassword", json=body)

    assert_error(response, 400, "MISSING_PARAMETER")


@pytest.mark.asyncio
async def test_missing_body(client: AsyncClient):
    response = await client.put("/forgotPassword")

    assert_error(response, 400, "MISSING_PARAMETER")


@pytest.mark.asyncio
async def test_short_password(client: AsyncClient, db_session: AsyncSession, seed_account, test_data):
    """7-character password is rejected and the credential is unchanged"""
    account = await seed_account("alice")
    account_id = account.account_id
    before = await stored_credential(db_session, account_id)
    old_hash = before.salted_hash
    body = test_data.get_copy("forgot_password_request")
    body["newPassword"] = body["confirmNewPassword"] = "short1!"

    response = await client.put("/forgotPassword", json=body)

    body = assert_error(response, 400, "INVALID_PASSWORD")
    assert "invalid new password" in body["message"].lower()
    after = await stored_credential(db_session, account_id)
    assert after.salted_hash == old_hash


@pytest.mark.asyncio
async def test_password_mismatch(client: AsyncClient, test_data):
    body = test_data.get_copy("forgot_password_request")
    body["confirmNewPassword"] = "Abcde1!3"

    response = await client.put("/forgotPassword", json=body)

    assert_error(response, 400, "PASSWORD_MISMATCH")


@pytest.mark.asyncio
async def test_invalid_email(client: AsyncClient, test_data):
    body = test_data.get_copy("forgot_password_request")
    body["email"] = "a.x.com"

    response = await client.put("/forgotPassword", json=body)

    assert_error(response, 400, "INVALID_EMAIL")


@pytest.mark.asyncio
@pytest.mark.parametrize("phone", ["1234567890", "123-456-7890\n"])
async def test_phone_not_in_stored_format(client: AsyncClient, seed_account, test_data, phone):
    """Phone not grouped exactly 3-3-4 is rejected even though alice exists"""
    await seed_account("alice")
    body = test_data.get_copy("forgot_password_request")
    body["phone"] = phone

    response = await client.put("/forgotPassword", json=body)

    assert_error(response, 400, "INVALID_PHONE")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field,value",
    [("username", "mallory"), ("email", "other@x.com"), ("phone", "999-999-9999")],
)
async def test_identity_triple_must_match(client: AsyncClient, db_session: AsyncSession, seed_account, test_data, field, value):
    """Any one mismatching attribute is a 404 and nothing changes"""
    account = await seed_account("alice")
    account_id = account.account_id
    before = await stored_credential(db_session, account_id)
    old_hash = before.salted_hash
    body = test_data.get_copy("forgot_password_request")
    body[field] = value

    response = await client.put("/forgotPassword", json=body)

    assert_error(response, 404, "ACCOUNT_NOT_FOUND")
    after = await stored_credential(db_session, account_id)
    assert after.salted_hash == old_hash


@pytest.mark.asyncio
async def test_account_without_credential_row(client: AsyncClient, seed_account, test_data):
    """Nothing to rotate is a server error with the generic message"""
    await seed_account("alice", with_credential=False)

    response = await client.put("/forgotPassword", json=test_data.get_copy("forgot_password_request"))

    body = assert_error(response, 500, "CREDENTIAL_UPDATE_FAILED")
    assert body["message"] == "Server error - contact support"
