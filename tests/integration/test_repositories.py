"""Integration tests for the repositories and the unit of work on SQLite."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from src.core.exceptions import DatabaseError, DuplicateEmailError
from src.domain.entities.password_reset_token import PasswordResetToken
from src.domain.entities.user import User
from tests.factories.user import create_fake_user


async def _insert_user(uow_factory, **kwargs) -> User:
    async with uow_factory() as uow:
        user = await uow.users.add(create_fake_user(**kwargs))
        await uow.commit()
    return user


async def _insert_token(uow_factory, user_id, clock, token_hash="a" * 64, minutes=60):
    async with uow_factory() as uow:
        token = await uow.reset_tokens.add(
            PasswordResetToken(
                user_id=user_id,
                token_hash=token_hash,
                expires_at=clock.now() + timedelta(minutes=minutes),
                used=False,
            )
        )
        await uow.commit()
    return token


class TestUserRepository:
    async def test_add_and_get_by_email_is_case_insensitive(self, uow_factory):
        user = await _insert_user(uow_factory, email="a@x.com")

        async with uow_factory() as uow:
            found = await uow.users.get_by_email("  A@X.COM ")
            by_id = await uow.users.get_by_id(user.id)

        assert found is not None
        assert found.id == user.id
        assert by_id.email == "a@x.com"

    async def test_get_by_email_returns_none_for_unknown(self, uow_factory):
        async with uow_factory() as uow:
            assert await uow.users.get_by_email("ghost@x.com") is None

    async def test_duplicate_insert_is_rejected_by_unique_index(self, uow_factory):
        await _insert_user(uow_factory, email="a@x.com")

        with pytest.raises(DuplicateEmailError):
            async with uow_factory() as uow:
                await uow.users.add(create_fake_user(email="A@x.com"))
                await uow.commit()

        async with uow_factory() as uow:
            result = await uow.session.execute(select(User))
            assert len(result.scalars().all()) == 1

    async def test_constraint_other_than_email_is_a_storage_error(self, uow_factory):
        user = create_fake_user(email="b@x.com")
        user.password_hash = None

        with pytest.raises(DatabaseError):
            async with uow_factory() as uow:
                await uow.users.add(user)

        async with uow_factory() as uow:
            assert await uow.users.get_by_email("b@x.com") is None

    async def test_set_refresh_token_hash(self, uow_factory, clock):
        user = await _insert_user(uow_factory)

        async with uow_factory() as uow:
            assert await uow.users.set_refresh_token_hash(user.id, "f" * 64, clock.now())
            await uow.commit()

        async with uow_factory() as uow:
            assert (await uow.users.get_by_id(user.id)).refresh_token_hash == "f" * 64
            assert not await uow.users.set_refresh_token_hash("missing", "f" * 64, clock.now())

    async def test_update_password_clears_session(self, uow_factory, clock):
        user = await _insert_user(uow_factory, refresh_token_hash="f" * 64)

        async with uow_factory() as uow:
            assert await uow.users.update_password_and_clear_sessions(
                user.id, "$2b$04$new", clock.now()
            )
            await uow.commit()

        async with uow_factory() as uow:
            stored = await uow.users.get_by_id(user.id)

        assert stored.password_hash == "$2b$04$new"
        assert stored.refresh_token_hash is None


class TestPasswordResetTokenRepository:
    async def test_lookup_by_hash_only_returns_unused(self, uow_factory, clock):
        user = await _insert_user(uow_factory)
        token = await _insert_token(uow_factory, user.id, clock)

        async with uow_factory() as uow:
            found = await uow.reset_tokens.get_unused_by_hash("a" * 64)
            assert found.id == token.id
            assert not found.is_expired(clock.now())

            assert await uow.reset_tokens.mark_used_if_unused(token.id, clock.now()) is True
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.reset_tokens.get_unused_by_hash("a" * 64) is None

    async def test_mark_used_succeeds_only_once(self, uow_factory, clock):
        user = await _insert_user(uow_factory)
        token = await _insert_token(uow_factory, user.id, clock)

        async with uow_factory() as uow:
            assert await uow.reset_tokens.mark_used_if_unused(token.id, clock.now()) is True
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.reset_tokens.mark_used_if_unused(token.id, clock.now()) is False

    async def test_expiry_survives_the_round_trip(self, uow_factory, clock):
        user = await _insert_user(uow_factory)
        await _insert_token(uow_factory, user.id, clock, minutes=5)

        async with uow_factory() as uow:
            found = await uow.reset_tokens.get_unused_by_hash("a" * 64)

        clock.advance(minutes=6)
        assert found.is_expired(clock.now())


class TestUnitOfWork:
    async def test_leaving_without_commit_rolls_back(self, uow_factory):
        async with uow_factory() as uow:
            await uow.users.add(create_fake_user(email="a@x.com"))

        async with uow_factory() as uow:
            assert await uow.users.get_by_email("a@x.com") is None

    async def test_exception_rolls_back_every_write(self, uow_factory, clock):
        user = await _insert_user(uow_factory, refresh_token_hash="f" * 64)
        token = await _insert_token(uow_factory, user.id, clock)

        with pytest.raises(RuntimeError):
            async with uow_factory() as uow:
                await uow.reset_tokens.mark_used_if_unused(token.id, clock.now())
                await uow.users.update_password_and_clear_sessions(
                    user.id, "$2b$04$new", clock.now()
                )
                raise RuntimeError("failure between writes")

        async with uow_factory() as uow:
            stored_user = await uow.users.get_by_id(user.id)
            stored_token = await uow.reset_tokens.get_unused_by_hash("a" * 64)

        assert stored_user.password_hash == user.password_hash
        assert stored_user.refresh_token_hash == "f" * 64
        assert stored_token is not None

    async def test_session_is_unavailable_outside_the_block(self, uow_factory):
        uow = uow_factory()
        with pytest.raises(RuntimeError):
            uow.session

    async def test_entities_read_inside_stay_readable_after_exit(self, uow_factory, clock):
        created = await _insert_user(uow_factory, email="a@x.com")
        await _insert_token(uow_factory, created.id, clock)

        async with uow_factory() as uow:
            user = await uow.users.get_by_email("a@x.com")
            token = await uow.reset_tokens.get_unused_by_hash("a" * 64)

        assert user.email == "a@x.com"
        assert user.password_hash == created.password_hash
        assert token.user_id == created.id
        assert not token.is_expired(clock.now())

    async def test_entities_stay_readable_after_an_exception(self, uow_factory):
        await _insert_user(uow_factory, email="a@x.com")

        with pytest.raises(RuntimeError):
            async with uow_factory() as uow:
                user = await uow.users.get_by_email("a@x.com")
                raise RuntimeError("boom")

        assert user.email == "a@x.com"
        assert user.password_hash

    async def test_explicit_rollback_keeps_loaded_entities(self, uow_factory, clock):
        created = await _insert_user(uow_factory, email="a@x.com")

        async with uow_factory() as uow:
            user = await uow.users.get_by_id(created.id)
            await uow.users.set_refresh_token_hash(created.id, "f" * 64, clock.now())
            await uow.rollback()

        assert user.refresh_token_hash is None

        async with uow_factory() as uow:
            assert (await uow.users.get_by_id(created.id)).refresh_token_hash is None
