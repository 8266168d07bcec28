"""Tests for SqliteTodoRepository."""

from __future__ import annotations

import pytest
import pytest_asyncio

from todovault.adapters.sqlite import SqliteTodoRepository
from todovault.models import ErrorKind, Todo


@pytest_asyncio.fixture
async def two_users(user_repo):
    alice = (await user_repo.register("alice", "alice@example.com", "secret1")).user
    bob = (await user_repo.register("bob", "bob@example.com", "secret1")).user
    return alice, bob


class TestAddAndList:
    @pytest.mark.asyncio
    async def test_add_returns_inserted_id(self, todo_repo):
        first = await todo_repo.add_todo(1, "buy milk")
        second = await todo_repo.add_todo(1, "walk dog")

        assert first.success
        assert first.inserted_id == 1
        assert second.inserted_id == 2

    @pytest.mark.asyncio
    async def test_new_todo_is_pending(self, todo_repo):
        await todo_repo.add_todo(1, "buy milk")
        (todo,) = await todo_repo.list_todos(1)

        assert isinstance(todo, Todo)
        assert todo.title == "buy milk"
        assert todo.user_id == 1
        assert todo.completed is False
        assert todo.created_at is not None

    @pytest.mark.asyncio
    async def test_title_stored_verbatim(self, todo_repo):
        title = "  it's \"quoted\" -- 😀  "
        await todo_repo.add_todo(1, title)
        (todo,) = await todo_repo.list_todos(1)
        assert todo.title == title

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_owner(self, todo_repo):
        await todo_repo.add_todo(1, "mine")
        await todo_repo.add_todo(2, "theirs")

        assert [t.title for t in await todo_repo.list_todos(1)] == ["mine"]
        assert [t.title for t in await todo_repo.list_todos(2)] == ["theirs"]
        assert await todo_repo.list_todos(3) == []

    @pytest.mark.asyncio
    async def test_list_newest_first(self, todo_repo, store):
        for title in ("a", "b", "c"):
            await todo_repo.add_todo(1, title)
        conn = await store.open()
        conn.execute("UPDATE todos SET createdAt = '2020-01-01 00:00:00' WHERE title = 'c'")
        conn.commit()

        # "c" is oldest; "a" and "b" share a timestamp and fall back to id order
        titles = [t.title for t in await todo_repo.list_todos(1)]
        assert titles == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_owner_need_not_exist(self, todo_repo):
        result = await todo_repo.add_todo(999, "orphan")
        assert result.success

    @pytest.mark.asyncio
    async def test_store_unavailable(self, unavailable_store):
        repo = SqliteTodoRepository(unavailable_store)
        result = await repo.add_todo(1, "x")
        assert result.kind is ErrorKind.STORE_UNAVAILABLE
        assert result.inserted_id is None
        assert await repo.list_todos(1) == []
        assert await repo.list_all_todos() == []
        assert await repo.count_todos() == 0


class TestSetCompleted:
    @pytest.mark.asyncio
    async def test_toggle(self, todo_repo):
        todo_id = (await todo_repo.add_todo(1, "x")).inserted_id

        result = await todo_repo.set_completed(todo_id, True)
        assert result.success
        assert result.affected == 1
        assert (await todo_repo.list_todos(1))[0].completed is True

        await todo_repo.set_completed(todo_id, False)
        assert (await todo_repo.list_todos(1))[0].completed is False

    @pytest.mark.asyncio
    async def test_missing_id_succeeds_with_no_rows(self, todo_repo):
        result = await todo_repo.set_completed(42, True)
        assert result.success
        assert result.affected == 0

    @pytest.mark.asyncio
    async def test_unscoped_update_reaches_any_owner(self, todo_repo):
        todo_id = (await todo_repo.add_todo(2, "bob's")).inserted_id
        result = await todo_repo.set_completed(todo_id, True)
        assert result.affected == 1
        assert (await todo_repo.list_todos(2))[0].completed is True

    @pytest.mark.asyncio
    async def test_scoped_update_ignores_other_owner(self, todo_repo):
        todo_id = (await todo_repo.add_todo(2, "bob's")).inserted_id
        result = await todo_repo.set_completed(todo_id, True, user_id=1)
        assert result.success
        assert result.affected == 0
        assert (await todo_repo.list_todos(2))[0].completed is False

    @pytest.mark.asyncio
    async def test_store_unavailable(self, unavailable_store):
        result = await SqliteTodoRepository(unavailable_store).set_completed(1, True)
        assert result.kind is ErrorKind.STORE_UNAVAILABLE


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, todo_repo):
        todo_id = (await todo_repo.add_todo(1, "x")).inserted_id
        result = await todo_repo.delete_todo(todo_id)
        assert result.success
        assert result.affected == 1
        assert await todo_repo.list_todos(1) == []

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, todo_repo):
        result = await todo_repo.delete_todo(7)
        assert result.success
        assert result.affected == 0

    @pytest.mark.asyncio
    async def test_unscoped_delete_reaches_any_owner(self, todo_repo):
        todo_id = (await todo_repo.add_todo(2, "bob's")).inserted_id
        await todo_repo.delete_todo(todo_id)
        assert await todo_repo.list_todos(2) == []

    @pytest.mark.asyncio
    async def test_scoped_delete_ignores_other_owner(self, todo_repo):
        todo_id = (await todo_repo.add_todo(2, "bob's")).inserted_id
        result = await todo_repo.delete_todo(todo_id, user_id=1)
        assert result.affected == 0
        assert len(await todo_repo.list_todos(2)) == 1

    @pytest.mark.asyncio
    async def test_deleted_id_is_not_reused(self, todo_repo):
        await todo_repo.add_todo(1, "a")
        second = (await todo_repo.add_todo(1, "b")).inserted_id
        await todo_repo.delete_todo(second)
        third = (await todo_repo.add_todo(1, "c")).inserted_id
        assert third == second + 1


class TestUnreadableRows:
    @pytest.mark.asyncio
    async def test_bad_row_is_skipped_not_raised(
        self, store, todo_repo, two_users, isolated_log_dir
    ):
        alice, _ = two_users
        await todo_repo.add_todo(alice.id, "fine")
        conn = await store.open()
        conn.execute(
            "INSERT INTO todos (userId, title, completed) VALUES (?, 'odd', 'maybe')",
            (alice.id,),
        )
        conn.commit()

        assert [t.title for t in await todo_repo.list_todos(alice.id)] == ["fine"]
        assert [t.title for t in await todo_repo.list_all_todos()] == ["fine"]
        assert await todo_repo.count_todos() == 2
        log = (isolated_log_dir / "todovault.log").read_text()
        assert "skipping unreadable Todo row" in log


class TestAdminQueries:
    @pytest.mark.asyncio
    async def test_list_all_across_owners(self, todo_repo):
        await todo_repo.add_todo(1, "a")
        await todo_repo.add_todo(2, "b")
        todos = await todo_repo.list_all_todos()
        assert [(t.user_id, t.title) for t in todos] == [(2, "b"), (1, "a")]
        assert await todo_repo.count_todos() == 2

    @pytest.mark.asyncio
    async def test_clear_todos_keeps_users(self, todo_repo, user_repo, two_users):
        alice, bob = two_users
        await todo_repo.add_todo(alice.id, "a")
        await todo_repo.add_todo(bob.id, "b")

        result = await todo_repo.clear_all()
        assert result.success
        assert result.affected == 2
        assert await todo_repo.count_todos() == 0
        assert await user_repo.get_user_count() == 2

    @pytest.mark.asyncio
    async def test_clear_with_users(self, todo_repo, user_repo, two_users):
        alice, _ = two_users
        await todo_repo.add_todo(alice.id, "a")

        result = await todo_repo.clear_all(include_users=True)
        assert result.affected == 3
        assert await todo_repo.count_todos() == 0
        assert await user_repo.get_user_count() == 0

    @pytest.mark.asyncio
    async def test_clear_empty_store(self, todo_repo):
        result = await todo_repo.clear_all(include_users=True)
        assert result.success
        assert result.affected == 0

    @pytest.mark.asyncio
    async def test_clear_unavailable(self, unavailable_store):
        result = await SqliteTodoRepository(unavailable_store).clear_all()
        assert result.kind is ErrorKind.STORE_UNAVAILABLE
