"""Tests for the points ledger (atomic increments)."""
import asyncio

import pytest

from habitquest.controllers.points_controller import increment_points, reset_all_points, validate_amount
from habitquest.exceptions import UserNotFoundException, ValidationException
from tests.conftest import run


class TestValidateAmount:
    @pytest.mark.parametrize("amount", [0, -1, 1.5, "5", None, True])
    def test_rejects(self, amount):
        with pytest.raises(ValidationException):
            validate_amount(amount)

    def test_accepts_positive_int(self):
        assert validate_amount(7) == 7


class TestIncrementEndpoint:
    @pytest.mark.parametrize("amount", [0, -1, 1.5])
    def test_bad_amount_is_400(self, client, registered_user, amount):
        response = client.post("/api/users/12345/pts/increment", json={"amount": amount})
        assert response.status_code == 400

    def test_bad_amount_wins_over_unknown_user(self, client):
        response = client.post("/api/users/nobody/pts/increment", json={"amount": 0})
        assert response.status_code == 400

    def test_unknown_user_is_404(self, client):
        response = client.post("/api/users/nobody/pts/increment", json={"amount": 3})
        assert response.status_code == 404

    def test_adds_amount_and_returns_minimal_user(self, client, stores, registered_user):
        run(stores.users.update_one({"telegram_id": "12345"}, {"$set": {"pts": 10}}))

        response = client.post("/api/users/12345/pts/increment", json={"amount": 5})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "user": {"id": registered_user["id"], "telegramId": "12345", "pts": 15},
        }

    def test_default_amount_is_one(self, client, registered_user):
        response = client.post("/api/users/12345/pts/increment")
        assert response.json()["user"]["pts"] == 1

    def test_mongo_id_also_resolves(self, client, registered_user):
        response = client.post(f"/api/users/{registered_user['id']}/pts/increment", json={"amount": 2})
        assert response.status_code == 200
        assert response.json()["user"]["pts"] == 2


class TestIncrementController:
    def test_blank_id(self, stores):
        with pytest.raises(ValidationException):
            run(increment_points(stores, "  ", 1))

    def test_missing_user(self, stores):
        with pytest.raises(UserNotFoundException):
            run(increment_points(stores, "42", 1))

    def test_increment_is_a_single_server_side_inc(self, stores, monkeypatch):
        run(stores.users.insert_one({"telegram_id": "42", "pts": 3}))
        find_one_and_update = stores.users.find_one_and_update
        updates = []

        async def recording(filter, update, **kwargs):
            updates.append(update)
            return await find_one_and_update(filter, update, **kwargs)

        async def no_reads(*args, **kwargs):
            raise AssertionError("points must not be read before the write")

        monkeypatch.setattr(stores.users, "find_one_and_update", recording)
        monkeypatch.setattr(stores.users, "find_one", no_reads)

        result = run(increment_points(stores, "42", 2))

        assert updates == [{"$inc": {"pts": 2}}]
        assert result.user.pts == 5

    def test_sequential_increments_accumulate(self, stores):
        run(stores.users.insert_one({"telegram_id": "42", "pts": 0}))

        async def two_at_once():
            return await asyncio.gather(
                increment_points(stores, "42", 1),
                increment_points(stores, "42", 1),
            )

        # the in-memory driver serializes these; atomicity is covered above
        run(two_at_once())
        user = run(stores.users.find_one({"telegram_id": "42"}))
        assert user["pts"] == 2

    def test_reset_all_points(self, stores):
        run(stores.users.insert_many([
            {"telegram_id": "1", "pts": 5},
            {"telegram_id": "2", "pts": 0},
            {"telegram_id": "3", "pts": 12},
        ]))
        assert run(reset_all_points(stores)) == 2
        assert run(stores.users.count_documents({"pts": 0})) == 3
