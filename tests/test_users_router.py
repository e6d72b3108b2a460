"""Tests for profile sync, stale-registration repair and completed dates."""
from habitquest.controllers import user_controller
from habitquest.controllers.user_controller import needs_reconciliation
from tests.conftest import run


class TestSyncProfile:
    def test_creates_user(self, registered_user):
        assert registered_user["telegramId"] == "12345"
        assert registered_user["pts"] == 0
        assert registered_user["registeredAt"] is not None
        assert registered_user["completedDates"] == []

    def test_updates_existing_user_in_place(self, client, registered_user):
        response = client.post("/api/users", json={"telegramId": "12345", "firstName": "Anna"})
        body = response.json()
        assert body["id"] == registered_user["id"]
        assert body["firstName"] == "Anna"
        # fields not sent are kept
        assert body["username"] == "ann"

    def test_missing_telegram_id(self, client):
        response = client.post("/api/users", json={"firstName": "Ann"})
        assert response.status_code == 400

    def test_stale_registration_is_rebuilt(self, client, stores):
        old = run(stores.users.insert_one({"telegram_id": "777", "first_name": "Old", "pts": 40}))
        run(stores.achievements.insert_many([
            {"user_id": "777", "title": "First goal", "status": "completed"},
            {"user_id": "777", "title": "Streak", "status": "not_started"},
        ]))
        run(stores.achievements.insert_one({"user_id": "888", "title": "First goal"}))

        response = client.post("/api/users", json={"telegramId": "777", "firstName": "New"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] != str(old.inserted_id)
        assert body["registeredAt"] is not None
        assert body["pts"] == 0
        assert run(stores.achievements.count_documents({"user_id": "777"})) == 0
        assert run(stores.achievements.count_documents({"user_id": "888"})) == 1
        assert run(stores.users.count_documents({"telegram_id": "777"})) == 1

    def test_repair_also_drops_achievements_filed_under_mongo_id(self, client, stores):
        old = run(stores.users.insert_one({"telegram_id": "777", "first_name": "Old"}))
        run(stores.achievements.insert_one({"user_id": str(old.inserted_id), "title": "First goal"}))

        response = client.post("/api/users", json={"telegramId": "777"})

        assert response.status_code == 200
        assert run(stores.achievements.count_documents({})) == 0

    def test_concurrent_first_sync_returns_existing_user(self, client, stores, monkeypatch):
        run(stores.init_indexes())
        create_user = user_controller._create_user

        async def racing_create(stores, data):
            # the other request registers first
            await create_user(stores, data.model_copy(update={"first_name": "Winner"}))
            return await create_user(stores, data)

        monkeypatch.setattr(user_controller, "_create_user", racing_create)

        response = client.post("/api/users", json={"telegramId": "555", "firstName": "Late"})

        assert response.status_code == 200
        assert response.json()["firstName"] == "Winner"
        assert run(stores.users.count_documents({"telegram_id": "555"})) == 1

    def test_only_missing_registration_triggers_repair(self):
        assert needs_reconciliation({"telegram_id": "1"})
        assert not needs_reconciliation({"telegram_id": "1", "registered_at": "2026-10-17", "username": None})


class TestReadUsers:
    def test_list_users(self, client, registered_user):
        client.post("/api/users", json={"telegramId": "2"})
        response = client.get("/api/users")
        assert response.status_code == 200
        assert {u["telegramId"] for u in response.json()} == {"12345", "2"}

    def test_get_user(self, client, registered_user):
        response = client.get("/api/users/12345")
        assert response.status_code == 200
        assert response.json()["id"] == registered_user["id"]

    def test_get_unknown_user(self, client):
        response = client.get("/api/users/404404")
        assert response.status_code == 404
        assert "error" in response.json()


class TestCompletedDates:
    def test_append_and_list(self, client, registered_user):
        client.post("/api/users/12345/completed-dates", json={"date": "2026-10-16"})
        response = client.post("/api/users/12345/completed-dates", json={"date": "2026-10-17"})
        assert response.status_code == 200
        assert response.json()["completedDates"] == ["2026-10-16", "2026-10-17"]

        listed = client.get("/api/users/12345/completed-dates")
        assert listed.json() == ["2026-10-16", "2026-10-17"]

    def test_missing_date(self, client, registered_user):
        response = client.post("/api/users/12345/completed-dates", json={})
        assert response.status_code == 400

    def test_unknown_user(self, client):
        assert client.get("/api/users/1/completed-dates").status_code == 404
        assert client.post("/api/users/1/completed-dates", json={"date": "2026-10-17"}).status_code == 404
