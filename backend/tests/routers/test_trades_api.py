# backend/tests/routers/test_trades_api.py
"""
Integration tests for Trade API endpoints.

These tests verify full HTTP request/response cycles for:
- POST /trades/ (Create, validated and valued)
- GET /trades/ (List with search, direction filter, ordering, pagination)
- GET /trades/{id} (Read)
- PATCH /trades/{id} (Update and re-value)
- DELETE /trades/{id} (Delete)

Tests validate:
- Derived fields are computed server-side
- Correct status codes
- Owner scoping (other owners' trades are 404)
- Error responses (400 with issue kind, 401, 404, 422)
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from conftest import OTHER_OWNER_ID, owner_headers, seed_trade, trade_payload, utc
from journal.models import Trade, TradeDirection


# =============================================================================
# CREATE
# =============================================================================

class TestCreateTrade:
    """Tests for POST /trades/."""

    def test_create_values_trade(self, client: TestClient):
        response = client.post("/trades/", json=trade_payload(), headers=owner_headers())

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["pair"] == "XAUUSD"
        assert data["direction"] == "long"
        assert Decimal(data["pnl_quote"]) == Decimal("50")
        assert Decimal(data["pnl_secondary"]) == Decimal("775000")
        assert Decimal(data["risk_reward_ratio"]) == Decimal("2")
        assert Decimal(data["suggested_position_size"]) == Decimal("0.4")
        assert Decimal(data["contract_size"]) == Decimal("100")
        assert data["emotional_state"] == "calm"
        assert data["notes"] == "Breakout above Asian range"

    def test_create_persists_owner(self, client: TestClient, db: Session):
        response = client.post("/trades/", json=trade_payload(), headers=owner_headers())

        trade = db.get(Trade, response.json()["id"])
        assert trade.owner_id == "trader-1"

    def test_create_short_with_sell_alias(self, client: TestClient):
        payload = trade_payload(
            direction="sell",
            entry_price="2040",
            exit_price="2030",
            stop_loss="2045",
            take_profit="2025",
        )

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 201
        assert response.json()["direction"] == "short"
        assert Decimal(response.json()["pnl_quote"]) == Decimal("100")

    def test_optional_fields_default(self, client: TestClient):
        payload = trade_payload(
            stop_loss=None, take_profit=None, risk_percent=None,
            notes=None, emotional_state=None, pair=None,
        )

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 201
        data = response.json()
        assert data["pair"] == "XAUUSD"
        assert data["emotional_state"] == "calm"
        assert data["risk_reward_ratio"] is None
        assert data["suggested_position_size"] is None

    def test_derived_fields_from_client_are_ignored(self, client: TestClient):
        payload = trade_payload(pnl_quote="999999")

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert Decimal(response.json()["pnl_quote"]) == Decimal("50")

    def test_missing_price_is_400(self, client: TestClient):
        payload = trade_payload(exit_price=None)

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "TradeValidationError"
        assert data["details"] == {"kind": "missing_field", "field": "exit_price"}

    def test_non_positive_size_is_400(self, client: TestClient):
        payload = trade_payload(position_size="0")

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 400
        assert response.json()["details"]["kind"] == "missing_field"

    def test_invalid_bracket_is_400(self, client: TestClient, db: Session):
        payload = trade_payload(stop_loss="2060", take_profit="2045")

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 400
        assert response.json()["details"]["kind"] == "bracket_invalid"
        assert db.query(Trade).count() == 0

    def test_more_than_eight_decimals_is_422(self, client: TestClient, db: Session):
        payload = trade_payload(stop_loss="2049.999999999")

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 422
        assert "stop_loss" in response.json()["details"][0]["field"]
        assert db.query(Trade).count() == 0

    def test_more_than_ten_integer_digits_is_422(self, client: TestClient):
        payload = trade_payload(entry_price="12345678901", exit_price="12345678902")

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 422

    def test_risk_percent_precision_is_422(self, client: TestClient):
        response = client.post(
            "/trades/", json=trade_payload(risk_percent="1.23456"), headers=owner_headers()
        )

        assert response.status_code == 422

    def test_largest_accepted_inputs_are_stored(self, client: TestClient):
        payload = trade_payload(
            entry_price="0.00000001",
            exit_price="9999999999.99999999",
            position_size="9999999999",
            stop_loss=None,
            take_profit=None,
        )

        response = client.post("/trades/", json=payload, headers=owner_headers())

        assert response.status_code == 201
        assert Decimal(response.json()["pnl_quote"]) > Decimal("1e21")

    def test_future_trade_is_422(self, client: TestClient):
        future = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat()

        response = client.post(
            "/trades/", json=trade_payload(occurred_at=future), headers=owner_headers()
        )

        assert response.status_code == 422

    def test_unknown_direction_is_422(self, client: TestClient):
        response = client.post(
            "/trades/", json=trade_payload(direction="sideways"), headers=owner_headers()
        )

        assert response.status_code == 422

    def test_missing_owner_is_401(self, client: TestClient):
        response = client.post("/trades/", json=trade_payload())

        assert response.status_code == 401
        assert response.json()["error"] == "UnauthorizedError"


# =============================================================================
# LIST
# =============================================================================

class TestListTrades:
    """Tests for GET /trades/."""

    def test_newest_first_by_default(self, client: TestClient, db: Session):
        older = seed_trade(db, occurred_at=utc(2024, 1, 8))
        newer = seed_trade(db, occurred_at=utc(2024, 1, 9))

        response = client.get("/trades/", headers=owner_headers())

        assert response.status_code == 200
        ids = [t["id"] for t in response.json()["items"]]
        assert ids == [newer.id, older.id]

    def test_ascending_order_keeps_entry_order_on_ties(self, client: TestClient, db: Session):
        first = seed_trade(db, occurred_at=utc(2024, 1, 8))
        second = seed_trade(db, occurred_at=utc(2024, 1, 8))

        response = client.get("/trades/?order=asc", headers=owner_headers())

        assert [t["id"] for t in response.json()["items"]] == [first.id, second.id]

    def test_only_own_trades(self, client: TestClient, db: Session):
        mine = seed_trade(db)
        seed_trade(db, owner_id=OTHER_OWNER_ID)

        response = client.get("/trades/", headers=owner_headers())

        items = response.json()["items"]
        assert [t["id"] for t in items] == [mine.id]
        assert response.json()["pagination"]["total"] == 1

    def test_search_notes(self, client: TestClient, db: Session):
        match = seed_trade(db, notes="Chased the NFP spike")
        seed_trade(db, notes="Patient entry at support")

        response = client.get("/trades/?search=nfp", headers=owner_headers())

        assert [t["id"] for t in response.json()["items"]] == [match.id]

    def test_search_wildcards_are_literal(self, client: TestClient, db: Session):
        match = seed_trade(db, notes="Risked 50% too much")
        seed_trade(db, notes="Risked 50 dollars")

        response = client.get("/trades/?search=50%25", headers=owner_headers())

        assert [t["id"] for t in response.json()["items"]] == [match.id]

    def test_filter_by_direction(self, client: TestClient, db: Session):
        seed_trade(db)
        short = seed_trade(
            db, direction=TradeDirection.SHORT, entry_price="2040", exit_price="2030"
        )

        response = client.get("/trades/?direction=short", headers=owner_headers())

        assert [t["id"] for t in response.json()["items"]] == [short.id]

    def test_pagination(self, client: TestClient, db: Session):
        for day in range(1, 6):
            seed_trade(db, occurred_at=utc(2024, 1, day))

        response = client.get("/trades/?skip=2&limit=2", headers=owner_headers())

        data = response.json()
        assert len(data["items"]) == 2
        assert data["pagination"]["total"] == 5
        assert data["pagination"]["page"] == 2
        assert data["pagination"]["pages"] == 3
        assert data["pagination"]["has_next"] is True
        assert data["pagination"]["has_previous"] is True

    def test_empty(self, client: TestClient):
        response = client.get("/trades/", headers=owner_headers())

        assert response.json()["items"] == []
        assert response.json()["pagination"]["total"] == 0

    def test_limit_exceeds_maximum(self, client: TestClient):
        response = client.get("/trades/?limit=5000", headers=owner_headers())

        assert response.status_code == 422


# =============================================================================
# READ
# =============================================================================

class TestGetTrade:
    """Tests for GET /trades/{id}."""

    def test_get_own_trade(self, client: TestClient, db: Session):
        trade = seed_trade(db)

        response = client.get(f"/trades/{trade.id}", headers=owner_headers())

        assert response.status_code == 200
        assert response.json()["id"] == trade.id

    def test_other_owner_is_404(self, client: TestClient, db: Session):
        trade = seed_trade(db, owner_id=OTHER_OWNER_ID)

        response = client.get(f"/trades/{trade.id}", headers=owner_headers())

        assert response.status_code == 404
        assert response.json()["error"] == "TradeNotFoundError"
        assert response.json()["details"] == {"trade_id": trade.id}

    def test_nonexistent_is_404(self, client: TestClient):
        response = client.get("/trades/99999", headers=owner_headers())

        assert response.status_code == 404


# =============================================================================
# UPDATE
# =============================================================================

class TestUpdateTrade:
    """Tests for PATCH /trades/{id}."""

    def test_update_revalues(self, client: TestClient, db: Session):
        trade = seed_trade(db)

        response = client.patch(
            f"/trades/{trade.id}", json={"exit_price": "2060"}, headers=owner_headers()
        )

        assert response.status_code == 200
        assert Decimal(response.json()["pnl_quote"]) == Decimal("100")
        assert Decimal(response.json()["pnl_secondary"]) == Decimal("1550000")

    def test_direction_change_flips_pnl(self, client: TestClient, db: Session):
        trade = seed_trade(db)

        response = client.patch(
            f"/trades/{trade.id}", json={"direction": "short"}, headers=owner_headers()
        )

        assert Decimal(response.json()["pnl_quote"]) == Decimal("-50")

    def test_journal_fields_only(self, client: TestClient, db: Session):
        trade = seed_trade(db)

        response = client.patch(
            f"/trades/{trade.id}",
            json={"notes": "Moved stop too early", "emotional_state": "fearful"},
            headers=owner_headers(),
        )

        data = response.json()
        assert data["notes"] == "Moved stop too early"
        assert data["emotional_state"] == "fearful"
        assert Decimal(data["pnl_quote"]) == Decimal("50")

    def test_adding_bracket_computes_ratio(self, client: TestClient, db: Session):
        trade = seed_trade(db)

        response = client.patch(
            f"/trades/{trade.id}",
            json={"stop_loss": "2045", "take_profit": "2060", "risk_percent": "2"},
            headers=owner_headers(),
        )

        assert Decimal(response.json()["risk_reward_ratio"]) == Decimal("2")
        assert Decimal(response.json()["suggested_position_size"]) == Decimal("0.4")

    def test_clearing_stop_clears_metrics(self, client: TestClient, db: Session):
        trade = seed_trade(db, stop_loss="2045", take_profit="2060", risk_percent="2")

        response = client.patch(
            f"/trades/{trade.id}", json={"stop_loss": None}, headers=owner_headers()
        )

        data = response.json()
        assert data["stop_loss"] is None
        assert data["risk_reward_ratio"] is None
        assert data["suggested_position_size"] is None

    def test_null_pair_is_ignored(self, client: TestClient, db: Session):
        trade = seed_trade(db)

        response = client.patch(
            f"/trades/{trade.id}", json={"pair": None}, headers=owner_headers()
        )

        assert response.status_code == 200
        assert response.json()["pair"] == "XAUUSD"

    def test_invalid_update_is_not_saved(self, client: TestClient, db: Session):
        trade = seed_trade(db, stop_loss="2045", take_profit="2060")

        response = client.patch(
            f"/trades/{trade.id}", json={"take_profit": "2040"}, headers=owner_headers()
        )

        assert response.status_code == 400
        assert response.json()["details"]["kind"] == "bracket_invalid"
        db.refresh(trade)
        assert trade.take_profit == Decimal("2060")

    def test_notes_edit_after_create_at_full_precision(self, client: TestClient):
        created = client.post(
            "/trades/",
            json=trade_payload(stop_loss="2049.99999999", position_size="0.12345678"),
            headers=owner_headers(),
        )
        assert created.status_code == 201

        response = client.patch(
            f"/trades/{created.json()['id']}", json={"notes": "hello"}, headers=owner_headers()
        )

        assert response.status_code == 200
        data = response.json()
        assert data["notes"] == "hello"
        assert Decimal(data["stop_loss"]) == Decimal("2049.99999999")
        assert data["pnl_quote"] == created.json()["pnl_quote"]

    def test_update_with_excess_precision_is_422(self, client: TestClient, db: Session):
        trade = seed_trade(db)

        response = client.patch(
            f"/trades/{trade.id}", json={"exit_price": "2055.000000001"}, headers=owner_headers()
        )

        assert response.status_code == 422

    def test_other_owner_is_404(self, client: TestClient, db: Session):
        trade = seed_trade(db, owner_id=OTHER_OWNER_ID)

        response = client.patch(
            f"/trades/{trade.id}", json={"notes": "x"}, headers=owner_headers()
        )

        assert response.status_code == 404


# =============================================================================
# DELETE
# =============================================================================

class TestDeleteTrade:
    """Tests for DELETE /trades/{id}."""

    def test_delete(self, client: TestClient, db: Session):
        trade = seed_trade(db)
        trade_id = trade.id

        response = client.delete(f"/trades/{trade_id}", headers=owner_headers())

        assert response.status_code == 204
        assert client.get(f"/trades/{trade_id}", headers=owner_headers()).status_code == 404

    def test_other_owner_is_404(self, client: TestClient, db: Session):
        trade = seed_trade(db, owner_id=OTHER_OWNER_ID)

        response = client.delete(f"/trades/{trade.id}", headers=owner_headers())

        assert response.status_code == 404
        assert db.get(Trade, trade.id) is not None
