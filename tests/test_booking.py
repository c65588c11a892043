"""Tests for session booking."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from decimal import Decimal

import pytest

from photo_studio.domain.errors import BookingConflict, ValidationError
from photo_studio.domain.sessions import BookingRequest, SessionStatus
from photo_studio.services.ledger import InventoryLedger
from tests.conftest import (
    SESSION_AT,
    client_request,
    equipment_request,
    fixed_clock,
    staff_request,
)


def _booking(
    equipment_ids: tuple[int, ...] = (1,),
    duration_hours: int = 2,
    client_id: int = 1,
    staff_id: int = 1,
) -> BookingRequest:
    return BookingRequest(
        client_id=client_id,
        staff_id=staff_id,
        scheduled_at=SESSION_AT,
        duration_hours=duration_hours,
        equipment_ids=equipment_ids,
        session_type="Portrait",
        location="Studio A",
    )


def _availability(ledger: InventoryLedger) -> dict[int, bool]:
    return {item.id: item.is_available for item in ledger.list_equipment()}


def test_booking_computes_cost_and_reserves_equipment(
    stocked_ledger: InventoryLedger,
) -> None:
    session = stocked_ledger.book_session(_booking((1,), duration_hours=2))

    assert session.id == 1
    assert session.total_cost == Decimal(5000)
    assert session.status is SessionStatus.PLANNED
    assert session.equipment_ids == (1,)
    assert stocked_ledger.find_equipment_by_id(1).is_available is False
    assert stocked_ledger.find_equipment_by_id(2).is_available is True
    assert stocked_ledger.find_client_by_id(1).sessions_count == 1


def test_booking_cost_uses_exact_decimal_arithmetic(ledger: InventoryLedger) -> None:
    ledger.add_client(client_request())
    ledger.add_staff(staff_request("0.10"))
    ledger.add_equipment(equipment_request("Lens", "0.20"))
    ledger.add_equipment(equipment_request("Filter", "0.10"))

    session = ledger.book_session(_booking((1, 2), duration_hours=3))

    assert session.total_cost == Decimal("1.20")


def test_booking_without_equipment_charges_staff_time(
    stocked_ledger: InventoryLedger,
) -> None:
    session = stocked_ledger.book_session(_booking((), duration_hours=3))

    assert session.total_cost == Decimal(6000)


def test_cost_is_not_recomputed_later(stocked_ledger: InventoryLedger) -> None:
    session = stocked_ledger.book_session(_booking((1,), duration_hours=1))
    stocked_ledger.complete_session(session.id)

    assert stocked_ledger.find_session_by_id(session.id).total_cost == Decimal(2500)


def test_conflict_leaves_all_flags_unchanged(stocked_ledger: InventoryLedger) -> None:
    stocked_ledger.book_session(_booking((1,)))
    before = _availability(stocked_ledger)

    with pytest.raises(BookingConflict) as excinfo:
        stocked_ledger.book_session(_booking((2, 1)))

    assert excinfo.value.equipment_id == 1
    assert "Lens" in str(excinfo.value)
    assert _availability(stocked_ledger) == before
    assert len(stocked_ledger.list_sessions()) == 1
    assert stocked_ledger.find_client_by_id(1).sessions_count == 1


def test_failed_booking_does_not_consume_session_id(
    stocked_ledger: InventoryLedger,
) -> None:
    stocked_ledger.book_session(_booking((1,)))
    with pytest.raises(BookingConflict):
        stocked_ledger.book_session(_booking((1,)))

    second = stocked_ledger.book_session(_booking((2,)))

    assert second.id == 2


@pytest.mark.parametrize("duration", [0, -1])
def test_booking_rejects_non_positive_duration(
    stocked_ledger: InventoryLedger, duration: int
) -> None:
    with pytest.raises(ValidationError):
        stocked_ledger.book_session(_booking((1,), duration_hours=duration))

    assert stocked_ledger.find_equipment_by_id(1).is_available is True


def test_booking_rejects_unknown_staff(stocked_ledger: InventoryLedger) -> None:
    with pytest.raises(ValidationError):
        stocked_ledger.book_session(_booking((1,), staff_id=99))

    assert stocked_ledger.list_sessions() == []


def test_booking_rejects_unknown_equipment_without_reserving(
    stocked_ledger: InventoryLedger,
) -> None:
    with pytest.raises(ValidationError):
        stocked_ledger.book_session(_booking((1, 99)))

    assert stocked_ledger.find_equipment_by_id(1).is_available is True


def test_booking_rejects_duplicate_equipment(stocked_ledger: InventoryLedger) -> None:
    with pytest.raises(ValidationError):
        stocked_ledger.book_session(_booking((1, 1)))

    assert stocked_ledger.find_equipment_by_id(1).is_available is True


def test_unknown_client_is_tolerated_by_default(
    stocked_ledger: InventoryLedger,
) -> None:
    session = stocked_ledger.book_session(_booking((1,), client_id=77))

    assert session.client_id == 77
    assert stocked_ledger.find_client_by_id(1).sessions_count == 0
    assert stocked_ledger.find_sessions_by_client(77) == [session]


def test_unknown_client_is_rejected_in_strict_mode() -> None:
    ledger = InventoryLedger(require_known_client=True, clock=fixed_clock)
    ledger.add_staff(staff_request())
    ledger.add_equipment(equipment_request())

    with pytest.raises(ValidationError):
        ledger.book_session(_booking((1,), client_id=5))

    assert ledger.find_equipment_by_id(1).is_available is True


def test_sessions_count_tracks_bookings(stocked_ledger: InventoryLedger) -> None:
    for _ in range(3):
        session = stocked_ledger.book_session(_booking((1,)))
        stocked_ledger.complete_session(session.id)

    assert stocked_ledger.find_client_by_id(1).sessions_count == 3


def test_find_sessions_by_client_and_staff(stocked_ledger: InventoryLedger) -> None:
    stocked_ledger.add_client(client_request("Petr", "Sidorov"))
    stocked_ledger.add_staff(staff_request(3000))
    first = stocked_ledger.book_session(_booking((1,), client_id=1, staff_id=1))
    second = stocked_ledger.book_session(_booking((2,), client_id=2, staff_id=2))
    third = stocked_ledger.book_session(_booking((), client_id=1, staff_id=2))

    assert stocked_ledger.find_sessions_by_client(1) == [first, third]
    assert stocked_ledger.find_sessions_by_staff(2) == [second, third]
    assert stocked_ledger.find_sessions_by_client(42) == []


@pytest.mark.parametrize(
    "field_name, value",
    [
        ("scheduled_at", None),
        ("scheduled_at", "2024-03-15T12:00:00"),
        ("client_id", None),
        ("client_id", True),
        ("staff_id", None),
        ("staff_id", "1"),
    ],
)
def test_booking_rejects_missing_or_ill_typed_fields(
    stocked_ledger: InventoryLedger, field_name: str, value: object
) -> None:
    request = replace(_booking((1,)), **{field_name: value})
    before = _availability(stocked_ledger)

    with pytest.raises(ValidationError):
        stocked_ledger.book_session(request)

    assert _availability(stocked_ledger) == before
    assert stocked_ledger.list_sessions() == []
    assert stocked_ledger.find_client_by_id(1).sessions_count == 0


def test_booking_rejects_non_text_location(stocked_ledger: InventoryLedger) -> None:
    with pytest.raises(ValidationError):
        stocked_ledger.book_session(replace(_booking((1,)), location=7))

    assert stocked_ledger.find_equipment_by_id(1).is_available is True


def test_every_successful_booking_can_be_exported(
    stocked_ledger: InventoryLedger,
) -> None:
    stocked_ledger.book_session(_booking((1,)))
    stocked_ledger.book_session(_booking((), client_id=77))
    stocked_ledger.book_session(
        BookingRequest(
            client_id=1,
            staff_id=1,
            scheduled_at=SESSION_AT,
            duration_hours=1,
            equipment_ids=(2,),
            session_type=None,  # type: ignore[arg-type]
            location=None,  # type: ignore[arg-type]
        )
    )

    snapshot = stocked_ledger.export_state()

    assert [entry.id for entry in snapshot.sessions] == [1, 2, 3]
    assert snapshot.sessions[2].location == ""


def test_concurrent_bookings_reserve_an_item_once(
    stocked_ledger: InventoryLedger,
) -> None:
    def attempt(_: int) -> bool:
        try:
            stocked_ledger.book_session(_booking((1,)))
        except BookingConflict:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(16)))

    assert outcomes.count(True) == 1
    assert len(stocked_ledger.list_sessions()) == 1
