"""Tests for allocating identifiers through the application facade."""

import pytest

from ridebook.core.modules.identifier.models import IdentifierKind
from ridebook.errors import ValidationError


class TestAllocateScoped:
    """Tests for operator-scoped identifiers."""

    async def test_first_booking_id_of_operator(self, app):
        allocated = await app.allocate_booking_id("OP002")

        assert allocated.kind == IdentifierKind.BOOKING
        assert allocated.id == "OP002/00000001"
        assert allocated.scope_code == "OP002"
        assert allocated.sequence_number == 1

    async def test_driver_ids_continue_existing_counter(self, app, store):
        store.put("driverId_OP001", {"currentId": 10})

        allocated = await app.allocate_driver_id("OP001")

        assert allocated.id == "OP001/DR0011"
        assert allocated.sequence_number == 11

    async def test_operators_have_separate_streams(self, app):
        assert (await app.allocate_booking_id("OP001")).id == "OP001/00000001"
        assert (await app.allocate_booking_id("OP001")).id == "OP001/00000002"
        assert (await app.allocate_booking_id("OP003")).id == "OP003/00000001"

    async def test_missing_scope_rejected_without_touching_counter(self, app, store):
        with pytest.raises(ValidationError, match="required"):
            await app.allocate_booking_id("")

        assert await store.get("bookingId_") is None
        assert (await app.allocate_booking_id("OP001")).sequence_number == 1

    async def test_malformed_scope_rejected(self, app):
        with pytest.raises(ValidationError, match="Invalid scope code"):
            await app.allocate_driver_id("OP/001")
        with pytest.raises(ValidationError, match="Invalid scope code"):
            await app.allocate_driver_id("X" * 33)


class TestAllocateGlobal:
    """Tests for platform-wide identifiers."""

    async def test_three_sequential_admin_ids(self, app):
        ids = [(await app.allocate_admin_id()).id for _ in range(3)]
        assert ids == ["AD001", "AD002", "AD003"]

    async def test_passenger_and_admin_streams_are_separate(self, app):
        assert (await app.allocate_passenger_id()).id == "CU001"
        assert (await app.allocate_admin_id()).id == "AD001"
        assert (await app.allocate_passenger_id()).id == "CU002"

    async def test_operator_code(self, app):
        allocated = await app.allocate_operator_id()
        assert allocated.id == "OP001"
        assert allocated.scope_code is None

    async def test_global_kind_rejects_scope(self, app):
        with pytest.raises(ValidationError, match="do not take a scope code"):
            await app._core.services.identifier.allocate(IdentifierKind.ADMIN, "OP001")


class TestGetCounter:
    """Tests for reading counters without allocating."""

    async def test_absent_counter_reads_zero(self, app):
        counter = await app.get_counter("bookingId_OP009")
        assert counter.namespace == "bookingId_OP009"
        assert counter.current_value == 0

    async def test_counter_reflects_allocations(self, app):
        await app.allocate_passenger_id()
        await app.allocate_passenger_id()

        assert (await app.get_counter("passengerId")).current_value == 2
        assert (await app.get_counter("passengerId")).current_value == 2

    async def test_blank_namespace_rejected(self, app):
        with pytest.raises(ValidationError):
            await app.get_counter("  ")
