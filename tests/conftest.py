"""Shared fixtures for Smart Settle tests."""

from decimal import Decimal

import pytest

from smart_settle.config import Settings
from smart_settle.models import GroupLedger, Participant, RawExpenseRecord


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Default settings, isolated from any local .env file."""
    monkeypatch.chdir(tmp_path)
    return Settings()


@pytest.fixture
def roster():
    """Three-person group."""
    return [
        Participant(participant_id="alice", display_name="Alice"),
        Participant(participant_id="bob", display_name="Bob"),
        Participant(participant_id="charlie", display_name="Charlie"),
    ]


@pytest.fixture
def sample_ledger(roster):
    """A short trip: Alice covers dinner, Bob covers the cab."""
    return GroupLedger(
        name="Goa Trip",
        currency="INR",
        participants=roster,
        expenses=[
            RawExpenseRecord(
                paid_by_participant_id="alice",
                amount=Decimal("300.00"),
                split_participant_ids=["alice", "bob", "charlie"],
                description="Dinner",
            ),
            RawExpenseRecord(
                paid_by_participant_id="bob",
                amount=Decimal("60.00"),
                split_participant_ids=["bob", "charlie"],
                description="Cab",
            ),
        ],
    )
