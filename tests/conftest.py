"""
Pytest fixtures and test configuration for Boardroom tests.
"""

from datetime import datetime, timezone

import pytest

from boardroom.advisors import DemoAdvisorProvider
from boardroom.core import Boardroom
from boardroom.storage import InMemoryTextStore, InMemoryTrustStore

FIXED_NOW = datetime(2026, 3, 14, 9, 26, 53, tzinfo=timezone.utc)

SAMPLE_LEDGER = """# Boardroom LEDGER
Preamble that mentions pricing but is not a session.

## Session 1: Pricing strategy review
We debated pricing tiers and the revenue impact of a new plan.

## Session 2: Database migration
Moved the primary database to a new server over the weekend.

## Session 3: Pricing experiment
A short pricing test on the landing page.
"""

SAMPLE_WISDOM = """# Board Wisdom
- [2026-01] Pricing should follow value, not cost
- * Ship small, learn fast
> Trust is earned in drops and lost in buckets
- short
- A plain bullet about database backups
Not a bullet about pricing
"""


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def sample_ledger():
    return SAMPLE_LEDGER


@pytest.fixture
def sample_wisdom():
    return SAMPLE_WISDOM


@pytest.fixture
def ledger_store():
    return InMemoryTextStore(SAMPLE_LEDGER, location="/tmp/boardroom/LEDGER.md")


@pytest.fixture
def wisdom_store():
    return InMemoryTextStore(SAMPLE_WISDOM, location="/tmp/boardroom/BOARD_WISDOM.md")


@pytest.fixture
def trust_store():
    return InMemoryTrustStore()


@pytest.fixture
def boardroom(ledger_store, wisdom_store, trust_store):
    """A Boardroom wired to in-memory stores, the demo council and a fixed clock."""
    return Boardroom(
        ledger=ledger_store,
        wisdom=wisdom_store,
        trust_store=trust_store,
        advisors=DemoAdvisorProvider(),
        now_fn=lambda: FIXED_NOW,
    )
