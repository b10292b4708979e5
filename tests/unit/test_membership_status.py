from datetime import date, timedelta
import itertools

import pytest

from gymdesk.domain.models.client_domain_model import ClientStatus
from gymdesk.domain.services.membership_status import resolve_status

TODAY = date(2024, 6, 15)


def test_no_expiry_is_inactive():
    assert resolve_status(TODAY, None, None) == ClientStatus.INACTIVE
    assert resolve_status(TODAY, date(2024, 1, 1), None) == ClientStatus.INACTIVE


def test_future_start_wins_over_lapsed_expiry():
    start = TODAY + timedelta(days=3)
    assert resolve_status(TODAY, start, date(2020, 1, 1)) == ClientStatus.INACTIVE
    assert resolve_status(TODAY, start, TODAY + timedelta(days=40)) == ClientStatus.INACTIVE


def test_lapsed_expiry_is_delinquent():
    assert resolve_status(TODAY, date(2024, 5, 1), TODAY - timedelta(days=1)) == ClientStatus.DELINQUENT
    assert resolve_status(TODAY, None, date(2023, 12, 31)) == ClientStatus.DELINQUENT


@pytest.mark.parametrize("expiry", [TODAY, TODAY + timedelta(days=1), date(2030, 1, 1)])
def test_current_membership_is_active(expiry):
    assert resolve_status(TODAY, date(2024, 6, 1), expiry) == ClientStatus.ACTIVE


def test_start_today_is_active():
    assert resolve_status(TODAY, TODAY, TODAY + timedelta(days=30)) == ClientStatus.ACTIVE


def test_total_over_all_combinations():
    dates = [None, TODAY - timedelta(days=10), TODAY, TODAY + timedelta(days=10)]
    for start, expiry in itertools.product(dates, dates):
        assert resolve_status(TODAY, start, expiry) in set(ClientStatus)
