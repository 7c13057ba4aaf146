import pytest

from event_hub_api.app.core.errors import Forbidden
from event_hub_api.app.core.ownership import can_mutate, ensure_can_mutate


def test_owner_can_mutate():
    assert can_mutate(3, 3)
    ensure_can_mutate(3, 3)


def test_other_user_cannot_mutate():
    assert not can_mutate(4, 3)
    with pytest.raises(Forbidden) as excinfo:
        ensure_can_mutate(4, 3, "delete")
    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "You can only delete your own events"
