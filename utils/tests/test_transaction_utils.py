from unittest.mock import MagicMock, patch

import pytest
from django.db import IntegrityError, OperationalError

from utils.transaction_utils import is_transient_lock_error, retry_on_deadlock


@pytest.fixture
def outside_atomic():
    connection = MagicMock(in_atomic_block=False)
    with patch("utils.transaction_utils.connections") as connections:
        connections.__getitem__.return_value = connection
        yield connection


@pytest.mark.unit
class TestRetryOnDeadlock:
    def test_transient_errors(self):
        assert is_transient_lock_error(OperationalError("database is locked"))
        assert is_transient_lock_error(OperationalError("ERROR: deadlock detected"))
        assert not is_transient_lock_error(OperationalError("no such table: gig"))
        assert not is_transient_lock_error(IntegrityError("database is locked"))

    @patch("utils.transaction_utils.time.sleep")
    def test_retries_until_success(self, sleep, outside_atomic):
        func = MagicMock(side_effect=[OperationalError("database is locked"), "done"])
        func.__name__ = "func"

        assert retry_on_deadlock(max_retries=3)(func)() == "done"
        assert func.call_count == 2
        sleep.assert_called_once()

    @patch("utils.transaction_utils.time.sleep")
    def test_gives_up_after_max_retries(self, sleep, outside_atomic):
        func = MagicMock(side_effect=OperationalError("deadlock detected"))
        func.__name__ = "func"

        with pytest.raises(OperationalError):
            retry_on_deadlock(max_retries=2)(func)()
        assert func.call_count == 3

    def test_non_transient_error_is_not_retried(self, outside_atomic):
        func = MagicMock(side_effect=OperationalError("no such column"))
        func.__name__ = "func"

        with pytest.raises(OperationalError):
            retry_on_deadlock()(func)()
        assert func.call_count == 1

    def test_not_retried_inside_outer_transaction(self, outside_atomic):
        outside_atomic.in_atomic_block = True
        func = MagicMock(side_effect=OperationalError("database is locked"))
        func.__name__ = "func"

        with pytest.raises(OperationalError):
            retry_on_deadlock()(func)()
        assert func.call_count == 1
