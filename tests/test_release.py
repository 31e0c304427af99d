"""Tests for the resource releaser

Release order, None placeholders and failure handling.
"""

import io
import sqlite3

import pytest

from dagster_resutil.errors import NoResourcesProvided, ResourceReleaseError
from dagster_resutil.release import close, release
from tests.fake_resources import RecordingCloseable


@pytest.fixture
def log():
    return []


class TestRelease:
    """Test suite for release()."""

    def test_no_resources(self):
        """Test calling without arguments is an error."""
        with pytest.raises(NoResourcesProvided):
            release()

    def test_only_none_is_allowed(self):
        """Test a batch made of placeholders is not an error."""
        release(None, None)

    def test_reverse_order(self, log):
        """Test resources are closed last to first."""
        a, b, c = (RecordingCloseable(name, log) for name in "abc")

        release(a, b, c)

        assert log == ["c", "b", "a"]
        assert a.closed and b.closed and c.closed

    def test_single_resource(self, log):
        """Test a single resource is closed."""
        a = RecordingCloseable("a", log)

        release(a)

        assert log == ["a"]

    def test_none_is_skipped(self, log):
        """Test None placeholders are skipped without breaking the order."""
        a, b = RecordingCloseable("a", log), RecordingCloseable("b", log)

        release(a, None, b)

        assert log == ["b", "a"]

    def test_fail_fast_stops_at_first_failure(self, log):
        """Test a failure stops the pass before earlier resources are closed."""
        a = RecordingCloseable("a", log)
        b = RecordingCloseable("b", log, error=OSError("disk gone"))
        c = RecordingCloseable("c", log)

        with pytest.raises(ResourceReleaseError) as exc_info:
            release(a, b, c)

        assert log == ["c", "b"]
        assert not a.closed
        assert exc_info.value.index == 1
        assert exc_info.value.resource is b
        assert isinstance(exc_info.value.__cause__, OSError)
        assert "RecordingCloseable('b')" in str(exc_info.value)
        assert exc_info.value.failures == [(1, b, exc_info.value.original_error)]

    def test_close_all_keeps_going(self, log):
        """Test fail_fast=False attempts every resource and reports all failures."""
        a = RecordingCloseable("a", log, error=RuntimeError("a failed"))
        b = RecordingCloseable("b", log)
        c = RecordingCloseable("c", log, error=RuntimeError("c failed"))

        with pytest.raises(ResourceReleaseError) as exc_info:
            release(a, b, c, fail_fast=False)

        assert log == ["c", "b", "a"]
        assert b.closed
        assert exc_info.value.index == 2
        assert [index for index, _, _ in exc_info.value.failures] == [2, 0]
        assert exc_info.value.context['failed_indexes'] == [2, 0]

    def test_close_all_without_failures(self, log):
        """Test fail_fast=False behaves like the default when nothing fails."""
        a, b = RecordingCloseable("a", log), RecordingCloseable("b", log)

        release(a, b, fail_fast=False)

        assert log == ["b", "a"]

    def test_object_without_close(self, log):
        """Test an entry that cannot be closed is reported as a failed release."""
        a = RecordingCloseable("a", log)

        with pytest.raises(ResourceReleaseError) as exc_info:
            release(a, object())

        assert isinstance(exc_info.value.__cause__, AttributeError)
        assert log == []

    def test_close_alias(self, log):
        """Test close() is the same operation."""
        a, b = RecordingCloseable("a", log), RecordingCloseable("b", log)

        close(a, b)

        assert log == ["b", "a"]

    def test_real_resources(self):
        """Test standard library closeables are released."""
        conn = sqlite3.connect(":memory:")
        cursor = conn.cursor()
        buffer = io.StringIO()

        release(conn, cursor, buffer)

        assert buffer.closed
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")

    def test_already_closed_resources(self):
        """Test idempotence is left to the resource type."""
        buffer = io.BytesIO()
        buffer.close()

        release(buffer)

        assert buffer.closed
