"""Tests for the notification channel."""
import pytest

from up2share.core.upload.notifications import (
    NotificationChannel,
    ProgressNotification,
    CompletedNotification,
    ErrorNotification
)


class TestNotificationChannel:
    """Test suite for NotificationChannel."""

    @pytest.fixture
    def channel(self):
        return NotificationChannel()

    def test_dispatch_by_type(self, channel):
        progress, errors = [], []
        channel.on(ProgressNotification, progress.append)
        channel.on(ErrorNotification, errors.append)

        channel.emit(ProgressNotification(progress=50.0, chunk_start=0, chunk_end=9))

        assert progress == [ProgressNotification(50.0, 0, 9)]
        assert errors == []

    def test_multiple_listeners_in_order(self, channel):
        calls = []
        channel.on(CompletedNotification, lambda n: calls.append(("first", n.file_id)))
        channel.on(CompletedNotification, lambda n: calls.append(("second", n.file_id)))

        channel.emit(CompletedNotification(filename="a", file_id="1"))

        assert calls == [("first", "1"), ("second", "1")]

    def test_emit_without_listeners(self, channel):
        channel.emit(ErrorNotification(message="nobody listening"))

        assert not channel.has_listeners(ErrorNotification)

    def test_on_returns_self(self, channel):
        assert channel.on(ErrorNotification, print) is channel

    def test_off_single_callback(self, channel):
        calls = []

        def keep(n):
            calls.append("keep")

        def drop(n):
            calls.append("drop")

        channel.on(ErrorNotification, keep).on(ErrorNotification, drop)
        channel.off(ErrorNotification, drop)
        channel.emit(ErrorNotification(message="x"))

        assert calls == ["keep"]

    def test_off_all_callbacks(self, channel):
        channel.on(ErrorNotification, print)
        channel.off(ErrorNotification)

        assert not channel.has_listeners(ErrorNotification)

    def test_off_unknown_type(self, channel):
        assert channel.off(CompletedNotification) is channel

    def test_callback_may_unsubscribe_during_emit(self, channel):
        calls = []

        def once(n):
            calls.append(n.message)
            channel.off(ErrorNotification, once)

        channel.on(ErrorNotification, once)
        channel.emit(ErrorNotification(message="a"))
        channel.emit(ErrorNotification(message="b"))

        assert calls == ["a"]
