"""Tests for the Timer context manager and decorator."""

import pytest

from tests.helpers import RecordingClient, fake_clock


class TestTimerContextManager:
    def test_sends_on_exit(self) -> None:
        client = RecordingClient(prefix="myapp", clock=fake_clock(1.0, 1.0123))
        with client.timed("block", tags=["a"]) as timer:
            pass
        assert timer.ms == 12
        assert client.sent == ["myapp.block:12|ms|#a"]

    def test_stop_without_send(self) -> None:
        client = RecordingClient(clock=fake_clock(1.0, 1.5001))
        timer = client.timed("block").start()
        timer.stop(send=False)
        assert client.sent == []
        timer.send()
        assert client.sent == ["block:500|ms"]

    def test_stop_before_start(self) -> None:
        timer = RecordingClient().timed("block")
        with pytest.raises(RuntimeError, match="not started"):
            timer.stop()

    def test_send_without_data(self) -> None:
        timer = RecordingClient().timed("block")
        with pytest.raises(RuntimeError, match="No data"):
            timer.send()

    def test_send_twice(self) -> None:
        client = RecordingClient(clock=fake_clock(1.0, 1.001))
        timer = client.timed("block").start().stop()
        with pytest.raises(RuntimeError, match="Already sent"):
            timer.send()
        assert len(client.sent) == 1


class TestTimerDecorator:
    def test_decorated_function(self) -> None:
        client = RecordingClient(clock=fake_clock(1.0, 1.0301))

        @client.timed("fn")
        def fn(a, b=2):
            return a + b

        assert fn(1, b=3) == 4
        assert fn.__name__ == "fn"
        assert client.sent == ["fn:30|ms"]

    def test_decorated_function_sends_on_error(self) -> None:
        client = RecordingClient(clock=fake_clock(1.0, 1.0071))

        @client.timed("fn")
        def fn():
            raise KeyError("x")

        with pytest.raises(KeyError):
            fn()
        assert client.sent == ["fn:7|ms"]

    @pytest.mark.asyncio
    async def test_decorated_coroutine(self) -> None:
        client = RecordingClient(clock=fake_clock(3.0, 3.0451))

        @client.timed("coro", tags=["kind:async"])
        async def coro():
            return "ok"

        assert await coro() == "ok"
        assert client.sent == ["coro:45|ms|#kind:async"]

    def test_decorator_on_pipeline_queues(self) -> None:
        client = RecordingClient(clock=fake_clock(1.0, 1.0021))
        pipe = client.pipeline()

        @pipe.timed("fn")
        def fn():
            return None

        fn()
        assert client.sent == []
        pipe.send()
        assert client.sent == ["fn:2|ms"]
