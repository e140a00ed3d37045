"""Unit tests for AsyncOperation and the TaskPipeline combinator."""

from __future__ import annotations

import asyncio
import logging

import pytest

from kubedeck.constants.values import SPINNER_FRAMES
from kubedeck.utils.task_pipeline import AsyncOperation, TaskPipeline, until


async def _value(value: int) -> int:
    await asyncio.sleep(0)
    return value


async def _fail(error: Exception) -> None:
    await asyncio.sleep(0)
    raise error


@pytest.mark.unit
class TestAsyncOperation:
    """Tests for AsyncOperation."""

    @pytest.mark.asyncio
    async def test_await_returns_result(self) -> None:
        """Awaiting the operation yields the task result."""
        assert await AsyncOperation.spawn(_value(3)) == 3

    @pytest.mark.asyncio
    async def test_cancel_runs_release_once(self) -> None:
        """The extra release action runs only on the first cancel."""
        released: list[bool] = []
        operation = AsyncOperation.spawn(
            asyncio.Event().wait(), on_cancel=lambda: released.append(True)
        )

        operation.cancel()
        operation.cancel()
        await asyncio.wait((operation.task,))

        assert released == [True]
        assert operation.cancelled() is True

    @pytest.mark.asyncio
    async def test_done_callback_receives_operation(self) -> None:
        """Done callbacks get the operation, not the raw task."""
        seen: list[AsyncOperation[int]] = []
        operation = AsyncOperation.spawn(_value(1))
        operation.add_done_callback(seen.append)

        await operation
        await asyncio.sleep(0)

        assert seen == [operation]


@pytest.mark.unit
class TestTaskPipelineRun:
    """Tests for TaskPipeline.run()."""

    @pytest.mark.asyncio
    async def test_until_accepts_bare_awaitable(self) -> None:
        """until() wraps a coroutine into an operation."""
        pipeline = until(_value(1))
        assert isinstance(pipeline, TaskPipeline)
        assert await pipeline.run() == 1

    @pytest.mark.asyncio
    async def test_then_stages_chain_results(self) -> None:
        """Each stage receives the previous result."""
        result = await until(_value(1)).then(lambda x: x + 1).then(lambda x: x * 10).run()
        assert result == 20

    @pytest.mark.asyncio
    async def test_stage_returning_awaitable_is_awaited(self) -> None:
        """A stage may start the next asynchronous step."""
        result = await (
            until(_value(2))
            .then(lambda x: asyncio.sleep(0, result=x * 2))
            .then(lambda x: AsyncOperation.spawn(_value(x + 1)))
            .run()
        )
        assert result == 5

    @pytest.mark.asyncio
    async def test_failure_without_hook_propagates(self) -> None:
        """With no catch() hook the failure reaches the caller."""
        with pytest.raises(ValueError, match="bad"):
            await until(_fail(ValueError("bad"))).then(lambda _: None).run()

    @pytest.mark.asyncio
    async def test_failure_goes_to_hooks_and_skips_stages(self) -> None:
        """catch() hooks receive the error; later stages never run."""
        errors: list[BaseException] = []
        stages: list[object] = []

        result = await (
            until(_fail(RuntimeError("down")))
            .then(stages.append)
            .catch(errors.append)
            .run()
        )

        assert result is None
        assert stages == []
        assert len(errors) == 1
        assert str(errors[0]) == "down"

    @pytest.mark.asyncio
    async def test_stage_failure_goes_to_hooks(self) -> None:
        """A raising stage is handled like a failed operation."""
        errors: list[BaseException] = []

        def explode(_: int) -> None:
            raise KeyError("missing")

        await until(_value(1)).then(explode).catch(errors.append).run()

        assert isinstance(errors[0], KeyError)

    @pytest.mark.asyncio
    async def test_spin_reports_frames_while_pending(self) -> None:
        """Progress hooks receive spinner frames and elapsed time."""
        gate = asyncio.Event()
        frames: list[tuple[str, float]] = []

        async def gated() -> str:
            await gate.wait()
            return "ok"

        task = asyncio.ensure_future(
            until(gated(), interval=0.001).spin(lambda f, e: frames.append((f, e))).run()
        )
        while len(frames) < 3:
            await asyncio.sleep(0.001)
        gate.set()

        assert await task == "ok"
        assert all(frame in SPINNER_FRAMES for frame, _ in frames)
        assert frames[0][0] == SPINNER_FRAMES[0]
        assert frames[-1][1] >= frames[0][1]

    @pytest.mark.asyncio
    async def test_spinner_stops_after_completion(self) -> None:
        """No progress callback fires once the operation settled."""
        frames: list[str] = []
        await until(_value(1), interval=0.001).spin(lambda f, _e: frames.append(f)).run()
        count = len(frames)

        await asyncio.sleep(0.01)

        assert len(frames) == count


@pytest.mark.unit
class TestTaskPipelineCancellation:
    """Tests for cancellation handling."""

    @pytest.mark.asyncio
    async def test_operation_cancelled_by_owner(self) -> None:
        """Cancel hooks get the handle; no stage and no error hook run."""
        operation = AsyncOperation.spawn(asyncio.Event().wait())
        handles: list[object] = []
        stages: list[object] = []
        errors: list[object] = []

        task = asyncio.ensure_future(
            until(operation)
            .on_cancel(handles.append)
            .then(stages.append)
            .catch(errors.append)
            .run()
        )
        await asyncio.sleep(0)
        operation.cancel()

        assert await task is None
        assert handles == [operation.cancel]
        assert stages == []
        assert errors == []

    @pytest.mark.asyncio
    async def test_cancelling_driver_cancels_pending_operation(self) -> None:
        """start() returns a handle that also stops the awaited operation."""
        inner = AsyncOperation.spawn(asyncio.Event().wait())
        driver = until(inner).start()
        await asyncio.sleep(0)

        driver.cancel()
        await asyncio.wait((driver.task, inner.task))

        assert driver.cancelled() is True
        assert inner.cancelled() is True

    @pytest.mark.asyncio
    async def test_result_arriving_with_cancel_is_released(self) -> None:
        """A result produced just before the driver is cancelled goes to release()."""
        result: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        stages: list[str] = []
        released: list[str] = []
        driver = until(AsyncOperation(result)).then(stages.append).release(released.append).start()
        await asyncio.sleep(0)

        result.set_result("stream")
        driver.cancel()
        await asyncio.wait((driver.task,))

        assert driver.cancelled() is True
        assert stages == []
        assert released == ["stream"]

    @pytest.mark.asyncio
    async def test_cancel_while_pending_releases_nothing(self) -> None:
        released: list[object] = []
        inner = AsyncOperation.spawn(asyncio.Event().wait())
        driver = until(inner).release(released.append).start()
        await asyncio.sleep(0)

        driver.cancel()
        await asyncio.wait((driver.task, inner.task))

        assert released == []

    @pytest.mark.asyncio
    async def test_background_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A detached pipeline without catch() logs its failure."""
        caplog.set_level(logging.ERROR, logger="kubedeck.utils.task_pipeline")

        driver = until(_fail(RuntimeError("lost"))).start()
        await asyncio.wait((driver.task,))
        await asyncio.sleep(0)

        assert "Background task failed: lost" in caplog.text
