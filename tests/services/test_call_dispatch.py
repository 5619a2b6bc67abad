"""Call Dispatch: tests for named-operation invocation on contract handles.

Tests cover:
    - Unknown operation returns None and never raises
    - args + metadata forwarded as (*args, metadata), exactly once
    - No args: zero-argument call, metadata NOT appended (pinned asymmetry)
    - Awaitable results awaited, results returned verbatim
    - Operation errors propagate unchanged
"""

import pytest

from minter.core.errors import ContractTransportError
from minter.services.call_dispatch import CallDispatcher

from tests.fakes import AsyncOperation, FakeHandle, RecordingOperation


async def test_unknown_operation_returns_none():
    handle = FakeHandle(operations={"balanceOf": RecordingOperation(1)})
    result = await CallDispatcher().invoke("mint", handle, ["0xabc"], {"value": 1})
    assert result is None


async def test_unknown_operation_on_empty_handle_returns_none():
    assert await CallDispatcher().invoke("balanceOf", FakeHandle()) is None


async def test_args_and_metadata_forwarded_once():
    op = RecordingOperation("ok")
    handle = FakeHandle(operations={"mint": op})
    metadata = {"value": 5 * 10**17}
    result = await CallDispatcher().invoke("mint", handle, ["a", "b"], metadata)
    assert result == "ok"
    assert op.calls == [("a", "b", metadata)]


async def test_args_without_metadata_append_empty_dict():
    op = RecordingOperation(3)
    handle = FakeHandle(operations={"balanceOf": op})
    await CallDispatcher().invoke("balanceOf", handle, ["0xabc"])
    assert op.calls == [("0xabc", {})]


async def test_no_args_calls_with_zero_arguments():
    op = RecordingOperation(100)
    handle = FakeHandle(operations={"totalSupply": op})
    await CallDispatcher().invoke("totalSupply", handle)
    assert op.calls == [()]


async def test_no_args_drops_metadata():
    """Regression pin: the zero-argument path never forwards metadata."""
    op = RecordingOperation(100)
    handle = FakeHandle(operations={"totalSupply": op})
    await CallDispatcher().invoke("totalSupply", handle, None, {"gasLimit": 1})
    assert op.calls == [()]


async def test_empty_args_still_forward_metadata():
    op = RecordingOperation()
    handle = FakeHandle(operations={"mint": op})
    await CallDispatcher().invoke("mint", handle, [], {"value": 1})
    assert op.calls == [({"value": 1},)]


async def test_awaitable_result_is_awaited():
    op = AsyncOperation(42)
    handle = FakeHandle(operations={"balanceOf": op})
    assert await CallDispatcher().invoke("balanceOf", handle, ["0xabc"]) == 42


async def test_result_returned_verbatim():
    sentinel = object()
    handle = FakeHandle(operations={"tokenURI": RecordingOperation(sentinel)})
    assert await CallDispatcher().invoke("tokenURI", handle, [1]) is sentinel


async def test_operation_error_propagates():
    error = ContractTransportError("execution reverted", "mint")
    handle = FakeHandle(operations={"mint": AsyncOperation(error=error)})
    with pytest.raises(ContractTransportError) as exc_info:
        await CallDispatcher().invoke("mint", handle, [])
    assert exc_info.value is error


async def test_arbitrary_error_propagates_unchanged():
    handle = FakeHandle(operations={"mint": RecordingOperation(error=RuntimeError("x"))})
    with pytest.raises(RuntimeError):
        await CallDispatcher().invoke("mint", handle, [1])


def test_supports():
    handle = FakeHandle(operations={"balanceOf": RecordingOperation()})
    dispatcher = CallDispatcher()
    assert dispatcher.supports("balanceOf", handle)
    assert not dispatcher.supports("mint", handle)
