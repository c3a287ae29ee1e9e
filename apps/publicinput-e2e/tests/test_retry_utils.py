"""
@PURPOSE: Tests for src/utils/retry_utils.py - async retry with backoff
@OUTLINE:
  - TestRetryWithBackoff: success, retries, delays, exhaustion, filtering
@DEPENDENCIES:
  - External: pytest, pytest-asyncio
  - Internal: src.utils.retry_utils
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.utils.retry_utils import retry_with_backoff


@pytest.fixture
def no_sleep():
    with patch("src.utils.retry_utils.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


class TestRetryWithBackoff:
    """retry_with_backoff behavior."""

    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(self, no_sleep):
        func = AsyncMock(return_value="ok")

        result = await retry_with_backoff(func, max_retries=3)

        assert result == "ok"
        assert func.call_count == 1
        no_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_succeeds_after_failures(self, no_sleep):
        func = AsyncMock(side_effect=[RuntimeError("boom"), RuntimeError("boom"), "ok"])

        result = await retry_with_backoff(func, max_retries=3, initial_delay=2.0, backoff_factor=1.5)

        assert result == "ok"
        assert func.call_count == 3
        assert [call.args[0] for call in no_sleep.call_args_list] == [2.0, 3.0]

    @pytest.mark.asyncio
    async def test_fixed_delay(self, no_sleep):
        func = AsyncMock(side_effect=[RuntimeError("a"), RuntimeError("b"), "ok"])

        await retry_with_backoff(func, max_retries=3, initial_delay=2.0, backoff_factor=1.0)

        assert [call.args[0] for call in no_sleep.call_args_list] == [2.0, 2.0]

    @pytest.mark.asyncio
    async def test_last_error_propagates(self, no_sleep):
        func = AsyncMock(side_effect=[RuntimeError("first"), RuntimeError("last")])

        with pytest.raises(RuntimeError, match="last"):
            await retry_with_backoff(func, max_retries=2)

        assert no_sleep.call_count == 1

    @pytest.mark.asyncio
    async def test_non_matching_error_not_retried(self, no_sleep):
        func = AsyncMock(side_effect=KeyError("nope"))

        with pytest.raises(KeyError):
            await retry_with_backoff(func, max_retries=3, retry_on=(RuntimeError,))

        assert func.call_count == 1

    @pytest.mark.asyncio
    async def test_on_retry_callback(self, no_sleep):
        func = AsyncMock(side_effect=[RuntimeError("boom"), "ok"])
        on_retry = MagicMock()

        await retry_with_backoff(func, max_retries=2, on_retry=on_retry)

        attempt, error, message = on_retry.call_args.args
        assert attempt == 1
        assert isinstance(error, RuntimeError)
        assert message == "boom"

    @pytest.mark.asyncio
    async def test_invalid_max_retries(self):
        with pytest.raises(ValueError):
            await retry_with_backoff(AsyncMock(), max_retries=0)
