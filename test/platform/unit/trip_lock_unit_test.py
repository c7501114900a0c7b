import anyio
import pytest

from src.platform.state.trip_lock import TripLockRegistry


@pytest.mark.unit
class TestTripLockRegistry:
    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self) -> None:
        registry = TripLockRegistry()
        inside = 0
        max_inside = 0

        async def critical_section() -> None:
            nonlocal inside, max_inside
            async with registry.hold(('trip', 'a')):
                inside += 1
                max_inside = max(max_inside, inside)
                await anyio.sleep(0.01)
                inside -= 1

        async with anyio.create_task_group() as tg:
            for _ in range(5):
                tg.start_soon(critical_section)

        assert max_inside == 1

    @pytest.mark.asyncio
    async def test_different_keys_do_not_block_each_other(self) -> None:
        registry = TripLockRegistry()

        async with registry.hold(('trip', 'a')):
            with anyio.fail_after(1):
                async with registry.hold(('trip', 'b')):
                    assert len(registry) == 2

    @pytest.mark.asyncio
    async def test_keys_are_forgotten_after_release(self) -> None:
        registry = TripLockRegistry()

        async with registry.hold(('trip', 'a')):
            assert len(registry) == 1

        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_lock_is_released_on_error(self) -> None:
        registry = TripLockRegistry()

        with pytest.raises(RuntimeError):
            async with registry.hold(('bus', 1)):
                raise RuntimeError('boom')

        with anyio.fail_after(1):
            async with registry.hold(('bus', 1)):
                pass
