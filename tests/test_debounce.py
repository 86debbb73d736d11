"""Debouncer timing behaviour."""

from __future__ import annotations

import asyncio

import pytest

from searchbox.utils.debounce import Debouncer


@pytest.mark.asyncio
async def test_burst_publishes_only_final_value():
    debouncer = Debouncer("", 50)
    seen: list[str] = []
    debouncer.subscribe(seen.append)

    for value in ("s", "sh", "sho", "shoe", "shoes"):
        debouncer.push(value)
        await asyncio.sleep(0)

    assert debouncer.value == ""
    assert debouncer.is_pending

    await asyncio.sleep(0.15)

    assert seen == ["shoes"]
    assert debouncer.value == "shoes"
    assert not debouncer.is_pending


@pytest.mark.asyncio
async def test_value_stays_put_until_quiet_period_elapses():
    debouncer = Debouncer(0, 200)
    debouncer.push(1)
    await asyncio.sleep(0.02)
    debouncer.push(2)

    assert debouncer.value == 0

    await asyncio.sleep(0.4)
    assert debouncer.value == 2


@pytest.mark.asyncio
async def test_returning_to_current_value_does_not_publish():
    debouncer = Debouncer("shoes", 20)
    seen: list[str] = []
    debouncer.subscribe(seen.append)

    debouncer.push("shoe")
    debouncer.push("shoes")
    await asyncio.sleep(0.1)

    assert seen == []
    assert debouncer.value == "shoes"


@pytest.mark.asyncio
async def test_dispose_cancels_pending_timer():
    debouncer = Debouncer("", 20)
    seen: list[str] = []
    debouncer.subscribe(seen.append)

    debouncer.push("shoes")
    debouncer.dispose()
    debouncer.push("boots")
    await asyncio.sleep(0.1)

    assert seen == []
    assert debouncer.value == ""
    assert not debouncer.is_pending


@pytest.mark.asyncio
async def test_set_delay_restarts_pending_timer():
    debouncer = Debouncer("", 20)
    debouncer.push("shoes")
    debouncer.set_delay(300)

    await asyncio.sleep(0.1)
    assert debouncer.value == ""

    await asyncio.sleep(0.4)
    assert debouncer.value == "shoes"


@pytest.mark.asyncio
async def test_unsubscribed_listener_is_not_called():
    debouncer = Debouncer("", 10)
    seen: list[str] = []
    unsubscribe = debouncer.subscribe(seen.append)
    unsubscribe()

    debouncer.push("shoes")
    await asyncio.sleep(0.05)

    assert seen == []
    assert debouncer.value == "shoes"


def test_negative_delay_is_rejected():
    with pytest.raises(ValueError):
        Debouncer("", -1)


@pytest.mark.asyncio
async def test_repeating_pending_value_restarts_timer():
    debouncer = Debouncer("", 200)
    seen: list[str] = []
    debouncer.subscribe(seen.append)

    debouncer.push("shoes")
    await asyncio.sleep(0.12)
    debouncer.push("shoes")
    await asyncio.sleep(0.12)

    # Past the first deadline, still short of the restarted one.
    assert seen == []
    assert debouncer.value == ""

    await asyncio.sleep(0.2)
    assert seen == ["shoes"]
