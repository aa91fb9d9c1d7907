"""Tests for ChangeFeed."""

import asyncio

from agent_squad.services import ChangeFeed


class TestChangeFeed:
    """SUT: ChangeFeed"""

    async def test_sync_and_async_callbacks(self):
        """Both plain and coroutine callbacks receive the payload."""
        feed = ChangeFeed()
        seen = []

        async def on_workflow(workflow):
            seen.append(("workflow", workflow))

        feed.subscribe("c1", on_message_inserted=lambda m: seen.append(("message", m)),
                       on_workflow_updated=on_workflow)
        await feed.publish_message("c1", "m1")
        await feed.publish_workflow("c1", "w1")
        await feed.join()
        assert seen == [("message", "m1"), ("workflow", "w1")]

    async def test_scoped_to_conversation(self):
        """Subscribers only hear about their own conversation."""
        feed = ChangeFeed()
        seen = []
        feed.subscribe("c1", on_message_inserted=seen.append)
        await feed.publish_message("c2", "m1")
        assert seen == []

    async def test_missing_callback_skipped(self):
        """A subscriber without a workflow callback ignores workflow events."""
        feed = ChangeFeed()
        seen = []
        feed.subscribe("c1", on_message_inserted=seen.append)
        await feed.publish_workflow("c1", "w1")
        assert seen == []

    async def test_unsubscribe(self):
        """After unsubscribing no more callbacks fire; a second call is harmless."""
        feed = ChangeFeed()
        seen = []
        unsubscribe = feed.subscribe("c1", on_message_inserted=seen.append)
        assert feed.subscriber_count("c1") == 1
        unsubscribe()
        unsubscribe()
        await feed.publish_message("c1", "m1")
        assert seen == []
        assert feed.subscriber_count("c1") == 0

    async def test_failing_callback_does_not_block_others(self):
        """An exception in one callback is logged and delivery continues."""
        feed = ChangeFeed()
        seen = []

        def broken(message):
            raise RuntimeError("boom")

        feed.subscribe("c1", on_message_inserted=broken)
        feed.subscribe("c1", on_message_inserted=seen.append)
        await feed.publish_message("c1", "m1")
        assert seen == ["m1"]

    async def test_slow_subscriber_does_not_block_publish(self):
        """Publishing returns before a slow coroutine callback finishes."""
        feed = ChangeFeed()
        gate = asyncio.Event()
        seen = []

        async def slow(message):
            await gate.wait()
            seen.append(message)

        feed.subscribe("c1", on_message_inserted=slow)
        await asyncio.wait_for(feed.publish_message("c1", "m1"), timeout=0.5)
        assert seen == []

        gate.set()
        await feed.join()
        assert seen == ["m1"]

    async def test_async_delivery_keeps_order(self):
        """A subscriber sees its notifications in publish order."""
        feed = ChangeFeed()
        seen = []

        async def on_message(message):
            await asyncio.sleep(0)
            seen.append(message)

        feed.subscribe("c1", on_message_inserted=on_message)
        for i in range(5):
            await feed.publish_message("c1", f"m{i}")
        await feed.join()
        assert seen == ["m0", "m1", "m2", "m3", "m4"]

    async def test_failing_async_callback_keeps_delivering(self):
        """An exception in a coroutine callback does not stop later deliveries."""
        feed = ChangeFeed()
        seen = []

        async def flaky(message):
            if message == "bad":
                raise RuntimeError("boom")
            seen.append(message)

        feed.subscribe("c1", on_message_inserted=flaky)
        await feed.publish_message("c1", "bad")
        await feed.publish_message("c1", "good")
        await feed.join()
        assert seen == ["good"]

    async def test_unsubscribe_drops_pending(self):
        """Undelivered notifications are discarded on unsubscribe."""
        feed = ChangeFeed()
        seen = []

        async def slow(message):
            await asyncio.sleep(10)
            seen.append(message)

        unsubscribe = feed.subscribe("c1", on_message_inserted=slow)
        await feed.publish_message("c1", "m1")
        await feed.publish_message("c1", "m2")
        unsubscribe()
        await feed.join()
        await asyncio.sleep(0)
        assert seen == []

    async def test_shutdown(self):
        """shutdown() removes every subscription."""
        feed = ChangeFeed()

        async def on_message(message):
            await asyncio.sleep(10)

        feed.subscribe("c1", on_message_inserted=on_message)
        await feed.publish_message("c1", "m1")
        await feed.shutdown()
        assert feed.subscriber_count("c1") == 0
