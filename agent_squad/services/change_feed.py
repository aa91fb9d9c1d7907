"""In-process change feed keyed by conversation id."""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..utils.logger import get_app_logger

ChangeCallback = Callable[[Any], Union[None, Awaitable[None]]]

MESSAGE_INSERTED = "message_inserted"
WORKFLOW_UPDATED = "workflow_updated"


class _Subscription:
    """One subscriber's pair of callbacks and its delivery queue."""

    def __init__(self, conversation_id: str, on_message_inserted: Optional[ChangeCallback],
                 on_workflow_updated: Optional[ChangeCallback]):
        self.conversation_id = conversation_id
        self.callbacks = {
            MESSAGE_INSERTED: on_message_inserted,
            WORKFLOW_UPDATED: on_workflow_updated,
        }
        self.queue: Optional[asyncio.Queue] = None
        self.task: Optional[asyncio.Task] = None

    def close(self) -> Optional[asyncio.Task]:
        """Stop delivery and discard undelivered notifications."""
        if self.queue is not None:
            while not self.queue.empty():
                _, pending = self.queue.get_nowait()
                if inspect.iscoroutine(pending):
                    pending.close()
                self.queue.task_done()
        task, self.task = self.task, None
        if task is not None:
            task.cancel()
        return task


class ChangeFeed:
    """
    Publish/subscribe channel for message inserts and workflow updates.

    Delivery is at-least-once from the subscriber's point of view: callers
    may publish the same record more than once, and subscribers are expected
    to be idempotent. A failing callback is logged and does not stop
    delivery to the others.

    Plain callbacks run during publish. Awaitables returned by coroutine
    callbacks go on a per-subscription queue drained by its own task, so a
    slow subscriber never holds up the writer. Each subscriber still sees
    its notifications in publish order.
    """

    def __init__(self):
        self._subscriptions: Dict[str, List[_Subscription]] = {}  # conversation_id -> subscriptions
        self.logger = get_app_logger()

    def subscribe(
        self,
        conversation_id: str,
        on_message_inserted: Optional[ChangeCallback] = None,
        on_workflow_updated: Optional[ChangeCallback] = None
    ) -> Callable[[], None]:
        """
        Register callbacks for one conversation.

        Callbacks may be plain functions or coroutine functions.

        Returns:
            A function that removes this subscription; safe to call twice
        """
        subscription = _Subscription(conversation_id, on_message_inserted, on_workflow_updated)
        self._subscriptions.setdefault(conversation_id, []).append(subscription)
        self.logger.debug(f"[ChangeFeed] subscribed to conversation {conversation_id}")

        def unsubscribe() -> None:
            subs = self._subscriptions.get(conversation_id)
            if not subs or subscription not in subs:
                return
            subs.remove(subscription)
            if not subs:
                del self._subscriptions[conversation_id]
            subscription.close()
            self.logger.debug(f"[ChangeFeed] unsubscribed from conversation {conversation_id}")

        return unsubscribe

    def subscriber_count(self, conversation_id: str) -> int:
        """Number of live subscriptions for a conversation."""
        return len(self._subscriptions.get(conversation_id, []))

    async def publish_message(self, conversation_id: str, message: Any) -> None:
        """Notify subscribers of an inserted message."""
        self._publish(conversation_id, MESSAGE_INSERTED, message)

    async def publish_workflow(self, conversation_id: str, workflow: Any) -> None:
        """Notify subscribers of a new workflow state."""
        self._publish(conversation_id, WORKFLOW_UPDATED, workflow)

    async def join(self) -> None:
        """Wait until every queued notification has been delivered."""
        for subs in list(self._subscriptions.values()):
            for subscription in list(subs):
                if subscription.queue is not None and subscription.task is not None:
                    await subscription.queue.join()

    async def shutdown(self) -> None:
        """Drop all subscriptions and stop their delivery tasks."""
        tasks = []
        for subs in self._subscriptions.values():
            for subscription in subs:
                task = subscription.close()
                if task is not None:
                    tasks.append(task)
        self._subscriptions.clear()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _publish(self, conversation_id: str, event: str, payload: Any) -> None:
        for subscription in list(self._subscriptions.get(conversation_id, [])):
            callback = subscription.callbacks.get(event)
            if callback is None:
                continue
            try:
                result = callback(payload)
            except Exception:
                self.logger.exception(
                    f"[ChangeFeed] {event} callback error for conversation {conversation_id}"
                )
                continue
            if inspect.isawaitable(result):
                self._enqueue(subscription, event, result)

    def _enqueue(self, subscription: _Subscription, event: str, pending: Awaitable) -> None:
        if subscription.queue is None:
            subscription.queue = asyncio.Queue()
        if subscription.task is None:
            subscription.task = asyncio.create_task(self._drain(subscription))
        subscription.queue.put_nowait((event, pending))

    async def _drain(self, subscription: _Subscription) -> None:
        queue = subscription.queue
        while True:
            event, pending = await queue.get()
            try:
                await pending
            except Exception:
                self.logger.exception(
                    f"[ChangeFeed] {event} callback error for conversation {subscription.conversation_id}"
                )
            finally:
                queue.task_done()
