"""Dispatch – registry, submission queue, waiting table, dispatcher."""
from comas.dispatch.registry import CommandRegistry, ComposedHandler, Handler
from comas.dispatch.queue import QueueEntry, SubmissionQueue
from comas.dispatch.waiting import WaitingTable
from comas.dispatch.dispatcher import Dispatcher

__all__ = [
    "CommandRegistry",
    "ComposedHandler",
    "Dispatcher",
    "Handler",
    "QueueEntry",
    "SubmissionQueue",
    "WaitingTable",
]
