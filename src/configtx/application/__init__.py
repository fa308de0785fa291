"""
Application layer for the configuration mutation engine.

Contains the transaction lifecycle and the task runner that drives it.
"""

from configtx.application.edits import EditRequestBuilder
from configtx.application.requests import GetRequest
from configtx.application.runner import TaskRunner
from configtx.application.transaction import MutationTransaction
from configtx.application.transaction_event_emitter import TransactionEventEmitter

__all__ = [
    "EditRequestBuilder",
    "GetRequest",
    "MutationTransaction",
    "TaskRunner",
    "TransactionEventEmitter",
]
