from .messaging.bus import bus, MessageBus
from .transaction import TransactionManager, WriteFileOp, FileSystemAdapter

__all__ = ["bus", "MessageBus", "TransactionManager", "WriteFileOp", "FileSystemAdapter"]
