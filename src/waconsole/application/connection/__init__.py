"""WhatsApp connection state synchronization"""

from .poller import ConnectionStatusPoller

__all__ = ["ConnectionStatusPoller"]
