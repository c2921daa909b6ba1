from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelSettings:
    """
    Value Object holding per-channel behaviour switches.

    log_handler_failures: log every captured subscriber failure at DEBUG.
    reject_after_break: make notify() on a broken channel raise
        InvalidOperationError instead of dispatching to nobody.
    """
    log_handler_failures: bool = True
    reject_after_break: bool = False
