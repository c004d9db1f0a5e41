import os
import threading
import config

_tick_id = None


def set_tick(tick_id):
    global _tick_id
    _tick_id = tick_id


def log(scope, msg, level="INFO"):
    if level == "DEBUG" and not getattr(config, "LOG_DEBUG", False):
        return
    if scope == "SCHED" and not getattr(config, "LOG_SCHEDULER", True):
        return
    pid = os.getpid()
    thread = threading.current_thread().name
    tick = _tick_id
    tick_tag = f" t{tick}" if tick is not None else ""
    text = f"[{level}{tick_tag} pid{pid} thr{thread} {scope}] {msg}"
    use_color = getattr(config, "LOG_COLOR", True) and os.getenv("NO_COLOR") is None
    if use_color:
        if level in ("WARN", "ERROR"):
            text = f"\x1b[33m{text}\x1b[0m"
        elif thread != "MainThread":
            # Worker thread.
            text = f"\x1b[32m{text}\x1b[0m"
    print(text)
