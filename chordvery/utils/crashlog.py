# utils/crashlog.py
import datetime
import faulthandler
import os
import platform
import sys
import threading
import traceback

from chordvery import __version__

LOG_DIR_ENV = "CHORDVERY_LOG_DIR"

_fault_file = None


def log_dir() -> str:
    """``$CHORDVERY_LOG_DIR`` or ``~/.chordvery/logs``, created on demand."""
    d = os.environ.get(LOG_DIR_ENV) or os.path.join(os.path.expanduser("~"), ".chordvery", "logs")
    os.makedirs(d, exist_ok=True)
    return d


def _report_path(kind: str) -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    return os.path.join(log_dir(), f"{kind}-{stamp}.txt")


def _write_report(kind: str, heading: str, exc_type, exc, tb) -> str:
    path = _report_path(kind)
    with open(path, "w", encoding="utf-8") as out:
        out.write(f"{heading}\n")
        out.write(f"chordvery {__version__} / Python {platform.python_version()} / {platform.platform()}\n")
        out.write("-" * 60 + "\n")
        out.write("".join(traceback.format_exception(exc_type, exc, tb)))
    return path


def setup_crashlog():
    """Send interpreter faults and exceptions nobody caught, on any thread,
    to report files in ``log_dir()``."""
    global _fault_file
    try:
        if _fault_file is None:
            _fault_file = open(_report_path("native"), "w", encoding="utf-8")
        faulthandler.enable(_fault_file, all_threads=True)
    except OSError:
        _fault_file = None

    def _on_uncaught(exc_type, exc, tb):
        try:
            _write_report("crash", "Uncaught exception", exc_type, exc, tb)
        finally:
            sys.__excepthook__(exc_type, exc, tb)

    def _on_thread(args):
        # MIDI callbacks run on the backend's thread
        name = args.thread.name if args.thread is not None else "?"
        try:
            _write_report("thread", f"Uncaught exception in thread {name}",
                          args.exc_type, args.exc_value, args.exc_traceback)
        finally:
            threading.__excepthook__(args)

    sys.excepthook = _on_uncaught
    threading.excepthook = _on_thread


def log_exception(title: str, exc: BaseException) -> str:
    """Write a report for an exception that is about to be re-raised; returns its path."""
    return _write_report("error", f"[{title}] {type(exc).__name__}: {exc}",
                         type(exc), exc, exc.__traceback__)
