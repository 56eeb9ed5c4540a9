"""
Progress Module - Black Box Interface

Purpose: Receive live output lines from running commands
Interface: ProgressSink protocol (log, clone) and its implementations
Hidden: Rendering, buffering and locking

Can be replaced with any object providing log() and clone() that is safe to
call from both output readers of one command.
"""

from .progress import BufferedProgress, ConsoleProgress, LoggingProgress, NullProgress, ProgressSink

__all__ = ["BufferedProgress", "ConsoleProgress", "LoggingProgress", "NullProgress", "ProgressSink"]
