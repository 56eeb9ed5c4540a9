"""
Executor Module - Black Box Interface

Purpose: Run external build/evaluation commands non-interactively
Interface: Command descriptor, CommandExecution.run(), get_logs()
Hidden: Process spawning, concurrent stream draining, exit status mapping

Can be replaced with different execution mechanisms (remote runners, sandboxes).
"""

from .execution import Command, CommandExecution, ExecutionResult, ExitStatus, capture_stream, read_line

__all__ = ["Command", "CommandExecution", "ExecutionResult", "ExitStatus", "capture_stream", "read_line"]
