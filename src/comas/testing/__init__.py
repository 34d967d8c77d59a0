"""Testing support – in-memory doubles for handlers, listeners and commands."""
from comas.testing.fakes import RecordingHandler, RecordingListener, ScriptedCommand

__all__ = ["RecordingHandler", "RecordingListener", "ScriptedCommand"]
