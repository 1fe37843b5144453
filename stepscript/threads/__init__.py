"""Background threads."""

from .sequencer_thread import SequencerThread

__all__ = ["SequencerThread"]
