"""Engine package — adapters around third-party inference libraries.

WHY: Model loading, VAD, and decoding are external capabilities. This
package is the only place that imports faster-whisper or silero-vad, so
the search core and its tests never pay for loading them.

HOW: base.py defines the interfaces. whisper.py and silero.py implement
them. Implementations are imported lazily by the CLI, not re-exported
here, so importing word_trim.engines stays cheap.
"""

from word_trim.engines.base import AudioLoader, TranscriptionEngine, VadEngine

__all__ = ["AudioLoader", "TranscriptionEngine", "VadEngine"]
