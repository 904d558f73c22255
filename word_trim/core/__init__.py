"""Core search logic and data structures.

WHY: The core package holds the part of the tool that is genuinely ours:
turning a transcribed token stream into "where was the word said". It
never imports an inference library, so it is fast to test.

HOW: ir.py defines the data structures, matcher.py holds the pure
normalize/map/locate/resolve functions, search.py drives them over the
chunked, VAD-segmented recording.

RULES:
- No faster-whisper, silero, or subprocess imports in this package
- Engines are passed in, never constructed here
"""
