"""Word Trim: cut an audio recording so it starts at a spoken word.

WHY: Recordings often carry minutes of preamble before the part that
matters, and the only reliable marker is a word someone says. Finding
that word by ear is slow; finding it by transcript is not.

HOW: Four-stage pipeline: load (decode to 16 kHz mono), segment
(fixed chunks + voice-activity detection), search (transcribe each
speech region and match the normalized word against the token stream),
trim (hand the resolved timestamp to ffmpeg). Each stage sits behind a
small interface so it is independently testable.

RULES:
- Only the earliest occurrence of the word is ever reported
- "Word not found" is a normal outcome, not an error
- Heavy inference libraries are only touched from word_trim.engines
"""

__version__ = "0.1.0"
