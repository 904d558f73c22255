"""Package entry point for ``python -m word_trim``.

WHY: Users run the tool as ``python -m word_trim recording.opus hello``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates straight to the CLI's main() function.
"""

from word_trim.cli import main

if __name__ == "__main__":
    main()
