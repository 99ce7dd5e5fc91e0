"""
Entry point for running the visual assistant as a module.

Usage:
    python -m visual_assistant --replay recording.jsonl
"""

from .cli import main

if __name__ == "__main__":
    main()
