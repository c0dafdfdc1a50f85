"""Building blocks for a notebook command-line client: logs, timestamps, URLs, config, prompts and output."""

__version__ = "0.1.0"