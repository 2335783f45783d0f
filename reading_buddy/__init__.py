"""Reading Buddy book content core: checkpoints, text extraction, quiz requests."""

__version__ = "0.1.0"
