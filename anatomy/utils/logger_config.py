import logging
from typing import IO, Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class EmojiFormatter(logging.Formatter):
    """
    Prefixes each record with an emoji for its level, so hits, heals and
    rejected injuries stand out when tailing the console.
    """

    LEVEL_EMOJIS = {
        logging.DEBUG: "🐛",
        logging.INFO: "✅",
        logging.WARNING: "⚠️",
        logging.ERROR: "❌",
        logging.CRITICAL: "💀",
    }

    def format(self, record):
        s = super().format(record)
        emoji = self.LEVEL_EMOJIS.get(record.levelno, "")
        return f"{emoji} {s}"


def setup_logging(level: Union[int, str] = "INFO", stream: Optional[IO] = None) -> logging.Handler:
    """
    Installs a single EmojiFormatter console handler on the root logger.
    Call once at the entry point; library modules only use
    logging.getLogger(__name__). Returns the installed handler.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(EmojiFormatter(LOG_FORMAT))

    # Replace earlier handlers so repeated calls never duplicate output
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)
    return handler
