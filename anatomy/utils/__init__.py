from anatomy.utils.logger_config import EmojiFormatter, setup_logging
from anatomy.utils.paths import apply_changes, delete_path, get_path, is_path_segment, set_path

__all__ = [
    "EmojiFormatter",
    "setup_logging",
    "apply_changes",
    "delete_path",
    "get_path",
    "is_path_segment",
    "set_path",
]
