from .validation import check_key, check_label, is_hashable, unique_iter

__all__ = ["check_key", "check_label", "is_hashable", "unique_iter"]
