from primer_align.utils.nucleotide_utils import normalize_base, normalize_sequence, pair_key, gc_count
from primer_align.utils.logging_utils import setup_logger, set_log_level, level_for_verbosity

__all__ = [
    "normalize_base",
    "normalize_sequence",
    "pair_key",
    "gc_count",
    "setup_logger",
    "set_log_level",
    "level_for_verbosity",
]
