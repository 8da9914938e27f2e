from primer_align.rules.constraints import (
    COMPLEMENT,
    TERMINAL_WINDOW,
    THREE_PRIME_REGION_SIZE,
    can_pair,
    complement_base,
    reverse_complement,
    three_prime_region_start,
    is_in_three_prime_region,
)

__all__ = [
    "COMPLEMENT",
    "TERMINAL_WINDOW",
    "THREE_PRIME_REGION_SIZE",
    "can_pair",
    "complement_base",
    "reverse_complement",
    "three_prime_region_start",
    "is_in_three_prime_region",
]
