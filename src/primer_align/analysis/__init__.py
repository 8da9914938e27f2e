from primer_align.analysis.composition import GCClamp, gc_content, gc_clamp, binding_strength

__all__ = [
    "GCClamp",
    "gc_content",
    "gc_clamp",
    "binding_strength",
]
