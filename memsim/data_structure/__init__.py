from .bi_directional_links import NonCircularBiLink
from .heap import Heap

__all__ = ["NonCircularBiLink", "Heap"]
