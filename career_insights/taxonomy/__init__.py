from functools import lru_cache

from .local_taxonomy import LocalIndustryTaxonomy
from .provider import IndustryTaxonomy


@lru_cache(maxsize=1)
def get_default_taxonomy() -> IndustryTaxonomy:
    return LocalIndustryTaxonomy()


__all__ = ["IndustryTaxonomy", "LocalIndustryTaxonomy", "get_default_taxonomy"]
