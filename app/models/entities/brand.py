"""Brand entity - a car manufacturer shown in the catalog"""

from .base import BaseEntity


class Brand(BaseEntity):
    name: str
    logo: str
    slug: str
    featured: bool = False
