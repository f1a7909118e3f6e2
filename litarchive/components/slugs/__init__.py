"""Slug allocator component."""

from .component import run_allocate
from .models import AllocateSlugInput, AllocateSlugOutput
from .ports import SlugStorePort

__all__ = [
    "run_allocate",
    "AllocateSlugInput",
    "AllocateSlugOutput",
    "SlugStorePort",
]
