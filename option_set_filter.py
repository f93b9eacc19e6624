"""
option_set_filter.py
Decides whether an option set enum type is part of the generated output.
"""
from typing import Iterable, Optional


class OptionSetFilter:
    """
    With no whitelist every enum is generated unless skipped. Names are compared case-insensitively.
    """
    def __init__(self, option_sets_to_generate: Optional[Iterable[str]] = None,
                 option_sets_to_skip: Optional[Iterable[str]] = None):
        self.option_sets_to_generate = (
            frozenset(n.lower() for n in option_sets_to_generate) if option_sets_to_generate else None
        )
        self.option_sets_to_skip = frozenset(n.lower() for n in option_sets_to_skip or [])

    def is_option_set_generated(self, enum_type_name: str) -> bool:
        name = enum_type_name.lower()
        if name in self.option_sets_to_skip:
            return False
        if self.option_sets_to_generate is None:
            return True
        return name in self.option_sets_to_generate
