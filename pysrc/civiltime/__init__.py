from __future__ import annotations

from ._format import (
    ErrorItem,
    Fixed,
    FixedItem,
    FormatError,
    Item,
    LiteralItem,
    Numeric,
    NumericItem,
    Pad,
    SpaceItem,
    strftime_items,
)
from ._parse import ParseError, ParseErrorKind
from ._pycivil import *
from ._pycivil import (  # for the docs and pickling
    __all__ as _all_values,
    __version__,
    _unpkl_civil,
    _unpkl_date,
    _unpkl_tdelta,
    _unpkl_time,
)

__all__ = [
    *_all_values,
    # Formatting and parsing
    "FormatError",
    "ParseError",
    "ParseErrorKind",
    "Pad",
    "Numeric",
    "Fixed",
    "Item",
    "LiteralItem",
    "SpaceItem",
    "NumericItem",
    "FixedItem",
    "ErrorItem",
    "strftime_items",
]

# Like the value types, present the engine's public members as
# belonging to the root module.
for _name in __all__[len(_all_values) :]:
    _member = globals()[_name]
    if getattr(_member, "__module__", "").startswith(__name__ + "._"):
        _member.__module__ = __name__

del _name
del _member
