from os import PathLike
from typing import Callable, Sequence, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

# Called by a listing transport with the requested path and the entries found beneath it
ListingCallback = Callable[[str, Sequence[str]], None]

# Called by a listing transport with the requested path and the failure that occurred
ErrorCallback = Callable[[str, Exception], None]
