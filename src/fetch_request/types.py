"""
Core type definitions for fetch-request.
"""
from typing import IO, Dict, Iterable, List, Tuple, Union

# Anything accepted by RequestBuilder.payload()
PayloadSource = Union[bytes, bytearray, str, IO[bytes], Iterable[bytes]]

# Query state: key -> values, insertion ordered
QueryValues = Dict[str, List[str]]

# (username, password) embedded in the URL
UserInfo = Tuple[str, str]
