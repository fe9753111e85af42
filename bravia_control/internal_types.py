# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Type hints used internally by this package"""

from __future__ import annotations

from typing import (
    Dict, List, Optional, Union, Any, TypeVar, Tuple, overload,
    Callable, Awaitable, Iterable, Iterator, AsyncIterator, AsyncIterable,
    Mapping, MutableMapping, Sequence, Generic, Type, TYPE_CHECKING,
    AsyncContextManager, NoReturn, Set,
  )

from typing_extensions import Self, TypeAlias

from types import TracebackType

Jsonable = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]
"""A type hint for a simple JSON-serializable value; i.e., str, int, float, bool, None, Dict[str, Jsonable], List[Jsonable]"""

JsonableDict = Dict[str, Jsonable]
"""A type hint for a simple JSON-serializable dict; i.e., Dict[str, Jsonable]"""

HostAndPort = Tuple[str, int]
"""A type hint for a (host, port) tuple as used by socket addresses"""

__all__ = [
    'Dict', 'List', 'Optional', 'Union', 'Any', 'TypeVar', 'Tuple', 'overload',
    'Callable', 'Awaitable', 'Iterable', 'Iterator', 'AsyncIterator', 'AsyncIterable',
    'Mapping', 'MutableMapping', 'Sequence', 'Generic', 'Type', 'TYPE_CHECKING',
    'AsyncContextManager', 'NoReturn', 'Set',
    'Self', 'TypeAlias', 'TracebackType',
    'Jsonable', 'JsonableDict', 'HostAndPort',
  ]
