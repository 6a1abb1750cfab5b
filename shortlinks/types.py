from typing import Any, TypeAlias
from collections.abc import Callable


# Type aliases for Python dictionaries
HandlerEvent: TypeAlias = dict[str, Any]
HandlerContext: TypeAlias = Any
HandlerResponse: TypeAlias = dict[str, Any]
AppConfiguration: TypeAlias = dict[str, Any]
LinkDocument: TypeAlias = dict[str, Any]

# Coarse location provider: returns (latitude, longitude) or None when unavailable
Locator: TypeAlias = Callable[[], tuple[float, float] | None]
