"""
Secret parameter map.

Secret values resolved for a model descriptor are held as
:class:`pydantic.SecretStr` so that accidental ``repr``/logging of the map or
its values never exposes clear text. Only :meth:`SecretParameterMap.get_secret`
reveals a value, at the exact point an adapter needs it.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Union

from pydantic import SecretStr


class SecretParameterMap(Mapping[str, SecretStr]):
    """Read-only mapping of parameter name to secret string."""

    def __init__(self, values: Optional[Mapping[str, Union[str, SecretStr]]] = None) -> None:
        self._values: Dict[str, SecretStr] = {}
        for key, value in (values or {}).items():
            if value is None:
                continue
            self._values[key] = value if isinstance(value, SecretStr) else SecretStr(str(value))

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "SecretParameterMap":
        """Build a map from a descriptor's plain parameter mapping."""
        return cls({k: v if isinstance(v, (str, SecretStr)) else str(v) for k, v in params.items() if v is not None})

    def __getitem__(self, key: str) -> SecretStr:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SecretParameterMap({{{', '.join(repr(k) + ': ***' for k in self._values)}}})"

    def get_secret(self, key: str) -> Optional[str]:
        """Return the clear-text value for ``key`` or ``None`` when absent."""
        value = self._values.get(key)
        return value.get_secret_value() if value is not None else None

    def first_present(self, *keys: str) -> Optional[str]:
        """Return the clear-text value of the first key that is present."""
        for key in keys:
            if key in self._values:
                return self._values[key].get_secret_value()
        return None


__all__ = ["SecretParameterMap"]
