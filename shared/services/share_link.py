"""Кодирование параметров сравнения в ссылку для публикации."""

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Optional, Dict, Any
from urllib.parse import quote


class ShareLinkError(ValueError):
    """Ссылка не декодируется в параметры сравнения."""


@dataclass(frozen=True)
class SharedComparisonParams:
    """Параметры сравнения, передаваемые в ссылке."""
    ccnl1_id: str
    level1: int
    ccnl2_id: str
    level2: int
    num_employees: int
    months_per_year: int
    is_part_time: bool
    is_part_time2: Optional[bool] = None

    @property
    def side2_part_time(self) -> bool:
        """Part-time второй стороны; по умолчанию как у первой."""
        return self.is_part_time if self.is_part_time2 is None else self.is_part_time2

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "ccnl1Id": self.ccnl1_id,
            "level1": self.level1,
            "ccnl2Id": self.ccnl2_id,
            "level2": self.level2,
            "numEmployees": self.num_employees,
            "monthsPerYear": self.months_per_year,
            "isPartTime": self.is_part_time,
        }
        if self.is_part_time2 is not None:
            payload["isPartTime2"] = self.is_part_time2
        return payload


# Ключ JSON -> (атрибут, тип)
_FIELDS = {
    "ccnl1Id": ("ccnl1_id", str),
    "level1": ("level1", int),
    "ccnl2Id": ("ccnl2_id", str),
    "level2": ("level2", int),
    "numEmployees": ("num_employees", int),
    "monthsPerYear": ("months_per_year", int),
    "isPartTime": ("is_part_time", bool),
}


def _has_type(value: Any, expected: type) -> bool:
    # bool является подклассом int в Python
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def encode_share_params(params: SharedComparisonParams) -> str:
    """Кодирует параметры в base64url без padding."""
    raw = json.dumps(params.to_payload(), separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_share_params(token: str) -> SharedComparisonParams:
    """
    Декодирует параметры сравнения из токена.

    Принимает стандартный и url-safe алфавит base64, с padding и без.

    Raises:
        ShareLinkError: Токен не декодируется, нет обязательного ключа или неверный тип
    """
    if not token or not isinstance(token, str):
        raise ShareLinkError("Empty share token")

    normalized = token.strip().replace("+", "-").replace("/", "_").rstrip("=")
    normalized += "=" * (-len(normalized) % 4)
    try:
        raw = base64.urlsafe_b64decode(normalized.encode("ascii"))
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise ShareLinkError(f"Undecodable share token: {e}") from e

    if not isinstance(payload, dict):
        raise ShareLinkError("Share token payload must be an object")

    values = {}
    for key, (attr, expected) in _FIELDS.items():
        if key not in payload:
            raise ShareLinkError(f"Missing key '{key}' in share token")
        if not _has_type(payload[key], expected):
            raise ShareLinkError(f"Key '{key}' has invalid type")
        values[attr] = payload[key]

    is_part_time2 = payload.get("isPartTime2")
    if is_part_time2 is not None and not isinstance(is_part_time2, bool):
        raise ShareLinkError("Key 'isPartTime2' has invalid type")

    return SharedComparisonParams(is_part_time2=is_part_time2, **values)


def build_share_url(base_url: str, token: str) -> str:
    """Публичная ссылка на сравнение."""
    return f"{base_url.rstrip('/')}/share?data={quote(token)}"
