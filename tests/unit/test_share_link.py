"""
Unit-тесты для ссылок на сравнение.
"""
import base64
import json

import pytest

from shared.services.share_link import (
    ShareLinkError, SharedComparisonParams, build_share_url, decode_share_params, encode_share_params,
)


def _token(payload, urlsafe=True, padding=False) -> str:
    raw = json.dumps(payload).encode("utf-8")
    encoded = (base64.urlsafe_b64encode(raw) if urlsafe else base64.b64encode(raw)).decode("ascii")
    return encoded if padding else encoded.rstrip("=")


@pytest.fixture
def params():
    return SharedComparisonParams(
        ccnl1_id="engeb_multisettore",
        level1=2,
        ccnl2_id="ebinter_terziario",
        level2=0,
        num_employees=10,
        months_per_year=13,
        is_part_time=False,
    )


def test_encode_decode_preserves_params(params):
    """Тест: декодирование возвращает исходные параметры."""
    token = encode_share_params(params)

    assert "=" not in token
    assert "+" not in token and "/" not in token
    assert decode_share_params(token) == params


def test_side2_part_time_defaults_to_side1(params):
    """Тест: без isPartTime2 вторая сторона наследует part-time первой."""
    assert params.side2_part_time is False
    assert "isPartTime2" not in params.to_payload()


def test_explicit_side2_part_time_round_trips():
    """Тест: isPartTime2 сохраняется в ссылке."""
    original = SharedComparisonParams("a", 0, "b", 0, 1, 12, False, is_part_time2=True)
    decoded = decode_share_params(encode_share_params(original))

    assert decoded.is_part_time2 is True
    assert decoded.side2_part_time is True


def test_standard_alphabet_with_padding_accepted(params):
    """Тест: принимается стандартный алфавит base64 с padding."""
    token = _token(params.to_payload(), urlsafe=False, padding=True)
    assert decode_share_params(token) == params


@pytest.mark.parametrize("token", ["", "not-base64!!", _token(["a", "b"]), _token("text")])
def test_garbage_rejected(token):
    """Тест: мусорный токен отклоняется."""
    with pytest.raises(ShareLinkError):
        decode_share_params(token)


def test_missing_key_rejected(params):
    """Тест: отсутствующий ключ отклоняется."""
    payload = params.to_payload()
    del payload["monthsPerYear"]
    with pytest.raises(ShareLinkError):
        decode_share_params(_token(payload))


@pytest.mark.parametrize("key, value", [
    ("level1", "2"),
    ("numEmployees", True),
    ("isPartTime", 1),
    ("ccnl1Id", 5),
    ("isPartTime2", "yes"),
])
def test_wrong_types_rejected(params, key, value):
    """Тест строгой проверки типов полей."""
    payload = params.to_payload()
    payload[key] = value
    with pytest.raises(ShareLinkError):
        decode_share_params(_token(payload))


def test_build_share_url():
    """Тест формирования публичной ссылки."""
    assert build_share_url("https://example.it/", "abc-_") == "https://example.it/share?data=abc-_"
