"""Tests for request signing."""

import hashlib
import hmac
from decimal import Decimal

import pytest

from daraz_relay.models.signer import SigningError, canonical_string, sign, stringify

PATH = "/orders/get"
PARAMS = {
    "app_key": "100200",
    "timestamp": "1700000000000",
    "sign_method": "sha256",
    "access_token": "TOKEN",
    "status": "pending",
}


def test_canonical_string_sorts_keys_and_concatenates_without_separators():
    assert canonical_string(PATH, PARAMS) == (
        "/orders/get"
        "access_tokenTOKEN"
        "app_key100200"
        "sign_methodsha256"
        "statuspending"
        "timestamp1700000000000"
    )


def test_canonical_string_ignores_insertion_order():
    reordered = dict(reversed(list(PARAMS.items())))
    assert canonical_string(PATH, reordered) == canonical_string(PATH, PARAMS)


def test_canonical_string_uses_bytewise_key_order():
    assert canonical_string("/p", {"a": "1", "B": "2", "_": "3"}) == "/pB2_3a1"


def test_sign_is_uppercase_hmac_sha256_of_canonical_string():
    expected = hmac.new(
        b"secret",
        canonical_string(PATH, PARAMS).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest().upper()

    signature = sign(PATH, PARAMS, "secret")

    assert signature == expected
    assert len(signature) == 64
    assert signature == signature.upper()


def test_sign_is_deterministic():
    assert sign(PATH, PARAMS, "secret") == sign(PATH, dict(PARAMS), "secret")


def test_sign_changes_with_any_value_path_or_secret():
    base = sign(PATH, PARAMS, "secret")

    assert sign(PATH, {**PARAMS, "status": "delivered"}, "secret") != base
    assert sign("/orders/items/get", PARAMS, "secret") != base
    assert sign(PATH, PARAMS, "other-secret") != base


def test_sign_distinguishes_empty_value_from_absent_key():
    with_empty = {**PARAMS, "created_after": ""}
    assert sign(PATH, with_empty, "secret") != sign(PATH, PARAMS, "secret")


def test_sign_covers_body_pseudo_parameter():
    body = {**PARAMS, "readyToShipReq": '{"packages":[{"package_id":"FP1"}]}'}
    assert sign("/order/package/rts", body, "secret") != sign("/order/package/rts", PARAMS, "secret")


@pytest.mark.parametrize("value, expected", [
    ("abc", "abc"),
    (50, "50"),
    (True, "true"),
    (False, "false"),
    (2.0, "2"),
    (2.5, "2.5"),
    (Decimal("10.50"), "10.50"),
])
def test_stringify(value, expected):
    assert stringify(value) == expected


@pytest.mark.parametrize("value", [None, ["a"], {"a": 1}, object()])
def test_stringify_rejects_unsupported_types(value):
    with pytest.raises(SigningError):
        stringify(value)


def test_sign_rejects_unsupported_value():
    with pytest.raises(SigningError):
        sign(PATH, {**PARAMS, "status": None}, "secret")
