from lessoncart.domain.checkout.validators import is_checkout_enabled, is_name_valid, is_phone_valid
from lessoncart.domain.lessons.entities import Checkout


def test_name_validation() -> None:
    assert is_name_valid("Jane Doe") is True
    assert is_name_valid("Jane2") is False
    assert is_name_valid("") is False
    assert is_name_valid("O'Brien") is False
    assert is_name_valid(None) is False


def test_phone_validation() -> None:
    assert is_phone_valid("07123456789") is True
    assert is_phone_valid("07-123") is False
    assert is_phone_valid("") is False
    assert is_phone_valid("+447123") is False
    assert is_phone_valid("0712\n") is False


def test_checkout_requires_valid_form_and_cart() -> None:
    good = Checkout(name="Jane Doe", phone="0712345")
    assert is_checkout_enabled(good, ["entry"]) is True
    assert is_checkout_enabled(good, []) is False
    assert is_checkout_enabled(Checkout(name="Jane", phone="abc"), ["entry"]) is False
    assert is_checkout_enabled(Checkout(name="", phone="0712"), ["entry"]) is False
