# tests/test_validation.py

import pytest

from validation import PASSWORD_RULES, check_registration_form, first_failure


@pytest.mark.parametrize('password, message', [
    ('Ab', 'Password is too short (minimum 4 characters)'),
    ('1234', 'Password must contain both uppercase and lowercase letters'),
    ('abcd', 'Password must contain at least one uppercase letter'),
    ('ABCD', 'Password must contain at least one lowercase letter'),
    ('AbCd', None),
])
def test_password_rules_in_order(password, message):
    assert first_failure(PASSWORD_RULES, password) == message


def test_form_checks_username_before_passwords():
    assert check_registration_form('ab', 'x', 'y') == 'Username must be at least 3 characters long'


def test_form_checks_confirmation_before_length():
    assert check_registration_form('alice', 'ab', 'abc') == 'Passwords do not match'


def test_form_passes_valid_input():
    assert check_registration_form('alice', 'Secret1x', 'Secret1x') is None
