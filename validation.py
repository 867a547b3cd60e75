"""Validation rules for user input.

Each rule set is an ordered list of ``(predicate, message)`` pairs. Rules are
evaluated in order and the first failing predicate decides the error message,
so the precedence is always length, then match, then complexity.
"""
import re

EMAIL_PATTERN = re.compile(r'.+@.+\..+')

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 4


def has_uppercase(value):
    return bool(re.search(r'[A-Z]', value))


def has_lowercase(value):
    return bool(re.search(r'[a-z]', value))


USERNAME_RULES = [
    (lambda v: len(v) >= USERNAME_MIN_LENGTH,
     f"Username must be at least {USERNAME_MIN_LENGTH} characters long"),
]

EMAIL_RULES = [
    (lambda v: bool(EMAIL_PATTERN.fullmatch(v)), "Please fill a valid email address"),
]

PASSWORD_RULES = [
    (lambda v: len(v) >= PASSWORD_MIN_LENGTH,
     f"Password is too short (minimum {PASSWORD_MIN_LENGTH} characters)"),
    (lambda v: has_uppercase(v) or has_lowercase(v),
     "Password must contain both uppercase and lowercase letters"),
    (has_uppercase, "Password must contain at least one uppercase letter"),
    (has_lowercase, "Password must contain at least one lowercase letter"),
]


def first_failure(rules, value):
    """Return the message of the first rule ``value`` fails, or None."""
    for predicate, message in rules:
        if not predicate(value):
            return message
    return None


def registration_rules(username, password, confirm_password):
    """Rules checked by the register form before anything is sent.

    The confirmation check sits between the username and password checks,
    matching the order in which the form reports problems.
    """
    return [
        (lambda: first_failure(USERNAME_RULES, username) is None,
         first_failure(USERNAME_RULES, username)),
        (lambda: password == confirm_password, "Passwords do not match"),
        (lambda: first_failure(PASSWORD_RULES, password) is None,
         first_failure(PASSWORD_RULES, password)),
    ]


def check_registration_form(username, password, confirm_password):
    for predicate, message in registration_rules(username, password, confirm_password):
        if not predicate():
            return message
    return None
