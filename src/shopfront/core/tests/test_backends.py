"""Tests for the email authentication backend."""

from django.contrib.auth import authenticate


class TestEmailBackend:

    def test_authenticates_by_email(self, user):
        assert authenticate(username="shopper@example.com", password="testpass123") == user

    def test_email_match_is_case_insensitive(self, user):
        assert authenticate(username="Shopper@Example.com", password="testpass123") == user

    def test_wrong_password_fails(self, user):
        assert authenticate(username="shopper@example.com", password="nope12345") is None

    def test_unknown_email_fails(self, db):
        assert authenticate(username="ghost@example.com", password="testpass123") is None

    def test_inactive_user_fails(self, user):
        user.is_active = False
        user.save()

        assert authenticate(username="shopper@example.com", password="testpass123") is None
