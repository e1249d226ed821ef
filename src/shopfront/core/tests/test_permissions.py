"""Tests for the shared ownership check."""

import uuid

import pytest
from django.contrib.auth.models import AnonymousUser

from shopfront.core.exceptions import AuthorizationError
from shopfront.core.permissions import check_owner, is_owner


class TestOwnershipCheck:

    def test_owner_passes(self, user):
        check_owner(user.pk, user, "order")

    def test_string_and_uuid_ids_compare_equal(self, user):
        assert is_owner(str(user.pk), user)

    def test_other_user_is_rejected(self, user, other_user):
        with pytest.raises(AuthorizationError) as excinfo:
            check_owner(user.pk, other_user, "order")

        assert "order" in excinfo.value.message

    def test_anonymous_user_is_never_owner(self):
        assert not is_owner(uuid.uuid4(), AnonymousUser())
        assert not is_owner(uuid.uuid4(), None)
