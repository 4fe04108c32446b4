"""
Seed CLI tests.
"""

import pytest

from storefront.config import settings
from storefront.db.dynamo import get_item, get_table, scan_all
from storefront.seed import main
from storefront.services.auth_service import AuthService


class TestSeed:
    def test_categories_and_admin(self, aws) -> None:
        assert main(["--categories", "Home Decor, Wall Art", "--admin-user", "owner", "--admin-password", "pw"]) == 0

        categories = scan_all(get_table(settings.categories_table))
        assert sorted(c["path"] for c in categories) == ["home-decor", "wall-art"]
        assert get_item(get_table(settings.users_table), {"username": "owner"}) is not None
        assert AuthService().verify_password("owner", "pw") is True

    def test_create_tables_is_idempotent(self, aws) -> None:
        assert main(["--create-tables"]) == 0

    def test_admin_password_required(self, aws) -> None:
        with pytest.raises(SystemExit):
            main(["--admin-user", "owner"])

    def test_nothing_to_do(self) -> None:
        with pytest.raises(SystemExit):
            main([])

    def test_over_long_admin_password(self, aws) -> None:
        with pytest.raises(SystemExit):
            main(["--admin-user", "owner", "--admin-password", "x" * 73])
