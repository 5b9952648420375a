from unittest.mock import MagicMock

from modules.auth.interfaces import IActivityRepository, IAuthService, IPrincipalRepository
from modules.auth.repository import AccountRepository, ActivityRepository, UserRepository
from modules.auth.service import AuthService


class TestAuthInterface:
    def test_interface_methods_exist(self):
        """IAuthService should define required methods."""
        methods = [
            "login",
            "register_user",
            "create_account",
            "get_account",
            "get_user",
            "validate_access_token",
        ]
        for method in methods:
            assert hasattr(IAuthService, method)

    def test_auth_service_has_interface_methods(self):
        """AuthService should have all IAuthService methods."""
        methods = [
            "login",
            "register_user",
            "create_account",
            "get_account",
            "get_user",
            "validate_access_token",
        ]
        for method in methods:
            assert hasattr(AuthService, method)
            assert callable(getattr(AuthService, method))

    def test_service_instance_satisfies_protocol(self, signer, issuer):
        service = AuthService(MagicMock(), MagicMock(), MagicMock(), signer, issuer)
        assert isinstance(service, IAuthService)


class TestRepositoryInterfaces:
    def test_principal_repositories_share_one_contract(self):
        """Both principal tables satisfy the same lookup/create protocol."""
        db = MagicMock()
        assert isinstance(AccountRepository(db), IPrincipalRepository)
        assert isinstance(UserRepository(db), IPrincipalRepository)

    def test_activity_repository(self):
        assert isinstance(ActivityRepository(MagicMock()), IActivityRepository)
