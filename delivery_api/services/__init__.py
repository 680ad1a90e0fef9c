"""
Delivery Services Module
========================

Services layer untuk delivery order management.
Menggunakan dependency injection pattern untuk service management.
"""

from .base import BaseService, transactional
from .exceptions import *  # noqa: F401,F403
from .exceptions import __all__ as _exception_names

# Access Domain
from .access import AccessPolicy, Actor, Capability, OrderScope

# Auth Domain
from .auth import AuthService, UserService

# Pricing Domain
from .pricing import ServiceTypeService, PricingRuleService, CostCalculator

# Order Domain
from .orders import OrderService

__all__ = [
    # Base Classes
    'BaseService', 'transactional',

    # Access Domain
    'AccessPolicy', 'Actor', 'Capability', 'OrderScope',

    # Auth Domain
    'AuthService', 'UserService',

    # Pricing Domain
    'ServiceTypeService', 'PricingRuleService', 'CostCalculator',

    # Order Domain
    'OrderService',

    # Registry
    'ServiceRegistry', 'create_service_registry',
] + list(_exception_names)


class ServiceRegistry:
    """
    Service Registry untuk dependency injection
    Mengelola lifecycle dan dependencies antar services
    """

    def __init__(self, db_session, config: dict, access_policy: AccessPolicy = None):
        self.db_session = db_session
        self.config = config or {}
        self.access_policy = access_policy or AccessPolicy()
        self._services = {}

        self._init_core_services()
        self._init_domain_services()

    def _init_core_services(self):
        """Initialize core services yang diperlukan services lain"""
        self._services['auth'] = AuthService(
            db_session=self.db_session,
            secret_key=self.config.get('SECRET_KEY', ''),
            algorithm=self.config.get('ALGORITHM', 'HS256'),
            token_expiry_minutes=self.config.get('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24),
            access_policy=self.access_policy,
            config=self.config
        )

        self._services['pricing_rule'] = PricingRuleService(
            db_session=self.db_session,
            access_policy=self.access_policy,
            config=self.config
        )

        self._services['cost_calculator'] = CostCalculator(
            db_session=self.db_session,
            pricing_rule_service=self._services['pricing_rule'],
            access_policy=self.access_policy,
            config=self.config
        )

    def _init_domain_services(self):
        """Initialize domain services"""
        self._services['user'] = UserService(
            db_session=self.db_session,
            access_policy=self.access_policy,
            config=self.config
        )

        self._services['service_type'] = ServiceTypeService(
            db_session=self.db_session,
            access_policy=self.access_policy,
            config=self.config
        )

        self._services['order'] = OrderService(
            db_session=self.db_session,
            cost_calculator=self._services['cost_calculator'],
            access_policy=self.access_policy,
            config=self.config
        )

    # Core service properties
    @property
    def auth_service(self) -> AuthService:
        return self._services['auth']

    @property
    def user_service(self) -> UserService:
        return self._services['user']

    # Pricing service properties
    @property
    def service_type_service(self) -> ServiceTypeService:
        return self._services['service_type']

    @property
    def pricing_rule_service(self) -> PricingRuleService:
        return self._services['pricing_rule']

    @property
    def cost_calculator(self) -> CostCalculator:
        return self._services['cost_calculator']

    # Order service properties
    @property
    def order_service(self) -> OrderService:
        return self._services['order']


def create_service_registry(db_session, config: dict = None, access_policy: AccessPolicy = None) -> ServiceRegistry:
    """Factory function untuk create service registry"""
    return ServiceRegistry(db_session, config or {}, access_policy)
