"""
User Service
============

Service untuk User management (admin only)
"""

from typing import Any, Dict, Optional

from sqlalchemy import select, func, or_

from ..base import BaseService, transactional
from ..exceptions import ConflictError, ValidationError
from ..access import Actor, Capability
from .passwords import hash_password
from ...models import User, UserRole, Order
from ...schemas import UserSchema, UserCreateSchema, UserUpdateSchema


class UserService(BaseService):
    """Service untuk User management"""

    async def list_users(self, actor: Actor, role: Optional[str] = None, search: Optional[str] = None,
                         page: int = 1, limit: int = None) -> Dict[str, Any]:
        """Get users dengan pagination dan filtering"""
        self.access_policy.require(actor, Capability.USER_MANAGE)

        query = select(User)
        if role:
            if role not in UserRole.values():
                raise ValidationError("Invalid role", field='role')
            query = query.filter(User.role == role)
        query = self._apply_search(query, search, [User.full_name, User.username, User.email])
        query = self._apply_sorting(query, User, 'created_at', 'desc')

        result = await self._paginate_query(query, page, limit)
        return {
            'items': [self._serialize(UserSchema, user) for user in result['items']],
            'pagination': result['pagination']
        }

    async def get_user(self, user_id: int, actor: Actor) -> Dict[str, Any]:
        self.access_policy.require(actor, Capability.USER_MANAGE)
        user = await self._get_or_404(User, user_id)
        return self._serialize(UserSchema, user)

    @transactional
    async def create_user(self, data, actor: Actor) -> Dict[str, Any]:
        """Create user; password di-hash eksplisit sebelum persist"""
        self.access_policy.require(actor, Capability.USER_MANAGE)
        validated = self._validate_input(UserCreateSchema, data)
        return self._serialize(UserSchema, await self._insert_user(validated))

    async def bootstrap_admin(self, data) -> Dict[str, Any]:
        """Create admin pertama dari CLI, tanpa actor"""
        validated = self._validate_input(UserCreateSchema, {**dict(data), 'role': UserRole.ADMIN.value})
        try:
            user = await self._insert_user(validated)
            await self.db_session.commit()
        except Exception:
            await self.db_session.rollback()
            raise
        return self._serialize(UserSchema, user)

    @transactional
    async def update_user(self, user_id: int, data, actor: Actor) -> Dict[str, Any]:
        self.access_policy.require(actor, Capability.USER_MANAGE)
        validated = self._validate_input(UserUpdateSchema, data, exclude_unset=True)

        user = await self._get_or_404(User, user_id, for_update=True)
        for key, value in validated.items():
            if value is None and key != 'phone':
                continue
            setattr(user, key, value.value if isinstance(value, UserRole) else value)

        await self.db_session.flush()
        return self._serialize(UserSchema, user)

    @transactional
    async def delete_user(self, user_id: int, actor: Actor) -> bool:
        self.access_policy.require(actor, Capability.USER_MANAGE)
        if user_id == actor.user_id:
            raise ValidationError("Cannot delete your own account")

        user = await self._get_or_404(User, user_id, for_update=True)

        result = await self.db_session.execute(
            select(func.count(Order.id)).filter(
                or_(Order.created_by == user.id, Order.assigned_shipper_id == user.id)
            )
        )
        if (result.scalar() or 0) > 0:
            raise ConflictError("Cannot delete a user who owns orders; deactivate the account instead", 'User')

        await self.db_session.delete(user)
        self.logger.info(f"User '{user.username}' deleted by user {actor.user_id}")
        return True

    @transactional
    async def toggle_status(self, user_id: int, actor: Actor) -> Dict[str, Any]:
        self.access_policy.require(actor, Capability.USER_MANAGE)
        if user_id == actor.user_id:
            raise ValidationError("Cannot deactivate your own account")

        user = await self._get_or_404(User, user_id, for_update=True)
        user.is_active = not user.is_active
        await self.db_session.flush()

        self.logger.info(f"User '{user.username}' {'activated' if user.is_active else 'deactivated'}")
        return self._serialize(UserSchema, user)

    async def _insert_user(self, validated: Dict[str, Any]) -> User:
        await self._validate_unique_field(User, 'username', validated['username'],
                                          error_message="Username or email already exists")
        await self._validate_unique_field(User, 'email', validated['email'],
                                          error_message="Username or email already exists")

        password = validated.pop('password')
        validated['role'] = UserRole(validated['role']).value
        user = User(**validated, password_hash=hash_password(password))

        self.db_session.add(user)
        await self.db_session.flush()

        self.logger.info(f"User '{user.username}' created with role {user.role}")
        return user
