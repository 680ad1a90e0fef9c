"""
Authentication Service
======================

CRITICAL SERVICE untuk login, JWT access token, dan profile
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from sqlalchemy import select

from ..base import BaseService, transactional
from ..exceptions import AuthenticationError, ValidationError
from ..access import Actor
from .passwords import hash_password, verify_password
from ...models import User, utcnow
from ...schemas import UserSchema, LoginResponseSchema, PasswordChangeSchema


class AuthService(BaseService):
    """CRITICAL SERVICE untuk Authentication"""

    def __init__(self, db_session, secret_key: str, algorithm: str = 'HS256',
                 token_expiry_minutes: int = 60 * 24, access_policy=None, config=None):
        super().__init__(db_session, access_policy, config)
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_expiry_minutes = token_expiry_minutes

    @transactional
    async def authenticate_user(self, username: str, password: str) -> Dict[str, Any]:
        """Authenticate user dan return access token"""
        result = await self.db_session.execute(select(User).filter(User.username == username))
        user = result.scalars().first()

        # pesan sama untuk semua kegagalan supaya username tidak bocor
        if not user or not user.is_active or not verify_password(password, user.password_hash):
            self.logger.warning(f"Failed login attempt for username '{username}'")
            raise AuthenticationError("Invalid credentials")

        user.last_login = utcnow()
        await self.db_session.flush()

        self.logger.info(f"User '{user.username}' logged in")
        return LoginResponseSchema(
            access_token=self.generate_access_token(user),
            expires_in=self.token_expiry_minutes * 60,
            user=UserSchema.model_validate(user),
        ).model_dump()

    def generate_access_token(self, user: User) -> str:
        """Generate JWT access token"""
        now = datetime.now(timezone.utc)
        payload = {
            'user_id': user.id,
            'role': user.role,
            'type': 'access',
            'iat': now,
            'exp': now + timedelta(minutes=self.token_expiry_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    async def verify_access_token(self, access_token: str) -> Actor:
        """Verify access token dan return actor yang masih aktif"""
        try:
            payload = jwt.decode(access_token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Access token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid access token")

        if payload.get('type') != 'access' or not isinstance(payload.get('user_id'), int):
            raise AuthenticationError("Invalid token type")

        user = await self.db_session.get(User, payload['user_id'])
        if not user or not user.is_active:
            raise AuthenticationError("Invalid or inactive user")

        # role selalu dibaca dari database, bukan dari token
        return Actor.from_user(user)

    async def get_profile(self, actor: Actor) -> Dict[str, Any]:
        user = await self._get_active_user(actor)
        return self._serialize(UserSchema, user)

    @transactional
    async def change_password(self, actor: Actor, current_password: str, new_password: str) -> bool:
        """Ganti password user sendiri; hash dibuat eksplisit di sini"""
        validated = self._validate_input(PasswordChangeSchema, {
            'current_password': current_password,
            'new_password': new_password,
        })
        user = await self._get_active_user(actor)

        if not verify_password(validated['current_password'], user.password_hash):
            raise ValidationError("Current password is incorrect", field='current_password')

        user.password_hash = hash_password(validated['new_password'])
        await self.db_session.flush()

        self.logger.info(f"User '{user.username}' changed password")
        return True

    async def _get_active_user(self, actor: Actor) -> User:
        if actor is None or not actor.is_active:
            raise AuthenticationError("Authentication required")
        user = await self.db_session.get(User, actor.user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid or inactive user")
        return user
