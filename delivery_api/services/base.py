"""
Base Service Classes
====================

Base classes dan utilities untuk semua services
"""

import logging
import math
from abc import ABC
from functools import wraps
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def transactional(func):
    """Decorator untuk automatic transaction management"""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            result = await func(self, *args, **kwargs)
            await self.db_session.commit()
            return result
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.error(f"Integrity violation in {func.__name__}: {e.orig}")
            raise ConflictError("Conflicting write detected, please retry") from e
        except Exception as e:
            await self.db_session.rollback()
            logger.error(f"Transaction failed in {func.__name__}: {str(e)}")
            raise
    return wrapper


class BaseService(ABC):
    """Base service class dengan common functionality"""

    def __init__(self, db_session: AsyncSession, access_policy=None, config: Optional[Dict[str, Any]] = None):
        self.db_session = db_session
        self.access_policy = access_policy
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _get_or_404(self, model_class, entity_id: int, for_update: bool = False):
        """Get entity by ID or raise 404 error"""
        query = select(model_class).filter(model_class.id == entity_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db_session.execute(query)
        entity = result.scalars().first()
        if not entity:
            raise NotFoundError(model_class.__name__, entity_id)
        return entity

    async def _validate_unique_field(self, model_class, field_name: str, field_value: Any,
                                     exclude_id: int = None, error_message: str = None):
        """Validate that field value is unique"""
        query = select(model_class.id).filter(getattr(model_class, field_name) == field_value)
        if exclude_id:
            query = query.filter(model_class.id != exclude_id)

        result = await self.db_session.execute(query)
        if result.first():
            message = error_message or f"{field_name} '{field_value}' already exists"
            raise ConflictError(message, model_class.__name__)

    async def _count(self, query) -> int:
        result = await self.db_session.execute(
            select(func.count()).select_from(query.subquery())
        )
        return result.scalar() or 0

    def _page_limit(self, page: int, limit: Optional[int]) -> tuple:
        default_limit = self.config.get('DEFAULT_PAGE_SIZE', 10)
        max_limit = self.config.get('MAX_PAGE_SIZE', 100)
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or default_limit), 1), max_limit)
        return page, limit

    async def _paginate_query(self, query, page: int = 1, limit: int = None):
        """Paginate query results"""
        page, limit = self._page_limit(page, limit)

        total = await self._count(query)
        pages = math.ceil(total / limit) if total else 0

        offset = (page - 1) * limit
        items_result = await self.db_session.execute(query.offset(offset).limit(limit))
        items = items_result.scalars().all()

        return {
            'items': items,
            'pagination': {
                'total': total,
                'page': page,
                'limit': limit,
                'pages': pages
            }
        }

    def _apply_search(self, query, search_term: Optional[str], search_columns: List):
        """Case-insensitive substring search over beberapa kolom"""
        if not search_term or not search_columns:
            return query

        term = search_term.lower()
        conditions = [
            func.lower(column).contains(term, autoescape=True)
            for column in search_columns
        ]
        return query.filter(or_(*conditions))

    def _apply_sorting(self, query, model_class, sort_by: str, sort_order: str = 'asc'):
        """Apply sorting; id dipakai sebagai tie-breaker supaya urutan stabil"""
        field_attr = getattr(model_class, sort_by)
        if sort_order.lower() == 'desc':
            return query.order_by(field_attr.desc(), model_class.id.desc())
        return query.order_by(field_attr.asc(), model_class.id.asc())

    def _validate_input(self, schema, data, exclude_unset: bool = False) -> Dict[str, Any]:
        """Validate dict atau schema instance, hasilnya dict"""
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=exclude_unset)
        try:
            validated = schema.model_validate(data or {})
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in err['loc']) or 'body'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ValidationError("Validation failed", errors=errors) from e
        return validated.model_dump(exclude_unset=exclude_unset)

    def _serialize(self, schema, entity) -> Dict[str, Any]:
        return schema.model_validate(entity).model_dump()
