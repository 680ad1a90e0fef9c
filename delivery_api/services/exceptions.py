"""
Custom Exceptions untuk Delivery Services
=========================================

Definisi semua custom exceptions yang digunakan dalam business logic.
App factory memetakan setiap jenis ke HTTP status dan response envelope.
"""


class DeliveryError(Exception):
    """Base exception untuk semua delivery errors"""
    def __init__(self, message, error_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self):
        data = {
            'success': False,
            'message': self.message,
            'error_code': self.error_code
        }
        if self.details:
            data['details'] = self.details
        return data


class ValidationError(DeliveryError):
    """Error untuk input yang malformed, missing, atau out-of-range"""
    def __init__(self, message, field=None, errors=None, details=None):
        super().__init__(message, 'VALIDATION_ERROR', details)
        self.field = field
        self.errors = list(errors) if errors else [message]

    def to_dict(self):
        data = super().to_dict()
        data['errors'] = self.errors
        return data


class ConflictError(DeliveryError):
    """Error untuk operasi yang ditolak karena state (order non-pending, resource masih direferensikan)"""
    def __init__(self, message, resource_type=None, details=None):
        super().__init__(message, 'CONFLICT_ERROR', details)
        self.resource_type = resource_type


class RangeOverlapError(ValidationError, ConflictError):
    """Weight range pricing rule overlap dengan rule aktif lain"""
    def __init__(self, weight_from, weight_to, conflicting_rule_id=None, details=None):
        message = "Weight range overlaps with existing pricing rule"
        DeliveryError.__init__(self, message, 'RANGE_OVERLAP', details)
        self.field = 'weight_from'
        self.errors = [message]
        self.resource_type = 'PricingRule'
        self.weight_from = weight_from
        self.weight_to = weight_to
        self.conflicting_rule_id = conflicting_rule_id


class NotFoundError(DeliveryError):
    """
    Error ketika resource tidak ditemukan.

    Dipakai juga untuk resource yang ada tapi tidak visible bagi actor,
    supaya keberadaannya tidak bocor.
    """
    def __init__(self, resource_type, resource_id=None, message=None, details=None):
        if message is None:
            message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message, 'NOT_FOUND', details)
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(DeliveryError):
    """Error untuk credential yang missing, invalid, atau expired"""
    def __init__(self, message="Authentication failed", details=None):
        super().__init__(message, 'AUTHENTICATION_ERROR', details)


class AuthorizationError(DeliveryError):
    """Error untuk actor yang authenticated tapi role-nya tidak cukup"""
    def __init__(self, message="Insufficient permissions", required_capability=None, details=None):
        super().__init__(message, 'AUTHORIZATION_ERROR', details)
        self.required_capability = required_capability


AuthError = AuthenticationError
ForbiddenError = AuthorizationError

__all__ = [
    'DeliveryError', 'ValidationError', 'ConflictError', 'RangeOverlapError',
    'NotFoundError', 'AuthenticationError', 'AuthorizationError',
    'AuthError', 'ForbiddenError',
]
