"""
API Response Models
===================

Standardized API response envelope.
"""

from typing import Any, Dict, List, Optional


class APIResponse:
    """Standard API response format"""

    @staticmethod
    def success(data=None, message="Success"):
        return {
            "success": True,
            "message": message,
            "data": data
        }

    @staticmethod
    def error(message="Error", errors: Optional[List[str]] = None, error_code=None):
        body = {
            "success": False,
            "message": message,
            "error_code": error_code
        }
        if errors:
            body["errors"] = errors
        return body

    @staticmethod
    def paginated(result: Dict[str, Any], message="Success"):
        """`result` adalah output service: {'items': [...], 'pagination': {...}}"""
        return {
            "success": True,
            "message": message,
            "data": {
                "items": result['items'],
                "pagination": result['pagination']
            }
        }
