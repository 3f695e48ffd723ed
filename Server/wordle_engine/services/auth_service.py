"""
Authentication Service

Decodes the optional caller identity token. Registration, login and token
issuance belong to the user service; this service only verifies JWTs signed
with the shared secret.
"""

from typing import Any, Dict, Optional

import jwt


class AuthService:
    """
    Verifies HS256 bearer tokens issued by the user service.
    """

    def __init__(self, jwt_secret: str, algorithms=("HS256",)):
        """
        Args:
            jwt_secret: Secret key shared with the token issuer
            algorithms: Accepted signing algorithms
        """
        self.jwt_secret = jwt_secret
        self.algorithms = list(algorithms)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string

        Returns:
            Dictionary with success status and user data or error
        """
        if not token:
            return {"success": False, "error": "Token is required"}

        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=self.algorithms)
        except jwt.ExpiredSignatureError:
            return {"success": False, "error": "Token has expired"}
        except jwt.InvalidTokenError:
            return {"success": False, "error": "Invalid token"}

        # The user service signs `userId`; older tokens carry `user_id`
        user_id = payload.get("userId") or payload.get("user_id")
        if not user_id:
            return {"success": False, "error": "Invalid token payload"}

        return {
            "success": True,
            "user": {
                "id": str(user_id),
                "username": payload.get("username")
            }
        }


# Global service instance
_auth_service = None


def get_auth_service() -> Optional[AuthService]:
    """Get the global auth service instance."""
    return _auth_service


def initialize_auth_service(jwt_secret: Optional[str]) -> Optional[AuthService]:
    """Initialize the global auth service instance. Without a secret every caller is a guest."""
    global _auth_service
    _auth_service = AuthService(jwt_secret) if jwt_secret else None
    return _auth_service
