from core.services.auth.session import UserSessionContext, UserSessionPrincipal

__all__ = ["UserSessionPrincipal", "UserSessionContext"]
