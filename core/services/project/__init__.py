from core.services.project.collaboration import CollaborationService, InviteNotifier
from core.services.project.service import ProjectService

__all__ = ["ProjectService", "CollaborationService", "InviteNotifier"]
