from anecdotes.services.auth import CredentialManager, RevokeInstruction, UserIdentity, UserSummary
from anecdotes.services.posts import Decision, PostAuthorizer, PostService

__all__ = [
    "CredentialManager",
    "Decision",
    "PostAuthorizer",
    "PostService",
    "RevokeInstruction",
    "UserIdentity",
    "UserSummary",
]
