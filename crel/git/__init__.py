"""Git operations module.

- RepositoryProtocol: the capability the release engine depends on
- Repository: implementation running the git executable

Usage:
    from crel.git import Repository

    repo = Repository.open(Path(".")).unwrap()
    print(repo.head_commit_id().unwrap())
"""

from crel.git.protocol import RepositoryProtocol
from crel.git.repository import GitOperationError, Repository

__all__ = [
    "GitOperationError",
    "Repository",
    "RepositoryProtocol",
]
