"""
Projects module exceptions.
"""

from shared.exceptions import NotFoundError


class ProjectNotFoundError(NotFoundError):
    """
    Raised when a project doesn't exist or isn't owned by the caller.

    The two cases share one error so callers can't probe for other
    providers' projects.
    """

    def __init__(self, project_id: str):
        super().__init__(
            "Project not found",
            code="PROJECT_NOT_FOUND",
            details={"project_id": project_id},
        )
