class WorkspaceNotFound(LookupError):
    """No workspace row matched (none configured, or the table is empty)."""

    def __init__(self, workspace_id: str | None = None):
        self.workspace_id = workspace_id
        if workspace_id:
            msg = f"Workspace not found: {workspace_id}"
        else:
            msg = "Workspace not found"
        super().__init__(msg)
