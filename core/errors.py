class JobError(Exception):
    pass


class ValidationError(JobError):
    pass


class DirectoryError(JobError):
    pass


class ToolUnavailableError(JobError):
    def __init__(self, tool: str, reason: str):
        super().__init__(f"{tool} {reason}")
        self.tool = tool
        self.reason = reason


class LaunchError(JobError):
    pass


class JobBusyError(JobError):
    pass
