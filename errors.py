class TaskMasterError(Exception):
    """Base error. Carries the message shown to the user and an HTTP status."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"message": self.message}


class ValidationError(TaskMasterError):
    status_code = 400


class ConflictError(TaskMasterError):
    status_code = 409


class AuthenticationError(TaskMasterError):
    status_code = 401


class NetworkError(TaskMasterError):
    # Raised client side when the request never got a response
    status_code = None
