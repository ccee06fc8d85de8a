class WaypointException(Exception):
    """Base exception for Waypoint routing."""
    status_code = 500  # Default status code
    message: str

    def __init__(self, message: str | None = None, *args):
        super().__init__(message, *args)
        # Prefer the explicit message, then the first extra arg, then the class name
        if message is not None:
            self.message = message
        elif args and args[0]:
            self.message = str(args[0])
        else:
            self.message = self.__class__.__name__


class RouteNotFoundException(WaypointException):
    """Raised when no registered route matches the method and path (404)."""
    status_code = 404

    def __init__(self, message: str = "Page not found", method: str = "", path: str = ""):
        super().__init__(message)
        self.method = method
        self.path = path


class HandlerUnresolvableException(WaypointException):
    """Raised when a controller class or method cannot be resolved (500)."""
    status_code = 500

    def __init__(self, message: str = "Internal Server Error", reference: str = ""):
        super().__init__(message)
        self.reference = reference


class WaypointConfigError(WaypointException):
    """Raised when configuration cannot be loaded or an import string fails."""
    pass
