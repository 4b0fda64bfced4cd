class EstateHubError(Exception):
    """Base class for all EstateHub domain exceptions.

    Every custom exception in this module inherits from here so that a
    single ``except EstateHubError`` clause can catch any domain error.
    """

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(detail)


class PropertyNotFoundError(EstateHubError):
    """Raised when a requested property does not exist."""

    def __init__(self, detail: str = "Property not found"):
        super().__init__(detail)


class LeadNotFoundError(EstateHubError):
    """Raised when a requested lead does not exist."""

    def __init__(self, detail: str = "Lead not found"):
        super().__init__(detail)


class SiteVisitNotFoundError(EstateHubError):
    """Raised when a requested site visit does not exist."""

    def __init__(self, detail: str = "Site visit not found"):
        super().__init__(detail)


class InvalidPropertyDataError(EstateHubError):
    """Raised when a property payload lacks the fields a listing needs."""

    def __init__(
        self,
        detail: str = (
            "Missing required fields: title, city, price, and area are required"
        ),
    ):
        super().__init__(detail)


class RecordCreationError(EstateHubError):
    """Raised when the store rejects a new document.

    ``details`` carries the stringified underlying error so the admin
    form can show what the database complained about.
    """

    def __init__(self, detail: str = "Failed to create record", details: str = ""):
        self.details = details
        super().__init__(detail)
