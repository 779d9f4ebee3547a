"""
Exception hierarchy for the Dynu updater
"""


class DynuUpdaterError(Exception):
    """Base class for every error reported by dynupdater"""


class ConfigurationError(DynuUpdaterError):
    """Required configuration (e.g. the API key) is missing"""


class NotFoundError(DynuUpdaterError):
    """An entity that had to exist could not be found"""


class DomainNotFoundError(NotFoundError):
    def __init__(self, domain_name: str):
        self.domain_name = domain_name
        super().__init__(f"domain={domain_name} cannot be found in dynu")


class RecordNotFoundError(NotFoundError):
    def __init__(self, domain_name: str, node_name: str):
        self.domain_name = domain_name
        self.node_name = node_name
        super().__init__(
            f"TXT record node_name={node_name} cannot be found in domain={domain_name}"
        )


class DynuClientError(DynuUpdaterError):
    """A request to the Dynu API did not complete successfully"""

    def __init__(self, method: str, url: str, message: str):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url}: {message}")


class DynuTransportError(DynuClientError):
    """The request could not be sent or the response could not be read"""


class DynuRequestError(DynuClientError):
    """Dynu answered with a non-success status"""

    def __init__(self, method: str, url: str, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(method, url, f"status_code={status}, body={body}")


class MissingIdentityError(ValueError):
    """An identity-bearing operation was attempted on an entity without an id"""
