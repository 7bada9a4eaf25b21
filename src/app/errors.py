"""
Infrastructure failures raised below the use-case layer.

Domain failures travel as Result errors; these exceptions cover the cases
where the store or the transport misbehaved and the request cannot be served.
"""


class InfrastructureError(Exception):
    """Store timeout or unexpected backend failure, fatal to one request"""

    code = "INFRASTRUCTURE_FAILURE"


class StoreTimeoutError(InfrastructureError):
    """A store call exceeded its deadline"""


class ClientAddressError(InfrastructureError):
    """The peer address of a request could not be resolved"""
