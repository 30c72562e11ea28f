"""Custom exceptions for the Aurora provisioning scripts."""


class ProvisioningError(Exception):
    """Base class for errors raised deliberately by the provisioner"""


class InsufficientAvailabilityZonesError(ProvisioningError):
    """Raised when fewer than two distinct availability zones are available"""

    def __init__(self, vpc_id, zones):
        self.vpc_id = vpc_id
        self.zones = sorted(zones)
        found = ", ".join(self.zones) if self.zones else "none"
        super().__init__(
            f"At least 2 availability zones are required in {vpc_id}, found {len(self.zones)} "
            f"({found})"
        )


class MissingIdentifierError(ProvisioningError):
    """Raised when an AWS response lacks an identifier we depend on"""

    def __init__(self, field_name, operation):
        self.field_name = field_name
        self.operation = operation
        super().__init__(f"{operation} response did not include {field_name}")


class ResourceStatusError(ProvisioningError):
    """Raised when a waited resource reaches a terminal non-available status"""

    def __init__(self, resource_label, status):
        self.resource_label = resource_label
        self.status = status
        super().__init__(f"{resource_label} entered status '{status}'")


class WaitTimeoutError(ProvisioningError):
    """Raised when a resource does not become available within the polling ceiling"""

    def __init__(self, resource_label, attempts, last_status):
        self.resource_label = resource_label
        self.attempts = attempts
        self.last_status = last_status
        super().__init__(
            f"Timed out waiting for {resource_label} to become available after "
            f"{attempts} attempts (last status: {last_status})"
        )
