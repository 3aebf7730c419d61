"""Dotted permission name, e.g. Document.Read."""

from dataclasses import dataclass

from stratum.domain.exceptions import InvalidArgument


@dataclass(frozen=True)
class PermissionName:
    """Resource and action pair parsed from "Resource.Action"."""

    resource: str
    action: str

    def __post_init__(self) -> None:
        if not self.resource or not self.action:
            raise InvalidArgument("Permission name needs both resource and action")

    @classmethod
    def parse(cls, value: str) -> "PermissionName":
        parts = value.split(".")
        if len(parts) != 2:
            raise InvalidArgument(f"Permission name must look like Resource.Action: {value!r}")
        return cls(resource=parts[0].strip(), action=parts[1].strip())

    def __str__(self) -> str:
        return f"{self.resource}.{self.action}"
