"""Permission name - "module.action" identifier."""

from dataclasses import dataclass

from permatrix.domain.exceptions import ValidationFailure


@dataclass(frozen=True, order=True)
class PermissionName:
    """Globally unique permission identifier made of module key and action key."""

    module: str
    action: str

    def __post_init__(self) -> None:
        if not self.module or not self.action:
            raise ValidationFailure("Permission name needs module and action")
        if "." in self.module or "." in self.action:
            raise ValidationFailure(f"Malformed permission name: {self.module}.{self.action}")

    @classmethod
    def parse(cls, value: str) -> "PermissionName":
        module, sep, action = value.strip().partition(".")
        if not sep:
            raise ValidationFailure(f"Malformed permission name: {value}", invalid=[value])
        return cls(module=module, action=action)

    def __str__(self) -> str:
        return f"{self.module}.{self.action}"
