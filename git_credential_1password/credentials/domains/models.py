"""Domain models for credential helper requests and 1Password items."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional


@dataclass(frozen=True)
class CredentialRequest:
    """Key/value fields sent by git on stdin for a single action."""
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze a private copy so the request cannot change after parsing
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, key: str, default: str = "") -> str:
        return self.fields.get(key, default)

    @property
    def host(self) -> str:
        return self.get("host")

    @property
    def protocol(self) -> str:
        return self.get("protocol")

    @property
    def username(self) -> str:
        return self.get("username")

    @property
    def password(self) -> str:
        return self.get("password")

    def url(self) -> str:
        """Build the item URL as ``protocol://host``, defaulting to https."""
        return f"{self.protocol or 'https'}://{self.host}"


@dataclass
class ItemField:
    """A single labelled field of a 1Password item."""
    label: str = ""
    value: str = ""


@dataclass
class SecretItem:
    """Fields returned by ``op item get`` for one item."""
    fields: List[ItemField] = field(default_factory=list)

    @classmethod
    def from_json(cls, data) -> "SecretItem":
        """
        Build an item from decoded ``op`` JSON output.

        ``op item get --fields a,b --format json`` returns a list of field
        objects; a single requested field comes back as a bare object.

        Raises:
            TypeError: If the structure is not a field object or list of them
        """
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise TypeError(f"expected a list of fields, got {type(data).__name__}")

        fields = []
        for entry in data:
            if not isinstance(entry, dict):
                raise TypeError(f"expected a field object, got {type(entry).__name__}")
            fields.append(ItemField(
                label=str(entry.get("label") or ""),
                value=str(entry.get("value") or ""),
            ))
        return cls(fields=fields)

    def get_field(self, label: str) -> str:
        """Return the first value stored under ``label``, or an empty string."""
        for item_field in self.fields:
            if item_field.label == label:
                return item_field.value
        return ""


@dataclass(frozen=True)
class HelperConfig:
    """Process-wide settings resolved once at startup."""
    account: Optional[str] = None
    vault: Optional[str] = None
    prefix: str = ""
    op_path: str = "op"

    def selector_args(self) -> List[str]:
        """Account and vault flags applied to every ``op`` invocation."""
        args = []
        if self.account:
            args.extend(["--account", self.account])
        if self.vault:
            args.extend(["--vault", self.vault])
        return args

